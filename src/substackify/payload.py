"""Build the draft request body submitted to the publishing API.

Values are resolved in three layers, later layers winning:

1. :class:`SubstackifyConfig` defaults (``audience``, ``section``)
2. frontmatter fields (``subtitle``, ``audience``, ``section``); the
   title is already resolved by the converter
3. explicit keyword overrides passed by the caller

An override of ``None`` means "not given"; an empty string clears the
value.  The document is serialised to a JSON string because the API
expects ``draft_body`` as text, not as a nested object.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from substackify.config import AUDIENCES, SubstackifyConfig
from substackify.errors import SubstackifyValidationError
from substackify.models import ConversionResult
from substackify.observability import get_logger, log_event

log = get_logger("substackify.payload")


def build_draft_request(
    result: ConversionResult,
    config: SubstackifyConfig,
    *,
    title: str | None = None,
    subtitle: str | None = None,
    audience: str | None = None,
    section: str | None = None,
    byline_ids: Iterable[int] = (),
) -> dict[str, Any]:
    """Merge defaults, frontmatter and overrides into a draft request dict.

    Parameters
    ----------
    result:
        Output of :meth:`MarkdownToDocConverter.convert`.
    config:
        Supplies the default audience, section and draft type.
    title, subtitle, audience, section:
        Caller overrides; ``None`` leaves the resolved value alone.
    byline_ids:
        Author user IDs for ``draft_bylines``.

    Returns
    -------
    dict
        Keys ``draft_title``, ``draft_subtitle``, ``audience`` and
        ``draft_section_id`` are omitted when empty; ``draft_body``,
        ``draft_bylines``, ``section_chosen`` and ``type`` are always
        present.

    Raises
    ------
    SubstackifyValidationError
        If the resolved audience is not one the API accepts.
    """
    fm = result.frontmatter

    resolved_title = result.title
    resolved_subtitle = ""
    resolved_audience = config.audience
    resolved_section = config.section

    if fm is not None:
        if fm.subtitle:
            resolved_subtitle = fm.subtitle
        if fm.audience:
            resolved_audience = fm.audience
        if fm.section:
            resolved_section = fm.section

    if title is not None:
        resolved_title = title
    if subtitle is not None:
        resolved_subtitle = subtitle
    if audience is not None:
        resolved_audience = audience
    if section is not None:
        resolved_section = section

    if resolved_audience and resolved_audience not in AUDIENCES:
        log_event(
            log, logging.WARNING, "rejected draft audience",
            field="audience", value=resolved_audience,
        )
        raise SubstackifyValidationError(
            f"Unknown audience '{resolved_audience}'.",
            context={
                "field": "audience",
                "value": resolved_audience,
                "allowed": list(AUDIENCES),
            },
        )

    request: dict[str, Any] = {}
    if resolved_title:
        request["draft_title"] = resolved_title
    if resolved_subtitle:
        request["draft_subtitle"] = resolved_subtitle
    request["draft_body"] = result.document.to_json()
    request["draft_bylines"] = [{"id": uid} for uid in byline_ids]
    if resolved_audience:
        request["audience"] = resolved_audience
    if resolved_section:
        request["draft_section_id"] = resolved_section
    request["section_chosen"] = resolved_section != ""
    request["type"] = config.draft_type
    return request
