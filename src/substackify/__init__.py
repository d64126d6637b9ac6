"""substackify — Markdown to publishing-API document conversion.

Public re-exports
-----------------

* **Conversion:** :class:`MarkdownToDocConverter`, :func:`convert`,
  :func:`convert_with_frontmatter`, :func:`parse_frontmatter`
* **Payloads:** :func:`build_draft_request`
* **Configuration:** :class:`SubstackifyConfig`
* **Errors:** :class:`SubstackifyError` and subclasses, :class:`ErrorCode`
* **Models:** document tree and result dataclasses

Usage::

    from substackify import MarkdownToDocConverter, SubstackifyConfig, build_draft_request

    result = MarkdownToDocConverter().convert(open("post.md", "rb").read())
    payload = build_draft_request(result, SubstackifyConfig(), byline_ids=[42])
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from substackify.config import AUDIENCES, SubstackifyConfig

# ── Conversion ──────────────────────────────────────────────────────────
from substackify.converter import (
    MarkdownToDocConverter,
    convert,
    convert_with_frontmatter,
    parse_frontmatter,
)

# ── Errors ──────────────────────────────────────────────────────────────
from substackify.errors import (
    ErrorCode,
    SubstackifyError,
    SubstackifyValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from substackify.models import (
    ContentNode,
    ConversionResult,
    ConversionWarning,
    Document,
    Frontmatter,
    Mark,
)

# ── Payloads ────────────────────────────────────────────────────────────
from substackify.payload import build_draft_request

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Conversion
    "MarkdownToDocConverter",
    "convert",
    "convert_with_frontmatter",
    "parse_frontmatter",
    # Payloads
    "build_draft_request",
    # Configuration
    "SubstackifyConfig",
    "AUDIENCES",
    # Errors
    "SubstackifyError",
    "SubstackifyValidationError",
    "ErrorCode",
    # Models
    "ContentNode",
    "ConversionResult",
    "ConversionWarning",
    "Document",
    "Frontmatter",
    "Mark",
]
