"""Configuration for substackify.

:class:`SubstackifyConfig` is a plain dataclass capturing the defaults the
converter and the draft payload builder fall back to when neither the
frontmatter nor the caller supplies a value.

:data:`AUDIENCES` lists the audience values the publishing API accepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

AUDIENCES: tuple[str, ...] = ("everyone", "only_paid", "only_free", "founding")
"""Audience values accepted by the publishing API."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class SubstackifyConfig:
    """Complete configuration for a substackify converter.

    Every parameter has a default, so ``SubstackifyConfig()`` is usable
    as-is.

    Parameters
    ----------
    audience:
        Default post audience.  Overridden by the frontmatter
        ``audience`` key and by explicit payload overrides.

        * ``"everyone"`` — free and paid subscribers.
        * ``"only_paid"`` — paid subscribers only.
        * ``"only_free"`` — free subscribers only.
        * ``"founding"`` — founding members only.
    section:
        Default section (category) identifier.  Empty means none.
    draft_type:
        Value of the ``type`` field of a draft request.
    strip_leading_newlines:
        Drop blank lines between the frontmatter block and the body
        before parsing.
    debug_dump_ast:
        Write the normalised token tree to *stderr* on each conversion.
    debug_dump_payload:
        Write the serialised document to *stderr* on each conversion.
    """

    # ── Post defaults ───────────────────────────────────────────────────
    audience: Literal["everyone", "only_paid", "only_free", "founding"] = "everyone"

    section: str = ""

    draft_type: str = "newsletter"

    # ── Parsing ─────────────────────────────────────────────────────────
    strip_leading_newlines: bool = True

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.audience not in AUDIENCES:
            raise ValueError(
                f"audience must be one of {', '.join(AUDIENCES)}, got {self.audience!r}"
            )
        if not self.draft_type:
            raise ValueError("draft_type must be a non-empty string")
