"""Public data models for substackify.

This module contains the frontmatter record, the document tree types
(:class:`Mark`, :class:`ContentNode`, :class:`Document`) and the
conversion result.  The tree types serialise to the ProseMirror-style
JSON shape expected by the publishing API::

    {"type": "doc", "content": [
        {"type": "paragraph", "content": [
            {"type": "text", "text": "hi", "marks": [{"type": "strong"}]}
        ]}
    ]}

Optional keys (``attrs``, ``content``, ``marks``, ``text``) are omitted
when empty.  Key names are part of the wire contract and must not change.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Frontmatter:
    """Metadata parsed from a leading ``---`` block.

    Every field defaults to its empty value, so a missing key and an
    empty key are indistinguishable.

    Attributes
    ----------
    title, subtitle, date, audience, slug, canonical_url,
    meta_description, social_image, scheduled_at, section, podcast_url:
        Scalar string fields, copied verbatim after quote stripping.
    tags:
        Inline list (``[a, "b", c]``) split into trimmed elements.
    draft:
        ``True`` only when the value is exactly ``true``.
    """

    title: str = ""
    subtitle: str = ""
    date: str = ""
    tags: tuple[str, ...] = ()
    audience: str = ""
    draft: bool = False
    slug: str = ""
    canonical_url: str = ""
    meta_description: str = ""
    social_image: str = ""
    scheduled_at: str = ""
    section: str = ""
    podcast_url: str = ""


# ---------------------------------------------------------------------------
# Document tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Mark:
    """An inline formatting attribute attached to a text leaf.

    ``type`` is one of ``strong``, ``em``, ``strikethrough``, ``code`` or
    ``link``.  Links carry ``{"href": ...}`` in *attrs*.
    """

    type: str
    attrs: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        return out


@dataclass
class ContentNode:
    """A block or text leaf in the converted document.

    Attributes
    ----------
    type:
        Node kind: ``heading``, ``paragraph``, ``blockquote``,
        ``code_block``, ``bullet_list``, ``ordered_list``, ``list_item``,
        ``horizontal_rule`` or ``text``.
    attrs:
        Kind-specific attributes (``level`` for headings, ``language``
        for code blocks).
    content:
        Child nodes in source order.
    marks:
        Resolved marks, outermost first.  Text leaves only.
    text:
        Literal text.  Text leaves only.
    """

    type: str
    attrs: dict[str, Any] | None = None
    content: list[ContentNode] = field(default_factory=list)
    marks: tuple[Mark, ...] = ()
    text: str = ""

    @property
    def children(self) -> list[ContentNode]:
        """Alias for :attr:`content`."""
        return self.content

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        if self.content:
            out["content"] = [child.to_dict() for child in self.content]
        if self.marks:
            out["marks"] = [mark.to_dict() for mark in self.marks]
        if self.text:
            out["text"] = self.text
        return out


@dataclass
class Document:
    """Root ``doc`` node holding the top-level blocks."""

    content: list[ContentNode] = field(default_factory=list)
    type: str = "doc"

    @property
    def children(self) -> list[ContentNode]:
        """Alias for :attr:`content`."""
        return self.content

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.content:
            out["content"] = [node.to_dict() for node in self.content]
        return out

    def to_json(self) -> str:
        """Serialise to the compact JSON string sent as a draft body."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Conversion results
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Warnings never alter the produced tree; they only let callers see
    what was dropped.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNSUPPORTED_BLOCK"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of the Markdown-to-document conversion.

    Attributes
    ----------
    title:
        Frontmatter title if set, otherwise the first top-level H1,
        otherwise ``""``.
    frontmatter:
        Parsed frontmatter, or ``None`` when the source had none.
    document:
        The root ``doc`` node.
    warnings:
        Non-fatal issues discovered during conversion.
    """

    title: str = ""
    frontmatter: Frontmatter | None = None
    document: Document = field(default_factory=Document)
    warnings: list[ConversionWarning] = field(default_factory=list)
