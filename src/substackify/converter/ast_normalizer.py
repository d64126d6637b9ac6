"""Parse Markdown and normalize to canonical AST tokens.

This module wraps mistune v3's AST renderer and normalises the raw token
stream into the small set of canonical types the builders dispatch on.
Any parser producing the same token shapes can stand in for
:class:`ASTNormalizer` (see :class:`SyntaxParser`).

Canonical block tokens:
    heading (attrs.level), paragraph, blockquote,
    code_block (raw, attrs.language), list (attrs.ordered), list_item,
    thematic_break

Canonical inline tokens:
    text (raw), emphasis (attrs.level 1 or 2), codespan (raw),
    strikethrough, link (attrs.url), autolink (attrs.url), softbreak,
    linebreak

Link destinations are kept as written. mistune percent-encodes every URL
it parses, so the parsers below re-read the destination from the source.
Non-empty code text always ends with a newline; mistune keeps it for
fenced blocks and drops it for indented ones.

Every other token keeps its mistune type and its children, so the
builders can fall back to plain text instead of losing content.
"""

from __future__ import annotations

import html
from re import Match
from typing import Any, Protocol

import mistune
from mistune.block_parser import BlockParser
from mistune.core import BlockState, InlineState
from mistune.helpers import parse_link_href, parse_link_text, unescape_char
from mistune.inline_parser import InlineParser
from mistune.plugins import import_plugin
from mistune.util import escape_url

# ---------------------------------------------------------------------------
# Mistune-to-canonical type mapping
# ---------------------------------------------------------------------------

_BLOCK_TYPE_MAP: dict[str, str] = {
    "heading": "heading",
    "paragraph": "paragraph",
    "block_quote": "blockquote",
    "list": "list",
    "list_item": "list_item",
    "block_code": "code_block",
    "thematic_break": "thematic_break",
}

_INLINE_TYPE_MAP: dict[str, str] = {
    "text": "text",
    "strong": "emphasis",
    "emphasis": "emphasis",
    "codespan": "codespan",
    "strikethrough": "strikethrough",
    "link": "link",
    "softbreak": "softbreak",
    "linebreak": "linebreak",
}

# Types that should be silently skipped during normalization
_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})


class SyntaxParser(Protocol):
    """Capability interface for the Markdown parsing collaborator."""

    def parse(self, markdown: str) -> list[dict]:
        """Return canonical block tokens for *markdown*."""
        ...


# ---------------------------------------------------------------------------
# mistune parsers that keep link destinations verbatim
# ---------------------------------------------------------------------------

class _VerbatimInlineParser(InlineParser):
    """InlineParser whose link tokens carry the destination as written."""

    def parse_link(self, m: Match[str], state: InlineState) -> int | None:
        count = len(state.tokens)
        end = super().parse_link(m, state)
        token = _appended_link(state, count)
        if token is not None:
            href = _inline_destination(state.src, m.end())
            token["attrs"]["url"] = _verbatim(href, token["attrs"]["url"])
        return end

    def parse_auto_link(self, m: Match[str], state: InlineState) -> int:
        count = len(state.tokens)
        end = super().parse_auto_link(m, state)
        token = _appended_link(state, count)
        if token is not None:
            token["attrs"]["url"] = m.group(0)[1:-1]
        return end

    def parse_auto_email(self, m: Match[str], state: InlineState) -> int:
        count = len(state.tokens)
        end = super().parse_auto_email(m, state)
        token = _appended_link(state, count)
        if token is not None:
            token["attrs"]["url"] = "mailto:" + m.group(0)[1:-1]
        return end


class _VerbatimBlockParser(BlockParser):
    """BlockParser whose link reference definitions keep the destination."""

    def parse_ref_link(self, m: Match[str], state: BlockState) -> int | None:
        known = set(state.env.get("ref_links") or ())
        end = super().parse_ref_link(m, state)
        for key, data in (state.env.get("ref_links") or {}).items():
            if key not in known:
                href, _ = parse_link_href(state.src, m.end(), block=True)
                data["url"] = _verbatim(href, data["url"])
        return end


def _appended_link(state: InlineState, count: int) -> dict[str, Any] | None:
    """Return the link token a rule just appended, if it appended one."""
    if len(state.tokens) <= count:
        return None
    token = state.tokens[-1]
    if token.get("type") != "link" or not isinstance(token.get("attrs"), dict):
        return None
    return token


def _inline_destination(src: str, label_start: int) -> str | None:
    """Raw destination of ``[text](dest)`` whose text starts at *label_start*."""
    text, pos = parse_link_text(src, label_start)
    if text is None or pos is None or pos >= len(src) or src[pos] != "(":
        return None
    href, _ = parse_link_href(src, pos + 1)
    return href


def _verbatim(href: str | None, escaped: str) -> str:
    """Undo mistune's URL escaping when *href* is the destination it escaped.

    A destination that cannot be traced back to the source keeps
    mistune's value.
    """
    if href is None:
        return escaped
    href = unescape_char(href)
    if escape_url(href) != escaped:
        return escaped
    return html.unescape(href)


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST tokens.

    Only the strikethrough extension is enabled. Bare URLs, tables,
    footnotes and math stay plain text; ``<...>`` autolinks are core
    syntax.
    """

    def __init__(self) -> None:
        self._parser = mistune.Markdown(
            renderer=None,
            block=_VerbatimBlockParser(),
            inline=_VerbatimInlineParser(),
            plugins=[import_plugin("strikethrough")],
        )

    def parse(self, markdown: str) -> list[dict]:
        """Parse markdown and return normalized AST token list."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        result: list[dict] = []
        for token in tokens:
            normalized = self._normalize_token(token)
            if normalized is not None:
                result.append(normalized)
        return result

    def _normalize_token(self, token: dict) -> dict | None:
        """Normalize a single token, returning None if it should be skipped."""
        raw_type = token.get("type", "")

        if raw_type in _SKIP_TYPES:
            return None

        if raw_type in _BLOCK_TYPE_MAP:
            return self._normalize_block(token, _BLOCK_TYPE_MAP[raw_type])

        if raw_type in _INLINE_TYPE_MAP:
            return self._normalize_inline(token, _INLINE_TYPE_MAP[raw_type])

        return self._passthrough(token)

    def _normalize_block(self, token: dict, canonical_type: str) -> dict:
        """Normalize a block-level token."""
        result: dict = {"type": canonical_type}
        attrs = token.get("attrs") or {}

        if canonical_type == "heading":
            result["attrs"] = {"level": int(attrs.get("level", 1))}

        elif canonical_type == "list":
            result["attrs"] = {"ordered": bool(attrs.get("ordered", False))}

        elif canonical_type == "code_block":
            # Fenced and indented code both land here; the info string's
            # first word is the language.
            raw = token.get("raw", "")
            if raw and not raw.endswith("\n"):
                raw += "\n"
            result["raw"] = raw
            info = (attrs.get("info") or "").strip()
            result["attrs"] = {"language": info.split()[0] if info else ""}
            return result

        elif canonical_type == "thematic_break":
            return result

        children = token.get("children")
        if children:
            result["children"] = self._normalize_tokens(children)
        return result

    def _normalize_inline(self, token: dict, canonical_type: str) -> dict:
        """Normalize an inline-level token."""
        result: dict = {"type": canonical_type}

        if canonical_type in ("text", "codespan"):
            result["raw"] = token.get("raw", "")
            return result

        if canonical_type in ("softbreak", "linebreak"):
            return result

        if canonical_type == "emphasis":
            result["attrs"] = {"level": 2 if token["type"] == "strong" else 1}

        elif canonical_type == "link":
            url = (token.get("attrs") or {}).get("url", "")
            result["attrs"] = {"url": url}
            if _is_autolink(token, url):
                result["type"] = "autolink"
                return result

        children = token.get("children")
        if children:
            result["children"] = self._normalize_tokens(children)
        return result

    def _passthrough(self, token: dict) -> dict:
        """Keep an unrecognised token so its children are not lost."""
        result: dict = {"type": token.get("type", "")}
        children = token.get("children")
        if children:
            result["children"] = self._normalize_tokens(children)
        elif "raw" in token:
            result["raw"] = token["raw"]
        return result


def _is_autolink(token: dict, url: str) -> bool:
    """True when a link's only content is its own destination.

    mistune reports ``<https://x>`` and ``<me@x.org>`` as ordinary links
    whose single text child repeats the destination.
    """
    children = token.get("children") or []
    if len(children) != 1 or children[0].get("type") != "text":
        return False
    label = children[0].get("raw", "")
    return bool(url) and url in (label, f"mailto:{label}")
