"""Convert normalized AST tokens to document block nodes.

Block mapping:

- heading -> heading (attrs.level); the first top-level level-1 heading
  becomes the document title instead, unless a title is already known
- paragraph -> paragraph
- blockquote -> blockquote with recursively converted children
- code_block -> code_block (attrs.language when known) holding one text leaf
- list -> bullet_list / ordered_list of list_item nodes
- thematic_break -> horizontal_rule
- anything else -> its inline content wrapped in a paragraph, or nothing
"""

from __future__ import annotations

import logging
from collections.abc import Callable as _Callable

from substackify.converter.inline_builder import build_inline, extract_text
from substackify.models import ContentNode, ConversionWarning
from substackify.observability import get_logger, log_event

log = get_logger("substackify.converter")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(
    tokens: list[dict],
    *,
    title: str = "",
) -> tuple[str, list[ContentNode], list[ConversionWarning]]:
    """Convert top-level normalized AST tokens to block nodes.

    Parameters
    ----------
    tokens:
        List of canonical block tokens from :class:`ASTNormalizer`.
    title:
        Title already known (e.g. from frontmatter).  When non-empty no
        heading is consumed as the title.

    Returns
    -------
    tuple[str, list[ContentNode], list[ConversionWarning]]
        (title, blocks, warnings)
    """
    ctx = _BuildContext()
    blocks: list[ContentNode] = []
    title_taken = bool(title)

    for token in tokens:
        if not title_taken and _is_title_heading(token):
            title = extract_text(token.get("children", []))
            title_taken = True
            continue
        blocks.extend(_process_token(token, ctx))

    return title, blocks, ctx.warnings


class _BuildContext:
    """Mutable accumulator for the block building pass."""

    __slots__ = ("warnings",)

    def __init__(self) -> None:
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


def _is_title_heading(token: dict) -> bool:
    return (
        token.get("type") == "heading"
        and token.get("attrs", {}).get("level") == 1
    )


# ---------------------------------------------------------------------------
# Token dispatch
# ---------------------------------------------------------------------------

def _process_tokens(tokens: list[dict], ctx: _BuildContext) -> list[ContentNode]:
    """Process a list of tokens and return the blocks produced."""
    produced: list[ContentNode] = []
    for token in tokens:
        produced.extend(_process_token(token, ctx))
    return produced


def _process_token(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    """Process a single token and return the block(s) produced."""
    handler = _BLOCK_HANDLERS.get(token.get("type", ""))
    if handler is not None:
        return handler(token, ctx)
    return _build_fallback(token, ctx)


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _build_heading(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    level = token.get("attrs", {}).get("level", 1)
    return [ContentNode(
        type="heading",
        attrs={"level": level},
        content=build_inline(token.get("children", [])),
    )]


def _build_paragraph(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    return [ContentNode(
        type="paragraph",
        content=build_inline(token.get("children", [])),
    )]


def _build_blockquote(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    """Build a blockquote; any block type may nest inside."""
    return [ContentNode(
        type="blockquote",
        content=_process_tokens(token.get("children", []), ctx),
    )]


def _build_code_block(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    """Build a code block holding the literal code as a single text leaf."""
    language = token.get("attrs", {}).get("language", "")
    return [ContentNode(
        type="code_block",
        attrs={"language": language} if language else None,
        content=[ContentNode(type="text", text=token.get("raw", ""))],
    )]


def _build_list(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    """Build a bullet or ordered list.

    Items hold block content, so nested lists, quotes and code blocks
    inside an item are converted recursively.
    """
    ordered = token.get("attrs", {}).get("ordered", False)
    items = [
        ContentNode(
            type="list_item",
            content=_process_tokens(item.get("children", []), ctx),
        )
        for item in token.get("children", [])
    ]
    return [ContentNode(
        type="ordered_list" if ordered else "bullet_list",
        content=items,
    )]


def _build_horizontal_rule(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    return [ContentNode(type="horizontal_rule")]


def _build_fallback(token: dict, ctx: _BuildContext) -> list[ContentNode]:
    """Wrap the inline content of an unrecognised block in a paragraph.

    Covers the text wrapper mistune puts inside tight list items as well
    as block types this converter does not support.
    """
    content = build_inline(token.get("children", []))
    if content:
        return [ContentNode(type="paragraph", content=content)]

    token_type = token.get("type", "")
    if token.get("raw", "").strip():
        ctx.add_warning(
            "UNSUPPORTED_BLOCK",
            f"Block of type '{token_type}' was dropped.",
            token_type=token_type,
        )
        log_event(
            log, logging.DEBUG, "unsupported block dropped", token_type=token_type,
        )
    return []


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = _Callable[[dict, _BuildContext], list[ContentNode]]

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    "heading": _build_heading,
    "paragraph": _build_paragraph,
    "blockquote": _build_blockquote,
    "code_block": _build_code_block,
    "list": _build_list,
    "thematic_break": _build_horizontal_rule,
}
