"""Markdown to document conversion pipeline.

Public API:

- :class:`MarkdownToDocConverter` — Markdown → ``doc`` tree.
- :func:`convert` / :func:`convert_with_frontmatter` — one-shot helpers.
- :func:`parse_frontmatter` — split the leading metadata block.
- :class:`ASTNormalizer` — parse and normalize Markdown to canonical AST.
- :func:`build_blocks` — convert normalized AST to block nodes.
- :func:`build_inline` — convert inline AST tokens to marked text leaves.
"""

from substackify.converter.ast_normalizer import ASTNormalizer, SyntaxParser
from substackify.converter.block_builder import build_blocks
from substackify.converter.frontmatter import parse_frontmatter
from substackify.converter.inline_builder import build_inline, extract_text
from substackify.converter.md_to_doc import (
    MarkdownToDocConverter,
    convert,
    convert_with_frontmatter,
)

__all__ = [
    "ASTNormalizer",
    "MarkdownToDocConverter",
    "SyntaxParser",
    "build_blocks",
    "build_inline",
    "convert",
    "convert_with_frontmatter",
    "extract_text",
    "parse_frontmatter",
]
