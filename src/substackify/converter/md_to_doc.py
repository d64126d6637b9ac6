"""Full Markdown-to-document conversion pipeline.

:class:`MarkdownToDocConverter` orchestrates the pipeline:

1. **Extract** — :func:`parse_frontmatter` splits off the metadata block.
2. **Parse** — a fresh :class:`ASTNormalizer` turns the body into
   canonical tokens.
3. **Build** — :func:`build_blocks` converts the tokens into block nodes,
   taking the first top-level H1 as the title when frontmatter has none.
4. **Assemble** — the blocks are wrapped in a root ``doc`` node.

The result is a :class:`ConversionResult`.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable

from substackify.config import SubstackifyConfig
from substackify.converter.ast_normalizer import ASTNormalizer, SyntaxParser
from substackify.converter.block_builder import build_blocks
from substackify.converter.frontmatter import parse_frontmatter
from substackify.models import ConversionResult, Document


class MarkdownToDocConverter:
    """Convert Markdown source to a publishable document tree.

    Parameters
    ----------
    config:
        Package configuration.  Defaults to ``SubstackifyConfig()``.
    parser_factory:
        Callable returning a new :class:`SyntaxParser`.  Called once per
        conversion so that no parser state is shared between calls.

    Examples
    --------
    >>> converter = MarkdownToDocConverter()
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> result.title
    'Hello'
    >>> result.document.content[0].type
    'paragraph'
    """

    def __init__(
        self,
        config: SubstackifyConfig | None = None,
        parser_factory: Callable[[], SyntaxParser] = ASTNormalizer,
    ) -> None:
        self._config = config or SubstackifyConfig()
        self._parser_factory = parser_factory

    def convert(self, source: bytes | str) -> ConversionResult:
        """Full pipeline: frontmatter -> parse -> build blocks -> assemble.

        Parameters
        ----------
        source:
            Markdown as UTF-8 ``bytes`` or ``str``, optionally starting
            with a frontmatter block.

        Returns
        -------
        ConversionResult
            Title (frontmatter title, else first H1, else ``""``),
            frontmatter (or ``None``), the ``doc`` root and any non-fatal
            warnings.

        Raises
        ------
        UnicodeDecodeError
            If *source* is ``bytes`` that are not valid UTF-8.
        """
        frontmatter, body = parse_frontmatter(source)
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        if self._config.strip_leading_newlines:
            body = body.lstrip("\n")

        # Stage 2: Parse and normalize
        tokens = self._parser_factory().parse(body)

        if self._config.debug_dump_ast:
            print(
                "[substackify] Normalized AST:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        # Stage 3: Build blocks
        known_title = frontmatter.title if frontmatter is not None else ""
        title, blocks, warnings = build_blocks(tokens, title=known_title)

        # Stage 4: Assemble
        document = Document(content=blocks)

        if self._config.debug_dump_payload:
            print(
                "[substackify] Document payload:",
                json.dumps(document.to_dict(), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return ConversionResult(
            title=title,
            frontmatter=frontmatter,
            document=document,
            warnings=warnings,
        )


def convert_with_frontmatter(source: bytes | str) -> ConversionResult:
    """Convert *source* with the default configuration."""
    return MarkdownToDocConverter().convert(source)


def convert(source: bytes | str) -> tuple[str, Document]:
    """Convert *source* and return only ``(title, document)``."""
    result = MarkdownToDocConverter().convert(source)
    return result.title, result.document
