"""Dedicated unit tests for ASTNormalizer.

Tests the Markdown → canonical AST normalization layer, ensuring that
mistune's raw token stream is mapped to the canonical types used by the
block and inline builders.
"""

import pytest

from substackify.converter.ast_normalizer import ASTNormalizer


@pytest.fixture
def normalizer():
    return ASTNormalizer()


# =========================================================================
# Block-level normalization
# =========================================================================

class TestBlockNormalization:
    """Verify each block type is normalized correctly."""

    def test_heading_levels(self, normalizer):
        for level in range(1, 7):
            tokens = normalizer.parse(f"{'#' * level} Heading {level}")
            assert tokens[0]["type"] == "heading"
            assert tokens[0]["attrs"]["level"] == level

    def test_paragraph(self, normalizer):
        tokens = normalizer.parse("Hello world")
        assert tokens == [
            {"type": "paragraph", "children": [{"type": "text", "raw": "Hello world"}]},
        ]

    def test_blank_lines_skipped(self, normalizer):
        tokens = normalizer.parse("one\n\n\n\ntwo")
        assert [t["type"] for t in tokens] == ["paragraph", "paragraph"]

    def test_block_quote(self, normalizer):
        tokens = normalizer.parse("> Quote text")
        assert tokens[0]["type"] == "blockquote"
        assert tokens[0]["children"][0]["type"] == "paragraph"

    def test_unordered_list(self, normalizer):
        tokens = normalizer.parse("- item 1\n- item 2")
        assert tokens[0]["type"] == "list"
        assert tokens[0]["attrs"] == {"ordered": False}
        assert [i["type"] for i in tokens[0]["children"]] == ["list_item", "list_item"]

    def test_ordered_list(self, normalizer):
        tokens = normalizer.parse("1. first\n2. second")
        assert tokens[0]["attrs"] == {"ordered": True}

    def test_fenced_code(self, normalizer):
        tokens = normalizer.parse("```python\nprint('hello')\n```")
        assert tokens[0]["type"] == "code_block"
        assert tokens[0]["attrs"]["language"] == "python"
        assert tokens[0]["raw"] == "print('hello')\n"

    def test_code_info_first_word(self, normalizer):
        tokens = normalizer.parse("```js title=app.js\nx\n```")
        assert tokens[0]["attrs"]["language"] == "js"

    def test_code_without_language(self, normalizer):
        tokens = normalizer.parse("```\nplain\n```")
        assert tokens[0]["attrs"]["language"] == ""

    def test_indented_code_ends_with_newline(self, normalizer):
        tokens = normalizer.parse("    x = 1")
        assert tokens == [
            {"type": "code_block", "raw": "x = 1\n", "attrs": {"language": ""}},
        ]

    def test_thematic_break(self, normalizer):
        tokens = normalizer.parse("---")
        assert tokens == [{"type": "thematic_break"}]

    def test_empty_input(self, normalizer):
        assert normalizer.parse("") == []


# =========================================================================
# Inline normalization
# =========================================================================

def _inline(normalizer, markdown):
    return normalizer.parse(markdown)[0]["children"]


class TestInlineNormalization:
    """Verify inline tokens carry the capabilities the builders need."""

    def test_emphasis_levels(self, normalizer):
        em = _inline(normalizer, "*a*")[0]
        strong = _inline(normalizer, "**a**")[0]
        assert em["type"] == "emphasis" and em["attrs"]["level"] == 1
        assert strong["type"] == "emphasis" and strong["attrs"]["level"] == 2

    def test_codespan(self, normalizer):
        assert _inline(normalizer, "`x = 1`") == [{"type": "codespan", "raw": "x = 1"}]

    def test_strikethrough(self, normalizer):
        token = _inline(normalizer, "~~gone~~")[0]
        assert token["type"] == "strikethrough"
        assert token["children"] == [{"type": "text", "raw": "gone"}]

    def test_link_destination(self, normalizer):
        token = _inline(normalizer, "[click](https://example.com)")[0]
        assert token["type"] == "link"
        assert token["attrs"]["url"] == "https://example.com"
        assert token["children"] == [{"type": "text", "raw": "click"}]

    def test_angle_autolink(self, normalizer):
        token = _inline(normalizer, "<https://example.com>")[0]
        assert token == {"type": "autolink", "attrs": {"url": "https://example.com"}}

    def test_bare_url_is_text(self, normalizer):
        children = _inline(normalizer, "see https://example.com/docs")
        assert {c["type"] for c in children} == {"text"}
        assert "".join(c["raw"] for c in children) == "see https://example.com/docs"

    def test_link_url_unicode_kept(self, normalizer):
        token = _inline(normalizer, "[a](<https://example.com/naïve path>)")[0]
        assert token["attrs"]["url"] == "https://example.com/naïve path"

    def test_link_url_backslash_escape_resolved(self, normalizer):
        token = _inline(normalizer, r"[a](https://example.com/a\_b)")[0]
        assert token["attrs"]["url"] == "https://example.com/a_b"

    def test_autolink_url_unicode_kept(self, normalizer):
        token = _inline(normalizer, "<https://example.com/é>")[0]
        assert token == {"type": "autolink", "attrs": {"url": "https://example.com/é"}}

    def test_softbreak(self, normalizer):
        types = [c["type"] for c in _inline(normalizer, "line one\nline two")]
        assert types == ["text", "softbreak", "text"]

    def test_unknown_inline_keeps_children(self, normalizer):
        token = _inline(normalizer, "![alt text](pic.png)")[0]
        assert token["type"] == "image"
        assert token["children"][0]["raw"] == "alt text"


class TestFreshParsers:
    """Separate instances do not share parse state."""

    def test_independent_instances(self):
        a, b = ASTNormalizer(), ASTNormalizer()
        assert a.parse("# One") == b.parse("# One")
        assert a.parse("text") != a.parse("# One")
