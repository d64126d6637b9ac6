"""Unit tests for inline_builder.py.

Exercises :func:`build_inline` directly on canonical tokens, covering
mark resolution, mark-stack isolation, line breaks and the pass-through
fallback for unknown inline tokens.
"""

from substackify.converter.inline_builder import build_inline, extract_text
from substackify.models import Mark


def _text(raw):
    return {"type": "text", "raw": raw}


def _em(level, *children):
    return {"type": "emphasis", "attrs": {"level": level}, "children": list(children)}


def _link(url, *children):
    return {"type": "link", "attrs": {"url": url}, "children": list(children)}


def _types(marks):
    return [m.type for m in marks]


# =========================================================================
# Basic leaves
# =========================================================================

class TestPlainText:

    def test_text_has_no_marks(self):
        leaves = build_inline([_text("hello")])
        assert len(leaves) == 1
        assert leaves[0].type == "text"
        assert leaves[0].text == "hello"
        assert leaves[0].marks == ()

    def test_inherited_marks_applied_verbatim(self):
        stack = (Mark("strong"),)
        leaves = build_inline([_text("x")], stack)
        assert leaves[0].marks == stack

    def test_empty_children(self):
        assert build_inline([]) == []


class TestLineBreaks:

    def test_softbreak_appends_to_previous_text(self):
        leaves = build_inline([_text("a"), {"type": "softbreak"}, _text("b")])
        assert [leaf.text for leaf in leaves] == ["a\n", "b"]

    def test_linebreak_folded_like_softbreak(self):
        leaves = build_inline([_text("a"), {"type": "linebreak"}, _text("b")])
        assert [leaf.text for leaf in leaves] == ["a\n", "b"]

    def test_break_after_formatting_is_own_leaf(self):
        leaves = build_inline([_em(1, _text("a")), {"type": "softbreak"}, _text("b")])
        assert [leaf.text for leaf in leaves] == ["a", "\n", "b"]
        assert leaves[1].marks == ()

    def test_leading_break(self):
        leaves = build_inline([{"type": "softbreak"}], (Mark("em"),))
        assert leaves[0].text == "\n"
        assert _types(leaves[0].marks) == ["em"]


# =========================================================================
# Marks
# =========================================================================

class TestMarks:

    def test_codespan(self):
        leaves = build_inline([{"type": "codespan", "raw": "**not bold**"}])
        assert leaves[0].text == "**not bold**"
        assert _types(leaves[0].marks) == ["code"]

    def test_emphasis_levels(self):
        assert _types(build_inline([_em(1, _text("i"))])[0].marks) == ["em"]
        assert _types(build_inline([_em(2, _text("b"))])[0].marks) == ["strong"]

    def test_strikethrough(self):
        token = {"type": "strikethrough", "children": [_text("gone")]}
        assert _types(build_inline([token])[0].marks) == ["strikethrough"]

    def test_link_href_verbatim(self):
        leaves = build_inline([_link("https://Example.com/a?b=1#c", _text("x"))])
        assert leaves[0].marks == (Mark("link", {"href": "https://Example.com/a?b=1#c"}),)

    def test_autolink(self):
        token = {"type": "autolink", "attrs": {"url": "https://example.com"}}
        leaves = build_inline([token])
        assert len(leaves) == 1
        assert leaves[0].text == "https://example.com"
        assert leaves[0].marks == (Mark("link", {"href": "https://example.com"}),)

    def test_nesting_order_outer_to_inner(self):
        token = _link("https://e.com", _em(2, _text("a"), _em(1, _text("b"))))
        leaves = build_inline([token])
        assert _types(leaves[0].marks) == ["link", "strong"]
        assert _types(leaves[1].marks) == ["link", "strong", "em"]

    def test_code_inside_emphasis(self):
        leaves = build_inline([_em(1, {"type": "codespan", "raw": "c"})])
        assert _types(leaves[0].marks) == ["em", "code"]


class TestMarkStackIsolation:
    """Sibling branches never observe each other's marks."""

    def test_siblings_do_not_leak(self):
        leaves = build_inline([
            _em(2, _text("bold")),
            _text("plain"),
            _em(1, _text("italic")),
        ])
        assert [_types(leaf.marks) for leaf in leaves] == [["strong"], [], ["em"]]

    def test_inherited_stack_not_mutated(self):
        stack = (Mark("strikethrough"),)
        build_inline([_em(1, _text("x"))], stack)
        assert stack == (Mark("strikethrough"),)


class TestFallback:
    """Unknown inline tokens keep their text."""

    def test_unknown_container_passes_through(self):
        image = {"type": "image", "attrs": {"url": "p.png"}, "children": [_text("alt")]}
        leaves = build_inline([image], (Mark("em"),))
        assert leaves[0].text == "alt"
        assert _types(leaves[0].marks) == ["em"]

    def test_unknown_leaf_without_children_dropped(self):
        assert build_inline([{"type": "inline_html", "raw": "<br>"}]) == []


class TestExtractText:

    def test_ignores_marks(self):
        children = [
            _text("Hello "),
            _em(2, _text("big ")),
            {"type": "codespan", "raw": "code"},
            {"type": "autolink", "attrs": {"url": "https://x.io"}},
        ]
        assert extract_text(children) == "Hello big codehttps://x.io"
