"""Build text leaves from normalized inline AST tokens.

Inline formatting is flattened: every produced node is a ``text`` leaf
whose ``marks`` list the formatting of every enclosing inline token,
outermost first::

    [**bold *both***](https://x)

    -> text "bold "  marks [link, strong]
    -> text "both"   marks [link, strong, em]

The mark stack is a tuple.  Each nested call receives its own extended
copy, so sibling branches never see each other's marks.
"""

from __future__ import annotations

from substackify.models import ContentNode, Mark

_EMPHASIS_MARKS: dict[int, str] = {1: "em", 2: "strong"}


def build_inline(
    children: list[dict],
    marks: tuple[Mark, ...] = (),
) -> list[ContentNode]:
    """Convert inline AST tokens to a flat list of text leaves.

    Handles: text, softbreak, linebreak, codespan, emphasis (em/strong),
    strikethrough, link, autolink.  Any other token is descended into
    with *marks* unchanged, so unsupported markup keeps its text.

    Parameters
    ----------
    children:
        List of normalized inline AST tokens.
    marks:
        Marks inherited from enclosing inline tokens.

    Returns
    -------
    list[ContentNode]
        Text leaves in source order.
    """
    leaves: list[ContentNode] = []
    # Index of the last leaf made from a plain text run at this level,
    # which a following line break extends in place.
    open_text: int | None = None

    for token in children:
        token_type = token.get("type", "")

        if token_type == "text":
            leaves.append(_text_leaf(token.get("raw", ""), marks))
            open_text = len(leaves) - 1
            continue

        if token_type in ("softbreak", "linebreak"):
            if open_text is not None:
                leaves[open_text].text += "\n"
            else:
                leaves.append(_text_leaf("\n", marks))
            open_text = None
            continue

        open_text = None

        if token_type == "codespan":
            leaves.append(_text_leaf(token.get("raw", ""), _push(marks, Mark("code"))))

        elif token_type == "emphasis":
            level = token.get("attrs", {}).get("level", 1)
            mark = Mark(_EMPHASIS_MARKS.get(level, "strong"))
            leaves.extend(build_inline(token.get("children", []), _push(marks, mark)))

        elif token_type == "strikethrough":
            leaves.extend(
                build_inline(token.get("children", []), _push(marks, Mark("strikethrough")))
            )

        elif token_type == "link":
            href = token.get("attrs", {}).get("url", "")
            mark = Mark("link", {"href": href})
            leaves.extend(build_inline(token.get("children", []), _push(marks, mark)))

        elif token_type == "autolink":
            url = token.get("attrs", {}).get("url", "")
            leaves.append(_text_leaf(url, _push(marks, Mark("link", {"href": url}))))

        else:
            leaves.extend(build_inline(token.get("children", []), marks))

    return leaves


def extract_text(children: list[dict]) -> str:
    """Recursively extract plain text from inline tokens, ignoring marks.

    An autolink contributes its URL, the text it renders as.
    """
    parts: list[str] = []
    for token in children:
        token_type = token.get("type", "")
        if token_type in ("text", "codespan"):
            parts.append(token.get("raw", ""))
        elif token_type == "autolink":
            parts.append(token.get("attrs", {}).get("url", ""))
        elif "children" in token:
            parts.append(extract_text(token["children"]))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _push(marks: tuple[Mark, ...], mark: Mark) -> tuple[Mark, ...]:
    """Return a new stack with *mark* appended."""
    return (*marks, mark)


def _text_leaf(text: str, marks: tuple[Mark, ...]) -> ContentNode:
    return ContentNode(type="text", text=text, marks=marks)
