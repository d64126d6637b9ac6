"""Extract the leading frontmatter block from Markdown source.

The block must start at the very first byte with ``---\\n`` and end at the
first following ``\\n---``::

    ---
    title: "Hello"
    tags: [python, "markdown"]
    draft: true
    ---
    Body starts here.

This is a line-oriented ``key: value`` reader, not a YAML parser: nested
mappings and multi-line scalars are not supported and lose their
structure.  Malformed or unterminated blocks are treated as ordinary body
text; nothing here raises for bad input.
"""

from __future__ import annotations

from typing import AnyStr

from substackify.models import Frontmatter

_OPEN = "---\n"
_CLOSE = "\n---"

# Keys copied verbatim into a Frontmatter field of the same name.
_SCALAR_KEYS: frozenset[str] = frozenset({
    "title",
    "subtitle",
    "date",
    "audience",
    "slug",
    "canonical_url",
    "meta_description",
    "social_image",
    "scheduled_at",
    "section",
    "podcast_url",
})

_QUOTES = "\"'"


def parse_frontmatter(source: AnyStr) -> tuple[Frontmatter | None, AnyStr]:
    """Split *source* into its frontmatter and the remaining body.

    Parameters
    ----------
    source:
        Raw Markdown as UTF-8 ``bytes`` or ``str``.  The body is returned
        in the same type.

    Returns
    -------
    tuple[Frontmatter | None, bytes | str]
        ``(None, source)`` unchanged when there is no well-formed block,
        otherwise the parsed fields and everything after the closing
        delimiter line.
    """
    if isinstance(source, bytes):
        opener, closer = _OPEN.encode(), _CLOSE.encode()
    else:
        opener, closer = _OPEN, _CLOSE

    if not source.startswith(opener):
        return None, source
    end = source.find(closer, len(opener))
    if end < 0:
        return None, source

    block = source[len(opener):end]
    # Skip the closing marker and the newline that terminates it.
    body = source[end + len(closer) + 1:]

    if isinstance(block, bytes):
        block = block.decode("utf-8")
    return _parse_block(block), body


def _parse_block(block: str) -> Frontmatter:
    """Build a :class:`Frontmatter` from the lines between the delimiters."""
    fields: dict[str, object] = {}
    for line in block.split("\n"):
        parsed = _parse_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key in _SCALAR_KEYS:
            fields[key] = value
        elif key == "tags":
            fields["tags"] = _parse_list(value)
        elif key == "draft":
            fields["draft"] = value == "true"
        # Unknown keys are ignored.
    return Frontmatter(**fields)  # type: ignore[arg-type]


def _parse_line(line: str) -> tuple[str, str] | None:
    """Split ``key: value`` at the first colon; ``None`` when there is none."""
    idx = line.find(":")
    if idx < 0:
        return None
    key = line[:idx].strip()
    value = _unquote(line[idx + 1:].strip())
    return key, value


def _parse_list(value: str) -> tuple[str, ...]:
    """Parse the inline ``[a, "b", c]`` list syntax.

    Bare comma-separated values without brackets are accepted too.
    """
    if value.startswith("["):
        value = value[1:]
    if value.endswith("]"):
        value = value[:-1]
    items: list[str] = []
    for part in value.split(","):
        item = _unquote(part.strip())
        if item:
            items.append(item)
    return tuple(items)


def _unquote(value: str) -> str:
    """Strip one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value
