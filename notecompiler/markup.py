"""
markup.py - Regex element adapter (string backend, no DOM).

Carves element ranges straight out of the HTML string: an element runs from
its start tag to the matching end tag, counting nested tags of the same
name. The adapter mirrors ``dom.DomElement`` so the shared tokenizer can run
unchanged where no DOM is available (server-side rendering).

Only the documented authoring subset is expected to parse identically to
the DOM backend: well-formed top-level blocks, wrappers limited to
figure/picture/div.
"""

import html as _html
import re
from typing import Iterator, Optional, Sequence

from .text import BLOCK_BREAK_TAGS, normalize_text

VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

_TAG_RE = re.compile(
    r"<(/?)([a-zA-Z][a-zA-Z0-9:-]*)"
    r"((?:\s+[^\s\"'>/=]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'>]+))?)*)"
    r"\s*(/?)>"
)
_ATTR_RE = re.compile(
    r"([^\s\"'>/=]+)(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s\"'>]+)))?"
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)

_BLOCK_BREAKS = frozenset(BLOCK_BREAK_TAGS)


def parse_attrs(attr_text: str) -> dict[str, str]:
    """Parse the attribute part of a start tag; valueless attributes map to ''."""
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(attr_text or ""):
        name = m.group(1).lower()
        if name in attrs:
            continue
        raw = next((g for g in m.group(2, 3, 4) if g is not None), "")
        attrs[name] = _html.unescape(raw)
    return attrs


def _tag_to_text(m: "re.Match[str]") -> str:
    """<br> and block end tags become line breaks; every other tag disappears."""
    name = m.group(2).lower()
    if name == "br" or (m.group(1) and name in _BLOCK_BREAKS):
        return "\n"
    return ""


def markup_text(fragment: str) -> str:
    """Text of an HTML fragment, with the same line-break rules as the DOM backend.

    Tags are matched with the full attribute grammar, so a ``>`` inside a
    quoted attribute value does not end the tag.
    """
    s = _COMMENT_RE.sub("", fragment)
    s = _TAG_RE.sub(_tag_to_text, s)
    return normalize_text(_html.unescape(s))


def iter_start_tags(markup: str, name: str) -> Iterator[dict[str, str]]:
    """Attributes of every ``<name ...>`` start tag, in document order."""
    for m in _TAG_RE.finditer(_COMMENT_RE.sub("", markup)):
        if _matches(m, name, None):
            yield parse_attrs(m.group(3))


def _find_end(markup: str, name: str, start: int) -> tuple[int, int]:
    """Return (inner_end, outer_end) of the element opened just before ``start``."""
    depth = 1
    for m in _TAG_RE.finditer(markup, start):
        if m.group(2).lower() != name:
            continue
        if m.group(1):
            depth -= 1
            if depth == 0:
                return m.start(), m.end()
        elif not m.group(4):
            depth += 1
    # Unclosed: runs to the end of the fragment
    return len(markup), len(markup)


def _element_at(markup: str, m: "re.Match[str]") -> tuple["RegexElement", int]:
    name = m.group(2).lower()
    attrs = parse_attrs(m.group(3))
    if name in VOID_TAGS or m.group(4):
        return RegexElement(name, attrs, ""), m.end()
    inner_end, outer_end = _find_end(markup, name, m.end())
    return RegexElement(name, attrs, markup[m.end() : inner_end]), outer_end


def _matches(m: "re.Match[str]", name: Optional[str], attr: Optional[str]) -> bool:
    if m.group(1):
        return False
    if name is not None and m.group(2).lower() != name:
        return False
    if attr is not None and attr not in parse_attrs(m.group(3)):
        return False
    return True


class RegexElement:
    """An element carved out of an HTML string."""

    __slots__ = ("name", "attrs", "inner")

    def __init__(self, name: str, attrs: dict[str, str], inner: str):
        self.name = name
        self.attrs = attrs
        self.inner = inner

    def attr(self, key: str) -> Optional[str]:
        return self.attrs.get(key)

    def text(self) -> str:
        return markup_text(self.inner)

    def find(self, name: Optional[str] = None, attr: Optional[str] = None) -> Optional["RegexElement"]:
        return next(self._descendants(name, attr), None)

    def find_all(self, name: Optional[str] = None, attr: Optional[str] = None) -> list["RegexElement"]:
        return list(self._descendants(name, attr))

    def children(self, names: Sequence[str]) -> list["RegexElement"]:
        return [el for el in iter_elements(self.inner) if el.name in names]

    def _descendants(self, name: Optional[str], attr: Optional[str]) -> Iterator["RegexElement"]:
        # Resume right after each start tag so nested matches are found too
        for m in _TAG_RE.finditer(self.inner):
            if _matches(m, name, attr):
                yield _element_at(self.inner, m)[0]

    def __repr__(self) -> str:
        return f"RegexElement(<{self.name}>)"


def iter_elements(markup: str) -> Iterator[RegexElement]:
    """Yield the depth-0 elements of ``markup``; stray text and end tags are skipped."""
    pos = 0
    while True:
        m = _TAG_RE.search(markup, pos)
        if m is None:
            return
        if m.group(1):
            pos = m.end()
            continue
        element, pos = _element_at(markup, m)
        yield element


def iter_top_level(html: str) -> Iterator[RegexElement]:
    """Yield the top-level elements of an HTML fragment in document order."""
    yield from iter_elements(_COMMENT_RE.sub("", html))
