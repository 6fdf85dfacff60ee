"""
dom.py - BeautifulSoup element adapter (DOM backend).

Exposes the small element interface the shared tokenizer needs
(``name``, ``attr``, ``text``, ``find``, ``find_all``, ``children``) over a
parsed soup. The regex backend in ``markup.py`` implements the same
interface without building a tree.
"""

from copy import deepcopy
from typing import Iterator, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from .text import BLOCK_BREAK_TAGS, normalize_text


def parse_fragment(html: str, parser: str = "lxml") -> Tag:
    """Parse an HTML fragment and return the element holding its top level."""
    soup = BeautifulSoup(html, parser)
    return soup.body or soup


def element_text(element: Optional[Tag]) -> str:
    """Extract text with <br> and block-element ends turned into line breaks.

    Works on a copy so the caller's soup is never mutated.
    """
    if element is None:
        return ""
    el_copy = deepcopy(element)
    for br in el_copy.find_all("br"):
        br.replace_with("\n")
    for block in el_copy.find_all(list(BLOCK_BREAK_TAGS)):
        block.append("\n")
    return normalize_text(el_copy.get_text())


class DomElement:
    """Read-only view of a bs4 Tag."""

    __slots__ = ("tag",)

    def __init__(self, tag: Tag):
        self.tag = tag

    @property
    def name(self) -> str:
        return (self.tag.name or "").lower()

    def attr(self, key: str) -> Optional[str]:
        value = self.tag.get(key)
        if isinstance(value, list):  # multi-valued attributes such as class
            return " ".join(value)
        return value

    def text(self) -> str:
        return element_text(self.tag)

    def find(self, name: Optional[str] = None, attr: Optional[str] = None) -> Optional["DomElement"]:
        found = self.tag.find(name, attrs={attr: True} if attr else {})
        return DomElement(found) if found is not None else None

    def find_all(self, name: Optional[str] = None, attr: Optional[str] = None) -> list["DomElement"]:
        return [
            DomElement(t) for t in self.tag.find_all(name, attrs={attr: True} if attr else {})
        ]

    def children(self, names: Sequence[str]) -> list["DomElement"]:
        return [DomElement(t) for t in self.tag.find_all(list(names), recursive=False)]

    def __repr__(self) -> str:
        return f"DomElement(<{self.name}>)"


def iter_top_level(html: str, parser: str = "lxml") -> Iterator[DomElement]:
    """Yield the top-level elements of an HTML fragment in document order."""
    root = parse_fragment(html, parser)
    for child in root.children:
        if isinstance(child, Tag):
            yield DomElement(child)
