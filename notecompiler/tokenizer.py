"""
tokenizer.py - Top-level elements -> ordered primitive blocks.

One classification table serves both backends: ``tokenize_dom`` feeds it
BeautifulSoup elements, ``tokenize_regex`` feeds it elements carved out of
the raw string. Because the table, the directive pass and the text rules are
shared, the two backends can only diverge where the element adapters do.

Directives are extracted from each element's text before classification,
so ``<p><img src="a.png">[note: hi]</p>`` is still an image-only paragraph.
"""

import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional, Union

from . import dom, markup
from .directives import extract_directives, strip_directives
from .models import PrimitiveBlock
from .text import collapse_whitespace

logger = logging.getLogger(__name__)

Element = Union[dom.DomElement, markup.RegexElement]
Handler = Callable[[Element, str], list[PrimitiveBlock]]


# ── Helpers ───────────────────────────────────────────────────────────────────


def _clean(text: str) -> str:
    return collapse_whitespace(strip_directives(text))


def _image_block(img: Optional[Element], alt: Optional[str] = None) -> list[PrimitiveBlock]:
    if img is None:
        return []
    src = img.attr("src") or img.attr("data-src")
    if not src:
        logger.warning("Skipping <img> without a source")
        return []
    if alt is None:
        alt = img.attr("alt") or ""
    return [PrimitiveBlock(kind="image", image_url=src, image_alt=alt)]


def _list_block(items: Iterable[str]) -> list[PrimitiveBlock]:
    items = tuple(i for i in items if i)
    return [PrimitiveBlock(kind="list", items=items)] if items else []


def _text_block(kind: str, text: str) -> list[PrimitiveBlock]:
    return [PrimitiveBlock(kind=kind, text=text)] if text else []


# ── Per-tag handlers ──────────────────────────────────────────────────────────


def _heading(el: Element, text: str) -> list[PrimitiveBlock]:
    kind = el.name if el.name in ("h1", "h2") else "h3"
    return _text_block(kind, collapse_whitespace(text))


def _paragraph(el: Element, text: str) -> list[PrimitiveBlock]:
    img = el.find("img")
    if img is not None and not text:
        return _image_block(img)
    return _text_block("paragraph", text)


def _img(el: Element, text: str) -> list[PrimitiveBlock]:
    return _image_block(el)


def _figure(el: Element, text: str) -> list[PrimitiveBlock]:
    img = el.find("img")
    if img is None:
        return []
    figcaption = el.find("figcaption")
    caption = _clean(figcaption.text()) if figcaption is not None else ""
    return _image_block(img, alt=caption or img.attr("alt") or "")


def _picture(el: Element, text: str) -> list[PrimitiveBlock]:
    return _image_block(el.find("img"))


def _blockquote(el: Element, text: str) -> list[PrimitiveBlock]:
    return _text_block("blockquote", text)


def _list(el: Element, text: str) -> list[PrimitiveBlock]:
    return _list_block(_clean(li.text()) for li in el.children(("li",)))


def _rule(el: Element, text: str) -> list[PrimitiveBlock]:
    return [PrimitiveBlock(kind="hr")]


def _preformatted(el: Element, text: str) -> list[PrimitiveBlock]:
    return _text_block("paragraph", text)


def _info_grid(el: Element, text: str) -> list[PrimitiveBlock]:
    labels = [_clean(dt.text()) for dt in el.find_all("dt")]
    values = [_clean(dd.text()) for dd in el.find_all("dd")]
    pairs = zip(labels, values + [""] * (len(labels) - len(values)))
    return _list_block(f"{label}: {value}" for label, value in pairs if label and value)


def _card_grid(el: Element, text: str) -> list[PrimitiveBlock]:
    items = []
    for card in el.find_all(attr="data-card"):
        title_el = card.find(attr="data-card-title")
        desc_el = card.find(attr="data-card-desc")
        title = _clean(title_el.text()) if title_el else ""
        desc = _clean(desc_el.text()) if desc_el else ""
        if title:
            items.append(f"{title} — {desc}" if desc else title)
    return _list_block(items)


def _process_stepper(el: Element, text: str) -> list[PrimitiveBlock]:
    items = []
    for n, step in enumerate(el.find_all(attr="data-step"), start=1):
        label_el = step.find(attr="data-step-label")
        desc_el = step.find(attr="data-step-desc")
        label = step.attr("data-label") or (_clean(label_el.text()) if label_el else "") or f"Step {n}"
        desc = _clean(desc_el.text()) if desc_el else ""
        items.append(f"{label} — {desc}" if desc else label)
    return _list_block(items)


def _tool_badges(el: Element, text: str) -> list[PrimitiveBlock]:
    tools = [t for t in (_clean(tool.text()) for tool in el.find_all(attr="data-tool")) if t]
    return _text_block("paragraph", f"Tools: {', '.join(tools)}" if tools else "")


def _comparison(el: Element, text: str) -> list[PrimitiveBlock]:
    blocks = []
    for attr, default_label in (("data-before", "Before"), ("data-after", "After")):
        side = el.find(attr=attr)
        if side is not None:
            label = side.attr("data-label") or default_label
            blocks.append(PrimitiveBlock(kind="paragraph", text=f"{label}: {_clean(side.text())}"))
    return blocks


_DIV_BLOCK_TYPES: dict[str, Handler] = {
    "info-grid": _info_grid,
    "callout": _blockquote,
    "key-takeaway": _blockquote,
    "card-grid": _card_grid,
    "process-stepper": _process_stepper,
    "tool-badges": _tool_badges,
    "comparison": _comparison,
}


def _division(el: Element, text: str) -> list[PrimitiveBlock]:
    handler = _DIV_BLOCK_TYPES.get(el.attr("data-block-type") or "")
    if handler is not None:
        return handler(el, text)
    img = el.find("img")
    if img is not None:
        return _image_block(img)
    return _text_block("paragraph", text)


TAG_HANDLERS: dict[str, Handler] = {
    "h1": _heading,
    "h2": _heading,
    "h3": _heading,
    "h4": _heading,
    "p": _paragraph,
    "img": _img,
    "figure": _figure,
    "picture": _picture,
    "blockquote": _blockquote,
    "ul": _list,
    "ol": _list,
    "pre": _preformatted,
    "hr": _rule,
    "div": _division,
}


# ── Tokenization ──────────────────────────────────────────────────────────────


def tokenize_element(el: Element) -> list[PrimitiveBlock]:
    """Classify one top-level element, honouring its inline directives."""
    handler = TAG_HANDLERS.get(el.name)
    if handler is None:
        return []

    directives = extract_directives(el.text())
    blocks = [
        PrimitiveBlock(kind="stat", stat_value=value, stat_label=label)
        for value, label in directives.stats
    ]
    blocks.extend(handler(el, directives.text))

    if blocks and directives.speaker_notes:
        blocks[0] = replace(blocks[0], speaker_notes=directives.speaker_notes)
    return blocks


def tokenize(elements: Iterable[Element]) -> list[PrimitiveBlock]:
    blocks: list[PrimitiveBlock] = []
    for el in elements:
        blocks.extend(tokenize_element(el))
    return blocks


def tokenize_dom(html: Optional[str], parser: str = "lxml") -> list[PrimitiveBlock]:
    """Primitive blocks from a BeautifulSoup parse of ``html``."""
    if not html or not html.strip():
        return []
    return tokenize(dom.iter_top_level(html, parser))


def tokenize_regex(html: Optional[str]) -> list[PrimitiveBlock]:
    """Primitive blocks from string-range extraction, for hosts without a DOM."""
    if not html or not html.strip():
        return []
    return tokenize(markup.iter_top_level(html))
