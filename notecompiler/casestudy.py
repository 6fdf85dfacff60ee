"""
casestudy.py - Compile note HTML into the case-study reading structure.

Walks the top-level children of the fragment and maps each tag to a typed
content block. Images are batched: consecutive images become one
``image-grid`` block (a single image stays an ``image`` block), and the
first image of the document becomes the hero when no header image was
supplied. Every H2 yields a heading block plus a table-of-contents entry
sharing the same anchor id.

``parse_case_study_content_simple`` is the DOM-less fallback used before
hydration: it only resolves the hero image and the table of contents.
"""

import logging
import re
from typing import Callable, Optional

from bs4 import Tag

from .config import DEFAULT_CONFIG, CompilerConfig
from .dom import element_text, parse_fragment
from .ids import BlockIdSequence, SlugRegistry
from .markup import iter_start_tags, markup_text
from .models import (
    CardGridItem,
    ComparisonData,
    ContentBlock,
    ImageData,
    InfoGridItem,
    ParsedCaseStudy,
    ProcessStep,
    TableOfContentsEntry,
)
from .text import collapse_whitespace

logger = logging.getLogger(__name__)

CALLOUT_VARIANTS = ("insight", "warning", "success")

_H2_RE = re.compile(r"<h2\b[^>]*>(.*?)</h2\s*>", re.IGNORECASE | re.DOTALL)


# ── Element helpers ──────────────────────────────────────────────────────────


def _text(element: Optional[Tag]) -> str:
    """Single-line text content of an element."""
    return collapse_whitespace(element_text(element))


def _inner_html(element: Tag) -> str:
    return element.decode_contents().strip()


def image_src(img: Tag) -> Optional[str]:
    return img.get("src") or img.get("data-src") or None


def image_layout(src: str, config: CompilerConfig = DEFAULT_CONFIG) -> str:
    """Narrow assets (icons, logos, avatars...) stay content-width."""
    src_lower = src.lower()
    if any(pattern in src_lower for pattern in config.narrow_image_patterns):
        return "content-width"
    return "full-width"


# ── Parser ───────────────────────────────────────────────────────────────────


class CaseStudyParser:
    """Converts one HTML fragment into a ParsedCaseStudy."""

    def __init__(
        self,
        html: str,
        header_image: Optional[str] = None,
        config: CompilerConfig = DEFAULT_CONFIG,
    ):
        self.config = config
        self.root = parse_fragment(html, config.dom_parser)

        self.hero_image: Optional[str] = header_image or None
        self.table_of_contents: list[TableOfContentsEntry] = []
        self.content_blocks: list[ContentBlock] = []
        self.pending_images: list[ImageData] = []
        self.found_first_paragraph = False

        self.slugs = SlugRegistry()
        self.next_block_id = BlockIdSequence()

        # Track warnings
        self.warnings: list[str] = []

        self._handlers: dict[str, Callable[[Tag], None]] = {
            "h1": self._heading,
            "h2": self._heading,
            "h3": self._heading,
            "h4": self._section_label,
            "p": self._paragraph,
            "blockquote": self._quote,
            "ul": self._list,
            "ol": self._list,
            "pre": self._code,
            "code": self._code,
            "hr": self._divider,
            "div": self._division,
        }
        self._div_block_types: dict[str, Callable[[Tag], None]] = {
            "info-grid": self._info_grid,
            "callout": self._callout,
            "card-grid": self._card_grid,
            "process-stepper": self._process_stepper,
            "key-takeaway": self._key_takeaway,
            "tool-badges": self._tool_badges,
            "comparison": self._comparison,
        }

    def _emit(self, block_type: str, content, **extra) -> None:
        self.content_blocks.append(
            ContentBlock(id=self.next_block_id(), type=block_type, content=content, **extra)
        )

    # ── Image flow ───────────────────────────────────────────────────────────

    def _image_element(self, node: Tag) -> tuple[bool, Optional[Tag], Optional[str]]:
        """Decide whether a top-level node belongs to the image flow.

        Returns (is_image, img tag, caption).
        """
        name = node.name
        if name == "img":
            return True, node, None
        if name == "figure":
            figcaption = node.find("figcaption")
            caption = _text(figcaption) if figcaption is not None else ""
            return True, node.find("img"), caption or None
        if name == "picture":
            return True, node.find("img"), None
        if name == "p":
            img = node.find("img")
            if img is not None and not node.get_text().strip():
                return True, img, None
        if name == "div" and node.get("data-block-type") not in self._div_block_types:
            img = node.find("img")
            if img is not None:
                return True, img, None
        return False, None, None

    def _accept_image(self, img: Optional[Tag], caption: Optional[str]) -> None:
        src = image_src(img) if img is not None else None
        if not src:
            self.warnings.append("Image element without a source was skipped")
            logger.warning("Skipping image element without a source")
            return

        if self.hero_image is None:
            self.hero_image = src
            return

        self.pending_images.append(
            ImageData(
                src=src,
                alt=img.get("alt") or "",
                caption=caption,
                layout=image_layout(src, self.config),
            )
        )

    def _flush_images(self) -> None:
        if not self.pending_images:
            return
        if len(self.pending_images) == 1:
            self._emit("image", self.pending_images[0])
        else:
            self._emit("image-grid", tuple(self.pending_images))
        self.pending_images = []

    # ── Per-tag handlers ─────────────────────────────────────────────────────

    def _heading(self, node: Tag) -> None:
        text = _text(node)
        if not text:
            return
        level = int(node.name[1])
        if level == 2:
            section_id = self.slugs.allocate(text)
            self.table_of_contents.append(TableOfContentsEntry(id=section_id, title=text))
            self._emit("heading-2", text, section_id=section_id, level=2)
        else:
            self._emit(f"heading-{level}", text, level=level)

    def _section_label(self, node: Tag) -> None:
        text = _text(node)
        if text:
            self._emit("section-label", text)

    def _paragraph(self, node: Tag) -> None:
        if not node.get_text().strip():
            return
        self._emit("paragraph", _inner_html(node), is_lead=not self.found_first_paragraph)
        self.found_first_paragraph = True

    def _quote(self, node: Tag) -> None:
        html = _inner_html(node)
        if html:
            self._emit("quote", html)

    def _list(self, node: Tag) -> None:
        self._emit("list", node.decode_contents(), list_type=node.name)

    def _code(self, node: Tag) -> None:
        code = node.find("code") if node.name == "pre" else None
        text = (code if code is not None else node).get_text()
        if text.strip():
            self._emit("code", text)

    def _divider(self, node: Tag) -> None:
        self._emit("divider", "")

    def _division(self, node: Tag) -> None:
        handler = self._div_block_types.get(node.get("data-block-type"))
        if handler is not None:
            handler(node)
            return
        # Anything else with visible text degrades to a paragraph
        html = _inner_html(node)
        if html and node.get_text().strip():
            self._emit("paragraph", html)

    # ── data-block-type directives ───────────────────────────────────────────

    def _info_grid(self, node: Tag) -> None:
        values = node.find_all("dd")
        items = tuple(
            InfoGridItem(label=_text(dt), value=_text(values[i]) if i < len(values) else "")
            for i, dt in enumerate(node.find_all("dt"))
        )
        if items:
            self._emit("info-grid", items)

    def _callout(self, node: Tag) -> None:
        variant = node.get("data-variant")
        if variant not in CALLOUT_VARIANTS:
            variant = "insight"
        html = _inner_html(node)
        if html:
            self._emit("callout", html, variant=variant)

    def _card_grid(self, node: Tag) -> None:
        cards = tuple(
            CardGridItem(
                icon=card.get("data-icon") or None,
                title=_text(card.find(attrs={"data-card-title": True})),
                description=_text(card.find(attrs={"data-card-desc": True})),
            )
            for card in node.find_all(attrs={"data-card": True})
        )
        if cards:
            self._emit("card-grid", cards)

    def _process_stepper(self, node: Tag) -> None:
        steps = []
        for number, step in enumerate(node.find_all(attrs={"data-step": True}), start=1):
            label = (
                step.get("data-label")
                or _text(step.find(attrs={"data-step-label": True}))
                or f"Step {number}"
            )
            description = _text(step.find(attrs={"data-step-desc": True})) or _text(step)
            steps.append(ProcessStep(number=number, label=label, description=description))
        if steps:
            self._emit("process-stepper", tuple(steps))

    def _key_takeaway(self, node: Tag) -> None:
        html = _inner_html(node)
        if html:
            self._emit("key-takeaway", html)

    def _tool_badges(self, node: Tag) -> None:
        tool_elements = node.find_all(attrs={"data-tool": True})
        if tool_elements:
            tools = [_text(t) for t in tool_elements]
        else:
            source = node.get("data-tools") or _text(node)
            tools = [t.strip() for t in source.split(",")]
        tools = tuple(t for t in tools if t)
        if tools:
            self._emit("tool-badges", tools)

    def _comparison(self, node: Tag) -> None:
        before = node.find(attrs={"data-before": True})
        after = node.find(attrs={"data-after": True})
        if before is None or after is None:
            return
        self._emit(
            "comparison",
            ComparisonData(
                before_label=before.get("data-label") or "Before",
                before_content=_inner_html(before) or _text(before),
                after_label=after.get("data-label") or "After",
                after_content=_inner_html(after) or _text(after),
            ),
        )

    # ── Main loop ────────────────────────────────────────────────────────────

    def parse(self) -> ParsedCaseStudy:
        for node in self.root.children:
            if not isinstance(node, Tag):
                continue

            is_image, img, caption = self._image_element(node)
            if is_image:
                self._accept_image(img, caption)
                continue

            # Any non-image element ends the current image run
            self._flush_images()
            handler = self._handlers.get(node.name)
            if handler is not None:
                handler(node)

        self._flush_images()

        logger.debug(
            "Parsed case study: %d blocks, %d TOC entries, hero=%s",
            len(self.content_blocks),
            len(self.table_of_contents),
            self.hero_image,
        )
        return ParsedCaseStudy(
            hero_image=self.hero_image,
            table_of_contents=tuple(self.table_of_contents),
            content_blocks=tuple(self.content_blocks),
        )


# ── Public API ───────────────────────────────────────────────────────────────


def parse_case_study_content(
    html: Optional[str],
    header_image: Optional[str] = None,
    config: Optional[CompilerConfig] = None,
) -> ParsedCaseStudy:
    """Parse note HTML into hero image, table of contents and content blocks."""
    if not html or not html.strip():
        return ParsedCaseStudy(hero_image=header_image or None)
    return CaseStudyParser(html, header_image, config or DEFAULT_CONFIG).parse()


def parse_case_study_content_simple(
    html: Optional[str],
    header_image: Optional[str] = None,
) -> ParsedCaseStudy:
    """Regex-only fallback: hero image and table of contents, no content blocks.

    The empty ``content_blocks`` marks a pre-hydration state; the DOM parser
    fills them in once it can run.
    """
    html = html or ""
    hero_image = header_image or None
    if hero_image is None:
        # Only the src attribute itself counts, never data-src and friends
        hero_image = next(
            (attrs["src"] for attrs in iter_start_tags(html, "img") if attrs.get("src")),
            None,
        )

    slugs = SlugRegistry()
    toc = []
    for match in _H2_RE.finditer(html):
        title = collapse_whitespace(markup_text(match.group(1)))
        if title:
            toc.append(TableOfContentsEntry(id=slugs.allocate(title), title=title))

    return ParsedCaseStudy(hero_image=hero_image, table_of_contents=tuple(toc))
