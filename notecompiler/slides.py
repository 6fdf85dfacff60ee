"""
slides.py - Slide grouping engine for the presentation view.

Turns the primitive-block stream of a note into an ordered deck:

    title slide
    one or more slides per block / per h2 group
    end slide

An ``h2`` absorbs every following block up to the next h1, h2 or hr and the
group is classified, in priority order, as list slide(s), one image-text
slide, content slide(s), or a bare section slide. Long lists and long text
are chunked; continuation slides repeat the heading with a suffix.

The engine only sees primitive blocks, so the DOM and regex tokenizers share
every classification and chunking decision made here.
"""

import datetime
import logging
import re
from typing import Callable, Optional, Sequence

from .chunking import split_list, split_text
from .config import DEFAULT_CONFIG, CompilerConfig
from .ids import SlideIdFactory
from .models import NoteInput, PrimitiveBlock, Slide, SlideContent
from .text import word_count
from .tokenizer import tokenize_dom, tokenize_regex

logger = logging.getLogger(__name__)

# Block kinds that close an h2 group
GROUP_BOUNDARIES = frozenset({"h1", "h2", "hr"})

_ATTRIBUTION_DASH_RE = re.compile(r"^[—-]\s*")

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def split_attribution(text: str) -> tuple[str, Optional[str]]:
    """Split a blockquote into (quote, attribution).

    The last line starting with an em dash or hyphen is the attribution;
    everything above it is the quote.
    """
    lines = text.split("\n")
    for i in range(len(lines) - 1, -1, -1):
        line = lines[i].strip()
        if line.startswith(("—", "-")):
            attribution = _ATTRIBUTION_DASH_RE.sub("", line).strip()
            return "\n".join(lines[:i]).strip(), attribution or None
    return text, None


def format_date(value: Optional[datetime.date]) -> Optional[str]:
    """``March 5, 2025``, independent of the process locale."""
    if value is None:
        return None
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def _join_notes(notes: Sequence[Optional[str]]) -> Optional[str]:
    present = [n for n in notes if n]
    return "\n".join(present) if present else None


class SlideDeckBuilder:
    """Builds the slide sequence for one note from its primitive blocks."""

    def __init__(
        self,
        note: NoteInput,
        blocks: Sequence[PrimitiveBlock],
        config: CompilerConfig = DEFAULT_CONFIG,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.note = note
        self.blocks = list(blocks)
        self.config = config
        self.new_id = id_factory or SlideIdFactory()

        self._standalone = {
            "h1": self._section_slide,
            "image": self._image_slide,
            "blockquote": self._quote_slide,
            "stat": self._stat_slide,
            "list": lambda block: self._list_slides(block.items, None, block.speaker_notes),
            "paragraph": lambda block: self._content_slides(block.text, None, block.speaker_notes),
        }

    # ── Slide constructors ───────────────────────────────────────────────────

    def _slide(self, template: str, notes: Optional[str] = None, **content) -> Slide:
        return Slide(
            id=self.new_id(),
            template=template,
            content=SlideContent(**content),
            speaker_notes=notes,
        )

    def _section_slide(self, block: PrimitiveBlock) -> list[Slide]:
        return [self._slide("section", block.speaker_notes, heading=block.text)]

    def _image_slide(self, block: PrimitiveBlock) -> list[Slide]:
        return [
            self._slide(
                "image",
                block.speaker_notes,
                image=block.image_url,
                caption=block.image_alt or None,
            )
        ]

    def _quote_slide(self, block: PrimitiveBlock) -> list[Slide]:
        quote, attribution = split_attribution(block.text)
        return [self._slide("quote", block.speaker_notes, quote=quote, attribution=attribution)]

    def _stat_slide(self, block: PrimitiveBlock) -> list[Slide]:
        return [
            self._slide(
                "stat",
                block.speaker_notes,
                stat_value=block.stat_value,
                stat_label=block.stat_label,
            )
        ]

    def _continued(self, heading: Optional[str], idx: int) -> Optional[str]:
        if heading is None or idx == 0:
            return heading
        return f"{heading}{self.config.continued_suffix}"

    def _list_slides(
        self, items: Sequence[str], heading: Optional[str], notes: Optional[str]
    ) -> list[Slide]:
        return [
            self._slide(
                "list",
                notes if idx == 0 else None,
                heading=self._continued(heading, idx),
                items=tuple(chunk),
            )
            for idx, chunk in enumerate(split_list(items, self.config.max_list_items))
        ]

    def _content_slides(
        self, text: str, heading: Optional[str], notes: Optional[str]
    ) -> list[Slide]:
        return [
            self._slide(
                "content",
                notes if idx == 0 else None,
                heading=self._continued(heading, idx),
                body=body,
            )
            for idx, body in enumerate(split_text(text, self.config.max_words))
        ]

    # ── Grouping ─────────────────────────────────────────────────────────────

    def _group_slides(self, heading: PrimitiveBlock, group: Sequence[PrimitiveBlock]) -> list[Slide]:
        """Classify an h2 and the blocks it absorbed."""
        lists = [b for b in group if b.kind == "list"]
        images = [b for b in group if b.kind == "image"]
        paragraphs = [b for b in group if b.kind == "paragraph"]
        body = " ".join(p.text for p in paragraphs)
        words = word_count(body)

        if lists:
            consumed = lists
        elif images and words < self.config.image_text_max_words:
            consumed = [images[0], *paragraphs]
        elif body:
            consumed = paragraphs
        else:
            consumed = []

        notes = _join_notes([heading.speaker_notes, *(b.speaker_notes for b in consumed)])

        if lists:
            items = [item for b in lists for item in b.items]
            slides = self._list_slides(items, heading.text, notes)
        elif images and words < self.config.image_text_max_words:
            slides = [
                self._slide(
                    "image-text",
                    notes,
                    heading=heading.text,
                    image=images[0].image_url,
                    caption=images[0].image_alt or None,
                    body=body or None,
                )
            ]
        elif body:
            slides = self._content_slides(body, heading.text, notes)
        else:
            slides = [self._slide("section", notes, heading=heading.text)]

        # Absorbed blocks the template did not use keep their own slides, placed
        # before or after the template slides by where they sit in the source
        consumed_ids = {id(b) for b in consumed}
        first = next((i for i, b in enumerate(group) if id(b) in consumed_ids), 0)
        leading = [s for b in group[:first] for s in self._standalone_slides(b)]
        trailing = [
            s
            for b in group[first:]
            if id(b) not in consumed_ids
            for s in self._standalone_slides(b)
        ]
        return leading + slides + trailing

    def _standalone_slides(self, block: PrimitiveBlock) -> list[Slide]:
        build = self._standalone.get(block.kind)
        # h3 and hr never produce a slide of their own
        return build(block) if build is not None else []

    # ── Bracketing ───────────────────────────────────────────────────────────

    def _subtitle_index(self) -> Optional[int]:
        """Index of the first paragraph when it is short enough to be the subtitle."""
        if self.note.subtitle:
            return None
        for idx, block in enumerate(self.blocks):
            if block.kind == "paragraph":
                if word_count(block.text) <= self.config.subtitle_max_words:
                    return idx
                return None
        return None

    def build(self) -> list[Slide]:
        subtitle_idx = self._subtitle_index()
        subheading = self.note.subtitle
        blocks = self.blocks
        title_notes = None
        if subtitle_idx is not None:
            subheading = blocks[subtitle_idx].text
            # The subtitle paragraph has no slide of its own; its notes ride on the title
            title_notes = blocks[subtitle_idx].speaker_notes
            blocks = blocks[:subtitle_idx] + blocks[subtitle_idx + 1 :]

        slides = [
            self._slide(
                "title",
                title_notes,
                heading=self.note.title,
                subheading=subheading or None,
                author=self.note.author,
                date=format_date(self.note.date),
                image=self.note.header_image or None,
            )
        ]

        i = 0
        while i < len(blocks):
            block = blocks[i]
            if block.kind == "h2":
                j = i + 1
                while j < len(blocks) and blocks[j].kind not in GROUP_BOUNDARIES:
                    j += 1
                slides.extend(self._group_slides(block, blocks[i + 1 : j]))
                i = j
            else:
                slides.extend(self._standalone_slides(block))
                i += 1

        slides.append(
            self._slide(
                "end",
                url=f"{self.note.username}.{self.config.site_domain}",
                author=self.note.author,
            )
        )
        logger.debug(
            "Built %d slides from %d blocks for note %s",
            len(slides),
            len(self.blocks),
            self.note.id,
        )
        return slides


def build_slides(
    note: NoteInput,
    blocks: Sequence[PrimitiveBlock],
    config: Optional[CompilerConfig] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Slide]:
    return SlideDeckBuilder(note, blocks, config or DEFAULT_CONFIG, id_factory).build()


def parse_note_to_slides(
    note: NoteInput,
    config: Optional[CompilerConfig] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Slide]:
    """Compile a note into slides using the BeautifulSoup tokenizer."""
    config = config or DEFAULT_CONFIG
    blocks = tokenize_dom(note.content, config.dom_parser)
    return build_slides(note, blocks, config, id_factory)


def parse_note_to_slides_simple(
    note: NoteInput,
    config: Optional[CompilerConfig] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Slide]:
    """Compile a note into slides without a DOM (regex tokenizer).

    Produces the same template sequence as ``parse_note_to_slides`` for
    input inside the authoring subset.
    """
    blocks = tokenize_regex(note.content)
    return build_slides(note, blocks, config or DEFAULT_CONFIG, id_factory)
