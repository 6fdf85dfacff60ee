"""
models.py - Plain-data structures produced by the note compiler.

Two independent output shapes are defined here:

- ParsedCaseStudy: hero image, table of contents and typed content blocks
  for the case-study reading view.
- Slide: one templated slide of the presentation view.

All objects are frozen; sequences are stored as tuples. ``to_dict()`` gives
the wire form consumed by the renderers (camelCase keys, unset fields
omitted).
"""

import datetime
from dataclasses import dataclass, field, fields
from typing import Any, Literal, Optional, Union

ContentBlockType = Literal[
    "section-label",
    "heading-1",
    "heading-2",
    "heading-3",
    "paragraph",
    "image",
    "image-grid",
    "quote",
    "list",
    "code",
    "divider",
    "info-grid",
    "callout",
    "card-grid",
    "process-stepper",
    "key-takeaway",
    "tool-badges",
    "comparison",
]

SlideTemplate = Literal[
    "title",
    "section",
    "content",
    "image",
    "image-text",
    "quote",
    "list",
    "stat",
    "end",
]

PrimitiveKind = Literal[
    "h1", "h2", "h3", "paragraph", "image", "blockquote", "list", "stat", "hr"
]

ImageLayout = Literal["full-width", "content-width"]
CalloutVariant = Literal["insight", "warning", "success"]

# Python attribute name -> wire key
_WIRE_NAMES = {
    "is_lead": "isLead",
    "section_id": "sectionId",
    "list_type": "listType",
    "speaker_notes": "speakerNotes",
    "hero_image": "heroImage",
    "table_of_contents": "tableOfContents",
    "content_blocks": "contentBlocks",
    "before_label": "beforeLabel",
    "before_content": "beforeContent",
    "after_label": "afterLabel",
    "after_content": "afterContent",
}


def _to_plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


class _Serializable:
    """Mixin giving frozen dataclasses a wire-form ``to_dict``."""

    # Fields that stay in the output even when None
    _keep_none: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name not in self._keep_none:
                continue
            out[_WIRE_NAMES.get(f.name, f.name)] = _to_plain(value)
        return out


# ── Case-study structures ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ImageData(_Serializable):
    src: str
    alt: str = ""
    caption: Optional[str] = None
    layout: ImageLayout = "full-width"


@dataclass(frozen=True)
class InfoGridItem(_Serializable):
    label: str
    value: str


@dataclass(frozen=True)
class CardGridItem(_Serializable):
    title: str
    description: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class ProcessStep(_Serializable):
    number: int
    label: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ComparisonData(_Serializable):
    before_label: str
    before_content: str
    after_label: str
    after_content: str


BlockContent = Union[
    str,
    ImageData,
    ComparisonData,
    tuple[str, ...],
    tuple[ImageData, ...],
    tuple[InfoGridItem, ...],
    tuple[CardGridItem, ...],
    tuple[ProcessStep, ...],
]


@dataclass(frozen=True)
class ContentBlock(_Serializable):
    """One classified unit of case-study content, in source order."""

    id: str
    type: ContentBlockType
    content: BlockContent
    is_lead: Optional[bool] = None
    section_id: Optional[str] = None
    level: Optional[int] = None
    list_type: Optional[Literal["ul", "ol"]] = None
    variant: Optional[CalloutVariant] = None


@dataclass(frozen=True)
class TableOfContentsEntry(_Serializable):
    id: str
    title: str


@dataclass(frozen=True)
class ParsedCaseStudy(_Serializable):
    hero_image: Optional[str] = None
    table_of_contents: tuple[TableOfContentsEntry, ...] = ()
    content_blocks: tuple[ContentBlock, ...] = ()

    _keep_none = ("hero_image",)


# ── Presentation structures ───────────────────────────────────────────────────


@dataclass(frozen=True)
class SlideContent(_Serializable):
    heading: Optional[str] = None
    subheading: Optional[str] = None
    body: Optional[str] = None
    image: Optional[str] = None
    caption: Optional[str] = None
    quote: Optional[str] = None
    attribution: Optional[str] = None
    items: Optional[tuple[str, ...]] = None
    stat_value: Optional[str] = None
    stat_label: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Slide(_Serializable):
    id: str
    template: SlideTemplate
    content: SlideContent = field(default_factory=SlideContent)
    speaker_notes: Optional[str] = None


@dataclass(frozen=True)
class NoteInput:
    """Caller-owned note metadata plus its HTML body."""

    id: str
    title: str
    content: str
    author: str
    username: str
    subtitle: Optional[str] = None
    date: Optional[datetime.date] = None
    header_image: Optional[str] = None


@dataclass(frozen=True)
class PrimitiveBlock:
    """Backend-neutral token shared by the DOM and regex slide tokenizers."""

    kind: PrimitiveKind
    text: str = ""
    items: tuple[str, ...] = ()
    image_url: Optional[str] = None
    image_alt: Optional[str] = None
    stat_value: Optional[str] = None
    stat_label: Optional[str] = None
    speaker_notes: Optional[str] = None
