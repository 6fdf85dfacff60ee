"""
notecompiler - Compile authored note HTML into two presentation structures.

- ``parse_case_study_content``: hero image, table of contents and typed
  content blocks for the long-form reading view.
- ``parse_note_to_slides``: an ordered slide deck (title ... end).

Each has a ``*_simple`` counterpart that works on the raw string without a
DOM, for server-side rendering before hydration.
"""

from .casestudy import CaseStudyParser, parse_case_study_content, parse_case_study_content_simple
from .chunking import split_list, split_text
from .config import DEFAULT_CONFIG, CompilerConfig, load_config
from .directives import extract_directives, strip_directives
from .equivalence import EquivalenceReport, compare_backends, format_report
from .exceptions import ConfigError, NoteCompilerError
from .ids import BlockIdSequence, SlideIdFactory, SlugRegistry, slugify
from .models import (
    CardGridItem,
    ComparisonData,
    ContentBlock,
    ImageData,
    InfoGridItem,
    NoteInput,
    ParsedCaseStudy,
    PrimitiveBlock,
    ProcessStep,
    Slide,
    SlideContent,
    TableOfContentsEntry,
)
from .slides import (
    build_slides,
    parse_note_to_slides,
    parse_note_to_slides_simple,
    split_attribution,
)
from .tokenizer import tokenize_dom, tokenize_regex

__version__ = "0.1.0"

__all__ = [
    "BlockIdSequence",
    "CardGridItem",
    "CaseStudyParser",
    "ComparisonData",
    "CompilerConfig",
    "ConfigError",
    "ContentBlock",
    "DEFAULT_CONFIG",
    "EquivalenceReport",
    "ImageData",
    "InfoGridItem",
    "NoteCompilerError",
    "NoteInput",
    "ParsedCaseStudy",
    "PrimitiveBlock",
    "ProcessStep",
    "Slide",
    "SlideContent",
    "SlideIdFactory",
    "SlugRegistry",
    "TableOfContentsEntry",
    "build_slides",
    "compare_backends",
    "extract_directives",
    "format_report",
    "load_config",
    "parse_case_study_content",
    "parse_case_study_content_simple",
    "parse_note_to_slides",
    "parse_note_to_slides_simple",
    "slugify",
    "split_attribution",
    "split_list",
    "split_text",
    "strip_directives",
    "tokenize_dom",
    "tokenize_regex",
]
