"""
equivalence.py - DOM vs. regex slide backend comparison.

The regex backend renders during SSR and the DOM backend replaces it on
hydration, so any difference in the template sequence shows up as a visible
reflow. ``compare_backends`` runs both on one note and reports where the
decks diverge; ``format_report`` renders the result for the CLI.
"""

from dataclasses import dataclass, field
from typing import Optional

from .config import CompilerConfig
from .ids import SlideIdFactory
from .models import NoteInput, Slide
from .slides import parse_note_to_slides, parse_note_to_slides_simple


@dataclass
class SlideMismatch:
    """One position where the two decks differ."""

    position: int  # 1-based slide number
    dom_template: Optional[str]
    regex_template: Optional[str]
    dom_content: Optional[dict] = None
    regex_content: Optional[dict] = None

    @property
    def severity(self) -> str:
        # Template mismatches reflow the page; content-only ones just repaint
        return "TEMPLATE" if self.dom_template != self.regex_template else "CONTENT"


@dataclass
class EquivalenceReport:
    """Comparison of both backends for a single note."""

    name: str
    dom_templates: list[str] = field(default_factory=list)
    regex_templates: list[str] = field(default_factory=list)
    mismatches: list[SlideMismatch] = field(default_factory=list)

    @property
    def templates_match(self) -> bool:
        return self.dom_templates == self.regex_templates

    @property
    def is_equivalent(self) -> bool:
        return not self.mismatches

    @property
    def template_mismatches(self) -> int:
        return sum(1 for m in self.mismatches if m.severity == "TEMPLATE")


def _comparable(slide: Slide) -> dict:
    """Wire form without the (non-stable) slide id."""
    data = slide.to_dict()
    data.pop("id", None)
    return data


def compare_slides(name: str, dom_slides: list[Slide], regex_slides: list[Slide]) -> EquivalenceReport:
    report = EquivalenceReport(
        name=name,
        dom_templates=[s.template for s in dom_slides],
        regex_templates=[s.template for s in regex_slides],
    )
    for idx in range(max(len(dom_slides), len(regex_slides))):
        dom_slide = dom_slides[idx] if idx < len(dom_slides) else None
        regex_slide = regex_slides[idx] if idx < len(regex_slides) else None
        dom_data = _comparable(dom_slide) if dom_slide else None
        regex_data = _comparable(regex_slide) if regex_slide else None
        if dom_data != regex_data:
            report.mismatches.append(
                SlideMismatch(
                    position=idx + 1,
                    dom_template=dom_slide.template if dom_slide else None,
                    regex_template=regex_slide.template if regex_slide else None,
                    dom_content=dom_data,
                    regex_content=regex_data,
                )
            )
    return report


def compare_backends(
    note: NoteInput,
    config: Optional[CompilerConfig] = None,
    name: Optional[str] = None,
) -> EquivalenceReport:
    """Compile ``note`` with both backends and compare the decks."""
    dom_slides = parse_note_to_slides(note, config, SlideIdFactory(seed=0))
    regex_slides = parse_note_to_slides_simple(note, config, SlideIdFactory(seed=0))
    return compare_slides(name or note.id, dom_slides, regex_slides)


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def _preview(content: Optional[dict], max_len: int = 60) -> str:
    if content is None:
        return "(missing)"
    text = " | ".join(f"{k}={v}" for k, v in content.items() if k != "template")
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def format_report(report: EquivalenceReport, verbose: bool = False) -> str:
    """Format an equivalence report as human-readable text."""
    lines = []
    lines.append(f"\n{'=' * 70}")
    lines.append(f"{report.name}")
    lines.append(f"{'=' * 70}")

    if report.is_equivalent:
        lines.append(f"  EQUIVALENT - {len(report.dom_templates)} slides from both backends")
        if verbose:
            lines.append(f"  templates: {' > '.join(report.dom_templates)}")
        return "\n".join(lines)

    lines.append(
        f"  {len(report.mismatches)} mismatches "
        f"({report.template_mismatches} template) - "
        f"DOM {len(report.dom_templates)} slides, regex {len(report.regex_templates)} slides"
    )
    if not report.templates_match or verbose:
        lines.append(f"  DOM:   {' > '.join(report.dom_templates)}")
        lines.append(f"  regex: {' > '.join(report.regex_templates)}")

    for mm in report.mismatches:
        lines.append(
            f"\n  Slide {mm.position}: [{mm.severity}] "
            f"{mm.dom_template or '-'} vs {mm.regex_template or '-'}"
        )
        lines.append(f"    DOM:   {_preview(mm.dom_content)}")
        lines.append(f"    regex: {_preview(mm.regex_content)}")

    return "\n".join(lines)
