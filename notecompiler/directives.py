"""
Inline bracket directives embedded in authored text.

    [note: text]            speaker notes, shown on the presenter surface only
    [stat: VALUE: LABEL]    a statistic callout, promoted to its own block

Directives are removed from the visible text once captured. Anything that
does not match the exact syntax (``[stat: 42%]`` has no label) is left alone
and stays ordinary text.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .text import collapse_whitespace, normalize_text

NOTE_RE = re.compile(r"\[note:\s*([^\]]+?)\s*\]")
STAT_RE = re.compile(r"\[stat:\s*([^\]]+?)\s*:\s*([^\]]+?)\s*\]")


@dataclass(frozen=True)
class Directives:
    text: str
    notes: tuple[str, ...] = ()
    stats: tuple[tuple[str, str], ...] = ()

    @property
    def speaker_notes(self) -> Optional[str]:
        return "\n".join(self.notes) if self.notes else None


def extract_directives(text: str) -> Directives:
    """Capture ``[note: ...]`` and ``[stat: ...: ...]`` and strip them from ``text``."""
    notes = tuple(collapse_whitespace(m.group(1)) for m in NOTE_RE.finditer(text))
    text = NOTE_RE.sub(" ", text)
    stats = tuple(
        (collapse_whitespace(m.group(1)), collapse_whitespace(m.group(2)))
        for m in STAT_RE.finditer(text)
    )
    text = STAT_RE.sub(" ", text)
    return Directives(text=normalize_text(text), notes=notes, stats=stats)


def strip_directives(text: str) -> str:
    return extract_directives(text).text
