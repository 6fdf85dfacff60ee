"""
Identifier generation.

TOC anchors are stable slugs (same heading text, same id) made unique within
one compile call. Block ids come from a per-call sequence. Slide ids are
not stable across reparses; pass a seeded SlideIdFactory when
reproducible ids are needed.
"""

import random
import re
import string
import time
from typing import Callable, Optional

_NON_WORD_RE = re.compile(r"[^\w\s-]", re.ASCII)
_WS_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")

_BASE36 = string.digits + string.ascii_lowercase


def slugify(text: str) -> str:
    """Lowercase, drop non-word characters, hyphenate whitespace."""
    slug = text.lower().strip()
    slug = _NON_WORD_RE.sub("", slug)
    slug = _WS_RE.sub("-", slug)
    return _HYPHENS_RE.sub("-", slug)


class SlugRegistry:
    """Hands out unique slugs for one compile call (``results``, ``results-1``, ...)."""

    def __init__(self):
        self._used: set[str] = set()

    def allocate(self, text: str) -> str:
        slug = slugify(text) or "section"
        candidate = slug
        counter = 1
        while candidate in self._used:
            candidate = f"{slug}-{counter}"
            counter += 1
        self._used.add(candidate)
        return candidate


class BlockIdSequence:
    """Sequential ``block-N`` ids."""

    def __init__(self, prefix: str = "block"):
        self.prefix = prefix
        self._next = 0

    def __call__(self) -> str:
        block_id = f"{self.prefix}-{self._next}"
        self._next += 1
        return block_id


class SlideIdFactory:
    """``slide-<millis>-<token>`` ids from an injectable clock and RNG."""

    def __init__(
        self,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._rng = random.Random(seed)
        self._clock = clock

    def __call__(self) -> str:
        token = "".join(self._rng.choice(_BASE36) for _ in range(9))
        return f"slide-{int(self._clock() * 1000)}-{token}"
