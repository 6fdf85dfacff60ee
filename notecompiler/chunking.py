"""
Deterministic splitters used by the slide grouping engine.

Both helpers are pure and order-preserving: joining the chunks back gives
the input (modulo whitespace for ``split_text``).
"""

from typing import Sequence, TypeVar

T = TypeVar("T")


def split_text(text: str, max_words: int = 150) -> list[str]:
    """Split text on whitespace into groups of at most ``max_words`` words.

    >>> split_text("a b c", max_words=2)
    ['a b', 'c']
    """
    if max_words < 1:
        raise ValueError("max_words must be positive")
    words = text.split()
    return [" ".join(words[i : i + max_words]) for i in range(0, len(words), max_words)]


def split_list(items: Sequence[T], max_items: int = 6) -> list[list[T]]:
    """Slice ``items`` into consecutive groups of at most ``max_items``."""
    if max_items < 1:
        raise ValueError("max_items must be positive")
    return [list(items[i : i + max_items]) for i in range(0, len(items), max_items)]
