"""
Pytest configuration for note compiler tests.

Puts the project root on sys.path and provides common fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from notecompiler import NoteInput, SlideIdFactory

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def make_note():
    """Factory for NoteInput objects with sensible defaults."""

    def _make(content: str, **overrides) -> NoteInput:
        fields = {
            "id": "note-1",
            "title": "My Note",
            "content": content,
            "author": "Ada",
            "username": "ada",
        }
        fields.update(overrides)
        return NoteInput(**fields)

    return _make


@pytest.fixture
def seeded_ids():
    """Reproducible slide ids with a frozen clock."""
    return SlideIdFactory(seed=42, clock=lambda: 1700000000.0)
