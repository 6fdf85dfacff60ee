"""
Tests for the text and list splitters.
"""

import pytest

from notecompiler.chunking import split_list, split_text


class TestSplitText:
    """Test word-bounded text chunking."""

    def test_short_text_single_chunk(self):
        assert split_text("one two three") == ["one two three"]

    def test_exact_boundary(self):
        text = " ".join(["w"] * 150)
        assert len(split_text(text)) == 1

    def test_long_text_split_at_limit(self):
        """170 words split into 150 + 20."""
        words = [f"w{i}" for i in range(170)]
        chunks = split_text(" ".join(words))
        assert len(chunks) == 2
        assert len(chunks[0].split()) == 150
        assert len(chunks[1].split()) == 20
        assert chunks[1].split()[0] == "w150"

    def test_join_reproduces_words(self):
        text = "alpha  beta\ngamma\tdelta epsilon"
        chunks = split_text(text, max_words=2)
        assert " ".join(chunks).split() == text.split()

    def test_empty_and_whitespace(self):
        assert split_text("") == []
        assert split_text("   \n ") == []

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            split_text("a b", max_words=0)


class TestSplitList:
    """Test fixed-size list chunking."""

    def test_fourteen_items(self):
        chunks = split_list(list(range(14)))
        assert [len(c) for c in chunks] == [6, 6, 2]

    def test_preserves_order(self):
        items = ["a", "b", "c", "d", "e"]
        chunks = split_list(items, max_items=2)
        assert chunks == [["a", "b"], ["c", "d"], ["e"]]
        assert [i for c in chunks for i in c] == items

    def test_empty(self):
        assert split_list([]) == []

    def test_accepts_tuples(self):
        assert split_list(("x", "y", "z"), max_items=3) == [["x", "y", "z"]]

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            split_list([1], max_items=0)
