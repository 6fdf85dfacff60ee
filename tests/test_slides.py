"""
Tests for the slide grouping engine (presentation view).
"""

import datetime
import json

import pytest

from notecompiler import CompilerConfig, SlideIdFactory
from notecompiler.slides import (
    format_date,
    parse_note_to_slides,
    parse_note_to_slides_simple,
    split_attribution,
)

COMPILERS = {
    "dom": parse_note_to_slides,
    "regex": parse_note_to_slides_simple,
}


@pytest.fixture(params=sorted(COMPILERS))
def compile_slides(request):
    return COMPILERS[request.param]


def templates(slides):
    return [s.template for s in slides]


def words(n: int, prefix: str = "w") -> str:
    return " ".join(f"{prefix}{i}" for i in range(n))


class TestBracketing:
    """Every deck starts with a title slide and ends with an end slide."""

    def test_empty_note(self, compile_slides, make_note):
        slides = compile_slides(make_note(""))
        assert templates(slides) == ["title", "end"]

    def test_title_slide(self, compile_slides, make_note):
        note = make_note(
            "<h2>Topic</h2>",
            subtitle="A subtitle",
            date=datetime.date(2025, 3, 5),
            header_image="cover.png",
        )
        title = compile_slides(note)[0]
        assert title.template == "title"
        assert title.content.heading == "My Note"
        assert title.content.subheading == "A subtitle"
        assert title.content.author == "Ada"
        assert title.content.date == "March 5, 2025"
        assert title.content.image == "cover.png"

    def test_end_slide(self, compile_slides, make_note):
        end = compile_slides(make_note("<p>x</p>"))[-1]
        assert end.template == "end"
        assert end.content.url == "ada.goos.io"
        assert end.content.author == "Ada"

    def test_site_domain_configurable(self, compile_slides, make_note):
        config = CompilerConfig(site_domain="example.org")
        end = compile_slides(make_note("<p>x</p>"), config)[-1]
        assert end.content.url == "ada.example.org"


class TestSubtitle:
    """Short first paragraph becomes the title slide subheading."""

    def test_short_first_paragraph_used(self, compile_slides, make_note):
        slides = compile_slides(make_note("<p>A short intro.</p><p>Body text.</p>"))
        assert slides[0].content.subheading == "A short intro."
        assert templates(slides) == ["title", "content", "end"]
        assert slides[1].content.body == "Body text."

    def test_long_first_paragraph_not_truncated(self, compile_slides, make_note):
        slides = compile_slides(make_note(f"<p>{words(31)}</p>"))
        assert slides[0].content.subheading is None
        assert templates(slides) == ["title", "content", "end"]

    def test_subtitle_notes_move_to_title_slide(self, compile_slides, make_note):
        html = "<p>Short intro [note: greet the room]</p><p>Body text.</p>"
        slides = compile_slides(make_note(html))
        assert slides[0].content.subheading == "Short intro"
        assert slides[0].speaker_notes == "greet the room"
        assert [s.speaker_notes for s in slides[1:]] == [None, None]

    def test_explicit_subtitle_wins(self, compile_slides, make_note):
        slides = compile_slides(make_note("<p>Intro.</p>", subtitle="Given"))
        assert slides[0].content.subheading == "Given"
        assert templates(slides) == ["title", "content", "end"]


class TestGroups:
    """Test h2 group classification."""

    def test_list_chunking(self, compile_slides, make_note):
        items = "".join(f"<li>Item {i}</li>" for i in range(14))
        slides = compile_slides(make_note(f"<h2>Features</h2><ul>{items}</ul>"))
        lists = [s for s in slides if s.template == "list"]
        assert [len(s.content.items) for s in lists] == [6, 6, 2]
        assert [s.content.heading for s in lists] == [
            "Features",
            "Features (continued)",
            "Features (continued)",
        ]
        assert lists[0].content.items[0] == "Item 0"
        assert lists[2].content.items[-1] == "Item 13"

    def test_paragraph_chunking(self, compile_slides, make_note):
        slides = compile_slides(make_note(f"<h2>Long</h2><p>{words(170)}</p>"))
        content = [s for s in slides if s.template == "content"]
        assert len(content) == 2
        assert len(content[0].content.body.split()) == 150
        assert len(content[1].content.body.split()) == 20
        assert content[0].content.heading == "Long"
        assert content[1].content.heading == "Long (continued)"

    def test_list_wins_over_paragraphs(self, compile_slides, make_note):
        html = "<h2>Mixed</h2><p>Some words here.</p><ul><li>a</li><li>b</li></ul>"
        slides = compile_slides(make_note(html, subtitle="S"))
        assert templates(slides) == ["title", "content", "list", "end"]
        assert slides[1].content.heading is None
        assert slides[2].content.heading == "Mixed"
        assert slides[2].content.items == ("a", "b")

    def test_all_lists_concatenated(self, compile_slides, make_note):
        html = "<h2>Lists</h2><ul><li>a</li></ul><ol><li>b</li></ol>"
        slides = compile_slides(make_note(html))
        assert slides[1].content.items == ("a", "b")

    def test_image_text(self, compile_slides, make_note):
        html = '<h2>Shot</h2><p>A short caption.</p><img src="x.png" alt="X">'
        slides = compile_slides(make_note(html, subtitle="S"))
        assert templates(slides) == ["title", "image-text", "end"]
        content = slides[1].content
        assert content.heading == "Shot"
        assert content.image == "x.png"
        assert content.caption == "X"
        assert content.body == "A short caption."

    def test_image_with_long_text_falls_to_content(self, compile_slides, make_note):
        html = f'<h2>Shot</h2><p>{words(60)}</p><img src="x.png">'
        slides = compile_slides(make_note(html, subtitle="S"))
        assert templates(slides) == ["title", "content", "image", "end"]

    def test_heading_only_is_section(self, compile_slides, make_note):
        slides = compile_slides(make_note("<h2>Alone</h2><hr><h2>Next</h2>"))
        assert templates(slides) == ["title", "section", "section", "end"]
        assert slides[1].content.heading == "Alone"

    def test_group_stops_at_h1(self, compile_slides, make_note):
        html = "<h2>One</h2><p>Body one.</p><h1>Part</h1><p>Body two.</p>"
        slides = compile_slides(make_note(html, subtitle="S"))
        assert templates(slides) == ["title", "content", "section", "content", "end"]
        assert slides[3].content.heading is None

    def test_unused_quote_kept(self, compile_slides, make_note):
        html = "<h2>Mixed</h2><ul><li>a</li></ul><blockquote>Q.<br>— A</blockquote>"
        slides = compile_slides(make_note(html))
        assert templates(slides) == ["title", "list", "quote", "end"]

    def test_quote_before_list_keeps_source_order(self, compile_slides, make_note):
        html = "<h2>Plan</h2><blockquote>Ship it.</blockquote><ul><li>a</li><li>b</li></ul>"
        slides = compile_slides(make_note(html))
        assert templates(slides) == ["title", "quote", "list", "end"]
        assert slides[1].content.quote == "Ship it."
        assert slides[2].content.heading == "Plan"

    def test_unused_blocks_around_template(self, compile_slides, make_note):
        html = (
            "<h2>Mix</h2>"
            "<p>[stat: 2x: faster]</p>"
            "<ul><li>a</li></ul>"
            '<img src="i.png">'
            "<ol><li>b</li></ol>"
            "<blockquote>Done.</blockquote>"
        )
        slides = compile_slides(make_note(html))
        assert templates(slides) == ["title", "stat", "list", "image", "quote", "end"]
        assert slides[2].content.items == ("a", "b")

    def test_notes_merged_into_group_slide(self, compile_slides, make_note):
        html = "<h2>Intro [note: welcome]</h2><p>Body [note: pause]</p>"
        slides = compile_slides(make_note(html, subtitle="S"))
        assert slides[1].content.heading == "Intro"
        assert slides[1].speaker_notes == "welcome\npause"

    def test_notes_on_first_chunk_only(self, compile_slides, make_note):
        items = "".join(f"<li>{i}</li>" for i in range(8))
        slides = compile_slides(make_note(f"<h2>L [note: hi]</h2><ul>{items}</ul>"))
        assert slides[1].speaker_notes == "hi"
        assert slides[2].speaker_notes is None


class TestStandalone:
    """Test blocks outside any h2 group."""

    def test_h1_section(self, compile_slides, make_note):
        slides = compile_slides(make_note("<h1>Part One</h1>"))
        assert templates(slides) == ["title", "section", "end"]
        assert slides[1].content.heading == "Part One"

    def test_image(self, compile_slides, make_note):
        slides = compile_slides(make_note('<img src="full.png" alt="Full">'))
        assert templates(slides) == ["title", "image", "end"]
        assert slides[1].content.image == "full.png"
        assert slides[1].content.caption == "Full"

    def test_quote_attribution(self, compile_slides, make_note):
        slides = compile_slides(make_note("<blockquote>Great work.\n— Jane Doe</blockquote>"))
        quote = slides[1]
        assert quote.template == "quote"
        assert quote.content.quote == "Great work."
        assert quote.content.attribution == "Jane Doe"

    def test_stat_directive(self, compile_slides, make_note):
        slides = compile_slides(make_note("<p>[stat: 42%: conversion lift]</p>"))
        assert templates(slides) == ["title", "stat", "end"]
        assert slides[1].content.stat_value == "42%"
        assert slides[1].content.stat_label == "conversion lift"
        dumped = json.dumps([s.to_dict() for s in slides])
        assert "[stat" not in dumped

    def test_malformed_stat_is_text(self, compile_slides, make_note):
        slides = compile_slides(make_note("<p>We saw [stat: 42%] gains</p>", subtitle="S"))
        assert templates(slides) == ["title", "content", "end"]
        assert slides[1].content.body == "We saw [stat: 42%] gains"

    def test_standalone_list(self, compile_slides, make_note):
        slides = compile_slides(make_note("<ul><li>a</li><li>b</li></ul>"))
        assert templates(slides) == ["title", "list", "end"]
        assert slides[1].content.heading is None

    def test_h3_and_hr_emit_nothing(self, compile_slides, make_note):
        slides = compile_slides(make_note("<h3>Minor</h3><hr>"))
        assert templates(slides) == ["title", "end"]

    def test_source_order(self, compile_slides, make_note):
        html = (
            "<h1>A</h1>"
            "<blockquote>Quote</blockquote>"
            "<p>[stat: 1: one]</p>"
            '<img src="i.png">'
        )
        slides = compile_slides(make_note(html))
        assert templates(slides) == ["title", "section", "quote", "stat", "image", "end"]


class TestDeterminism:
    """Test reproducibility of compiled decks."""

    def test_seeded_compile_is_identical(self, compile_slides, make_note):
        note = make_note("<h2>A</h2><p>Text.</p><h2>B</h2><ul><li>x</li></ul>")
        first = compile_slides(note, None, SlideIdFactory(seed=3, clock=lambda: 0))
        second = compile_slides(note, None, SlideIdFactory(seed=3, clock=lambda: 0))
        assert first == second

    def test_slide_ids_unique(self, compile_slides, make_note):
        slides = compile_slides(make_note("<h1>A</h1><h1>B</h1><h1>C</h1>"))
        assert len({s.id for s in slides}) == len(slides)

    def test_does_not_mutate_input(self, compile_slides, make_note):
        html = "<p>Keep [note: me]</p>"
        note = make_note(html)
        compile_slides(note)
        assert note.content == html


class TestWireForm:
    def test_to_dict(self, seeded_ids, make_note):
        slides = parse_note_to_slides(make_note("<p>[stat: 5: wins]</p>"), id_factory=seeded_ids)
        stat = slides[1].to_dict()
        assert stat["template"] == "stat"
        assert stat["content"] == {"stat_value": "5", "stat_label": "wins"}
        assert "speakerNotes" not in stat
        assert stat["id"].startswith("slide-1700000000000-")


class TestHelpers:
    def test_split_attribution_hyphen(self):
        assert split_attribution("Line one\nLine two\n- Someone") == ("Line one\nLine two", "Someone")

    def test_split_attribution_none(self):
        assert split_attribution("Just a quote") == ("Just a quote", None)

    def test_split_attribution_last_dash_line(self):
        assert split_attribution("— Early\nMiddle\n— Late") == ("— Early\nMiddle", "Late")

    def test_format_date(self):
        assert format_date(datetime.date(2024, 12, 31)) == "December 31, 2024"
        assert format_date(None) is None
