#!/usr/bin/env python3
"""
note2json.py - Compile a note's HTML body into its JSON wire form.

Runs one of the four compilers over an HTML file and writes the resulting
case-study structure or slide deck as JSON.

Usage:
    python tools/note2json.py <input.html> [output.json] [--mode slides]

Modes:
- slides             DOM slide compiler (default)
- slides-simple      regex slide compiler (no DOM)
- case-study         DOM case-study compiler
- case-study-simple  regex hero/TOC fallback

If output path is not specified, the JSON is written to stdout.
"""

import argparse
import datetime
import json
import logging
import sys
from pathlib import Path

from notecompiler import (
    CaseStudyParser,
    ConfigError,
    NoteInput,
    SlideIdFactory,
    load_config,
    parse_case_study_content_simple,
    parse_note_to_slides,
    parse_note_to_slides_simple,
)

MODES = ("slides", "slides-simple", "case-study", "case-study-simple")


def _note_from_args(args, input_path: Path, html_content: str) -> NoteInput:
    return NoteInput(
        id=input_path.stem,
        title=args.title or input_path.stem.replace("-", " ").replace("_", " ").title(),
        content=html_content,
        author=args.author,
        username=args.username,
        subtitle=args.subtitle,
        date=datetime.date.fromisoformat(args.date) if args.date else None,
        header_image=args.header_image,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Compile note HTML into case-study or slide JSON."
    )
    parser.add_argument("input", help="Input HTML file path")
    parser.add_argument(
        "output", nargs="?", help="Output JSON file path (default: stdout)"
    )
    parser.add_argument("--mode", choices=MODES, default="slides", help="Compiler to run")
    parser.add_argument("--title", help="Note title (default: derived from file name)")
    parser.add_argument("--subtitle", help="Explicit subtitle for the title slide")
    parser.add_argument("--author", default="", help="Author display name")
    parser.add_argument("--username", default="", help="Author username for the end-slide URL")
    parser.add_argument("--date", help="Publication date, YYYY-MM-DD")
    parser.add_argument("--header-image", help="Header image URL")
    parser.add_argument("--config", help="JSON file of compiler setting overrides")
    parser.add_argument("--seed", type=int, help="Seed for reproducible slide ids")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Converting: {input_path} ({args.mode})", file=sys.stderr)

    html_content = input_path.read_text(encoding="utf-8")
    warnings = []

    if args.mode == "case-study":
        converter = CaseStudyParser(html_content, args.header_image, config)
        data = converter.parse().to_dict()
        warnings = converter.warnings
        summary = f"{len(data.get('contentBlocks', []))} blocks"
    elif args.mode == "case-study-simple":
        data = parse_case_study_content_simple(html_content, args.header_image).to_dict()
        summary = f"{len(data.get('tableOfContents', []))} TOC entries"
    else:
        note = _note_from_args(args, input_path, html_content)
        compile_slides = parse_note_to_slides if args.mode == "slides" else parse_note_to_slides_simple
        slides = compile_slides(note, config, SlideIdFactory(seed=args.seed))
        data = [slide.to_dict() for slide in slides]
        summary = f"{len(slides)} slides"

    output = json.dumps(data, indent=2, ensure_ascii=False)
    if args.output:
        output_path = Path(args.output)
        output_path.write_text(output + "\n", encoding="utf-8")
        print(f"Output: {output_path}", file=sys.stderr)
    else:
        print(output)

    if warnings:
        print(f"\nWarnings ({len(warnings)}):", file=sys.stderr)
        for w in warnings:
            print(f"  - {w}", file=sys.stderr)

    print(f"Done! ({summary})", file=sys.stderr)


if __name__ == "__main__":
    main()
