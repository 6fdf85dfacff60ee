#!/usr/bin/env python3
"""
Slide Backend Equivalence Verifier

Compiles every note HTML file with both slide backends (BeautifulSoup and
regex) and checks that they produce the same deck. A template mismatch means
the page reflows when the client hydrates over the server-rendered deck.

Usage:
    python tools/deck_verify.py path/to/note.html
    python tools/deck_verify.py path/to/directory/  # checks all .html files
"""

import sys
from pathlib import Path

from notecompiler import NoteInput, compare_backends, format_report


def verify_file(path: Path):
    note = NoteInput(
        id=path.stem,
        title=path.stem,
        content=path.read_text(encoding="utf-8"),
        author="",
        username="",
    )
    return compare_backends(note, name=str(path))


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python tools/deck_verify.py <file_or_dir> [--verbose]")
        sys.exit(1)

    path = Path(sys.argv[1])
    verbose = "--verbose" in sys.argv

    if path.is_dir():
        html_files = sorted(path.glob("*.html"))
    else:
        html_files = [path]

    if not html_files or not all(f.exists() for f in html_files):
        print(f"No .html files found at {path}")
        sys.exit(1)

    total_mismatches = 0
    total_slides = 0
    total_equivalent = 0

    for html_file in html_files:
        report = verify_file(html_file)
        print(format_report(report, verbose))
        total_mismatches += len(report.mismatches)
        total_slides += len(report.dom_templates)
        total_equivalent += report.is_equivalent

    print(f"\n{'=' * 70}")
    print(
        f"SUMMARY: {total_mismatches} mismatches across {total_slides} slides "
        f"in {len(html_files)} files"
    )
    print(f"  Equivalent files: {total_equivalent}/{len(html_files)}")
    print(f"{'=' * 70}")

    if total_equivalent < len(html_files):
        sys.exit(1)


if __name__ == "__main__":
    main()
