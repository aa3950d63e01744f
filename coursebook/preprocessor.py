"""Book preprocessor that adds course structure information to chapters.

It reads a ``[context, book]`` JSON array on standard input and writes the
processed book as JSON on standard output.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from .book import Book, Chapter, book_from_dict, book_to_dict
from .course import Courses, extract_structure
from .replacements import replace
from .timing_info import insert_timing_info


def _parse_input(input_text: str) -> Book:
    data = json.loads(input_text)
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("preprocessor input must be a [context, book] array")
    _context, book_data = data
    return book_from_dict(book_data)


def _process_chapter(courses: Courses, chapter: Chapter) -> None:
    found = courses.find_slide(chapter)
    if found is None:
        # Outside of a course, only directives are expanded.
        replace(courses, None, None, None, chapter)
        return
    course, session, segment, slide = found
    insert_timing_info(slide, chapter)
    replace(courses, course, session, segment, chapter)


def preprocess(input_text: str) -> str:
    """Process the preprocessor input and return the resulting book as JSON."""
    book = _parse_input(input_text)
    courses, book = extract_structure(book)
    book.for_each_chapter(lambda chapter: _process_chapter(courses, chapter))
    return json.dumps(book_to_dict(book), ensure_ascii=False)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the preprocessor; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="mdbook-course", description="Book preprocessor for course material"
    )
    commands = parser.add_subparsers(dest="command")
    supports = commands.add_parser("supports", help="Check renderer support")
    supports.add_argument("renderer")
    args = parser.parse_args(argv)

    if args.command == "supports":
        # Every renderer is supported.
        return 0

    try:
        output = preprocess(sys.stdin.read())
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())