"""Dump the full source text of every slide, in course order."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence

from .book import load_book
from .course import Courses, extract_structure


def render_content(courses: Courses, src_dir: str | os.PathLike[str]) -> str:
    """Return every slide's source, headed by its course, session and segment."""
    src = Path(src_dir)
    parts: list[str] = []
    for course in courses:
        parts.append(f"# COURSE: {course.name}\n")
        for session in course:
            parts.append(f"# SESSION: {session.name}\n")
            for segment in session:
                parts.append(f"# SEGMENT: {segment.name}\n")
                for slide in segment:
                    parts.append(f"# SLIDE: {slide.name}\n")
                    for path in slide.source_paths:
                        parts.append((src / path).read_text(encoding="utf-8") + "\n")
    return "".join(parts)


def main(argv: Sequence[str] | None = None) -> int:
    """Print the content of the book in the current directory."""
    parser = argparse.ArgumentParser(
        prog="course-content", description="Print all course content in order"
    )
    parser.parse_args(argv)
    courses, _ = extract_structure(load_book("."))
    sys.stdout.write(render_content(courses, "src"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())