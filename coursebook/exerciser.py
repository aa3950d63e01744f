"""Extract exercise starter code from Markdown into files.

A code block preceded by an HTML comment of the form ``<!-- File name -->``
is written to ``name`` under the output directory. Code blocks without such
a comment are ignored, as are comments not followed by a code block.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Any, Sequence

from markdown_it import MarkdownIt

from .book import Book, book_from_dict

FILENAME_START = "<!-- File "
FILENAME_END = " -->"

logger = logging.getLogger(__name__)

_MARKDOWN = MarkdownIt("commonmark")


def _filename_from_html(line: str) -> str | None:
    html = line.strip()
    if (
        html.startswith(FILENAME_START)
        and html.endswith(FILENAME_END)
        and len(html) >= len(FILENAME_START) + len(FILENAME_END)
    ):
        return html[len(FILENAME_START) : len(html) - len(FILENAME_END)]
    return None


def process(output_directory: str | os.PathLike[str], input_contents: str) -> None:
    """Write every marked code block in ``input_contents`` under ``output_directory``."""
    output = Path(output_directory)
    next_filename: str | None = None
    for token in _MARKDOWN.parse(input_contents):
        if token.type == "html_block":
            for line in token.content.splitlines():
                filename = _filename_from_html(line)
                if filename is not None:
                    next_filename = filename
                    logger.info("Next file: %r", next_filename)
        elif token.type in ("fence", "code_block"):
            logger.info("Code block %r", token.info)
            if next_filename is None:
                continue
            target = output / next_filename
            logger.info("Opening %s", target)
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("w", encoding="utf-8", newline="") as handle:
                handle.write(token.content)
            next_filename = None


def process_all(book: Book, output_directory: str | os.PathLike[str]) -> None:
    """Extract exercises from every chapter, one subdirectory per chapter file."""
    output = Path(output_directory)
    for chapter in book.iter_chapters():
        logger.debug("Chapter %s / %s", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        stem = chapter.path.stem
        if not stem:
            raise ValueError(f"Chapter {str(chapter.path)!r} has no file stem")
        process(output / stem, chapter.content)


def _output_directory(context: Any) -> Path:
    config = context.get("config") if isinstance(context, dict) else None
    outputs = config.get("output") if isinstance(config, dict) else None
    renderer = outputs.get("exerciser") if isinstance(outputs, dict) else None
    if not isinstance(renderer, dict):
        raise ValueError("Missing output.exerciser configuration")
    if "output-directory" not in renderer:
        raise ValueError(
            "Missing output.exerciser.output-directory configuration value"
        )
    value = renderer["output-directory"]
    if not isinstance(value, str):
        raise ValueError("Expected a string for output.exerciser.output-directory")
    return Path(value)


def _render(input_text: str) -> None:
    try:
        context = json.loads(input_text)
    except ValueError as exc:
        raise ValueError(f"Parsing stdin: {exc}") from exc
    output_directory = _output_directory(context)
    book = book_from_dict(context.get("book"))

    shutil.rmtree(output_directory, ignore_errors=True)
    try:
        output_directory.mkdir()
    except OSError as exc:
        raise OSError(
            f"Failed to create output directory {str(output_directory)!r}: {exc}"
        ) from exc

    process_all(book, output_directory)


def main(argv: Sequence[str] | None = None) -> int:
    """Run as a book renderer, reading the render context from standard input."""
    parser = argparse.ArgumentParser(
        prog="mdbook-exerciser",
        description="Extract starter code for exercises from Markdown files",
    )
    parser.parse_args(argv)
    logging.basicConfig()
    try:
        _render(sys.stdin.read())
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())