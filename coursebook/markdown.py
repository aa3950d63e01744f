"""Small Markdown helpers: relative links, durations and tables."""

from __future__ import annotations

import os
from pathlib import PurePosixPath
from typing import Iterable, Sequence


def relative_link(
    doc_path: str | os.PathLike[str], target_path: str | os.PathLike[str]
) -> str:
    """Return a link to ``target_path`` relative to the document at ``doc_path``."""
    doc = PurePosixPath(os.fspath(doc_path))
    target = PurePosixPath(os.fspath(target_path))

    dotdot = -1
    for parent in (doc, *doc.parents):
        prefix = () if parent == PurePosixPath(".") else parent.parts
        if target.parts[: len(prefix)] == prefix:
            break
        dotdot += 1
    if dotdot > 0:
        return "../" * dotdot + str(target)
    return f"./{target}"


def duration(minutes: int) -> str:
    """Describe a number of minutes, rounding anything over 5 up to a multiple of 5."""
    if minutes < 0:
        raise ValueError("duration must not be negative")
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5

    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return "1 minute" if minutes == 1 else f"{minutes} minutes"
    hour_text = "1 hour" if hours == 1 else f"{hours} hours"
    if minutes == 0:
        return hour_text
    return f"{hour_text} and {minutes} minutes"


class Table:
    """A GitHub-flavoured Markdown table with a fixed number of columns."""

    def __init__(self, header: Sequence[str]) -> None:
        self.header = list(header)
        self.rows: list[list[str]] = []

    def add_row(self, row: Sequence[str]) -> None:
        """Append a row, which must have as many cells as the header."""
        if len(row) != len(self.header):
            raise ValueError(
                f"row has {len(row)} cells, table has {len(self.header)} columns"
            )
        self.rows.append(list(row))

    @staticmethod
    def _format_row(cells: Iterable[str]) -> str:
        return "|" + "".join(f" {cell} |" for cell in cells) + "\n"

    def __str__(self) -> str:
        lines = [
            self._format_row(self.header),
            self._format_row("-" for _ in self.header),
        ]
        lines.extend(self._format_row(row) for row in self.rows)
        return "".join(lines)