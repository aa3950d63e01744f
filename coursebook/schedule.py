"""Summaries of the course schedule, for reviewing course timing."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .book import load_book
from .course import Courses, extract_structure
from .markdown import duration


def timediff(actual: int, target: int, slop: int) -> str:
    """Describe ``actual`` minutes, noting if it is off ``target`` by more than ``slop``."""
    if actual > target + slop:
        return (
            f"{duration(actual)} (\u23f0 *{duration(actual - target)} too long*)"
        )
    if actual + slop < target:
        return f"{duration(actual)}: ({duration(target - actual)} short)"
    return duration(actual)


def _render(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def session_summary(courses: Courses) -> str:
    """A Markdown summary of every session and its segments."""
    lines: list[str] = []
    for course in courses:
        if course.target_minutes() == 0:
            break
        for session in course:
            lines.append(f"### {course.name} // {session.name}")
            lines.append(
                f"_{timediff(session.minutes(), session.target_minutes(), 15)}_"
            )
            lines.append("")
            lines.extend(
                f"* {segment.name} - _{duration(segment.minutes())}_"
                for segment in session
            )
            lines.append("")
    return _render(lines)


def pr_summary(courses: Courses) -> str:
    """A Markdown summary of course and session timing for a pull request."""
    lines = [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]
    for course in courses:
        if course.target_minutes() == 0:
            break
        lines.append(f"### {course.name}")
        lines.append(f"_{timediff(course.minutes(), course.target_minutes(), 15)}_")
        lines.extend(
            f"* {session.name} - "
            f"_{timediff(session.minutes(), session.target_minutes(), 5)}_"
            for session in course
        )
    return _render(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Print a schedule summary of the book in the current directory."""
    parser = argparse.ArgumentParser(
        prog="course-schedule", description="Summarise the course schedule"
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("sessions", help="Show session summary (default)")
    commands.add_parser("segments", help="Show segment summary")
    commands.add_parser("pr", help="Show summary for a PR")
    args = parser.parse_args(argv)

    courses, _ = extract_structure(load_book("."))

    if args.command == "segments":
        print("course-schedule: no segment summary is available", file=sys.stderr)
        return 1
    if args.command == "pr":
        sys.stdout.write(pr_summary(courses))
    else:
        sys.stdout.write(session_summary(courses))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())