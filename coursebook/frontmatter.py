"""YAML frontmatter at the top of chapter contents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Protocol

import yaml


class FrontmatterError(ValueError):
    """Raised when a chapter's frontmatter cannot be parsed."""


class _ChapterLike(Protocol):
    content: str
    source_path: Any


@dataclass
class Frontmatter:
    """Course annotations found in a chapter's frontmatter."""

    minutes: int | None = None
    target_minutes: int | None = None
    course: str | None = None
    session: str | None = None


_FRONTMATTER = re.compile(
    r"\A\s*---[ \t]*\r?\n(?P<front>.*?)^---[ \t]*(?:\r?\n|\Z)(?P<body>.*)\Z",
    re.DOTALL | re.MULTILINE,
)


def _unsigned(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key!r} must be a non-negative integer, got {value!r}")
    return value


def _string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string, got {value!r}")
    return value


def _parse(text: str) -> Frontmatter:
    data = yaml.safe_load(text)
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise ValueError("frontmatter must be a mapping")
    return Frontmatter(
        minutes=_unsigned(data, "minutes"),
        target_minutes=_unsigned(data, "target_minutes"),
        course=_string(data, "course"),
        session=_string(data, "session"),
    )


def split_frontmatter(chapter: _ChapterLike) -> tuple[Frontmatter, str]:
    """Split a chapter's contents into its frontmatter and the remaining text."""
    match = _FRONTMATTER.match(chapter.content)
    if match is None:
        return Frontmatter(), chapter.content
    try:
        frontmatter = _parse(match.group("front"))
    except (yaml.YAMLError, ValueError) as exc:
        source = None if chapter.source_path is None else str(chapter.source_path)
        raise FrontmatterError(f"error parsing frontmatter in {source!r}") from exc
    return frontmatter, match.group("body")