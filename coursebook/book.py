"""In-memory representation of a book: chapters, separators and part titles."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Iterator, Union
from urllib.parse import unquote


@dataclass
class Chapter:
    """A single chapter of the book, possibly holding nested items."""

    name: str
    content: str = ""
    number: list[int] | None = None
    sub_items: list[BookItem] = field(default_factory=list)
    path: PurePosixPath | None = None
    source_path: PurePosixPath | None = None
    parent_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Separator:
    """A horizontal separator between chapters."""


@dataclass
class PartTitle:
    """A title introducing a new part of the book."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def _walk(items: list[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk(item.sub_items)


def _for_each(items: list[BookItem], func: Callable[[Chapter], Any]) -> None:
    for item in items:
        if isinstance(item, Chapter):
            _for_each(item.sub_items, func)
            func(item)


@dataclass
class Book:
    """A book: an ordered list of top-level items."""

    sections: list[BookItem] = field(default_factory=list)

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter, parents before their sub-chapters."""
        yield from _walk(self.sections)

    def for_each_chapter(self, func: Callable[[Chapter], Any]) -> None:
        """Call ``func`` on every chapter, sub-chapters before their parent."""
        _for_each(self.sections, func)


def _path_or_none(value: Any) -> PurePosixPath | None:
    return None if value is None else PurePosixPath(value)


def _path_to_str(value: PurePosixPath | None) -> str | None:
    return None if value is None else str(value)


def _item_from_json(data: Any) -> BookItem:
    if data == "Separator":
        return Separator()
    if isinstance(data, dict) and len(data) == 1:
        ((kind, value),) = data.items()
        if kind == "Chapter":
            return chapter_from_dict(value)
        if kind == "PartTitle":
            return PartTitle(str(value))
    raise ValueError(f"unrecognised book item: {data!r}")


def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": chapter_to_dict(item)}
    if isinstance(item, Separator):
        return "Separator"
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    raise TypeError(f"not a book item: {item!r}")


def chapter_from_dict(data: dict[str, Any]) -> Chapter:
    """Build a chapter from its JSON object form."""
    try:
        name = data["name"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"chapter has no name: {data!r}") from exc
    number = data.get("number")
    return Chapter(
        name=name,
        content=data.get("content", ""),
        number=None if number is None else [int(n) for n in number],
        sub_items=[_item_from_json(item) for item in data.get("sub_items", [])],
        path=_path_or_none(data.get("path")),
        source_path=_path_or_none(data.get("source_path")),
        parent_names=list(data.get("parent_names", [])),
    )


def chapter_to_dict(chapter: Chapter) -> dict[str, Any]:
    """Return the JSON object form of a chapter."""
    return {
        "name": chapter.name,
        "content": chapter.content,
        "number": None if chapter.number is None else list(chapter.number),
        "sub_items": [_item_to_json(item) for item in chapter.sub_items],
        "path": _path_to_str(chapter.path),
        "source_path": _path_to_str(chapter.source_path),
        "parent_names": list(chapter.parent_names),
    }


def book_from_dict(data: dict[str, Any]) -> Book:
    """Build a book from its JSON object form."""
    if not isinstance(data, dict) or "sections" not in data:
        raise ValueError("book data must be an object with 'sections'")
    return Book([_item_from_json(item) for item in data["sections"]])


def book_to_dict(book: Book) -> dict[str, Any]:
    """Return the JSON object form of a book."""
    return {
        "sections": [_item_to_json(item) for item in book.sections],
        "__non_exhaustive": None,
    }


_SEPARATOR = re.compile(r"^-{3,}\s*$")
_HEADING = re.compile(r"^#\s+(?P<title>.+?)\s*#*\s*$")
_LIST_ITEM = re.compile(
    r"^(?P<indent>[ \t]*)[-*+]\s+\[(?P<name>[^\]]*)\]\((?P<link>[^)]*)\)"
)
_PLAIN_LINK = re.compile(r"^\[(?P<name>[^\]]*)\]\((?P<link>[^)]*)\)")


def _make_chapter(
    name: str,
    link: str,
    number: list[int] | None,
    parent_names: list[str],
    src_dir: Path,
) -> Chapter:
    link = unquote(link.strip())
    if not link:
        return Chapter(name=name, number=number, parent_names=parent_names)
    path = PurePosixPath(link)
    content = (src_dir / link).read_text(encoding="utf-8")
    return Chapter(
        name=name,
        content=content,
        number=number,
        path=path,
        source_path=path,
        parent_names=parent_names,
    )


def _parse_summary(text: str, src_dir: Path) -> list[BookItem]:
    sections: list[BookItem] = []
    stack: list[tuple[int, Chapter]] = []
    top_number = 0
    title_seen = False
    item_seen = False

    for line in text.splitlines():
        line = line.rstrip()
        if not line.strip():
            continue
        if _SEPARATOR.match(line):
            sections.append(Separator())
            stack.clear()
            continue
        heading = _HEADING.match(line)
        if heading:
            if not title_seen and not item_seen:
                title_seen = True
            else:
                sections.append(PartTitle(heading.group("title")))
            stack.clear()
            continue
        item = _LIST_ITEM.match(line)
        if item:
            indent = len(item.group("indent").expandtabs(4))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            if stack:
                parent = stack[-1][1]
                number = (
                    None
                    if parent.number is None
                    else parent.number + [len(parent.sub_items) + 1]
                )
                chapter = _make_chapter(
                    item.group("name"),
                    item.group("link"),
                    number,
                    parent.parent_names + [parent.name],
                    src_dir,
                )
                parent.sub_items.append(chapter)
            else:
                top_number += 1
                chapter = _make_chapter(
                    item.group("name"), item.group("link"), [top_number], [], src_dir
                )
                sections.append(chapter)
            stack.append((indent, chapter))
            item_seen = True
            continue
        plain = _PLAIN_LINK.match(line)
        if plain:
            sections.append(
                _make_chapter(plain.group("name"), plain.group("link"), None, [], src_dir)
            )
            stack.clear()
            item_seen = True
    return sections


def load_book(root: str | os.PathLike[str]) -> Book:
    """Load the book whose sources live in ``<root>/src``, ordered by SUMMARY.md."""
    src_dir = Path(root) / "src"
    summary = (src_dir / "SUMMARY.md").read_text(encoding="utf-8")
    return Book(_parse_summary(summary, src_dir))