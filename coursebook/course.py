"""The course as a hierarchy: courses, sessions, segments and slides.

The structure is read from the order of chapters in the book and from the
frontmatter of each chapter. A top-level chapter with a ``course`` property
starts a new course, one with a ``session`` property starts a new session.
Each top-level chapter within a session becomes a segment whose first slide
is the chapter itself; its sub-chapters become further slides, and their own
sub-chapters are folded into those slides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterator

from .book import Book, Chapter
from .frontmatter import Frontmatter, split_frontmatter
from .markdown import Table, duration

BREAK_DURATION = 10
"""Minutes of break between segments of a session."""


class CourseStructureError(ValueError):
    """Raised when the book's frontmatter does not describe a valid course."""


def _describe_path(path: PurePosixPath | None) -> str:
    return "None" if path is None else repr(str(path))


def _take_frontmatter(chapter: Chapter) -> Frontmatter:
    frontmatter, content = split_frontmatter(chapter)
    chapter.content = content
    return frontmatter


@dataclass
class Slide:
    """A single topic, possibly spread over several chapters."""

    name: str
    minutes: int = 0
    source_paths: list[PurePosixPath] = field(default_factory=list)

    @classmethod
    def _from_chapter(cls, frontmatter: Frontmatter, chapter: Chapter) -> Slide:
        slide = cls(chapter.name)
        slide._add_frontmatter(frontmatter)
        slide._add_source_path(chapter.source_path)
        return slide

    def _add_frontmatter(self, frontmatter: Frontmatter) -> None:
        self.minutes += frontmatter.minutes or 0

    def _add_source_path(self, source_path: PurePosixPath | None) -> None:
        if source_path is not None:
            self.source_paths.append(source_path)

    def _add_sub_chapters(self, chapter: Chapter) -> None:
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            frontmatter = _take_frontmatter(sub)
            if frontmatter.course is not None or frontmatter.session is not None:
                raise CourseStructureError(
                    f"{_describe_path(sub.path)}: sub-slides may not have "
                    "'course' or 'session' set"
                )
            self._add_frontmatter(frontmatter)
            self._add_source_path(sub.source_path)
            self._add_sub_chapters(sub)

    def is_sub_chapter(self, chapter: Chapter) -> bool:
        """Whether ``chapter`` is one of this slide's sub-chapters."""
        first = self.source_paths[0] if self.source_paths else None
        return chapter.source_path != first


@dataclass
class Segment:
    """A collection of slides with a related theme."""

    name: str
    slides: list[Slide] = field(default_factory=list)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    def _add_slide(
        self, frontmatter: Frontmatter, chapter: Chapter, recurse: bool
    ) -> None:
        slide = Slide._from_chapter(frontmatter, chapter)
        if recurse:
            slide._add_sub_chapters(chapter)
        self.slides.append(slide)

    def minutes(self) -> int:
        """Total minutes of the slides in this segment."""
        return sum(slide.minutes for slide in self)

    def outline(self) -> str:
        """A Markdown outline of the slides in this segment."""
        table = Table(["Slide", "Duration"])
        for slide in self:
            if slide.minutes == 0:
                continue
            table.add_row([slide.name, duration(slide.minutes)])
        return (
            f"This segment should take about {duration(self.minutes())}. "
            f"It contains:\n\n{table}"
        )


@dataclass
class Session:
    """A block of instructional time made of segments."""

    name: str
    segments: list[Segment] = field(default_factory=list)
    _target_minutes: int = field(default=0, init=False, repr=False)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def _add_segment(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        segment = Segment(chapter.name)
        segment._add_slide(frontmatter, chapter, recurse=False)
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            segment._add_slide(_take_frontmatter(sub), sub, recurse=True)
        self.segments.append(segment)

    def _segment_table(self) -> Table:
        table = Table(["Segment", "Duration"])
        for segment in self:
            if segment.minutes() == 0:
                continue
            table.add_row([segment.name, duration(segment.minutes())])
        return table

    def outline(self) -> str:
        """A Markdown outline of the segments in this session."""
        return (
            f"Including {BREAK_DURATION} minute breaks, this session should take "
            f"about {duration(self.minutes())}. It contains:\n\n"
            f"{self._segment_table()}"
        )

    def minutes(self) -> int:
        """Total minutes of this session, including breaks between segments."""
        timed = [segment.minutes() for segment in self if segment.minutes() > 0]
        if not timed:
            return 0
        return sum(timed) + (len(timed) - 1) * BREAK_DURATION

    def target_minutes(self) -> int:
        """The session's target duration, or its actual duration if none is set."""
        return self._target_minutes if self._target_minutes > 0 else self.minutes()


@dataclass
class Course:
    """The level of content at which students enroll."""

    name: str
    sessions: list[Session] = field(default_factory=list)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    def _session(self, name: str) -> Session:
        for session in self.sessions:
            if session.name == name:
                return session
        session = Session(name)
        self.sessions.append(session)
        return session

    def minutes(self) -> int:
        """Sum of session durations, including breaks within sessions."""
        return sum(session.minutes() for session in self)

    def target_minutes(self) -> int:
        """Sum of session target durations."""
        return sum(session.target_minutes() for session in self)

    def schedule(self) -> str:
        """A Markdown schedule of this course."""
        parts = ["Course schedule:\n"]
        for session in self:
            parts.append(
                f" * {session.name} ({duration(session.minutes())}, "
                "including breaks)\n\n"
            )
            parts.append(f"{session._segment_table()}\n\n")
        return "".join(parts)


@dataclass
class Courses:
    """All courses found in a book."""

    courses: list[Course] = field(default_factory=list)

    def __iter__(self) -> Iterator[Course]:
        return iter(self.courses)

    def _course(self, name: str) -> Course:
        found = self.find_course(name)
        if found is not None:
            return found
        course = Course(name)
        self.courses.append(course)
        return course

    def find_course(self, name: str) -> Course | None:
        """Return the course with this name, if there is one."""
        return next((course for course in self if course.name == name), None)

    def find_slide(
        self, chapter: Chapter
    ) -> tuple[Course, Session, Segment, Slide] | None:
        """Return the course, session, segment and slide holding ``chapter``."""
        source_path = chapter.source_path
        if source_path is None:
            return None
        for course in self:
            for session in course:
                for segment in session:
                    for slide in segment:
                        if source_path in slide.source_paths:
                            return course, session, segment, slide
        return None


def extract_structure(book: Book) -> tuple[Courses, Book]:
    """Read the course structure from ``book``, stripping chapter frontmatter."""
    courses = Courses()
    course_name: str | None = None
    session_name: str | None = None

    for item in book.sections:
        if not isinstance(item, Chapter):
            continue
        frontmatter = _take_frontmatter(item)

        if frontmatter.course is not None:
            session_name = None
            course_name = None if frontmatter.course == "none" else frontmatter.course

        if frontmatter.session is not None:
            session_name = frontmatter.session

        if course_name is not None and session_name is None:
            raise CourseStructureError(
                f"{_describe_path(item.path)}: 'session' must appear in "
                "frontmatter when 'course' appears"
            )

        if course_name is not None and session_name is not None:
            session = courses._course(course_name)._session(session_name)
            session._target_minutes += frontmatter.target_minutes or 0
            session._add_segment(frontmatter, item)

    return courses, book