from pathlib import PurePosixPath

import pytest

from coursebook.book import Book, Chapter, PartTitle, Separator
from coursebook.course import (
    CourseStructureError,
    Session,
    extract_structure,
)
from coursebook.frontmatter import FrontmatterError
from coursebook.markdown import duration


def chapter(name, content, path=None, sub_items=None):
    p = None if path is None else PurePosixPath(path)
    return Chapter(
        name=name,
        content=content,
        path=p,
        source_path=p,
        sub_items=list(sub_items or []),
    )


def sample_book():
    deep = chapter("Deep", "---\nminutes: 3\n---\ndeep body", "a/one/deep.md")
    one = chapter("One", "---\nminutes: 10\n---\none body", "a/one.md", [deep])
    two = chapter("Two", "---\nminutes: 20\n---\ntwo body", "a/two.md")
    seg_a = chapter(
        "Segment A",
        "---\ncourse: Fundamentals\nsession: Morning\n"
        "target_minutes: 180\nminutes: 5\n---\nbody",
        "a.md",
        [one, Separator(), two],
    )
    seg_b = chapter("Segment B", "---\nminutes: 15\n---\nb body", "b.md")
    seg_c = chapter("Segment C", "---\nsession: Afternoon\n---\nc body", "c.md")
    welcome = chapter("Welcome", "---\ncourse: none\n---\nhello", "welcome.md")
    return Book(
        [
            welcome,
            PartTitle("Part"),
            seg_a,
            Separator(),
            seg_b,
            seg_c,
        ]
    )


@pytest.fixture
def extracted():
    return extract_structure(sample_book())


def test_structure_names(extracted):
    courses, _ = extracted
    assert [c.name for c in courses] == ["Fundamentals"]
    course = courses.find_course("Fundamentals")
    assert [s.name for s in course] == ["Morning", "Afternoon"]
    morning = course.sessions[0]
    assert [s.name for s in morning] == ["Segment A", "Segment B"]
    assert [s.name for s in morning.segments[0]] == ["Segment A", "One", "Two"]


def test_frontmatter_is_stripped(extracted):
    _, book = extracted
    seg_a = book.sections[2]
    assert seg_a.content == "body"
    assert seg_a.sub_items[0].content == "one body"
    assert seg_a.sub_items[0].sub_items[0].content == "deep body"
    assert book.sections[0].content == "hello"


def test_sub_chapters_fold_into_slide(extracted):
    courses, _ = extracted
    slide = courses.courses[0].sessions[0].segments[0].slides[1]
    assert slide.minutes == 10 + 3
    assert slide.source_paths == [
        PurePosixPath("a/one.md"),
        PurePosixPath("a/one/deep.md"),
    ]


def test_segment_minutes_is_sum_of_slides(extracted):
    courses, _ = extracted
    for session in courses.courses[0]:
        for segment in session:
            assert segment.minutes() == sum(s.minutes for s in segment)


def test_session_minutes_include_breaks(extracted):
    courses, _ = extracted
    morning = courses.courses[0].sessions[0]
    instructional = sum(seg.minutes() for seg in morning)
    assert morning.minutes() > instructional
    assert morning.minutes() == 63


def test_empty_session_takes_no_time():
    assert Session("empty").minutes() == 0
    assert Session("empty").target_minutes() == 0


def test_target_minutes(extracted):
    courses, _ = extracted
    course = courses.courses[0]
    morning, afternoon = course.sessions
    assert morning.target_minutes() == 180
    assert afternoon.target_minutes() == afternoon.minutes()
    assert course.target_minutes() == sum(s.target_minutes() for s in course)
    assert course.minutes() == sum(s.minutes() for s in course)


def test_find_course_missing(extracted):
    courses, _ = extracted
    assert courses.find_course("Android") is None


def test_find_slide(extracted):
    courses, book = extracted
    deep = book.sections[2].sub_items[0].sub_items[0]
    found = courses.find_slide(deep)
    assert found is not None
    course, session, segment, slide = found
    assert (course.name, session.name, segment.name, slide.name) == (
        "Fundamentals",
        "Morning",
        "Segment A",
        "One",
    )
    assert slide.is_sub_chapter(deep)
    assert not slide.is_sub_chapter(book.sections[2].sub_items[0])


def test_find_slide_outside_course(extracted):
    courses, book = extracted
    assert courses.find_slide(book.sections[0]) is None
    assert courses.find_slide(Chapter(name="draft")) is None


def test_course_none_resets(extracted):
    book = Book(
        [
            chapter("S", "---\ncourse: X\nsession: Y\n---\n", "s.md"),
            chapter("Out", "---\ncourse: none\n---\n", "out.md"),
            chapter("Later", "text", "later.md"),
        ]
    )
    courses, _ = extract_structure(book)
    segments = courses.find_course("X").sessions[0].segments
    assert [s.name for s in segments] == ["S"]


def test_course_without_session_fails():
    book = Book([chapter("S", "---\ncourse: X\n---\n", "s.md")])
    with pytest.raises(CourseStructureError, match="'session' must appear"):
        extract_structure(book)


def test_sub_slide_with_session_fails():
    inner = chapter("Inner", "---\nsession: Z\n---\n", "inner.md")
    sub = chapter("Sub", "x", "sub.md", [inner])
    book = Book(
        [chapter("S", "---\ncourse: X\nsession: Y\n---\n", "s.md", [sub])]
    )
    with pytest.raises(CourseStructureError, match="sub-slides may not have"):
        extract_structure(book)


def test_bad_frontmatter_propagates():
    book = Book([chapter("S", "---\nminutes: [\n---\nbody", "s.md")])
    with pytest.raises(FrontmatterError):
        extract_structure(book)


def test_schedule(extracted):
    courses, _ = extracted
    course = courses.courses[0]
    schedule = course.schedule()
    morning = course.sessions[0]
    assert schedule.startswith("Course schedule:\n")
    assert (
        f" * Morning ({duration(morning.minutes())}, including breaks)\n\n"
        in schedule
    )
    assert "| Segment | Duration |\n| - | - |\n" in schedule
    assert f"| Segment B | {duration(15)} |\n" in schedule
    assert "Segment C" not in schedule


def test_session_outline(extracted):
    courses, _ = extracted
    morning = courses.courses[0].sessions[0]
    outline = morning.outline()
    assert outline.startswith(
        "Including 10 minute breaks, this session should take about "
        f"{duration(morning.minutes())}. It contains:\n\n"
    )
    assert f"| Segment A | {duration(morning.segments[0].minutes())} |" in outline


def test_segment_outline_skips_untimed_slides():
    deep = chapter("Untimed", "plain", "u.md")
    book = Book(
        [
            chapter(
                "S",
                "---\ncourse: X\nsession: Y\nminutes: 4\n---\n",
                "s.md",
                [deep],
            )
        ]
    )
    courses, _ = extract_structure(book)
    segment = courses.courses[0].sessions[0].segments[0]
    outline = segment.outline()
    assert outline.startswith(
        f"This segment should take about {duration(4)}. It contains:\n\n"
    )
    assert f"| S | {duration(4)} |" in outline
    assert "Untimed" not in outline