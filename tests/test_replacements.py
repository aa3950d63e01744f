from pathlib import PurePosixPath

import pytest

from coursebook.book import Book, Chapter
from coursebook.course import extract_structure
from coursebook.replacements import replace


@pytest.fixture
def structure():
    sub = Chapter(
        name="Slide",
        content="---\nminutes: 10\n---\n",
        source_path=PurePosixPath("seg/slide.md"),
    )
    seg = Chapter(
        name="Seg",
        content="---\ncourse: Fundamentals\nsession: Morning\nminutes: 5\n---\n",
        source_path=PurePosixPath("seg.md"),
        sub_items=[sub],
    )
    courses, _ = extract_structure(Book([seg]))
    course = courses.courses[0]
    session = course.sessions[0]
    segment = session.segments[0]
    return courses, course, session, segment


def run(structure, content, scoped=True, source="page.md"):
    courses, course, session, segment = structure
    chapter = Chapter(
        name="page",
        content=content,
        source_path=None if source is None else PurePosixPath(source),
    )
    if scoped:
        replace(courses, course, session, segment, chapter)
    else:
        replace(courses, None, None, None, chapter)
    return chapter.content


def test_session_outline(structure):
    session = structure[2]
    assert run(structure, "A {{%session outline}} B") == (
        f"A {session.outline()} B"
    )


def test_segment_outline_with_spaces(structure):
    segment = structure[3]
    assert run(structure, "{{% segment   outline }}") == segment.outline()


def test_course_outline(structure):
    course = structure[1]
    assert run(structure, "{{%course outline}}") == course.schedule()


def test_named_course_outline_outside_course(structure):
    course = structure[1]
    text = run(structure, "{{%course outline Fundamentals}}", scoped=False)
    assert text == course.schedule()


def test_named_course_not_found(structure):
    text = run(structure, "{{%course outline Missing}}")
    assert text == "not found - {{%course outline Missing}}"


def test_unscoped_directive_left_as_text(structure):
    assert run(structure, "{{%session outline}}", scoped=False) == "session outline"


def test_unknown_directive(structure):
    assert run(structure, "x {{% foo bar }} y") == "x foo bar y"


def test_chapter_without_source_path_untouched(structure):
    text = "{{%session outline}}"
    assert run(structure, text, source=None) == text


def test_text_without_directives_untouched(structure):
    text = "plain {{ not a directive }}"
    assert run(structure, text) == text