import io
import json
from pathlib import PurePosixPath

import pytest

from coursebook.book import Book, Chapter, book_from_dict, book_to_dict
from coursebook.course import CourseStructureError
from coursebook.frontmatter import FrontmatterError
from coursebook.preprocessor import main, preprocess


def _chapter(name, path, content, sub_items=()):
    source = PurePosixPath(path)
    return Chapter(
        name=name,
        content=content,
        path=source,
        source_path=source,
        sub_items=list(sub_items),
    )


def _book():
    return Book(
        [
            _chapter(
                "Welcome",
                "welcome.md",
                "---\ncourse: none\n---\nOverview: {{%course outline Fundamentals}}\n",
            ),
            _chapter(
                "Day 1",
                "day1.md",
                "---\ncourse: Fundamentals\nsession: Day 1\n---\n"
                "{{%session outline}}\n{{% unknown thing }}\n",
                [
                    _chapter(
                        "Types",
                        "day1/types.md",
                        "---\nminutes: 5\n---\n# Types\n<details>\nNotes\n</details>\n",
                    )
                ],
            ),
        ]
    )


def _input(book):
    context = {"root": "/book", "config": {}, "renderer": "html"}
    return json.dumps([context, book_to_dict(book)])


def _run(book):
    output = book_from_dict(json.loads(preprocess(_input(book))))
    return {chapter.name: chapter for chapter in output.iter_chapters()}


def test_frontmatter_is_stripped():
    chapters = _run(_book())
    assert chapters["Types"].content.startswith("# Types\n")
    assert all("---" not in chapter.content for chapter in chapters.values())


def test_timing_info_is_inserted_into_speaker_notes():
    chapters = _run(_book())
    assert (
        "<details>\nThis slide should take about 5 minutes. \nNotes"
        in chapters["Types"].content
    )


def test_session_outline_is_expanded():
    content = _run(_book())["Day 1"].content
    assert content.startswith("Including 10 minute breaks")
    assert "{{%" not in content


def test_unknown_directive_becomes_its_text():
    content = _run(_book())["Day 1"].content
    assert content.endswith("\nunknown thing\n")


def test_course_outline_outside_course():
    content = _run(_book())["Welcome"].content
    assert content.startswith("Overview: Course schedule:\n")
    assert "| Day 1 |" in content


def test_output_keeps_book_shape():
    data = json.loads(preprocess(_input(_book())))
    assert [next(iter(item)) for item in data["sections"]] == ["Chapter", "Chapter"]


def test_course_without_session_is_an_error():
    book = Book([_chapter("Day 1", "day1.md", "---\ncourse: Fundamentals\n---\n")])
    with pytest.raises(CourseStructureError):
        preprocess(_input(book))


def test_bad_frontmatter_is_an_error():
    book = Book([_chapter("Day 1", "day1.md", "---\nminutes: [\n---\nbody\n")])
    with pytest.raises(FrontmatterError):
        preprocess(_input(book))


def test_input_must_be_a_pair():
    with pytest.raises(ValueError):
        preprocess(json.dumps({"sections": []}))


def test_main_supports_any_renderer(capsys):
    assert main(["supports", "html"]) == 0
    assert capsys.readouterr().out == ""


def test_main_writes_processed_book(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(_input(_book())))
    assert main([]) == 0
    book = book_from_dict(json.loads(capsys.readouterr().out))
    names = [chapter.name for chapter in book.iter_chapters()]
    assert names == ["Welcome", "Day 1", "Types"]


def test_main_reports_errors(monkeypatch, capsys):
    book = Book([_chapter("Day 1", "day1.md", "---\ncourse: Fundamentals\n---\n")])
    monkeypatch.setattr("sys.stdin", io.StringIO(_input(book)))
    assert main([]) == 1
    captured = capsys.readouterr()
    assert "'session' must appear" in captured.err
    assert captured.out == ""