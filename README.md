# coursebook

Tools for books organised as training courses. A book is split into
courses, sessions, segments and slides. The package adds timing notes to
slides and writes schedules into pages. It also copies exercise starter
code out into files.

## Install

    pip install coursebook

To run the test suite:

    pip install "coursebook[test]"
    pytest

## Describing the course structure

A chapter may begin with YAML frontmatter:

    ---
    course: Fundamentals
    session: Day 1 Morning
    target_minutes: 180
    minutes: 5
    ---

`extract_structure` in `coursebook.course` reads the top-level chapters in
order and builds the structure from them:

- `course` starts a course, or returns to it if it already exists. The
  value `none` leaves course content, which is how introductory material
  is marked. Setting `course` also clears the current session.
- `session` picks a session in the current course. A chapter inside a
  course must have a session in effect, so a chapter that sets `course`
  must also set `session`. If it does not, `CourseStructureError` is
  raised.
- Each top-level chapter inside a session becomes a segment. That chapter
  is the segment's first slide.
- Each sub-chapter of a segment becomes a further slide. Sub-chapters
  below that are folded into their slide, and their `minutes` are added
  to it. These sub-slides may not set `course` or `session`; if one does,
  `CourseStructureError` is raised.
- `minutes` is the teaching time of one chapter.
- `target_minutes` is added to the target time of the session.

The frontmatter is removed from every chapter that is read this way. A
`minutes` or `target_minutes` value that is not a non-negative integer,
or a `course` or `session` value that is not a string, raises
`FrontmatterError`. Invalid YAML raises the same error.

A session's duration counts the segments that take time. It adds a
10-minute break between each pair of them. Durations longer than 5
minutes are rounded up to the next multiple of 5 when they are shown.

## The preprocessor

`mdbook-course` reads a `[context, book]` JSON array on standard input
and writes the processed book as JSON to standard output. It builds the
course structure as described above. For each chapter that is the first
chapter of a timed slide, it puts a line with the slide's expected
duration right after each `<details>` tag. It then expands these
directives in every chapter that has a source path:

| Directive | Expands to |
| --- | --- |
| `{{%session outline}}` | table of the current session's segments |
| `{{%segment outline}}` | table of the current segment's slides |
| `{{%course outline}}` | schedule of the current course |
| `{{%course outline NAME}}` | schedule of the named course |

If the named course does not exist, the directive becomes
`not found - {{%course outline NAME}}`. Any other directive, or one used
outside the course it refers to, is replaced by its own trimmed text.
Invalid input is reported on standard error with exit status 1.

`mdbook-course supports <renderer>` exits with status 0 for every
renderer.

## Schedules

Run these commands from the book's root directory. The book is read from
`src/SUMMARY.md`.

    course-schedule

This prints each session of each course and lists its segments. The
session's duration is compared with its target. A session more than 15
minutes over or under the target is flagged. Output stops at the first
course that has no target time.

    course-schedule pr

This prints a shorter per-course summary for use in a pull-request
comment. A course is flagged when it is more than 15 minutes off its
target. A session is flagged when it is more than 5 minutes off its
target.

`course-schedule segments` is accepted but has no summary to show. It
exits with status 1.

## Course content dump

    course-content

This prints every course, session, segment and slide in order. After
each slide it prints the full text of each of the slide's source files,
read from `src/`.

## Exercise extraction

`mdbook-exerciser` runs as a renderer. It reads the render context JSON on
standard input and takes the directory to write to from
`output.exerciser.output-directory` in the book's configuration. It
removes that directory, creates it again, and writes each code block that
directly follows a comment of this form:

    <!-- File src/main.rs -->
    ```rust
    fn main() {}
    ```

The block is written to
`<output-directory>/<chapter file stem>/src/main.rs`. Fenced and indented
code blocks both count. Code blocks without such a comment are ignored.
A comment that is not followed by a code block is ignored too. Errors in
the configuration or while writing are reported on standard error with
exit status 1.

## Library use

    >>> from coursebook.markdown import duration, relative_link, Table
    >>> duration(7)
    '10 minutes'
    >>> duration(61)
    '1 hour and 5 minutes'
    >>> relative_link("references/foo.md", "hello-world.md")
    '../hello-world.md'
    >>> table = Table(["a", "b"])
    >>> table.add_row(["a1", "b1"])
    >>> print(table, end="")
    | a | b |
    | - | - |
    | a1 | b1 |

- `coursebook.book`: `Book`, `Chapter`, `Separator`, `PartTitle`.
  `load_book(root)` reads `<root>/src/SUMMARY.md` and the chapter files it
  links to. `book_from_dict` and `book_to_dict` (and the chapter
  equivalents) convert to and from the JSON form.
- `coursebook.frontmatter`: `split_frontmatter(chapter)` returns a
  `Frontmatter` and the remaining text.
- `coursebook.course`: `extract_structure(book)` returns `Courses`. You can
  iterate over it into `Course`, `Session`, `Segment` and `Slide`, and
  call `minutes()`, `target_minutes()`, `schedule()` and `outline()`.
- `coursebook.timing_info.insert_timing_info` and
  `coursebook.replacements.replace` do the preprocessor's per-chapter
  work.
- `coursebook.schedule` has `timediff`, `session_summary` and
  `pr_summary`. `coursebook.content.render_content` produces the content
  dump as a string.
- `coursebook.exerciser`: `process(output_directory, text)` and
  `process_all(book, output_directory)`.
- `coursebook.logfilter`: `Logger`, `StderrLogger`, and `Filter`. `Filter`
  passes on only the messages that its predicate accepts.
- `coursebook.greetings`: `greeting(name)`,
  `wish_happy_birthday(name, years)`, and `wish_from_file(path)`. The file
  for `wish_from_file` holds a name line and a years line.

## Limitations

- The package does not render books. It only preprocesses a book's JSON
  and extracts exercises. Rendering is left to the book tool that calls
  it.
- `load_book` understands a subset of the `SUMMARY.md` syntax:
  - `#` headings (the first is the book title, later ones are part
    titles)
  - `---` separators
  - bulleted `[name](link)` items, nested by indentation
  - unbulleted prefix and suffix links

  It does not handle numbered list items, and it does not read
  `book.toml`.