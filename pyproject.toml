[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coursebook"
version = "0.1.0"
description = "Course-structure preprocessing, schedules and exercise extraction for mdBook-style books."
requires-python = ">=3.10"
keywords = ["mdbook", "markdown", "course", "preprocessor", "schedule", "exercises"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Documentation",
    "Topic :: Text Processing :: Markup :: Markdown",
]
dependencies = [
    "pyyaml>=6.0",
    "markdown-it-py>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
mdbook-course = "coursebook.preprocessor:main"
course-schedule = "coursebook.schedule:main"
course-content = "coursebook.content:main"
mdbook-exerciser = "coursebook.exerciser:main"

[tool.hatch.build.targets.wheel]
packages = ["coursebook"]

[tool.hatch.build.targets.sdist]
include = ["coursebook", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
