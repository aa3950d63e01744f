"""Greeting messages for people and their birthdays."""

from __future__ import annotations

import argparse
import os
import re
import textwrap
from pathlib import Path
from typing import Sequence

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


def greeting(name: str) -> str:
    """Greet ``name``."""
    return f"Hello {name}, it is very nice to meet you!"


def wish_happy_birthday(name: str, years: int) -> str:
    """Birthday wishes for ``name`` turning ``years``."""
    return f"Happy Birthday {name}, congratulations with the {years} years!"


def _parse_years(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid number of years: {text!r}")
    years = int(text)
    if not _I32_MIN <= years <= _I32_MAX:
        raise ValueError(f"number of years out of range: {text!r}")
    return years


def wish_from_file(path: str | os.PathLike[str]) -> str:
    """Birthday wishes read from a file holding a name line and a years line."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    if len(lines) < 2:
        raise ValueError("birthday file must hold a name and a number of years")
    name, years_text = lines[0], lines[1]
    return wish_happy_birthday(name, _parse_years(years_text))


def main(argv: Sequence[str] | None = None) -> int:
    """Print a greeting for Bob, wrapped to 24 columns."""
    parser = argparse.ArgumentParser(prog="greetings", description="Print a greeting")
    parser.parse_args(argv)
    print(textwrap.fill(greeting("Bob"), 24))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())