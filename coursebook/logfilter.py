"""Loggers that write messages at a verbosity level, with predicate filtering."""

from __future__ import annotations

import argparse
import sys
from abc import ABC, abstractmethod
from typing import Callable, Sequence


class Logger(ABC):
    """Something that can log a message at a verbosity level."""

    @abstractmethod
    def log(self, verbosity: int, message: str) -> None:
        """Log ``message`` at the given verbosity level."""


class StderrLogger(Logger):
    """Writes every message to standard error."""

    def log(self, verbosity: int, message: str) -> None:
        print(f"verbosity={verbosity}: {message}", file=sys.stderr)


class Filter(Logger):
    """Passes on to ``inner`` only the messages that ``predicate`` accepts."""

    def __init__(self, inner: Logger, predicate: Callable[[int, str], bool]) -> None:
        self.inner = inner
        self.predicate = predicate

    def log(self, verbosity: int, message: str) -> None:
        if self.predicate(verbosity, message):
            self.inner.log(verbosity, message)


def main(argv: Sequence[str] | None = None) -> int:
    """Log a few messages, keeping only those that mention "yikes"."""
    parser = argparse.ArgumentParser(
        prog="logfilter", description="Show a filtered logger at work"
    )
    parser.parse_args(argv)
    logger = Filter(StderrLogger(), lambda _verbosity, msg: "yikes" in msg)
    logger.log(5, "FYI")
    logger.log(1, "yikes, something went wrong")
    logger.log(2, "uhoh")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())