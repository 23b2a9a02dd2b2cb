"""Base parser interface for dictionary file classes.

All parsers inherit from LineParser and implement parse_line(). A parse
returns either a record or a ParseError; malformed input is an ordinary
outcome, not an exception, and the caller decides how to count and log it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..scanner import LineScanner
from ..schema import Record

# Failures kept per file for the summary; the rest are only counted
MAX_FAILURES_KEPT = 50


@dataclass(frozen=True)
class ParseError:
    """A line that did not match its file grammar."""

    message: str
    line_number: int
    context: str = ""           # start of the unparsed text

    def __str__(self) -> str:
        return f"{self.message} at '{self.context}...' (line {self.line_number})"


ParseResult = Record | ParseError


@dataclass
class FileStats:
    """Result of loading one source file."""

    filename: str
    path: str = ""
    pos: str = ""
    lines: int = 0              # lines handed to the parser
    skipped: int = 0            # blank and indented (license) lines
    entries: int = 0            # records written
    errors: int = 0             # lines that failed to parse
    commits: int = 0
    missing: bool = False
    failures: list[ParseError] = field(default_factory=list)

    def record_failure(self, failure: ParseError) -> None:
        self.errors += 1
        if len(self.failures) < MAX_FAILURES_KEPT:
            self.failures.append(failure)

    def __repr__(self) -> str:
        if self.missing:
            return f"FileStats({self.filename}: missing)"
        return (
            f"FileStats({self.filename}: "
            f"{self.entries}/{self.lines} loaded, "
            f"{self.errors} errors)"
        )


def is_skippable(line: str) -> bool:
    """Blank lines and lines starting with whitespace carry no entry."""
    return not line or line[0].isspace()


def iter_lines(filepath: Path) -> Iterator[tuple[str, int]]:
    """Yield (text, line_number) for every line, without the newline."""
    with open(filepath, "r", encoding="utf-8", errors="ignore") as f:
        for line_num, line in enumerate(f, start=1):
            yield line.rstrip("\r\n"), line_num


class LineParser(ABC):
    """Base class for the index, morph and data line parsers.

    Subclasses must implement:
        - parse_line(text, line_number, pos) -> record or ParseError
        - name: file class name used in diagnostics
    """

    name: str = ""

    @abstractmethod
    def parse_line(self, text: str, line_number: int, pos: str = "") -> ParseResult:
        """Parse one line.

        Args:
            text: Line text without its newline.
            line_number: 1-based line number in the source file.
            pos: Part of speech assigned to the source file.

        Returns:
            The parsed record, or a ParseError describing the failure.
        """
        pass

    def fail(
        self,
        message: str,
        line_number: int,
        scanner: Optional[LineScanner] = None,
        context: str = "",
    ) -> ParseError:
        """Build a ParseError, capturing the scanner's unparsed context."""
        if scanner is not None:
            context = scanner.remainder()
        return ParseError(message=message, line_number=line_number, context=context)

    def parse_file(self, filepath: Path | str, pos: str = "") -> Iterator[ParseResult]:
        """Parse every entry line of a file.

        Args:
            filepath: Path to source file.
            pos: Part of speech assigned to the file.

        Yields:
            Records and ParseErrors in file order.
        """
        for text, line_num in iter_lines(Path(filepath)):
            if is_skippable(text):
                continue
            yield self.parse_line(text, line_num, pos)
