"""Errors raised while parsing and reading EDN."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from edndata.core.errors import EdnDataError


class ErrorCode(Enum):
    """Why a document was rejected."""

    UNEXPECTED_EOF = "unexpected end of input"
    UNMATCHED_DELIMITER = "unmatched delimiter"
    INVALID_NUMBER = "invalid number"
    INVALID_ESCAPE = "invalid string escape"
    INVALID_CHAR = "invalid character literal"
    INVALID_KEYWORD = "invalid keyword"
    INVALID_SYMBOL = "invalid symbol"
    INVALID_TAG = "invalid tag"
    ODD_MAP_ENTRIES = "map literal must contain an even number of forms"
    DUPLICATE_KEY = "duplicate map key"
    DUPLICATE_SET_ITEM = "duplicate set item"
    NESTING_TOO_DEEP = "nesting too deep"
    TRAILING_INPUT = "unexpected input after the first form"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range [start, end) in the source text."""

    start: int
    end: int


def line_column(source: str, offset: int) -> tuple[int, int]:
    """1-based line and column of an offset in source."""
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


class ParseError(EdnDataError, ValueError):
    """Raised when EDN text is malformed."""

    def __init__(self, code: ErrorCode, span: Span, line: int = 0, column: int = 0) -> None:
        self.code = code
        self.span = span
        self.line = line
        self.column = column
        where = f"line {line}, column {column}" if line else f"offset {span.start}"
        super().__init__(f"{code.value} at {where}")


class ReaderError(EdnDataError):
    """Raised when a tag reader callback fails.

    The original exception is chained as __cause__.
    """

    def __init__(self, tag: str, message: str) -> None:
        self.tag = tag
        super().__init__(f"#{tag}: {message}")
