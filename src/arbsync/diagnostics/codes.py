"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Document errors (parsing the persisted ARB form)
        2000-2999: Synchronization errors (DocumentSet operations)
        3000-3999: Tabular errors (spreadsheet import/export)
        4000-4999: Storage errors (host persistence)
    """

    # Document errors (1000-1999)
    PARSE_INVALID_JSON = 1001
    PARSE_NOT_AN_OBJECT = 1002
    PARSE_INVALID_METADATA = 1003
    DOCUMENT_DUPLICATE_KEY = 1004
    PARSE_INVALID_ENCODING = 1005

    # Synchronization errors (2000-2999)
    DUPLICATE_KEY = 2001
    UNKNOWN_LOCALE = 2002
    UNKNOWN_KEY = 2003
    INVALID_KEY = 2004
    DUPLICATE_LOCALE = 2005

    # Tabular errors (3000-3999)
    NO_MATCHING_LOCALES = 3001
    WORKBOOK_EMPTY = 3002
    WORKBOOK_NO_HEADER = 3003
    WORKBOOK_UNREADABLE = 3004

    # Storage errors (4000-4999)
    STORAGE_PATH_UNSAFE = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (parse errors only)
        hint: Suggestion for fixing the error
        locator: Document the error refers to (file path or host locator)
        locale: Locale the error refers to
        key: Translation key the error refers to
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    locator: str | None = None
    locale: str | None = None
    key: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[DUPLICATE_KEY]: Key 'greeting' already exists
              --> locale en
              = help: Choose a different key or edit the existing entry

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
