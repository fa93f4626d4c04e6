"""Diagnostic system for arbsync errors.

Provides structured error diagnostics with codes, spans and hints, plus
the exception hierarchy raised by the synchronization, tabular and
storage layers.

Python 3.13+.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ArbError,
    ArbParseError,
    DuplicateKeyError,
    DuplicateLocaleError,
    InvalidKeyError,
    NoMatchingLocalesError,
    StorageError,
    SyncError,
    TabularError,
    UnknownKeyError,
    UnknownLocaleError,
    WorkbookError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ArbError",
    "ArbParseError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateKeyError",
    "DuplicateLocaleError",
    "ErrorTemplate",
    "InvalidKeyError",
    "NoMatchingLocalesError",
    "OutputFormat",
    "SourceSpan",
    "StorageError",
    "SyncError",
    "TabularError",
    "UnknownKeyError",
    "UnknownLocaleError",
    "WorkbookError",
]
