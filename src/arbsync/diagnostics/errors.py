"""arbsync exception hierarchy with structured diagnostics.

Every operation of the core either completes or raises one of these
exceptions with the in-memory state left unchanged. Hosts render the
attached Diagnostic; the core never presents errors to users itself.

Python 3.13+.
"""

from .codes import Diagnostic


class ArbError(Exception):
    """Base exception for all arbsync errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ArbError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ArbParseError(ArbError):
    """Malformed persisted-document text.

    Loaders skip the offending document and keep loading the others.

    Attributes:
        locator: Document that failed to parse (empty if unknown)
    """

    def __init__(self, message: str | Diagnostic, *, locator: str = "") -> None:
        """Initialize ArbParseError.

        Args:
            message: Error message string OR Diagnostic object
            locator: Document that failed to parse
        """
        super().__init__(message)
        self.locator = locator


class SyncError(ArbError):
    """Synchronization operation rejected; no document was mutated."""


class DuplicateKeyError(SyncError):
    """Key already exists in at least one document.

    Attributes:
        key: The rejected key
    """

    def __init__(self, message: str | Diagnostic, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class UnknownLocaleError(SyncError):
    """No document exists for the requested locale.

    Attributes:
        locale: The requested locale
    """

    def __init__(self, message: str | Diagnostic, *, locale: str) -> None:
        super().__init__(message)
        self.locale = locale


class UnknownKeyError(SyncError):
    """Requested key does not exist where the operation needs it.

    Attributes:
        key: The requested key
        locale: Locale that was searched (None when every document was searched)
    """

    def __init__(
        self, message: str | Diagnostic, *, key: str, locale: str | None = None
    ) -> None:
        super().__init__(message)
        self.key = key
        self.locale = locale


class InvalidKeyError(SyncError):
    """Key is empty or collides with the ARB metadata namespace."""

    def __init__(self, message: str | Diagnostic, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class DuplicateLocaleError(SyncError):
    """Two documents claim the same locale within one DocumentSet."""

    def __init__(self, message: str | Diagnostic, *, locale: str) -> None:
        super().__init__(message)
        self.locale = locale


class TabularError(ArbError):
    """Tabular import rejected; the DocumentSet was not modified."""


class NoMatchingLocalesError(TabularError):
    """No spreadsheet column matches a locale of the DocumentSet.

    Attributes:
        columns: Columns that were offered by the import
    """

    def __init__(self, message: str | Diagnostic, *, columns: tuple[str, ...]) -> None:
        super().__init__(message)
        self.columns = columns


class WorkbookError(TabularError):
    """Workbook has no usable header row or no data rows."""


class StorageError(ArbError):
    """Host persistence rejected a locator."""
