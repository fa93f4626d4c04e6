"""Document persistence for hosts.

Provides the protocol a host implements to read and write ARB documents,
a filesystem implementation with path-traversal checks, and result/summary
records for bulk load and save.

Components:
    DocumentStore - Protocol for host persistence (structural typing)
    PathDocumentStore - Disk-based store rooted at a project directory
    DocumentLoadResult / LoadSummary - Outcome of load_document_set()
    SaveResult / SaveSummary - Outcome of save_dirty()

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from arbsync.arb import parse_document, serialize_document
from arbsync.config import SyncConfig
from arbsync.constants import DEFAULT_EXCLUDED_DIRS
from arbsync.diagnostics import (
    ArbParseError,
    DuplicateLocaleError,
    ErrorTemplate,
    StorageError,
)
from arbsync.enums import LoadStatus, SaveStatus
from arbsync.locale_utils import locale_from_filename
from arbsync.model import ArbSource, LocaleCode, Locator
from arbsync.sync import DocumentSet

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DocumentStore",
    # Concrete store
    "PathDocumentStore",
    # Result types
    "DocumentLoadResult",
    "LoadSummary",
    "SaveResult",
    "SaveSummary",
    # Operations
    "load_document_set",
    "save_dirty",
]

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Protocol for reading, writing and locating persisted documents.

    Locators are opaque to the core; the store decides what they mean.

    Example:
        >>> class MemoryStore:
        ...     def __init__(self) -> None:
        ...         self.files: dict[str, str] = {}
        ...     def load(self, locator: str) -> str:
        ...         return self.files[locator]
        ...     def save(self, locator: str, source: str) -> None:
        ...         self.files[locator] = source
        ...     def locate_all(self, pattern: str) -> list[str]:
        ...         return sorted(self.files)
    """

    def load(self, locator: Locator) -> ArbSource:
        """Read document text.

        Raises:
            FileNotFoundError: If the locator does not exist
            UnicodeDecodeError: If the document is not valid UTF-8
            OSError: If the document cannot be read
        """

    def save(self, locator: Locator, source: ArbSource) -> None:
        """Replace document text.

        Raises:
            OSError: If the document cannot be written
        """

    def locate_all(self, pattern: str) -> Sequence[Locator]:
        """Return locators of all documents matching a glob pattern."""


@dataclass(frozen=True, slots=True)
class PathDocumentStore:
    """File system store rooted at a project directory.

    Locators are POSIX paths relative to ``root``.

    Security:
        Every locator is resolved and verified to stay inside ``root``;
        absolute locators and ``..`` escapes raise StorageError.

    Attributes:
        root: Project directory
        excluded_dirs: Directory names skipped by locate_all()
    """

    root: str | Path
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_resolved_root", Path(self.root).resolve())

    def _resolve(self, locator: Locator) -> Path:
        """Map a locator to a path inside the root.

        Raises:
            StorageError: If the locator escapes the root directory
        """
        candidate = Path(locator)
        if candidate.is_absolute():
            raise StorageError(ErrorTemplate.path_unsafe(locator, str(self._resolved_root)))
        full_path = (self._resolved_root / candidate).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            raise StorageError(
                ErrorTemplate.path_unsafe(locator, str(self._resolved_root))
            ) from None
        return full_path

    def describe_path(self, locator: Locator) -> str:
        """Return the absolute path of a locator for diagnostics."""
        return str(self._resolved_root / locator)

    def load(self, locator: Locator) -> ArbSource:
        return self._resolve(locator).read_text(encoding="utf-8")

    def save(self, locator: Locator, source: ArbSource) -> None:
        path = self._resolve(locator)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8", newline="\n")

    def locate_all(self, pattern: str) -> tuple[Locator, ...]:
        excluded = set(self.excluded_dirs)
        locators: list[Locator] = []
        for path in sorted(set(self._resolved_root.glob(pattern))):
            relative = path.relative_to(self._resolved_root)
            if excluded.intersection(relative.parts[:-1]) or not path.is_file():
                continue
            locators.append(relative.as_posix())
        return tuple(locators)


@dataclass(frozen=True, slots=True)
class DocumentLoadResult:
    """Result of loading a single document.

    Attributes:
        locator: Document locator
        status: Load status (success, not_found, error)
        locale: Locale of the loaded document (None unless successful)
        error: Exception if status is ERROR or NOT_FOUND, None otherwise
    """

    locator: Locator
    status: LoadStatus
    locale: LocaleCode | None = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of document load results.

    Attributes:
        results: All individual load results, in locator order
    """

    results: tuple[DocumentLoadResult, ...]

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """True if every located document was read and parsed."""
        return self.errors == 0 and self.not_found == 0

    def get_errors(self) -> tuple[DocumentLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_successful(self) -> tuple[DocumentLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)


@dataclass(frozen=True, slots=True)
class SaveResult:
    """Result of persisting a single dirty document."""

    locator: Locator
    locale: LocaleCode
    status: SaveStatus
    error: Exception | None = None

    @property
    def is_saved(self) -> bool:
        return self.status == SaveStatus.SAVED


@dataclass(frozen=True, slots=True)
class SaveSummary:
    """Immutable aggregate of save results.

    Failed documents stay dirty; documents saved before a failure are not
    rolled back.
    """

    results: tuple[SaveResult, ...]

    def __repr__(self) -> str:
        return f"SaveSummary(saved={self.saved}, failed={self.failed})"

    @property
    def saved(self) -> int:
        return sum(1 for r in self.results if r.is_saved)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.is_saved)

    def get_failures(self) -> tuple[SaveResult, ...]:
        return tuple(r for r in self.results if not r.is_saved)


def load_document_set(
    store: DocumentStore,
    config: SyncConfig | None = None,
    *,
    pattern: str | None = None,
    strict: bool = False,
) -> tuple[DocumentSet, LoadSummary]:
    """Locate, read and parse every document into a DocumentSet.

    Documents that cannot be read or parsed, and documents whose locale is
    already taken by an earlier locator, are skipped and reported in the
    summary. They never abort the load.

    Args:
        store: Host persistence
        config: Discovery settings (default: SyncConfig())
        pattern: Glob pattern overriding ``config.arb_files_pattern``
        strict: Treat malformed ``@key`` metadata as a parse error

    Returns:
        Tuple of (DocumentSet, LoadSummary)
    """
    config = config if config is not None else SyncConfig()
    if pattern is None and not config.auto_detect:
        logger.debug("Automatic document detection disabled")
        return DocumentSet(), LoadSummary(())

    document_set = DocumentSet()
    results: list[DocumentLoadResult] = []
    for locator in store.locate_all(pattern or config.arb_files_pattern):
        try:
            source = store.load(locator)
        except FileNotFoundError as e:
            results.append(DocumentLoadResult(locator, LoadStatus.NOT_FOUND, error=e))
            continue
        except UnicodeDecodeError as e:
            error = ArbParseError(ErrorTemplate.invalid_encoding(locator, str(e)), locator=locator)
            logger.warning("Skipping '%s': %s", locator, error)
            results.append(DocumentLoadResult(locator, LoadStatus.ERROR, error=error))
            continue
        except (OSError, StorageError) as e:
            logger.warning("Cannot read '%s': %s", locator, e)
            results.append(DocumentLoadResult(locator, LoadStatus.ERROR, error=e))
            continue

        locale = locale_from_filename(locator, config.default_locale)
        try:
            document = parse_document(source, locator, locale=locale, strict=strict)
            document_set.add_document(document)
        except (ArbParseError, DuplicateLocaleError) as e:
            logger.warning("Skipping '%s': %s", locator, e)
            results.append(DocumentLoadResult(locator, LoadStatus.ERROR, error=e))
            continue
        results.append(DocumentLoadResult(locator, LoadStatus.SUCCESS, locale=locale))

    summary = LoadSummary(tuple(results))
    logger.info("Loaded %d documents: %r", len(document_set), summary)
    return document_set, summary


def save_dirty(store: DocumentStore, document_set: DocumentSet) -> SaveSummary:
    """Persist every dirty document independently.

    Successfully saved documents are marked clean and their
    ``last_modified`` is refreshed. Failures are logged and reported.
    """
    results: list[SaveResult] = []
    for document in document_set.dirty_documents():
        try:
            store.save(document.locator, serialize_document(document))
        except (OSError, StorageError) as e:
            logger.warning("Failed to save '%s': %s", document.locator, e)
            results.append(SaveResult(document.locator, document.locale, SaveStatus.FAILED, e))
            continue
        document.metadata.last_modified = datetime.now(UTC)
        document_set.mark_clean(document.locale)
        results.append(SaveResult(document.locator, document.locale, SaveStatus.SAVED))

    summary = SaveSummary(tuple(results))
    logger.info("Saved dirty documents: %r", summary)
    return summary
