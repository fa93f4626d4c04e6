"""Data model for per-locale ARB documents.

Placeholder is an immutable record; Entry, DocumentMetadata and Document
are mutable records owned by a DocumentSet. Mutation outside of the
synchronization and tabular layers is not part of the public contract.

Python 3.13+.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from arbsync.constants import METADATA_PREFIX
from arbsync.diagnostics import DuplicateKeyError, ErrorTemplate, InvalidKeyError
from arbsync.model.types import LocaleCode, Locator, TranslationKey

__all__ = [
    "Document",
    "DocumentMetadata",
    "Entry",
    "Placeholder",
    "validate_key",
]

_PLACEHOLDER_FIELDS = ("type", "format", "example", "description")


def validate_key(key: TranslationKey) -> None:
    """Reject keys that can not be stored as ARB entries.

    Raises:
        InvalidKeyError: If key is empty or starts with '@'
    """
    if not key or key.startswith(METADATA_PREFIX):
        raise InvalidKeyError(ErrorTemplate.invalid_key(key), key=key)


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Metadata for one ``{name}`` substitution token.

    The name is not stored here; it is the key under which the placeholder
    is kept in ``Entry.placeholders``.

    Attributes:
        type: Declared parameter type (e.g., "String", "int")
        format: Formatting hint (e.g., "compact")
        example: Example value
        description: Free text description
        extra: Unrecognized fields, written back unchanged
    """

    type: str | None = None
    format: str | None = None
    example: str | None = None
    description: str | None = None
    extra: Mapping[str, object] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, object]) -> Placeholder:
        """Build a Placeholder from its persisted object form.

        Known fields with non-string values are kept in ``extra`` so that
        nothing is lost on save.
        """
        known: dict[str, str] = {}
        extra: dict[str, object] = {}
        for name, value in data.items():
            if name in _PLACEHOLDER_FIELDS and isinstance(value, str):
                known[name] = value
            else:
                extra[name] = value
        return cls(**known, extra=extra)

    def to_json(self) -> dict[str, object]:
        """Return the persisted object form (absent fields omitted)."""
        data: dict[str, object] = {}
        for name in _PLACEHOLDER_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        data.update(self.extra)
        return data


@dataclass(slots=True)
class Entry:
    """One translation record of a document.

    Attributes:
        key: Identity of the entry within its document
        value: Translated text, possibly containing ``{name}`` tokens
        description: Shared description of the key
        placeholders: Placeholder metadata by name (None when there are none)
        extra: Unrecognized fields of the ``@key`` metadata object
    """

    key: TranslationKey
    value: str
    description: str | None = None
    placeholders: dict[str, Placeholder] | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @property
    def has_metadata(self) -> bool:
        """True when the entry needs an ``@key`` object when persisted."""
        return bool(self.description or self.placeholders or self.extra)

    @property
    def placeholder_names(self) -> tuple[str, ...]:
        """Declared placeholder names in declaration order."""
        return tuple(self.placeholders) if self.placeholders else ()

    def copy(self) -> Entry:
        """Return an independent copy of this entry."""
        return Entry(
            key=self.key,
            value=self.value,
            description=self.description,
            placeholders=dict(self.placeholders) if self.placeholders is not None else None,
            extra=copy.deepcopy(self.extra),
        )


@dataclass(slots=True)
class DocumentMetadata:
    """Document-wide metadata.

    Attributes:
        last_modified: When the document was last loaded or saved
        locale_tag: Value of ``@@locale`` (None when absent)
        context: Value of ``@@context`` (None when absent)
        extra: Other top-level keys that are not entries, preserved verbatim
    """

    last_modified: datetime = field(default_factory=lambda: datetime.now(UTC))
    locale_tag: str | None = None
    context: str | None = None
    extra: dict[str, object] = field(default_factory=dict)

    def copy(self) -> DocumentMetadata:
        """Return an independent copy of this metadata."""
        return DocumentMetadata(
            last_modified=self.last_modified,
            locale_tag=self.locale_tag,
            context=self.context,
            extra=copy.deepcopy(self.extra),
        )


@dataclass(slots=True)
class Document:
    """One locale's ordered set of entries.

    Keys are unique within a document; construction with a repeated key
    raises DuplicateKeyError.

    Example:
        >>> doc = Document("lib/l10n/app_en.arb", "en", [Entry("hello", "Hello")])
        >>> "hello" in doc
        True
        >>> doc.get("hello").value
        'Hello'
    """

    locator: Locator
    locale: LocaleCode
    entries: list[Entry] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    _index: dict[TranslationKey, Entry] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        """Index entries by key.

        Raises:
            DuplicateKeyError: If two entries share a key
        """
        self.entries = list(self.entries)
        for entry in self.entries:
            if entry.key in self._index:
                raise DuplicateKeyError(
                    ErrorTemplate.document_duplicate_key(self.locale, entry.key), key=entry.key
                )
            self._index[entry.key] = entry

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def file_name(self) -> str:
        """Base name of the locator."""
        return self.locator.replace("\\", "/").rsplit("/", 1)[-1]

    def keys(self) -> tuple[TranslationKey, ...]:
        """Keys in entry order."""
        return tuple(entry.key for entry in self.entries)

    def get(self, key: TranslationKey) -> Entry | None:
        """Return the entry for key, or None."""
        return self._index.get(key)

    def append(self, entry: Entry) -> None:
        """Append a new entry.

        Raises:
            DuplicateKeyError: If the key is already present
        """
        if entry.key in self._index:
            raise DuplicateKeyError(
                ErrorTemplate.document_duplicate_key(self.locale, entry.key), key=entry.key
            )
        self.entries.append(entry)
        self._index[entry.key] = entry

    def remove(self, key: TranslationKey) -> Entry | None:
        """Remove and return the entry for key (None when absent)."""
        entry = self._index.pop(key, None)
        if entry is not None:
            self.entries.remove(entry)
        return entry

    def extend(self, entries: Iterable[Entry]) -> None:
        """Append several new entries."""
        for entry in entries:
            self.append(entry)

    def copy(self) -> Document:
        """Return an independent deep copy of this document."""
        return Document(
            locator=self.locator,
            locale=self.locale,
            entries=[entry.copy() for entry in self.entries],
            metadata=self.metadata.copy(),
        )
