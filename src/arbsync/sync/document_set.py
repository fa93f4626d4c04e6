"""Multi-locale synchronization engine.

DocumentSet owns one Document per locale and keeps them structurally
aligned. Separates the decision of what changes (planned Mutation records)
from applying them to memory and from persisting them (a host concern that
consumes ``dirty_documents()``).

Key architectural decisions:
- Plan, validate, then apply: a rejected operation mutates nothing
- Per-locale values are independent; keys, descriptions and placeholders
  are shared across locales
- Canonical order is lexicographic by key; canonical metadata comes from
  the first document (iteration order) that defines it
- No locking: a single writer per set is the host's responsibility

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from arbsync.diagnostics import (
    DuplicateKeyError,
    DuplicateLocaleError,
    ErrorTemplate,
    UnknownKeyError,
    UnknownLocaleError,
)
from arbsync.model import Document, Entry, LocaleCode, Placeholder, TranslationKey, validate_key
from arbsync.sync.mutations import Mutation, apply_mutation

__all__ = ["DocumentSet"]

logger = logging.getLogger(__name__)


def _normalize_description(description: str | None) -> str | None:
    """Empty descriptions are stored as absent."""
    return description or None


class DocumentSet:
    """Collection of per-locale documents with synchronization operations.

    Every operation either applies all of its planned mutations or raises
    a SyncError subclass with the set unchanged. Successful operations
    return the applied mutations; documents they touch are marked dirty
    until the host persists them and calls ``mark_clean()``.

    Example:
        >>> docs = DocumentSet([Document("app_en.arb", "en"), Document("app_fr.arb", "fr")])
        >>> _ = docs.add_key("greeting", "en", "Hello", "Shown on the home screen")
        >>> docs.entry_for("fr", "greeting").value
        ''
        >>> [d.locale for d in docs.dirty_documents()]
        ['en', 'fr']
    """

    __slots__ = ("_dirty", "_documents")

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        """Initialize the set.

        Args:
            documents: Documents in iteration order; the first document that
                defines a key's metadata supplies its canonical metadata

        Raises:
            DuplicateLocaleError: If two documents share a locale
        """
        self._documents: dict[LocaleCode, Document] = {}
        self._dirty: set[LocaleCode] = set()
        for document in documents:
            self.add_document(document)

    def __contains__(self, locale: object) -> bool:
        return locale in self._documents

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentSet):
            return NotImplemented
        return list(self._documents.items()) == list(other._documents.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"DocumentSet(locales={self.locales!r}, dirty={sorted(self._dirty)!r})"

    # ------------------------------------------------------------------
    # Document management (host refresh)
    # ------------------------------------------------------------------

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales in document iteration order."""
        return tuple(self._documents)

    @property
    def documents(self) -> tuple[Document, ...]:
        """Documents in iteration order."""
        return tuple(self._documents.values())

    def document(self, locale: LocaleCode) -> Document:
        """Return the document for a locale.

        Raises:
            UnknownLocaleError: If no document exists for locale
        """
        document = self._documents.get(locale)
        if document is None:
            raise UnknownLocaleError(
                ErrorTemplate.unknown_locale(locale, self.locales), locale=locale
            )
        return document

    def add_document(self, document: Document) -> None:
        """Register a newly discovered document.

        Raises:
            DuplicateLocaleError: If the locale is already present
        """
        if document.locale in self._documents:
            raise DuplicateLocaleError(
                ErrorTemplate.duplicate_locale(document.locale), locale=document.locale
            )
        self._documents[document.locale] = document
        logger.debug("Registered document %s (locale %s)", document.locator, document.locale)

    def replace_document(self, document: Document) -> None:
        """Install a reloaded document, keeping its position in iteration order.

        The reloaded document reflects storage, so it is not dirty.
        """
        self._documents[document.locale] = document
        self._dirty.discard(document.locale)
        logger.debug("Replaced document %s (locale %s)", document.locator, document.locale)

    def copy(self) -> DocumentSet:
        """Return an independent deep copy (dirty flags included)."""
        duplicate = DocumentSet(document.copy() for document in self._documents.values())
        duplicate._dirty = set(self._dirty)
        return duplicate

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def canonical_keys(self) -> tuple[TranslationKey, ...]:
        """Union of every document's keys, sorted lexicographically."""
        keys: set[TranslationKey] = set()
        for document in self._documents.values():
            keys.update(document.keys())
        return tuple(sorted(keys))

    def canonical_entry(self, key: TranslationKey) -> Entry | None:
        """Merged metadata for one key, or None when no document has it."""
        found = False
        description: str | None = None
        placeholders: dict[str, Placeholder] | None = None
        for document in self._documents.values():
            entry = document.get(key)
            if entry is None:
                continue
            found = True
            if description is None and entry.description:
                description = entry.description
            if placeholders is None and entry.placeholders:
                placeholders = dict(entry.placeholders)
        if not found:
            return None
        return Entry(key=key, value="", description=description, placeholders=placeholders)

    def canonical_entries(self) -> tuple[Entry, ...]:
        """One merged entry per canonical key, in canonical order.

        Only ``key``, ``description`` and ``placeholders`` are meaningful;
        ``value`` is always empty. Per-locale values are read through
        ``entry_for()``.
        """
        descriptions: dict[TranslationKey, str] = {}
        placeholders: dict[TranslationKey, dict[str, Placeholder]] = {}
        keys: set[TranslationKey] = set()
        for document in self._documents.values():
            for entry in document:
                keys.add(entry.key)
                if entry.description and entry.key not in descriptions:
                    descriptions[entry.key] = entry.description
                if entry.placeholders and entry.key not in placeholders:
                    placeholders[entry.key] = dict(entry.placeholders)
        return tuple(
            Entry(
                key=key,
                value="",
                description=descriptions.get(key),
                placeholders=placeholders.get(key),
            )
            for key in sorted(keys)
        )

    def entry_for(self, locale: LocaleCode, key: TranslationKey) -> Entry | None:
        """Direct per-locale lookup; None when the locale or key is absent."""
        document = self._documents.get(locale)
        return document.get(key) if document is not None else None

    def locales_with(self, key: TranslationKey) -> tuple[LocaleCode, ...]:
        """Locales whose document contains key."""
        return tuple(locale for locale, document in self._documents.items() if key in document)

    def missing_keys(self, locale: LocaleCode) -> tuple[TranslationKey, ...]:
        """Canonical keys the locale's document lacks.

        Raises:
            UnknownLocaleError: If no document exists for locale
        """
        document = self.document(locale)
        return tuple(key for key in self.canonical_keys() if key not in document)

    # ------------------------------------------------------------------
    # Synchronization operations
    # ------------------------------------------------------------------

    def add_key(
        self,
        key: TranslationKey,
        origin_locale: LocaleCode,
        value: str,
        description: str | None = None,
        *,
        placeholders: Mapping[str, Placeholder] | None = None,
    ) -> tuple[Mutation, ...]:
        """Add a key to every document.

        The origin document receives ``value``; every other document
        receives an empty value. Description and placeholders are shared.

        Raises:
            InvalidKeyError: If key is empty or starts with '@'
            UnknownLocaleError: If origin_locale has no document
            DuplicateKeyError: If key exists in any document
        """
        validate_key(key)
        self.document(origin_locale)
        for locale, document in self._documents.items():
            if key in document:
                raise DuplicateKeyError(ErrorTemplate.duplicate_key(key, locale), key=key)

        shared_description = _normalize_description(description)
        shared_placeholders = dict(placeholders) if placeholders else None
        plan = tuple(
            Mutation.insert(
                locale,
                key,
                value if locale == origin_locale else "",
                shared_description,
                shared_placeholders,
            )
            for locale in self._documents
        )
        self.apply(plan)
        logger.info("Added key '%s' to %d documents", key, len(plan))
        return plan

    def update_value(
        self, locale: LocaleCode, key: TranslationKey, value: str
    ) -> tuple[Mutation, ...]:
        """Overwrite one locale's value; other locales are not touched.

        Raises:
            UnknownLocaleError: If no document exists for locale
            UnknownKeyError: If that document lacks key
        """
        entry = self.document(locale).get(key)
        if entry is None:
            raise UnknownKeyError(ErrorTemplate.unknown_key(key, locale), key=key, locale=locale)
        if entry.value == value:
            return ()
        plan = (Mutation.set_value(locale, key, value),)
        self.apply(plan)
        return plan

    def update_description(
        self, key: TranslationKey, description: str | None
    ) -> tuple[Mutation, ...]:
        """Set the description of key in every document.

        Documents lacking the key receive a new entry with an empty value,
        the description and the key's canonical placeholders. Missing
        translations are healed this way rather than reported.

        Raises:
            UnknownKeyError: If no document contains key
        """
        canonical = self.canonical_entry(key)
        if canonical is None:
            raise UnknownKeyError(ErrorTemplate.unknown_key(key), key=key)

        new_description = _normalize_description(description)
        plan: list[Mutation] = []
        for locale, document in self._documents.items():
            entry = document.get(key)
            if entry is None:
                plan.append(
                    Mutation.insert(locale, key, "", new_description, canonical.placeholders)
                )
            elif entry.description != new_description:
                plan.append(Mutation.set_description(locale, key, new_description))
        self.apply(plan)
        return tuple(plan)

    def update_placeholders(
        self, key: TranslationKey, placeholders: Mapping[str, Placeholder] | None
    ) -> tuple[Mutation, ...]:
        """Set the placeholder metadata of key in every document.

        Follows the same healing rule as ``update_description()``.

        Raises:
            UnknownKeyError: If no document contains key
        """
        canonical = self.canonical_entry(key)
        if canonical is None:
            raise UnknownKeyError(ErrorTemplate.unknown_key(key), key=key)

        new_placeholders = dict(placeholders) if placeholders else None
        plan: list[Mutation] = []
        for locale, document in self._documents.items():
            entry = document.get(key)
            if entry is None:
                plan.append(
                    Mutation.insert(locale, key, "", canonical.description, new_placeholders)
                )
            elif entry.placeholders != new_placeholders:
                plan.append(Mutation.set_placeholders(locale, key, new_placeholders))
        self.apply(plan)
        return tuple(plan)

    def update_entry(
        self,
        locale: LocaleCode,
        key: TranslationKey,
        *,
        value: str | None = None,
        description: str | None = None,
    ) -> tuple[Mutation, ...]:
        """Edit one grid cell pair: a locale's value and the shared description.

        The description (when given) is synchronized across all documents;
        the value (when given) only changes ``locale``. Both parts are
        validated before either is applied.

        Raises:
            UnknownLocaleError: If no document exists for locale
            UnknownKeyError: If that document lacks key
        """
        entry = self.document(locale).get(key)
        if entry is None:
            raise UnknownKeyError(ErrorTemplate.unknown_key(key, locale), key=key, locale=locale)
        applied: list[Mutation] = []
        if description is not None:
            applied.extend(self.update_description(key, description))
        if value is not None:
            applied.extend(self.update_value(locale, key, value))
        return tuple(applied)

    def delete_key(self, key: TranslationKey) -> tuple[Mutation, ...]:
        """Remove key from every document that has it.

        Absent keys are not an error; deleting twice is a no-op. Asking the
        user for confirmation is up to the host.
        """
        plan = tuple(
            Mutation.remove(locale, key)
            for locale, document in self._documents.items()
            if key in document
        )
        self.apply(plan)
        if plan:
            logger.info("Deleted key '%s' from %d documents", key, len(plan))
        return plan

    def apply(self, mutations: Iterable[Mutation]) -> None:
        """Apply planned mutations and mark their documents dirty.

        Callers plan mutations against the current state; this method does
        not re-validate them.
        """
        for mutation in mutations:
            apply_mutation(self._documents[mutation.locale], mutation)
            self._dirty.add(mutation.locale)
            logger.debug("Applied %s to '%s' in %s", mutation.kind, mutation.key, mutation.locale)

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------

    def is_dirty(self, locale: LocaleCode) -> bool:
        """True when the locale's document changed since it was last persisted."""
        return locale in self._dirty

    def dirty_documents(self) -> tuple[Document, ...]:
        """Documents awaiting persistence, in iteration order."""
        return tuple(
            document for locale, document in self._documents.items() if locale in self._dirty
        )

    def mark_clean(self, locale: LocaleCode | None = None) -> None:
        """Clear the dirty flag of one locale, or of every locale."""
        if locale is None:
            self._dirty.clear()
        else:
            self._dirty.discard(locale)
