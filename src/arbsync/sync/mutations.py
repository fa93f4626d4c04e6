"""Planned document changes.

Synchronization operations first compute a tuple of Mutation records
against the current state and only then apply them. A failed operation
therefore never leaves a partially updated DocumentSet behind, and the
applied records tell the host exactly which documents changed.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from arbsync.enums import MutationKind
from arbsync.model import Document, Entry, LocaleCode, Placeholder, TranslationKey

__all__ = ["Mutation", "apply_mutation"]


@dataclass(frozen=True, slots=True)
class Mutation:
    """One planned change to one document.

    Attributes:
        kind: What to change
        locale: Target document
        key: Target entry
        value: New value (INSERT, SET_VALUE)
        description: New description (INSERT, SET_DESCRIPTION)
        placeholders: New placeholder metadata (INSERT, SET_PLACEHOLDERS)
    """

    kind: MutationKind
    locale: LocaleCode
    key: TranslationKey
    value: str = ""
    description: str | None = None
    placeholders: dict[str, Placeholder] | None = None

    @classmethod
    def insert(
        cls,
        locale: LocaleCode,
        key: TranslationKey,
        value: str,
        description: str | None = None,
        placeholders: dict[str, Placeholder] | None = None,
    ) -> Mutation:
        return cls(MutationKind.INSERT, locale, key, value, description, placeholders)

    @classmethod
    def set_value(cls, locale: LocaleCode, key: TranslationKey, value: str) -> Mutation:
        return cls(MutationKind.SET_VALUE, locale, key, value=value)

    @classmethod
    def set_description(
        cls, locale: LocaleCode, key: TranslationKey, description: str | None
    ) -> Mutation:
        return cls(MutationKind.SET_DESCRIPTION, locale, key, description=description)

    @classmethod
    def set_placeholders(
        cls,
        locale: LocaleCode,
        key: TranslationKey,
        placeholders: dict[str, Placeholder] | None,
    ) -> Mutation:
        return cls(MutationKind.SET_PLACEHOLDERS, locale, key, placeholders=placeholders)

    @classmethod
    def remove(cls, locale: LocaleCode, key: TranslationKey) -> Mutation:
        return cls(MutationKind.REMOVE, locale, key)


def apply_mutation(document: Document, mutation: Mutation) -> None:
    """Apply one planned change to its document.

    Mutations are planned against the current state, so the target entry
    exists (or, for INSERT, does not exist) by construction.
    """
    placeholders = dict(mutation.placeholders) if mutation.placeholders else None

    if mutation.kind is MutationKind.INSERT:
        document.append(
            Entry(
                key=mutation.key,
                value=mutation.value,
                description=mutation.description,
                placeholders=placeholders,
            )
        )
        return
    if mutation.kind is MutationKind.REMOVE:
        document.remove(mutation.key)
        return

    entry = document.get(mutation.key)
    if entry is None:
        msg = f"Mutation {mutation.kind} targets missing key '{mutation.key}'"
        raise KeyError(msg)

    match mutation.kind:
        case MutationKind.SET_VALUE:
            entry.value = mutation.value
        case MutationKind.SET_DESCRIPTION:
            entry.description = mutation.description
        case MutationKind.SET_PLACEHOLDERS:
            entry.placeholders = placeholders
