"""DocumentSet <-> row-oriented table transform.

Table layout: columns ``key, description, <locale>...`` in document
iteration order, one row per canonical key. Stateless; the workbook
module handles spreadsheet files.

Round-trip law: ``from_rows(to_rows(s), s)`` leaves any set ``s`` unchanged
when the exported columns are exactly its locales.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from arbsync.constants import (
    DESCRIPTION_COLUMN,
    DESCRIPTION_COLUMN_ALIASES,
    KEY_COLUMN,
    KEY_COLUMN_ALIASES,
    METADATA_PREFIX,
)
from arbsync.diagnostics import ErrorTemplate, NoMatchingLocalesError
from arbsync.model import LocaleCode, Row, TranslationKey
from arbsync.sync import DocumentSet, Mutation

__all__ = [
    "ColumnMatch",
    "from_rows",
    "match_columns",
    "table_columns",
    "to_rows",
]

logger = logging.getLogger(__name__)


def table_columns(document_set: DocumentSet) -> tuple[str, ...]:
    """Header of the exported table."""
    return (KEY_COLUMN, DESCRIPTION_COLUMN, *document_set.locales)


def to_rows(document_set: DocumentSet) -> list[dict[str, str]]:
    """Export a DocumentSet as one row per canonical key.

    The description cell holds the canonical description ("" if none);
    each locale cell holds that document's value ("" if absent).

    Example:
        >>> rows = to_rows(docs)
        >>> rows[0]
        {'key': 'greeting', 'description': 'Home title', 'en': 'Hello', 'fr': 'Bonjour'}
    """
    rows: list[dict[str, str]] = []
    for canonical in document_set.canonical_entries():
        row = {KEY_COLUMN: canonical.key, DESCRIPTION_COLUMN: canonical.description or ""}
        for document in document_set:
            entry = document.get(canonical.key)
            row[document.locale] = entry.value if entry is not None else ""
        rows.append(row)
    return rows


@dataclass(frozen=True, slots=True)
class ColumnMatch:
    """How the columns of an imported table map onto a DocumentSet.

    Hosts use this to ask for confirmation before ``from_rows()``.

    Attributes:
        key_column: Column holding keys (None when the table has none)
        description_column: Column holding descriptions (None when absent)
        matched: Locale columns that equal an existing locale, in table order
        ignored: Other columns, in table order
    """

    key_column: str | None
    description_column: str | None
    matched: tuple[LocaleCode, ...]
    ignored: tuple[str, ...]


def _first_present(columns: Sequence[str], aliases: tuple[str, ...]) -> str | None:
    for alias in aliases:
        if alias in columns:
            return alias
    return None


def _collect_columns(rows: Iterable[Row]) -> tuple[str, ...]:
    """Columns of all rows in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        seen.update(dict.fromkeys(row))
    return tuple(seen)


def match_columns(columns: Sequence[str], document_set: DocumentSet) -> ColumnMatch:
    """Match table columns against the set's locales.

    Only exact locale strings match; ``key`` / ``Key`` and ``description`` /
    ``Description`` are the fixed columns.
    """
    fixed = set(KEY_COLUMN_ALIASES) | set(DESCRIPTION_COLUMN_ALIASES)
    matched: list[LocaleCode] = []
    ignored: list[str] = []
    for column in columns:
        if column in fixed:
            continue
        if column in document_set:
            matched.append(column)
        else:
            ignored.append(column)
    return ColumnMatch(
        key_column=_first_present(columns, KEY_COLUMN_ALIASES),
        description_column=_first_present(columns, DESCRIPTION_COLUMN_ALIASES),
        matched=tuple(matched),
        ignored=tuple(ignored),
    )


def _cell(row: Row, column: str | None) -> str:
    if column is None:
        return ""
    value = row.get(column)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def from_rows(rows: Sequence[Row], document_set: DocumentSet) -> DocumentSet:
    """Import a table into a DocumentSet.

    For every row with a non-empty key and every matched locale column the
    document's entry gets ``value = cell`` (last row wins). An empty cell
    means the translation is absent: it never creates an entry, and an
    existing entry is cleared to ``""``. New keys are appended; existing
    keys are updated in place.

    The sheet has a single description column. A description that differs
    from the key's canonical description is written into every matched
    document that has the key; an unchanged one leaves per-locale
    descriptions alone. Unmatched columns are ignored.

    Args:
        rows: Table rows keyed by column name
        document_set: Set to update in place

    Returns:
        The updated ``document_set``

    Raises:
        NoMatchingLocalesError: If the rows have columns but none equals a
            locale of the set; the set is not modified
    """
    if not rows:
        logger.debug("Nothing to import: no rows")
        return document_set

    match = match_columns(_collect_columns(rows), document_set)
    if not match.matched:
        raise NoMatchingLocalesError(
            ErrorTemplate.no_matching_locales(match.ignored, document_set.locales),
            columns=match.ignored,
        )
    for column in match.ignored:
        logger.debug("Ignoring column '%s': no document for that locale", column)

    # Simulated (value, description) per (locale, key) so that repeated
    # keys within one table are planned against earlier rows.
    state: dict[tuple[LocaleCode, TranslationKey], tuple[str, str | None]] = {}
    # Description each key had before the current row: canonical, then sheet.
    sheet_descriptions: dict[TranslationKey, str | None] = {}
    plan: list[Mutation] = []
    imported = 0

    for row in rows:
        key = _cell(row, match.key_column)
        if not key:
            continue
        if key.startswith(METADATA_PREFIX):
            logger.warning("Skipping row with metadata key '%s'", key)
            continue
        imported += 1
        description = _cell(row, match.description_column) or None
        if key not in sheet_descriptions:
            canonical = document_set.canonical_entry(key)
            sheet_descriptions[key] = canonical.description if canonical is not None else None
        description_edited = description != sheet_descriptions[key]
        sheet_descriptions[key] = description

        for locale in match.matched:
            value = _cell(row, locale)
            current = state.get((locale, key))
            if current is None:
                entry = document_set.entry_for(locale, key)
                if entry is not None:
                    current = (entry.value, entry.description)

            if current is None:
                # Empty cell = absent translation.
                if not value:
                    continue
                plan.append(Mutation.insert(locale, key, value, description))
                current = (value, description)
            else:
                if current[0] != value:
                    plan.append(Mutation.set_value(locale, key, value))
                if description_edited and current[1] != description:
                    plan.append(Mutation.set_description(locale, key, description))
                    current = (current[0], description)
            state[(locale, key)] = (value, current[1])

    document_set.apply(plan)
    logger.info(
        "Imported %d rows into %d locales (%s); %d changes",
        imported,
        len(match.matched),
        ", ".join(match.matched),
        len(plan),
    )
    return document_set
