"""Parse ARB (JSON) text into Document objects.

Architecture:
    - parse_document(): Main entry point, decodes JSON and walks top-level keys
    - _parse_entry_metadata(): Reads the ``@key`` object of one entry
    - _parse_placeholders(): Reads the placeholder map of one entry

Rules of the persisted form:
    - String values under ordinary keys become entries, in file order
    - ``@key`` holds description / placeholders for ``key``
    - ``@@locale`` and ``@@context`` are document metadata
    - Anything else (non-string values, orphan ``@key`` objects, other ``@@``
      keys) is preserved in ``DocumentMetadata.extra``, never as an entry

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from arbsync.constants import CONTEXT_KEY, LOCALE_KEY, METADATA_PREFIX
from arbsync.diagnostics import ArbParseError, ErrorTemplate, SourceSpan
from arbsync.locale_utils import locale_from_filename
from arbsync.model import ArbSource, Document, DocumentMetadata, Entry, Locator, Placeholder

__all__ = ["parse_document"]

logger = logging.getLogger(__name__)


def _malformed(locator: str, key: str, detail: str, *, strict: bool) -> None:
    """Raise in strict mode, otherwise log and continue."""
    diagnostic = ErrorTemplate.invalid_metadata(locator, key, detail)
    if strict:
        raise ArbParseError(diagnostic, locator=locator)
    logger.warning("%s", diagnostic.message)


def _parse_placeholders(
    raw: object, locator: str, key: str, *, strict: bool
) -> dict[str, Placeholder] | None:
    """Read the placeholder map of one entry.

    Returns:
        Placeholders by name, or None when the map is absent or empty
    """
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        _malformed(locator, key, "placeholders must be an object", strict=strict)
        return None

    placeholders: dict[str, Placeholder] = {}
    for name, spec in raw.items():
        if isinstance(spec, Mapping):
            placeholders[name] = Placeholder.from_json(spec)
        else:
            _malformed(locator, key, f"placeholder '{name}' must be an object", strict=strict)
            placeholders[name] = Placeholder()
    return placeholders or None


def _parse_entry_metadata(
    entry: Entry, raw: object, locator: str, *, strict: bool
) -> None:
    """Apply the ``@key`` object to an entry."""
    if not isinstance(raw, Mapping):
        _malformed(locator, entry.key, "metadata must be an object", strict=strict)
        return

    for name, value in raw.items():
        match name:
            case "description" if isinstance(value, str):
                # Empty descriptions carry no information; treat as absent.
                entry.description = value or None
            case "description":
                _malformed(locator, entry.key, "description must be a string", strict=strict)
            case "placeholders":
                entry.placeholders = _parse_placeholders(
                    value, locator, entry.key, strict=strict
                )
            case _:
                entry.extra[name] = value


def _decode(source: ArbSource, locator: str) -> dict[str, object]:
    """Decode JSON text, mapping decoder failures to ArbParseError."""
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        span = SourceSpan(start=e.pos, end=e.pos, line=e.lineno, column=e.colno)
        raise ArbParseError(
            ErrorTemplate.invalid_json(locator, e.msg, span), locator=locator
        ) from e

    if not isinstance(data, dict):
        raise ArbParseError(
            ErrorTemplate.not_an_object(locator, type(data).__name__), locator=locator
        )
    return data


def parse_document(
    source: ArbSource,
    locator: Locator,
    *,
    locale: str | None = None,
    strict: bool = False,
) -> Document:
    """Parse ARB text into a Document.

    Args:
        source: Raw document text
        locator: Host identifier of the document; its base name determines
            the locale unless ``locale`` is given
        locale: Explicit locale overriding the file-name derivation
        strict: Raise on malformed ``@key`` objects instead of skipping them

    Returns:
        Parsed Document

    Raises:
        ArbParseError: If the text is not a JSON object, or (strict mode)
            an entry's metadata is malformed

    Example:
        >>> doc = parse_document('{"hello": "Hi {name}"}', "l10n/app_en.arb")
        >>> doc.locale, doc.get("hello").value
        ('en', 'Hi {name}')
    """
    data = _decode(source, locator)
    metadata = DocumentMetadata()
    entries: list[Entry] = []
    by_key: dict[str, Entry] = {}

    for key, value in data.items():
        if key.startswith(METADATA_PREFIX):
            continue
        if isinstance(value, str):
            entry = Entry(key=key, value=value)
            entries.append(entry)
            by_key[key] = entry
        else:
            logger.debug("Ignoring non-string value for key '%s' in %s", key, locator)
            metadata.extra[key] = value

    for key, value in data.items():
        if not key.startswith(METADATA_PREFIX):
            continue
        if key == LOCALE_KEY and isinstance(value, str):
            metadata.locale_tag = value
        elif key == CONTEXT_KEY and isinstance(value, str):
            metadata.context = value
        elif (entry := by_key.get(key[len(METADATA_PREFIX):])) is not None:
            _parse_entry_metadata(entry, value, locator, strict=strict)
        else:
            metadata.extra[key] = value

    resolved_locale = locale if locale is not None else locale_from_filename(locator)
    logger.debug("Parsed %d entries from %s (locale %s)", len(entries), locator, resolved_locale)
    return Document(locator=locator, locale=resolved_locale, entries=entries, metadata=metadata)
