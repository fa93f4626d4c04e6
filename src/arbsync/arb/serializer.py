"""Serialize Document objects back to ARB (JSON) text.

Output layout:
    1. ``@@locale`` and ``@@context`` when set
    2. Preserved ``@@`` keys from ``DocumentMetadata.extra``
    3. Each entry, followed by its ``@key`` object when it has metadata
    4. Remaining preserved keys (non-string values, orphan ``@key`` objects)

Python 3.13+.
"""

import json

from arbsync.constants import (
    ARB_INDENT,
    CONTEXT_KEY,
    GLOBAL_METADATA_PREFIX,
    LOCALE_KEY,
    METADATA_PREFIX,
)
from arbsync.model import ArbSource, Document, Entry

__all__ = ["document_to_json", "serialize_document"]

# @key fields owned by Entry attributes; never taken from Entry.extra.
_ENTRY_FIELDS = frozenset({"description", "placeholders"})


def _entry_metadata(entry: Entry) -> dict[str, object]:
    """Build the ``@key`` object of an entry."""
    data: dict[str, object] = {}
    if entry.description:
        data["description"] = entry.description
    if entry.placeholders:
        data["placeholders"] = {
            name: placeholder.to_json() for name, placeholder in entry.placeholders.items()
        }
    data.update((name, value) for name, value in entry.extra.items() if name not in _ENTRY_FIELDS)
    return data


def document_to_json(document: Document) -> dict[str, object]:
    """Return the persisted JSON object of a document.

    Pure function; the document is not modified.
    """
    data: dict[str, object] = {}
    meta = document.metadata

    if meta.locale_tag is not None:
        data[LOCALE_KEY] = meta.locale_tag
    if meta.context is not None:
        data[CONTEXT_KEY] = meta.context

    trailing: dict[str, object] = {}
    for key, value in meta.extra.items():
        if key.startswith(GLOBAL_METADATA_PREFIX):
            data[key] = value
        else:
            trailing[key] = value

    for entry in document.entries:
        data[entry.key] = entry.value
        if entry.has_metadata:
            data[METADATA_PREFIX + entry.key] = _entry_metadata(entry)

    for key, value in trailing.items():
        data.setdefault(key, value)
    return data


def serialize_document(document: Document) -> ArbSource:
    """Serialize a document to ARB text.

    Non-ASCII text is written verbatim; output ends with a newline.

    Example:
        >>> doc = Document("app_en.arb", "en", [Entry("hello", "Hello")])
        >>> print(serialize_document(doc), end="")
        {
          "hello": "Hello"
        }
    """
    return json.dumps(document_to_json(document), indent=ARB_INDENT, ensure_ascii=False) + "\n"
