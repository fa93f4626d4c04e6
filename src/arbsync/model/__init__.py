"""ARB document data model.

Submodules:
    types    - PEP 695 type aliases (TranslationKey, LocaleCode, Locator, ArbSource, Row)
    document - Placeholder, Entry, DocumentMetadata, Document

Python 3.13+.
"""

from arbsync.model.document import (
    Document,
    DocumentMetadata,
    Entry,
    Placeholder,
    validate_key,
)
from arbsync.model.types import ArbSource, LocaleCode, Locator, Row, TranslationKey

__all__ = [
    "ArbSource",
    "Document",
    "DocumentMetadata",
    "Entry",
    "LocaleCode",
    "Locator",
    "Placeholder",
    "Row",
    "TranslationKey",
    "validate_key",
]
