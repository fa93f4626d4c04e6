"""Type aliases for the ARB document domain.

Provides semantic type aliases used throughout the package and by host
code when annotating arbsync call sites.

Python 3.13+.
"""

from collections.abc import Mapping

__all__ = [
    "ArbSource",
    "LocaleCode",
    "Locator",
    "Row",
    "TranslationKey",
]

type TranslationKey = str
"""Identifier of a translation entry (e.g., 'welcomeMessage')."""

type LocaleCode = str
"""Locale tag of a document (e.g., 'en', 'pt_BR', or the 'default' sentinel)."""

type Locator = str
"""Opaque host identifier of a persisted document (usually a file path)."""

type ArbSource = str
"""Raw ARB (JSON) document text."""

type Row = Mapping[str, str]
"""One row of the tabular form: column name to cell text."""
