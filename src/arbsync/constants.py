"""Shared constants for arbsync.

This module provides centralized configuration constants used across
the model, synchronization, tabular and code generation packages.
Placing constants here avoids circular imports and provides a single
source of truth.

Constants are grouped by domain:
- ARB format: Reserved keys and metadata prefixes of the persisted form
- Locale naming: File-name pattern and sentinel locale
- Tabular form: Fixed column names and sheet title
- Code generation: Defaults for generated accessor code

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # ARB format
    "METADATA_PREFIX",
    "LOCALE_KEY",
    "CONTEXT_KEY",
    "GLOBAL_METADATA_PREFIX",
    "ARB_INDENT",
    # Locale naming
    "DEFAULT_LOCALE",
    "LOCALE_FILE_PATTERN",
    "DEFAULT_ARB_PATTERN",
    "DEFAULT_EXCLUDED_DIRS",
    # Tabular form
    "KEY_COLUMN",
    "DESCRIPTION_COLUMN",
    "KEY_COLUMN_ALIASES",
    "DESCRIPTION_COLUMN_ALIASES",
    "SHEET_TITLE",
    # Code generation
    "DEFAULT_CLASS_NAME",
    "DEFAULT_STUB_MARKER",
    "DEFAULT_GENERIC_TYPE",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_OUTPUT_FILE",
    "GENERATED_HEADER",
]

# ============================================================================
# ARB FORMAT
# ============================================================================

# Keys starting with "@" are metadata and never become translation entries.
METADATA_PREFIX: str = "@"

# Document-wide metadata keys.
LOCALE_KEY: str = "@@locale"
CONTEXT_KEY: str = "@@context"
GLOBAL_METADATA_PREFIX: str = "@@"

# Serialized ARB files use two-space indentation.
ARB_INDENT: int = 2

# ============================================================================
# LOCALE NAMING
# ============================================================================

# Sentinel locale for documents whose file name carries no locale tag.
DEFAULT_LOCALE: str = "default"

# <prefix>_<lang>[_<REGION>].arb, e.g. app_en.arb, intl_pt_BR.arb, de.arb
LOCALE_FILE_PATTERN: str = r"(?:app_|intl_)?([a-zA-Z]{2}(?:_[a-zA-Z]{2})?)(?:\.arb)?$"

DEFAULT_ARB_PATTERN: str = "**/l10n/**/*.arb"
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = ("node_modules",)

# ============================================================================
# TABULAR FORM
# ============================================================================

KEY_COLUMN: str = "key"
DESCRIPTION_COLUMN: str = "description"

# Header spellings accepted on import. Spreadsheets edited by hand often
# carry the capitalized display labels.
KEY_COLUMN_ALIASES: tuple[str, ...] = ("key", "Key")
DESCRIPTION_COLUMN_ALIASES: tuple[str, ...] = ("description", "Description")

SHEET_TITLE: str = "Translations"

# ============================================================================
# CODE GENERATION
# ============================================================================

DEFAULT_CLASS_NAME: str = "AppLocalizations"

# Returned by generated accessors for keys a locale does not translate.
DEFAULT_STUB_MARKER: str = "TODO"

# Parameter type used when a placeholder declares no type.
DEFAULT_GENERIC_TYPE: str = "Object"

DEFAULT_OUTPUT_DIR: str = "lib/generated"
DEFAULT_OUTPUT_FILE: str = "l10n.dart"

GENERATED_HEADER: str = "GENERATED CODE - DO NOT MODIFY BY HAND"
