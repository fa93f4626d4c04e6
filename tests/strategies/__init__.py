"""Hypothesis strategies for arbsync property-based testing.

Usage:
    from tests.strategies import document_sets, translation_keys
"""

from .arb import (
    descriptions,
    document_sets,
    locale_codes,
    placeholder_maps,
    translation_keys,
    translation_values,
)

__all__ = [
    "descriptions",
    "document_sets",
    "locale_codes",
    "placeholder_maps",
    "translation_keys",
    "translation_values",
]
