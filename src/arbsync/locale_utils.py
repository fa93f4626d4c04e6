"""Locale utilities for ARB file names and locale tags.

Centralizes locale tag handling used throughout the codebase: deriving the
locale of a document from its file name, splitting tags into language and
region components, and looking up human readable names through Babel.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import TYPE_CHECKING

from arbsync.constants import DEFAULT_LOCALE, LOCALE_FILE_PATTERN

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "locale_display_name",
    "locale_from_filename",
    "normalize_locale",
    "split_locale",
]

logger = logging.getLogger(__name__)

# Tags start the base name or follow "_"/"-", so "messages.arb" is not "es".
_LOCALE_FILE_RE = re.compile(r"(?:^|(?<=[_\-]))" + LOCALE_FILE_PATTERN)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to the underscore form used by ARB names.

    Args:
        locale_code: Locale code (e.g., "en-US", "pt_BR")

    Returns:
        Underscore-separated locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def locale_from_filename(file_name: str, default: str = DEFAULT_LOCALE) -> str:
    """Derive a document's locale from its file name.

    Recognizes ``<prefix>_<lang>[_<REGION>].arb`` where the prefix is
    ``app_`` or ``intl_`` (or absent). Names that carry no two-letter
    language tag fall back to ``default``.

    Args:
        file_name: Base name of the document (directories are ignored)
        default: Locale returned for unparsable names

    Returns:
        Locale tag such as "en" or "pt_BR", or ``default``

    Example:
        >>> locale_from_filename("app_en.arb")
        'en'
        >>> locale_from_filename("intl_pt_BR.arb")
        'pt_BR'
        >>> locale_from_filename("messages.arb")
        'default'
    """
    base_name = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    match = _LOCALE_FILE_RE.search(base_name)
    if match is None:
        return default
    return match.group(1)


def split_locale(locale_code: str) -> tuple[str, str | None]:
    """Split a locale tag into (language, region).

    Args:
        locale_code: Locale tag in underscore or hyphen form

    Returns:
        Tuple of language and region (None when the tag has no region)

    Example:
        >>> split_locale("en_US")
        ('en', 'US')
        >>> split_locale("fr")
        ('fr', None)
    """
    parts = normalize_locale(locale_code).split("_")
    language = parts[0]
    region = parts[1] if len(parts) > 1 and parts[1] else None
    return language, region


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or underscore form accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def locale_display_name(locale_code: str, display_locale: str = "en") -> str | None:
    """Return a human readable name for a locale tag.

    Args:
        locale_code: Locale tag to describe (e.g., "pt_BR")
        display_locale: Locale the name is expressed in

    Returns:
        Display name such as "Portuguese (Brazil)", or None when Babel
        does not know the tag (e.g., the "default" sentinel)
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
        return locale.get_display_name(display_locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("No display name for locale '%s': %s", locale_code, e)
        return None
