"""Configuration objects for document discovery and code generation.

Provides frozen dataclasses that encapsulate the settings a host would
otherwise pass around as loose parameters: where ARB documents live and
how generated accessor code is named and laid out.

Python 3.13+.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from arbsync.constants import (
    DEFAULT_ARB_PATTERN,
    DEFAULT_CLASS_NAME,
    DEFAULT_EXCLUDED_DIRS,
    DEFAULT_GENERIC_TYPE,
    DEFAULT_LOCALE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_STUB_MARKER,
    GENERATED_HEADER,
)

__all__ = ["GeneratorConfig", "SyncConfig"]

_CLASS_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Immutable configuration for locating and loading ARB documents.

    Attributes:
        arb_files_pattern: Glob pattern (relative to the store root) used to
            locate ARB documents (default: ``**/l10n/**/*.arb``).
        auto_detect: Locate documents automatically. When False, the loader
            returns an empty set and hosts add documents explicitly.
        excluded_dirs: Directory names never searched (default: node_modules).
        default_locale: Sentinel locale for unparsable file names.

    Example:
        >>> config = SyncConfig(arb_files_pattern="lib/l10n/*.arb")
        >>> config.auto_detect
        True
    """

    arb_files_pattern: str = DEFAULT_ARB_PATTERN
    auto_detect: bool = True
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    default_locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If the pattern or default locale is empty.
        """
        if not self.arb_files_pattern.strip():
            msg = "arb_files_pattern must not be empty"
            raise ValueError(msg)
        if not self.default_locale:
            msg = "default_locale must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable configuration for accessor code generation.

    Attributes:
        class_name: Name of the generated base contract (default: AppLocalizations).
            Per-locale classes are named ``class_name + LOCALE.upper()``.
        stub_marker: Value returned for keys a locale does not translate.
        generic_type: Parameter type for placeholders without a declared type.
        output_dir: Default output directory suggested to hosts.
        output_file: Default output file name suggested to hosts.
        header: Comment line placed at the top of generated files.

    Example:
        >>> config = GeneratorConfig(class_name="L10n", stub_marker="MISSING")
        >>> config.stub_marker
        'MISSING'
    """

    class_name: str = DEFAULT_CLASS_NAME
    stub_marker: str = DEFAULT_STUB_MARKER
    generic_type: str = DEFAULT_GENERIC_TYPE
    output_dir: str = DEFAULT_OUTPUT_DIR
    output_file: str = DEFAULT_OUTPUT_FILE
    header: str = GENERATED_HEADER

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If class_name is not a valid identifier or
                generic_type is empty.
        """
        if not _CLASS_NAME_PATTERN.fullmatch(self.class_name):
            msg = f"class_name must be a valid identifier, got: {self.class_name!r}"
            raise ValueError(msg)
        if not self.generic_type:
            msg = "generic_type must not be empty"
            raise ValueError(msg)
