"""Enumerations for arbsync type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading a single ARB document.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Document read and parsed."""

    NOT_FOUND = "not_found"
    """Locator did not resolve to a readable document."""

    ERROR = "error"
    """Document could not be read or parsed; it was skipped."""


class SaveStatus(StrEnum):
    """Outcome of persisting a single dirty document."""

    SAVED = "saved"
    FAILED = "failed"


class MutationKind(StrEnum):
    """Kind of a planned change to one document.

    StrEnum provides automatic string conversion: str(MutationKind.INSERT) == "insert"
    """

    INSERT = "insert"
    """Append a new entry."""

    SET_VALUE = "set_value"
    """Overwrite the value of an existing entry."""

    SET_DESCRIPTION = "set_description"
    """Overwrite the description of an existing entry."""

    SET_PLACEHOLDERS = "set_placeholders"
    """Overwrite the placeholder metadata of an existing entry."""

    REMOVE = "remove"
    """Remove an existing entry."""


class SegmentKind(StrEnum):
    """Kind of a segment in a generated accessor body.

    StrEnum provides automatic string conversion: str(SegmentKind.TEXT) == "text"
    """

    TEXT = "text"
    """Literal text copied into the target string literal."""

    PARAMETER = "parameter"
    """Reference to an accessor parameter: Hi {name}"""


__all__ = [
    "LoadStatus",
    "MutationKind",
    "SaveStatus",
    "SegmentKind",
]
