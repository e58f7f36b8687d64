"""Enumerations for msgsimple type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading the message source for one locale.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Source loaded and registered for the locale."""

    NOT_FOUND = "not_found"
    """No source exists for the locale (expected for partial translations)."""

    ERROR = "error"
    """Source exists but could not be read or decoded."""


class SourceFormat(StrEnum):
    """On-disk format of a message source file."""

    JSON = "json"
    """JSON object of keys to strings; nested objects flatten with '.'"""

    PO = "po"
    """gettext catalog read with Babel."""

    @property
    def suffix(self) -> str:
        """File name suffix for this format (e.g., '.json')."""
        return f".{self.value}"


__all__ = [
    "LoadStatus",
    "SourceFormat",
]
