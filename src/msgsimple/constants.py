"""Package-wide constants.

Python 3.13+.
"""

from typing import Final

__all__ = [
    "DEFAULT_SYSTEM_LOCALE",
    "LOCALE_SEPARATOR",
    "MAX_APPLICABLE_CACHE_SIZE",
    "MAX_BABEL_LOCALE_CACHE_SIZE",
    "MAX_SOURCE_DEPTH",
    "MAX_TEMPLATE_CACHE_SIZE",
    "NULL_STRING",
    "ROOT_LOCALE",
]

ROOT_LOCALE: Final = ""
"""The universal root locale every other locale generalizes to."""

LOCALE_SEPARATOR: Final = "_"

DEFAULT_SYSTEM_LOCALE: Final = "en_US"
"""Used when the OS and environment do not name a locale."""

NULL_STRING: Final = "null"
"""Rendering of a None argument by the printf engine."""

MAX_APPLICABLE_CACHE_SIZE: Final = 256
MAX_BABEL_LOCALE_CACHE_SIZE: Final = 128
MAX_TEMPLATE_CACHE_SIZE: Final = 512

MAX_SOURCE_DEPTH: Final = 100
"""Deepest object nesting accepted in a JSON message file."""
