"""Ambient default locale as an explicit, injectable configuration cell.

Bundles read their DefaultLocale on every lookup that does not name a
locale, so changing the cell between calls changes subsequent results.
The process-wide DEFAULT_LOCALE cell is used unless a builder injects
another one, which keeps tests independent of the host environment.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from threading import Lock
from typing import Final

from msgsimple.errors import InvalidArgumentError
from msgsimple.locale_utils import get_system_locale, to_locale_code
from msgsimple.messages import library_message
from msgsimple.types import LocaleCode, LocaleLike

__all__ = ["DEFAULT_LOCALE", "USE_DEFAULT", "DefaultLocale", "UseDefault"]

logger = logging.getLogger(__name__)


class UseDefault(Enum):
    """Marker type for "read the ambient default locale at call time"."""

    TOKEN = "use-default"


USE_DEFAULT: Final = UseDefault.TOKEN


class DefaultLocale:
    """Mutable, thread-safe holder of one canonical locale code.

    The initial value is either given explicitly or detected from the
    OS/environment on first read.

    Example:
        >>> cell = DefaultLocale("de-DE")
        >>> cell.get()
        'de_DE'
        >>> with cell.override("fr"):
        ...     cell.get()
        'fr'
        >>> cell.get()
        'de_DE'
    """

    __slots__ = ("_locale", "_lock")

    def __init__(self, locale: LocaleLike | None = None) -> None:
        """Initialize the cell.

        Args:
            locale: Initial locale; None defers to system detection on first read
        """
        self._lock = Lock()
        self._locale: LocaleCode | None = None if locale is None else to_locale_code(locale)

    def get(self) -> LocaleCode:
        """Return the current default locale code."""
        with self._lock:
            if self._locale is None:
                self._locale = get_system_locale()
                logger.debug("Default locale detected from system: %r", self._locale)
            return self._locale

    def set(self, locale: LocaleLike) -> None:
        """Replace the default locale.

        Args:
            locale: New default locale

        Raises:
            InvalidArgumentError: If locale is None
        """
        if locale is None:
            raise InvalidArgumentError(library_message("cfg.nullLocale"))
        code = to_locale_code(locale)
        with self._lock:
            self._locale = code
        logger.debug("Default locale set to %r", code)

    @contextmanager
    def override(self, locale: LocaleLike) -> Iterator[LocaleCode]:
        """Temporarily replace the default locale, restoring it on exit.

        Yields:
            The canonical code now in effect
        """
        previous = self.get()
        self.set(locale)
        try:
            yield self.get()
        finally:
            self.set(previous)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"DefaultLocale({self._locale!r})"


DEFAULT_LOCALE: Final = DefaultLocale()
"""Process-wide default locale cell, detected from the environment on first read."""
