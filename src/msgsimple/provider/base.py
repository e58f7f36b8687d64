"""MessageSourceProvider protocol.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from msgsimple.source import MessageSource
    from msgsimple.types import LocaleCode

__all__ = ["MessageSourceProvider"]


@runtime_checkable
class MessageSourceProvider(Protocol):
    """Locale to message source resolver.

    A bundle asks each of its providers for a source at one exact locale at a
    time; fallback to more general locales is the bundle's job, not the
    provider's.
    """

    def get_message_source(self, locale: LocaleCode) -> MessageSource | None:
        """Return the source for exactly this locale.

        Args:
            locale: Canonical locale code ('' is the root locale)

        Returns:
            A message source, or None if the provider has none for the locale
        """
        ...
