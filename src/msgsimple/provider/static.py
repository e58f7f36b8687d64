"""Provider over a fixed locale to source table.

Python 3.13+.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from msgsimple.errors import InvalidArgumentError
from msgsimple.locale_utils import to_locale_code
from msgsimple.messages import library_message

if TYPE_CHECKING:
    from collections.abc import Mapping

    from msgsimple.source import MessageSource
    from msgsimple.types import LocaleCode, LocaleLike

__all__ = ["StaticMessageSourceProvider"]


class StaticMessageSourceProvider:
    """Provider returning pre-registered sources.

    Locale keys are canonicalized at construction, so "en-US", "en_us" and
    babel.Locale("en", "US") all register the same entry. Locales without an
    entry receive the default source, which may be None.

    Example:
        >>> provider = StaticMessageSourceProvider({"en": english, "de": german})
        >>> provider.get_message_source("de") is german
        True
        >>> provider.get_message_source("fr") is None
        True
    """

    __slots__ = ("_default_source", "_sources")

    def __init__(
        self,
        sources: Mapping[LocaleLike, MessageSource] | None = None,
        default_source: MessageSource | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            sources: Sources keyed by locale
            default_source: Source for locales absent from ``sources``

        Raises:
            InvalidArgumentError: If a locale key or source is None
        """
        table: dict[LocaleCode, MessageSource] = {}
        for locale, source in (sources or {}).items():
            if locale is None:
                raise InvalidArgumentError(library_message("cfg.nullLocale"))
            if source is None:
                raise InvalidArgumentError(library_message("cfg.nullSource"))
            table[to_locale_code(locale)] = source
        self._sources: Mapping[LocaleCode, MessageSource] = MappingProxyType(table)
        self._default_source = default_source

    @classmethod
    def with_single_source(
        cls, source: MessageSource, locale: LocaleLike | None = None
    ) -> Self:
        """Create a provider serving one source.

        Args:
            source: The source to serve
            locale: If given, serve the source for this locale only;
                otherwise serve it for every locale

        Raises:
            InvalidArgumentError: If source is None
        """
        if source is None:
            raise InvalidArgumentError(library_message("cfg.nullSource"))
        if locale is None:
            return cls(default_source=source)
        return cls({locale: source})

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with an explicitly registered source."""
        return tuple(self._sources)

    def get_message_source(self, locale: LocaleCode) -> MessageSource | None:
        """Return the source registered for the locale, else the default."""
        return self._sources.get(locale, self._default_source)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"StaticMessageSourceProvider(locales={self.locales!r}, "
            f"has_default={self._default_source is not None})"
        )
