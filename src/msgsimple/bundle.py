"""Message bundles: ordered providers with locale fallback.

A bundle is an immutable sequence of MessageSourceProviders. A lookup walks
the fallback chain of the requested locale (most specific first, root
last) and, at each locale, asks every provider in order for a source and
that source for the key. The first message found wins; if none is found
the key itself is returned.

Because locales form the outer loop, a low-priority provider with a message
for the exact locale beats a high-priority provider that only has one for a
more general locale.

Bundles are built with MessageBundleBuilder and converted back to a builder
with thaw(); both operations copy the provider sequence.

Thread Safety:
    MessageBundle is immutable and may be shared across threads without
    synchronization. Providers are called concurrently and must be as
    thread-safe as the application requires. MessageBundleBuilder is not
    thread-safe.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self

from msgsimple.default_locale import DEFAULT_LOCALE, USE_DEFAULT, DefaultLocale, UseDefault
from msgsimple.enums import SourceFormat
from msgsimple.errors import InvalidArgumentError, MissingFormatArgumentError
from msgsimple.formatting import printf
from msgsimple.locale_utils import get_applicable, to_locale_code
from msgsimple.messages import library_message
from msgsimple.provider.loading import LoadingMessageSourceProvider, PathSourceLoader
from msgsimple.provider.static import StaticMessageSourceProvider

if TYPE_CHECKING:
    from collections.abc import Iterable

    from msgsimple.provider import MessageSourceProvider
    from msgsimple.source import MessageSource
    from msgsimple.types import LocaleCode, LocaleLike, Message, MessageKey

__all__ = ["MessageBundle", "MessageBundleBuilder"]

logger = logging.getLogger(__name__)


def _check_provider(provider: MessageSourceProvider | None) -> MessageSourceProvider:
    if provider is None:
        raise InvalidArgumentError(library_message("cfg.nullProvider"))
    return provider


@dataclass(frozen=True, slots=True)
class MessageBundle:
    """Immutable, ordered collection of message source providers.

    Use MessageBundle.new_builder() (or thaw() on an existing bundle) to
    assemble providers, then the builder's freeze() to obtain a bundle.
    Direct construction from an iterable of providers is also supported and
    takes a snapshot of it.

    Example:
        >>> bundle = (
        ...     MessageBundle.new_builder()
        ...     .append_source(MapMessageSource({"greeting": "Hello, %s!"}))
        ...     .append_source(MapMessageSource({"greeting": "Servus, %s!"}), locale="de_AT")
        ...     .freeze()
        ... )
        >>> bundle.get_message("greeting", locale="de-AT")
        'Servus, %s!'
        >>> bundle.format_message("greeting", "Anna", locale="en")
        'Hello, Anna!'
        >>> bundle.get_message("no.such.key", locale="en")
        'no.such.key'

    Attributes:
        providers: Providers in priority order (first registered = highest)
        default_locale: Cell read by lookups that do not name a locale
    """

    providers: tuple[MessageSourceProvider, ...] = ()
    default_locale: DefaultLocale = field(default=DEFAULT_LOCALE, compare=False)

    def __post_init__(self) -> None:
        """Snapshot the provider sequence and validate its entries.

        Raises:
            InvalidArgumentError: If a provider or the default locale cell is None
        """
        object.__setattr__(
            self, "providers", tuple(_check_provider(p) for p in self.providers)
        )
        if self.default_locale is None:
            raise InvalidArgumentError(library_message("cfg.nullDefaultLocale"))

    @classmethod
    def new_builder(cls) -> MessageBundleBuilder:
        """Create a new, empty builder."""
        return MessageBundleBuilder()

    @classmethod
    def for_path(
        cls,
        base_path: str,
        source_format: SourceFormat = SourceFormat.JSON,
        *,
        default_locale: DefaultLocale | None = None,
    ) -> Self:
        """Create a bundle loading message files lazily from disk.

        Files are named ``{base_path}_{locale}{suffix}``, with
        ``{base_path}{suffix}`` for the root locale.

        Args:
            base_path: Path prefix (e.g., "i18n/messages")
            source_format: File format
            default_locale: Default locale cell (process-wide cell if None)

        Example:
            >>> bundle = MessageBundle.for_path("i18n/messages")
            >>> bundle.get_message("greeting", locale="de_AT")
        """
        provider = LoadingMessageSourceProvider(PathSourceLoader(base_path, source_format))
        return cls((provider,), default_locale or DEFAULT_LOCALE)

    def _resolve_locale(self, locale: LocaleLike | None | UseDefault) -> LocaleCode:
        if locale is USE_DEFAULT:
            # Read on every call: changing the cell changes later lookups
            return self.default_locale.get()
        if locale is None:
            raise InvalidArgumentError(library_message("query.nullLocale"))
        return to_locale_code(locale)

    def _lookup(self, locale_code: LocaleCode, key: MessageKey) -> Message:
        for candidate in get_applicable(locale_code):
            for provider in self.providers:
                source = provider.get_message_source(candidate)
                if source is None:
                    continue
                message = source.get_key(key)
                if message is not None:
                    return message

        logger.debug("No message for key %r in locale %r; returning key", key, locale_code)
        return key

    def get_message(
        self,
        key: MessageKey,
        *,
        locale: LocaleLike | None | UseDefault = USE_DEFAULT,
    ) -> Message:
        """Get the message for a key.

        Args:
            key: Message key
            locale: Locale to resolve for; omitted means the default locale
                cell, read at call time

        Returns:
            The matching message, or the key itself if no provider has one

        Raises:
            InvalidArgumentError: If key or an explicitly passed locale is None
        """
        if key is None:
            raise InvalidArgumentError(library_message("query.nullKey"))
        return self._lookup(self._resolve_locale(locale), key)

    def format_message(
        self,
        key: MessageKey,
        *params: object,
        locale: LocaleLike | None | UseDefault = USE_DEFAULT,
    ) -> str:
        """Get a locale-dependent printf-formatted message.

        The message is looked up as with get_message() and formatted with
        msgsimple.formatting.printf() for the same locale. If the template
        references an argument that was not supplied, the template is returned
        unformatted (or the key, if no message was found).

        Args:
            key: Message key
            *params: Format arguments
            locale: Locale for lookup and number formatting; omitted means
                the default locale cell, read once for this call

        Returns:
            The formatted message

        Raises:
            InvalidArgumentError: If key or an explicitly passed locale is None
            IllegalFormatError: If the template is malformed or an argument
                does not fit its conversion

        Example:
            >>> bundle.format_message("cart.total", 1234.5, locale="de_DE")
            'Summe: 1.234,50 EUR'
        """
        if key is None:
            raise InvalidArgumentError(library_message("query.nullKey"))
        locale_code = self._resolve_locale(locale)
        template = self._lookup(locale_code, key)
        try:
            return printf(template, *params, locale=locale_code)
        except MissingFormatArgumentError as e:
            logger.debug("Returning unformatted template for key %r: %s", key, e)
            return template

    def thaw(self) -> MessageBundleBuilder:
        """Return a new builder holding a copy of this bundle's providers."""
        return MessageBundleBuilder(self)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MessageBundle(providers={len(self.providers)})"


class MessageBundleBuilder:
    """Mutable builder for MessageBundle.

    Mutators return the builder for chaining. freeze() snapshots the current
    providers into a new bundle; the builder can keep being modified and
    frozen again without affecting bundles already produced.

    Not thread-safe: build on one thread, freeze, then share the bundle.

    Example:
        >>> builder = MessageBundle.new_builder()
        >>> builder.append_source(english).append_provider(loading_provider)
        >>> bundle = builder.freeze()
    """

    __slots__ = ("_default_locale", "_providers")

    def __init__(self, bundle: MessageBundle | None = None) -> None:
        """Initialize an empty builder, or a copy of a bundle's configuration.

        Args:
            bundle: Bundle whose providers and default locale cell to copy
        """
        if bundle is None:
            self._providers: list[MessageSourceProvider] = []
            self._default_locale: DefaultLocale = DEFAULT_LOCALE
        else:
            self._providers = list(bundle.providers)
            self._default_locale = bundle.default_locale

    @property
    def providers(self) -> tuple[MessageSourceProvider, ...]:
        """Snapshot of the providers currently registered."""
        return tuple(self._providers)

    def append_provider(self, provider: MessageSourceProvider) -> Self:
        """Add a provider with the lowest priority."""
        self._providers.append(_check_provider(provider))
        return self

    def prepend_provider(self, provider: MessageSourceProvider) -> Self:
        """Add a provider with the highest priority."""
        self._providers.insert(0, _check_provider(provider))
        return self

    def append_source(self, source: MessageSource, locale: LocaleLike | None = None) -> Self:
        """Add a single source with the lowest priority.

        Args:
            source: Source to add
            locale: Serve the source for this locale only; None serves it
                for every locale
        """
        return self.append_provider(StaticMessageSourceProvider.with_single_source(source, locale))

    def prepend_source(self, source: MessageSource, locale: LocaleLike | None = None) -> Self:
        """Add a single source with the highest priority (see append_source)."""
        return self.prepend_provider(
            StaticMessageSourceProvider.with_single_source(source, locale)
        )

    def remove_provider(self, provider: MessageSourceProvider) -> Self:
        """Remove the first occurrence of a provider.

        Raises:
            InvalidArgumentError: If the provider is not registered
        """
        try:
            self._providers.remove(provider)
        except ValueError:
            raise InvalidArgumentError(library_message("cfg.providerNotFound")) from None
        return self

    def set_default_locale(self, default_locale: DefaultLocale) -> Self:
        """Use another default locale cell for lookups without a locale.

        Raises:
            InvalidArgumentError: If default_locale is None
        """
        if default_locale is None:
            raise InvalidArgumentError(library_message("cfg.nullDefaultLocale"))
        self._default_locale = default_locale
        return self

    def freeze(self) -> MessageBundle:
        """Create an immutable bundle from the current providers."""
        return MessageBundle(tuple(self._providers), self._default_locale)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MessageBundleBuilder(providers={len(self._providers)})"
