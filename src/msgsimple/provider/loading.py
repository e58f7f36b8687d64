"""Lazily loading message source provider.

Provides the protocol for per-locale source loaders, a filesystem loader
with path-traversal protection, a provider that loads each locale on first
request, and result/summary records of those load attempts.

Components:
    MessageSourceLoader - Protocol for loading one locale's source
    PathSourceLoader - File loader ({base}_{locale}.json / .po)
    LoadingMessageSourceProvider - Loads each locale at most once
    SourceLoadResult - Immutable result of a single load attempt
    LoadSummary - Immutable aggregate of load attempts

Sources are never reloaded or expired once loaded.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Protocol

from msgsimple.constants import LOCALE_SEPARATOR, ROOT_LOCALE
from msgsimple.enums import LoadStatus, SourceFormat
from msgsimple.errors import InvalidArgumentError
from msgsimple.messages import library_message
from msgsimple.source.files import load_source

if TYPE_CHECKING:
    from msgsimple.source import MessageSource
    from msgsimple.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "MessageSourceLoader",
    # Concrete loader
    "PathSourceLoader",
    # Provider
    "LoadingMessageSourceProvider",
    # Load result types
    "SourceLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class MessageSourceLoader(Protocol):
    """Protocol for loading the message source of one locale.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders (databases,
    package resources, remote catalogs).

    Example:
        >>> class DictLoader:
        ...     def __init__(self, tables):
        ...         self.tables = tables
        ...     def load(self, locale: str) -> MessageSource:
        ...         try:
        ...             return MapMessageSource(self.tables[locale])
        ...         except KeyError:
        ...             raise FileNotFoundError(locale) from None
        ...     def describe_path(self, locale: str) -> str:
        ...         return f"dict:{locale}"
    """

    def load(self, locale: LocaleCode) -> MessageSource:
        """Load the source for a locale.

        Args:
            locale: Canonical locale code ('' is the root locale)

        Returns:
            The loaded message source

        Raises:
            FileNotFoundError: If no source exists for this locale
            OSError: If the source cannot be read
            ValueError: If the source content is malformed
        """
        ...

    def describe_path(self, locale: LocaleCode) -> str:
        """Return human-readable location for diagnostics."""
        ...


@dataclass(frozen=True, slots=True)
class PathSourceLoader:
    """File system source loader.

    The file for locale ``xx_YY`` is ``{base_path}_xx_YY{suffix}``; the root
    locale uses ``{base_path}{suffix}``. With base_path "i18n/messages" and
    JSON format: i18n/messages_de_DE.json, i18n/messages_de.json,
    i18n/messages.json.

    Security:
        Locale codes containing path separators or ".." are rejected, and all
        resolved paths are validated against a fixed root directory.

    Attributes:
        base_path: Path prefix shared by all locale files
        source_format: File format (decides suffix and parser)
        root_dir: Fixed root directory for traversal checks.
                  Defaults to the parent directory of base_path.
    """

    base_path: str
    source_format: SourceFormat = SourceFormat.JSON
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory.

        Raises:
            InvalidArgumentError: If base_path is empty
        """
        if not self.base_path:
            raise InvalidArgumentError(library_message("loader.emptyBasePath"))
        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            resolved = Path(self.base_path).parent.resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        if ".." in locale or "/" in locale or "\\" in locale:
            raise ValueError(library_message("loader.unsafeLocale", locale))

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def describe_path(self, locale: LocaleCode) -> str:
        """Return the file path used for a locale."""
        suffix = self.source_format.suffix
        if locale == ROOT_LOCALE:
            return f"{self.base_path}{suffix}"
        return f"{self.base_path}{LOCALE_SEPARATOR}{locale}{suffix}"

    def load(self, locale: LocaleCode) -> MessageSource:
        """Load the file for a locale.

        Raises:
            ValueError: If the locale is unsafe or the path escapes root_dir
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
            SourceFormatError: If the file content is malformed
        """
        self._validate_locale(locale)
        full_path = Path(self.describe_path(locale)).resolve()
        if not self._is_safe_path(self._resolved_root, full_path):
            raise ValueError(library_message("loader.pathTraversal", locale))
        return load_source(full_path, self.source_format)


@dataclass(frozen=True, slots=True)
class SourceLoadResult:
    """Result of loading the message source for one locale.

    Attributes:
        locale: Canonical locale code
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable location of the source
    """

    locale: LocaleCode
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if the source loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if no source existed for the locale."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if loading failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of source load results.

    Attributes:
        results: All individual load results, in load order
    """

    results: tuple[SourceLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of locales without a source."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any load failed with an error."""
        return self.errors > 0

    def get_errors(self) -> tuple[SourceLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_by_locale(self, locale: LocaleCode) -> SourceLoadResult | None:
        """Get the result for one locale, if it was attempted."""
        for result in self.results:
            if result.locale == locale:
                return result
        return None


class LoadingMessageSourceProvider:
    """Provider that loads each locale's source on first request.

    Every locale is attempted at most once. Missing or broken sources are
    recorded in the load summary and answered with the default source (which
    may be None) from then on; they are not retried.

    Thread-safe: attempts are serialized by an internal lock, so concurrent
    first requests for a locale trigger a single load.

    Example:
        >>> provider = LoadingMessageSourceProvider(PathSourceLoader("i18n/messages"))
        >>> bundle = MessageBundle.new_builder().append_provider(provider).freeze()
        >>> bundle.get_message("greeting", locale="de-AT")
        # Tries i18n/messages_de_AT.json, then messages_de.json, then messages.json
    """

    __slots__ = ("_default_source", "_load_results", "_loader", "_lock", "_sources")

    def __init__(
        self,
        loader: MessageSourceLoader,
        *,
        default_source: MessageSource | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            loader: Loader invoked once per requested locale
            default_source: Source returned for locales whose load did not succeed

        Raises:
            InvalidArgumentError: If loader is None
        """
        if loader is None:
            raise InvalidArgumentError(library_message("cfg.nullLoader"))
        self._loader = loader
        self._default_source = default_source
        self._sources: dict[LocaleCode, MessageSource | None] = {}
        self._load_results: list[SourceLoadResult] = []
        self._lock = Lock()

    def _load(self, locale: LocaleCode) -> SourceLoadResult:
        source_path = self._loader.describe_path(locale)
        try:
            source = self._loader.load(locale)
        except FileNotFoundError:
            logger.debug("No message source for locale %r at %s", locale, source_path)
            self._sources[locale] = None
            return SourceLoadResult(locale, LoadStatus.NOT_FOUND, source_path=source_path)
        except (OSError, ValueError) as e:
            # Permission errors, malformed files, path traversal
            logger.warning(
                "Failed to load message source for locale %r from %s: %s",
                locale,
                source_path,
                e,
            )
            self._sources[locale] = None
            return SourceLoadResult(locale, LoadStatus.ERROR, error=e, source_path=source_path)
        self._sources[locale] = source
        return SourceLoadResult(locale, LoadStatus.SUCCESS, source_path=source_path)

    def get_message_source(self, locale: LocaleCode) -> MessageSource | None:
        """Return the loaded source for the locale, loading it if needed."""
        with self._lock:
            if locale not in self._sources:
                self._load_results.append(self._load(locale))
            source = self._sources[locale]
        return source if source is not None else self._default_source

    def get_load_summary(self) -> LoadSummary:
        """Get summary of load attempts made so far."""
        with self._lock:
            return LoadSummary(results=tuple(self._load_results))

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"LoadingMessageSourceProvider(loader={self._loader!r})"
