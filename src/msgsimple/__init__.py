"""msgsimple - localized message lookup with locale fallback.

Resolves human-readable messages from an ordered set of message source
providers, falling back from specific to general locales (de_AT -> de ->
root) and finally to the key itself. A printf-style formatting layer with
locale-aware number symbols sits on top of lookup.

Public API:
    MessageBundle - Immutable, thread-safe lookup over ordered providers
    MessageBundleBuilder - Mutable builder (freeze() / thaw() lifecycle)
    MapMessageSource - In-memory message source
    StaticMessageSourceProvider - Fixed locale to source provider
    LoadingMessageSourceProvider - Lazily loading provider
    PathSourceLoader - JSON / gettext PO file loader
    DefaultLocale - Injectable default locale cell (DEFAULT_LOCALE is process-wide)
    printf - Locale-aware printf engine

Exceptions:
    MessageBundleError - Base exception class
    InvalidArgumentError - None key, locale, provider or source
    IllegalFormatError - Malformed printf template or argument mismatch
    MissingFormatArgumentError - Template references a missing argument

Submodules:
    msgsimple.locale_utils - Locale canonicalization and fallback chains
    msgsimple.source - Message source protocol and implementations
    msgsimple.provider - Provider protocol and implementations
"""

from .bundle import MessageBundle, MessageBundleBuilder
from .default_locale import DEFAULT_LOCALE, DefaultLocale
from .enums import LoadStatus, SourceFormat
from .errors import (
    IllegalFormatError,
    InvalidArgumentError,
    MessageBundleError,
    MissingFormatArgumentError,
    SourceFormatError,
)
from .formatting import printf
from .locale_utils import get_applicable
from .provider import (
    LoadingMessageSourceProvider,
    MessageSourceProvider,
    PathSourceLoader,
    StaticMessageSourceProvider,
)
from .source import MapMessageSource, MessageSource

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("msgsimple")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_LOCALE",
    "DefaultLocale",
    "IllegalFormatError",
    "InvalidArgumentError",
    "LoadStatus",
    "LoadingMessageSourceProvider",
    "MapMessageSource",
    "MessageBundle",
    "MessageBundleBuilder",
    "MessageBundleError",
    "MessageSource",
    "MessageSourceProvider",
    "MissingFormatArgumentError",
    "PathSourceLoader",
    "SourceFormat",
    "SourceFormatError",
    "StaticMessageSourceProvider",
    "__version__",
    "get_applicable",
    "printf",
]
