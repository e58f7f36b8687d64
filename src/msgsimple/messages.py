"""Diagnostic messages of the library itself.

msgsimple phrases its own errors through a MessageBundle: the table below is
served by a MapMessageSource registered for every locale, and error sites
look their text up with library_message(). The bundle is created on first
use so that importing this module never imports the bundle machinery.

Python 3.13+.
"""

from __future__ import annotations

import functools
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from msgsimple.constants import ROOT_LOCALE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from msgsimple.bundle import MessageBundle

__all__ = ["BUILTIN_MESSAGES", "get_library_bundle", "library_message"]

BUILTIN_MESSAGES: Final[Mapping[str, str]] = MappingProxyType(
    {
        # Lookup arguments
        "query.nullKey": "cannot query null key",
        "query.nullLocale": "cannot query null locale",
        # Bundle and provider configuration
        "cfg.nullProvider": "provider cannot be null",
        "cfg.nullSource": "source cannot be null",
        "cfg.nullLoader": "loader cannot be null",
        "cfg.nullLocale": "locale cannot be null",
        "cfg.nullDefaultLocale": "default locale cell cannot be null",
        "cfg.providerNotFound": "provider is not registered in this builder",
        "cfg.map.nullKey": "message key cannot be null",
        "cfg.map.keyNotString": "message key must be a string, got %s",
        "cfg.map.nullValue": "message value cannot be null (key: %s)",
        "cfg.map.valueNotString": "message value must be a string (key: %s, type: %s)",
        # Source files
        "source.json.notObject": "JSON message source must contain an object, got %s",
        "source.json.notString": "JSON message value must be a string (key: %s, type: %s)",
        "source.json.tooDeep": "JSON message nesting exceeds %d levels (key: %s)",
        "source.encoding": "message file is not valid %s: %s",
        "loader.emptyBasePath": "base path cannot be empty",
        "loader.unsafeLocale": "unsafe locale code for file loading: '%s'",
        "loader.pathTraversal": "resolved path escapes root directory (locale: '%s')",
        # printf engine
        "format.missingArgument": "format specifier '%s' has no matching argument",
        "format.unknownConversion": "unknown format conversion '%s'",
        "format.illegalConversion": "conversion '%s' cannot format argument of type %s",
        "format.illegalCodePoint": "code point %s cannot be formatted with '%s'",
        "format.duplicateFlags": "duplicate flags '%s' in format specifier '%s'",
        "format.illegalFlags": "flags '%s' do not apply to format specifier '%s'",
        "format.missingWidth": "format specifier '%s' requires a width",
        "format.illegalPrecision": "format specifier '%s' does not accept a precision",
        "format.illegalIndex": "illegal argument index in format specifier '%s'",
    }
)


@functools.cache
def get_library_bundle() -> MessageBundle:
    """Return the bundle holding the library's own diagnostic messages."""
    # Lazy imports: bundle and provider modules import this one for their errors
    from msgsimple.bundle import MessageBundle  # noqa: PLC0415
    from msgsimple.default_locale import DefaultLocale  # noqa: PLC0415
    from msgsimple.source.map import MapMessageSource  # noqa: PLC0415

    return (
        MessageBundle.new_builder()
        .append_source(MapMessageSource(BUILTIN_MESSAGES))
        .set_default_locale(DefaultLocale(ROOT_LOCALE))
        .freeze()
    )


def library_message(key: str, *params: object) -> str:
    """Look up and format one of the library's diagnostic messages.

    Args:
        key: Key in BUILTIN_MESSAGES
        *params: printf arguments for the message

    Returns:
        Formatted diagnostic text

    Example:
        >>> library_message("query.nullKey")
        'cannot query null key'
    """
    return get_library_bundle().format_message(key, *params, locale=ROOT_LOCALE)
