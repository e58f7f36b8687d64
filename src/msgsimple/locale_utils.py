"""Locale utilities: normalization, canonical codes, and fallback chains.

Centralizes locale handling used throughout the codebase. Every locale that
enters the library is converted once, at the boundary, into a canonical
locale code; providers, caches and the fallback generator only ever see
canonical codes.

Fallback chains drop the variant first and try script candidates before
territory-only ones; the root locale always comes last.

Python 3.13+. Uses Babel for locale identifier parsing.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

from babel.core import get_locale_identifier, parse_locale

from msgsimple.constants import (
    DEFAULT_SYSTEM_LOCALE,
    LOCALE_SEPARATOR,
    MAX_APPLICABLE_CACHE_SIZE,
    MAX_BABEL_LOCALE_CACHE_SIZE,
    ROOT_LOCALE,
)

if TYPE_CHECKING:
    from babel import Locale

    from msgsimple.types import LocaleCode, LocaleLike

__all__ = [
    "canonicalize_locale",
    "clear_locale_cache",
    "get_applicable",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
    "to_locale_code",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX separators.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR")

    Returns:
        Code with hyphens replaced and surrounding whitespace removed

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", LOCALE_SEPARATOR)


@functools.lru_cache(maxsize=MAX_APPLICABLE_CACHE_SIZE)
def _parse_parts(
    locale_code: str,
) -> tuple[str, str | None, str | None, str | None] | None:
    """Parse a normalized code into (language, territory, script, variant).

    Returns None for codes Babel cannot parse.
    """
    try:
        parts = parse_locale(locale_code)
    except ValueError:
        logger.debug("Locale code %r is not parseable; using raw segments", locale_code)
        return None
    # Babel appends a modifier element when '@modifier' is present
    language, territory, script, variant = parts[:4]
    return language, territory, script, variant


def canonicalize_locale(locale_code: str) -> LocaleCode:
    """Return the canonical form of a locale code.

    Language is lowercased, script title-cased, territory and variant
    uppercased; encoding and modifier suffixes are dropped. Codes Babel
    cannot parse are returned after separator normalization only.

    Args:
        locale_code: Locale code in BCP-47 or POSIX form

    Returns:
        Canonical locale code; ROOT_LOCALE ('') for an empty code

    Example:
        >>> canonicalize_locale("EN-us")
        'en_US'
        >>> canonicalize_locale("zh-hans-cn")
        'zh_Hans_CN'
        >>> canonicalize_locale("de_DE.UTF-8")
        'de_DE'
    """
    normalized = normalize_locale(locale_code)
    if not normalized:
        return ROOT_LOCALE
    parts = _parse_parts(normalized)
    if parts is None:
        return normalized
    return get_locale_identifier(parts)


def to_locale_code(locale: LocaleLike) -> LocaleCode:
    """Convert any accepted locale value to a canonical locale code.

    Args:
        locale: Locale string or babel.Locale instance

    Returns:
        Canonical locale code
    """
    if isinstance(locale, str):
        return canonicalize_locale(locale)
    # babel.Locale renders as its POSIX identifier
    return canonicalize_locale(str(locale))


@functools.lru_cache(maxsize=MAX_APPLICABLE_CACHE_SIZE)
def get_applicable(locale_code: LocaleCode) -> tuple[LocaleCode, ...]:
    """Return the fallback chain for a locale, most specific first.

    The chain is never empty, contains no duplicates, and always ends with
    ROOT_LOCALE. For a locale with language L, script S, territory C and
    variant V, the candidates are (absent parts skipped):

        L_S_C_V, L_S_C, L_S, L_C_V, L_C, L, root

    Codes Babel cannot parse lose one '_' segment at a time instead.

    Args:
        locale_code: Locale code (canonicalized before expansion)

    Returns:
        Tuple of canonical locale codes

    Example:
        >>> get_applicable("en-US")
        ('en_US', 'en', '')
        >>> get_applicable("zh_Hans_CN")
        ('zh_Hans_CN', 'zh_Hans', 'zh_CN', 'zh', '')
        >>> get_applicable("")
        ('',)
    """
    canonical = canonicalize_locale(locale_code)
    if canonical == ROOT_LOCALE:
        return (ROOT_LOCALE,)

    parts = _parse_parts(canonical)
    candidates: list[str] = []
    if parts is None:
        segments = canonical.split(LOCALE_SEPARATOR)
        candidates.extend(
            LOCALE_SEPARATOR.join(segments[:count]) for count in range(len(segments), 0, -1)
        )
    else:
        language, territory, script, variant = parts
        if script:
            if territory and variant:
                candidates.append(get_locale_identifier((language, territory, script, variant)))
            if territory:
                candidates.append(get_locale_identifier((language, territory, script, None)))
            candidates.append(get_locale_identifier((language, None, script, None)))
        if variant:
            candidates.append(get_locale_identifier((language, territory, None, variant)))
        if territory:
            candidates.append(get_locale_identifier((language, territory, None, None)))
        candidates.append(language)

    candidates.append(ROOT_LOCALE)
    # dict.fromkeys() removes duplicates while maintaining order
    return tuple(dict.fromkeys(candidates))


@functools.lru_cache(maxsize=MAX_BABEL_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result, avoiding repeated
    CLDR lookups on the formatting hot path.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid (including the root locale)

    Example:
        >>> get_babel_locale("de-DE").territory
        'DE'
    """
    # Lazy import: Babel loads CLDR data on first Locale use
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the memoized parse, fallback-chain and Babel locale caches."""
    _parse_parts.cache_clear()
    get_applicable.cache_clear()
    get_babel_locale.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> LocaleCode:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and returns a canonical code.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Canonical locale code

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        'de_DE'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return canonicalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return canonicalize_locale(value.split(".")[0])

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return DEFAULT_SYSTEM_LOCALE
