"""Type aliases for the message lookup domain.

Provides semantic type aliases used throughout the package and by user code
when annotating bundle call sites.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "LocaleCode",
    "LocaleLike",
    "Message",
    "MessageKey",
]

LocaleCode: TypeAlias = str
"""Canonical POSIX-style locale code (e.g., 'en_US', 'zh_Hans_CN'); root is ''."""

LocaleLike: TypeAlias = "str | Locale"
"""Anything accepted as a locale: BCP-47 or POSIX string, or a Babel Locale."""

MessageKey: TypeAlias = str
"""Identifier of a message (e.g., 'query.nullKey')."""

Message: TypeAlias = str
"""Resolved, human-readable message text."""
