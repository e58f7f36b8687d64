"""MessageSource protocol.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from msgsimple.types import Message, MessageKey

__all__ = ["MessageSource"]


@runtime_checkable
class MessageSource(Protocol):
    """Key to message resolver for one fixed locale.

    This is a Protocol (structural typing) rather than ABC so that any object
    with a matching get_key() method can serve messages: in-memory tables,
    parsed files, key-value stores.

    Example:
        >>> class UpperSource:
        ...     def get_key(self, key: str) -> str | None:
        ...         return key.upper()
    """

    def get_key(self, key: MessageKey) -> Message | None:
        """Return the message for a key.

        Args:
            key: Message key (never None)

        Returns:
            The message, or None if this source has no entry for the key
        """
        ...
