"""In-memory message source backed by an immutable key/message table.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from msgsimple.errors import InvalidArgumentError
from msgsimple.messages import library_message
from msgsimple.types import Message, MessageKey

__all__ = ["MapMessageSource"]


class MapMessageSource:
    """Message source over a snapshot of a mapping.

    The mapping is copied at construction; later changes to the caller's
    dict are not visible through the source.

    Example:
        >>> source = MapMessageSource({"greeting": "Hello"})
        >>> source.get_key("greeting")
        'Hello'
        >>> source.get_key("missing") is None
        True
    """

    __slots__ = ("_messages",)

    def __init__(self, messages: Mapping[MessageKey, Message] | None = None) -> None:
        """Initialize from a key to message mapping.

        Args:
            messages: Messages to serve; None or empty yields an empty source

        Raises:
            InvalidArgumentError: If a key or value is None or not a string
        """
        snapshot: dict[MessageKey, Message] = {}
        for key, value in (messages or {}).items():
            if key is None:
                raise InvalidArgumentError(library_message("cfg.map.nullKey"))
            if not isinstance(key, str):
                raise InvalidArgumentError(
                    library_message("cfg.map.keyNotString", type(key).__name__)
                )
            if value is None:
                raise InvalidArgumentError(library_message("cfg.map.nullValue", key))
            if not isinstance(value, str):
                raise InvalidArgumentError(
                    library_message("cfg.map.valueNotString", key, type(value).__name__)
                )
            snapshot[key] = value
        self._messages: Mapping[MessageKey, Message] = MappingProxyType(snapshot)

    def get_key(self, key: MessageKey) -> Message | None:
        """Return the message for a key, or None."""
        return self._messages.get(key)

    def keys(self) -> Iterator[MessageKey]:
        """Iterate over the keys this source defines."""
        return iter(self._messages)

    def as_dict(self) -> dict[MessageKey, Message]:
        """Return a mutable copy of the message table."""
        return dict(self._messages)

    def __len__(self) -> int:
        """Return the number of messages."""
        return len(self._messages)

    def __contains__(self, key: object) -> bool:
        """Check whether the source defines a key."""
        return key in self._messages

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MapMessageSource(size={len(self._messages)})"
