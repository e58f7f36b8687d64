"""File-backed message sources.

Each loader reads one file into a MapMessageSource. Missing files surface
as FileNotFoundError so that loading providers can tell "no translation for
this locale" apart from "broken translation file".

Supported formats:
    JSON - an object of keys to strings; nested objects are flattened with
           '.' so {"menu": {"open": "Open"}} defines "menu.open"
    PO   - a gettext catalog, parsed with Babel

Python 3.13+. Uses Babel for gettext catalogs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from babel.messages.pofile import PoFileError, read_po

from msgsimple.constants import MAX_SOURCE_DEPTH
from msgsimple.enums import SourceFormat
from msgsimple.errors import SourceFormatError
from msgsimple.messages import library_message
from msgsimple.source.map import MapMessageSource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from msgsimple.types import Message, MessageKey

__all__ = ["load_json_source", "load_po_source", "load_source"]

logger = logging.getLogger(__name__)


def _flatten(
    tree: Mapping[str, object],
    prefix: str,
    into: dict[MessageKey, Message],
    source_path: str,
    depth: int = 1,
) -> None:
    for name, value in tree.items():
        key = f"{prefix}.{name}" if prefix else name
        match value:
            case str():
                into[key] = value
            case dict():
                if depth >= MAX_SOURCE_DEPTH:
                    raise SourceFormatError(
                        library_message("source.json.tooDeep", MAX_SOURCE_DEPTH, key),
                        source_path=source_path,
                    )
                _flatten(value, key, into, source_path, depth + 1)
            case _:
                raise SourceFormatError(
                    library_message("source.json.notString", key, type(value).__name__),
                    source_path=source_path,
                )


def load_json_source(path: str | Path) -> MapMessageSource:
    """Load a JSON message file.

    Args:
        path: Path to a UTF-8 JSON file holding an object

    Returns:
        MapMessageSource with flattened keys

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        SourceFormatError: If the file is not UTF-8, the JSON is invalid or
            not an object, nesting exceeds MAX_SOURCE_DEPTH, or a leaf value
            is not a string

    Example:
        >>> source = load_json_source("locales/messages_de.json")
        >>> source.get_key("menu.open")
        'Öffnen'
    """
    source_path = str(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceFormatError(
            library_message("source.encoding", "UTF-8", e.reason), source_path=source_path
        ) from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceFormatError(str(e), source_path=source_path) from e
    except RecursionError as e:
        # The decoder itself recurses once per nesting level
        raise SourceFormatError(
            library_message("source.json.tooDeep", MAX_SOURCE_DEPTH, "<root>"),
            source_path=source_path,
        ) from e

    if not isinstance(data, dict):
        raise SourceFormatError(
            library_message("source.json.notObject", type(data).__name__),
            source_path=source_path,
        )

    messages: dict[MessageKey, Message] = {}
    _flatten(data, "", messages, source_path)
    logger.debug("Loaded %d messages from %s", len(messages), source_path)
    return MapMessageSource(messages)


def load_po_source(path: str | Path) -> MapMessageSource:
    """Load a gettext PO catalog.

    Only translated, non-fuzzy entries without message context are kept.
    Plural entries are skipped: keys map to one flat string each.

    Args:
        path: Path to a .po file

    Returns:
        MapMessageSource keyed by msgid

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        SourceFormatError: If Babel rejects the catalog syntax or the file
            does not match its declared charset
    """
    source_path = str(path)
    with Path(path).open("rb") as fileobj:
        try:
            catalog = read_po(fileobj, abort_invalid=True)
        except PoFileError as e:
            raise SourceFormatError(str(e), source_path=source_path) from e
        except UnicodeDecodeError as e:
            raise SourceFormatError(
                library_message("source.encoding", e.encoding, e.reason),
                source_path=source_path,
            ) from e

    messages: dict[MessageKey, Message] = {}
    for message in catalog:
        # Header entry has an empty id; plural entries carry tuple ids
        if not message.id or not isinstance(message.id, str):
            continue
        if message.fuzzy or message.context or not message.string:
            continue
        if isinstance(message.string, str):
            messages[message.id] = message.string

    logger.debug("Loaded %d messages from %s", len(messages), source_path)
    return MapMessageSource(messages)


def load_source(path: str | Path, source_format: SourceFormat) -> MapMessageSource:
    """Load a message file in the given format."""
    match source_format:
        case SourceFormat.JSON:
            return load_json_source(path)
        case SourceFormat.PO:
            return load_po_source(path)
