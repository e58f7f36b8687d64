"""Message sources: key to message resolvers for one locale.

Submodules:
    base  - MessageSource protocol
    map   - MapMessageSource (immutable in-memory table)
    files - JSON and gettext PO loaders producing MapMessageSource

Python 3.13+.
"""

from msgsimple.source.base import MessageSource
from msgsimple.source.files import load_json_source, load_po_source, load_source
from msgsimple.source.map import MapMessageSource

__all__ = [
    "MapMessageSource",
    "MessageSource",
    "load_json_source",
    "load_po_source",
    "load_source",
]
