"""Message catalog: types, message records and the Catalog itself.

Submodules:
    types   - PEP 695 type aliases (Tag, TagPath, MessageText, ...)
    message - MessageNode (raw), Message (normalized), build_message
    catalog - Catalog (ordered messages + cached lookup)

Python 3.13+.
"""

from phrasebook.catalog.catalog import Catalog
from phrasebook.catalog.message import Message, MessageNode, build_message
from phrasebook.catalog.types import DialectLabel, MessageText, Source, Tag, TagPath

__all__ = [
    "Catalog",
    "DialectLabel",
    "Message",
    "MessageNode",
    "MessageText",
    "Source",
    "Tag",
    "TagPath",
    "build_message",
]
