"""Enumerations for phrasebook type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SourceKind(StrEnum):
    """How a source string addresses its document.

    StrEnum provides automatic string conversion: str(SourceKind.URL) == "url"
    """

    SEARCH_PATH = "search_path"
    """Relative name looked up on the search path: cp://l10n/app.xml or l10n/app.xml"""

    URL = "url"
    """Absolute URL: file:///srv/l10n/app.xml, https://example.com/app.xml"""


class MarkupElement(StrEnum):
    """Element names understood by the markup walker.

    StrEnum provides automatic string conversion: str(MarkupElement.MESSAGE) == "message"
    """

    ROOT = "translator"
    """Document root: <translator>...</translator>"""

    INCLUDE = "include"
    """Splice another document in place: <include>l10n/more.xml</include>"""

    MESSAGE = "message"
    """One source message with its translations"""

    FROM = "from"
    """Source text of a message"""

    TO = "to"
    """Container of dialect-labelled translations: <to><zh_CN>...</zh_CN></to>"""


__all__ = [
    "MarkupElement",
    "SourceKind",
]
