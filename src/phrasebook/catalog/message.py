"""Message records and their construction from raw walker output.

Components:
    MessageNode - Raw message as discovered in a markup document
    Message - Normalized, immutable catalog record
    build_message - MessageNode -> Message (normalize + split labels)

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from phrasebook.catalog.types import DialectLabel, MessageText, TagPath
from phrasebook.diagnostics import Diagnostic, DiagnosticCode, MarkupError
from phrasebook.locale_utils import split_dialect_label
from phrasebook.text import normalize

__all__ = ["Message", "MessageNode", "build_message"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MessageNode:
    """Raw message as discovered in a markup document.

    Nothing is normalized yet: text is exactly what the document holds,
    indentation and continuation markers included.

    Attributes:
        source: Raw text of the <from> element(s)
        translations: (dialect label, raw translation) pairs in document order
        origin: Source string of the document the node came from
    """

    source: str
    translations: tuple[tuple[DialectLabel, str], ...] = ()
    origin: str | None = None


@dataclass(frozen=True, slots=True)
class Message:
    """A canonical source string plus its per-TagPath translations.

    The translations mapping is wrapped in a read-only proxy at
    construction, so a Message cannot change once it is in a catalog.

    Attributes:
        source: Normalized source-language text
        translations: Exact TagPath -> normalized translation
    """

    source: MessageText
    translations: Mapping[TagPath, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the translations mapping."""
        object.__setattr__(self, "translations", MappingProxyType(dict(self.translations)))

    @property
    def dialects(self) -> tuple[TagPath, ...]:
        """TagPaths that have a translation, in declaration order."""
        return tuple(self.translations)


def build_message(node: MessageNode) -> Message:
    """Normalize a raw MessageNode into a catalog Message.

    Every raw text (source and each translation) goes through normalize();
    every dialect label is split on '_' and '-'. When two labels split to
    the same TagPath, the later one wins.

    Args:
        node: Raw message from the markup walker

    Returns:
        Immutable Message

    Raises:
        MarkupError: If a dialect label contains no tag
    """
    source = normalize(node.source)
    translations: dict[TagPath, str] = {}
    for label, raw_text in node.translations:
        path = split_dialect_label(label)
        if not path:
            diagnostic = Diagnostic(
                code=DiagnosticCode.EMPTY_DIALECT_LABEL,
                message=f"Dialect label {label!r} of message {source!r} contains no tag",
                source=node.origin,
            )
            raise MarkupError(diagnostic)
        if path in translations:
            logger.warning(
                "Message %r declares dialect %s more than once; the last one wins",
                source,
                "_".join(path),
            )
        translations[path] = normalize(raw_text)
    return Message(source, translations)
