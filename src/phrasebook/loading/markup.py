"""XML markup walker producing the catalog's raw message stream.

Walks a translation document and every document it includes, yielding
MessageNodes in document order with included messages spliced in at
the point of the <include> element.

Document shape:
    <translator>
      <include>l10n/common.xml</include>
      <message>
        <from>Hello, Sauntor!</from>
        <to>
          <zh_CN>适然，你好！</zh_CN>
          <zh-TW>適然，你好！</zh-TW>
        </to>
      </message>
    </translator>

Text is handed over raw; normalization is the catalog's job.

Components:
    MarkupReader - Reads a source and its includes into MessageNodes
    DocumentLoadResult - Immutable record of one document read
    LoadSummary - Immutable aggregate of all documents read for a catalog

Python 3.13+.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from phrasebook.catalog.message import MessageNode
from phrasebook.constants import MAX_INCLUDE_DEPTH
from phrasebook.core import DepthGuard
from phrasebook.diagnostics import Diagnostic, DiagnosticCode, MarkupError, SourceError
from phrasebook.enums import MarkupElement

if TYPE_CHECKING:
    from phrasebook.catalog.types import Source
    from phrasebook.loading.loaders import ResourceLoader

__all__ = [
    "DocumentLoadResult",
    "LoadSummary",
    "MarkupReader",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DocumentLoadResult:
    """Result of reading one markup document.

    Attributes:
        source: Source string the document was requested by
        source_path: Human-readable location reported by the loader
        message_count: Messages declared directly in this document
        include_depth: 0 for the root document, +1 per <include> level
    """

    source: Source
    source_path: str
    message_count: int
    include_depth: int = 0

    @property
    def is_included(self) -> bool:
        """Check if the document was reached through an <include>."""
        return self.include_depth > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the documents read while building a catalog.

    Attributes:
        results: One entry per document, in the order documents were read
    """

    results: tuple[DocumentLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(documents={self.total_documents}, "
            f"messages={self.total_messages}, "
            f"max_depth={self.max_include_depth})"
        )

    @property
    def total_documents(self) -> int:
        """Number of documents read."""
        return len(self.results)

    @property
    def total_messages(self) -> int:
        """Messages declared across all documents."""
        return sum(r.message_count for r in self.results)

    @property
    def max_include_depth(self) -> int:
        """Deepest include level reached."""
        return max((r.include_depth for r in self.results), default=0)

    @property
    def sources(self) -> tuple[Source, ...]:
        """Source strings in read order."""
        return tuple(r.source for r in self.results)

    def get_included(self) -> tuple[DocumentLoadResult, ...]:
        """Get results for documents reached through <include>."""
        return tuple(r for r in self.results if r.is_included)


def _local_name(tag: object) -> str:
    """Element name without any '{namespace}' prefix."""
    return str(tag).rpartition("}")[2]


def _text_of(element: ET.Element) -> str:
    """Concatenated text of an element and all its descendants."""
    return "".join(element.itertext())


class MarkupReader:
    """Reads a markup document and its includes into MessageNodes.

    Includes are loaded with the same loader and the source string exactly
    as written; relative paths are not resolved against the including
    document. Include recursion is bounded by a DepthGuard and cycles are
    rejected.

    Example:
        >>> reader = MarkupReader(DefaultResourceLoader())
        >>> nodes, summary = reader.read("cp://l10n/translator.xml")
        >>> summary.total_documents
        2
    """

    __slots__ = ("_loader", "_max_include_depth")

    def __init__(
        self,
        loader: ResourceLoader,
        *,
        max_include_depth: int = MAX_INCLUDE_DEPTH,
    ) -> None:
        """Initialize reader.

        Args:
            loader: Loader used for the root document and every include
            max_include_depth: Maximum <include> nesting
        """
        self._loader = loader
        self._max_include_depth = max_include_depth

    def read(self, source: Source) -> tuple[tuple[MessageNode, ...], LoadSummary]:
        """Read source and all documents it includes.

        Args:
            source: Source string of the root document

        Returns:
            Tuple of (message nodes in document order, load summary)

        Raises:
            SourceError: If any document cannot be loaded
            MarkupError: If any document is malformed or includes form a cycle
            IncludeDepthExceededError: If includes nest too deeply
        """
        nodes: list[MessageNode] = []
        results: list[DocumentLoadResult] = []
        guard = DepthGuard(max_depth=self._max_include_depth)
        self._read_document(source, (), guard, nodes, results)
        return tuple(nodes), LoadSummary(results=tuple(results))

    def _read_document(
        self,
        source: Source,
        chain: tuple[Source, ...],
        guard: DepthGuard,
        nodes: list[MessageNode],
        results: list[DocumentLoadResult],
    ) -> None:
        try:
            data = self._loader.load(source)
        except SourceError as e:
            if chain and e.diagnostic is not None and e.diagnostic.include_chain is None:
                raise SourceError(replace(e.diagnostic, include_chain=chain)) from e
            raise

        root = self._parse(source, data, chain)
        children = list(root)
        message_count = sum(
            1 for child in children if _local_name(child.tag) == MarkupElement.MESSAGE
        )
        results.append(
            DocumentLoadResult(
                source=source,
                source_path=self._loader.describe_path(source),
                message_count=message_count,
                include_depth=guard.depth,
            )
        )
        logger.debug(
            "Read %s (%d messages, include depth %d)", source, message_count, guard.depth
        )

        for child in children:
            match _local_name(child.tag):
                case MarkupElement.MESSAGE:
                    nodes.append(self._message_node(child, source))
                case MarkupElement.INCLUDE:
                    included = _text_of(child).strip()
                    if not included:
                        continue
                    if included == source or included in chain:
                        diagnostic = Diagnostic(
                            code=DiagnosticCode.INCLUDE_CYCLE,
                            message=f"Include cycle: {included!r} is already being read",
                            source=source,
                            include_chain=chain,
                        )
                        raise MarkupError(diagnostic)
                    with guard:
                        self._read_document(included, (*chain, source), guard, nodes, results)
                case other:
                    diagnostic = Diagnostic(
                        code=DiagnosticCode.UNKNOWN_ELEMENT,
                        message=f"Unknown element <{other}>",
                        source=source,
                        hint="Only <message> and <include> may appear under <translator>",
                        include_chain=chain or None,
                    )
                    raise MarkupError(diagnostic)

    @staticmethod
    def _parse(source: Source, data: bytes, chain: tuple[Source, ...]) -> ET.Element:
        try:
            root = ET.fromstring(data)  # noqa: S314 - documents are trusted catalog files
        except ET.ParseError as e:
            line, column = e.position
            diagnostic = Diagnostic(
                code=DiagnosticCode.INVALID_MARKUP,
                message=f"Invalid markup at line {line}, column {column}: {e}",
                source=source,
                include_chain=chain or None,
            )
            raise MarkupError(diagnostic) from e

        if _local_name(root.tag) != MarkupElement.ROOT:
            diagnostic = Diagnostic(
                code=DiagnosticCode.UNEXPECTED_ROOT,
                message=f"Expected <{MarkupElement.ROOT}> root element, found <{_local_name(root.tag)}>",
                source=source,
                include_chain=chain or None,
            )
            raise MarkupError(diagnostic)
        return root

    @staticmethod
    def _message_node(element: ET.Element, source: Source) -> MessageNode:
        """Collect raw from-text and labelled translations of a <message>."""
        raw_from = "".join(
            _text_of(el) for el in element.iter() if _local_name(el.tag) == MarkupElement.FROM
        )
        translations = tuple(
            (_local_name(child.tag), _text_of(child))
            for container in element.iter()
            if _local_name(container.tag) == MarkupElement.TO
            for child in container
        )
        return MessageNode(source=raw_from, translations=translations, origin=source)
