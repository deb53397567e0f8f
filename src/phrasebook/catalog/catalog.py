"""Catalog: the ordered, immutable collection of a translator's messages.

The catalog is the composition root of the core. It is built from the
markup walker's MessageNode stream (normalizing every text on the way
in) and answers lookup(message, tags) through a caching Resolver.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence

from phrasebook.catalog.message import Message, MessageNode, build_message
from phrasebook.catalog.types import MessageText, TagPath
from phrasebook.runtime import ResolutionCache, Resolver

__all__ = ["Catalog"]

logger = logging.getLogger(__name__)


class Catalog:
    """Ordered sequence of Messages with cached locale-fallback lookup.

    Message order is document order of discovery and is significant:
    when several messages share a source text, the first one that
    matches any prefix of the requested tags wins.

    Example:
        >>> catalog = Catalog.from_nodes([
        ...     MessageNode("\\n    Hello!\\n", (("zh_CN", "你好！"), ("zh", "您好！"))),
        ... ])
        >>> catalog.lookup("Hello!", ["zh", "CN", "TW"])
        '你好！'
        >>> catalog.lookup("Hello!", ["zh", "TW"])
        '您好！'
        >>> catalog.lookup("Hello!", ["de"]) is None
        True
    """

    __slots__ = ("_messages", "_resolver")

    def __init__(
        self,
        messages: Iterable[Message] = (),
        *,
        cache: ResolutionCache | None = None,
        on_scan: Callable[[MessageText, TagPath], None] | None = None,
    ) -> None:
        """Initialize catalog from already-normalized messages.

        Args:
            messages: Messages in document order
            cache: Resolution cache to use (fresh one by default)
            on_scan: Optional callback invoked on every catalog scan
        """
        self._messages: tuple[Message, ...] = tuple(messages)
        self._resolver = Resolver(self._messages, cache=cache, on_scan=on_scan)

    @classmethod
    def from_nodes(
        cls,
        nodes: Iterable[MessageNode],
        *,
        cache: ResolutionCache | None = None,
        on_scan: Callable[[MessageText, TagPath], None] | None = None,
    ) -> Catalog:
        """Build a catalog from raw walker output, preserving order.

        Args:
            nodes: Raw message nodes in document order (includes spliced in)
            cache: Resolution cache to use (fresh one by default)
            on_scan: Optional callback invoked on every catalog scan

        Returns:
            New Catalog

        Raises:
            MarkupError: If a node carries an unusable dialect label
        """
        catalog = cls((build_message(node) for node in nodes), cache=cache, on_scan=on_scan)
        logger.debug("Catalog built with %d messages", len(catalog))
        return catalog

    def lookup(self, message: MessageText, tags: Sequence[str]) -> str | None:
        """Translate message for the requested tags.

        Args:
            message: Normalized source text
            tags: Requested tags, most general first (e.g. ['zh', 'CN'])

        Returns:
            Translation, or None when nothing matches
        """
        return self._resolver.resolve(message, tags)

    def has_message(self, message: MessageText) -> bool:
        """Check if any message has this source text."""
        return any(m.source == message for m in self._messages)

    def get_sources(self) -> list[MessageText]:
        """Get all distinct source texts in first-appearance order."""
        return list(dict.fromkeys(m.source for m in self._messages))

    def get_dialects(self) -> list[TagPath]:
        """Get all distinct TagPaths with at least one translation."""
        seen: dict[TagPath, None] = {}
        for message in self._messages:
            seen.update(dict.fromkeys(message.translations))
        return list(seen)

    def get_cache_stats(self) -> dict[str, int | float]:
        """Get resolution cache statistics plus the scan count."""
        stats = self._resolver.cache.get_stats()
        stats["scans"] = self._resolver.scan_count
        return stats

    @property
    def messages(self) -> tuple[Message, ...]:
        """Messages in document order."""
        return self._messages

    @property
    def resolver(self) -> Resolver:
        """Resolver answering lookups for this catalog."""
        return self._resolver

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Catalog(messages={len(self._messages)}, cached={len(self._resolver.cache)})"
