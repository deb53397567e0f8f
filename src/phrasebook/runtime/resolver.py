"""Locale-fallback resolution over a catalog's messages.

Given a message and a requested TagPath such as ('zh', 'CN', 'HK'), the
resolver tries the prefixes of the request from longest to shortest
against each message with that exact source text:

    ('zh', 'CN', 'HK') -> ('zh', 'CN') -> ('zh',)

Matching is exact on prefixes of the request: a stored ('zh', 'CN')
translation never answers a request for ('zh', 'TW').

Messages are scanned in document order and the first message that
matches any prefix wins, even if a later message with the same source
text would offer a more specific translation.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

from phrasebook.runtime.cache import Resolution, ResolutionCache

if TYPE_CHECKING:
    from phrasebook.catalog.message import Message
    from phrasebook.catalog.types import MessageText, TagPath

__all__ = ["Resolver", "find_translation"]

logger = logging.getLogger(__name__)


def find_translation(
    messages: Iterable[Message], source: MessageText, requested: TagPath
) -> str | None:
    """Scan messages for the best translation of source (no caching).

    Args:
        messages: Catalog messages in document order
        source: Normalized message text to look up
        requested: Requested TagPath, most general first

    Returns:
        Translation for the longest matching prefix of the first message
        that matches at all, or None
    """
    for message in messages:
        if message.source != source:
            continue
        for length in range(len(requested), 0, -1):
            translation = message.translations.get(requested[:length])
            if translation is not None:
                return translation
    return None


class Resolver:
    """Caching resolver bound to one immutable sequence of messages.

    Every result, "no match" included, is cached under the composite key
    (source, requested). A cache hit never rescans the messages; scans are
    counted in scan_count and reported to the optional on_scan callback.

    Thread Safety:
        Safe for concurrent resolve() calls. Concurrent misses on the same
        key may both scan; the first stored result is returned to both.

    Example:
        >>> from phrasebook.catalog import Message
        >>> resolver = Resolver([Message("hi", {("zh",): "A", ("zh", "CN"): "B"})])
        >>> resolver.resolve("hi", ("zh", "CN", "TW"))
        'B'
        >>> resolver.resolve("hi", ("zh", "TW"))
        'A'
        >>> resolver.resolve("bye", ("zh",)) is None
        True
    """

    __slots__ = ("_cache", "_lock", "_messages", "_on_scan", "_scan_count")

    def __init__(
        self,
        messages: Sequence[Message],
        *,
        cache: ResolutionCache | None = None,
        on_scan: Callable[[MessageText, TagPath], None] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            messages: Catalog messages in document order (not copied; must
                not change afterwards)
            cache: Cache to use; a fresh ResolutionCache by default
            on_scan: Optional callback invoked with (source, requested)
                each time the messages are scanned (i.e. on cache misses)
        """
        self._messages = messages
        self._cache = cache if cache is not None else ResolutionCache()
        self._on_scan = on_scan
        self._scan_count = 0
        self._lock = threading.Lock()

    def resolve(self, source: MessageText, requested: Iterable[str]) -> str | None:
        """Resolve source for the requested tags.

        Args:
            source: Normalized message text
            requested: Requested tags, most general first

        Returns:
            Translation, or None if no message/prefix combination matched
        """
        path = tuple(requested)
        cached = self._cache.get(source, path)
        if cached is not None:
            logger.debug("Cache hit for %r %s", source, path)
            return cached.translation

        with self._lock:
            self._scan_count += 1
        if self._on_scan is not None:
            self._on_scan(source, path)

        translation = find_translation(self._messages, source, path)
        if translation is None:
            logger.debug("No translation for %r %s", source, path)
        return self._cache.put(source, path, Resolution(translation)).translation

    @property
    def cache(self) -> ResolutionCache:
        """The cache backing this resolver."""
        return self._cache

    @property
    def scan_count(self) -> int:
        """Number of times the messages were scanned (cache misses).

        Thread-safe.
        """
        with self._lock:
            return self._scan_count
