"""Thread-safe resolution cache for translation lookups.

Remembers the outcome of every (message, requested TagPath) resolution,
including "no match", for the lifetime of a catalog.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - Additive only: no eviction, no invalidation (the catalog never changes)
    - Write-once per key: a second put() for a key keeps the first value
    - Immutable cache keys (message text, TagPath tuple)

Cache Key Structure:
    (source, requested)
    - source: str (normalized message text)
    - requested: tuple[str, ...] (requested tags, most general first)

Thread Safety:
    All operations protected by RLock. Safe for concurrent reads and writes.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phrasebook.catalog.types import MessageText, TagPath

__all__ = ["Resolution", "ResolutionCache"]

# Internal type alias for cache keys (prefixed with _ per naming convention)
type _CacheKey = tuple[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of one resolution, as stored in the cache.

    Wrapping the optional translation lets the cache tell a recorded
    "no match" apart from a key it has never seen.

    Attributes:
        translation: Resolved translation, or None for "no match"
    """

    translation: str | None

    @property
    def found(self) -> bool:
        """Check if the resolution produced a translation."""
        return self.translation is not None


class ResolutionCache:
    """Thread-safe, additive cache of resolution results.

    Transparent to caller - returns None on cache miss.

    Attributes:
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_misses", "_write_conflicts")

    def __init__(self) -> None:
        """Initialize an empty resolution cache."""
        self._cache: dict[_CacheKey, Resolution] = {}
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._write_conflicts = 0

    def get(self, source: MessageText, requested: TagPath) -> Resolution | None:
        """Get cached resolution if exists.

        Thread-safe. Returns None on cache miss; a recorded "no match" is
        returned as Resolution(None).

        Args:
            source: Normalized message text
            requested: Requested TagPath

        Returns:
            Cached Resolution or None
        """
        key = (source, requested)
        with self._lock:
            resolution = self._cache.get(key)
            if resolution is None:
                self._misses += 1
            else:
                self._hits += 1
            return resolution

    def put(self, source: MessageText, requested: TagPath, resolution: Resolution) -> Resolution:
        """Store a resolution unless the key is already present.

        Two threads missing on the same key concurrently both resolve it;
        whichever stores first wins and both callers end up with the same
        stored value.

        Args:
            source: Normalized message text
            requested: Requested TagPath
            resolution: Result to record

        Returns:
            The resolution now stored under the key
        """
        key = (source, requested)
        with self._lock:
            existing = self._cache.get(key)
            if existing is not None:
                self._write_conflicts += 1
                return existing
            self._cache[key] = resolution
            return resolution

    def __contains__(self, key: object) -> bool:
        """Check whether a (source, requested) key has been recorded.

        Thread-safe. Does not count as a hit or miss.
        """
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        """Get current cache size.

        Thread-safe.

        Returns:
            Number of entries in cache
        """
        with self._lock:
            return len(self._cache)

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Thread-safe. Returns current metrics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
            - unmatched (int): Entries recording "no match"
            - write_conflicts (int): put() calls that found the key already stored
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "unmatched": sum(1 for r in self._cache.values() if not r.found),
                "write_conflicts": self._write_conflicts,
            }

    @property
    def hits(self) -> int:
        """Number of cache hits.

        Thread-safe.
        """
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses.

        Thread-safe.
        """
        with self._lock:
            return self._misses
