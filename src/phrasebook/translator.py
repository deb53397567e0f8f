"""Translator: lazily loaded catalog with locale-aware lookup.

A Translator owns a source string and a loader. The first lookup reads
the source (and everything it includes), builds the Catalog and keeps it
for the translator's lifetime; construction is cheap and never touches
the loader.

Lookup flavours:
    tr(message, tags)          - core lookup, tags most general first
    tr_locale(message, locale) - Babel Locale or locale code
    translate(message, locales) - first matching locale, "" when none

Thread Safety:
    The catalog is built at most once, under a lock, even when the first
    lookups arrive concurrently. After that, lookups only touch the
    catalog's thread-safe resolution cache.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from phrasebook.catalog import Catalog, MessageNode
from phrasebook.constants import DEFAULT_SOURCE, FALLBACK_UNTRANSLATED, MAX_INCLUDE_DEPTH
from phrasebook.loading import DefaultResourceLoader, LoadSummary, MarkupReader
from phrasebook.locale_utils import get_system_locale, locale_to_tags

if TYPE_CHECKING:
    from babel import Locale

    from phrasebook.catalog.types import MessageText, Source, TagPath
    from phrasebook.loading import ResourceLoader

__all__ = ["FallbackInfo", "TranslationContext", "Translator"]

logger = logging.getLogger(__name__)

# Source reported by translators built from in-memory nodes.
_MEMORY_SOURCE = "<memory>"


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when translate() finds a message
    through a locale other than the first candidate.

    Attributes:
        message: The message that was translated
        requested_locale: The first candidate locale
        resolved_locale: The locale that produced the translation

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.message!r} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> translator = Translator(on_fallback=log_fallback)
    """

    message: MessageText
    requested_locale: str
    resolved_locale: str


class Translator:
    """Translates messages using a catalog loaded from a markup source.

    Example:
        >>> translator = Translator("cp://l10n/translator.xml")
        >>> translator.tr("Hello, Sauntor! Welcome to China!", ["zh", "CN"])
        '适然，你好！欢迎来到中国！'
        >>> translator.translate("Hello, Sauntor! Welcome to China!", ["de_DE", "zh_CN"])
        '适然，你好！欢迎来到中国！'
        >>> translator.tr("Not translated", ["zh", "CN"]) is None
        True
    """

    __slots__ = (
        "_build_lock",
        "_catalog",
        "_load_summary",
        "_loader",
        "_max_include_depth",
        "_nodes",
        "_on_fallback",
        "_on_scan",
        "_source",
    )

    def __init__(
        self,
        source: Source = DEFAULT_SOURCE,
        loader: ResourceLoader | None = None,
        *,
        max_include_depth: int = MAX_INCLUDE_DEPTH,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        on_scan: Callable[[MessageText, TagPath], None] | None = None,
    ) -> None:
        """Initialize translator. Nothing is loaded until first use.

        Args:
            source: Source of the root document (default: cp://l10n/translator.xml)
            loader: Loader for the root document and its includes
                (DefaultResourceLoader when None)
            max_include_depth: Maximum <include> nesting
            on_fallback: Optional callback invoked when translate() resolves
                a message through a fallback locale
            on_scan: Optional callback invoked on every catalog scan
                (resolution cache miss)
        """
        self._source = source
        self._loader: ResourceLoader = loader if loader is not None else DefaultResourceLoader()
        self._max_include_depth = max_include_depth
        self._on_fallback = on_fallback
        self._on_scan = on_scan
        self._nodes: tuple[MessageNode, ...] | None = None
        self._catalog: Catalog | None = None
        self._load_summary: LoadSummary | None = None
        self._build_lock = threading.Lock()

    @classmethod
    def from_nodes(
        cls,
        nodes: Iterable[MessageNode],
        *,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        on_scan: Callable[[MessageText, TagPath], None] | None = None,
    ) -> Translator:
        """Create a translator over in-memory message nodes (no loader).

        Args:
            nodes: Raw message nodes in document order
            on_fallback: Optional fallback callback (see __init__)
            on_scan: Optional scan callback (see __init__)

        Returns:
            Translator whose catalog is built from nodes on first use
        """
        translator = cls(_MEMORY_SOURCE, on_fallback=on_fallback, on_scan=on_scan)
        translator._nodes = tuple(nodes)
        return translator

    @property
    def source(self) -> Source:
        """Source string of the root document."""
        return self._source

    @property
    def is_loaded(self) -> bool:
        """Check if the catalog has been built."""
        return self._catalog is not None

    @property
    def catalog(self) -> Catalog:
        """The catalog, built on first access.

        Thread-safe via double-checked locking. A failed build is not
        remembered: the next access tries again.

        Raises:
            SourceError: If a document cannot be loaded
            MarkupError: If a document is malformed
        """
        catalog = self._catalog
        if catalog is not None:
            return catalog
        with self._build_lock:
            if self._catalog is None:
                self._catalog = self._build_catalog()
            return self._catalog

    def _build_catalog(self) -> Catalog:
        if self._nodes is not None:
            nodes = self._nodes
            summary = LoadSummary(results=())
        else:
            reader = MarkupReader(self._loader, max_include_depth=self._max_include_depth)
            nodes, summary = reader.read(self._source)
        catalog = Catalog.from_nodes(nodes, on_scan=self._on_scan)
        self._load_summary = summary
        logger.info(
            "Loaded %d messages from %s (%d documents)",
            len(catalog),
            self._source,
            summary.total_documents,
        )
        return catalog

    def tr(self, message: MessageText, tags: Sequence[str]) -> str | None:
        """Translate message to the dialect given by tags.

        Args:
            message: Original message text
            tags: Target dialect, most general first (e.g. ['zh', 'CN'])

        Returns:
            The translation for the most specific matching prefix of tags,
            or None if no translation suits it
        """
        return self.catalog.lookup(message, tags)

    def tr_locale(self, message: MessageText, locale: Locale | str) -> str | None:
        """Translate message to the dialect of a locale.

        Args:
            message: Original message text
            locale: Babel Locale or locale code ("zh_CN", "zh-CN-TW")

        Returns:
            Translation or None
        """
        return self.tr(message, locale_to_tags(locale))

    def translate(self, message: MessageText, locales: Iterable[Locale | str]) -> str:
        """Translate message using the first locale that has a translation.

        Args:
            message: Original message text
            locales: Candidate locales in priority order

        Returns:
            The first translation found, or "" if no locale matches
        """
        primary: Locale | str | None = None
        for index, locale in enumerate(locales):
            if index == 0:
                primary = locale
            translated = self.tr_locale(message, locale)
            if translated is None:
                continue
            if self._on_fallback is not None and index > 0:
                self._on_fallback(
                    FallbackInfo(
                        message=message,
                        requested_locale=str(primary),
                        resolved_locale=str(locale),
                    )
                )
            return translated
        return FALLBACK_UNTRANSLATED

    def get_load_summary(self) -> LoadSummary:
        """Get the documents read to build the catalog (builds it if needed).

        Returns:
            LoadSummary; empty for translators created with from_nodes()
        """
        _ = self.catalog
        if self._load_summary is None:
            return LoadSummary(results=())
        return self._load_summary

    def get_cache_stats(self) -> dict[str, int | float] | None:
        """Get resolution cache statistics.

        Returns:
            Cache statistics, or None if the catalog has not been built yet
        """
        catalog = self._catalog
        return catalog.get_cache_stats() if catalog is not None else None

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        state = f"messages={len(self._catalog)}" if self._catalog is not None else "unloaded"
        return f"Translator(source={self._source!r}, {state})"


@dataclass(frozen=True, slots=True)
class TranslationContext:
    """A translator paired with the caller's candidate locales.

    Example:
        >>> context = TranslationContext(Translator(), ("zh_CN_TW", "en"))
        >>> context("Hello, Sauntor!")
        '您好，适然先生！'

    Attributes:
        translator: Translator to look messages up in
        locales: Candidate locales in priority order
    """

    translator: Translator
    locales: tuple[Locale | str, ...]

    def __post_init__(self) -> None:
        """Accept any iterable of locales."""
        object.__setattr__(self, "locales", tuple(self.locales))

    @classmethod
    def for_system_locale(cls, translator: Translator) -> TranslationContext:
        """Create a context for the detected system locale."""
        return cls(translator, (get_system_locale(),))

    def translate(self, message: MessageText) -> str:
        """Translate message for this context's locales ("" if none match)."""
        return self.translator.translate(message, self.locales)

    def __call__(self, message: MessageText) -> str:
        return self.translate(message)
