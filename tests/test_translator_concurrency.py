"""Concurrency tests for lazy catalog construction and cached lookups.

Python 3.13+.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from phrasebook import Translator
from tests.helpers.loaders import DictResourceLoader, document, include, message

THREADS = 16


def _translator(delay: float = 0.0) -> tuple[Translator, DictResourceLoader]:
    loader = DictResourceLoader(
        {
            "main.xml": document(
                message("hi", zh="您好", zh_CN="你好"), include("more.xml")
            ),
            "more.xml": document(message("bye", zh="再见")),
        },
        delay=delay,
    )
    return Translator("main.xml", loader), loader


class TestConcurrentFirstAccess:
    def test_catalog_built_once(self) -> None:
        translator, loader = _translator(delay=0.05)
        barrier = threading.Barrier(THREADS)

        def first_lookup(_: int) -> str | None:
            barrier.wait()
            return translator.tr("hi", ["zh", "CN"])

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            results = list(pool.map(first_lookup, range(THREADS)))

        assert results == ["你好"] * THREADS
        assert loader.calls == ["main.xml", "more.xml"]

    def test_all_threads_see_same_catalog(self) -> None:
        translator, _ = _translator(delay=0.02)
        barrier = threading.Barrier(THREADS)

        def grab(_: int) -> int:
            barrier.wait()
            return id(translator.catalog)

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            ids = set(pool.map(grab, range(THREADS)))

        assert len(ids) == 1


class TestConcurrentLookups:
    def test_results_stable_under_contention(self) -> None:
        translator, _ = _translator()
        requests = [
            ("hi", ("zh", "CN", "TW")),
            ("hi", ("zh", "TW")),
            ("bye", ("zh", "CN")),
            ("bye", ("de",)),
        ]
        expected = {request: translator.tr(*request) for request in requests}

        def lookup(index: int) -> tuple[tuple[str, tuple[str, ...]], str | None]:
            request = requests[index % len(requests)]
            return request, translator.tr(*request)

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            for request, result in pool.map(lookup, range(THREADS * 50)):
                assert result == expected[request]

        stats = translator.get_cache_stats()
        assert stats is not None
        assert stats["size"] == len(requests)
        assert stats["scans"] == len(requests)
