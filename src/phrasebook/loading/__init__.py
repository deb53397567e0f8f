"""Loading package: resource loaders and the markup walker.

Submodules:
    loaders - parse_source, ResourceLoader protocol, SearchPathResourceLoader,
              URLResourceLoader, DefaultResourceLoader
    markup  - MarkupReader, DocumentLoadResult, LoadSummary

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from phrasebook.loading.loaders import (
    DefaultResourceLoader,
    ResourceLoader,
    SearchPathResourceLoader,
    URLResourceLoader,
    parse_source,
)
from phrasebook.loading.markup import DocumentLoadResult, LoadSummary, MarkupReader

__all__ = [
    # Addressing
    "parse_source",
    # Loader protocol and implementations
    "ResourceLoader",
    "SearchPathResourceLoader",
    "URLResourceLoader",
    "DefaultResourceLoader",
    # Markup walking
    "MarkupReader",
    # Load tracking
    "DocumentLoadResult",
    "LoadSummary",
]
