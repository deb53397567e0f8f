"""Shared constants for phrasebook.

Centralized configuration constants used across the loading, catalog and
runtime packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Source addressing: default document and scheme names
- Input limits: size and include-depth bounds for loaded documents
- Network: request timeout for remote sources
- Fallback strings: what convenience APIs return for missing translations

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Source addressing
    "DEFAULT_SOURCE",
    "SEARCH_PATH_SCHEME",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_INCLUDE_DEPTH",
    # Network
    "DEFAULT_FETCH_TIMEOUT",
    # Fallback strings
    "FALLBACK_UNTRANSLATED",
]

# ============================================================================
# SOURCE ADDRESSING
# ============================================================================

# Scheme prefix for search-path sources ("cp://l10n/app.xml").
# Bare names without any scheme are treated the same way.
SEARCH_PATH_SCHEME: str = "cp"

# Document loaded by Translator() when no source is given.
DEFAULT_SOURCE: str = f"{SEARCH_PATH_SCHEME}://l10n/translator.xml"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum size of one markup document in bytes (10 MB).
# Prevents unbounded memory allocation from oversized or hostile sources.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Maximum nesting of <include> directives.
# Real catalogs nest two or three levels; anything deeper is malformed.
MAX_INCLUDE_DEPTH: int = 100

# ============================================================================
# NETWORK
# ============================================================================

# Seconds to wait for an http(s) source before giving up.
DEFAULT_FETCH_TIMEOUT: float = 10.0

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Returned by Translator.translate() when no candidate locale matched.
FALLBACK_UNTRANSLATED: str = ""
