"""phrasebook - dialect-aware message translation from XML catalogs.

Translates source-language message strings into the most specific
available dialect. Translations live in hand-edited XML documents whose
text is canonicalized (indentation, continuation lines, escapes) before
lookup; lookups fall back from the most specific dialect to the most
general one and are cached for the translator's lifetime.

Public API:
    Translator - Lazily loaded catalog with tr/tr_locale/translate
    TranslationContext - Translator paired with candidate locales
    Catalog - Ordered messages with cached locale-fallback lookup
    Message - Normalized message record
    normalize - Canonicalize raw message text

Exceptions:
    TranslatorError - Base exception class
    SourceError - Document could not be addressed or acquired
    MarkupError - Document content unusable (XML, elements, includes)

Submodules:
    phrasebook.catalog - Catalog, Message, MessageNode and type aliases
    phrasebook.loading - Resource loaders and the markup walker
    phrasebook.runtime - Resolver and resolution cache
    phrasebook.locale_utils - Dialect label and locale decomposition
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .catalog import Catalog, Message
from .diagnostics import MarkupError, SourceError, TranslatorError
from .text import normalize
from .translator import TranslationContext, Translator

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("phrasebook")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Catalog",
    "MarkupError",
    "Message",
    "SourceError",
    "TranslationContext",
    "Translator",
    "TranslatorError",
    "__version__",
    "normalize",
]
