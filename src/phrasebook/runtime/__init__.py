"""Resolution runtime: locale-fallback resolver and its cache.

Python 3.13+.
"""

from .cache import Resolution, ResolutionCache
from .resolver import Resolver, find_translation

__all__ = [
    "Resolution",
    "ResolutionCache",
    "Resolver",
    "find_translation",
]
