"""Text canonicalization for message and translation bodies.

Python 3.13+. Zero external dependencies.
"""

from .normalizer import normalize

__all__ = ["normalize"]
