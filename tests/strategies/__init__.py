"""Hypothesis strategies for phrasebook property-based testing.

Usage:
    from tests.strategies import canonical_texts, tag_paths
    from tests.strategies.catalog import message_lists
"""

from .catalog import (
    canonical_lines,
    canonical_texts,
    indented_texts,
    message_lists,
    tag_paths,
)

__all__ = [
    "canonical_lines",
    "canonical_texts",
    "indented_texts",
    "message_lists",
    "tag_paths",
]
