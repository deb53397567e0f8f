"""Diagnostic system for translator errors.

Provides structured error diagnostics with codes, sources, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    IncludeDepthExceededError,
    MarkupError,
    SourceError,
    TranslatorError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "IncludeDepthExceededError",
    "MarkupError",
    "SourceError",
    "TranslatorError",
]
