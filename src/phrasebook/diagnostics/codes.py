"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages for catalog loading.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Source errors (addressing and acquiring documents)
        2000-2999: Markup errors (document structure and includes)
    """

    # Source errors (1000-1999)
    BAD_SOURCE = 1001
    SOURCE_NOT_FOUND = 1002
    SOURCE_UNREADABLE = 1003
    SOURCE_TOO_LARGE = 1004
    UNSUPPORTED_SCHEME = 1005
    UNSAFE_SOURCE_PATH = 1006

    # Markup errors (2000-2999)
    INVALID_MARKUP = 2001
    UNEXPECTED_ROOT = 2002
    UNKNOWN_ELEMENT = 2003
    EMPTY_DIALECT_LABEL = 2004
    INCLUDE_CYCLE = 2005
    INCLUDE_DEPTH_EXCEEDED = 2006


# Control characters are escaped when rendering so that hostile source
# strings or document contents cannot forge extra log lines.
_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x1b": "\\x1b"})


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context to tell
    which document failed and why, without parsing the message string.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        source: Source string of the document involved (None if not applicable)
        hint: Suggestion for fixing the error
        severity: Error severity level
        include_chain: Sources of the enclosing documents, outermost first
    """

    code: DiagnosticCode
    message: str
    source: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"
    include_chain: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[SOURCE_NOT_FOUND]: Can't load "l10n/app.xml" from the search path
              --> cp://l10n/app.xml
              = included from: cp://l10n/translator.xml
              = help: Check that the file exists under one of the search roots

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message.translate(_ESCAPES)}"]
        if self.source is not None:
            lines.append(f"  --> {self.source.translate(_ESCAPES)}")
        if self.include_chain:
            chain = " <- ".join(s.translate(_ESCAPES) for s in reversed(self.include_chain))
            lines.append(f"  = included from: {chain}")
        if self.hint:
            lines.append(f"  = help: {self.hint.translate(_ESCAPES)}")
        return "\n".join(lines)
