"""Translator exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.
Resolution itself never raises: a missing translation is a normal None
result. These errors belong to catalog construction (finding, reading
and walking the markup documents).

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class TranslatorError(Exception):
    """Base exception for all phrasebook errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TranslatorError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class SourceError(TranslatorError):
    """A markup document could not be addressed or acquired.

    Examples:
    - Source string with no usable name
    - Search-path resource missing under every root
    - HTTP failure or unreadable file
    - Document larger than the configured limit
    """


class MarkupError(TranslatorError):
    """A markup document was acquired but its content is unusable.

    Examples:
    - Not well-formed XML
    - Unknown element under the document root
    - Dialect label that splits into no tags
    - <include> cycle
    """


class IncludeDepthExceededError(MarkupError):
    """Raised when <include> directives nest deeper than the limit."""
