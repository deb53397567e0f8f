"""Canonicalization of raw message text extracted from markup.

Translation documents are hand-edited XML, so message text arrives with
the indentation of the surrounding markup, blank lines around the
content and backslash continuation markers. normalize() folds all of
that into the canonical string used as catalog key and translation.

Rules (one left-to-right pass):
    - Spaces and tabs at the start of a line are dropped.
    - Backslash + line break is a continuation: both are dropped and the
      next line's indentation is dropped as well.
    - Backslash + ordinary character keeps the backslash.
    - Backslash + whitespace, or backslash + backslash, drops the first
      backslash.
    - Backslash at the start of a line is dropped and ends the
      indentation, so whitespace after it is kept.
    - Other line breaks are kept, except one at the very start of the
      input and one at the very end of the output.

Python 3.13+. Zero external dependencies.
"""

__all__ = ["normalize"]

# Marker position that can never be "immediately before" any index.
_NO_BACKSLASH = -2


def normalize(raw: str) -> str:
    r"""Normalize raw message text into its canonical form.

    Pure and total: every string has a defined result, including "".

    Args:
        raw: Text content of one <from> element or one translation element

    Returns:
        Canonical text with indentation and incidental line breaks removed

    Example:
        >>> normalize("\n    Hello, \\\n    Jack!\n")
        'Hello, Jack!'
        >>> normalize("\n  text  \n")
        'text  '
        >>> normalize("C:\\temp")
        'C:\\temp'
        >>> normalize("line one\n    \\    indented\n")
        'line one\n    indented'
    """
    # Line endings normalized to LF before the pass (XML parsers already do this)
    text = raw.replace("\r\n", "\n").replace("\r", "\n")

    out: list[str] = []
    at_line_start = True
    backslash_at = _NO_BACKSLASH

    for index, char in enumerate(text):
        match char:
            case "\\":
                if at_line_start:
                    at_line_start = False
                    backslash_at = _NO_BACKSLASH
                else:
                    backslash_at = index
            case "\n":
                if backslash_at + 1 == index:
                    backslash_at = _NO_BACKSLASH
                elif index != 0:
                    out.append(char)
                at_line_start = True
            case " " | "\t":
                if not at_line_start:
                    out.append(char)
            case _:
                at_line_start = False
                if backslash_at + 1 == index:
                    out.append("\\")
                out.append(char)

    if out and out[-1] == "\n":
        out.pop()
    return "".join(out)
