"""Nesting limit for <include> directives.

The markup walker recurses once per <include>. Without a bound, a long or
generated include chain ends in RecursionError deep inside the XML
parser; DepthGuard stops the walk earlier with a diagnostic naming the
limit.

One guard belongs to one read (one MarkupReader.read call), so no
locking is needed.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from phrasebook.constants import MAX_INCLUDE_DEPTH
from phrasebook.diagnostics import Diagnostic, DiagnosticCode, IncludeDepthExceededError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Interpreter frames kept free for the walker, loader and parser calls
# made at the deepest include level.
_RESERVED_FRAMES = 50


@dataclass(slots=True)
class DepthGuard:
    """Counts nested includes and refuses to go past max_depth.

    Entering the guard is one include level down, leaving it is one
    level back up:

        with guard:
            reader._read_document(included, ...)

    The root document is read at depth 0, so max_depth=N admits include
    chains of length N.

    Attributes:
        max_depth: Deepest include level allowed (clamped on construction)
        current_depth: Include level of the document being read
    """

    max_depth: int = MAX_INCLUDE_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # A refused level leaves current_depth unchanged (no __exit__ follows).
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Include level of the document being read."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """True when no further include level may be entered."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Raise if another include level would exceed max_depth.

        Raises:
            IncludeDepthExceededError: At the limit
        """
        if not self.is_exceeded():
            return
        diagnostic = Diagnostic(
            code=DiagnosticCode.INCLUDE_DEPTH_EXCEEDED,
            message=f"Maximum include depth ({self.max_depth}) exceeded",
            hint="Flatten the include chain or check for runaway generated includes",
        )
        raise IncludeDepthExceededError(diagnostic)


def depth_clamp(requested_depth: int, reserve_frames: int = _RESERVED_FRAMES) -> int:
    """Limit an include depth to what the interpreter stack can hold.

    Args:
        requested_depth: Include depth asked for by the caller
        reserve_frames: Frames kept free below sys.getrecursionlimit()

    Returns:
        requested_depth, or the largest safe depth if that is smaller

    Example:
        >>> depth_clamp(10)
        10
        >>> depth_clamp(10**6) == sys.getrecursionlimit() - 50
        True
    """
    ceiling = sys.getrecursionlimit() - reserve_frames
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Include depth %d does not fit under the recursion limit %d; using %d",
        requested_depth,
        sys.getrecursionlimit(),
        ceiling,
    )
    return ceiling
