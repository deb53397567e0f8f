"""Core utilities shared by the loading and runtime layers.

Exports:
    DepthGuard: Context manager for include depth limiting
    depth_clamp: Clamp a depth limit against the interpreter recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp

__all__ = ["DepthGuard", "depth_clamp"]
