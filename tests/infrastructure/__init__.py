"""
Shared test infrastructure for tagtpl.

Modules:
- file_utils: Utilities for creating template files and controlling mtimes
"""

from .file_utils import write, set_mtime_ns, rewrite

__all__ = [
    "write",
    "set_mtime_ns",
    "rewrite",
]
