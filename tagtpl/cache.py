"""
In-memory cache of compiled templates.

Keyed by resolved template path; an entry is valid while the recorded
modification time matches the source. The cache is read-mostly: lookups read
an immutable snapshot without locking, inserts copy the snapshot under a lock
and publish the new one in a single assignment.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .template.nodes import TemplateNode


@dataclass(frozen=True)
class CompiledTemplate:
    """
    Compiled template: AST root sequence and the source mtime it was built from.
    """
    path: str
    nodes: Tuple[TemplateNode, ...]
    mod_time: int


class TemplateCache:
    """
    Thread-safe path -> CompiledTemplate mapping.

    Two threads missing the same path may both compile it; the last insert
    wins, which is harmless since both entries are equivalent.
    """

    def __init__(self):
        self._entries: Dict[str, CompiledTemplate] = {}
        self._write_lock = threading.Lock()

    def get(self, path: str, mod_time: int) -> Optional[CompiledTemplate]:
        """
        Returns the cached template if it was compiled from the given mtime.

        Args:
            path: Resolved template path
            mod_time: Current modification time of the source

        Returns:
            Compiled template or None on a miss or a stale entry
        """
        entry = self._entries.get(path)
        if entry is not None and entry.mod_time == mod_time:
            return entry
        return None

    def put(self, entry: CompiledTemplate) -> None:
        """Stores an entry, replacing any previous one for the same path."""
        with self._write_lock:
            entries = dict(self._entries)
            entries[entry.path] = entry
            self._entries = entries

    def clear(self) -> None:
        """Drops all entries."""
        with self._write_lock:
            self._entries = {}

    def paths(self) -> List[str]:
        """Returns the cached paths."""
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CompiledTemplate", "TemplateCache"]
