"""
Template source access.

The engine consumes template files through two primitives: reading the raw
bytes and obtaining the modification timestamp. Both are grouped in a source
object so that tests and embedders can substitute their own storage.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import SourceUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class TemplateSource(Protocol):
    """
    Protocol of a template storage used by TemplateEngine.
    """

    def resolve_path(self, path: str) -> str:
        """
        Normalizes a template path into the cache key.

        Must not fail: on resolution problems the path is returned as is.
        """
        ...

    def stat_mod_time(self, path: str) -> int:
        """
        Returns the modification timestamp of a template.

        Raises:
            SourceUnavailableError: If the template cannot be stat'd
        """
        ...

    def read_source(self, path: str) -> bytes:
        """
        Returns the raw template bytes.

        Raises:
            SourceUnavailableError: If the template cannot be read
        """
        ...


class FileSystemSource:
    """Templates stored as files on the local filesystem."""

    def resolve_path(self, path: str) -> str:
        try:
            return os.path.abspath(path)
        except (OSError, ValueError) as e:
            logger.debug(f"Failed to resolve '{path}', using it as is: {e}")
            return path

    def stat_mod_time(self, path: str) -> int:
        try:
            st = Path(path).stat()
        except (OSError, ValueError) as e:
            raise SourceUnavailableError(path, e) from e
        return st.st_mtime_ns

    def read_source(self, path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except (OSError, ValueError) as e:
            raise SourceUnavailableError(path, e) from e


__all__ = ["TemplateSource", "FileSystemSource"]
