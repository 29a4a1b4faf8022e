"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TagTplError.

Programming errors and bugs should NOT inherit from TagTplError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .template.tokens import Token


class TagTplError(Exception):
    """
    Base class for all user-facing errors in tagtpl.

    These errors indicate problems that the user can fix:
    unreadable template files, malformed block structure,
    invalid configuration, etc.
    """
    pass


class SourceUnavailableError(TagTplError):
    """Template source cannot be read or stat'd."""

    def __init__(self, path: str, cause: Optional[Exception] = None):
        message = f"Template source unavailable: {path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
        self.path = path
        self.cause = cause


class TemplateSyntaxError(TagTplError):
    """Unterminated or malformed if/for/switch block, or a stray closing/branch tag."""

    def __init__(self, message: str, token: Optional["Token"] = None, index: Optional[int] = None):
        if token is not None:
            super().__init__(f"{message} at token {index} (raw: {token.raw!r})")
        else:
            super().__init__(message)
        self.token = token
        self.index = index


class ExpressionError(TagTplError):
    """Unsupported comparison or malformed logical expression in a condition."""
    pass


class ConfigLoadError(TagTplError, ValueError):
    """Invalid engine configuration."""
    pass


__all__ = [
    "TagTplError",
    "SourceUnavailableError",
    "TemplateSyntaxError",
    "ExpressionError",
    "ConfigLoadError",
]
