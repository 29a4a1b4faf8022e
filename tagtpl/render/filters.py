"""
Built-in output filters for variable tags.

Filters are applied in declared order. Unknown filter names pass the value
through unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence

logger = logging.getLogger(__name__)

EscapeFunc = Callable[[str], str]

# Filters marking a value as already escaped
RAW_FILTERS = frozenset({"raw", "safe", "noescape"})

_TRANSFORMS: Dict[str, Callable[[str], str]] = {
    "upper": str.upper,
    "lower": str.lower,
    "trim": str.strip,
    "title": str.title,
    "capitalize": str.capitalize,
}


def apply_filter(name: str, text: str, escape: EscapeFunc) -> str:
    """
    Applies a single filter.

    Args:
        name: Filter name
        text: Current value
        escape: Escaping function used by the "escape" filter

    Returns:
        Filtered value
    """
    if name == "escape":
        return escape(text)
    if name in RAW_FILTERS:
        return text

    transform = _TRANSFORMS.get(name)
    if transform is None:
        logger.debug(f"Unknown filter '{name}', passing value through")
        return text
    return transform(text)


def apply_filters(filters: Sequence[str], text: str, escape: EscapeFunc) -> str:
    """Applies the filter pipeline in declared order."""
    for name in filters:
        text = apply_filter(name, text, escape)
    return text


def is_marked_raw(filters: Sequence[str]) -> bool:
    """True if any filter exempts the value from auto-escaping."""
    return any(name in RAW_FILTERS for name in filters)


__all__ = [
    "EscapeFunc",
    "RAW_FILTERS",
    "apply_filter",
    "apply_filters",
    "is_marked_raw",
]
