"""
Runtime value model for condition evaluation and rendering.

Template data is made of plain Python values: None, bool, int, float, str,
sequences, mappings and opaque records. This module defines how such values
are parsed from literals, formatted for output, coerced to numbers and
interpreted as booleans.
"""

from __future__ import annotations

import json
import numbers
import re
from collections.abc import Mapping, Sequence, Set
from typing import Any, Optional


class _Missing:
    """Marker for an absent value (lookup miss). Distinct from None."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_INT_RE = re.compile(r'^[+-]?\d+$')
_FLOAT_RE = re.compile(r'^[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)$')


def parse_literal(text: str) -> Any:
    """
    Parses a literal: quoted string, true/false, integer or float.

    Args:
        text: Stripped operand text

    Returns:
        Parsed value or MISSING if the text is not a literal
    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        if text[0] == '"':
            try:
                return json.loads(text)
            except ValueError:
                pass
        return text[1:-1]

    if text == "true":
        return True
    if text == "false":
        return False

    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)

    return MISSING


def literal_from_string(text: str) -> Any:
    """
    Interprets operand text as a literal, falling back to the raw string.

    Args:
        text: Operand text

    Returns:
        Literal value, or the stripped text itself
    """
    stripped = text.strip()
    value = parse_literal(stripped)
    return stripped if value is MISSING else value


def to_float(value: Any) -> Optional[float]:
    """
    Numeric coercion used by comparisons.

    Accepts any integer/floating value (booleans excluded) and strings that
    parse as a number.

    Returns:
        Float value or None if the value is not numeric
    """
    if isinstance(value, bool) or value is None or value is MISSING:
        return None
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str) and (_INT_RE.match(value) or _FLOAT_RE.match(value)):
        return float(value)
    return None


def format_value(value: Any) -> str:
    """
    Default string representation of a value in template output.

    None and missing values render as an empty string, booleans as
    "true"/"false".
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def cond_truthy(value: Any) -> bool:
    """
    Truthiness of a value used as a bare condition.

    Rules:
    - None / missing: false
    - bool: itself
    - str: non-empty
    - numbers: non-zero
    - sequences, mappings, sets: non-empty
    - anything else: true
    """
    if value is None or value is MISSING:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value != ""
    if isinstance(value, numbers.Number):
        return value != 0
    if isinstance(value, (Sequence, Mapping, Set)):
        return len(value) > 0
    return True


__all__ = [
    "MISSING",
    "parse_literal",
    "literal_from_string",
    "to_float",
    "format_value",
    "cond_truthy",
]
