"""
Scoped variable lookup.

Resolves dotted paths against a render context and builds derived contexts
for nested scopes (loop bodies, switch cases). Derived contexts are fresh
shallow copies; the parent mapping is never mutated.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence, Set
from typing import Any, Dict

from .values import MISSING, parse_literal, literal_from_string

# Reserved context names
LOOP_VAR = "loop"
SWITCH_VAR = "__switch__"


def field_or_key(value: Any, name: str) -> Any:
    """
    Pulls a named member out of a value.

    Mappings are accessed by key; opaque records (plain objects, dataclasses,
    named tuples) by public, non-callable attribute. Scalars, strings and
    collections have no named members.

    Args:
        value: Container value
        name: Key or attribute name

    Returns:
        Member value or MISSING
    """
    if isinstance(value, Mapping):
        return value[name] if name in value else MISSING

    if value is None or isinstance(value, (str, bytes, numbers.Number, Set)):
        return MISSING
    if isinstance(value, Sequence) and not hasattr(value, "_fields"):
        return MISSING
    if name.startswith("_"):
        return MISSING

    attr = getattr(value, name, MISSING)
    if attr is not MISSING and callable(attr):
        return MISSING
    return attr


def lookup(context: Mapping[str, Any], path: str) -> Any:
    """
    Resolves a dotted path against the context.

    Literal-looking paths (quoted strings, numbers, true/false) resolve to
    their literal value.

    Args:
        context: Render context
        path: Dotted path, e.g. "user.address.city"

    Returns:
        Resolved value or MISSING
    """
    stripped = path.strip()
    if not stripped:
        return MISSING

    literal = parse_literal(stripped)
    if literal is not MISSING:
        return literal

    current: Any = context
    for segment in stripped.split("."):
        current = field_or_key(current, segment)
        if current is MISSING:
            return MISSING
    return current


def resolve_operand(context: Mapping[str, Any], text: str) -> Any:
    """
    Lookup-or-literal: context lookup first, literal interpretation on miss.
    """
    value = lookup(context, text)
    if value is MISSING:
        return literal_from_string(text)
    return value


def derive_context(parent: Mapping[str, Any], bindings: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Creates a derived context: a shallow copy of the parent plus bindings.

    Args:
        parent: Enclosing scope
        bindings: Names bound in the nested scope

    Returns:
        New context mapping
    """
    derived = dict(parent)
    derived.update(bindings)
    return derived


__all__ = [
    "LOOP_VAR",
    "SWITCH_VAR",
    "field_or_key",
    "lookup",
    "resolve_operand",
    "derive_context",
]
