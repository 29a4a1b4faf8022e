"""
Condition evaluation and the runtime value model.

Provides lookup-or-literal operand resolution, comparison and truthiness
rules, and switch case matching.
"""

from .evaluator import (
    split_logical,
    eval_condition,
    eval_simple_cond,
    compare_values,
    eval_condition_with_value,
)
from .scope import LOOP_VAR, SWITCH_VAR, field_or_key, lookup, resolve_operand, derive_context
from .values import MISSING, parse_literal, literal_from_string, to_float, format_value, cond_truthy

__all__ = [
    # Evaluation
    "split_logical",
    "eval_condition",
    "eval_simple_cond",
    "compare_values",
    "eval_condition_with_value",

    # Scopes
    "LOOP_VAR",
    "SWITCH_VAR",
    "field_or_key",
    "lookup",
    "resolve_operand",
    "derive_context",

    # Values
    "MISSING",
    "parse_literal",
    "literal_from_string",
    "to_float",
    "format_value",
    "cond_truthy",
]
