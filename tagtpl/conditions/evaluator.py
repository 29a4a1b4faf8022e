"""
Condition evaluator.

Interprets condition expressions of if/elseif tags and switch cases.

Grammar:
condition → operand (("and" | "or") operand)*
operand   → value (rel_op value)?
rel_op    → "==" | "!=" | ">=" | "<=" | ">" | "<"
value     → quoted string | true | false | number | dotted identifier

Logical operators are folded strictly left to right with no precedence:
"a and b or c" is "(a and b) or c".
"""

from __future__ import annotations

import logging
import operator
import re
from typing import Any, Callable, Dict, List, Mapping

from .scope import SWITCH_VAR, derive_context, lookup, resolve_operand
from .values import MISSING, cond_truthy, format_value, literal_from_string, parse_literal, to_float
from ..errors import ExpressionError

logger = logging.getLogger(__name__)

# First occurrence wins; at one position longer operators are tried first
_COMPARISON_RE = re.compile(r'\s*(==|!=|>=|<=|>|<)\s*')

# Whitespace separated words; quoted parts stay inside one word
_WORD_RE = re.compile(r'''(?:"[^"]*"|'[^']*'|[^\s"']|["'])+''')

_IDENT_PATH_RE = re.compile(r'^\w+(?:\.\w+)*$')

# "." standing for the scrutinee, alone or followed by a field path
_SCRUTINEE_FIELD_RE = re.compile(r'''(?<![\w."'])\.(?=[A-Za-z_])''')
_SCRUTINEE_RE = re.compile(r'''(?<![\w."'])\.(?![\w."'])''')

_LOGICAL_OPERATORS = ("and", "or")

_COMPARATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def split_logical(expr: str) -> List[str]:
    """
    Splits an expression into operands and logical operators.

    Args:
        expr: Condition expression

    Returns:
        Alternating list [operand, op, operand, ...] in source order
    """
    parts: List[str] = []
    current: List[str] = []

    for word in _WORD_RE.findall(expr):
        if word in _LOGICAL_OPERATORS:
            parts.append(" ".join(current))
            parts.append(word)
            current = []
        else:
            current.append(word)

    if current:
        parts.append(" ".join(current))
    return parts


def eval_condition(expr: str, context: Mapping[str, Any]) -> bool:
    """
    Evaluates a condition expression.

    Args:
        expr: Condition expression
        context: Render context

    Returns:
        Result of the left-to-right fold; an empty expression is false

    Raises:
        ExpressionError: On a malformed logical operator or an unsupported comparison
    """
    parts = split_logical(expr)
    if not parts:
        return False

    if len(parts) % 2 == 0:
        raise ExpressionError(f"Dangling logical operator '{parts[-1]}' in '{expr}'")

    operands = parts[0::2]
    if any(not operand for operand in operands):
        raise ExpressionError(f"Missing operand around logical operator in '{expr}'")

    result = eval_simple_cond(operands[0], context)
    for op, operand in zip(parts[1::2], operands[1:]):
        value = eval_simple_cond(operand, context)
        if op == "and":
            result = result and value
        elif op == "or":
            result = result or value
        else:
            raise ExpressionError(f"Unknown logical operator '{op}'")

    return result


def eval_simple_cond(cond: str, context: Mapping[str, Any]) -> bool:
    """
    Evaluates a single operand: a comparison or a truthiness test.

    A bare dotted identifier that is not found in the context is false.
    """
    match = _COMPARISON_RE.search(cond)
    if match:
        left = cond[:match.start()].strip()
        right = cond[match.end():].strip()
        return compare_values(
            resolve_operand(context, left),
            resolve_operand(context, right),
            match.group(1),
        )

    value = lookup(context, cond)
    if value is MISSING:
        # A lookup miss is falsy; only non-identifier text falls back to a literal
        if _IDENT_PATH_RE.match(cond.strip()):
            return False
        value = literal_from_string(cond)
    return cond_truthy(value)


def compare_values(a: Any, b: Any, op: str) -> bool:
    """
    Compares two resolved values.

    Rules:
    - both numeric (numbers or numeric strings): numeric comparison
    - both booleans: only == and != are supported
    - otherwise: lexicographic comparison of the formatted values

    Raises:
        ExpressionError: For unknown operators and ordering of booleans
    """
    comparator = _COMPARATORS.get(op)
    if comparator is None:
        raise ExpressionError(f"Unknown comparison operator '{op}'")

    a_num = to_float(a)
    b_num = to_float(b)
    if a_num is not None and b_num is not None:
        return comparator(a_num, b_num)

    if isinstance(a, bool) and isinstance(b, bool):
        if op in ("==", "!="):
            return comparator(a, b)
        raise ExpressionError(f"Unsupported comparison '{op}' between booleans")

    return comparator(format_value(a), format_value(b))


def eval_condition_with_value(case_expr: str, value: Any, context: Mapping[str, Any]) -> bool:
    """
    Matches a switch case expression against the scrutinee.

    Forms:
    - ".", "value", "__switch__": truthiness of the scrutinee
    - "a, b, 3": any segment equal to the scrutinee, or any segment that is a
      condition evaluating true
    - an expression with a comparison operator: full condition
    - anything else: literal equality, then full condition if the
      expression is one

    Inside conditions a standalone "." refers to the scrutinee and ".name"
    to its field. Evaluation errors are treated as no match.

    Args:
        case_expr: Case expression
        value: Scrutinee value
        context: Render context

    Returns:
        True if the case matches
    """
    scope = derive_context(context, {SWITCH_VAR: value})
    expr = case_expr.strip()
    if not expr:
        return False

    if expr in (".", "value", SWITCH_VAR):
        return cond_truthy(value)

    if "," in expr:
        for segment in expr.split(","):
            segment = segment.strip()
            if not segment:
                continue
            if _literal_equals(value, segment):
                return True
            if _is_condition(segment, scope) and _try_condition(segment, scope):
                return True
        return False

    if _COMPARISON_RE.search(expr):
        return _try_condition(expr, scope)

    if _literal_equals(value, expr):
        return True
    if _is_condition(expr, scope):
        return _try_condition(expr, scope)
    return False


def _literal_equals(value: Any, text: str) -> bool:
    """Typed equality with the literal, then equality of formatted values."""
    literal = literal_from_string(text)
    try:
        if compare_values(value, literal, "=="):
            return True
    except ExpressionError:
        pass
    return format_value(value) == format_value(literal)


def _is_condition(text: str, scope: Mapping[str, Any]) -> bool:
    """
    Checks whether a case segment should be evaluated as a condition.

    Plain literals never are: they only match by equality.
    """
    if _COMPARISON_RE.search(text):
        return True
    if len(split_logical(text)) > 1:
        return True
    substituted = _substitute_scrutinee(text)
    return parse_literal(substituted) is MISSING and lookup(scope, substituted) is not MISSING


def _try_condition(expr: str, scope: Mapping[str, Any]) -> bool:
    """Evaluates a case condition; errors mean no match."""
    substituted = _substitute_scrutinee(expr)
    try:
        return eval_condition(substituted, scope)
    except ExpressionError as e:
        logger.debug(f"Case condition '{expr}' failed: {e}")
        return False


def _substitute_scrutinee(expr: str) -> str:
    """Replaces "." and ".field" shorthands with the scrutinee binding."""
    expr = _SCRUTINEE_FIELD_RE.sub(SWITCH_VAR + ".", expr)
    return _SCRUTINEE_RE.sub(SWITCH_VAR, expr)


__all__ = [
    "split_logical",
    "eval_condition",
    "eval_simple_cond",
    "compare_values",
    "eval_condition_with_value",
]
