"""
AST renderer.

Walks a compiled template and produces output text for a render context.
Evaluation anomalies (faulty conditions, non-sequence loop targets) never
abort rendering: they at most cause a branch to be skipped.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Sequence
from typing import Any, Iterable, Mapping, Optional

from .filters import EscapeFunc, apply_filters, is_marked_raw
from ..conditions.evaluator import eval_condition, eval_condition_with_value
from ..conditions.scope import LOOP_VAR, derive_context, lookup
from ..conditions.values import MISSING, format_value
from ..errors import ExpressionError
from ..template.nodes import (
    TemplateNode, TextNode, VarNode, IfNode, ForNode, SwitchNode,
)

logger = logging.getLogger(__name__)


def default_escape(text: str) -> str:
    """HTML-escapes text, including quotes."""
    return html.escape(text, quote=True)


class TemplateRenderer:
    """
    Evaluates AST nodes against a render context.

    The renderer holds no per-render state and can be shared between threads.
    """

    def __init__(self, autoescape: bool = True, escape: Optional[EscapeFunc] = None):
        """
        Initializes the renderer.

        Args:
            autoescape: Escape variable output unless marked raw
            escape: Escaping function (HTML escaping by default)
        """
        self.autoescape = autoescape
        self.escape = escape or default_escape

    def render(self, ast: Iterable[TemplateNode], context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Renders a node sequence.

        Args:
            ast: Root nodes of a compiled template
            context: Variables available to the template

        Returns:
            Concatenated output of all nodes
        """
        return self._evaluate_nodes(ast, context if context is not None else {})

    def _evaluate_nodes(self, nodes: Iterable[TemplateNode], context: Mapping[str, Any]) -> str:
        return "".join(self._evaluate_node(node, context) for node in nodes)

    def _evaluate_node(self, node: TemplateNode, context: Mapping[str, Any]) -> str:
        """Evaluates one AST node."""
        if isinstance(node, TextNode):
            return node.text
        elif isinstance(node, VarNode):
            return self._evaluate_var(node, context)
        elif isinstance(node, IfNode):
            return self._evaluate_if(node, context)
        elif isinstance(node, ForNode):
            return self._evaluate_for(node, context)
        elif isinstance(node, SwitchNode):
            return self._evaluate_switch(node, context)

        logger.warning(f"No evaluation rule for node type: {type(node).__name__}")
        return ""

    def _evaluate_var(self, node: VarNode, context: Mapping[str, Any]) -> str:
        """
        Interpolates a variable.

        A missing value is replaced by the default literal (or an empty string),
        then filters run in order, then auto-escaping applies.
        """
        value = lookup(context, node.path)
        if value is not MISSING:
            text = format_value(value)
        elif node.default:
            text = node.default
        else:
            text = ""

        text = apply_filters(node.filters, text, self.escape)

        if self.autoescape and not is_marked_raw(node.filters):
            text = self.escape(text)
        return text

    def _evaluate_if(self, node: IfNode, context: Mapping[str, Any]) -> str:
        """Renders the body of the first truthy branch, else the else body."""
        for branch in node.branches:
            try:
                matched = eval_condition(branch.condition, context)
            except ExpressionError as e:
                logger.debug(f"Condition '{branch.condition}' treated as false: {e}")
                continue
            if matched:
                return self._evaluate_nodes(branch.body, context)

        return self._evaluate_nodes(node.else_body, context)

    def _evaluate_for(self, node: ForNode, context: Mapping[str, Any]) -> str:
        """
        Renders the loop body once per element.

        Each iteration gets a derived context with the item, the optional
        index and loop metadata {Index, First, Last, Length}.
        """
        items = lookup(context, node.list_expr)
        if items is MISSING or not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
            return ""

        length = len(items)
        parts = []
        for index, item in enumerate(items):
            bindings = {
                node.item_var: item,
                LOOP_VAR: {
                    "Index": index,
                    "First": index == 0,
                    "Last": index == length - 1,
                    "Length": length,
                },
            }
            if node.index_var:
                bindings[node.index_var] = index
            parts.append(self._evaluate_nodes(node.body, derive_context(context, bindings)))

        return "".join(parts)

    def _evaluate_switch(self, node: SwitchNode, context: Mapping[str, Any]) -> str:
        """Renders the first matching case, else the default body."""
        value = lookup(context, node.expr)
        if value is MISSING:
            value = None

        for case in node.cases:
            if eval_condition_with_value(case.condition, value, context):
                return self._evaluate_nodes(case.body, context)

        return self._evaluate_nodes(node.default_body, context)


__all__ = ["TemplateRenderer", "default_escape"]
