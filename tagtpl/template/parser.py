"""
Recursive descent parser for the tag-based template engine.

Turns the flat token list into a nested AST. Every block parser takes the
index of its opening token and returns the built node together with the
index of the first unconsumed token.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .nodes import (
    TemplateNode, TemplateAST, TextNode, VarNode,
    IfBranch, IfNode, ForNode, SwitchCase, SwitchNode,
)
from .tokens import Token, TokenKind, FOR_SEPARATOR
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


class TemplateParser:
    """
    Recursive parser for templates.

    Text, variables and nested blocks may appear at top level and inside any
    block body. Branch and closing tags are only valid inside the block that
    owns them; anywhere else they abort compilation.
    """

    # Tokens that produce a node on their own
    _CONTENT_KINDS = frozenset({
        TokenKind.TEXT,
        TokenKind.VAR,
        TokenKind.IF,
        TokenKind.FOR,
        TokenKind.SWITCH,
    })

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.length = len(tokens)

    def parse(self) -> TemplateAST:
        """
        Parses the whole token sequence into an AST.

        Returns:
            List of root nodes

        Raises:
            TemplateSyntaxError: On unclosed blocks or stray branch/closing tags
        """
        ast: List[TemplateNode] = []
        index = 0

        while index < self.length:
            token = self.tokens[index]
            if token.kind not in self._CONTENT_KINDS:
                raise TemplateSyntaxError(f"Unexpected token {token.kind.name}", token, index)
            node, index = self._parse_content(index)
            ast.append(node)

        logger.debug(f"Parsed {self.length} tokens into AST with {len(ast)} root nodes")
        return ast

    def _parse_content(self, index: int) -> Tuple[TemplateNode, int]:
        """Parses a text, variable or block node starting at index."""
        token = self.tokens[index]

        if token.kind == TokenKind.TEXT:
            return TextNode(text=token.value), index + 1
        if token.kind == TokenKind.VAR:
            return VarNode(path=token.value, default=token.default, filters=token.filters), index + 1
        if token.kind == TokenKind.IF:
            return self._parse_if(index)
        if token.kind == TokenKind.FOR:
            return self._parse_for(index)
        if token.kind == TokenKind.SWITCH:
            return self._parse_switch(index)

        raise TemplateSyntaxError(f"Unexpected token {token.kind.name}", token, index)

    def _parse_if(self, start: int) -> Tuple[IfNode, int]:
        """
        Parses if...elseif...else.../if.

        Args:
            start: Index of the IF token

        Returns:
            Tuple (if node, index after the closing /if)
        """
        branches: List[IfBranch] = []
        condition = self.tokens[start].value
        body: List[TemplateNode] = []
        in_else = False

        index = start + 1
        while index < self.length:
            token = self.tokens[index]

            if token.kind in self._CONTENT_KINDS:
                node, index = self._parse_content(index)
                body.append(node)
                continue

            if token.kind == TokenKind.ELSEIF:
                if in_else:
                    raise TemplateSyntaxError("'elseif' after 'else'", token, index)
                branches.append(IfBranch(condition=condition, body=tuple(body)))
                condition = token.value
                body = []
            elif token.kind == TokenKind.ELSE:
                if in_else:
                    raise TemplateSyntaxError("Multiple 'else' in one if block", token, index)
                branches.append(IfBranch(condition=condition, body=tuple(body)))
                body = []
                in_else = True
            elif token.kind == TokenKind.ENDIF:
                if in_else:
                    return IfNode(branches=tuple(branches), else_body=tuple(body)), index + 1
                branches.append(IfBranch(condition=condition, body=tuple(body)))
                return IfNode(branches=tuple(branches)), index + 1
            else:
                raise TemplateSyntaxError(f"Unexpected token {token.kind.name} inside if", token, index)

            index += 1

        raise TemplateSyntaxError("Unclosed if", self.tokens[start], start)

    def _parse_for(self, start: int) -> Tuple[ForNode, int]:
        """
        Parses for.../for.

        The FOR token value holds "binding:list_expr"; the binding is either
        "item" or "index, item".

        Args:
            start: Index of the FOR token

        Returns:
            Tuple (for node, index after the closing /for)
        """
        opening = self.tokens[start]
        header, separator, list_expr = opening.value.partition(FOR_SEPARATOR)
        list_expr = list_expr.strip()
        if not separator or not list_expr:
            raise TemplateSyntaxError("Invalid for tag", opening, start)

        index_var: Optional[str] = None
        if "," in header:
            index_part, _, item_var = header.partition(",")
            index_var = index_part.strip() or None
            item_var = item_var.strip()
        else:
            item_var = header.strip()
        if not item_var:
            raise TemplateSyntaxError("Invalid for tag: missing item variable", opening, start)

        body: List[TemplateNode] = []
        index = start + 1
        while index < self.length:
            token = self.tokens[index]

            if token.kind in self._CONTENT_KINDS:
                node, index = self._parse_content(index)
                body.append(node)
                continue

            if token.kind == TokenKind.ENDFOR:
                node = ForNode(
                    item_var=item_var,
                    list_expr=list_expr,
                    body=tuple(body),
                    index_var=index_var,
                )
                return node, index + 1

            raise TemplateSyntaxError(f"Unexpected token {token.kind.name} inside for", token, index)

        raise TemplateSyntaxError("Unclosed for", opening, start)

    def _parse_switch(self, start: int) -> Tuple[SwitchNode, int]:
        """
        Parses switch...case...default.../switch.

        A body with an empty recorded condition is the default body.
        Content before the first case belongs to no case and is dropped.

        Args:
            start: Index of the SWITCH token

        Returns:
            Tuple (switch node, index after the closing /switch)
        """
        opening = self.tokens[start]
        cases: List[SwitchCase] = []
        default_body: Tuple[TemplateNode, ...] = ()

        # None until the first case/default tag is seen
        current_condition: Optional[str] = None
        body: List[TemplateNode] = []

        def flush() -> None:
            nonlocal default_body
            if current_condition is None:
                if any(not isinstance(n, TextNode) or n.text.strip() for n in body):
                    logger.debug(f"Dropping content before the first case of switch '{opening.value}'")
            elif current_condition == "":
                default_body = tuple(body)
            else:
                cases.append(SwitchCase(condition=current_condition, body=tuple(body)))

        index = start + 1
        while index < self.length:
            token = self.tokens[index]

            if token.kind in self._CONTENT_KINDS:
                node, index = self._parse_content(index)
                body.append(node)
                continue

            if token.kind == TokenKind.CASE:
                flush()
                current_condition = token.value
                body = []
            elif token.kind == TokenKind.DEFAULT:
                flush()
                current_condition = ""
                body = []
            elif token.kind == TokenKind.ENDSWITCH:
                flush()
                node = SwitchNode(expr=opening.value, cases=tuple(cases), default_body=default_body)
                return node, index + 1
            else:
                raise TemplateSyntaxError(f"Unexpected token {token.kind.name} inside switch", token, index)

            index += 1

        raise TemplateSyntaxError("Unclosed switch", opening, start)


def parse(tokens: List[Token]) -> TemplateAST:
    """
    Convenience function for parsing a token list.

    Args:
        tokens: Tokens produced by tokenize()

    Returns:
        Template AST

    Raises:
        TemplateSyntaxError: On a structural error
    """
    parser = TemplateParser(tokens)
    return parser.parse()


__all__ = ["TemplateParser", "parse"]
