"""
Template compilation: lexer, AST nodes and parser.

Provides the composable primitives for compiling template text without
filesystem involvement.
"""

from .lexer import tokenize, TemplateLexer
from .parser import parse, TemplateParser
from .tokens import Token, TokenKind
from .nodes import (
    TemplateNode, TemplateAST, TextNode, VarNode,
    IfBranch, IfNode, ForNode, SwitchCase, SwitchNode,
    format_ast_tree,
)

__all__ = [
    # Main entry points
    "tokenize",
    "parse",

    # Components
    "TemplateLexer",
    "TemplateParser",
    "Token",
    "TokenKind",

    # AST
    "TemplateNode",
    "TemplateAST",
    "TextNode",
    "VarNode",
    "IfBranch",
    "IfNode",
    "ForNode",
    "SwitchCase",
    "SwitchNode",
    "format_ast_tree",
]
