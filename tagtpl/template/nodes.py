"""
AST nodes for the tag-based template engine.

Nodes are immutable; a parent exclusively owns the tuples of its child nodes.
Evaluation lives in tagtpl.render.renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Literal text.

    Emitted to the output unchanged.
    """
    text: str


@dataclass(frozen=True)
class VarNode(TemplateNode):
    """
    Variable interpolation <{ path | "default" | filter ... }>.

    The default literal replaces a missing value; filters are applied
    in declared order.
    """
    path: str
    default: Optional[str] = None
    filters: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IfBranch:
    """One if/elseif branch: condition source and body."""
    condition: str
    body: Tuple[TemplateNode, ...]


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """
    Conditional block <{ if }>...<{ elseif }>...<{ else }>...<{ /if }>.

    Branches are tested in source order; the first truthy one wins.
    """
    branches: Tuple[IfBranch, ...]
    else_body: Tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class ForNode(TemplateNode):
    """
    Loop <{ for [index,] item in list }>...<{ /for }>.
    """
    item_var: str
    list_expr: str
    body: Tuple[TemplateNode, ...]
    index_var: Optional[str] = None


@dataclass(frozen=True)
class SwitchCase:
    """One case of a switch block: case expression and body."""
    condition: str
    body: Tuple[TemplateNode, ...]


@dataclass(frozen=True)
class SwitchNode(TemplateNode):
    """
    Switch block <{ switch expr }><{ case c }>...<{ default }>...<{ /switch }>.

    Cases are matched against the scrutinee in source order, without fallthrough.
    """
    expr: str
    cases: Tuple[SwitchCase, ...]
    default_body: Tuple[TemplateNode, ...] = ()


# Root node sequence of a compiled template
TemplateAST = List[TemplateNode]


def format_ast_tree(ast: List[TemplateNode] | Tuple[TemplateNode, ...], indent: int = 0) -> str:
    """Formats the AST as an indented tree for debugging."""
    lines = []
    prefix = "  " * indent

    for node in ast:
        if isinstance(node, TextNode):
            # Only the beginning of the text, for readability
            text_preview = repr(node.text[:50] + "..." if len(node.text) > 50 else node.text)
            lines.append(f"{prefix}TextNode({text_preview})")
        elif isinstance(node, VarNode):
            details = node.path
            if node.default is not None:
                details += f' | "{node.default}"'
            for name in node.filters:
                details += f" | {name}"
            lines.append(f"{prefix}VarNode({details})")
        elif isinstance(node, IfNode):
            lines.append(f"{prefix}IfNode")
            for i, branch in enumerate(node.branches):
                lines.append(f"{prefix}  branch[{i}] '{branch.condition}':")
                if branch.body:
                    lines.append(format_ast_tree(branch.body, indent + 2))
            if node.else_body:
                lines.append(f"{prefix}  else:")
                lines.append(format_ast_tree(node.else_body, indent + 2))
        elif isinstance(node, ForNode):
            binding = f"{node.index_var}, {node.item_var}" if node.index_var else node.item_var
            lines.append(f"{prefix}ForNode({binding} in {node.list_expr})")
            if node.body:
                lines.append(format_ast_tree(node.body, indent + 1))
        elif isinstance(node, SwitchNode):
            lines.append(f"{prefix}SwitchNode({node.expr})")
            for i, case in enumerate(node.cases):
                lines.append(f"{prefix}  case[{i}] '{case.condition}':")
                if case.body:
                    lines.append(format_ast_tree(case.body, indent + 2))
            if node.default_body:
                lines.append(f"{prefix}  default:")
                lines.append(format_ast_tree(node.default_body, indent + 2))
        else:
            lines.append(f"{prefix}{type(node).__name__}")

    return "\n".join(lines)


__all__ = [
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
