"""Tests for the TemplateParser."""
from typing import List

import pytest

from tagtpl.errors import TemplateSyntaxError
from tagtpl.template.lexer import tokenize
from tagtpl.template.nodes import (
    TextNode, VarNode, IfBranch, IfNode, ForNode, SwitchCase, SwitchNode,
)
from tagtpl.template.parser import TemplateParser, parse
from tagtpl.template.tokens import Token


class TestTemplateParser:
    """Core TemplateParser tests."""

    def test_parse_empty_template(self):
        tokens: List[Token] = []
        parser = TemplateParser(tokens)

        assert parser.parse() == []

    def test_parse_simple_text(self):
        ast = parse(tokenize("Hello, world!"))

        assert ast == [TextNode(text="Hello, world!")]

    def test_parse_text_with_variable(self):
        ast = parse(tokenize('Hello <{ name | "you" | upper }>!'))

        assert ast == [
            TextNode(text="Hello "),
            VarNode(path="name", default="you", filters=("upper",)),
            TextNode(text="!"),
        ]

    def test_parse_if(self):
        ast = parse(tokenize("<{ if a }>A<{ /if }>"))

        assert ast == [IfNode(branches=(IfBranch("a", (TextNode("A"),)),))]

    def test_parse_if_elseif_else(self):
        ast = parse(tokenize("<{ if a }>A<{ elseif b }>B<{ elseif c }>C<{ else }>D<{ /if }>"))

        assert len(ast) == 1
        node = ast[0]
        assert isinstance(node, IfNode)
        assert [b.condition for b in node.branches] == ["a", "b", "c"]
        assert [b.body for b in node.branches] == [
            (TextNode("A"),), (TextNode("B"),), (TextNode("C"),),
        ]
        assert node.else_body == (TextNode("D"),)

    def test_parse_empty_bodies(self):
        ast = parse(tokenize("<{ if a }><{ else }><{ /if }>"))

        assert ast == [IfNode(branches=(IfBranch("a", ()),), else_body=())]

    def test_parse_for(self):
        ast = parse(tokenize("<{ for x in items }>[<{ x }>]<{ /for }>"))

        assert ast == [
            ForNode(
                item_var="x",
                list_expr="items",
                body=(TextNode("["), VarNode("x"), TextNode("]")),
            )
        ]

    def test_parse_for_with_index(self):
        ast = parse(tokenize("<{ for i, x in data.items }><{ /for }>"))

        node = ast[0]
        assert isinstance(node, ForNode)
        assert node.index_var == "i"
        assert node.item_var == "x"
        assert node.list_expr == "data.items"

    def test_parse_switch(self):
        source = "<{ switch role }><{ case \"admin\" }>A<{ case 1, 2 }>N<{ default }>D<{ /switch }>"
        ast = parse(tokenize(source))

        assert ast == [
            SwitchNode(
                expr="role",
                cases=(
                    SwitchCase('"admin"', (TextNode("A"),)),
                    SwitchCase("1, 2", (TextNode("N"),)),
                ),
                default_body=(TextNode("D"),),
            )
        ]

    def test_switch_preamble_is_dropped(self):
        ast = parse(tokenize("<{ switch x }>\n  ignored <{ y }>\n<{ case 1 }>one<{ /switch }>"))

        node = ast[0]
        assert isinstance(node, SwitchNode)
        assert node.cases == (SwitchCase("1", (TextNode("one"),)),)
        assert node.default_body == ()

    def test_default_before_case(self):
        ast = parse(tokenize("<{ switch x }><{ default }>D<{ case 1 }>one<{ /switch }>"))

        node = ast[0]
        assert node.default_body == (TextNode("D"),)
        assert node.cases == (SwitchCase("1", (TextNode("one"),)),)

    def test_nested_blocks(self):
        source = (
            "<{ for u in users }>"
            "<{ if u.admin }>"
            "<{ switch u.role }><{ case \"x\" }><{ for t in u.tags }><{ t }><{ /for }><{ /switch }>"
            "<{ /if }>"
            "<{ /for }>"
        )
        ast = parse(tokenize(source))

        loop = ast[0]
        assert isinstance(loop, ForNode)
        cond = loop.body[0]
        assert isinstance(cond, IfNode)
        switch = cond.branches[0].body[0]
        assert isinstance(switch, SwitchNode)
        inner = switch.cases[0].body[0]
        assert isinstance(inner, ForNode)
        assert inner.body == (VarNode("t"),)

    def test_nested_same_kind(self):
        ast = parse(tokenize("<{ if a }><{ if b }>AB<{ /if }>A<{ /if }>after"))

        assert len(ast) == 2
        outer = ast[0]
        assert isinstance(outer.branches[0].body[0], IfNode)
        assert outer.branches[0].body[1] == TextNode("A")
        assert ast[1] == TextNode("after")


class TestParserErrors:
    """Structural errors abort compilation."""

    @pytest.mark.parametrize("source,message", [
        ("<{ if a }>x", "Unclosed if"),
        ("<{ for x in xs }>x", "Unclosed for"),
        ("<{ switch x }><{ case 1 }>x", "Unclosed switch"),
        ("<{ /if }>", "Unexpected token ENDIF"),
        ("<{ /for }>", "Unexpected token ENDFOR"),
        ("<{ /switch }>", "Unexpected token ENDSWITCH"),
        ("<{ else }>", "Unexpected token ELSE"),
        ("<{ elseif a }>", "Unexpected token ELSEIF"),
        ("<{ case 1 }>", "Unexpected token CASE"),
        ("<{ default }>", "Unexpected token DEFAULT"),
    ])
    def test_structural_errors(self, source, message):
        with pytest.raises(TemplateSyntaxError, match=message):
            parse(tokenize(source))

    @pytest.mark.parametrize("source,message", [
        ("<{ if a }><{ /for }><{ /if }>", "Unexpected token ENDFOR inside if"),
        ("<{ if a }><{ case 1 }><{ /if }>", "Unexpected token CASE inside if"),
        ("<{ for x in xs }><{ else }><{ /for }>", "Unexpected token ELSE inside for"),
        ("<{ for x in xs }><{ /if }><{ /for }>", "Unexpected token ENDIF inside for"),
        ("<{ switch x }><{ else }><{ /switch }>", "Unexpected token ELSE inside switch"),
        ("<{ switch x }><{ /for }><{ /switch }>", "Unexpected token ENDFOR inside switch"),
    ])
    def test_foreign_tokens_inside_blocks(self, source, message):
        with pytest.raises(TemplateSyntaxError, match=message):
            parse(tokenize(source))

    def test_elseif_after_else(self):
        with pytest.raises(TemplateSyntaxError, match="'elseif' after 'else'"):
            parse(tokenize("<{ if a }>A<{ else }>B<{ elseif c }>C<{ /if }>"))

    def test_multiple_else(self):
        with pytest.raises(TemplateSyntaxError, match="Multiple 'else'"):
            parse(tokenize("<{ if a }>A<{ else }>B<{ else }>C<{ /if }>"))

    def test_error_carries_token(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse(tokenize("ok <{ /if }>"))

        assert exc_info.value.index == 1
        assert exc_info.value.token.raw == "/if"
        assert "raw: '/if'" in str(exc_info.value)

    def test_missing_item_variable(self):
        with pytest.raises(TemplateSyntaxError, match="missing item variable"):
            parse(tokenize("<{ for i, in xs }><{ /for }>"))
