"""
Tests for the runtime value model: literals, formatting, numeric coercion
and truthiness.
"""

from collections import namedtuple
from dataclasses import dataclass

import pytest

from tagtpl.conditions.values import (
    MISSING, parse_literal, literal_from_string, to_float, format_value, cond_truthy,
)


class TestLiterals:

    @pytest.mark.parametrize("text,expected", [
        ('"hello"', "hello"),
        ("'hello'", "hello"),
        ('"a\\"b"', 'a"b'),
        ('""', ""),
        ("true", True),
        ("false", False),
        ("42", 42),
        ("-7", -7),
        ("3.5", 3.5),
        ("1e3", 1000.0),
    ])
    def test_parse_literal(self, text, expected):
        value = parse_literal(text)

        assert value == expected
        assert type(value) is type(expected)

    @pytest.mark.parametrize("text", ["name", "user.name", "True", "1.2.3", "", '"open'])
    def test_non_literals(self, text):
        assert parse_literal(text) is MISSING

    def test_literal_from_string_falls_back_to_text(self):
        assert literal_from_string("  admin ") == "admin"
        assert literal_from_string(" 12 ") == 12

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"
        assert type(MISSING)() is MISSING


class TestFormatValue:

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (MISSING, ""),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (2.5, "2.5"),
        ("<b>", "<b>"),
    ])
    def test_format(self, value, expected):
        assert format_value(value) == expected


class TestToFloat:

    @pytest.mark.parametrize("value,expected", [
        (3, 3.0),
        (2.5, 2.5),
        ("3", 3.0),
        ("3.0", 3.0),
        ("-1e2", -100.0),
    ])
    def test_numeric(self, value, expected):
        assert to_float(value) == expected

    @pytest.mark.parametrize("value", [True, False, None, MISSING, "abc", "", [1], {"a": 1}])
    def test_non_numeric(self, value):
        assert to_float(value) is None


class TestTruthiness:

    @pytest.mark.parametrize("value", [0, 0.0, "", [], (), {}, set(), None, False, MISSING])
    def test_falsy(self, value):
        assert cond_truthy(value) is False

    @pytest.mark.parametrize("value", [1, -1, 0.1, "0", "false", [1], {"a": 0}, True])
    def test_truthy(self, value):
        assert cond_truthy(value) is True

    def test_records_are_truthy(self):
        @dataclass
        class User:
            name: str = ""

        Point = namedtuple("Point", "x y")

        assert cond_truthy(User()) is True
        assert cond_truthy(object()) is True
        assert cond_truthy(Point(0, 0)) is True
