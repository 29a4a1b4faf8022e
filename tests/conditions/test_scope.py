"""Tests for dotted lookup and derived contexts."""

from collections import namedtuple
from dataclasses import dataclass

import pytest

from tagtpl.conditions.scope import field_or_key, lookup, resolve_operand, derive_context
from tagtpl.conditions.values import MISSING


@dataclass
class Address:
    city: str


@dataclass
class User:
    name: str
    address: Address
    _secret: str = "hidden"

    def greeting(self) -> str:
        return f"hi {self.name}"


Point = namedtuple("Point", "x y")


class TestFieldOrKey:

    def test_mapping_key(self):
        assert field_or_key({"a": 1}, "a") == 1
        assert field_or_key({"a": None}, "a") is None
        assert field_or_key({"a": 1}, "b") is MISSING

    def test_record_attribute(self):
        user = User("ann", Address("Oslo"))

        assert field_or_key(user, "name") == "ann"
        assert field_or_key(user, "missing") is MISSING

    def test_private_and_callable_members_are_hidden(self):
        user = User("ann", Address("Oslo"))

        assert field_or_key(user, "_secret") is MISSING
        assert field_or_key(user, "greeting") is MISSING

    def test_named_tuple(self):
        assert field_or_key(Point(1, 2), "y") == 2

    @pytest.mark.parametrize("value", ["text", 5, 1.5, [1, 2], (1, 2), {1}, None, b"x"])
    def test_scalars_and_collections_have_no_members(self, value):
        assert field_or_key(value, "real") is MISSING
        assert field_or_key(value, "count") is MISSING


class TestLookup:

    def setup_method(self):
        self.ctx = {
            "user": User("ann", Address("Oslo")),
            "cfg": {"db": {"port": 5432}},
            "flag": False,
        }

    def test_nested_paths(self):
        assert lookup(self.ctx, "user.address.city") == "Oslo"
        assert lookup(self.ctx, "cfg.db.port") == 5432
        assert lookup(self.ctx, "flag") is False

    def test_misses(self):
        assert lookup(self.ctx, "nope") is MISSING
        assert lookup(self.ctx, "user.address.zip") is MISSING
        assert lookup(self.ctx, "cfg.db.port.x") is MISSING
        assert lookup(self.ctx, "") is MISSING

    def test_literal_paths(self):
        assert lookup(self.ctx, '"quoted"') == "quoted"
        assert lookup(self.ctx, "42") == 42
        assert lookup(self.ctx, "true") is True

    def test_resolve_operand(self):
        assert resolve_operand(self.ctx, "cfg.db.port") == 5432
        assert resolve_operand(self.ctx, "admin") == "admin"
        assert resolve_operand(self.ctx, "'a b'") == "a b"


class TestDeriveContext:

    def test_parent_is_not_mutated(self):
        parent = {"a": 1, "b": 2}
        child = derive_context(parent, {"b": 3, "c": 4})

        assert child == {"a": 1, "b": 3, "c": 4}
        assert parent == {"a": 1, "b": 2}
        assert child is not parent
