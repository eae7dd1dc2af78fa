"""Unit tests for mapper shorthands and combinators."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from iterkit import as_mapper, compose, negate

pytestmark = pytest.mark.unit


class TestAsMapper:
    def test_callable_unchanged(self):
        assert as_mapper(len) is len

    def test_string_key_on_mapping_and_attribute(self):
        pluck = as_mapper("name")
        assert pluck({"name": "ada"}) == "ada"
        assert pluck(SimpleNamespace(name="alan")) == "alan"
        assert pluck({}) is None

    def test_integer_position(self):
        pluck = as_mapper(1)
        assert pluck(["a", "b"]) == "b"
        assert pluck(["a"]) is None
        assert pluck({1: "one"}) == "one"

    def test_nested_path(self):
        pluck = as_mapper(["meta", "tags", 0])
        assert pluck({"meta": {"tags": ["x", "y"]}}) == "x"
        assert pluck({"meta": {}}) is None
        assert pluck({}) is None

    @pytest.mark.parametrize("bad", [1.5, True, None, ["ok", 2.0], {"a": 1}])
    def test_rejects_other_values(self, bad):
        with pytest.raises(TypeError):
            as_mapper(bad)


class TestCombinators:
    def test_compose_applies_last_first(self):
        f = compose(str, lambda x: x + 1)
        assert f(1) == "2"

    def test_compose_forward(self):
        f = compose(lambda x: x + 1, str, direction="forward")
        assert f(1) == "2"

    def test_compose_passes_all_arguments_to_innermost(self):
        f = compose(abs, lambda x, y: x - y)
        assert f(1, 5) == 4

    def test_empty_compose_is_identity(self):
        assert compose()(7) == 7

    def test_compose_accepts_pluck_shorthand(self):
        assert compose(str.upper, "name")({"name": "ada"}) == "ADA"

    def test_negate(self):
        is_odd = negate(lambda x: x % 2 == 0)
        assert is_odd(3) is True
        assert is_odd(2) is False
