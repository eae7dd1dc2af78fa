"""Unit tests for the map family, parallel maps and dynamic dispatch."""

from __future__ import annotations

import math
import operator

import pytest

from iterkit import (
    LengthMismatchError,
    TypeMismatchError,
    UnresolvedCallableError,
    config_scope,
    default_registry,
    imap,
    invoke_map,
    map2,
    map2_dbl,
    map_,
    map_chr,
    map_dbl,
    map_if,
    map_int,
    map_lgl,
    pmap,
    pmap_chr,
    pmap_int,
)

pytestmark = pytest.mark.unit


class TestMap:
    """map_ and its typed variants."""

    def test_applies_in_order(self, recorder):
        assert map_([3, 1, 2], lambda x: x * 10) == [30, 10, 20]
        map_([3, 1, 2], recorder)
        assert recorder.seen == [3, 1, 2]

    def test_forwards_fixed_arguments(self):
        assert map_([1, 2], lambda x, y, *, z: x + y + z, 10, z=100) == [111, 112]

    def test_mapping_keeps_labels(self):
        result = map_({"b": 2, "a": 1}, lambda x: x + 1)
        assert result == {"b": 3, "a": 2}
        assert list(result) == ["b", "a"]

    def test_accepts_generators_and_ranges(self):
        assert map_((x for x in range(3)), str) == ["0", "1", "2"]
        assert map_(range(3), lambda x: x * x) == [0, 1, 4]

    def test_empty_input(self):
        assert map_([], lambda x: 1 / 0) == []
        assert map_({}, str) == {}

    def test_pluck_shorthand(self):
        people = [{"name": "ada", "age": 36}, {"name": "alan"}]
        assert map_(people, "name") == ["ada", "alan"]
        assert map_(people, "age") == [36, None]
        assert map_([(1, 2), (3, 4)], 1) == [2, 4]

    def test_caller_error_aborts_traversal(self, recorder):
        def boom(x):
            recorder(x)
            if x == 2:
                raise RuntimeError("nope")
            return x

        with pytest.raises(RuntimeError, match="nope"):
            map_([1, 2, 3], boom)
        assert recorder.seen == [1, 2]

    def test_rejects_non_collections(self):
        with pytest.raises(TypeError):
            map_(42, str)  # type: ignore[arg-type]


class TestTypedMaps:
    def test_lgl(self):
        assert map_lgl([1, 2, 3], lambda x: x > 1) == [False, True, True]
        with pytest.raises(TypeMismatchError) as exc:
            map_lgl([1, 2], lambda x: x)
        assert exc.value.index == 0
        assert exc.value.expected == "bool"
        assert exc.value.actual == "int"

    def test_int_accepts_bools_and_whole_floats(self):
        assert map_int([1, 2], lambda x: x * 2.0) == [2, 4]
        assert map_int([True, False], lambda x: x) == [1, 0]
        result = map_int([1], lambda x: 2.0)
        assert type(result[0]) is int

    def test_int_rejects_fractional_float(self):
        with pytest.raises(TypeMismatchError, match="position 1 must be int"):
            map_int([2, 3], lambda x: x / 2)

    def test_dbl_converts_ints(self):
        result = map_dbl([1, 2], lambda x: x * 3)
        assert result == [3.0, 6.0]
        assert all(type(v) is float for v in result)

    def test_dbl_rejects_text(self):
        with pytest.raises(TypeMismatchError):
            map_dbl(["1"], lambda x: x)

    def test_chr(self):
        assert map_chr([1, 2], str) == ["1", "2"]
        with pytest.raises(TypeMismatchError):
            map_chr([1], lambda x: x)

    def test_mismatch_stops_remaining_elements(self, recorder):
        def f(x):
            recorder(x)
            return "ok" if x != 2 else 2

        with pytest.raises(TypeMismatchError):
            map_chr([1, 2, 3], f)
        assert recorder.seen == [1, 2]

    def test_mismatch_is_a_type_error(self):
        with pytest.raises(TypeError):
            map_lgl([None], lambda x: x)

    def test_typed_maps_keep_labels(self):
        assert map_dbl({"x": 1}, lambda v: v) == {"x": 1.0}


class TestMap2:
    def test_pairs_elements(self):
        assert map2([1, 2, 3], [10, 20, 30], operator.add) == [11, 22, 33]

    def test_forwards_fixed_arguments(self):
        assert map2([1], [2], lambda x, y, z: x * y * z, 5) == [10]

    def test_length_mismatch_before_any_call(self, recorder):
        with pytest.raises(LengthMismatchError) as exc:
            map2([1, 2, 3], [1, 2], recorder)
        assert recorder.calls == []
        assert exc.value.lengths == (3, 2)
        assert "xs=3" in str(exc.value)
        assert exc.value.hint is not None

    def test_length_one_not_recycled_by_default(self):
        with pytest.raises(LengthMismatchError):
            map2([1, 2, 3], [10], operator.add)

    def test_length_one_recycled_when_enabled(self):
        with config_scope(recycle_length_one=True):
            assert map2([1, 2, 3], [10], operator.add) == [11, 12, 13]
            assert map2([5], [1, 2], operator.sub) == [4, 3]
            with pytest.raises(LengthMismatchError):
                map2([1, 2, 3], [1, 2], operator.add)

    def test_labels_from_first_input(self):
        assert map2({"a": 1, "b": 2}, [10, 20], operator.add) == {"a": 11, "b": 22}

    def test_typed_variant(self):
        assert map2_dbl([1, 2], [3, 4], operator.mul) == [3.0, 8.0]


class TestPmap:
    def test_positional_columns(self):
        assert pmap([[1, 2], [3, 4], [5, 6]], lambda a, b, c: a + b + c) == [9, 12]

    def test_named_columns_become_keywords(self):
        table = {"x": [1, 2], "y": [10, 20]}
        assert pmap(table, lambda y, x: f"{x}-{y}") == ["1-10", "2-20"]

    def test_fixed_arguments(self):
        assert pmap({"x": [1, 2]}, lambda x, scale: x * scale, scale=3) == [3, 6]
        assert pmap([[1, 2]], lambda x, y: x - y, 1) == [0, 1]

    def test_length_mismatch_names_columns(self):
        with pytest.raises(LengthMismatchError, match="x=2, y=1"):
            pmap({"x": [1, 2], "y": [1]}, lambda x, y: x)

    def test_empty_bundle(self):
        assert pmap([], lambda: 1) == []
        assert pmap({}, lambda: 1) == []

    def test_typed_variants(self):
        assert pmap_int([[1, 2], [3, 4]], operator.add) == [4, 6]
        with pytest.raises(TypeMismatchError):
            pmap_chr([[1]], lambda x: x)


class TestIndexedAndConditionalMaps:
    def test_imap_uses_positions(self):
        assert imap(["a", "b"], lambda x, i: f"{i}:{x}") == ["0:a", "1:b"]

    def test_imap_honours_index_base(self):
        with config_scope(index_base=1):
            assert imap(["a", "b"], lambda x, i: i) == [1, 2]

    def test_imap_uses_keys_for_mappings(self):
        assert imap({"k": 1}, lambda x, k: (k, x)) == {"k": ("k", 1)}

    def test_map_if(self):
        assert map_if([1, 2, 3, 4], lambda x: x % 2 == 0, lambda x: x * 10) == [1, 20, 3, 40]

    def test_map_if_with_else(self):
        result = map_if([1, 2], lambda x: x > 1, str, else_=lambda x: -x)
        assert result == [-1, "2"]


class TestInvokeMap:
    def test_parallel_functions_and_bundles(self):
        result = invoke_map([max, min, pow], [(1, 5), (1, 5), (2, 3)])
        assert result == [5, 1, 8]

    def test_keyword_and_scalar_bundles(self):
        result = invoke_map([round, abs], [{"number": 2.567, "ndigits": 1}, -4])
        assert result == [2.6, 4]

    def test_string_identifiers(self):
        result = invoke_map(["math.sqrt", "abs", "os.path.basename"], [16, -2, "/a/b.txt"])
        assert result == [4.0, 2, "b.txt"]

    def test_registered_names(self):
        default_registry.register("double", lambda x: 2 * x)
        try:
            assert invoke_map(["double"], [(21,)]) == [42]
        finally:
            default_registry.unregister("double")

    def test_single_function_broadcasts(self):
        assert invoke_map(math.log, [(1,), (8, 2)]) == pytest.approx([0.0, 3.0])

    def test_shared_arguments(self):
        result = invoke_map([lambda x, base: x + base, lambda x, base: x * base], [1, 2], base=10)
        assert result == [11, 20]

    def test_no_bundles_calls_with_shared_args_only(self):
        assert invoke_map([lambda: 1, lambda: 2]) == [1, 2]

    def test_labels_from_function_mapping(self):
        assert invoke_map({"hi": max, "lo": min}, [(1, 2), (1, 2)]) == {"hi": 2, "lo": 1}

    def test_unresolved_before_any_call(self, recorder):
        with pytest.raises(UnresolvedCallableError) as exc:
            invoke_map([recorder, "no_such_function_xyz"], [1, 2])
        assert recorder.calls == []
        assert exc.value.index == 1
        assert exc.value.identifier == "no_such_function_xyz"

    def test_non_callable_identifier(self):
        with pytest.raises(UnresolvedCallableError):
            invoke_map(["math.pi"], [()])
        with pytest.raises(UnresolvedCallableError):
            invoke_map([42], [()])

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            invoke_map([abs, abs], [1, 2, 3])

    def test_mapping_bundles_pair_by_key(self):
        out = invoke_map({"hi": max, "lo": min}, {"lo": (5, 9), "hi": (1, 2)})
        assert out == {"hi": 2, "lo": 5}

    def test_mapping_bundles_with_different_keys(self, recorder):
        with pytest.raises(LengthMismatchError, match="keys differ") as exc:
            invoke_map({"a": recorder, "b": recorder}, {"a": 1, "c": 2})
        assert recorder.calls == []
        assert exc.value.hint is not None
