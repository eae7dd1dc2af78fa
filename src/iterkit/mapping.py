"""The map family.

Every map returns one result per input element, in input order. Mapping
inputs keep their keys: ``map_({"a": 1}, f)`` returns ``{"a": f(1)}``.

Typed variants (``_lgl``, ``_int``, ``_dbl``, ``_chr``) check each result as
it is produced and raise `TypeMismatchError` at the first one that cannot be
coerced; later elements are not visited.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
import logging
from typing import Any

from iterkit._collections import align, elements, rebuild
from iterkit.config import current_config
from iterkit.errors import LengthMismatchError, TypeMismatchError
from iterkit.mappers import MapperLike, as_mapper
from iterkit.registry import resolve_callable

log = logging.getLogger(__name__)

Collection = Iterable[Any] | Mapping[Hashable, Any]
Result = list[Any] | dict[Hashable, Any]

# --- Output coercion ---


def _as_lgl(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise TypeError


def _as_int(value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise TypeError


def _as_dbl(value: Any) -> float:
    if isinstance(value, int | float):
        return float(value)
    raise TypeError


def _as_chr(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise TypeError


_COERCERS: dict[str, tuple[Callable[[Any], Any], str]] = {
    "lgl": (_as_lgl, "bool"),
    "int": (_as_int, "int"),
    "dbl": (_as_dbl, "float"),
    "chr": (_as_chr, "str"),
}


def _coerce(value: Any, kind: str | None, index: int) -> Any:
    if kind is None:
        return value
    convert, expected = _COERCERS[kind]
    try:
        return convert(value)
    except (TypeError, OverflowError):
        actual = type(value).__name__
        detail = f" ({value!r})" if isinstance(value, float) else ""
        raise TypeMismatchError(
            f"result at position {index} must be {expected}, got {actual}{detail}",
            hint=f"Use map_() for unrestricted results or return a {expected}.",
            index=index,
            expected=expected,
            actual=actual,
        ) from None


# --- Shared traversal ---


def _run(
    op: str,
    columns: list[list[Any]],
    n: int,
    labels: list[Hashable] | None,
    fn: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    kind: str | None = None,
    names: list[str] | None = None,
) -> Result:
    log.debug("%s: %d element(s)", op, n)
    out: list[Any] = []
    for i in range(n):
        row = [col[i] for col in columns]
        if names is None:
            value = fn(*row, *args, **kwargs)
        else:
            value = fn(*args, **dict(zip(names, row, strict=True)), **kwargs)
        out.append(_coerce(value, kind, i))
    return rebuild(out, labels)


def _map(op: str, xs: Collection, f: MapperLike, args: tuple, kwargs: dict, kind: str | None) -> Result:
    fn = as_mapper(f)
    values, labels = elements(xs)
    return _run(op, [values], len(values), labels, fn, args, kwargs, kind=kind)


def _map2(
    op: str, xs: Collection, ys: Collection, f: MapperLike, args: tuple, kwargs: dict, kind: str | None
) -> Result:
    fn = as_mapper(f)
    columns, n, labels = align(
        [xs, ys], recycle=current_config().recycle_length_one, names=["xs", "ys"]
    )
    return _run(op, columns, n, labels, fn, args, kwargs, kind=kind)


def _pmap(op: str, columns: Any, f: MapperLike, args: tuple, kwargs: dict, kind: str | None) -> Result:
    fn = as_mapper(f)
    recycle = current_config().recycle_length_one
    if isinstance(columns, Mapping):
        names = [str(k) for k in columns]
        cols, n, labels = align(list(columns.values()), recycle=recycle, names=names)
        return _run(op, cols, n, labels, fn, args, kwargs, kind=kind, names=names)
    cols, n, labels = align(list(columns), recycle=recycle)
    return _run(op, cols, n, labels, fn, args, kwargs, kind=kind)


# --- map ---


def map_(xs: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """Apply ``f`` to each element: ``result[i] = f(xs[i], *args, **kwargs)``."""
    return _map("map_", xs, f, args, kwargs, None)


def map_lgl(xs: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """`map_` whose results must be ``bool``."""
    return _map("map_lgl", xs, f, args, kwargs, "lgl")


def map_int(xs: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """`map_` whose results must be integers (bools and whole floats are converted)."""
    return _map("map_int", xs, f, args, kwargs, "int")


def map_dbl(xs: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """`map_` whose results must be numbers; they are returned as floats."""
    return _map("map_dbl", xs, f, args, kwargs, "dbl")


def map_chr(xs: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """`map_` whose results must be ``str``."""
    return _map("map_chr", xs, f, args, kwargs, "chr")


# --- map2 ---


def map2(xs: Collection, ys: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """Apply ``f`` pairwise: ``result[i] = f(xs[i], ys[i], *args, **kwargs)``.

    Raises:
        LengthMismatchError: If ``xs`` and ``ys`` differ in length.
    """
    return _map2("map2", xs, ys, f, args, kwargs, None)


def map2_lgl(xs: Collection, ys: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _map2("map2_lgl", xs, ys, f, args, kwargs, "lgl")


def map2_int(xs: Collection, ys: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _map2("map2_int", xs, ys, f, args, kwargs, "int")


def map2_dbl(xs: Collection, ys: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _map2("map2_dbl", xs, ys, f, args, kwargs, "dbl")


def map2_chr(xs: Collection, ys: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _map2("map2_chr", xs, ys, f, args, kwargs, "chr")


# --- pmap ---


def pmap(
    columns: Iterable[Collection] | Mapping[str, Collection],
    f: MapperLike,
    *args: Any,
    **kwargs: Any,
) -> Result:
    """Apply ``f`` across several parallel collections.

    A sequence of collections supplies positional arguments; a mapping of
    name to collection (a table of columns) supplies keyword arguments, so
    ``pmap({"x": [1, 2], "y": [3, 4]}, f)`` calls ``f(x=1, y=3)`` then
    ``f(x=2, y=4)``. Fixed ``args`` follow the column values, as in `map_`.

    Raises:
        LengthMismatchError: If the collections differ in length.
    """
    return _pmap("pmap", columns, f, args, kwargs, None)


def pmap_lgl(columns: Any, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _pmap("pmap_lgl", columns, f, args, kwargs, "lgl")


def pmap_int(columns: Any, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _pmap("pmap_int", columns, f, args, kwargs, "int")


def pmap_dbl(columns: Any, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _pmap("pmap_dbl", columns, f, args, kwargs, "dbl")


def pmap_chr(columns: Any, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    return _pmap("pmap_chr", columns, f, args, kwargs, "chr")


# --- indexed and conditional maps ---


def imap(xs: Collection, f: MapperLike, *args: Any, **kwargs: Any) -> Result:
    """Apply ``f(x, label, *args, **kwargs)`` where label is the key or position."""
    fn = as_mapper(f)
    values, labels = elements(xs)
    base = current_config().index_base
    tags = labels if labels is not None else list(range(base, base + len(values)))
    return _run("imap", [values, tags], len(values), labels, fn, args, kwargs)


def map_if(
    xs: Collection,
    pred: MapperLike,
    f: MapperLike,
    *args: Any,
    else_: MapperLike | None = None,
    **kwargs: Any,
) -> Result:
    """Apply ``f`` only where ``pred`` holds; other elements pass through.

    With ``else_`` given, it is applied to the elements where ``pred`` fails.
    """
    test = as_mapper(pred)
    fn = as_mapper(f)
    other = as_mapper(else_) if else_ is not None else None

    def branch(x: Any, *a: Any, **kw: Any) -> Any:
        if test(x):
            return fn(x, *a, **kw)
        return other(x, *a, **kw) if other is not None else x

    return _map("map_if", xs, branch, args, kwargs, None)


# --- dynamic dispatch ---


def _bundle_call(fn: Callable[..., Any], bundle: Any, args: tuple, kwargs: dict) -> Any:
    if isinstance(bundle, Mapping):
        return fn(*args, **{**kwargs, **bundle})
    if isinstance(bundle, list | tuple):
        return fn(*bundle, *args, **kwargs)
    return fn(bundle, *args, **kwargs)


def _bundles_by_label(
    fn_labels: list[Any], bundles: list[Any], bundle_labels: list[Any]
) -> list[Any]:
    by_label = dict(zip(bundle_labels, bundles, strict=True))
    known = set(fn_labels)
    missing = [k for k in fn_labels if k not in by_label]
    unexpected = [k for k in bundle_labels if k not in known]
    if missing or unexpected:
        raise LengthMismatchError(
            f"invoke_map keys differ: no bundle for {missing}, no function for {unexpected}",
            hint="Use the same keys for the functions and the argument bundles.",
            lengths=(len(fn_labels), len(bundle_labels)),
        )
    return [by_label[k] for k in fn_labels]


def invoke_map(
    fns: Any,
    arg_bundles: Collection | None = None,
    *args: Any,
    **kwargs: Any,
) -> Result:
    """Call the i-th function with the i-th argument bundle.

    ``fns`` holds callables or names resolvable by the function registry; a
    single callable or name is applied to every bundle. Bundles are tuples or
    lists (positional), mappings (keyword) or single values; shared ``args``
    and ``kwargs`` are added to every call. Without bundles each function is
    called with the shared arguments only.

    When both ``fns`` and ``arg_bundles`` are mappings, bundles are paired
    with functions by key rather than by position.

    All names are resolved before the first call.

    Raises:
        UnresolvedCallableError: If a name does not resolve to a callable.
        LengthMismatchError: If functions and bundles differ in length, or
            in keys when both are mappings.
    """
    single = callable(fns) or isinstance(fns, str)
    if single:
        fn_values: list[Any] = [fns]
        fn_labels = None
    else:
        fn_values, fn_labels = elements(fns)

    if arg_bundles is None:
        bundles: list[Any] = [()] * len(fn_values)
        bundle_labels = None
    else:
        bundles, bundle_labels = elements(arg_bundles)

    if fn_labels is not None and bundle_labels is not None:
        bundles = _bundles_by_label(fn_labels, bundles, bundle_labels)

    resolved = [resolve_callable(fn, index=i) for i, fn in enumerate(fn_values)]

    if single:
        resolved = resolved * len(bundles)
    elif len(resolved) != len(bundles):
        raise LengthMismatchError(
            f"invoke_map got {len(resolved)} function(s) but {len(bundles)} argument bundle(s)",
            hint="Pass one bundle per function, or a single function for all bundles.",
            lengths=(len(resolved), len(bundles)),
        )

    labels = fn_labels if fn_labels is not None else bundle_labels
    log.debug("invoke_map: %d call(s)", len(bundles))
    out = [
        _bundle_call(fn, bundle, args, kwargs)
        for fn, bundle in zip(resolved, bundles, strict=True)
    ]
    return rebuild(out, labels)
