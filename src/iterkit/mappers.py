"""Mapper shorthands and small function combinators.

`as_mapper` lets every operation accept a plucking shorthand in place of a
callable:

    map_(people, "name")          # person["name"] for each person
    map_(rows, 0)                 # row[0] for each row
    map_(docs, ("meta", "id"))    # doc["meta"]["id"] for each doc
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal

Mapper = Callable[..., Any]
MapperLike = Mapper | str | int | list[str | int] | tuple[str | int, ...]


def _pluck_one(obj: Any, key: str | int) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    if isinstance(key, int) and isinstance(obj, Sequence) and not isinstance(obj, str):
        try:
            return obj[key]
        except IndexError:
            return None
    if isinstance(key, str):
        return getattr(obj, key, None)
    return None


def as_mapper(f: MapperLike) -> Mapper:
    """Convert a transform or pluck shorthand into a callable.

    Callables are returned unchanged. A ``str`` or ``int`` plucks that key,
    attribute or position; a list/tuple plucks a nested path. Missing keys
    yield ``None``.

    Raises:
        TypeError: For anything that is neither callable nor a pluck path.
    """
    if callable(f):
        return f
    if isinstance(f, bool):
        raise TypeError("a bool is not a valid pluck key")
    if isinstance(f, str | int):
        path: tuple[str | int, ...] = (f,)
    elif isinstance(f, list | tuple) and all(
        isinstance(k, str | int) and not isinstance(k, bool) for k in f
    ):
        path = tuple(f)
    else:
        raise TypeError(
            f"expected a callable or pluck path, got {type(f).__name__}",
        )

    def pluck(obj: Any, *_args: Any, **_kwargs: Any) -> Any:
        for key in path:
            if obj is None:
                return None
            obj = _pluck_one(obj, key)
        return obj

    pluck.__name__ = f"pluck[{']['.join(map(repr, path))}]"
    return pluck


def compose(
    *fns: MapperLike,
    direction: Literal["backward", "forward"] = "backward",
) -> Mapper:
    """Compose functions; by default the last one is applied first.

    The innermost function receives all call arguments, the rest get the
    previous result only. ``compose()`` is the identity.
    """
    if direction not in ("backward", "forward"):
        raise ValueError(f"direction must be 'forward' or 'backward', got {direction!r}")
    chain = [as_mapper(fn) for fn in fns]
    if direction == "backward":
        chain.reverse()

    def composed(*args: Any, **kwargs: Any) -> Any:
        if not chain:
            return args[0] if args else None
        value = chain[0](*args, **kwargs)
        for fn in chain[1:]:
            value = fn(value)
        return value

    return composed


def negate(pred: MapperLike) -> Mapper:
    """Return a predicate that is true where ``pred`` is false."""
    fn = as_mapper(pred)

    def negated(*args: Any, **kwargs: Any) -> bool:
        return not fn(*args, **kwargs)

    return negated
