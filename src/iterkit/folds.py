"""Folds: collapse a collection by repeated binary combination.

Forward folds call ``f(acc, x)`` from left to right. Backward folds call
``f(x, acc)`` from right to left, so ``reduce([1, 2, 3], f, direction=
"backward")`` computes ``f(1, f(2, 3))``.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
import logging
from typing import Any, Final, Literal

from iterkit._collections import elements
from iterkit.errors import EmptyInputError
from iterkit.mappers import MapperLike, as_mapper

log = logging.getLogger(__name__)

Collection = Iterable[Any] | Mapping[Hashable, Any]


class _Missing:
    """Marker for an omitted seed; ``None`` is a valid seed."""

    def __repr__(self) -> str:
        return "<no seed>"


MISSING: Final = _Missing()


def _states(
    op: str,
    xs: Collection,
    f: MapperLike,
    seed: Any,
    direction: str,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> list[Any]:
    """Accumulator states in fold order (the seed, if any, comes first)."""
    if direction not in ("forward", "backward"):
        raise ValueError(f"direction must be 'forward' or 'backward', got {direction!r}")
    fn = as_mapper(f)
    values, _ = elements(xs)
    if direction == "backward":
        values.reverse()

    if seed is MISSING:
        if not values:
            raise EmptyInputError(
                f"{op}() of an empty collection with no seed",
                hint=f"Pass seed=... to give {op}() a starting value.",
            )
        acc, rest = values[0], values[1:]
    else:
        acc, rest = seed, values

    log.debug("%s: folding %d element(s) %s", op, len(values), direction)
    states = [acc]
    for x in rest:
        if direction == "forward":
            acc = fn(acc, x, *args, **kwargs)
        else:
            acc = fn(x, acc, *args, **kwargs)
        states.append(acc)
    return states


def reduce(
    xs: Collection,
    f: MapperLike,
    *args: Any,
    seed: Any = MISSING,
    direction: Literal["forward", "backward"] = "forward",
    **kwargs: Any,
) -> Any:
    """Fold ``xs`` into a single value.

    Raises:
        EmptyInputError: If ``xs`` is empty and no ``seed`` is given.
    """
    return _states("reduce", xs, f, seed, direction, args, kwargs)[-1]


def accumulate(
    xs: Collection,
    f: MapperLike,
    *args: Any,
    seed: Any = MISSING,
    direction: Literal["forward", "backward"] = "forward",
    **kwargs: Any,
) -> list[Any]:
    """Like `reduce`, but return every intermediate state.

    The result has one state per element, plus one for the seed when given.
    Backward accumulations are returned in input order, so the seed (or the
    last element) comes last.

    Raises:
        EmptyInputError: If ``xs`` is empty and no ``seed`` is given.
    """
    states = _states("accumulate", xs, f, seed, direction, args, kwargs)
    if direction == "backward":
        states.reverse()
    return states
