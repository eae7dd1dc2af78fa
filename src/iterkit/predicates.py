"""Predicate-driven selection.

Predicates are read by truthiness. Every scan runs in collection order (or
reverse order for ``direction="backward"`` and `tail_while`) and stops at the
first element that decides the answer.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Any, Literal

from iterkit._collections import elements, rebuild
from iterkit.config import current_config
from iterkit.mappers import MapperLike, as_mapper

Collection = Iterable[Any] | Mapping[Hashable, Any]
Direction = Literal["forward", "backward"]


def _values(xs: Collection) -> Iterator[Any]:
    if isinstance(xs, Mapping):
        return iter(xs.values())
    return iter(xs)


def _check_direction(direction: str) -> None:
    if direction not in ("forward", "backward"):
        raise ValueError(f"direction must be 'forward' or 'backward', got {direction!r}")


# --- filtering ---


def keep(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> list[Any] | dict[Hashable, Any]:
    """Elements for which ``pred`` holds, in order; mapping keys are kept."""
    test = as_mapper(pred)
    values, labels = elements(xs)
    mask = [bool(test(x, *args, **kwargs)) for x in values]
    kept = [x for x, m in zip(values, mask, strict=True) if m]
    if labels is None:
        return kept
    return rebuild(kept, [k for k, m in zip(labels, mask, strict=True) if m])


def discard(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> list[Any] | dict[Hashable, Any]:
    """Elements for which ``pred`` does not hold, in order; mapping keys are kept."""
    test = as_mapper(pred)
    return keep(xs, lambda x, *a, **kw: not test(x, *a, **kw), *args, **kwargs)


# --- quantifiers ---


def some(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> bool:
    """True if any element satisfies ``pred``; stops at the first that does."""
    test = as_mapper(pred)
    return any(test(x, *args, **kwargs) for x in _values(xs))


def every(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> bool:
    """True if all elements satisfy ``pred`` (vacuously for empty input)."""
    test = as_mapper(pred)
    return all(test(x, *args, **kwargs) for x in _values(xs))


def none(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> bool:
    """True if no element satisfies ``pred``."""
    return not some(xs, pred, *args, **kwargs)


# --- search ---


def _scan(
    xs: Collection,
    pred: MapperLike,
    direction: str,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> tuple[int, Any] | None:
    _check_direction(direction)
    test = as_mapper(pred)
    values, _ = elements(xs)
    order = range(len(values)) if direction == "forward" else range(len(values) - 1, -1, -1)
    for i in order:
        if test(values[i], *args, **kwargs):
            return i, values[i]
    return None


def detect(
    xs: Collection,
    pred: MapperLike,
    *args: Any,
    direction: Direction = "forward",
    default: Any = None,
    **kwargs: Any,
) -> Any:
    """First element satisfying ``pred``, or ``default`` if none does.

    With ``direction="backward"`` the scan starts from the last element.
    """
    hit = _scan(xs, pred, direction, args, kwargs)
    return default if hit is None else hit[1]


def detect_index(
    xs: Collection,
    pred: MapperLike,
    *args: Any,
    direction: Direction = "forward",
    **kwargs: Any,
) -> int:
    """Position of the first element satisfying ``pred``.

    Positions follow the configured ``index_base`` (0 by default). When
    nothing matches, including for empty input, the result is
    ``index_base - 1``: ``-1`` under 0-based indexing, ``0`` under 1-based.
    """
    base = current_config().index_base
    hit = _scan(xs, pred, direction, args, kwargs)
    return base - 1 if hit is None else hit[0] + base


# --- prefix / suffix ---


def head_while(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> list[Any] | dict[Hashable, Any]:
    """Longest prefix whose elements all satisfy ``pred``."""
    test = as_mapper(pred)
    values, labels = elements(xs)
    stop = len(values)
    for i, x in enumerate(values):
        if not test(x, *args, **kwargs):
            stop = i
            break
    return rebuild(values[:stop], labels[:stop] if labels is not None else None)


def tail_while(xs: Collection, pred: MapperLike, *args: Any, **kwargs: Any) -> list[Any] | dict[Hashable, Any]:
    """Longest suffix whose elements all satisfy ``pred``, scanning from the end."""
    test = as_mapper(pred)
    values, labels = elements(xs)
    start = 0
    for i in range(len(values) - 1, -1, -1):
        if not test(values[i], *args, **kwargs):
            start = i + 1
            break
    return rebuild(values[start:], labels[start:] if labels is not None else None)
