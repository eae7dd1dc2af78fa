"""Walkers: maps run for their side effects.

Traversal order and argument handling are exactly those of the matching map;
the results are dropped and the first input is returned unchanged (the same
object), so walks over re-iterable collections can sit in the middle of a
chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from iterkit import mapping

if TYPE_CHECKING:
    from iterkit.mappers import MapperLike

C = TypeVar("C")


def walk(xs: C, f: MapperLike, *args: Any, **kwargs: Any) -> C:
    """Call ``f(x, *args, **kwargs)`` for each element, in order; return ``xs``.

    ``xs`` is returned as given. A one-shot iterator such as a generator comes
    back exhausted, so chain walks on lists, tuples or mappings.
    """
    mapping.map_(xs, f, *args, **kwargs)
    return xs


def walk2(xs: C, ys: Any, f: MapperLike, *args: Any, **kwargs: Any) -> C:
    """Call ``f(x, y, ...)`` pairwise; return ``xs``.

    Raises:
        LengthMismatchError: Before any call, if the lengths differ.
    """
    mapping.map2(xs, ys, f, *args, **kwargs)
    return xs


def pwalk(columns: C, f: MapperLike, *args: Any, **kwargs: Any) -> C:
    """Call ``f`` across parallel collections as `pmap` does; return ``columns``."""
    mapping.pmap(columns, f, *args, **kwargs)
    return columns


def iwalk(xs: C, f: MapperLike, *args: Any, **kwargs: Any) -> C:
    """Call ``f(x, label, ...)`` as `imap` does; return ``xs``."""
    mapping.imap(xs, f, *args, **kwargs)
    return xs
