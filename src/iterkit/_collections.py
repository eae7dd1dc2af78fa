"""Internal helpers for collection inputs and result containers.

Every public operation funnels its inputs through `elements` (or `align` for
parallel inputs) so that mapping labels, iterable materialisation and length
checks behave identically across the library.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
import typing

from iterkit.errors import LengthMismatchError

T = typing.TypeVar("T")

Labels = list[Hashable] | None


def elements(xs: Iterable[T] | Mapping[Hashable, T]) -> tuple[list[T], Labels]:
    """Return ``(values, labels)`` for a collection.

    Mappings contribute their keys as labels; any other iterable is
    materialised once, in order, and has no labels.
    """
    if isinstance(xs, Mapping):
        return list(xs.values()), list(xs.keys())
    if not isinstance(xs, Iterable):
        raise TypeError(
            f"expected a collection, got {type(xs).__name__}",
        )
    return list(xs), None


def rebuild(values: list[T], labels: Labels) -> list[T] | dict[Hashable, T]:
    """Return a result container matching the input's labelling."""
    if labels is None:
        return values
    return dict(zip(labels, values, strict=True))


def align(
    collections: typing.Sequence[Iterable[typing.Any]],
    *,
    recycle: bool = False,
    names: typing.Sequence[str] | None = None,
) -> tuple[list[list[typing.Any]], int, Labels]:
    """Materialise parallel collections and check they share one length.

    Returns the columns, the common length and the labels of the first
    collection (if it is a mapping). With ``recycle`` enabled, length-1
    columns are repeated to the common length.

    Raises:
        LengthMismatchError: Before any element is processed.
    """
    columns: list[list[typing.Any]] = []
    labels: Labels = None
    for pos, coll in enumerate(collections):
        values, coll_labels = elements(coll)
        if pos == 0:
            labels = coll_labels
        columns.append(values)

    if not columns:
        return [], 0, None

    lengths = tuple(len(c) for c in columns)
    if recycle:
        target = max((n for n in lengths if n != 1), default=1)
        if all(n in (1, target) for n in lengths):
            columns = [c * target if len(c) == 1 else c for c in columns]
            if labels is not None and len(labels) != target:
                labels = None
            return columns, target, labels
    elif len(set(lengths)) == 1:
        return columns, lengths[0], labels

    described = ", ".join(
        f"{name}={n}"
        for name, n in zip(names or [f"#{i}" for i in range(len(lengths))], lengths, strict=True)
    )
    raise LengthMismatchError(
        f"parallel collections must have the same length, got {described}",
        hint=(
            "Trim or pad the inputs, or enable recycle_length_one to repeat "
            "length-1 inputs."
        ),
        lengths=lengths,
    )
