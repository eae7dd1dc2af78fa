"""Outcome records produced by the adverbs.

`Success` and `Failure` form a sum type so that exactly one of ``value`` and
``error`` is ever populated. Both expose the two slots as attributes, which
keeps the ``{value, error}`` reading available for callers that prefer it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import dataclasses
import typing

from iterkit._collections import elements, rebuild


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A call that returned normally."""

    value: TSuccess

    @property
    def error(self) -> None:
        return None

    @property
    def ok(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure: Exception]:
    """A call that raised; the exception is kept as-is."""

    error: TFailure

    @property
    def value(self) -> None:
        return None

    @property
    def ok(self) -> bool:
        return False


Outcome = Success[typing.Any] | Failure[Exception]


@dataclasses.dataclass(frozen=True, slots=True)
class Quiet[T]:
    """Result of a `quietly` call plus everything it emitted on the side."""

    result: T
    output: str = ""
    warnings: tuple[str, ...] = ()
    messages: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True, slots=True)
class Transposed:
    """Parallel ``values`` and ``errors`` split from a collection of outcomes.

    Both containers have one entry per outcome, in order, with ``None`` in the
    slot that was not populated. Labelled inputs produce dicts.
    """

    values: list[typing.Any] | dict[typing.Hashable, typing.Any]
    errors: list[Exception | None] | dict[typing.Hashable, Exception | None]

    def _pairs(self) -> Iterable[tuple[typing.Any, typing.Any, Exception | None]]:
        if isinstance(self.values, dict):
            errors = typing.cast("dict[typing.Hashable, Exception | None]", self.errors)
            return ((k, self.values[k], errors[k]) for k in self.values)
        return (
            (i, v, e) for i, (v, e) in enumerate(zip(self.values, self.errors, strict=True))
        )

    @property
    def successes(self) -> list[typing.Any]:
        """Values of the calls that succeeded, in order."""
        return [v for _, v, e in self._pairs() if e is None]

    @property
    def failures(self) -> list[tuple[typing.Any, Exception]]:
        """``(position or label, error)`` for each failed call, in order."""
        return [(k, e) for k, _, e in self._pairs() if e is not None]


def transpose(
    outcomes: Iterable[Outcome] | Mapping[typing.Hashable, Outcome],
) -> Transposed:
    """Split outcomes into parallel ``values`` and ``errors`` containers.

    Raises:
        TypeError: If an element is not a `Success` or `Failure`.
    """
    items, labels = elements(outcomes)
    values: list[typing.Any] = []
    errors: list[Exception | None] = []
    for i, item in enumerate(items):
        if not isinstance(item, Success | Failure):
            raise TypeError(
                f"transpose expects Success or Failure records, got "
                f"{type(item).__name__} at position {i}",
            )
        values.append(item.value)
        errors.append(item.error)
    return Transposed(values=rebuild(values, labels), errors=rebuild(errors, labels))
