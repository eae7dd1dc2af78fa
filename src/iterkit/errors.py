"""Exception hierarchy for iterkit."""

from __future__ import annotations


class IterkitError(Exception):
    """Base exception for all iterkit errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(IterkitError):
    """Configuration validation or resolution failed."""


class LengthMismatchError(IterkitError, ValueError):
    """Parallel collections do not share a common length.

    Raised before any element is processed.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        lengths: tuple[int, ...] = (),
    ) -> None:
        super().__init__(message, hint=hint)
        self.lengths = lengths


class TypeMismatchError(IterkitError, TypeError):
    """A typed map variant received a result it cannot coerce."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        index: int | None = None,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.index = index
        self.expected = expected
        self.actual = actual


class EmptyInputError(IterkitError, ValueError):
    """A fold without a seed was given an empty collection."""


class UnresolvedCallableError(IterkitError, LookupError):
    """A function identifier could not be resolved to a callable."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        identifier: object = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.identifier = identifier
        self.index = index
