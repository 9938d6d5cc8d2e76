"""Railway-style result type used instead of exceptions for domain failures."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import DomainError

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class ResultAccessError(RuntimeError):
    """Raised when reading the wrong variant of a result."""


@dataclass(frozen=True)
class Unit:
    """Value of operations that succeed without producing anything."""

    def __repr__(self) -> str:
        return "Unit()"


UNIT = Unit()


class Result(Generic[T]):
    """Holds exactly one of a success value or a ``DomainError``.

    Build instances with ``Result.success`` / ``Result.failure``. Reading
    ``value`` on a failure (or ``error`` on a success) raises
    ``ResultAccessError``: that is a bug in the caller, not a domain condition.
    """

    __slots__ = ("_error", "_ok", "_value")

    def __init__(self, ok: bool, value: Any = None, error: DomainError | None = None) -> None:
        self._ok = ok
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(True, value=value)

    @classmethod
    def failure(cls, error: DomainError) -> Result[Any]:
        if error is None:
            raise ValueError("failure requires an error")
        return cls(False, error=error)

    @property
    def is_success(self) -> bool:
        return self._ok

    @property
    def is_failure(self) -> bool:
        return not self._ok

    @property
    def value(self) -> T:
        if not self._ok:
            raise ResultAccessError(f"Cannot access value of failed result: {self._error}")
        return self._value

    @property
    def error(self) -> DomainError:
        if self._ok:
            raise ResultAccessError("Cannot access error of successful result")
        assert self._error is not None
        return self._error

    def map(self, mapper: Callable[[T], U]) -> Result[U]:
        """Transform the success value; failures pass through untouched."""
        if self._ok:
            return Result.success(mapper(self._value))
        return Result.failure(self.error)

    def bind(self, binder: Callable[[T], Result[U]]) -> Result[U]:
        """Chain an operation that may itself fail, stopping at the first failure."""
        if self._ok:
            return binder(self._value)
        return Result.failure(self.error)

    def match(self, on_success: Callable[[T], R], on_failure: Callable[[DomainError], R]) -> R:
        """Handle both variants, returning a uniform type."""
        if self._ok:
            return on_success(self._value)
        return on_failure(self.error)

    def value_or(self, default: T) -> T:
        return self._value if self._ok else default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (self._ok, self._value, self._error) == (other._ok, other._value, other._error)

    def __repr__(self) -> str:
        if self._ok:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"


def collect(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Gather successes into a list, returning the first failure in order."""
    values: list[T] = []
    for result in results:
        if result.is_failure:
            return Result.failure(result.error)
        values.append(result.value)
    return Result.success(values)
