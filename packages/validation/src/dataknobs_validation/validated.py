"""The ``Validated`` result type and its combinators.

``Validated`` has two variants:

- ``Valid(value)`` - the check passed, carrying a value (``None`` for plain passes)
- ``Invalid(errors)`` - the check failed with a non-empty, ordered error list

Two composition styles are available and chosen at the call site:

- ``flat_map`` short-circuits: the continuation only runs on ``Valid``.
  Use it when a later check presumes an earlier one succeeded.
- ``ap`` and ``combine_results`` accumulate: every input is inspected and all
  error lists are concatenated in order.

Example:
    ```python
    numeric = Valid(None) if text.isdigit() else Invalid([error])
    adult = numeric.flat_map(lambda _: check_age(int(text)))
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Sequence, TypeVar

if TYPE_CHECKING:
    from .errors import ValidationError

T = TypeVar("T")
U = TypeVar("U")


class Validated(ABC, Generic[T]):
    """Base class of ``Valid`` and ``Invalid``."""

    __slots__ = ()

    @abstractmethod
    def is_valid(self) -> bool:
        pass

    def is_invalid(self) -> bool:
        return not self.is_valid()

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> Validated[U]:
        """Transform the value of a ``Valid``; ``Invalid`` passes through."""

    @abstractmethod
    def flat_map(self, f: Callable[[T], Validated[U]]) -> Validated[U]:
        """Chain a dependent step; ``Invalid`` short-circuits unchanged."""

    @abstractmethod
    def ap(self, fa: Validated[Any]) -> Validated[Any]:
        """Apply a wrapped function to a wrapped argument, accumulating errors.

        ``self`` wraps a one-argument function. When both sides are valid
        the function is applied; otherwise the errors of every invalid side
        are concatenated, this side's first.
        """

    @property
    @abstractmethod
    def errors_or_empty(self) -> list[ValidationError]:
        """The error list for ``Invalid``, an empty list for ``Valid``."""

    def to_unit(self) -> Validated[None]:
        """Discard the carried value."""
        return self.map(lambda _: None)

    def __bool__(self) -> bool:
        return self.is_valid()


class Valid(Validated[T]):
    """A passed check carrying ``value``."""

    __slots__ = ("value",)

    def __init__(self, value: T = None):  # type: ignore[assignment]
        self.value = value

    def is_valid(self) -> bool:
        return True

    def map(self, f: Callable[[T], U]) -> Validated[U]:
        return Valid(f(self.value))

    def flat_map(self, f: Callable[[T], Validated[U]]) -> Validated[U]:
        return f(self.value)

    def ap(self, fa: Validated[Any]) -> Validated[Any]:
        if isinstance(fa, Valid):
            return Valid(self.value(fa.value))  # type: ignore[operator]
        return fa

    @property
    def errors_or_empty(self) -> list[ValidationError]:
        return []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Valid):
            return NotImplemented
        return bool(self.value == other.value)

    def __hash__(self) -> int:
        return hash(("Valid", self.value))

    def __repr__(self) -> str:
        return f"Valid({self.value!r})"


class Invalid(Validated[Any]):
    """A failed check with its ordered, non-empty error list."""

    __slots__ = ("errors",)

    def __init__(self, errors: Iterable[ValidationError]):
        errors = list(errors)
        if not errors:
            raise ValueError("Invalid requires at least one error")
        self.errors: list[ValidationError] = errors

    def is_valid(self) -> bool:
        return False

    def map(self, f: Callable[[Any], U]) -> Validated[U]:
        return self

    def flat_map(self, f: Callable[[Any], Validated[U]]) -> Validated[U]:
        return self

    def ap(self, fa: Validated[Any]) -> Validated[Any]:
        if isinstance(fa, Invalid):
            return Invalid(self.errors + fa.errors)
        return self

    @property
    def errors_or_empty(self) -> list[ValidationError]:
        return list(self.errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Invalid):
            return NotImplemented
        return self.errors == other.errors

    def __hash__(self) -> int:
        return hash(("Invalid", tuple(self.errors)))

    def __repr__(self) -> str:
        return f"Invalid({self.errors!r})"


VALID: Valid[None] = Valid(None)


def combine_results_from_list(results: Sequence[Validated[T]]) -> Validated[list[T]]:
    """Combine many results into one, accumulating every error.

    Args:
        results: Results to combine, in order

    Returns:
        ``Valid`` of all values in input order if every result passed,
        otherwise ``Invalid`` with all errors in input order
    """
    errors: list[ValidationError] = []
    values: list[T] = []
    for result in results:
        if isinstance(result, Invalid):
            errors.extend(result.errors)
        else:
            values.append(result.value)  # type: ignore[attr-defined]

    if errors:
        return Invalid(errors)
    return Valid(values)


def combine_results(*results: Validated[T]) -> Validated[list[T]]:
    """Varargs form of ``combine_results_from_list``."""
    return combine_results_from_list(results)
