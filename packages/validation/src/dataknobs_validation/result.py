"""Outward-facing validation result types.

``ValidationResult`` is what ``Validator.validate`` returns. Unlike
``Validated[None]``, a successful result carries the validated value so
post-validation logic can be chained without explicit branching:

```python
account = (
    validator.validate(user)
    .on_invalid(report_errors)
    .map(create_account)
    .get_or_else(lambda: None)
)
```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, TypeVar

from .errors import ValidationError
from .exceptions import ValidationFailed
from .validated import VALID, Invalid, Validated

T = TypeVar("T")
U = TypeVar("U")


class ValidationResult(ABC, Generic[T]):
    """Base class of ``ValidResult`` and ``InvalidResult``."""

    @classmethod
    def of(cls, value: T, errors: Iterable[ValidationError]) -> ValidationResult[T]:
        """Create a result for ``value``: valid when ``errors`` is empty.

        Args:
            value: The validated value
            errors: Errors found while validating it

        Returns:
            ``ValidResult(value)`` or ``InvalidResult(errors)``
        """
        errors = list(errors)
        if errors:
            return InvalidResult(errors)
        return ValidResult(value)

    @classmethod
    def success(cls, value: T) -> ValidationResult[T]:
        return ValidResult(value)

    @classmethod
    def failure(cls, errors: Iterable[ValidationError]) -> ValidationResult[Any]:
        return InvalidResult(errors)

    @classmethod
    def from_validated(cls, value: T, validated: Validated[Any]) -> ValidationResult[T]:
        """Attach ``value`` to the outcome of a ``Validated`` evaluation."""
        return cls.of(value, validated.errors_or_empty)

    @classmethod
    def from_many(cls, errors: Iterable[ValidationError]) -> ValidationResult[None]:
        """Create a value-less result from an already flattened error list."""
        return cls.of(None, errors)

    @property
    @abstractmethod
    def valid(self) -> bool:
        pass

    @property
    def invalid(self) -> bool:
        return not self.valid

    @property
    @abstractmethod
    def errors(self) -> list[ValidationError]:
        """The ordered errors; empty for a valid result."""

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @abstractmethod
    def get_or_none(self) -> T | None:
        pass

    @abstractmethod
    def get_or_else(self, default: Callable[[], T]) -> T:
        pass

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> ValidationResult[U]:
        pass

    @abstractmethod
    def flat_map(self, f: Callable[[T], ValidationResult[U]]) -> ValidationResult[U]:
        pass

    def on_valid(self, action: Callable[[T], Any]) -> ValidationResult[T]:
        """Run ``action`` with the value when valid; returns self."""
        return self

    def on_invalid(self, action: Callable[[list[ValidationError]], Any]) -> ValidationResult[T]:
        """Run ``action`` with the errors when invalid; returns self."""
        return self

    def get_or_raise(self) -> T:
        """Return the value, raising ``ValidationFailed`` when invalid."""
        self.raise_if_invalid()
        return self.get_or_none()  # type: ignore[return-value]

    def raise_if_invalid(self) -> None:
        if not self.valid:
            raise ValidationFailed(self.errors)

    @abstractmethod
    def to_validated(self) -> Validated[None]:
        """Convert back into the engine's ``Validated`` currency."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for transport.

        Returns:
            ``{"valid": bool, "errors": [...]}`` with errors as dictionaries
        """
        return {"valid": self.valid, "errors": [error.to_dict() for error in self.errors]}


class ValidResult(ValidationResult[T]):
    """A passed validation carrying the validated value."""

    __match_args__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    @property
    def valid(self) -> bool:
        return True

    @property
    def errors(self) -> list[ValidationError]:
        return []

    def get_or_none(self) -> T | None:
        return self.value

    def get_or_else(self, default: Callable[[], T]) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> ValidationResult[U]:
        return ValidResult(f(self.value))

    def flat_map(self, f: Callable[[T], ValidationResult[U]]) -> ValidationResult[U]:
        return f(self.value)

    def on_valid(self, action: Callable[[T], Any]) -> ValidationResult[T]:
        action(self.value)
        return self

    def to_validated(self) -> Validated[None]:
        return VALID

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidResult):
            return NotImplemented
        return bool(self.value == other.value)

    def __hash__(self) -> int:
        return hash(("ValidResult", self.value))

    def __repr__(self) -> str:
        return f"ValidResult({self.value!r})"


class InvalidResult(ValidationResult[Any]):
    """A failed validation with its ordered, non-empty error list."""

    __match_args__ = ("errors",)

    def __init__(self, errors: Iterable[ValidationError]):
        errors = list(errors)
        if not errors:
            raise ValueError("InvalidResult requires at least one error")
        self._errors = errors

    @property
    def valid(self) -> bool:
        return False

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    def get_or_none(self) -> None:
        return None

    def get_or_else(self, default: Callable[[], Any]) -> Any:
        return default()

    def map(self, f: Callable[[Any], U]) -> ValidationResult[U]:
        return self

    def flat_map(self, f: Callable[[Any], ValidationResult[U]]) -> ValidationResult[U]:
        return self

    def on_invalid(self, action: Callable[[list[ValidationError]], Any]) -> ValidationResult[Any]:
        action(self.errors)
        return self

    def to_validated(self) -> Validated[None]:
        return Invalid(self._errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidResult):
            return NotImplemented
        return self._errors == other._errors

    def __hash__(self) -> int:
        return hash(("InvalidResult", tuple(self._errors)))

    def __repr__(self) -> str:
        return f"InvalidResult({self._errors!r})"

