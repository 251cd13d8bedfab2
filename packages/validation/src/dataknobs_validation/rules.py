"""Rules: the atomic, reusable unit of validation.

A ``Rule`` wraps a pure function ``value -> Validated[None]``. Rules hold no
state, so one instance can be shared across scopes, validators and threads.
Combinators build new rules without touching their inputs:

- ``a.and_then(b)`` runs ``b`` only when ``a`` passes (short-circuit)
- ``a.combine(b)`` or ``a & b`` always runs both and reports every error
- ``a.is_forbidden(message)`` fails exactly when ``a`` would pass

Example:
    ```python
    numeric = from_predicate("age", "must be numeric", str.isdigit)
    adult = from_predicate("age", "must be >= 18", lambda s: int(s) >= 18)

    age_rule = numeric.and_then(adult)
    age_rule("abc")   # only "must be numeric", int() never runs
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .errors import ValidationError
from .path import PropertyPath
from .validated import VALID, Invalid, Validated

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


class Rule(Generic[T]):
    """A pure validation function with composable operators."""

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[T], Validated[None]]):
        self._fn = fn

    def __call__(self, value: T) -> Validated[None]:
        return self._fn(value)

    @classmethod
    def from_function(cls, fn: Callable[[T], Validated[None]]) -> Rule[T]:
        """Treat any ``value -> Validated`` callable as a rule."""
        if isinstance(fn, Rule):
            return fn
        return cls(fn)

    @classmethod
    def from_predicate(
        cls,
        path: PropertyPath | str,
        message: str,
        predicate: Callable[[T], bool],
        code: str | None = None,
        group: str | None = None,
    ) -> Rule[T]:
        """Build a rule from a boolean predicate.

        Args:
            path: Path reported on failure (text is parsed)
            message: Failure message
            predicate: Returns True when the value is acceptable
            code: Optional machine-readable error code
            group: Optional group label

        Returns:
            Rule yielding ``Valid(None)`` or a single-error ``Invalid``
        """
        if isinstance(path, str):
            path = PropertyPath.parse(path)
        error = ValidationError(path, message, code, group)

        def check(value: T) -> Validated[None]:
            if predicate(value):
                return VALID
            return Invalid([error])

        return cls(check)

    def and_then(self, following: Rule[T] | Callable[[T], Validated[None]]) -> Rule[T]:
        """Sequence two rules, stopping at the first failure."""
        first = self._fn

        def chained(value: T) -> Validated[None]:
            return first(value).flat_map(lambda _: following(value))

        return Rule(chained)

    def combine(self, other: Rule[T] | Callable[[T], Validated[None]]) -> Rule[T]:
        """Run both rules on the same value and accumulate their errors."""
        first = self._fn

        def both(value: T) -> Validated[None]:
            left = first(value)
            right = other(value)
            if isinstance(left, Invalid) and isinstance(right, Invalid):
                return Invalid(left.errors + right.errors)
            if isinstance(left, Invalid):
                return left
            if isinstance(right, Invalid):
                return right
            return VALID

        return Rule(both)

    def __and__(self, other: Rule[T]) -> Rule[T]:
        """Combine with AND: both rules run and all errors are kept."""
        return self.combine(other)

    def is_forbidden(
        self,
        message: str,
        code: str | None = None,
        group: str | None = None,
    ) -> Rule[T]:
        """Invert this rule's outcome.

        The new rule fails when this one passes, reporting ``message`` at
        the empty path (the attaching scope supplies the real path). When
        this rule fails, the new rule passes.
        """
        inner = self._fn
        error = ValidationError.root(message, code, group)

        def forbidden(value: T) -> Validated[None]:
            if inner(value).is_valid():
                return Invalid([error])
            return VALID

        return Rule(forbidden)

    def at(self, path: PropertyPath) -> Rule[T]:
        """Report this rule's empty-path errors at ``path`` instead.

        Errors that already carry a path keep it.
        """
        inner = self._fn

        def located(value: T) -> Validated[None]:
            result = inner(value)
            if isinstance(result, Invalid):
                return Invalid(
                    error.with_path(path) if error.path.is_empty() else error
                    for error in result.errors
                )
            return result

        return Rule(located)


def from_predicate(
    path: PropertyPath | str,
    message: str,
    predicate: Callable[[T], bool],
    code: str | None = None,
    group: str | None = None,
) -> Rule[T]:
    """Module-level alias of ``Rule.from_predicate``."""
    return Rule.from_predicate(path, message, predicate, code, group)


def from_function(fn: Callable[[T], Validated[None]]) -> Rule[T]:
    """Module-level alias of ``Rule.from_function``."""
    return Rule.from_function(fn)


def rule(
    message: str,
    check: Callable[[T], bool],
    code: str | None = None,
    group: str | None = None,
) -> Rule[T]:
    """Create a reusable, path-agnostic rule.

    Failures are reported at the empty path; attaching the rule to a scope
    stamps the scope's path onto them.
    """
    return Rule.from_predicate(PropertyPath.EMPTY, message, check, code, group)


predicate = rule


def all_of(rules: Iterable[Rule[T]]) -> Rule[T]:
    """Combine any number of rules with accumulating semantics."""
    combined: Rule[T] = Rule(lambda _: VALID)
    for item in rules:
        combined = combined.combine(item)
    return combined
