"""Builders for short-circuiting rule chains."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from .path import PropertyPath
from .rules import Rule

T = TypeVar("T")


class RuleChainScope(Generic[T]):
    """Collects dependent rules sharing one path into a single chain.

    Each ``rule`` call is folded onto the chain with ``and_then``, so a rule
    only runs when every earlier one passed. This backs the ``dependent``
    block of ``FieldValidationScope``.

    Example:
        ```python
        chain = RuleChainScope(PropertyPath("age"))
        chain.rule("must be numeric", str.isdigit)
        chain.rule("must be >= 18", lambda s: int(s) >= 18)
        age_rule = chain.build()
        ```
    """

    def __init__(self, path: PropertyPath):
        self.path = path
        self._current: Rule[T] | None = None

    def rule(
        self,
        message: str,
        check: Callable[[T], bool],
        code: str | None = None,
    ) -> RuleChainScope[T]:
        """Append a predicate to the chain (fluent API).

        Args:
            message: Failure message
            check: Returns True when the value is acceptable
            code: Optional machine-readable error code

        Returns:
            Self for chaining
        """
        following: Rule[T] = Rule.from_predicate(self.path, message, check, code)
        if self._current is None:
            self._current = following
        else:
            self._current = self._current.and_then(following)
        return self

    def build(self) -> Rule[T] | None:
        """The composed chain, or None when no rule was added."""
        return self._current


class RuleBuilder(Generic[T]):
    """Fluent builder extending a seed rule with dependent checks.

    Example:
        ```python
        username = (
            RuleBuilder(rule("must not be blank", lambda s: s.strip() != ""))
            .and_then("must be lowercase", str.islower)
            .build()
        )
        ```
    """

    def __init__(self, seed: Rule[T]):
        self._rule = seed

    def and_then(
        self,
        message: str,
        check: Callable[[T], bool],
        code: str | None = None,
    ) -> RuleBuilder[T]:
        self._rule = self._rule.and_then(
            Rule.from_predicate(PropertyPath.EMPTY, message, check, code)
        )
        return self

    def build(self) -> Rule[T]:
        return self._rule
