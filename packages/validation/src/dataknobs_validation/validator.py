"""Top-level validators binding a target type to its field validations.

Example:
    ```python
    from dataknobs_validation import validator

    @validator
    def user_validator(v):
        v.validate_field("name", lambda name: name.rule(
            "must not be blank", lambda s: s.strip() != ""
        ))

        @v.validate_each("tags")
        def tag(tag):
            tag.validate("value", lambda value: value.rule(
                "must not be blank", lambda s: s.strip() != ""
            ))

    result = user_validator.validate(user)
    if not result:
        for error in result.errors:
            print(f"{error.path}: {error.message}")
    ```

A validator is built once and can be reused, also from several threads at
once: every ``validate`` call builds its own short-lived scopes and the
registered closures are never modified after construction.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, TypeVar

from .errors import ValidationError
from .path import PropertyPath
from .result import ValidationResult
from .scope import (
    Block,
    FieldValidationScope,
    Getter,
    block_decorator,
    constant,
    evaluate_each,
    field_getter,
)
from .validated import Validated

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Validator(Generic[T]):
    """Ordered collection of field validations for one target type.

    Args:
        name: Optional name used in logs and ``repr``
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self._validations: List[Callable[[T], Validated[None]]] = []
        self._fields: List[str] = []

    @property
    def fields(self) -> list[str]:
        """Registered field paths, in registration order (``""`` for root)."""
        return list(self._fields)

    def root(self, block: Block | None = None) -> Any:
        """Validate the whole target at the empty path.

        Used for invariants spanning several fields.
        """
        if block is None:
            return block_decorator(self.root)

        def validation(target: T) -> Validated[None]:
            return FieldValidationScope(PropertyPath.EMPTY, constant(target)).apply(block).evaluate()

        self._register("", validation)
        return None

    def validate_field(
        self,
        name: str,
        block: Block | None = None,
        getter: Getter | None = None,
    ) -> Any:
        """Register validations for the field ``name`` of the target.

        Args:
            name: Field name, used as the root path segment
            block: Configures the field's scope
            getter: Reads the field from the target; defaults to mapping key
                or attribute lookup by ``name``
        """
        if block is None:
            return block_decorator(lambda b: self.validate_field(name, b, getter))

        read = getter or field_getter(name)
        path = PropertyPath(name)

        def validation(target: T) -> Validated[None]:
            value = read(target)
            return FieldValidationScope(path, constant(value)).apply(block).evaluate()

        self._register(name, validation)
        return None

    def validate_each(
        self,
        name: str,
        block: Block | None = None,
        getter: Getter | None = None,
    ) -> Any:
        """Register validations for every element of the list field ``name``.

        Element paths are ``name[i]``; errors come out in element order.
        The field must hold a list; a missing mapping key reads as None and
        fails to iterate. Use ``validate_field`` with ``when_not_null`` and
        ``validate_items`` for optional lists.
        """
        if block is None:
            return block_decorator(lambda b: self.validate_each(name, b, getter))

        read = getter or field_getter(name)
        path = PropertyPath(name)

        def validation(target: T) -> Validated[None]:
            return evaluate_each(path, read(target), block)

        self._register(f"{name}[]", validation)
        return None

    def validate(self, target: T) -> ValidationResult[T]:
        """Run every registered validation against ``target``.

        Args:
            target: The value to validate

        Returns:
            ``ValidResult(target)`` when nothing failed, otherwise an
            ``InvalidResult`` with all errors in registration order
        """
        errors: list[ValidationError] = []
        for validation in self._validations:
            errors.extend(validation(target).errors_or_empty)
        return ValidationResult.of(target, errors)

    def __call__(self, target: T) -> ValidationResult[T]:
        return self.validate(target)

    def _register(self, label: str, validation: Callable[[T], Validated[None]]) -> None:
        logger.debug(f"Registering validation for '{label or '<root>'}' on {self!r}")
        self._validations.append(validation)
        self._fields.append(label)

    def __repr__(self) -> str:
        return f"Validator(name={self.name!r}, fields={len(self._fields)})"


def validator(block: Callable[[Validator[Any]], Any] | None = None, *, name: str | None = None) -> Any:
    """Build a ``Validator`` by running ``block`` against a fresh instance.

    Works as a call (``validator(configure)``) or as a decorator; the
    decorated function is replaced by the built validator, named after it.
    """
    if block is None:
        return lambda fn: validator(fn, name=name)

    built: Validator[Any] = Validator(name or getattr(block, "__name__", None))
    block(built)
    return built
