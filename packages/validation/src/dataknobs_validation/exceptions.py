"""Exception hierarchy for dataknobs_validation.

Validation failures are data, not exceptions: rules and scopes report them as
``ValidationError`` records inside a ``Validated`` or ``ValidationResult``.
The exceptions here cover the remaining cases, which are programming or
configuration mistakes:

- Malformed declarative validator configuration
- Lookups of check types that were never registered
- Explicit requests to turn a failed result into an exception

Example:
    ```python
    from dataknobs_validation.exceptions import ConfigurationError

    try:
        factory.create(**config)
    except ConfigurationError as e:
        logger.error(f"Bad validator config: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .errors import ValidationError


class DataknobsValidationError(Exception):
    """Base exception for the validation package.

    Supports optional context data for rich error information.

    Attributes:
        context: Dictionary containing contextual information about the error

    Example:
        ```python
        error = DataknobsValidationError(
            "Check failed to build",
            context={"check": "length", "min": -1}
        )
        str(error)
        # 'Check failed to build'
        ```
    """

    def __init__(self, message: str, context: Dict[str, Any] | None = None):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
        """
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(DataknobsValidationError):
    """Raised when a declarative validator configuration is invalid.

    Example:
        ```python
        raise ConfigurationError(
            "Field configuration missing 'name'",
            context={"index": 2}
        )
        ```
    """

    pass


class NotFoundError(DataknobsValidationError):
    """Raised when a check type is looked up but not registered."""

    pass


class ValidationFailed(DataknobsValidationError):
    """Raised on request when a validation result holds errors.

    Only ``ValidationResult.raise_if_invalid`` and ``get_or_raise`` raise
    this; the engine itself never does.

    Attributes:
        errors: The ordered list of validation errors
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = list(errors)
        summary = "; ".join(
            f"{error.path}: {error.message}" if str(error.path) else error.message
            for error in self.errors
        )
        super().__init__(
            f"Validation failed with {len(self.errors)} error(s): {summary}",
            context={"error_count": len(self.errors)},
        )


class OperationError(DataknobsValidationError):
    """Raised when a registry operation cannot be carried out.

    Example:
        ```python
        raise OperationError(
            "Check 'length' already registered",
            context={"key": "length", "registry": "checks"}
        )
        ```
    """

    pass
