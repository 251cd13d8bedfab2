"""Ready-made, path-agnostic rules for common checks.

Each function returns a ``Rule`` reporting at the empty path, so it can be
attached to any scope with ``scope.rule(...)`` and composed with the rule
combinators. Messages and codes have defaults and can be overridden.

Apart from ``required``, checks pass on None; combine them with
``required()`` or wrap them in ``when_not_null`` to control optional values.

Example:
    ```python
    from dataknobs_validation import checks

    def username_rules(username):
        username.rule(checks.not_blank())
        username.rule(checks.length(min=3, max=20))
        username.rule(checks.matches(r"^[a-z0-9_]+$", message="must be lowercase alphanumeric"))
    ```
"""

from __future__ import annotations

import math
import re
from numbers import Number
from re import Pattern as RegexPattern
from typing import Any, Iterable

from .rules import Rule, rule


def required(message: str = "is required", code: str | None = "required") -> Rule[Any]:
    """Value must not be None."""
    return rule(message, lambda value: value is not None, code)


def not_blank(message: str = "must not be blank", code: str | None = "not_blank") -> Rule[Any]:
    """String value must contain a non-whitespace character."""

    def check(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and value.strip() != ""

    return rule(message, check, code)


def not_empty(message: str = "must not be empty", code: str | None = "not_empty") -> Rule[Any]:
    """String or collection value must have at least one element."""

    def check(value: Any) -> bool:
        if value is None:
            return True
        return hasattr(value, "__len__") and len(value) > 0

    return rule(message, check, code)


def length(
    min: int | None = None,
    max: int | None = None,
    message: str | None = None,
    code: str | None = "length",
) -> Rule[Any]:
    """String or collection length must lie within ``[min, max]``.

    Args:
        min: Minimum length (inclusive)
        max: Maximum length (inclusive)
        message: Failure message; a default describing the bounds is used
        code: Error code

    Raises:
        ValueError: If a bound is negative or min > max
    """
    if min is not None and min < 0:
        raise ValueError(f"min length cannot be negative: {min}")
    if max is not None and max < 0:
        raise ValueError(f"max length cannot be negative: {max}")
    if min is not None and max is not None and min > max:
        raise ValueError(f"min length ({min}) cannot be greater than max ({max})")

    if message is None:
        if min is not None and max is not None:
            message = f"length must be between {min} and {max}"
        elif min is not None:
            message = f"length must be at least {min}"
        elif max is not None:
            message = f"length must be at most {max}"
        else:
            message = "must have a length"

    def check(value: Any) -> bool:
        if value is None:
            return True
        if not hasattr(value, "__len__"):
            return False
        size = len(value)
        if min is not None and size < min:
            return False
        return max is None or size <= max

    return rule(message, check, code)


def value_range(
    min: Number | None = None,
    max: Number | None = None,
    message: str | None = None,
    code: str | None = "range",
) -> Rule[Any]:
    """Numeric value must lie within ``[min, max]``; NaN never does.

    Raises:
        ValueError: If min > max
    """
    if min is not None and max is not None and float(min) > float(max):  # type: ignore[arg-type]
        raise ValueError(f"min ({min}) cannot be greater than max ({max})")

    if message is None:
        if min is not None and max is not None:
            message = f"must be between {min} and {max}"
        elif min is not None:
            message = f"must be at least {min}"
        elif max is not None:
            message = f"must be at most {max}"
        else:
            message = "must be a number"

    def check(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, bool) or not isinstance(value, Number):
            return False
        if isinstance(value, float) and math.isnan(value):
            return False
        if min is not None and float(value) < float(min):  # type: ignore[arg-type]
            return False
        return max is None or float(value) <= float(max)  # type: ignore[arg-type]

    return rule(message, check, code)


def matches(
    pattern: str | RegexPattern[str],
    message: str | None = None,
    code: str | None = "pattern",
) -> Rule[Any]:
    """String value must match ``pattern`` from its start.

    Raises:
        ValueError: If ``pattern`` is not a valid regular expression
    """
    if isinstance(pattern, str):
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
    else:
        regex = pattern

    if message is None:
        message = f"must match pattern '{regex.pattern}'"

    def check(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and regex.match(value) is not None

    return rule(message, check, code)


def one_of(
    values: Iterable[Any],
    message: str | None = None,
    code: str | None = "one_of",
    case_sensitive: bool = True,
) -> Rule[Any]:
    """Value must be one of ``values``.

    Raises:
        ValueError: If ``values`` is empty
    """
    allowed = list(values)
    if not allowed:
        raise ValueError("one_of requires at least one allowed value")

    if message is None:
        message = f"must be one of: {', '.join(repr(v) for v in allowed)}"

    if case_sensitive:
        accepted = allowed
        normalize = None
    else:
        accepted = [v.lower() if isinstance(v, str) else v for v in allowed]
        normalize = str.lower

    def check(value: Any) -> bool:
        if value is None:
            return True
        if normalize is not None and isinstance(value, str):
            value = normalize(value)
        return value in accepted

    return rule(message, check, code)


def is_numeric(message: str = "must be numeric", code: str | None = "numeric") -> Rule[Any]:
    """String value must consist of decimal digits only."""

    def check(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and value.isdigit()

    return rule(message, check, code)
