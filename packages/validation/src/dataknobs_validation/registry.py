"""Registry of named check constructors used by declarative configuration.

Example:
    ```python
    from dataknobs_validation.registry import default_registry, register_check

    @register_check("even")
    def even(message="must be even", code="even"):
        return rule(message, lambda n: n % 2 == 0, code)

    factory = default_registry.get("even")
    ```
"""

import logging
import threading
from typing import Any, Callable, Dict, List

from . import checks
from .exceptions import NotFoundError, OperationError
from .rules import Rule

logger = logging.getLogger(__name__)

CheckFactory = Callable[..., Rule[Any]]


class CheckRegistry:
    """Thread-safe mapping of check type names to rule constructors.

    Args:
        name: Registry name used in error context and logs
    """

    def __init__(self, name: str = "checks"):
        self._name = name
        self._items: Dict[str, CheckFactory] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    def register(self, key: str, factory: CheckFactory, allow_overwrite: bool = False) -> None:
        """Register a check constructor under ``key``.

        Args:
            key: Check type name as used in configuration
            factory: Callable accepting the check's parameters, returning a Rule
            allow_overwrite: Whether to replace an existing registration

        Raises:
            OperationError: If ``key`` is taken and allow_overwrite is False
        """
        with self._lock:
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Check '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = factory
            logger.debug(f"Registered check '{key}' in {self._name}")

    def unregister(self, key: str) -> CheckFactory:
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Check not found: {key}",
                    context={"key": key, "registry": self._name},
                )
            return self._items.pop(key)

    def get(self, key: str) -> CheckFactory:
        """Look up a check constructor.

        Raises:
            NotFoundError: If no check is registered under ``key``
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Check not found: {key}",
                    context={
                        "key": key,
                        "registry": self._name,
                        "available_keys": list(self._items.keys()),
                    },
                )
            return self._items[key]

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def create(self, key: str, **params: Any) -> Rule[Any]:
        """Build the check registered under ``key`` with ``params``."""
        return self.get(key)(**params)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"CheckRegistry(name={self._name!r}, checks={len(self)})"


def _builtin_registry() -> CheckRegistry:
    registry = CheckRegistry("checks")
    registry.register("required", checks.required)
    registry.register("not_blank", checks.not_blank)
    registry.register("not_empty", checks.not_empty)
    registry.register("length", checks.length)
    registry.register("range", checks.value_range)
    registry.register("pattern", checks.matches)
    registry.register("one_of", checks.one_of)
    registry.register("numeric", checks.is_numeric)
    return registry


default_registry = _builtin_registry()


def register_check(
    name: str,
    registry: CheckRegistry | None = None,
    allow_overwrite: bool = False,
) -> Callable[[CheckFactory], CheckFactory]:
    """Decorator registering a check constructor under ``name``."""

    def decorate(factory: CheckFactory) -> CheckFactory:
        target = registry if registry is not None else default_registry
        target.register(name, factory, allow_overwrite)
        return factory

    return decorate
