"""Factory building validators from declarative configuration."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError, NotFoundError
from .registry import CheckRegistry, default_registry
from .rules import Rule
from .scope import Block, FieldValidationScope
from .validator import Validator

logger = logging.getLogger(__name__)

_RULE_KEYS = {"type", "forbidden", "forbidden_code"}
_FIELD_KEYS = {"name", "rules", "dependent", "group", "optional", "each", "fields", "description"}


class ValidatorFactory:
    """Factory for creating validators from configuration.

    Configuration Options:
        name (str): Validator name
        fields (list): List of field definitions
        root (list): Rule entries applied to the whole target

    Field Definition Options:
        name (str): Field name (required)
        rules (list): Rule entries, evaluated independently
        dependent (list): Rule entries chained so each runs only if the
            previous one passed
        group (str): Label attached to the errors of this field's ``rules``;
            the ``dependent`` chain stays unlabelled, like ``dependent`` in ``group``
        optional (bool): Skip the field when its value is None
        each (bool): Apply the field definition to every list element
        fields (list): Nested field definitions

    Rule Entry Options:
        type (str): Registered check name (not_blank, length, ...)
        message (str): Overrides the check's default message
        code (str): Overrides the check's default code
        forbidden (str): Invert the check, failing with this message when
            the check would pass
        any other key: Passed to the check constructor (min, max, pattern, ...)

    Example Configuration:
        name: user_validator
        fields:
        - name: username
          group: identity
          rules:
            - type: not_blank
            - type: length
              min: 3
              max: 20
            - type: one_of
              values: [admin, root]
              forbidden: is reserved
        - name: age
          dependent:
            - type: numeric
            - type: pattern
              pattern: "^(1[89]|[2-9][0-9])$"
              message: must be at least 18
        - name: tags
          each: true
          fields:
            - name: value
              rules:
                - type: not_blank

    Args:
        registry: Check registry used to resolve rule types
    """

    def __init__(self, registry: CheckRegistry | None = None):
        self.registry = registry if registry is not None else default_registry

    def create(self, **config: Any) -> Validator[Any]:
        """Create a Validator from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Validator instance

        Raises:
            ConfigurationError: If the configuration is malformed
        """
        name = config.get("name", "unnamed_validator")
        logger.info(f"Creating validator: {name}")

        built: Validator[Any] = Validator(name)

        root_rules = self._build_rules(config.get("root", []), f"{name}.root")
        if root_rules:
            built.root(_attach_rules(root_rules))

        for index, field_config in enumerate(self._as_list(config.get("fields", []), "fields")):
            field_name, block = self._build_field(field_config, index)
            built.validate_field(field_name, block)

        return built

    def _build_field(self, field_config: Any, index: int) -> tuple[str, Block]:
        """Build the block for one field definition.

        Returns:
            The field name and the block validating its value
        """
        if not isinstance(field_config, dict):
            raise ConfigurationError(
                "Field configuration must be a mapping",
                context={"index": index, "value": field_config},
            )
        field_name = field_config.get("name")
        if not field_name:
            raise ConfigurationError(
                "Field configuration missing 'name'",
                context={"index": index, "keys": sorted(field_config.keys())},
            )

        unknown = set(field_config) - _FIELD_KEYS
        if unknown:
            logger.warning(f"Ignoring unknown keys for field '{field_name}': {sorted(unknown)}")

        rules = self._build_rules(field_config.get("rules", []), field_name)
        chain = self._build_chain(field_config.get("dependent", []), field_name)

        children = [
            self._build_field(child, child_index)
            for child_index, child in enumerate(
                self._as_list(field_config.get("fields", []), f"{field_name}.fields")
            )
        ]

        def element(scope: FieldValidationScope[Any]) -> None:
            for attached in rules:
                scope.rule(attached)
            for child_name, child_block in children:
                scope.validate(child_name, child_block)

        block: Block = element
        label = field_config.get("group")
        if label:
            block = _grouped(label, block)
        if chain is not None:
            block = _chained(chain, block)
        if field_config.get("each", False):
            block = _each(block)
        if field_config.get("optional", False):
            block = _optional(block)

        return field_name, block

    def _build_rules(self, entries: Any, owner: str) -> List[Rule[Any]]:
        return [self._build_rule(entry, owner) for entry in self._as_list(entries, f"{owner}.rules")]

    def _build_chain(self, entries: Any, owner: str) -> Rule[Any] | None:
        chain: Rule[Any] | None = None
        for entry in self._as_list(entries, f"{owner}.dependent"):
            following = self._build_rule(entry, owner)
            chain = following if chain is None else chain.and_then(following)
        return chain

    def _build_rule(self, entry: Any, owner: str) -> Rule[Any]:
        """Build one rule from its configuration entry."""
        if not isinstance(entry, dict) or not entry.get("type"):
            raise ConfigurationError(
                f"Rule entry for '{owner}' must be a mapping with a 'type'",
                context={"field": owner, "entry": entry},
            )

        check_type = str(entry["type"]).lower()
        params: Dict[str, Any] = {k: v for k, v in entry.items() if k not in _RULE_KEYS}

        try:
            factory = self.registry.get(check_type)
        except NotFoundError as e:
            raise ConfigurationError(
                f"Unknown check type '{check_type}' for '{owner}'",
                context={"field": owner, "type": check_type, "known_types": self.registry.list_keys()},
            ) from e

        try:
            built = factory(**params)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid parameters for check '{check_type}' on '{owner}': {e}",
                context={"field": owner, "type": check_type, "params": params},
            ) from e

        forbidden = entry.get("forbidden")
        if forbidden:
            built = built.is_forbidden(forbidden, entry.get("forbidden_code"))
        return built

    @staticmethod
    def _as_list(value: Any, owner: str) -> list[Any]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ConfigurationError(
                f"'{owner}' must be a list",
                context={"key": owner, "type": type(value).__name__},
            )
        return value


def _attach_rules(rules: List[Rule[Any]]) -> Block:
    def attach(scope: FieldValidationScope[Any]) -> None:
        for attached in rules:
            scope.rule(attached)

    return attach


def _grouped(label: str, block: Block) -> Block:
    return lambda scope: scope.group(label, block)


def _chained(chain: Rule[Any], block: Block) -> Block:
    def attach(scope: FieldValidationScope[Any]) -> None:
        block(scope)
        scope.rule(chain)

    return attach


def _each(block: Block) -> Block:
    return lambda scope: scope.validate_items(block)


def _optional(block: Block) -> Block:
    return lambda scope: scope.when_not_null(block)


def load_config(path: str | Path) -> Dict[str, Any]:
    """Read a validator configuration from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file type is unsupported or the content
            is not a mapping
    """
    path = Path(path)
    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(f) or {}
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported configuration file type: {suffix}",
                context={"path": str(path)},
            )

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Validator configuration must be a mapping",
            context={"path": str(path), "type": type(data).__name__},
        )
    return data


def load_validator(path: str | Path, factory: ValidatorFactory | None = None) -> Validator[Any]:
    """Build a validator from a YAML or JSON configuration file."""
    config = load_config(path)
    logger.debug(f"Loaded validator configuration from {path}")
    return (factory if factory is not None else validator_factory).create(**config)


# Singleton instance for registration
validator_factory = ValidatorFactory()

