"""Declarative, composable validation for dataknobs packages.

Validators report failures as an ordered list of ``ValidationError`` records
(path, message, optional code and group) instead of raising:

- **Paths**: ``PropertyPath`` addresses such as ``items[0].tags[2].value``
- **Results**: ``Validated`` (``Valid``/``Invalid``) with short-circuiting
  ``flat_map`` and error-accumulating ``ap``/``combine_results``
- **Rules**: reusable ``Rule`` objects with ``and_then``, ``combine`` (``&``)
  and ``is_forbidden``
- **DSL**: ``validator`` / ``Validator`` and ``FieldValidationScope`` for
  nested, list, optional, dependent and grouped validations
- **Configuration**: ``ValidatorFactory`` building validators from dicts or
  YAML/JSON files using the ``checks`` registry

Example:
    ```python
    from dataknobs_validation import validator

    @validator
    def user_validator(v):
        v.validate_field("name", lambda name: name.rule(
            "must not be blank", lambda s: s.strip() != ""
        ))

        @v.validate_field("age")
        def age(age):
            @age.dependent
            def chain(chain):
                chain.rule("must be numeric", str.isdigit)
                chain.rule("must be >= 18", lambda s: int(s) >= 18)

    result = user_validator.validate({"name": "", "age": "15"})
    [str(e.path) for e in result.errors]
    # ['name', 'age']
    ```
"""

from dataknobs_validation import checks
from dataknobs_validation.chain import RuleBuilder, RuleChainScope
from dataknobs_validation.errors import ValidationError
from dataknobs_validation.exceptions import (
    ConfigurationError,
    DataknobsValidationError,
    NotFoundError,
    OperationError,
    ValidationFailed,
)
from dataknobs_validation.factory import (
    ValidatorFactory,
    load_config,
    load_validator,
    validator_factory,
)
from dataknobs_validation.path import IndexSegment, NamedSegment, PropertyPath
from dataknobs_validation.registry import CheckRegistry, default_registry, register_check
from dataknobs_validation.result import InvalidResult, ValidationResult, ValidResult
from dataknobs_validation.rules import (
    Rule,
    all_of,
    from_function,
    from_predicate,
    predicate,
    rule,
)
from dataknobs_validation.scope import FieldValidationScope, field_getter
from dataknobs_validation.validated import (
    VALID,
    Invalid,
    Valid,
    Validated,
    combine_results,
    combine_results_from_list,
)
from dataknobs_validation.validator import Validator, validator

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Paths and errors
    "PropertyPath",
    "NamedSegment",
    "IndexSegment",
    "ValidationError",
    # Validated
    "Validated",
    "Valid",
    "Invalid",
    "VALID",
    "combine_results",
    "combine_results_from_list",
    # Rules
    "Rule",
    "rule",
    "predicate",
    "from_predicate",
    "from_function",
    "all_of",
    "RuleChainScope",
    "RuleBuilder",
    "checks",
    # DSL
    "FieldValidationScope",
    "field_getter",
    "Validator",
    "validator",
    # Results
    "ValidationResult",
    "ValidResult",
    "InvalidResult",
    # Configuration
    "CheckRegistry",
    "default_registry",
    "register_check",
    "ValidatorFactory",
    "validator_factory",
    "load_config",
    "load_validator",
    # Exceptions
    "DataknobsValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "ValidationFailed",
]
