"""The validation DSL scope bound to one value and one path.

A ``FieldValidationScope`` is created for every block invocation. Blocks are
plain callables that receive the scope and declare what to check:

```python
def address_rules(address):
    address.rule("must not be blank", lambda a: a.street.strip() != "")
    address.validate("zip", lambda zip_code: zip_code.dependent(zip_chain))

def zip_chain(chain):
    chain.rule("must be numeric", str.isdigit)
    chain.rule("must have 5 digits", lambda s: len(s) == 5)
```

Every block-taking method can also be used as a decorator by leaving the
block out:

```python
@scope.validate_each("tags")
def tag_rules(tag):
    tag.rule("must not be blank", lambda t: t.strip() != "")
```

Direct rules run independently and accumulate; ``dependent`` chains stop at
their first failure. ``evaluate`` reads the value once and returns every
error, direct rules first, then nested validations in declaration order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Generic, List, TypeVar

from .chain import RuleChainScope
from .errors import ValidationError
from .path import PropertyPath
from .rules import Rule
from .validated import VALID, Invalid, Validated, combine_results_from_list

if TYPE_CHECKING:
    from .validator import Validator

R = TypeVar("R")

Block = Callable[["FieldValidationScope[Any]"], Any]
Getter = Callable[[Any], Any]


def field_getter(name: str) -> Getter:
    """Default accessor for a named field.

    Mappings are read with ``.get(name)`` so an absent key reads as None;
    anything else is read with ``getattr``.
    """

    def read(owner: Any) -> Any:
        if isinstance(owner, Mapping):
            return owner.get(name)
        return getattr(owner, name)

    read.__name__ = f"get_{name}"
    return read


def block_decorator(attach: Callable[[Block], None]) -> Callable[[Block], Block]:
    def decorate(block: Block) -> Block:
        attach(block)
        return block

    return decorate


def evaluate_each(path: PropertyPath, items: Any, block: Block) -> Validated[None]:
    """Run ``block`` against every element of ``items`` at ``path[i]``."""
    results = [
        FieldValidationScope(path.index(i), constant(item)).apply(block).evaluate()
        for i, item in enumerate(items)
    ]
    return combine_results_from_list(results).to_unit()


def constant(value: Any) -> Callable[[], Any]:
    return lambda: value


def _relabel(rule: Rule[Any], label: str) -> Rule[Any]:
    def labelled(value: Any) -> Validated[None]:
        result = rule(value)
        if isinstance(result, Invalid):
            return Invalid(error.with_group(label) for error in result.errors)
        return result

    return Rule(labelled)


class FieldValidationScope(Generic[R]):
    """DSL context binding a value getter, a path and the checks to run.

    Attributes:
        path: Path reported for errors raised directly in this scope
        getter: Produces the value; called once per ``evaluate``
        label: Group label stamped on errors of this scope's direct rules
        rules: Rules run against the value, in declaration order
        nested: Deferred child validations, in declaration order
    """

    def __init__(
        self,
        path: PropertyPath,
        getter: Callable[[], R],
        label: str | None = None,
    ):
        self.path = path
        self.getter = getter
        self.label = label
        self.rules: List[Rule[R]] = []
        self.nested: List[Callable[[R], Validated[None]]] = []

    def apply(self, block: Block) -> FieldValidationScope[R]:
        """Run a configuration block against this scope (fluent API)."""
        block(self)
        return self

    def rule(
        self,
        message: str | Rule[R] | Callable[[R], Validated[None]],
        check: Callable[[R], bool] | None = None,
        code: str | None = None,
        group: str | None = None,
    ) -> None:
        """Attach a rule to this scope.

        Accepts either an inline ``(message, check)`` pair or a ready-made
        rule. A ready-made rule's empty-path errors are reported at this
        scope's path; errors that carry their own path keep it.

        Args:
            message: Failure message, or a Rule / ``value -> Validated`` callable
            check: Predicate returning True when the value is acceptable
            code: Optional machine-readable error code
            group: Optional group label
        """
        if isinstance(message, str):
            if check is None:
                raise TypeError("rule() with a message requires a check predicate")
            attached: Rule[R] = Rule.from_predicate(self.path, message, check, code, group)
        else:
            if check is not None:
                raise TypeError("rule() with a Rule does not take a check predicate")
            attached = Rule.from_function(message).at(self.path)

        if self.label is not None:
            attached = _relabel(attached, self.label)
        self.rules.append(attached)

    def validate(
        self,
        name: str,
        block: Block | None = None,
        getter: Getter | None = None,
    ) -> Any:
        """Validate a sub-field of the current value at ``path.name``.

        Args:
            name: Field name, used as the path segment
            block: Configures the child scope
            getter: Reads the field from the current value; defaults to
                mapping key or attribute lookup by ``name``
        """
        if block is None:
            return block_decorator(lambda b: self.validate(name, b, getter))

        read = getter or field_getter(name)
        sub_path = self.path.child(name)

        def nested(value: R) -> Validated[None]:
            field_value = read(value)
            return FieldValidationScope(sub_path, constant(field_value)).apply(block).evaluate()

        self.nested.append(nested)
        return None

    def validate_each(
        self,
        name: str,
        block: Block | None = None,
        getter: Getter | None = None,
    ) -> Any:
        """Validate every element of a list sub-field at ``path.name[i]``.

        Errors of all failing elements are reported, in element order.
        An empty list passes. The field must hold a list: a missing mapping
        key reads as None and fails to iterate. For optional lists use
        ``validate(name, lambda s: s.when_not_null(lambda p: p.validate_items(block)))``.
        """
        if block is None:
            return block_decorator(lambda b: self.validate_each(name, b, getter))

        read = getter or field_getter(name)
        list_path = self.path.child(name)
        self.nested.append(lambda value: evaluate_each(list_path, read(value), block))
        return None

    def validate_items(self, block: Block | None = None) -> Any:
        """Validate every element of this scope's own list value at ``path[i]``.

        The value must be iterable; wrap in ``when_not_null`` when it may be None.
        """
        if block is None:
            return block_decorator(self.validate_items)

        self.nested.append(lambda value: evaluate_each(self.path, value, block))
        return None

    def when_not_null(self, block: Block | None = None) -> Any:
        """Run ``block`` only when the current value is not None.

        A None value passes without evaluating anything in the block. The
        block shares this scope's path and group label.
        """
        if block is None:
            return block_decorator(self.when_not_null)

        path = self.path
        label = self.label

        def nested(value: R) -> Validated[None]:
            if value is None:
                return VALID
            return FieldValidationScope(path, constant(value), label=label).apply(block).evaluate()

        self.nested.append(nested)
        return None

    def rule_if_present(
        self,
        message: str,
        check: Callable[[Any], bool],
        code: str | None = None,
        group: str | None = None,
    ) -> None:
        """Attach a rule that only runs when the value is not None."""
        self.when_not_null(lambda present: present.rule(message, check, code, group))

    def dependent(self, block: Callable[[RuleChainScope[R]], Any] | None = None) -> Any:
        """Attach a short-circuiting chain built by ``block``.

        Each rule in the chain only runs when the earlier ones passed. Nothing
        is attached when the block adds no rules.
        """
        if block is None:
            return block_decorator(self.dependent)

        chain_scope: RuleChainScope[R] = RuleChainScope(self.path)
        block(chain_scope)
        chain = chain_scope.build()
        if chain is not None:
            self.rules.append(chain)
        return None

    def group(self, label: str, block: Block | None = None) -> Any:
        """Evaluate ``block`` on this value and path under a group label.

        Errors from rules declared directly in the block, or through
        ``when_not_null``/``rule_if_present`` on the same value, get ``label``,
        replacing any label they had. Nested ``validate``, ``validate_each``,
        ``dependent`` and ``group`` calls inside it keep their own labels.
        """
        if block is None:
            return block_decorator(lambda b: self.group(label, b))

        path = self.path

        def nested(value: R) -> Validated[None]:
            return FieldValidationScope(path, constant(value), label=label).apply(block).evaluate()

        self.nested.append(nested)
        return None

    def use(self, validator: Validator[R]) -> None:
        """Delegate the current value to an independent validator.

        Its errors are re-rooted under this scope's path: an error at the
        validator's empty path lands exactly on this path, any other path is
        appended as a child.
        """
        path = self.path

        def nested(value: R) -> Validated[None]:
            result = validator.validate(value)
            if result.valid:
                return VALID
            return Invalid(_reparent(error, path) for error in result.errors)

        self.nested.append(nested)

    def evaluate(self) -> Validated[None]:
        """Read the value once and run every rule and nested validation."""
        value = self.getter()
        results = [attached(value) for attached in self.rules]
        results.extend(nested(value) for nested in self.nested)
        return combine_results_from_list(results).to_unit()


def _reparent(error: ValidationError, path: PropertyPath) -> ValidationError:
    return error.with_path(path.join(error.path))
