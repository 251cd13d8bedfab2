"""Examples of declaring and running validators."""

from dataclasses import dataclass, field
from typing import List, Optional

from dataknobs_validation import checks, validator, validator_factory


@dataclass
class Tag:
    value: str


@dataclass
class Address:
    street: str
    zip_code: str


@dataclass
class User:
    name: str
    age: str = "30"
    nickname: Optional[str] = None
    tags: List[Tag] = field(default_factory=list)
    address: Optional[Address] = None


def example_1_decorators():
    """Example using the decorator DSL."""

    @validator
    def user_validator(v):
        @v.validate_field("name")
        def name(name):
            name.group("identity", lambda g: g.rule(checks.not_blank()))

        @v.validate_field("age")
        def age(age):
            @age.dependent
            def chain(chain):
                chain.rule("must be numeric", str.isdigit)
                chain.rule("must be >= 18", lambda s: int(s) >= 18)

        @v.validate_each("tags")
        def tag(tag):
            tag.validate("value", lambda value: value.rule(checks.not_blank()))

        @v.validate_field("address")
        def address(address):
            @address.when_not_null
            def present(present):
                present.validate("zip_code", lambda z: z.rule(checks.matches(r"^\d{5}$")))

    user = User(name="", age="15", tags=[Tag(""), Tag("ok")], address=Address("Main", "12"))
    result = user_validator.validate(user)
    for error in result.errors:
        print(f"{error.path}: {error.message} (group={error.group})")


def example_2_config_based():
    """Example building the same kind of validator from configuration."""
    config = {
        "name": "user_validator",
        "fields": [
            {"name": "name", "group": "identity", "rules": [{"type": "not_blank"}]},
            {
                "name": "age",
                "dependent": [
                    {"type": "numeric"},
                    {"type": "pattern", "pattern": "^(1[89]|[2-9][0-9])$", "message": "must be >= 18"},
                ],
            },
            {"name": "tags", "each": True, "fields": [{"name": "value", "rules": [{"type": "not_blank"}]}]},
        ],
    }
    user_validator = validator_factory.create(**config)

    result = user_validator.validate({"name": "", "age": "abc", "tags": [{"value": " "}]})
    print(result.to_dict())

    result.on_invalid(lambda errors: print(f"{len(errors)} error(s)"))


if __name__ == "__main__":
    example_1_decorators()
    example_2_config_based()
