"""Tests for the check registry and the declarative validator factory."""

import json

import pytest
import yaml

from dataknobs_validation import (
    CheckRegistry,
    ConfigurationError,
    NotFoundError,
    OperationError,
    ValidatorFactory,
    default_registry,
    load_validator,
    register_check,
    rule,
    validator_factory,
)

USER_CONFIG = {
    "name": "user_validator",
    "fields": [
        {
            "name": "username",
            "group": "identity",
            "rules": [
                {"type": "not_blank"},
                {"type": "length", "min": 3, "max": 20},
                {"type": "one_of", "values": ["admin", "root"], "forbidden": "is reserved"},
            ],
        },
        {
            "name": "age",
            "dependent": [
                {"type": "numeric"},
                {"type": "pattern", "pattern": "^(1[89]|[2-9][0-9])$", "message": "must be at least 18"},
            ],
        },
        {
            "name": "nickname",
            "optional": True,
            "rules": [{"type": "length", "min": 3, "code": "nickname.short"}],
        },
        {
            "name": "tags",
            "each": True,
            "fields": [{"name": "value", "rules": [{"type": "not_blank"}]}],
        },
    ],
}


def user(**overrides):
    data = {"username": "alice", "age": "30", "nickname": None, "tags": []}
    data.update(overrides)
    return data


class TestCheckRegistry:
    """Test registering and resolving checks."""

    def test_builtin_checks(self):
        """Test the default registry knows every built-in check."""
        for key in ["required", "not_blank", "not_empty", "length", "range", "pattern", "one_of", "numeric"]:
            assert key in default_registry

    def test_register_and_create(self):
        """Test custom checks can be registered and built."""
        registry = CheckRegistry("custom")
        registry.register("even", lambda message="must be even": rule(message, lambda n: n % 2 == 0))
        assert registry.create("even")(3).errors[0].message == "must be even"
        assert registry.list_keys() == ["even"]
        assert len(registry) == 1

    def test_duplicate_registration(self):
        """Test keys cannot be overwritten by accident."""
        registry = CheckRegistry("custom")
        registry.register("x", lambda: rule("x", bool))
        with pytest.raises(OperationError):
            registry.register("x", lambda: rule("x", bool))
        registry.register("x", lambda: rule("y", bool), allow_overwrite=True)
        assert registry.create("x")(0).errors[0].message == "y"

    def test_unknown_check(self):
        """Test lookups of unknown keys report the available ones."""
        registry = CheckRegistry("custom")
        registry.register("a", lambda: rule("a", bool))
        with pytest.raises(NotFoundError) as exc_info:
            registry.get("b")
        assert exc_info.value.context["available_keys"] == ["a"]

    def test_unregister(self):
        """Test removing a check."""
        registry = CheckRegistry("custom")
        registry.register("a", lambda: rule("a", bool))
        registry.unregister("a")
        assert not registry.has("a")
        with pytest.raises(NotFoundError):
            registry.unregister("a")

    def test_register_decorator(self):
        """Test the decorator form against a private registry."""
        registry = CheckRegistry("custom")

        @register_check("positive", registry=registry)
        def positive(message="must be positive", code="positive"):
            return rule(message, lambda n: n > 0, code)

        assert registry.get("positive") is positive
        assert "positive" not in default_registry

    def test_empty_registry_is_kept(self):
        """Test an empty custom registry is used rather than the default one."""
        registry = CheckRegistry("empty")
        assert ValidatorFactory(registry).registry is registry
        with pytest.raises(ConfigurationError) as exc_info:
            ValidatorFactory(registry).create(fields=[{"name": "x", "rules": [{"type": "not_blank"}]}])
        assert exc_info.value.context["known_types"] == []


class TestValidatorFactory:
    """Test building validators from configuration."""

    def test_valid_target(self):
        """Test a conforming target passes."""
        built = validator_factory.create(**USER_CONFIG)
        assert built.name == "user_validator"
        assert built.validate(user(tags=[{"value": "a"}])).valid

    def test_grouped_rules(self):
        """Test field rules carry the configured group label."""
        result = validator_factory.create(**USER_CONFIG).validate(user(username="  "))
        errors = [(str(e.path), e.message, e.group) for e in result.errors]
        assert errors == [
            ("username", "must not be blank", "identity"),
            ("username", "length must be between 3 and 20", "identity"),
        ]

    def test_forbidden_rule(self):
        """Test inverted checks fail on the listed values."""
        result = validator_factory.create(**USER_CONFIG).validate(user(username="admin"))
        assert [e.message for e in result.errors] == ["is reserved"]

    @pytest.mark.parametrize(
        "age, expected",
        [("abc", ["must be numeric"]), ("15", ["must be at least 18"]), ("21", [])],
    )
    def test_dependent_chain(self, age, expected):
        """Test dependent entries short-circuit."""
        result = validator_factory.create(**USER_CONFIG).validate(user(age=age))
        assert [e.message for e in result.errors] == expected

    def test_dependent_chain_not_grouped(self):
        """Test a grouped field's dependent chain stays unlabelled."""
        built = validator_factory.create(
            fields=[
                {
                    "name": "code",
                    "group": "ids",
                    "rules": [{"type": "length", "min": 3}],
                    "dependent": [{"type": "numeric"}],
                }
            ]
        )
        errors = built.validate({"code": "ab"}).errors
        assert {e.message: e.group for e in errors} == {
            "length must be at least 3": "ids",
            "must be numeric": None,
        }

    def test_optional_field(self):
        """Test optional fields are skipped when None and checked otherwise."""
        built = validator_factory.create(**USER_CONFIG)
        assert built.validate(user(nickname=None)).valid
        errors = built.validate(user(nickname="ab")).errors
        assert [(str(e.path), e.code) for e in errors] == [("nickname", "nickname.short")]

    def test_each_field(self):
        """Test list element paths for each-fields."""
        result = validator_factory.create(**USER_CONFIG).validate(
            user(tags=[{"value": ""}, {"value": "ok"}, {"value": " "}])
        )
        assert [str(e.path) for e in result.errors] == ["tags[0].value", "tags[2].value"]

    def test_root_rules(self):
        """Test root entries validate the whole target."""
        built = ValidatorFactory().create(name="root", root=[{"type": "not_empty", "message": "needs data"}])
        result = built.validate({})
        assert [(str(e.path), e.message) for e in result.errors] == [("", "needs data")]

    def test_custom_registry(self):
        """Test factories resolve checks from their own registry."""
        registry = CheckRegistry("custom")
        registry.register("even", lambda message="must be even": rule(message, lambda n: n % 2 == 0))
        built = ValidatorFactory(registry).create(fields=[{"name": "n", "rules": [{"type": "even"}]}])
        assert [e.message for e in built.validate({"n": 3}).errors] == ["must be even"]


class TestFactoryErrors:
    """Test malformed configuration."""

    def test_missing_field_name(self):
        """Test fields need a name."""
        with pytest.raises(ConfigurationError) as exc_info:
            validator_factory.create(fields=[{"rules": []}])
        assert exc_info.value.context["index"] == 0

    def test_unknown_check_type(self):
        """Test unknown types list the known ones."""
        with pytest.raises(ConfigurationError) as exc_info:
            validator_factory.create(fields=[{"name": "x", "rules": [{"type": "nope"}]}])
        assert "not_blank" in exc_info.value.context["known_types"]

    def test_bad_check_parameters(self):
        """Test constructor errors are reported as configuration errors."""
        with pytest.raises(ConfigurationError):
            validator_factory.create(fields=[{"name": "x", "rules": [{"type": "length", "min": -1}]}])
        with pytest.raises(ConfigurationError):
            validator_factory.create(fields=[{"name": "x", "rules": [{"type": "length", "bogus": 1}]}])

    def test_non_list_sections(self):
        """Test fields and rules must be lists."""
        with pytest.raises(ConfigurationError):
            validator_factory.create(fields={"name": "x"})
        with pytest.raises(ConfigurationError):
            validator_factory.create(fields=[{"name": "x", "rules": {"type": "not_blank"}}])

    def test_rule_without_type(self):
        """Test rule entries need a type."""
        with pytest.raises(ConfigurationError):
            validator_factory.create(fields=[{"name": "x", "rules": [{"min": 1}]}])

    def test_unknown_field_keys_logged(self, caplog):
        """Test unrecognized keys are reported but tolerated."""
        with caplog.at_level("WARNING", logger="dataknobs_validation.factory"):
            validator_factory.create(fields=[{"name": "x", "colour": "red"}])
        assert "colour" in caplog.text


class TestLoadValidator:
    """Test loading validators from files."""

    def test_yaml(self, tmp_path):
        """Test YAML configuration files."""
        path = tmp_path / "user.yaml"
        path.write_text(yaml.safe_dump(USER_CONFIG))
        built = load_validator(path)
        assert built.name == "user_validator"
        assert [str(e.path) for e in built.validate(user(username="")).errors] == ["username", "username"]

    def test_json(self, tmp_path):
        """Test JSON configuration files."""
        path = tmp_path / "user.json"
        path.write_text(json.dumps(USER_CONFIG))
        assert load_validator(str(path)).validate(user()).valid

    def test_unsupported_suffix(self, tmp_path):
        """Test other file types are rejected."""
        path = tmp_path / "user.toml"
        path.write_text("")
        with pytest.raises(ConfigurationError):
            load_validator(path)

    def test_non_mapping_content(self, tmp_path):
        """Test the file must hold a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_validator(path)
