"""Tests for the exception hierarchy."""

import pytest

from dataknobs_validation import (
    ConfigurationError,
    DataknobsValidationError,
    NotFoundError,
    OperationError,
    PropertyPath,
    ValidationError,
    ValidationFailed,
)


class TestExceptions:
    """Test exception context and hierarchy."""

    @pytest.mark.parametrize("error_class", [ConfigurationError, NotFoundError, OperationError])
    def test_hierarchy(self, error_class):
        """Test every exception derives from the package base."""
        error = error_class("boom", context={"key": "x"})
        assert isinstance(error, DataknobsValidationError)
        assert str(error) == "boom"
        assert error.context == {"key": "x"}

    def test_context_defaults_to_empty(self):
        """Test context is always a dictionary."""
        assert DataknobsValidationError("boom").context == {}

    def test_validation_failed_message(self):
        """Test the summary lists each error with its path."""
        errors = [
            ValidationError(PropertyPath("name"), "must not be blank"),
            ValidationError(PropertyPath.EMPTY, "names must differ"),
        ]
        error = ValidationFailed(errors)
        assert str(error) == (
            "Validation failed with 2 error(s): name: must not be blank; names must differ"
        )
        assert error.errors == errors
        assert error.context == {"error_count": 2}
