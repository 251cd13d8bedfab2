"""Pytest configuration for dataknobs_validation tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class CallCounter:
    """Predicate recording how often it was invoked."""

    def __init__(self, result: bool = True):
        self.calls = 0
        self.result = result

    def __call__(self, value) -> bool:
        self.calls += 1
        return self.result


@pytest.fixture
def make_counter():
    """Factory fixture producing call-counting predicates."""
    return CallCounter


@pytest.fixture
def not_blank():
    """Plain not-blank predicate for strings."""
    return lambda s: s.strip() != ""
