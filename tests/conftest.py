"""
Pytest configuration and fixtures for confcheck tests

This module provides shared fixtures for the unit tests.
"""
import pytest

from confcheck.core.models import Rule, to_value
from confcheck.core.rules import ImportTypeOracle, ValidationEngine
from confcheck.core.validators import ValidationContext, default_registry


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# ENGINE FIXTURES
# =======================

@pytest.fixture
def context() -> ValidationContext:
    """
    Validation context for a field named "field"

    Returns:
        ValidationContext backed by the shared registry and an import-based oracle
    """
    return ValidationContext(
        field_name="field",
        registry=default_registry(),
        type_oracle=ImportTypeOracle(),
    )


@pytest.fixture
def secret_context() -> ValidationContext:
    """Validation context for a secret field named "password" """
    return ValidationContext(
        field_name="password",
        registry=default_registry(),
        type_oracle=ImportTypeOracle(),
        secret=True,
    )


@pytest.fixture
def evaluate(context):
    """
    Run a rule against a raw value

    Returns:
        Function (rule, raw) -> RuleViolation | None
    """
    def _evaluate(rule: Rule, raw):
        return context.evaluate(rule, to_value(raw))

    return _evaluate


@pytest.fixture
def engine() -> ValidationEngine:
    """Validation engine with the default registry and no metrics"""
    return ValidationEngine()


@pytest.fixture
def rule_file(tmp_path):
    """
    Write a YAML rule file into a temporary directory

    Returns:
        Function (text) -> Path
    """
    def _write(text: str, name: str = "rules.yaml"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
