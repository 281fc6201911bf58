"""
confcheck - declarative configuration validation.

Validate a configuration record against per-field rules and get back a
report listing every violation:

    from confcheck import FieldSpec, Rule, RuleKind, ValidationEngine

    specs = [
        FieldSpec(name="topology.workers", rules=[RuleKind.NOT_NULL, RuleKind.IS_INTEGER]),
    ]
    report = ValidationEngine().validate(specs, {"topology.workers": 4})
    report.raise_for_failures()
"""

from confcheck.core.errors import ConfigurationError, ConfigValidationError, RuleViolation
from confcheck.core.models import (
    FieldSpec,
    Rule,
    RuleKind,
    ValidationOutcome,
    ValidationReport,
    Value,
    ValueKind,
    ValueType,
    to_value,
)
from confcheck.core.rules import (
    ImportTypeOracle,
    MappingTypeOracle,
    RuleConfigBuilder,
    RuleConfigLoader,
    TypeOracle,
    ValidationEngine,
    validate,
)
from confcheck.core.schema import ConfigSchema
from confcheck.core.validators import ValidatorRegistry, default_registry

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConfigValidationError",
    "RuleViolation",
    "FieldSpec",
    "Rule",
    "RuleKind",
    "ValidationOutcome",
    "ValidationReport",
    "Value",
    "ValueKind",
    "ValueType",
    "to_value",
    "ConfigSchema",
    "ValidatorRegistry",
    "default_registry",
    "ValidationEngine",
    "validate",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "TypeOracle",
    "ImportTypeOracle",
    "MappingTypeOracle",
]
