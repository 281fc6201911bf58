"""
Core data models for the configuration validation engine.

All models use Pydantic for runtime validation and immutability.
"""

from .field_spec import FieldSpec
from .validation_result import ValidationOutcome, ValidationReport
from .validation_rule import PARAMS_BY_KIND, Rule, RuleKind, RuleParams
from .value import NULL, Value, ValueKind, ValueType, to_value

__all__ = [
    "NULL",
    "Value",
    "ValueKind",
    "ValueType",
    "to_value",
    "Rule",
    "RuleKind",
    "RuleParams",
    "PARAMS_BY_KIND",
    "FieldSpec",
    "ValidationOutcome",
    "ValidationReport",
]
