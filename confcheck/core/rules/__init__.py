"""
Validation engine, rule configuration, and type oracles.
"""

from .rule_config import RuleConfigBuilder, RuleConfigLoader, parse_rule, parse_schema
from .rule_engine import ValidationEngine, validate
from .type_oracle import ImportTypeOracle, MappingTypeOracle, TypeOracle

__all__ = [
    "ValidationEngine",
    "validate",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "parse_rule",
    "parse_schema",
    "TypeOracle",
    "ImportTypeOracle",
    "MappingTypeOracle",
]
