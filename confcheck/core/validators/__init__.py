"""
Validator implementations, one per rule kind, and the registry that maps
rule kinds to them.
"""

from .base_validator import BaseValidator, ValidationContext
from .collection_validator import (
    KryoRegValidator,
    ListEntryCustomValidator,
    ListEntryTypeValidator,
    MapEntryCustomValidator,
    MapEntryTypeValidator,
    NoDuplicateInListValidator,
    StringListValidator,
)
from .custom_validator import CustomValidator, ExactlyOneOfValidator
from .number_validator import (
    IntegerValidator,
    LongValidator,
    NumberValidator,
    PositiveNumberValidator,
    PowerOf2Validator,
)
from .registry import VALIDATOR_REGISTRY, ValidatorRegistry, default_registry
from .string_validator import StringOrStringListValidator, StringValidator
from .type_validator import (
    BooleanValidator,
    DerivedTypeValidator,
    ImplementsClassValidator,
    NotNullValidator,
    SimpleTypeValidator,
)

__all__ = [
    "BaseValidator",
    "ValidationContext",
    "ValidatorRegistry",
    "VALIDATOR_REGISTRY",
    "default_registry",
    "SimpleTypeValidator",
    "BooleanValidator",
    "NotNullValidator",
    "DerivedTypeValidator",
    "ImplementsClassValidator",
    "NumberValidator",
    "IntegerValidator",
    "LongValidator",
    "PositiveNumberValidator",
    "PowerOf2Validator",
    "StringValidator",
    "StringOrStringListValidator",
    "ListEntryTypeValidator",
    "StringListValidator",
    "NoDuplicateInListValidator",
    "ListEntryCustomValidator",
    "MapEntryTypeValidator",
    "MapEntryCustomValidator",
    "KryoRegValidator",
    "CustomValidator",
    "ExactlyOneOfValidator",
]
