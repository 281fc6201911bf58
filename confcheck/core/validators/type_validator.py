"""
Type validators - IsType, IsBoolean, NotNull, and the type-relationship checks.
"""

from confcheck.core.errors import RuleViolation
from confcheck.core.models import RuleKind, Value, ValueKind

from .base_validator import BaseValidator, ValidationContext


class SimpleTypeValidator(BaseValidator):
    """
    Validates that a value matches an expected type tag.

    Parameters:
    - type: ValueType the value must match
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if not params.type.matches(value):
            raise RuleViolation(f"must be {params.type.label}, got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_TYPE


class BooleanValidator(BaseValidator):
    """Validates that a value is a boolean."""

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if value.kind is not ValueKind.BOOLEAN:
            raise RuleViolation(f"must be a boolean, got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_BOOLEAN


class NotNullValidator(BaseValidator):
    """Validates that a value is present. Missing fields arrive here as null."""

    skips_null = False

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if value.is_null:
            raise RuleViolation("must not be null")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.NOT_NULL


def _type_reference(value: Value, context: ValidationContext) -> object:
    """A type is referenced by its dotted name or passed as the type object itself."""
    if value.is_string:
        return value.payload
    if value.kind is ValueKind.OPAQUE and isinstance(value.payload, type):
        return value.payload
    raise RuleViolation(f"must name a type, got {context.describe(value)}")


def _type_label(ref: object) -> str:
    if isinstance(ref, type):
        return f"{ref.__module__}.{ref.__qualname__}"
    return str(ref)


class DerivedTypeValidator(BaseValidator):
    """
    Validates that a value names a type equal to or derived from a base type.

    Parameters:
    - base_type: Dotted type name or type object
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        ref = _type_reference(value, context)
        try:
            derived = context.type_oracle.is_subtype(ref, params.base_type)
        except LookupError as e:
            raise RuleViolation(f"cannot resolve type {_type_label(ref)}: {e}")
        if not derived:
            raise RuleViolation(
                f"must be a subtype of {_type_label(params.base_type)}, got {_type_label(ref)}"
            )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_DERIVED_FROM


class ImplementsClassValidator(BaseValidator):
    """
    Validates that a value names a type implementing a capability.

    Parameters:
    - implements_class: Dotted name or type object of the interface/ABC/protocol
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        ref = _type_reference(value, context)
        try:
            implements = context.type_oracle.implements(ref, params.implements_class)
        except LookupError as e:
            raise RuleViolation(f"cannot resolve type {_type_label(ref)}: {e}")
        if not implements:
            raise RuleViolation(
                f"must implement {_type_label(params.implements_class)}, got {_type_label(ref)}"
            )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_IMPLEMENTATION_OF_CLASS
