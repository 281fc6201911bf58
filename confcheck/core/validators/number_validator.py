"""
Numeric validators - IsNumber, IsInteger, IsLong, IsPositiveNumber, IsPowerOf2.
"""

from confcheck.core.errors import RuleViolation
from confcheck.core.models import RuleKind, Value
from confcheck.core.models.value import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, in_range

from .base_validator import BaseValidator, ValidationContext


class NumberValidator(BaseValidator):
    """Validates that a value is numeric. Booleans are not numbers."""

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if not value.is_number:
            raise RuleViolation(f"must be a number, got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_NUMBER


class IntegerValidator(BaseValidator):
    """
    Validates that a value is a whole number within the 32-bit integer range.

    5.0 is accepted, 5.5 is not.
    """

    low, high = INT32_MIN, INT32_MAX
    label = "an integer within 32-bit range"

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if not in_range(value.integral(), self.low, self.high):
            raise RuleViolation(f"must be {self.label}, got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_INTEGER


class LongValidator(IntegerValidator):
    """Validates that a value is a whole number within the 64-bit integer range."""

    low, high = INT64_MIN, INT64_MAX
    label = "an integer within 64-bit range"

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_LONG


class PositiveNumberValidator(BaseValidator):
    """
    Validates that a numeric value is positive.

    Parameters:
    - include_zero: Accept 0 as well (default: False)
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        comparable = value.is_number and not value.is_nan
        if params.include_zero:
            ok = comparable and value.payload >= 0
            expected = "a non-negative number"
        else:
            ok = comparable and value.payload > 0
            expected = "a positive number"
        if not ok:
            raise RuleViolation(f"must be {expected}, got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_POSITIVE_NUMBER


class PowerOf2Validator(BaseValidator):
    """Validates that a value is a positive integral power of two (1, 2, 4, ...)."""

    def check(self, value: Value, params, context: ValidationContext) -> None:
        n = value.integral()
        if n is None or n <= 0 or n & (n - 1) != 0:
            raise RuleViolation(f"must be a power of 2, got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_POWER_OF_2
