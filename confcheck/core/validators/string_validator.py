"""
String validators - IsString and IsStringOrStringList.
"""

from confcheck.core.errors import RuleViolation
from confcheck.core.models import RuleKind, Value

from .base_validator import BaseValidator, ValidationContext


class StringValidator(BaseValidator):
    """
    Validates that a value is a string, optionally one of a fixed set.

    Parameters:
    - accepted_values: Allowed strings (default: any string)
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if not value.is_string:
            raise RuleViolation(f"must be a string, got {context.describe(value)}")

        accepted = params.accepted_values
        if accepted and value.payload not in accepted:
            choices = ", ".join(repr(v) for v in sorted(accepted))
            raise RuleViolation(f"must be one of [{choices}], got {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_STRING


class StringOrStringListValidator(BaseValidator):
    """Validates that a value is a string or a list made only of strings."""

    def check(self, value: Value, params, context: ValidationContext) -> None:
        if value.is_string:
            return
        if value.is_list and all(entry.is_string for entry in value.entries):
            return
        raise RuleViolation(
            f"must be a string or a list of strings, got {context.describe(value)}"
        )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_STRING_OR_STRING_LIST
