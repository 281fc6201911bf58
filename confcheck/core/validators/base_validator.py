"""
Base validator interface for all rule kinds.

All validators must inherit from BaseValidator and implement check().
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from confcheck.core.errors import RuleViolation
from confcheck.core.models import Rule, RuleKind, RuleParams, Value

if TYPE_CHECKING:
    from confcheck.core.rules.type_oracle import TypeOracle

    from .registry import ValidatorRegistry


class ValidationContext:
    """
    Per-field state handed to validators.

    Composite validators use evaluate() to run nested rules against list
    entries, map keys/values, or the value itself.
    """

    def __init__(
        self,
        field_name: str,
        registry: "ValidatorRegistry",
        type_oracle: "TypeOracle",
        secret: bool = False,
    ):
        """
        Initialize context.

        Args:
            field_name: Field being validated
            registry: Registry used to resolve nested rule kinds
            type_oracle: Answers subtype/capability questions
            secret: Redact values in messages
        """
        self.field_name = field_name
        self.registry = registry
        self.type_oracle = type_oracle
        self.secret = secret

    def describe(self, value: Value) -> str:
        """Describe a value for a message, hiding its content for secret fields."""
        if self.secret and not value.is_null:
            return f"{value.kind.value} (redacted)"
        return value.describe()

    def display(self, value: Value) -> str:
        if self.secret and not value.is_null:
            return "<redacted>"
        return value.display()

    def evaluate(self, rule: Rule, value: Value) -> RuleViolation | None:
        """
        Run one rule against a value.

        Args:
            rule: Rule to apply
            value: Value to check

        Returns:
            The violation, or None if the value satisfies the rule
        """
        validator = self.registry.resolve(rule.kind)
        try:
            validator.validate(value, rule.params, self)
        except RuleViolation as e:
            return e
        return None


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator implements exactly one rule kind. Validators hold no
    per-call state, so one instance serves every validation.
    """

    # Null means "not set"; most rules accept it and leave it to NotNull
    skips_null: bool = True

    def validate(self, value: Value, params: RuleParams, context: ValidationContext) -> None:
        """
        Validate a value against this rule.

        Args:
            value: The field (or entry) value
            params: The rule's parameters
            context: Field context

        Raises:
            RuleViolation: If validation fails
        """
        if value.is_null and self.skips_null:
            return
        self.check(value, params, context)

    @abstractmethod
    def check(self, value: Value, params: RuleParams, context: ValidationContext) -> None:
        """Check a value; raise RuleViolation when it does not satisfy the rule."""
        pass

    @property
    @abstractmethod
    def rule_kind(self) -> RuleKind:
        """Return the rule kind this validator implements."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.rule_kind.value})"
