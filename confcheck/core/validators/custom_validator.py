"""
CustomValidator - validates using a caller-supplied function, and
ExactlyOneOfValidator - the "exactly one of" combinator.
"""

from confcheck.core.errors import RuleViolation
from confcheck.core.models import RuleKind, Value

from .base_validator import BaseValidator, ValidationContext


class CustomValidator(BaseValidator):
    """
    Validates using a delegate function.

    Parameters:
    - delegate: Callable taking (value, field_name)
    - name: Optional label used in messages (default: the function's name)

    The delegate receives the value as plain Python objects (None for a
    missing field). Returning False rejects the value; raising RuleViolation
    rejects it with that message; any other exception is reported as a
    failing outcome carrying the error. Any other return value accepts.

        def check_port(value: Any, field_name: str) -> bool:
            return isinstance(value, int) and 0 < value < 65536
    """

    skips_null = False

    def check(self, value: Value, params, context: ValidationContext) -> None:
        name = params.delegate_name
        try:
            verdict = params.delegate(value.unwrap(), context.field_name)
        except RuleViolation:
            raise
        except Exception as e:
            raise RuleViolation(
                f"custom check {name} raised {type(e).__name__}: {e}",
                delegate_error=True,
            ) from e

        if verdict is False:
            raise RuleViolation(f"custom check {name} rejected {context.describe(value)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.CUSTOM_VALIDATOR


class ExactlyOneOfValidator(BaseValidator):
    """
    Validates that exactly one of several rules accepts the value.

    Used for overloaded settings where a value may take one (and only one)
    of several formats. Every nested rule is evaluated.

    Parameters:
    - value_rules: Candidate rules
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        candidates = params.value_rules
        passed = [rule for rule in candidates if context.evaluate(rule, value) is None]
        if len(passed) == 1:
            return

        names = ", ".join(str(rule) for rule in candidates)
        if passed:
            which = ", ".join(str(rule) for rule in passed)
            detail = f"{len(passed)} passed ({which})"
        else:
            detail = "0 passed"
        raise RuleViolation(
            f"must satisfy exactly one of [{names}], but {detail} for {context.describe(value)}"
        )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_EXACTLY_ONE_OF
