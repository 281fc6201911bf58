"""
Validation outcome and report models.
"""

from pydantic import BaseModel, model_validator

from confcheck.core.errors import ConfigValidationError

from .validation_rule import RuleKind


class ValidationOutcome(BaseModel):
    """
    Result of applying one rule to one field.

    Attributes:
        field: Field name the rule was applied to
        rule_kind: Kind of the rule
        passed: Whether the value satisfied the rule
        message: Failure description (None when passed)
    """

    field: str
    rule_kind: RuleKind
    passed: bool
    message: str | None = None

    class Config:
        frozen = True

    def __str__(self) -> str:
        status = "ok" if self.passed else "FAILED"
        text = f"[{self.rule_kind.value}] {self.field}: {status}"
        return f"{text} ({self.message})" if self.message else text


class ValidationReport(BaseModel):
    """
    Every outcome of one validation run plus the overall verdict.

    Attributes:
        outcomes: Outcomes in field order, then rule order
        overall_passed: True iff every outcome passed
    """

    outcomes: tuple[ValidationOutcome, ...] = ()
    overall_passed: bool = True

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "outcomes": [
                    {"field": "topology.workers", "rule_kind": "IsInteger", "passed": True},
                    {
                        "field": "topology.workers",
                        "rule_kind": "IsPositiveNumber",
                        "passed": False,
                        "message": "must be a positive number, got number -1",
                    },
                ],
                "overall_passed": False,
            }
        }

    @model_validator(mode="after")
    def check_passed_consistency(self):
        """overall_passed must agree with the outcomes."""
        expected = all(outcome.passed for outcome in self.outcomes)
        if self.overall_passed != expected:
            raise ValueError(
                f"overall_passed={self.overall_passed} contradicts outcomes (expected {expected})"
            )
        return self

    @classmethod
    def from_outcomes(cls, outcomes) -> "ValidationReport":
        outcomes = tuple(outcomes)
        return cls(outcomes=outcomes, overall_passed=all(o.passed for o in outcomes))

    @property
    def failures(self) -> tuple[ValidationOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.passed)

    @property
    def failed_fields(self) -> list[str]:
        """Names of fields with at least one failure, in report order."""
        return list(dict.fromkeys(o.field for o in self.failures))

    def outcomes_for(self, field: str) -> tuple[ValidationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.field == field)

    def messages(self) -> list[str]:
        """One line per failure: "field [RuleKind]: message"."""
        return [f"{o.field} [{o.rule_kind.value}]: {o.message}" for o in self.failures]

    def raise_for_failures(self) -> None:
        """
        Raise if the configuration was rejected.

        Raises:
            ConfigValidationError: Carrying every failure message
        """
        if not self.overall_passed:
            raise ConfigValidationError(self.messages())
