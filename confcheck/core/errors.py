"""
Exception types shared across the validation engine.

Rule violations never escape the engine; they become failing outcomes.
ConfigurationError signals a broken rule definition and is raised eagerly
when rules, registries or rule files are built.
"""


class ConfigurationError(Exception):
    """Raised when a rule, rule table, or rule file is malformed."""


class RuleViolation(Exception):
    """
    Raised by a validator when a value does not satisfy its rule.

    Attributes:
        message: Human-readable description of the violation
        delegate_error: True when the violation came from a custom delegate
                        raising instead of returning a verdict
    """

    def __init__(self, message: str, delegate_error: bool = False):
        self.message = message
        self.delegate_error = delegate_error
        super().__init__(message)


class ConfigValidationError(ValueError):
    """Raised by ValidationReport.raise_for_failures() for a rejected configuration."""

    def __init__(self, failures: list[str]):
        self.failures = failures
        summary = "; ".join(failures)
        super().__init__(f"Invalid configuration ({len(failures)} failure(s)): {summary}")
