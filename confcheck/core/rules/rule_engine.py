"""
Validation engine: applies FieldSpec rules to a configuration record.

Every rule of every field is evaluated, even after failures, so the report
lists every problem at once.
"""

import time
from collections.abc import Iterable, Mapping
from typing import Any

from confcheck.core.models import FieldSpec, Rule, ValidationOutcome, ValidationReport, to_value
from confcheck.core.validators import ValidationContext, ValidatorRegistry, default_registry
from confcheck.observability.logger import get_logger
from confcheck.observability.metrics import MetricsCollector

from .type_oracle import ImportTypeOracle, TypeOracle

logger = get_logger(__name__)


class ValidationEngine:
    """
    Orchestrates rule evaluation over configuration records.

    The engine keeps no per-call state: the registry is read-only and each
    call builds its own outcomes, so one engine can validate many records
    concurrently.
    """

    def __init__(
        self,
        registry: ValidatorRegistry | None = None,
        type_oracle: TypeOracle | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the engine.

        Args:
            registry: Rule kind to validator table (default: the shared registry)
            type_oracle: Answers subtype/capability questions
                         (default: ImportTypeOracle)
            metrics: Optional Prometheus collector
        """
        self.registry = registry if registry is not None else default_registry()
        self.type_oracle = type_oracle if type_oracle is not None else ImportTypeOracle()
        self.metrics = metrics

    def check_rules(self, field_specs: Iterable[FieldSpec]) -> None:
        """
        Resolve every rule (nested ones included) without validating anything.

        Raises:
            ConfigurationError: If a rule kind is not registered
        """
        for spec in field_specs:
            for rule in spec.rules:
                self.registry.verify(rule)

    def validate(
        self,
        field_specs: Iterable[FieldSpec],
        values_by_field: Mapping[str, Any],
    ) -> ValidationReport:
        """
        Validate a configuration record.

        Args:
            field_specs: FieldSpecs (or a ConfigSchema) in evaluation order
            values_by_field: Raw configuration record; missing fields are null

        Returns:
            ValidationReport with one outcome per (field, rule)

        Raises:
            ConfigurationError: If a rule kind is not registered
        """
        start_time = time.perf_counter()
        specs = list(field_specs)
        self.check_rules(specs)

        outcomes: list[ValidationOutcome] = []
        for spec in specs:
            outcomes.extend(self.validate_field(spec, values_by_field.get(spec.name)))

        report = ValidationReport.from_outcomes(outcomes)
        duration = time.perf_counter() - start_time

        if self.metrics is not None:
            self.metrics.record_report(report, duration)

        if report.overall_passed:
            logger.debug(
                "Configuration accepted",
                extra={"fields": len(specs), "outcomes": len(outcomes)},
            )
        else:
            logger.info(
                "Configuration rejected",
                extra={
                    "fields": len(specs),
                    "failures": len(report.failures),
                    "failed_fields": report.failed_fields,
                },
            )
        return report

    def validate_field(self, spec: FieldSpec, raw_value: Any) -> list[ValidationOutcome]:
        """
        Apply one FieldSpec's rules, in order, to a raw value.

        Args:
            spec: Field and its rules
            raw_value: Raw value (None when the field is missing)

        Returns:
            One outcome per rule
        """
        value = to_value(raw_value)
        context = ValidationContext(
            field_name=spec.name,
            registry=self.registry,
            type_oracle=self.type_oracle,
            secret=spec.secret,
        )

        outcomes = []
        for rule in spec.rules:
            violation = context.evaluate(rule, value)
            if violation is None:
                outcomes.append(ValidationOutcome(field=spec.name, rule_kind=rule.kind, passed=True))
                continue

            if violation.delegate_error:
                logger.warning(
                    f"Custom validator error on field {spec.name}",
                    extra={"field_name": spec.name, "error_message": violation.message},
                )
                if self.metrics is not None:
                    self.metrics.record_delegate_error(spec.name)
            else:
                logger.debug(
                    f"Rule {rule.kind.value} failed for field {spec.name}",
                    extra={"field_name": spec.name, "rule_kind": rule.kind.value},
                )
            outcomes.append(
                ValidationOutcome(
                    field=spec.name,
                    rule_kind=rule.kind,
                    passed=False,
                    message=violation.message,
                )
            )
        return outcomes

    def summarize(self, field_specs: Iterable[FieldSpec]) -> dict[str, Any]:
        """
        Summarize a rule set.

        Returns:
            Dictionary with field and rule counts and rules per kind
            (nested rules included)
        """
        specs = list(field_specs)
        counts: dict[str, int] = {}

        def count(rule: Rule) -> None:
            counts[rule.kind.value] = counts.get(rule.kind.value, 0) + 1
            for nested in rule.nested_rules():
                count(nested)

        for spec in specs:
            for rule in spec.rules:
                count(rule)

        return {
            "total_fields": len(specs),
            "total_rules": sum(len(spec.rules) for spec in specs),
            "rules_by_kind": counts,
        }


def validate(
    field_specs: Iterable[FieldSpec],
    values_by_field: Mapping[str, Any],
    type_oracle: TypeOracle | None = None,
) -> ValidationReport:
    """Validate a record with a default engine (shared registry, no metrics)."""
    return ValidationEngine(type_oracle=type_oracle).validate(field_specs, values_by_field)
