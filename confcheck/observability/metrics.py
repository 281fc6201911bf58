"""
Prometheus metrics collection for confcheck

Metrics are opt-in: the validation engine only records them when it is
given a MetricsCollector.
"""
import os
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from confcheck.core.models import ValidationReport

# confcheck metrics live in their own registry
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

# Validation runs counter
validations_total = Counter(
    name="confcheck_validations_total",
    documentation="Total number of configuration validations",
    labelnames=["status"],  # status: passed, failed
    registry=REGISTRY,
)

# Rule failures counter
rule_failures_total = Counter(
    name="confcheck_rule_failures_total",
    documentation="Total number of failing rule outcomes",
    labelnames=["rule_kind", "field_name"],
    registry=REGISTRY,
)

# Custom delegate errors counter
delegate_errors_total = Counter(
    name="confcheck_delegate_errors_total",
    documentation="Custom validator delegates that raised instead of returning a verdict",
    labelnames=["field_name"],
    registry=REGISTRY,
)

# Validation duration histogram
validation_duration_seconds = Histogram(
    name="confcheck_validation_duration_seconds",
    documentation="Time spent validating one configuration record",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)


# =======================
# EXPORT
# =======================

def generate_metrics() -> bytes:
    """Render every confcheck metric in the Prometheus text exposition format"""
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Content-Type header value for generate_metrics() output"""
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Serve the confcheck registry on /metrics from a background thread

    Args:
        port: Listening port (default: $METRICS_PORT, then 8000)
    """
    # Lazy import: only needed when the metrics endpoint is enabled
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


# =======================
# HELPERS
# =======================

def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """Add to a counter, selecting the labelled child when labels are given"""
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """Record one observation, selecting the labelled child when labels are given"""
    if labels:
        histogram.labels(**labels).observe(value)
    else:
        histogram.observe(value)


class MetricsCollector:
    """
    Facade the validation engine reports to.
    """

    def record_report(self, report: ValidationReport, duration_seconds: float) -> None:
        """
        Record one validation run.

        Args:
            report: The finished report
            duration_seconds: Time spent producing it
        """
        status = "passed" if report.overall_passed else "failed"
        increment_counter(validations_total, status=status)
        for outcome in report.failures:
            increment_counter(
                rule_failures_total,
                rule_kind=outcome.rule_kind.value,
                field_name=outcome.field,
            )
        observe_histogram(validation_duration_seconds, duration_seconds)

    def record_delegate_error(self, field_name: str) -> None:
        increment_counter(delegate_errors_total, field_name=field_name)
