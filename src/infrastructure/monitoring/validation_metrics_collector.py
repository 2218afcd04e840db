"""Validation engine counters for Prometheus exposition.

Operational counters only. Review outcomes over a time window (consensus
rate, cultural compliance, participation) are computed on demand by the
metrics service from stored requests, not tracked here.
"""

from __future__ import annotations

import os
import threading

from prometheus_client import CollectorRegistry, Counter, generate_latest

# Content type for the Prometheus text exposition endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_metrics_lock = threading.Lock()


class ValidationMetricsCollector:
    """Prometheus counters for the validation lifecycle.

    Attributes:
        requests_submitted_total: Requests created, by content type.
        validations_recorded_total: Validations appended to a cycle.
        finalizations_total: Finalized cycles, by resulting status.
        stale_submissions_total: Validations rejected as stale.
        assignment_shortfalls_total: Assignments that left seats unfilled.
        notification_failures_total: Notifier calls that raised.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize the collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get(
            "SERVICE_NAME", "community-validation-engine"
        )

        self.requests_submitted_total = Counter(
            name="validation_requests_submitted_total",
            documentation="Total validation requests submitted",
            labelnames=["content_type", "service", "environment"],
            registry=self._registry,
        )
        self.validations_recorded_total = Counter(
            name="validations_recorded_total",
            documentation="Total validator judgments recorded",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.finalizations_total = Counter(
            name="validation_finalizations_total",
            documentation="Total review cycles finalized, by resulting status",
            labelnames=["status", "service", "environment"],
            registry=self._registry,
        )
        self.stale_submissions_total = Counter(
            name="validation_stale_submissions_total",
            documentation="Total validations rejected for targeting a superseded cycle",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.assignment_shortfalls_total = Counter(
            name="validator_assignment_shortfalls_total",
            documentation="Total assignments that found fewer validators than required",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.notification_failures_total = Counter(
            name="validator_notification_failures_total",
            documentation="Total validator notifications that failed to send",
            labelnames=["notification_type", "service", "environment"],
            registry=self._registry,
        )

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def record_submission(self, content_type: str) -> None:
        self.requests_submitted_total.labels(
            content_type=content_type, **self._labels()
        ).inc()

    def record_validation(self) -> None:
        self.validations_recorded_total.labels(**self._labels()).inc()

    def record_finalization(self, status: str) -> None:
        """Record a finalized cycle.

        Args:
            status: Resulting status value (validated or needs_revision).
        """
        self.finalizations_total.labels(status=status, **self._labels()).inc()

    def record_stale_submission(self) -> None:
        self.stale_submissions_total.labels(**self._labels()).inc()

    def record_assignment_shortfall(self) -> None:
        self.assignment_shortfalls_total.labels(**self._labels()).inc()

    def record_notification_failure(self, notification_type: str) -> None:
        self.notification_failures_total.labels(
            notification_type=notification_type, **self._labels()
        ).inc()

    def get_registry(self) -> CollectorRegistry:
        return self._registry

    def generate(self) -> bytes:
        """Render the registry in Prometheus text format."""
        return generate_latest(self._registry)


_validation_metrics_collector: ValidationMetricsCollector | None = None


def get_validation_metrics_collector() -> ValidationMetricsCollector:
    """Get the singleton collector (thread-safe, double-checked locking)."""
    global _validation_metrics_collector
    if _validation_metrics_collector is None:
        with _metrics_lock:
            if _validation_metrics_collector is None:
                _validation_metrics_collector = ValidationMetricsCollector()
    return _validation_metrics_collector


def reset_validation_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _validation_metrics_collector
    with _metrics_lock:
        _validation_metrics_collector = None
