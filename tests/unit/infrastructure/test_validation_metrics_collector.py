"""Unit tests for ValidationMetricsCollector."""

from prometheus_client import CollectorRegistry

from src.infrastructure.monitoring.validation_metrics_collector import (
    ValidationMetricsCollector,
    get_validation_metrics_collector,
    reset_validation_metrics_collector,
)
from tests.helpers.metrics import counter_value


def test_counters_start_empty() -> None:
    collector = ValidationMetricsCollector()

    assert counter_value(collector, "validations_recorded_total") == 0.0


def test_records_labelled_counters() -> None:
    collector = ValidationMetricsCollector(registry=CollectorRegistry())

    collector.record_submission("pattern")
    collector.record_submission("pattern")
    collector.record_submission("prediction")
    collector.record_finalization("validated")
    collector.record_finalization("needs_revision")
    collector.record_validation()
    collector.record_stale_submission()

    assert (
        counter_value(
            collector, "validation_requests_submitted_total", content_type="pattern"
        )
        == 2.0
    )
    assert counter_value(collector, "validation_requests_submitted_total") == 3.0
    assert (
        counter_value(collector, "validation_finalizations_total", status="validated")
        == 1.0
    )
    assert counter_value(collector, "validations_recorded_total") == 1.0
    assert counter_value(collector, "validation_stale_submissions_total") == 1.0


def test_service_label(monkeypatch) -> None:
    monkeypatch.setenv("SERVICE_NAME", "validation-test")
    collector = ValidationMetricsCollector()

    collector.record_assignment_shortfall()

    assert (
        counter_value(
            collector,
            "validator_assignment_shortfalls_total",
            service="validation-test",
        )
        == 1.0
    )


def test_generate_text_format() -> None:
    collector = ValidationMetricsCollector()
    collector.record_notification_failure("completion")

    text = collector.generate().decode()

    assert "validator_notification_failures_total" in text
    assert 'notification_type="completion"' in text


def test_singleton_reset() -> None:
    first = get_validation_metrics_collector()
    assert get_validation_metrics_collector() is first

    reset_validation_metrics_collector()

    assert get_validation_metrics_collector() is not first
