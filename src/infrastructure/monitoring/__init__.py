"""Infrastructure monitoring components.

Prometheus counters for the validation lifecycle. Operational metrics
only; review statistics come from the metrics service.
"""

from src.infrastructure.monitoring.validation_metrics_collector import (
    METRICS_CONTENT_TYPE,
    ValidationMetricsCollector,
    get_validation_metrics_collector,
    reset_validation_metrics_collector,
)

__all__: list[str] = [
    "METRICS_CONTENT_TYPE",
    "ValidationMetricsCollector",
    "get_validation_metrics_collector",
    "reset_validation_metrics_collector",
]
