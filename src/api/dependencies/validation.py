"""Validation API dependencies.

FastAPI dependency providers for the validation routes. Instances come
from the bootstrap singletons, so routes and scheduler code share one
store, one lock registry and one metrics collector per process.

Note: The bootstrap wiring uses in-memory stubs. Production would back
the request store, validator registry, workflow catalog and feedback
stream with persistent adapters.
"""

from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.application.services.escalation_service import EscalationService
from src.application.services.revision_service import RevisionService
from src.application.services.validation_metrics_service import (
    ValidationMetricsService,
)
from src.application.services.validation_request_service import (
    ValidationRequestService,
)
from src.bootstrap import validation as bootstrap
from src.infrastructure.monitoring.validation_metrics_collector import (
    ValidationMetricsCollector,
)


def get_validation_request_service() -> ValidationRequestService:
    """Get the request lifecycle service."""
    return bootstrap.get_validation_request_service()


def get_revision_service() -> RevisionService:
    return bootstrap.get_revision_service()


def get_validation_metrics_service() -> ValidationMetricsService:
    return bootstrap.get_validation_metrics_service()


def get_escalation_service() -> EscalationService:
    return bootstrap.get_escalation_service()


def get_workflow_catalog() -> WorkflowCatalogProtocol:
    return bootstrap.get_workflow_catalog()


def get_metrics_collector() -> ValidationMetricsCollector:
    """Get the operational counters exposed at the Prometheus endpoint."""
    return bootstrap.get_metrics_collector()


def reset_validation_dependencies() -> None:
    """Reset all singleton instances for testing.

    Call this in test fixtures to ensure clean state between tests.
    """
    bootstrap.reset_validation_dependencies()
