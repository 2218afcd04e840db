"""API dependencies for dependency injection."""

from src.api.dependencies.validation import (
    get_revision_service,
    get_validation_metrics_service,
    get_validation_request_service,
    reset_validation_dependencies,
)

__all__: list[str] = [
    "get_revision_service",
    "get_validation_metrics_service",
    "get_validation_request_service",
    "reset_validation_dependencies",
]
