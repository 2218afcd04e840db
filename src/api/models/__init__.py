"""API models (Pydantic DTOs) for the validation engine."""

from src.api.models.health import HealthResponse
from src.api.models.validation import (
    SubmitForValidationRequest,
    SubmitValidationRequest,
    ValidationErrorResponse,
    ValidationRequestResponse,
)

__all__: list[str] = [
    "HealthResponse",
    "SubmitForValidationRequest",
    "SubmitValidationRequest",
    "ValidationErrorResponse",
    "ValidationRequestResponse",
]
