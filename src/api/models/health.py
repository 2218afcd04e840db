"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        service: Service name.
        version: Package version.
        active_workflows: Workflows currently accepting submissions.
    """

    status: str
    service: str
    version: str
    active_workflows: int
