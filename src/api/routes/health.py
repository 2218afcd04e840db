"""Liveness endpoint for the validation engine API."""

from fastapi import APIRouter, Depends

from src import __version__
from src.api.dependencies.validation import get_workflow_catalog
from src.api.models.health import HealthResponse
from src.application.ports.workflow_catalog import WorkflowCatalogProtocol

router = APIRouter(prefix="/v1/validation", tags=["health"])

SERVICE_NAME = "community-validation-engine"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    catalog: WorkflowCatalogProtocol = Depends(get_workflow_catalog),
) -> HealthResponse:
    """Return health status.

    Returns:
        Health status with 200 OK. The workflow count confirms the
        catalog is reachable.
    """
    workflows = await catalog.list_active()
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=__version__,
        active_workflows=len(workflows),
    )
