"""
API routes for the validation engine.

Available routers:
- health: Liveness endpoint
- validation: Request lifecycle, feedback, revisions and metrics
"""

from src.api.routes.health import router as health_router
from src.api.routes.validation import router as validation_router

__all__: list[str] = ["health_router", "validation_router"]
