"""
API layer - FastAPI routes and HTTP concerns for the validation engine.

This layer contains:
- FastAPI route definitions
- Request/Response DTOs
- HTTP middleware

IMPORT RULES:
- CAN import from: application, domain
- Obtains adapters through src.api.dependencies, never constructs them
"""

__all__: list[str] = []
