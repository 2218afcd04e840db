"""
Domain layer - Pure business logic for the validation engine.

This layer contains:
- Domain models (requests, validations, validators, workflows)
- Value objects (immutable types)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
"""

from src.domain.exceptions import ValidationEngineError

__all__: list[str] = ["ValidationEngineError"]
