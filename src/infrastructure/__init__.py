"""
Infrastructure layer - Adapters for the validation engine.

This layer contains:
- In-memory stubs for every application port
- Reference data caching
- Observability (structlog, correlation ids) and Prometheus counters

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""

__all__: list[str] = []
