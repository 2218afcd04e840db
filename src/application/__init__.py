"""
Application layer - Use cases and orchestration for the validation engine.

This layer contains:
- Application services (request lifecycle, assignment, consensus,
  revision, escalation, metrics)
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain
- Infrastructure is reached through ports
"""

__all__: list[str] = []
