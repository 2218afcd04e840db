"""Configuration module for the community validation engine.

Available Configurations:
- ValidationEngineConfig: Cache TTL, revision cycle limit, CAS retries,
  metrics window
- default_workflows: Seed workflow catalog, one workflow per content type
"""

from src.config.default_workflows import default_workflows
from src.config.validation_config import (
    DEFAULT_VALIDATION_CONFIG,
    TEST_VALIDATION_CONFIG,
    ValidationEngineConfig,
)

__all__ = [
    "ValidationEngineConfig",
    "DEFAULT_VALIDATION_CONFIG",
    "TEST_VALIDATION_CONFIG",
    "default_workflows",
]
