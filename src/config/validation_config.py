"""Validation engine configuration.

This module defines engine-wide tuning knobs with environment variable
overrides. Per content type review settings live in the workflow
catalog, not here.

Environment Variables:
- VALIDATION_CACHE_TTL_SECONDS: Reference data cache TTL (default: 300, min: 0, max: 3600)
- VALIDATION_MAX_REVISION_CYCLES: Cycles after which rejection is warranted (default: 3, min: 1, max: 20)
- VALIDATION_CAS_MAX_RETRIES: Attempts per version-checked write (default: 5, min: 1, max: 50)
- VALIDATION_DEFAULT_METRICS_DAYS: Metrics window when none is named (default: 30, min: 1, max: 365)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


# Reference data (validators, workflows) cache
DEFAULT_CACHE_TTL_SECONDS = 300
MIN_CACHE_TTL_SECONDS = 0
MAX_CACHE_TTL_SECONDS = 3600

# Revision cycles before an operator should consider rejection
DEFAULT_MAX_REVISION_CYCLES = 3
MIN_REVISION_CYCLES = 1
MAX_REVISION_CYCLES = 20

# Optimistic concurrency retries
DEFAULT_CAS_MAX_RETRIES = 5
MIN_CAS_RETRIES = 1
MAX_CAS_RETRIES = 50

# Metrics window
DEFAULT_METRICS_DAYS = 30
MIN_METRICS_DAYS = 1
MAX_METRICS_DAYS = 365


@dataclass(frozen=True)
class ValidationEngineConfig:
    """Engine-wide configuration.

    Attributes:
        cache_ttl_seconds: TTL of cached validator and workflow lookups.
            0 disables caching.
        max_revision_cycles: Review cycles after which
            ``revision_cycles_exhausted`` reports true. Never applied
            automatically.
        cas_max_retries: Attempts for each read-modify-write against the
            request store before ConcurrentModificationError propagates.
        default_metrics_days: Metrics window used when no timeframe is named.
    """

    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    max_revision_cycles: int = DEFAULT_MAX_REVISION_CYCLES
    cas_max_retries: int = DEFAULT_CAS_MAX_RETRIES
    default_metrics_days: int = DEFAULT_METRICS_DAYS

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not MIN_CACHE_TTL_SECONDS <= self.cache_ttl_seconds <= MAX_CACHE_TTL_SECONDS:
            raise ValueError(
                f"cache_ttl_seconds must be between {MIN_CACHE_TTL_SECONDS} "
                f"and {MAX_CACHE_TTL_SECONDS}, got {self.cache_ttl_seconds}"
            )
        if not MIN_REVISION_CYCLES <= self.max_revision_cycles <= MAX_REVISION_CYCLES:
            raise ValueError(
                f"max_revision_cycles must be between {MIN_REVISION_CYCLES} "
                f"and {MAX_REVISION_CYCLES}, got {self.max_revision_cycles}"
            )
        if not MIN_CAS_RETRIES <= self.cas_max_retries <= MAX_CAS_RETRIES:
            raise ValueError(
                f"cas_max_retries must be between {MIN_CAS_RETRIES} "
                f"and {MAX_CAS_RETRIES}, got {self.cas_max_retries}"
            )
        if not MIN_METRICS_DAYS <= self.default_metrics_days <= MAX_METRICS_DAYS:
            raise ValueError(
                f"default_metrics_days must be between {MIN_METRICS_DAYS} "
                f"and {MAX_METRICS_DAYS}, got {self.default_metrics_days}"
            )

    @property
    def default_metrics_window(self) -> timedelta:
        return timedelta(days=self.default_metrics_days)

    @classmethod
    def from_environment(cls) -> ValidationEngineConfig:
        """Create config from environment variables with defaults.

        Out-of-range values are clamped; unparseable values fall back to
        the default.

        Returns:
            ValidationEngineConfig with values from environment or defaults.
        """
        return cls(
            cache_ttl_seconds=_clamp(
                _get_int_env("VALIDATION_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS),
                MIN_CACHE_TTL_SECONDS,
                MAX_CACHE_TTL_SECONDS,
            ),
            max_revision_cycles=_clamp(
                _get_int_env(
                    "VALIDATION_MAX_REVISION_CYCLES", DEFAULT_MAX_REVISION_CYCLES
                ),
                MIN_REVISION_CYCLES,
                MAX_REVISION_CYCLES,
            ),
            cas_max_retries=_clamp(
                _get_int_env("VALIDATION_CAS_MAX_RETRIES", DEFAULT_CAS_MAX_RETRIES),
                MIN_CAS_RETRIES,
                MAX_CAS_RETRIES,
            ),
            default_metrics_days=_clamp(
                _get_int_env("VALIDATION_DEFAULT_METRICS_DAYS", DEFAULT_METRICS_DAYS),
                MIN_METRICS_DAYS,
                MAX_METRICS_DAYS,
            ),
        )


# Default production config
DEFAULT_VALIDATION_CONFIG = ValidationEngineConfig()

# Testing config: no caching so registry writes are visible immediately
TEST_VALIDATION_CONFIG = ValidationEngineConfig(cache_ttl_seconds=0)
