"""Reference data caching infrastructure.

Validators and workflows are read on every submission, assignment and
escalation but change rarely. This module provides an in-memory TTL cache
and read-through wrappers around the validator registry and workflow
catalog. Writes go through to the wrapped store and invalidate the cache
before returning, so a caller always reads its own writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import structlog

from src.application.ports.validator_registry import ValidatorRegistryProtocol
from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.domain.models.validation_workflow import ContentType, ValidationWorkflow
from src.domain.models.validator import CommunityValidator

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """Cache entry with TTL.

    Attributes:
        data: Cached data.
        cached_at: When data was cached.
        ttl_seconds: TTL in seconds.
    """

    data: Any
    cached_at: datetime
    ttl_seconds: int = 300

    def is_expired(self) -> bool:
        """Check if cache entry has expired."""
        now = datetime.now(timezone.utc)
        expiry = self.cached_at + timedelta(seconds=self.ttl_seconds)
        return now >= expiry


class ReferenceDataCache:
    """Simple in-memory TTL cache keyed by string.

    A TTL of 0 disables caching: every entry is already expired.
    """

    def __init__(self, name: str, ttl_seconds: int = 300) -> None:
        """Initialize the cache.

        Args:
            name: Cache name, bound into log events.
            ttl_seconds: Cache TTL in seconds.
        """
        self._cache: dict[str, CacheEntry] = {}
        self._ttl_seconds = ttl_seconds
        self._log = logger.bind(component="reference_data_cache", cache=name)

    def get(self, key: str) -> Any | None:
        """Return cached data for key, or None if missing or expired."""
        entry = self._cache.get(key)
        if entry is None:
            self._log.debug("cache_miss", key=key)
            return None

        if entry.is_expired():
            self._log.debug("cache_expired", key=key)
            del self._cache[key]
            return None

        self._log.debug("cache_hit", key=key)
        return entry.data

    def set(self, key: str, data: Any) -> None:
        self._cache[key] = CacheEntry(
            data=data,
            cached_at=datetime.now(timezone.utc),
            ttl_seconds=self._ttl_seconds,
        )
        self._log.debug("cache_set", key=key, ttl_seconds=self._ttl_seconds)

    def clear(self) -> None:
        """Clear all cache entries."""
        count = len(self._cache)
        self._cache.clear()
        self._log.info("cache_cleared", entries_cleared=count)


class CachingValidatorRegistry(ValidatorRegistryProtocol):
    """Read-through cache in front of a validator registry."""

    def __init__(
        self,
        registry: ValidatorRegistryProtocol,
        ttl_seconds: int = 300,
    ) -> None:
        self._registry = registry
        self._cache = ReferenceDataCache("validators", ttl_seconds)

    async def get(self, validator_id: str) -> CommunityValidator | None:
        key = f"validator:{validator_id}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        validator = await self._registry.get(validator_id)
        if validator is not None:
            self._cache.set(key, validator)
        return validator

    async def list_active(self) -> list[CommunityValidator]:
        cached = self._cache.get("validators:active")
        if cached is not None:
            return list(cached)
        validators = await self._registry.list_active()
        self._cache.set("validators:active", tuple(validators))
        return validators

    async def save(self, validator: CommunityValidator) -> None:
        await self._registry.save(validator)
        self._cache.clear()

    def invalidate(self) -> None:
        self._cache.clear()


class CachingWorkflowCatalog(WorkflowCatalogProtocol):
    """Read-through cache in front of a workflow catalog."""

    def __init__(
        self,
        catalog: WorkflowCatalogProtocol,
        ttl_seconds: int = 300,
    ) -> None:
        self._catalog = catalog
        self._cache = ReferenceDataCache("workflows", ttl_seconds)

    async def get(self, content_type: ContentType) -> ValidationWorkflow | None:
        key = f"workflow:{content_type.value}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        workflow = await self._catalog.get(content_type)
        if workflow is not None:
            self._cache.set(key, workflow)
        return workflow

    async def list_active(self) -> list[ValidationWorkflow]:
        cached = self._cache.get("workflows:active")
        if cached is not None:
            return list(cached)
        workflows = await self._catalog.list_active()
        self._cache.set("workflows:active", tuple(workflows))
        return workflows

    async def save(self, workflow: ValidationWorkflow) -> None:
        await self._catalog.save(workflow)
        self._cache.clear()

    def invalidate(self) -> None:
        self._cache.clear()
