"""Validation request repository stub implementation.

In-memory implementation of ValidationRequestRepositoryProtocol for
development and testing. The version-checked update is serialized with an
asyncio lock, the in-memory equivalent of a row lock around
``UPDATE ... WHERE version = :expected RETURNING *``.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from datetime import datetime

from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.domain.errors.concurrent_modification import ConcurrentModificationError
from src.domain.errors.validation import RequestNotFoundError
from src.domain.models.validation_request import ValidationRequest, ValidationStatus


class ValidationRequestRepositoryStub(ValidationRequestRepositoryProtocol):
    """In-memory stub implementation of ValidationRequestRepositoryProtocol.

    It is NOT suitable for production use.

    Attributes:
        _requests: Request id -> latest stored request.
        update_count: Number of successful updates (for test assertions).
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._requests: dict[str, ValidationRequest] = {}
        self._cas_lock = asyncio.Lock()
        self.update_count = 0

    async def save(self, request: ValidationRequest) -> ValidationRequest:
        async with self._cas_lock:
            if request.id in self._requests:
                raise ValueError(f"Validation request already exists: {request.id}")
            stored = request.with_version(1)
            self._requests[request.id] = stored
            return stored

    async def get(self, request_id: str) -> ValidationRequest | None:
        return self._requests.get(request_id)

    async def update(
        self,
        request: ValidationRequest,
        expected_version: int,
    ) -> ValidationRequest:
        """Version-checked replace.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            ConcurrentModificationError: If the stored version differs.
        """
        async with self._cas_lock:
            current = self._requests.get(request.id)
            if current is None:
                raise RequestNotFoundError(request.id)
            if current.version != expected_version:
                raise ConcurrentModificationError(
                    request_id=request.id,
                    expected_version=expected_version,
                    actual_version=current.version,
                )
            stored = request.with_version(expected_version + 1)
            self._requests[request.id] = stored
            self.update_count += 1
            return stored

    async def list_by_status(
        self,
        status: ValidationStatus,
        community_id: str | None = None,
    ) -> list[ValidationRequest]:
        matching = [
            r
            for r in self._requests.values()
            if r.status == status
            and (community_id is None or r.community_id == community_id)
        ]
        matching.sort(key=lambda r: r.submitted_at, reverse=True)
        return matching

    async def list_by_community(self, community_id: str) -> list[ValidationRequest]:
        matching = [r for r in self._requests.values() if r.community_id == community_id]
        matching.sort(key=lambda r: r.submitted_at, reverse=True)
        return matching

    async def list_submitted_between(
        self,
        start: datetime,
        end: datetime,
        community_id: str | None = None,
    ) -> list[ValidationRequest]:
        return [
            r
            for r in self._requests.values()
            if start <= r.submitted_at < end
            and (community_id is None or r.community_id == community_id)
        ]

    async def open_assignment_counts(self) -> dict[str, int]:
        counts: Counter[str] = Counter()
        for request in self._requests.values():
            if not request.is_open:
                continue
            submitted = {v.validator_id for v in request.validations}
            counts.update(
                vid for vid in request.assigned_validator_ids if vid not in submitted
            )
        return dict(counts)

    # Test helpers

    def put(self, request: ValidationRequest) -> None:
        """Store a request as-is, bypassing the version check."""
        self._requests[request.id] = request

    def count(self) -> int:
        return len(self._requests)

    def clear(self) -> None:
        self._requests.clear()
        self.update_count = 0
