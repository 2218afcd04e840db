"""Validation request repository port.

This module defines the abstract interface for validation request storage.
Any durable keyed store satisfies it; the in-memory stub backs tests and
local development.

Concurrency contract:
- ``update`` is a version-checked compare-and-swap. The stored version
  must equal ``expected_version`` or ConcurrentModificationError is raised.
- The returned request carries the new version; callers must use it for
  their next update.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.domain.models.validation_request import ValidationRequest, ValidationStatus


class ValidationRequestRepositoryProtocol(Protocol):
    """Protocol for validation request storage operations.

    Methods:
        save: Store a new request
        get: Retrieve a request by id
        update: Version-checked replace of a stored request
        list_by_status: Requests in a status, newest first
        list_by_community: Requests for a community, newest first
        list_submitted_between: Requests submitted in a time range
        open_assignment_counts: Open panel seats held per validator
    """

    async def save(self, request: ValidationRequest) -> ValidationRequest:
        """Store a new validation request.

        Args:
            request: The request to store.

        Returns:
            The stored request (version 1).

        Raises:
            ValueError: If a request with the same id already exists.
        """
        ...

    async def get(self, request_id: str) -> ValidationRequest | None:
        """Retrieve a validation request by id.

        Returns:
            The request if found, None otherwise.
        """
        ...

    async def update(
        self,
        request: ValidationRequest,
        expected_version: int,
    ) -> ValidationRequest:
        """Replace a stored request if its version is unchanged.

        Args:
            request: The new request state.
            expected_version: The version the caller read.

        Returns:
            The stored request with its version incremented.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            ConcurrentModificationError: If the stored version differs.
        """
        ...

    async def list_by_status(
        self,
        status: ValidationStatus,
        community_id: str | None = None,
    ) -> list[ValidationRequest]:
        """List requests in a status, ordered by submitted_at desc.

        Args:
            status: The lifecycle status to filter by.
            community_id: Optional community filter.
        """
        ...

    async def list_by_community(self, community_id: str) -> list[ValidationRequest]:
        """List all requests for a community, ordered by submitted_at desc."""
        ...

    async def list_submitted_between(
        self,
        start: datetime,
        end: datetime,
        community_id: str | None = None,
    ) -> list[ValidationRequest]:
        """List requests with start <= submitted_at < end.

        Args:
            start: Inclusive lower bound.
            end: Exclusive upper bound.
            community_id: Optional community filter.
        """
        ...

    async def open_assignment_counts(self) -> dict[str, int]:
        """Count open requests each validator is assigned to.

        Only requests whose current cycle is still open count, and a
        validator who already submitted in that cycle no longer holds the
        seat.

        Returns:
            Validator id -> number of outstanding assignments.
        """
        ...
