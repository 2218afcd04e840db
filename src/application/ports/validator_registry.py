"""Validator registry port.

Holds reviewer profiles. Requests reference validators by id only.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.validator import CommunityValidator


class ValidatorRegistryProtocol(Protocol):
    """Protocol for validator profile storage.

    Methods:
        get: Retrieve a validator by id
        list_active: All active validators
        save: Insert or replace a validator profile
    """

    async def get(self, validator_id: str) -> CommunityValidator | None:
        """Retrieve a validator by id, active or not."""
        ...

    async def list_active(self) -> list[CommunityValidator]:
        """Return every active validator."""
        ...

    async def save(self, validator: CommunityValidator) -> None:
        """Insert or replace a validator profile."""
        ...
