"""Validator registry stub implementation.

In-memory validator profiles for development and testing.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.application.ports.validator_registry import ValidatorRegistryProtocol
from src.domain.models.validator import CommunityValidator


class ValidatorRegistryStub(ValidatorRegistryProtocol):
    """In-memory stub implementation of ValidatorRegistryProtocol.

    Attributes:
        _validators: Validator id -> profile, in registration order.
        list_calls: Number of list_active calls (for cache tests).
    """

    def __init__(self, validators: Iterable[CommunityValidator] = ()) -> None:
        self._validators: dict[str, CommunityValidator] = {
            v.id: v for v in validators
        }
        self.list_calls = 0

    async def get(self, validator_id: str) -> CommunityValidator | None:
        return self._validators.get(validator_id)

    async def list_active(self) -> list[CommunityValidator]:
        self.list_calls += 1
        return [v for v in self._validators.values() if v.is_active]

    async def save(self, validator: CommunityValidator) -> None:
        self._validators[validator.id] = validator

    def clear(self) -> None:
        self._validators.clear()
        self.list_calls = 0
