"""Feedback stream stub implementation.

In-memory, append-ordered feedback stream for development and testing.
"""

from __future__ import annotations

import asyncio

from src.application.ports.feedback_stream import FeedbackStreamProtocol
from src.domain.errors.validation import FeedbackNotFoundError
from src.domain.models.validation_feedback import (
    FeedbackType,
    ImplementationStatus,
    ValidationFeedback,
)


class FeedbackStreamStub(FeedbackStreamProtocol):
    """In-memory stub implementation of FeedbackStreamProtocol."""

    def __init__(self) -> None:
        # Insertion order is append order.
        self._items: dict[str, ValidationFeedback] = {}
        self._lock = asyncio.Lock()

    async def append(self, items: list[ValidationFeedback]) -> None:
        async with self._lock:
            for item in items:
                self._items[item.id] = item

    async def get(self, feedback_id: str) -> ValidationFeedback | None:
        return self._items.get(feedback_id)

    async def update(self, item: ValidationFeedback) -> None:
        async with self._lock:
            if item.id not in self._items:
                raise FeedbackNotFoundError(item.id)
            self._items[item.id] = item

    async def list(
        self,
        status: ImplementationStatus | None = None,
        feedback_type: FeedbackType | None = None,
    ) -> list[ValidationFeedback]:
        return [
            f
            for f in self._items.values()
            if (status is None or f.implementation_status == status)
            and (feedback_type is None or f.feedback_type == feedback_type)
        ]

    def count(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()
