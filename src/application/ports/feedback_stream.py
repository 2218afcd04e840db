"""Feedback stream port.

Durable, queryable stream of improvement feedback. It outlives the
request lifecycle: extracted feedback stays here after a revision wipes
the cycle it came from.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.validation_feedback import (
    FeedbackType,
    ImplementationStatus,
    ValidationFeedback,
)


class FeedbackStreamProtocol(Protocol):
    """Protocol for the feedback stream.

    Methods:
        append: Queue new feedback records
        get: Retrieve a record by id
        update: Replace a record by id
        list: Query records, oldest first
    """

    async def append(self, items: list[ValidationFeedback]) -> None:
        """Append feedback records in order."""
        ...

    async def get(self, feedback_id: str) -> ValidationFeedback | None:
        ...

    async def update(self, item: ValidationFeedback) -> None:
        """Replace a stored record.

        Raises:
            FeedbackNotFoundError: If no record has ``item.id``.
        """
        ...

    async def list(
        self,
        status: ImplementationStatus | None = None,
        feedback_type: FeedbackType | None = None,
    ) -> list[ValidationFeedback]:
        """List records matching the optional filters, oldest first."""
        ...
