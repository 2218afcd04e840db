"""Validation feedback domain model.

Feedback records are the durable improvement stream fed back to the
teams maintaining the AI models and the review process. They are created
manually through AddFeedback, or extracted from validators' suggested
improvements when a review cycle is finalized.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from uuid6 import uuid7


class FeedbackType(Enum):
    MODEL_IMPROVEMENT = "model_improvement"
    PROCESS_IMPROVEMENT = "process_improvement"
    CULTURAL_GUIDANCE = "cultural_guidance"
    METHODOLOGY_SUGGESTION = "methodology_suggestion"


class FeedbackPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ImplementationStatus(Enum):
    """Progress of a feedback item.

    Statuses:
        PENDING: Raised, not yet picked up
        IN_PROGRESS: Being worked on
        IMPLEMENTED: Change shipped (terminal)
        REJECTED: Declined (terminal)
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    IMPLEMENTED = "implemented"
    REJECTED = "rejected"


# Category assigned to feedback lifted from validator suggestions.
VALIDATION_SUGGESTION_CATEGORY = "validation_suggestion"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ValidationFeedback:
    """A trackable improvement item.

    Attributes:
        request_id: The request the feedback was raised on.
        feedback_type: What the feedback is about.
        category: Free-form category.
        feedback: The feedback text.
        submitted_by: Validator or user who raised it.
        priority: Triage priority.
        implementation_status: Progress.
        implementation_notes: Notes recorded on status changes.
        submitted_at: When it was raised.
        implemented_at: When it reached IMPLEMENTED.
        id: Generated id (UUIDv7).
    """

    request_id: str
    feedback_type: FeedbackType
    category: str
    feedback: str
    submitted_by: str
    priority: FeedbackPriority = FeedbackPriority.MEDIUM
    implementation_status: ImplementationStatus = ImplementationStatus.PENDING
    implementation_notes: str | None = None
    submitted_at: datetime = field(default_factory=_utc_now)
    implemented_at: datetime | None = None
    id: str = field(default_factory=lambda: str(uuid7()))

    def __post_init__(self) -> None:
        if not self.feedback.strip():
            raise ValueError("feedback text cannot be empty")

    def with_status(
        self,
        status: ImplementationStatus,
        notes: str | None = None,
    ) -> ValidationFeedback:
        """Create a copy moved to a new implementation status.

        Args:
            status: The new status.
            notes: Optional notes; existing notes are kept when omitted.

        Returns:
            Updated ValidationFeedback. ``implemented_at`` is stamped on
            the first move to IMPLEMENTED.
        """
        implemented_at = self.implemented_at
        if status == ImplementationStatus.IMPLEMENTED and implemented_at is None:
            implemented_at = _utc_now()
        return replace(
            self,
            implementation_status=status,
            implementation_notes=notes if notes is not None else self.implementation_notes,
            implemented_at=implemented_at,
        )
