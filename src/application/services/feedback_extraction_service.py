"""Feedback extraction service.

Lifts validators' suggested improvements into standalone feedback
records when a review cycle is finalized. Each non-blank suggestion
becomes one ``model_improvement`` record with medium priority,
attributed to the validator who made it.
"""

from __future__ import annotations

import structlog

from src.domain.models.validation_feedback import (
    VALIDATION_SUGGESTION_CATEGORY,
    FeedbackPriority,
    FeedbackType,
    ValidationFeedback,
)
from src.domain.models.validation_request import ValidationRequest

logger = structlog.get_logger(__name__)


class FeedbackExtractionService:
    """Turns suggested improvements into feedback records."""

    def extract(self, request: ValidationRequest) -> tuple[ValidationFeedback, ...]:
        """Extract feedback from the request's current validations.

        Args:
            request: A request whose cycle is being finalized.

        Returns:
            One record per non-blank suggestion, in validation order.
        """
        items = tuple(
            ValidationFeedback(
                request_id=request.id,
                feedback_type=FeedbackType.MODEL_IMPROVEMENT,
                category=VALIDATION_SUGGESTION_CATEGORY,
                feedback=suggestion,
                submitted_by=validation.validator_id,
                priority=FeedbackPriority.MEDIUM,
            )
            for validation in request.validations
            for suggestion in validation.improvement_suggestions
        )
        if items:
            logger.debug(
                "feedback_extracted",
                request_id=request.id,
                review_cycle=request.review_cycle,
                count=len(items),
            )
        return items
