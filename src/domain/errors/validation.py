"""Validation lifecycle domain errors.

This module defines the exceptions raised by the community validation
engine. Structural errors (unknown request, unknown workflow, invalid
revision field, stale submission) surface immediately to the caller.
``InsufficientValidatorsError`` is the one recoverable kind: assignment
raises it with the partial panel attached and the lifecycle service keeps
the request open for escalation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from src.domain.exceptions import ValidationEngineError

if TYPE_CHECKING:
    from src.domain.models.validator import CommunityValidator


class ValidationError(ValidationEngineError):
    """Base class for validation lifecycle errors."""

    pass


class UnknownWorkflowError(ValidationError):
    """Raised when no active workflow exists for a content type.

    Fatal to submission: a request cannot be created without the quorum,
    expertise and threshold configuration its workflow provides.

    Attributes:
        content_type: The content type that has no workflow.
    """

    def __init__(self, content_type: str) -> None:
        """Initialize UnknownWorkflowError.

        Args:
            content_type: The content type that has no workflow.
        """
        self.content_type = content_type
        super().__init__(
            f"No validation workflow found for content type: {content_type}"
        )


class RequestNotFoundError(ValidationError):
    """Raised when a validation request id is unknown.

    Attributes:
        request_id: The id that was not found.
    """

    def __init__(self, request_id: str) -> None:
        """Initialize RequestNotFoundError.

        Args:
            request_id: The id that was not found.
        """
        self.request_id = request_id
        super().__init__(f"Validation request not found: {request_id}")


class InvalidFieldPathError(ValidationError):
    """Raised when a revision targets a field outside the revisable set.

    Attributes:
        field: The rejected field name.
        allowed_fields: The revisable field names.
    """

    def __init__(self, field: str, allowed_fields: Iterable[str]) -> None:
        """Initialize InvalidFieldPathError.

        Args:
            field: The rejected field name.
            allowed_fields: The revisable field names.
        """
        self.field = field
        self.allowed_fields = tuple(sorted(allowed_fields))
        super().__init__(
            f"Field '{field}' cannot be revised. "
            f"Revisable fields: {', '.join(self.allowed_fields)}"
        )


class StaleRevisionError(ValidationError):
    """Raised when a validation targets a superseded review cycle.

    A content revision starts a new review cycle. Validations prepared
    against the previous cycle judged content that no longer exists and
    are rejected instead of being folded into the new cycle.

    Attributes:
        request_id: The request the validation was submitted to.
        submitted_cycle: The cycle the validation was prepared against.
        current_cycle: The request's current cycle.
    """

    def __init__(
        self,
        request_id: str,
        submitted_cycle: int,
        current_cycle: int,
    ) -> None:
        """Initialize StaleRevisionError.

        Args:
            request_id: The request the validation was submitted to.
            submitted_cycle: The cycle the validation was prepared against.
            current_cycle: The request's current cycle.
        """
        self.request_id = request_id
        self.submitted_cycle = submitted_cycle
        self.current_cycle = current_cycle
        super().__init__(
            f"Validation for request {request_id} targets review cycle "
            f"{submitted_cycle}, but the request is on cycle {current_cycle}"
        )


class InsufficientValidatorsError(ValidationError):
    """Raised when assignment finds fewer qualified validators than required.

    Non-fatal. The partial panel is carried on the error so the caller can
    still assign it and leave the request open for an ``add_validator``
    escalation.

    Attributes:
        request_id: The request being staffed.
        found: Number of validators selected.
        required: Number of validators requested.
        selected: The partial panel, best first.
    """

    def __init__(
        self,
        request_id: str,
        found: int,
        required: int,
        selected: tuple[CommunityValidator, ...] = (),
    ) -> None:
        """Initialize InsufficientValidatorsError.

        Args:
            request_id: The request being staffed.
            found: Number of validators selected.
            required: Number of validators requested.
            selected: The partial panel, best first.
        """
        self.request_id = request_id
        self.found = found
        self.required = required
        self.selected = selected
        super().__init__(
            f"Only {found} of {required} validators available for request "
            f"{request_id}"
        )

    @property
    def shortfall(self) -> int:
        """Number of panel seats left unfilled."""
        return max(self.required - self.found, 0)


class DuplicateValidationError(ValidationError):
    """Raised when a validator submits twice within one review cycle.

    Attributes:
        request_id: The request.
        validator_id: The validator that already submitted.
        review_cycle: The cycle in which the first submission was recorded.
    """

    def __init__(self, request_id: str, validator_id: str, review_cycle: int) -> None:
        self.request_id = request_id
        self.validator_id = validator_id
        self.review_cycle = review_cycle
        super().__init__(
            f"Validator {validator_id} already submitted a validation for "
            f"request {request_id} in review cycle {review_cycle}"
        )


class ReviewCycleClosedError(ValidationError):
    """Raised when a validation arrives after its cycle was finalized.

    Once the panel's consensus has been computed for a cycle the result is
    fixed. Late validations for the same cycle are refused so the stored
    validations always match the score they produced.

    Attributes:
        request_id: The request.
        status: The request's current status value.
    """

    def __init__(self, request_id: str, status: str) -> None:
        self.request_id = request_id
        self.status = status
        super().__init__(
            f"Request {request_id} is no longer accepting validations "
            f"(status: {status})"
        )


class InvalidStateTransitionError(ValidationError):
    """Raised when a lifecycle transition is not permitted.

    Attributes:
        request_id: The request.
        from_status: Current status value.
        to_status: Attempted status value.
    """

    def __init__(self, request_id: str, from_status: str, to_status: str) -> None:
        self.request_id = request_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Request {request_id} cannot move from {from_status} to {to_status}"
        )


class ValidatorNotFoundError(ValidationError):
    """Raised when a validator id is not in the registry."""

    def __init__(self, validator_id: str) -> None:
        self.validator_id = validator_id
        super().__init__(f"Validator not found: {validator_id}")


class FeedbackNotFoundError(ValidationError):
    """Raised when a feedback id is not in the feedback stream."""

    def __init__(self, feedback_id: str) -> None:
        self.feedback_id = feedback_id
        super().__init__(f"Feedback not found: {feedback_id}")
