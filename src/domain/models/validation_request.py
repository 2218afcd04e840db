"""Validation request domain model.

The ValidationRequest is the unit of work of the engine. It owns its
validations, revisions, feedback and source attributions, and moves
through a small state machine:

    PENDING -> IN_REVIEW -> {VALIDATED, NEEDS_REVISION, REJECTED}
    NEEDS_REVISION -> PENDING (after an accepted content revision)

VALIDATED and REJECTED are terminal. Every change produces a new frozen
instance; the store bumps ``version`` on each persisted update so
concurrent writers can detect lost races.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from src.domain.errors.validation import (
    DuplicateValidationError,
    InvalidStateTransitionError,
    ReviewCycleClosedError,
    StaleRevisionError,
)
from src.domain.models.community_validation import CommunityValidation
from src.domain.models.consensus_result import ConsensusResult
from src.domain.models.content_revision import ContentRevision
from src.domain.models.validation_content import SourceAttribution, ValidationContent
from src.domain.models.validation_feedback import ValidationFeedback
from src.domain.models.validation_workflow import ContentType


class ValidationStatus(Enum):
    """Lifecycle status of a validation request.

    Statuses:
        PENDING: Created or revised, panel not yet (fully) assigned
        IN_REVIEW: Panel assigned, collecting validations
        VALIDATED: Quorum met and the panel agreed (terminal)
        NEEDS_REVISION: Quorum met without agreement; awaiting a revision
        REJECTED: Administratively rejected (terminal)
    """

    PENDING = "pending"
    IN_REVIEW = "in_review"
    VALIDATED = "validated"
    NEEDS_REVISION = "needs_revision"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def accepts_validations(self) -> bool:
        """True while the current review cycle is still open."""
        return self in OPEN_STATUSES

    def valid_transitions(self) -> frozenset[ValidationStatus]:
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


TERMINAL_STATUSES: frozenset[ValidationStatus] = frozenset(
    {ValidationStatus.VALIDATED, ValidationStatus.REJECTED}
)

# Statuses in which the current cycle collects validations.
OPEN_STATUSES: frozenset[ValidationStatus] = frozenset(
    {ValidationStatus.PENDING, ValidationStatus.IN_REVIEW}
)

STATUS_TRANSITION_MATRIX: dict[ValidationStatus, frozenset[ValidationStatus]] = {
    # PENDING -> PENDING is a revision before any panel was assigned.
    # PENDING can finalize directly when validations arrive before assignment.
    ValidationStatus.PENDING: frozenset(
        {
            ValidationStatus.PENDING,
            ValidationStatus.IN_REVIEW,
            ValidationStatus.VALIDATED,
            ValidationStatus.NEEDS_REVISION,
            ValidationStatus.REJECTED,
        }
    ),
    ValidationStatus.IN_REVIEW: frozenset(
        {
            ValidationStatus.PENDING,
            ValidationStatus.VALIDATED,
            ValidationStatus.NEEDS_REVISION,
            ValidationStatus.REJECTED,
        }
    ),
    ValidationStatus.NEEDS_REVISION: frozenset(
        {ValidationStatus.PENDING, ValidationStatus.REJECTED}
    ),
    ValidationStatus.VALIDATED: frozenset(),
    ValidationStatus.REJECTED: frozenset(),
}


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CulturalSensitivity(Enum):
    """Cultural sensitivity label assigned at submission."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat a naive datetime as UTC; convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True, eq=True)
class ValidationSubmission:
    """Caller-supplied data for SubmitForValidation.

    Attributes:
        content_id: Id of the content in the producing system.
        content_type: Content type; selects the workflow.
        content: The payload under review.
        submitted_by: Submitting user or system.
        community_id: Community the content concerns.
        community_name: Display name of the community.
        priority: Review priority.
        deadline: Optional explicit deadline; defaults to the workflow
            timeout from submission.
        cultural_sensitivity: Optional label; classified when omitted.
        traditional_knowledge_involved: Content draws on traditional
            knowledge.
        elder_review_required: Request elder review even when the
            workflow does not require it.
    """

    content_id: str
    content_type: ContentType
    content: ValidationContent
    submitted_by: str
    community_id: str
    community_name: str = ""
    priority: Priority = Priority.MEDIUM
    deadline: datetime | None = None
    cultural_sensitivity: CulturalSensitivity | None = None
    traditional_knowledge_involved: bool = False
    elder_review_required: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "deadline", as_utc(self.deadline))


@dataclass(frozen=True, eq=True)
class ValidationRequest:
    """A piece of AI-generated content under community review.

    ``consensus_reached``, ``final_score`` and ``confidence`` are only
    meaningful once the status is VALIDATED, NEEDS_REVISION or REJECTED.

    Attributes:
        id: Request id (UUIDv7 string).
        content_id: Id of the content in the producing system.
        content_type: Content type.
        content: Current payload (revisions patch it).
        submitted_by: Submitter.
        community_id: Community the content concerns.
        community_name: Display name of the community.
        priority: Review priority.
        required_validators: Quorum copied from the workflow.
        status: Lifecycle status.
        deadline: When an open request becomes overdue.
        cultural_sensitivity: Sensitivity label.
        traditional_knowledge_involved: Traditional knowledge flag.
        elder_review_required: Panel must contain an elder.
        validations: Current cycle's validations, in submission order.
        current_validators: Always ``len(validations)``.
        consensus_reached: Consensus outcome of the last finalization.
        final_score: Weighted final score of the last finalization.
        confidence: Aggregate confidence of the last finalization.
        source_attribution: Sources synthesised from the payload.
        feedback: Feedback raised on this request.
        revisions: Accepted revisions, in order.
        review_cycle: Current review cycle (starts at 1).
        version: Optimistic concurrency version, bumped by the store.
        assigned_validator_ids: Current cycle's panel.
        assignment_shortfall: Panel seats left unfilled this cycle.
        is_disputed: Flagged for human follow-up.
        rejection_reason: Why the request was rejected.
        submitted_at: Submission time.
        updated_at: Last modification time.
        completed_at: When the current cycle was finalized.
    """

    id: str
    content_id: str
    content_type: ContentType
    content: ValidationContent
    submitted_by: str
    community_id: str
    community_name: str = ""
    priority: Priority = Priority.MEDIUM
    required_validators: int = 3
    status: ValidationStatus = ValidationStatus.PENDING
    deadline: datetime | None = None
    cultural_sensitivity: CulturalSensitivity = CulturalSensitivity.NONE
    traditional_knowledge_involved: bool = False
    elder_review_required: bool = False
    validations: tuple[CommunityValidation, ...] = ()
    current_validators: int = 0
    consensus_reached: bool = False
    final_score: float = 0.0
    confidence: float = 0.0
    source_attribution: tuple[SourceAttribution, ...] = ()
    feedback: tuple[ValidationFeedback, ...] = ()
    revisions: tuple[ContentRevision, ...] = ()
    review_cycle: int = 1
    version: int = 0
    assigned_validator_ids: tuple[str, ...] = ()
    assignment_shortfall: int = 0
    is_disputed: bool = False
    rejection_reason: str | None = None
    submitted_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate request invariants."""
        if self.current_validators != len(self.validations):
            raise ValueError(
                f"current_validators ({self.current_validators}) must equal "
                f"the number of validations ({len(self.validations)})"
            )
        if self.required_validators < 1:
            raise ValueError(
                f"required_validators must be >= 1, got {self.required_validators}"
            )
        if self.review_cycle < 1:
            raise ValueError(f"review_cycle must be >= 1, got {self.review_cycle}")
        object.__setattr__(self, "deadline", as_utc(self.deadline))

    @property
    def is_quorum_met(self) -> bool:
        return self.current_validators >= self.required_validators

    @property
    def is_open(self) -> bool:
        return self.status.accepts_validations()

    def validation_by(self, validator_id: str) -> CommunityValidation | None:
        """Return the current cycle's validation from a validator, if any."""
        for validation in self.validations:
            if validation.validator_id == validator_id:
                return validation
        return None

    def is_overdue(self, now: datetime) -> bool:
        """True if the request is still open past its deadline."""
        return (
            self.is_open and self.deadline is not None and self.deadline < as_utc(now)
        )

    def _check_transition(self, new_status: ValidationStatus) -> None:
        if new_status not in self.status.valid_transitions():
            raise InvalidStateTransitionError(
                request_id=self.id,
                from_status=self.status.value,
                to_status=new_status.value,
            )

    def with_validation(self, validation: CommunityValidation) -> ValidationRequest:
        """Append a validation to the current cycle.

        Args:
            validation: The validator's judgment, tagged with the cycle it
                was prepared against.

        Returns:
            New request with the validation appended and the counter
            incremented in the same step.

        Raises:
            StaleRevisionError: If the validation targets another cycle.
            ReviewCycleClosedError: If the cycle was already finalized.
            DuplicateValidationError: If the validator already submitted
                in this cycle.
        """
        if validation.review_cycle != self.review_cycle:
            raise StaleRevisionError(
                request_id=self.id,
                submitted_cycle=validation.review_cycle,
                current_cycle=self.review_cycle,
            )
        if not self.status.accepts_validations():
            raise ReviewCycleClosedError(self.id, self.status.value)
        if self.validation_by(validation.validator_id) is not None:
            raise DuplicateValidationError(
                request_id=self.id,
                validator_id=validation.validator_id,
                review_cycle=self.review_cycle,
            )

        validations = (*self.validations, validation)
        return replace(
            self,
            validations=validations,
            current_validators=len(validations),
            updated_at=_utc_now(),
        )

    def finalized(self, result: ConsensusResult) -> ValidationRequest:
        """Close the current cycle with a consensus outcome.

        The status transition and the three consensus outputs are applied
        together. A cycle can only be finalized once: both target statuses
        have no transition back into another finalization.

        Args:
            result: Consensus evaluation over the current validations.

        Returns:
            New request in VALIDATED or NEEDS_REVISION.

        Raises:
            InvalidStateTransitionError: If the cycle is already closed.
        """
        new_status = (
            ValidationStatus.VALIDATED
            if result.reached
            else ValidationStatus.NEEDS_REVISION
        )
        self._check_transition(new_status)
        now = _utc_now()
        return replace(
            self,
            status=new_status,
            consensus_reached=result.reached,
            final_score=result.final_score,
            confidence=result.confidence,
            completed_at=now,
            updated_at=now,
        )

    def with_panel(
        self,
        validator_ids: tuple[str, ...],
        shortfall: int,
    ) -> ValidationRequest:
        """Record the current cycle's panel.

        A pending request moves to IN_REVIEW once at least one validator
        is on the panel.
        """
        status = self.status
        if validator_ids and status == ValidationStatus.PENDING:
            self._check_transition(ValidationStatus.IN_REVIEW)
            status = ValidationStatus.IN_REVIEW
        return replace(
            self,
            assigned_validator_ids=validator_ids,
            assignment_shortfall=max(shortfall, 0),
            status=status,
            updated_at=_utc_now(),
        )

    def revised(
        self,
        revision: ContentRevision,
        content: ValidationContent,
    ) -> ValidationRequest:
        """Apply an accepted revision and start a fresh review cycle.

        Prior validations are discarded, not merged.

        Raises:
            InvalidStateTransitionError: If the request is terminal.
        """
        self._check_transition(ValidationStatus.PENDING)
        return replace(
            self,
            content=content,
            revisions=(*self.revisions, revision),
            status=ValidationStatus.PENDING,
            validations=(),
            current_validators=0,
            consensus_reached=False,
            final_score=0.0,
            confidence=0.0,
            completed_at=None,
            review_cycle=self.review_cycle + 1,
            assigned_validator_ids=(),
            assignment_shortfall=0,
            updated_at=_utc_now(),
        )

    def rejected(self, reason: str) -> ValidationRequest:
        """Administratively reject the request.

        Raises:
            InvalidStateTransitionError: If the request is terminal.
        """
        self._check_transition(ValidationStatus.REJECTED)
        now = _utc_now()
        return replace(
            self,
            status=ValidationStatus.REJECTED,
            rejection_reason=reason,
            completed_at=self.completed_at or now,
            updated_at=now,
        )

    def with_feedback(
        self, items: tuple[ValidationFeedback, ...]
    ) -> ValidationRequest:
        return replace(self, feedback=(*self.feedback, *items), updated_at=_utc_now())

    def with_feedback_replaced(self, item: ValidationFeedback) -> ValidationRequest:
        """Replace the embedded copy of a feedback record by id."""
        feedback = tuple(item if f.id == item.id else f for f in self.feedback)
        return replace(self, feedback=feedback, updated_at=_utc_now())

    def with_deadline(self, deadline: datetime) -> ValidationRequest:
        return replace(self, deadline=deadline, updated_at=_utc_now())

    def with_elder_review_required(self) -> ValidationRequest:
        return replace(self, elder_review_required=True, updated_at=_utc_now())

    def marked_disputed(self) -> ValidationRequest:
        return replace(self, is_disputed=True, updated_at=_utc_now())

    def with_version(self, version: int) -> ValidationRequest:
        """Return a copy at a store-assigned version."""
        return replace(self, version=version)
