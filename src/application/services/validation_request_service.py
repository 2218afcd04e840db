"""Validation request lifecycle service.

Implements the request state machine operations:

- submit_for_validation: create a request, synthesise attribution,
  classify sensitivity when needed, and staff the panel
- submit_validation: append one validator's judgment and, once the quorum
  is met, finalize the cycle in the same write
- add_feedback / update_feedback_status / list_feedback: the feedback stream
- reject_request: the explicit administrative rejection
- get_request / list_requests: reads

Concurrency: every write goes through RequestUpdater (per-request lock
plus version-checked compare-and-swap). Appending a validation,
incrementing the counter, evaluating consensus and setting the terminal
fields are one write, so concurrent submissions that each reach the
quorum finalize the cycle exactly once; the others see the closed cycle.
Notifications, feedback streaming and validator history updates happen
after the write, outside the request lock; history updates are
serialized per validator.
"""

from __future__ import annotations

from datetime import timedelta

from uuid6 import uuid7

from src.application.ports.cultural_safety_classifier import (
    CulturalSafetyClassifierProtocol,
)
from src.application.ports.feedback_stream import FeedbackStreamProtocol
from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.application.ports.validator_notifier import (
    NOTIFICATION_COMPLETION,
    ValidatorNotifierProtocol,
)
from src.application.ports.validator_registry import ValidatorRegistryProtocol
from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.application.services.base import LoggingMixin
from src.application.services.consensus_calculator_service import (
    DISPERSION_TOLERANCE,
    ConsensusCalculatorService,
)
from src.application.services.feedback_extraction_service import (
    FeedbackExtractionService,
)
from src.application.services.request_updater import (
    RequestLockRegistry,
    RequestUpdater,
)
from src.application.services.validator_assignment_service import (
    ValidatorAssignmentService,
)
from src.config.validation_config import ValidationEngineConfig
from src.domain.errors.validation import (
    FeedbackNotFoundError,
    RequestNotFoundError,
    StaleRevisionError,
    UnknownWorkflowError,
)
from src.domain.models.community_validation import CommunityValidation
from src.domain.models.validation_content import derive_source_attribution
from src.domain.models.validation_feedback import (
    FeedbackPriority,
    FeedbackType,
    ImplementationStatus,
    ValidationFeedback,
)
from src.domain.models.validation_request import (
    ValidationRequest,
    ValidationStatus,
    ValidationSubmission,
    _utc_now,
)
from src.domain.models.validation_workflow import ContentType, ValidationWorkflow
from src.infrastructure.monitoring.validation_metrics_collector import (
    ValidationMetricsCollector,
)


class ValidationRequestService(LoggingMixin):
    """Lifecycle operations for validation requests."""

    def __init__(
        self,
        store: ValidationRequestRepositoryProtocol,
        registry: ValidatorRegistryProtocol,
        catalog: WorkflowCatalogProtocol,
        feedback_stream: FeedbackStreamProtocol,
        notifier: ValidatorNotifierProtocol,
        classifier: CulturalSafetyClassifierProtocol,
        updater: RequestUpdater,
        assignment: ValidatorAssignmentService,
        consensus: ConsensusCalculatorService | None = None,
        feedback_extractor: FeedbackExtractionService | None = None,
        config: ValidationEngineConfig | None = None,
        metrics: ValidationMetricsCollector | None = None,
        history_locks: RequestLockRegistry | None = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._catalog = catalog
        self._feedback_stream = feedback_stream
        self._notifier = notifier
        self._classifier = classifier
        self._updater = updater
        self._assignment = assignment
        self._consensus = consensus or ConsensusCalculatorService()
        self._feedback_extractor = feedback_extractor or FeedbackExtractionService()
        self._config = config or ValidationEngineConfig()
        self._metrics = metrics
        self._history_locks = (
            history_locks if history_locks is not None else RequestLockRegistry()
        )
        self._init_logger()

    async def _workflow_for(self, content_type: ContentType) -> ValidationWorkflow:
        workflow = await self._catalog.get(content_type)
        if workflow is None:
            raise UnknownWorkflowError(content_type.value)
        return workflow

    async def submit_for_validation(
        self, submission: ValidationSubmission
    ) -> ValidationRequest:
        """Create a validation request and staff its panel.

        Args:
            submission: Caller-supplied content and metadata.

        Returns:
            The stored request: IN_REVIEW when at least one validator was
            assigned, otherwise PENDING with an assignment shortfall.

        Raises:
            UnknownWorkflowError: If no active workflow exists for the
                content type.
        """
        log = self._log_operation(
            "submit_for_validation",
            content_id=submission.content_id,
            content_type=submission.content_type.value,
            community_id=submission.community_id,
        )

        workflow = await self._catalog.get(submission.content_type)
        if workflow is None or not workflow.is_active:
            log.warning("unknown_workflow")
            raise UnknownWorkflowError(submission.content_type.value)

        sensitivity = submission.cultural_sensitivity
        if sensitivity is None:
            sensitivity = await self._classifier.classify(submission.content)

        now = _utc_now()
        request = ValidationRequest(
            id=str(uuid7()),
            content_id=submission.content_id,
            content_type=submission.content_type,
            content=submission.content,
            submitted_by=submission.submitted_by,
            community_id=submission.community_id,
            community_name=submission.community_name,
            priority=submission.priority,
            required_validators=workflow.required_validators,
            deadline=submission.deadline or now + timedelta(days=workflow.timeout_days),
            cultural_sensitivity=sensitivity,
            traditional_knowledge_involved=submission.traditional_knowledge_involved,
            elder_review_required=(
                submission.elder_review_required or workflow.elder_review_required
            ),
            source_attribution=tuple(
                derive_source_attribution(submission.content, submission.submitted_by)
            ),
            submitted_at=now,
            updated_at=now,
        )
        stored = await self._store.save(request)
        log.info(
            "validation_request_submitted",
            request_id=stored.id,
            required_validators=stored.required_validators,
            cultural_sensitivity=sensitivity.value,
            source_count=len(stored.source_attribution),
        )
        if self._metrics is not None:
            self._metrics.record_submission(stored.content_type.value)

        return await self._assignment.staff(stored, workflow)

    async def submit_validation(
        self,
        request_id: str,
        validation: CommunityValidation,
    ) -> ValidationRequest:
        """Record a validator's judgment and finalize on quorum.

        Args:
            request_id: The request being reviewed.
            validation: The judgment, tagged with the review cycle it was
                prepared against.

        Returns:
            The stored request after the append (and finalization, when
            this validation completed the quorum).

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            StaleRevisionError: If the validation targets a superseded cycle.
            ReviewCycleClosedError: If the cycle was already finalized.
            DuplicateValidationError: If the validator already submitted
                in this cycle.
        """
        log = self._log_operation(
            "submit_validation",
            request_id=request_id,
            validator_id=validation.validator_id,
            review_cycle=validation.review_cycle,
        )

        current = await self._store.get(request_id)
        if current is None:
            raise RequestNotFoundError(request_id)
        workflow = await self._workflow_for(current.content_type)

        def apply(request: ValidationRequest) -> ValidationRequest:
            updated = request.with_validation(validation)
            if not updated.is_quorum_met:
                return updated
            result = self._consensus.evaluate(
                updated.validations, workflow.consensus_threshold
            )
            finalized = updated.finalized(result)
            extracted = self._feedback_extractor.extract(finalized)
            if extracted:
                finalized = finalized.with_feedback(extracted)
            return finalized

        try:
            before, after = await self._updater.mutate(request_id, apply)
        except StaleRevisionError as exc:
            log.warning(
                "stale_validation_rejected",
                current_cycle=exc.current_cycle,
            )
            if self._metrics is not None:
                self._metrics.record_stale_submission()
            raise

        log.info(
            "validation_recorded",
            current_validators=after.current_validators,
            required_validators=after.required_validators,
        )
        if self._metrics is not None:
            self._metrics.record_validation()

        if after.status != before.status and after.status in (
            ValidationStatus.VALIDATED,
            ValidationStatus.NEEDS_REVISION,
        ):
            await self._after_finalization(before, after, workflow)
        if after.status == ValidationStatus.VALIDATED:
            self._updater.locks.discard(request_id)
        return after

    async def _after_finalization(
        self,
        before: ValidationRequest,
        after: ValidationRequest,
        workflow: ValidationWorkflow,
    ) -> None:
        log = self._log_operation(
            "finalize", request_id=after.id, review_cycle=after.review_cycle
        )
        log.info(
            "validation_cycle_finalized",
            status=after.status.value,
            consensus_reached=after.consensus_reached,
            final_score=round(after.final_score, 4),
            confidence=round(after.confidence, 4),
        )
        if self._metrics is not None:
            self._metrics.record_finalization(after.status.value)

        extracted = list(after.feedback[len(before.feedback) :])
        if extracted:
            await self._feedback_stream.append(extracted)
            log.info("feedback_queued", count=len(extracted))

        await self._notify_completion(after)
        await self._update_validator_histories(after, workflow)

    async def _notify_completion(self, request: ValidationRequest) -> None:
        recipients = dict.fromkeys(
            (*request.assigned_validator_ids, *(v.validator_id for v in request.validations))
        )
        for validator_id in recipients:
            try:
                await self._notifier.notify_completion(validator_id, request)
            except Exception as exc:
                self._log.warning(
                    "validator_notification_failed",
                    notification_type=NOTIFICATION_COMPLETION,
                    request_id=request.id,
                    validator_id=validator_id,
                    error=str(exc),
                )
                if self._metrics is not None:
                    self._metrics.record_notification_failure(NOTIFICATION_COMPLETION)

    async def _update_validator_histories(
        self,
        request: ValidationRequest,
        workflow: ValidationWorkflow,
    ) -> None:
        """Fold the finalized cycle into each participant's history."""
        tolerance = workflow.max_standard_deviation + DISPERSION_TOLERANCE
        for validation in request.validations:
            validator_id = validation.validator_id
            agreed = abs(validation.validation_score - request.final_score) <= tolerance
            async with self._history_locks.hold(validator_id):
                validator = await self._registry.get(validator_id)
                if validator is None:
                    self._log.debug(
                        "validator_history_skipped",
                        request_id=request.id,
                        validator_id=validator_id,
                    )
                else:
                    history = validator.history.record(
                        score=validation.validation_score,
                        time_spent_minutes=validation.time_spent_minutes,
                        agreed_with_consensus=agreed,
                    )
                    await self._registry.save(validator.with_history(history))
            self._history_locks.discard(validator_id)

    async def add_feedback(
        self,
        request_id: str,
        feedback_type: FeedbackType,
        category: str,
        feedback: str,
        submitted_by: str,
        priority: FeedbackPriority = FeedbackPriority.MEDIUM,
    ) -> ValidationFeedback:
        """Attach a feedback record to a request and queue it.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            ValueError: If the feedback text is blank.
        """
        log = self._log_operation(
            "add_feedback", request_id=request_id, feedback_type=feedback_type.value
        )
        item = ValidationFeedback(
            request_id=request_id,
            feedback_type=feedback_type,
            category=category,
            feedback=feedback,
            submitted_by=submitted_by,
            priority=priority,
        )
        await self._updater.mutate(request_id, lambda r: r.with_feedback((item,)))
        await self._feedback_stream.append([item])
        log.info("feedback_added", feedback_id=item.id)
        return item

    async def update_feedback_status(
        self,
        feedback_id: str,
        status: ImplementationStatus,
        notes: str | None = None,
    ) -> ValidationFeedback:
        """Move a feedback record through its implementation statuses.

        The embedded copy on the owning request is updated to match.

        Raises:
            FeedbackNotFoundError: If the feedback id is unknown.
        """
        item = await self._feedback_stream.get(feedback_id)
        if item is None:
            raise FeedbackNotFoundError(feedback_id)

        updated = item.with_status(status, notes)
        await self._feedback_stream.update(updated)

        def mirror(request: ValidationRequest) -> ValidationRequest | None:
            if not any(f.id == feedback_id for f in request.feedback):
                return None
            return request.with_feedback_replaced(updated)

        await self._updater.mutate(item.request_id, mirror)
        self._log_operation(
            "update_feedback_status", feedback_id=feedback_id
        ).info("feedback_status_updated", status=status.value)
        return updated

    async def list_feedback(
        self,
        status: ImplementationStatus | None = None,
        feedback_type: FeedbackType | None = None,
    ) -> list[ValidationFeedback]:
        return await self._feedback_stream.list(status=status, feedback_type=feedback_type)

    async def reject_request(
        self,
        request_id: str,
        decided_by: str,
        reason: str,
    ) -> ValidationRequest:
        """Administratively reject a request.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            InvalidStateTransitionError: If the request is already terminal.
        """
        _, after = await self._updater.mutate(
            request_id, lambda r: r.rejected(reason)
        )
        self._updater.locks.discard(request_id)
        self._log_operation("reject_request", request_id=request_id).info(
            "validation_request_rejected",
            decided_by=decided_by,
            review_cycle=after.review_cycle,
        )
        return after

    def revision_cycles_exhausted(self, request: ValidationRequest) -> bool:
        """True when a request failed consensus in its last allowed cycle.

        Rejection is never applied automatically; this only tells an
        operator that it is warranted.
        """
        return (
            request.status == ValidationStatus.NEEDS_REVISION
            and request.review_cycle >= self._config.max_revision_cycles
        )

    async def get_request(self, request_id: str) -> ValidationRequest | None:
        return await self._store.get(request_id)

    async def list_requests(
        self,
        status: ValidationStatus,
        community_id: str | None = None,
    ) -> list[ValidationRequest]:
        return await self._store.list_by_status(status, community_id)
