"""Escalation service.

Scheduler-facing support for stalled requests. The engine runs no timers:
an external scheduler calls ``escalate_overdue`` (or ``find_overdue`` and
``apply_escalation`` itself) and the workflow's escalation rules decide
what happens.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.application.services.base import LoggingMixin
from src.application.services.request_updater import RequestUpdater
from src.application.services.validator_assignment_service import (
    ValidatorAssignmentService,
)
from src.domain.errors.validation import RequestNotFoundError, UnknownWorkflowError
from src.domain.models.validation_request import (
    OPEN_STATUSES,
    ValidationRequest,
    _utc_now,
)
from src.domain.models.validation_workflow import (
    CONDITION_INSUFFICIENT_VALIDATORS,
    CONDITION_TIMEOUT,
    EscalationAction,
    EscalationRule,
    ValidationWorkflow,
)

DEFAULT_ADDITIONAL_VALIDATORS = 1


class EscalationService(LoggingMixin):
    """Finds overdue requests and applies escalation rules."""

    def __init__(
        self,
        store: ValidationRequestRepositoryProtocol,
        catalog: WorkflowCatalogProtocol,
        updater: RequestUpdater,
        assignment: ValidatorAssignmentService,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._updater = updater
        self._assignment = assignment
        self._init_logger()

    async def _workflow_for(self, request: ValidationRequest) -> ValidationWorkflow:
        workflow = await self._catalog.get(request.content_type)
        if workflow is None:
            raise UnknownWorkflowError(request.content_type.value)
        return workflow

    async def find_overdue(self, now: datetime | None = None) -> list[ValidationRequest]:
        """Open requests whose deadline has passed."""
        moment = now or _utc_now()
        overdue: list[ValidationRequest] = []
        for status in sorted(OPEN_STATUSES, key=lambda s: s.value):
            requests = await self._store.list_by_status(status)
            overdue.extend(r for r in requests if r.is_overdue(moment))
        overdue.sort(key=lambda r: (r.deadline, r.id))
        return overdue

    async def apply_escalation(
        self,
        request_id: str,
        rule: EscalationRule,
    ) -> ValidationRequest:
        """Apply one escalation rule to a request.

        Args:
            request_id: The request to escalate.
            rule: The rule; only its action and parameters are used.

        Returns:
            The stored request after the action.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            UnknownWorkflowError: If the request's workflow is gone.
        """
        request = await self._store.get(request_id)
        if request is None:
            raise RequestNotFoundError(request_id)
        workflow = await self._workflow_for(request)
        log = self._log_operation(
            "apply_escalation",
            request_id=request_id,
            action=rule.action.value,
            condition=rule.condition,
        )

        if rule.action == EscalationAction.ADD_VALIDATOR:
            count = int(rule.parameters.get("count", DEFAULT_ADDITIONAL_VALIDATORS))
            result = await self._assignment.staff(request, workflow, seats=count)
        elif rule.action == EscalationAction.EXTEND_DEADLINE:
            days = int(rule.parameters.get("days", workflow.timeout_days))

            def extend(current: ValidationRequest) -> ValidationRequest | None:
                if not current.is_open:
                    return None
                base = current.deadline or _utc_now()
                return current.with_deadline(base + timedelta(days=days))

            _, result = await self._updater.mutate(request_id, extend)
        elif rule.action == EscalationAction.ESCALATE_TO_ELDER:

            def require_elder(current: ValidationRequest) -> ValidationRequest | None:
                if current.elder_review_required:
                    return None
                return current.with_elder_review_required()

            _, flagged = await self._updater.mutate(request_id, require_elder)
            # Zero seats: selection only adds the elder seat when one is missing.
            result = await self._assignment.staff(flagged, workflow, seats=0)
        else:

            def dispute(current: ValidationRequest) -> ValidationRequest | None:
                if current.is_disputed:
                    return None
                return current.marked_disputed()

            _, result = await self._updater.mutate(request_id, dispute)

        log.info(
            "escalation_applied",
            status=result.status.value,
            panel_size=len(result.assigned_validator_ids),
            is_disputed=result.is_disputed,
        )
        return result

    async def escalate_overdue(
        self, now: datetime | None = None
    ) -> list[ValidationRequest]:
        """Apply each overdue request's matching rules in order.

        Timeout rules always match an overdue request; insufficient
        validator rules match only while the panel has a shortfall.

        Returns:
            The escalated requests as stored after their last rule.
        """
        escalated: list[ValidationRequest] = []
        for request in await self.find_overdue(now):
            workflow = await self._workflow_for(request)
            current = request
            for rule in workflow.escalation_rules:
                if rule.condition == CONDITION_TIMEOUT or (
                    rule.condition == CONDITION_INSUFFICIENT_VALIDATORS
                    and current.assignment_shortfall > 0
                ):
                    current = await self.apply_escalation(request.id, rule)
            if current.version != request.version:
                escalated.append(current)
        self._log_operation("escalate_overdue").info(
            "overdue_requests_escalated", count=len(escalated)
        )
        return escalated
