"""Validator assignment service.

Selects a qualified panel for a request's current review cycle, records
it on the request and notifies the assigned validators.

Selection:
1. Active validators serving the request's community (or ``"all"``).
2. Whose expertise intersects the workflow's required expertise.
3. Who have spare capacity (open assignments below their
   ``max_concurrent_validations``) and are not already on the panel.
4. Ranked by historical quality rating, descending; top N taken.
5. If elder review is required and no elder is on the panel, the best
   active elder is added regardless of expertise, taking the last seat
   when the panel is full. Elders serving the community are preferred.

Finding fewer than N validators is not fatal: the partial panel is
assigned, the shortfall recorded on the request and the request stays
open for an ``add_validator`` escalation.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.application.ports.validator_notifier import (
    NOTIFICATION_ASSIGNMENT,
    ValidatorNotifierProtocol,
)
from src.application.ports.validator_registry import ValidatorRegistryProtocol
from src.application.services.base import LoggingMixin
from src.application.services.request_updater import RequestUpdater
from src.domain.errors.validation import InsufficientValidatorsError
from src.domain.models.validation_request import ValidationRequest
from src.domain.models.validation_workflow import ValidationWorkflow
from src.domain.models.validator import CommunityValidator
from src.infrastructure.monitoring.validation_metrics_collector import (
    ValidationMetricsCollector,
)


def _rank_key(validator: CommunityValidator) -> tuple[float, str]:
    # Id breaks ties so selection is reproducible.
    return (-validator.quality_rating, validator.id)


class ValidatorAssignmentService(LoggingMixin):
    """Panel selection, assignment and assignment notification."""

    def __init__(
        self,
        registry: ValidatorRegistryProtocol,
        store: ValidationRequestRepositoryProtocol,
        updater: RequestUpdater,
        notifier: ValidatorNotifierProtocol,
        metrics: ValidationMetricsCollector | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._updater = updater
        self._notifier = notifier
        self._metrics = metrics
        self._init_logger()

    async def select_panel(
        self,
        request: ValidationRequest,
        workflow: ValidationWorkflow,
        exclude: Iterable[str] = (),
        seats: int | None = None,
    ) -> tuple[CommunityValidator, ...]:
        """Select validators for a request.

        Args:
            request: The request being staffed.
            workflow: The request's workflow.
            exclude: Validator ids already on the panel.
            seats: Number of validators wanted; defaults to the request's
                quorum.

        Returns:
            The selected validators, best first (an added elder last).

        Raises:
            InsufficientValidatorsError: If fewer than ``seats`` were
                found. The partial panel is attached to the error.
        """
        wanted = request.required_validators if seats is None else seats
        excluded = set(exclude)
        log = self._log_operation(
            "select_panel",
            request_id=request.id,
            community_id=request.community_id,
            seats=wanted,
        )

        active = await self._registry.list_active()
        load = await self._store.open_assignment_counts()

        def has_capacity(v: CommunityValidator) -> bool:
            return load.get(v.id, 0) < v.availability.max_concurrent_validations

        candidates = sorted(
            (
                v
                for v in active
                if v.id not in excluded
                and v.serves_community(request.community_id)
                and v.has_any_expertise(workflow.required_expertise)
                and has_capacity(v)
            ),
            key=_rank_key,
        )
        panel = candidates[:wanted]

        elder_required = workflow.elder_review_required or request.elder_review_required
        existing_elder = any(v.is_elder and v.id in excluded for v in active)
        if elder_required and not existing_elder and not any(v.is_elder for v in panel):
            chosen = {v.id for v in panel}
            elders = sorted(
                (
                    v
                    for v in active
                    if v.is_elder and v.id not in excluded and v.id not in chosen
                ),
                key=lambda v: (
                    not v.serves_community(request.community_id),
                    not has_capacity(v),
                    *_rank_key(v),
                ),
            )
            if elders:
                elder = elders[0]
                if wanted > 0 and len(panel) >= wanted:
                    panel = panel[: wanted - 1]
                panel.append(elder)
                log.info("elder_added_to_panel", validator_id=elder.id)
            else:
                log.warning("elder_unavailable")

        selected = tuple(panel)
        if len(selected) < wanted:
            raise InsufficientValidatorsError(
                request_id=request.id,
                found=len(selected),
                required=wanted,
                selected=selected,
            )
        log.debug("panel_selected", validator_ids=[v.id for v in selected])
        return selected

    async def staff(
        self,
        request: ValidationRequest,
        workflow: ValidationWorkflow,
        seats: int | None = None,
    ) -> ValidationRequest:
        """Select validators and add them to the current cycle's panel.

        Shortfalls are recovered locally: the partial panel is assigned
        and ``assignment_shortfall`` records the missing seats.

        Args:
            request: The request as last read.
            workflow: The request's workflow.
            seats: Validators to add; defaults to the quorum minus the
                current panel size.

        Returns:
            The stored request after assignment.
        """
        log = self._log_operation(
            "staff", request_id=request.id, review_cycle=request.review_cycle
        )
        wanted = (
            max(request.required_validators - len(request.assigned_validator_ids), 0)
            if seats is None
            else seats
        )

        try:
            selected = await self.select_panel(
                request, workflow, exclude=request.assigned_validator_ids, seats=wanted
            )
        except InsufficientValidatorsError as exc:
            selected = exc.selected
            log.warning(
                "insufficient_validators",
                found=exc.found,
                required=exc.required,
                shortfall=exc.shortfall,
            )
            if self._metrics is not None:
                self._metrics.record_assignment_shortfall()

        cycle = request.review_cycle
        new_ids = tuple(v.id for v in selected)

        def apply(current: ValidationRequest) -> ValidationRequest | None:
            # A revision or finalization in the meantime makes this panel moot.
            if current.review_cycle != cycle or not current.is_open:
                return None
            panel = tuple(dict.fromkeys((*current.assigned_validator_ids, *new_ids)))
            shortfall = max(current.required_validators - len(panel), 0)
            if (
                panel == current.assigned_validator_ids
                and shortfall == current.assignment_shortfall
            ):
                return None
            return current.with_panel(panel, shortfall)

        before, after = await self._updater.mutate(request.id, apply)
        if after is before:
            log.info("panel_unchanged")
            return after

        added = [v for v in selected if v.id not in before.assigned_validator_ids]
        log.info(
            "validators_assigned",
            validator_ids=[v.id for v in added],
            panel_size=len(after.assigned_validator_ids),
            shortfall=after.assignment_shortfall,
            status=after.status.value,
        )
        await self.notify_assigned(added, after)
        return after

    async def notify_assigned(
        self,
        validators: Iterable[CommunityValidator],
        request: ValidationRequest,
    ) -> None:
        """Notify validators of an assignment, best effort."""
        for validator in validators:
            try:
                await self._notifier.notify_assignment(validator, request)
            except Exception as exc:
                self._log.warning(
                    "validator_notification_failed",
                    notification_type=NOTIFICATION_ASSIGNMENT,
                    request_id=request.id,
                    validator_id=validator.id,
                    error=str(exc),
                )
                if self._metrics is not None:
                    self._metrics.record_notification_failure(NOTIFICATION_ASSIGNMENT)
