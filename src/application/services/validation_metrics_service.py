"""Validation metrics service.

Read-only aggregation over the requests submitted in a window. Nothing
here writes to the store; every figure is recomputed from stored
requests on each call.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from statistics import fmean
from types import MappingProxyType

from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.application.services.base import LoggingMixin
from src.config.validation_config import ValidationEngineConfig
from src.domain.models.validation_feedback import FeedbackType, ImplementationStatus
from src.domain.models.validation_metrics import MetricsTimeframe, ValidationMetrics
from src.domain.models.validation_request import ValidationRequest, _utc_now

# cultural_appropriateness is rated 1-5; the compliance score is 0-100.
COMPLIANCE_SCALE = 20.0


def _cultural_compliance(requests: list[ValidationRequest]) -> float:
    per_request = []
    for request in requests:
        grounded = [v for v in request.validations if v.is_culturally_grounded]
        if grounded:
            per_request.append(fmean(v.cultural_appropriateness for v in grounded))
    if not per_request:
        return 0.0
    return fmean(per_request) * COMPLIANCE_SCALE


class ValidationMetricsService(LoggingMixin):
    """Computes ValidationMetrics for a window and optional community."""

    def __init__(
        self,
        store: ValidationRequestRepositoryProtocol,
        config: ValidationEngineConfig | None = None,
    ) -> None:
        self._store = store
        self._config = config or ValidationEngineConfig()
        self._init_logger()

    async def get_metrics(
        self,
        timeframe: MetricsTimeframe | None = None,
        community_id: str | None = None,
        now: datetime | None = None,
    ) -> ValidationMetrics:
        """Aggregate requests submitted in the window ending now.

        Args:
            timeframe: Named window; the configured default when omitted.
            community_id: Restrict to one community.
            now: Window end, for deterministic tests.

        Returns:
            ValidationMetrics. An empty window yields zeros, not errors.
        """
        end = now or _utc_now()
        start = (
            timeframe.window_start(end)
            if timeframe is not None
            else end - self._config.default_metrics_window
        )
        requests = await self._store.list_submitted_between(start, end, community_id)

        completed = [r for r in requests if r.completed_at is not None]
        completion_hours = [
            (r.completed_at - r.submitted_at).total_seconds() / 3600.0
            for r in completed
            if r.completed_at is not None
        ]
        participation = Counter(
            v.validator_id for r in requests for v in r.validations
        )
        breakdown = Counter(r.content_type.value for r in requests)
        feedback = [f for r in requests for f in r.feedback]

        metrics = ValidationMetrics(
            window_start=start,
            window_end=end,
            community_id=community_id,
            total_requests=len(requests),
            completed_validations=len(completed),
            average_completion_time_hours=(
                fmean(completion_hours) if completion_hours else 0.0
            ),
            consensus_rate=(
                sum(1 for r in completed if r.consensus_reached) / len(completed)
                if completed
                else 0.0
            ),
            average_confidence=(
                fmean(r.confidence for r in completed) if completed else 0.0
            ),
            validator_participation=MappingProxyType(dict(participation)),
            content_type_breakdown=MappingProxyType(dict(breakdown)),
            cultural_compliance_score=_cultural_compliance(requests),
            model_improvement_suggestions=sum(
                1 for f in feedback if f.feedback_type == FeedbackType.MODEL_IMPROVEMENT
            ),
            implemented_improvements=sum(
                1
                for f in feedback
                if f.implementation_status == ImplementationStatus.IMPLEMENTED
            ),
            total_feedback=len(feedback),
        )
        self._log_operation(
            "get_metrics", community_id=community_id
        ).debug(
            "validation_metrics_computed",
            total_requests=metrics.total_requests,
            completed_validations=metrics.completed_validations,
        )
        return metrics
