"""Validation metrics domain model.

Read-side aggregate over the requests submitted in a time window. All
values are derived from stored requests on demand.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType


class MetricsTimeframe(Enum):
    """Named metrics windows."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"

    @property
    def days(self) -> int:
        return _TIMEFRAME_DAYS[self]

    def window_start(self, end: datetime) -> datetime:
        """Start of the window ending at ``end``."""
        return end - timedelta(days=self.days)


_TIMEFRAME_DAYS: dict[MetricsTimeframe, int] = {
    MetricsTimeframe.WEEK: 7,
    MetricsTimeframe.MONTH: 30,
    MetricsTimeframe.QUARTER: 90,
}


@dataclass(frozen=True, eq=True)
class ValidationMetrics:
    """Aggregated review statistics for a window.

    Attributes:
        window_start: Inclusive start of the window.
        window_end: Exclusive end of the window.
        community_id: Community filter, or None for all communities.
        total_requests: Requests submitted in the window.
        completed_validations: Requests with a completed review cycle.
        average_completion_time_hours: Mean submission-to-completion time.
        consensus_rate: Fraction of completed requests that reached consensus.
        average_confidence: Mean aggregate confidence of completed requests.
        validator_participation: Validator id -> validations submitted.
        content_type_breakdown: Content type value -> request count.
        cultural_compliance_score: 0-100 score from culturally grounded
            validators' cultural appropriateness ratings.
        model_improvement_suggestions: Feedback items of type
            model_improvement.
        implemented_improvements: Feedback items marked implemented.
        total_feedback: All feedback items.
    """

    window_start: datetime
    window_end: datetime
    community_id: str | None
    total_requests: int
    completed_validations: int
    average_completion_time_hours: float
    consensus_rate: float
    average_confidence: float
    validator_participation: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    content_type_breakdown: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    cultural_compliance_score: float = 0.0
    model_improvement_suggestions: int = 0
    implemented_improvements: int = 0
    total_feedback: int = 0
