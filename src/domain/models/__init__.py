"""Domain models for the community validation engine.

Contains value objects and domain models that represent
core business concepts. These models are immutable and
contain no infrastructure dependencies.
"""

from src.domain.models.community_validation import (
    CommunityValidation,
    OverallAssessment,
)
from src.domain.models.consensus_result import ConsensusResult
from src.domain.models.content_revision import ContentChange, ContentRevision
from src.domain.models.validation_content import (
    SourceAttribution,
    ValidationContent,
)
from src.domain.models.validation_feedback import (
    FeedbackPriority,
    FeedbackType,
    ImplementationStatus,
    ValidationFeedback,
)
from src.domain.models.validation_metrics import MetricsTimeframe, ValidationMetrics
from src.domain.models.validation_request import (
    CulturalSensitivity,
    Priority,
    ValidationRequest,
    ValidationStatus,
    ValidationSubmission,
)
from src.domain.models.validation_workflow import (
    ContentType,
    EscalationAction,
    EscalationRule,
    ValidationWorkflow,
)
from src.domain.models.validator import (
    CommunityValidator,
    ValidationHistory,
    ValidatorAvailability,
    ValidatorRole,
)

__all__: list[str] = [
    "CommunityValidation",
    "CommunityValidator",
    "ConsensusResult",
    "ContentChange",
    "ContentRevision",
    "ContentType",
    "CulturalSensitivity",
    "EscalationAction",
    "EscalationRule",
    "FeedbackPriority",
    "FeedbackType",
    "ImplementationStatus",
    "MetricsTimeframe",
    "OverallAssessment",
    "Priority",
    "SourceAttribution",
    "ValidationContent",
    "ValidationFeedback",
    "ValidationHistory",
    "ValidationMetrics",
    "ValidationRequest",
    "ValidationStatus",
    "ValidationSubmission",
    "ValidationWorkflow",
    "ValidatorAvailability",
    "ValidatorRole",
]
