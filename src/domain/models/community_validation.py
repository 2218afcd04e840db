"""Community validation domain model.

A CommunityValidation is one reviewer's structured judgment of a piece of
content within one review cycle: six 1-5 sub-scores, a qualitative stance,
free-text notes and a self-reported confidence. Records are immutable; a
re-review after a revision produces new records.

Role weights used by the final score live here so that every caller
weights a validation the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType

from uuid6 import uuid7

from src.domain.models.validator import ValidatorRole

MIN_SCORE = 1.0
MAX_SCORE = 5.0

# Score multiplier per declared role for the weighted final score.
ROLE_WEIGHTS: MappingProxyType[ValidatorRole, float] = MappingProxyType(
    {
        ValidatorRole.ELDER: 1.5,
        ValidatorRole.COMMUNITY_EXPERT: 1.3,
    }
)
DEFAULT_ROLE_WEIGHT = 1.0


def role_weight(role: ValidatorRole) -> float:
    """Return the score multiplier for a validator role."""
    return ROLE_WEIGHTS.get(role, DEFAULT_ROLE_WEIGHT)


class OverallAssessment(Enum):
    """Five-point qualitative stance on the content."""

    STRONGLY_DISAGREE = "strongly_disagree"
    DISAGREE = "disagree"
    NEUTRAL = "neutral"
    AGREE = "agree"
    STRONGLY_AGREE = "strongly_agree"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class CommunityValidation:
    """One validator's judgment within one review cycle.

    Attributes:
        validator_id: Id of the submitting validator.
        validator_name: Display name at submission time.
        validator_role: Role declared at submission time.
        validation_score: Overall score (1-5).
        accuracy: Accuracy sub-score (1-5).
        relevance: Relevance sub-score (1-5).
        cultural_appropriateness: Cultural appropriateness sub-score (1-5).
        completeness: Completeness sub-score (1-5).
        actionability: Actionability sub-score (1-5).
        overall_assessment: Qualitative stance.
        confidence_level: Self-reported confidence (0-1).
        review_cycle: The cycle this validation was prepared against.
        comments: Free-text comments.
        specific_concerns: Concerns raised.
        suggested_improvements: Suggestions lifted into feedback on
            finalization.
        cultural_considerations: Cultural notes.
        additional_sources: Sources the validator recommends.
        validator_expertise: Expertise tags at submission time.
        cultural_affiliation: Declared cultural affiliation, if any.
        time_spent_minutes: Minutes spent reviewing.
        id: Generated record id (UUIDv7).
        validated_at: Submission timestamp (UTC).
    """

    validator_id: str
    validator_name: str
    validator_role: ValidatorRole
    validation_score: float
    accuracy: float
    relevance: float
    cultural_appropriateness: float
    completeness: float
    actionability: float
    overall_assessment: OverallAssessment
    confidence_level: float
    review_cycle: int = 1
    comments: str = ""
    specific_concerns: tuple[str, ...] = ()
    suggested_improvements: tuple[str, ...] = ()
    cultural_considerations: tuple[str, ...] = ()
    additional_sources: tuple[str, ...] = ()
    validator_expertise: tuple[str, ...] = ()
    cultural_affiliation: str | None = None
    time_spent_minutes: int = 0
    id: str = field(default_factory=lambda: str(uuid7()))
    validated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate score ranges."""
        for name in (
            "validation_score",
            "accuracy",
            "relevance",
            "cultural_appropriateness",
            "completeness",
            "actionability",
        ):
            value = getattr(self, name)
            if not MIN_SCORE <= value <= MAX_SCORE:
                raise ValueError(
                    f"{name} must be between {MIN_SCORE} and {MAX_SCORE}, got {value}"
                )
        if not 0.0 <= self.confidence_level <= 1.0:
            raise ValueError(
                f"confidence_level must be between 0 and 1, got {self.confidence_level}"
            )
        if self.review_cycle < 1:
            raise ValueError(f"review_cycle must be >= 1, got {self.review_cycle}")
        if self.time_spent_minutes < 0:
            raise ValueError("time_spent_minutes cannot be negative")

    @property
    def weight(self) -> float:
        """Contribution weight: role multiplier times confidence."""
        return role_weight(self.validator_role) * self.confidence_level

    @property
    def is_culturally_grounded(self) -> bool:
        """True for elders and validators declaring a cultural affiliation.

        Only these validations feed the cultural compliance score.
        """
        return self.validator_role == ValidatorRole.ELDER or bool(
            self.cultural_affiliation
        )

    @property
    def improvement_suggestions(self) -> tuple[str, ...]:
        """Non-blank suggested improvements, stripped."""
        return tuple(s.strip() for s in self.suggested_improvements if s.strip())
