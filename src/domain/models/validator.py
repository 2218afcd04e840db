"""Community validator domain model.

A validator is a human reviewer registered with the engine: an elder,
community expert, service provider, academic or community member. Profiles
are referenced by id from validation requests, never owned by them.

Ranking during assignment uses ``ValidationHistory.quality_rating``. The
history is updated after each finalized review cycle the validator took
part in.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType

# Community affiliation value that matches every community.
ALL_COMMUNITIES = "all"


class ValidatorRole(Enum):
    """Declared role of a validator.

    Roles:
        COMMUNITY_EXPERT: Recognised subject expert within the community
        ELDER: Cultural authority; elder review workflows require one
        SERVICE_PROVIDER: Works in a service delivered to the community
        ACADEMIC: External researcher
        COMMUNITY_MEMBER: Any other community participant
    """

    COMMUNITY_EXPERT = "community_expert"
    ELDER = "elder"
    SERVICE_PROVIDER = "service_provider"
    ACADEMIC = "academic"
    COMMUNITY_MEMBER = "community_member"


@dataclass(frozen=True, eq=True)
class ValidationHistory:
    """Running record of a validator's past reviews.

    Attributes:
        total_validations: Number of finalized validations submitted.
        average_score: Running mean of submitted overall scores.
        average_time_spent: Running mean of minutes spent per validation.
        consensus_rate: Fraction of reviews that landed within the
            workflow's tolerance of the final score.
        quality_rating: Peer rating of validation quality (0-5).
        specializations: Per-area validation counts.
    """

    total_validations: int = 0
    average_score: float = 0.0
    average_time_spent: float = 0.0
    consensus_rate: float = 0.0
    quality_rating: float = 0.0
    specializations: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def record(
        self,
        score: float,
        time_spent_minutes: int,
        agreed_with_consensus: bool,
    ) -> ValidationHistory:
        """Fold one finalized validation into the running means.

        Args:
            score: The overall score the validator gave.
            time_spent_minutes: Minutes the validator reported.
            agreed_with_consensus: Whether the score lay within tolerance
                of the panel's final score.

        Returns:
            New ValidationHistory including the validation.
        """
        n = self.total_validations
        return replace(
            self,
            total_validations=n + 1,
            average_score=(self.average_score * n + score) / (n + 1),
            average_time_spent=(self.average_time_spent * n + time_spent_minutes)
            / (n + 1),
            consensus_rate=(
                self.consensus_rate * n + (1.0 if agreed_with_consensus else 0.0)
            )
            / (n + 1),
        )


@dataclass(frozen=True, eq=True)
class ValidatorAvailability:
    """Availability limits declared by a validator.

    Attributes:
        hours_per_week: Hours offered for review work.
        response_time_hours: Expected time to respond to an assignment.
        max_concurrent_validations: Open assignments the validator accepts.
    """

    hours_per_week: int = 0
    response_time_hours: int = 24
    max_concurrent_validations: int = 3


@dataclass(frozen=True, eq=True)
class CommunityValidator:
    """A registered reviewer.

    Attributes:
        id: Validator identifier.
        name: Display name.
        role: Declared role.
        expertise: Expertise tags matched against workflow requirements.
        community_affiliation: Community id, or ``"all"``.
        cultural_role: Optional cultural role (e.g. Knowledge Keeper).
        years_of_experience: Years of relevant experience.
        cultural_knowledge_areas: Areas of cultural knowledge.
        languages: Languages the validator reviews in.
        availability: Availability limits.
        history: Running validation history.
        is_active: Inactive validators are never assigned.
    """

    id: str
    name: str
    role: ValidatorRole
    expertise: tuple[str, ...] = ()
    community_affiliation: str = ALL_COMMUNITIES
    cultural_role: str | None = None
    years_of_experience: int = 0
    cultural_knowledge_areas: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    availability: ValidatorAvailability = field(default_factory=ValidatorAvailability)
    history: ValidationHistory = field(default_factory=ValidationHistory)
    is_active: bool = True

    @property
    def is_elder(self) -> bool:
        """True if the validator holds the elder role."""
        return self.role == ValidatorRole.ELDER

    @property
    def quality_rating(self) -> float:
        """Shortcut to the historical quality rating used for ranking."""
        return self.history.quality_rating

    def serves_community(self, community_id: str) -> bool:
        """Check whether the validator may review for a community."""
        return self.community_affiliation in (community_id, ALL_COMMUNITIES)

    def has_any_expertise(self, required: tuple[str, ...]) -> bool:
        """Check whether any expertise tag intersects the required set.

        An empty requirement is satisfied by every validator.
        """
        if not required:
            return True
        return not set(self.expertise).isdisjoint(required)

    def with_history(self, history: ValidationHistory) -> CommunityValidator:
        return replace(self, history=history)

    def deactivated(self) -> CommunityValidator:
        return replace(self, is_active=False)
