"""Validation workflow domain model.

A workflow is the per-content-type review configuration: quorum size,
required expertise, elder and cultural review flags, the consensus
threshold, the review timeout and an ordered list of escalation rules for
an external scheduler to apply when a request stalls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class ContentType(Enum):
    """Kinds of AI-generated content routed for community review."""

    AI_INSIGHT = "ai_insight"
    ANALYSIS_RESULT = "analysis_result"
    RECOMMENDATION = "recommendation"
    PATTERN = "pattern"
    PREDICTION = "prediction"

    @classmethod
    def parse(cls, value: str) -> ContentType:
        """Parse a content type, accepting hyphenated spellings.

        Args:
            value: e.g. ``"ai_insight"`` or ``"ai-insight"``.

        Returns:
            The matching ContentType.

        Raises:
            ValueError: If the value names no content type.
        """
        return cls(value.strip().lower().replace("-", "_"))


class EscalationAction(Enum):
    """Actions an escalation rule can trigger.

    Actions:
        ADD_VALIDATOR: Assign additional validators to the panel
        EXTEND_DEADLINE: Push the review deadline out
        ESCALATE_TO_ELDER: Require and assign elder review
        MARK_DISPUTED: Flag the request as disputed for human follow-up
    """

    ADD_VALIDATOR = "add_validator"
    EXTEND_DEADLINE = "extend_deadline"
    ESCALATE_TO_ELDER = "escalate_to_elder"
    MARK_DISPUTED = "mark_disputed"


# Conditions understood by the escalation service.
CONDITION_TIMEOUT = "timeout"
CONDITION_INSUFFICIENT_VALIDATORS = "insufficient_validators"


@dataclass(frozen=True, eq=True)
class EscalationRule:
    """Condition -> action pair applied by an external scheduler.

    Attributes:
        condition: ``"timeout"`` or ``"insufficient_validators"``.
        action: What to do when the condition holds.
        parameters: Action parameters (``count`` for add_validator,
            ``days`` for extend_deadline).
    """

    condition: str
    action: EscalationAction
    parameters: MappingProxyType[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )


@dataclass(frozen=True, eq=True)
class ValidationWorkflow:
    """Review configuration for one content type.

    Attributes:
        id: Workflow identifier.
        content_type: The content type this workflow governs.
        required_validators: Quorum size.
        required_expertise: Expertise tags; a validator qualifies with any one.
        elder_review_required: Panel must contain an elder.
        cultural_review_required: Content needs cultural review.
        consensus_threshold: Dispersion tolerance (0-1); consensus holds
            when the score standard deviation is at most ``1 - threshold``.
        timeout_days: Days before an open request is overdue.
        escalation_rules: Ordered rules for stalled requests.
        is_active: Inactive workflows are ignored at submission.
    """

    id: str
    content_type: ContentType
    required_validators: int = 3
    required_expertise: tuple[str, ...] = ()
    elder_review_required: bool = False
    cultural_review_required: bool = False
    consensus_threshold: float = 0.7
    timeout_days: int = 7
    escalation_rules: tuple[EscalationRule, ...] = ()
    is_active: bool = True

    def __post_init__(self) -> None:
        """Validate workflow configuration."""
        if self.required_validators < 1:
            raise ValueError(
                f"required_validators must be >= 1, got {self.required_validators}"
            )
        if not 0.0 <= self.consensus_threshold <= 1.0:
            raise ValueError(
                "consensus_threshold must be between 0 and 1, "
                f"got {self.consensus_threshold}"
            )
        if self.timeout_days < 1:
            raise ValueError(f"timeout_days must be >= 1, got {self.timeout_days}")

    @property
    def max_standard_deviation(self) -> float:
        """Largest score dispersion that still counts as agreement."""
        return 1.0 - self.consensus_threshold

    def rules_for(self, condition: str) -> tuple[EscalationRule, ...]:
        """Return the escalation rules for a condition, in order."""
        return tuple(r for r in self.escalation_rules if r.condition == condition)
