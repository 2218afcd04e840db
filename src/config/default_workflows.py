"""Default workflow catalog seed.

One workflow per content type. Every workflow escalates a timed-out
request by adding a validator; workflows requiring elder review also
escalate to an elder on timeout.
"""

from __future__ import annotations

from types import MappingProxyType

from src.domain.models.validation_workflow import (
    CONDITION_TIMEOUT,
    ContentType,
    EscalationAction,
    EscalationRule,
    ValidationWorkflow,
)


def _rules(elder_review_required: bool) -> tuple[EscalationRule, ...]:
    rules = [
        EscalationRule(
            condition=CONDITION_TIMEOUT,
            action=EscalationAction.ADD_VALIDATOR,
            parameters=MappingProxyType({"count": 1}),
        )
    ]
    if elder_review_required:
        rules.append(
            EscalationRule(
                condition=CONDITION_TIMEOUT,
                action=EscalationAction.ESCALATE_TO_ELDER,
            )
        )
    return tuple(rules)


def _workflow(
    content_type: ContentType,
    required_validators: int,
    required_expertise: tuple[str, ...],
    elder_review_required: bool,
    cultural_review_required: bool,
    consensus_threshold: float,
    timeout_days: int,
) -> ValidationWorkflow:
    return ValidationWorkflow(
        id=f"workflow-{content_type.value.replace('_', '-')}",
        content_type=content_type,
        required_validators=required_validators,
        required_expertise=required_expertise,
        elder_review_required=elder_review_required,
        cultural_review_required=cultural_review_required,
        consensus_threshold=consensus_threshold,
        timeout_days=timeout_days,
        escalation_rules=_rules(elder_review_required),
    )


def default_workflows() -> tuple[ValidationWorkflow, ...]:
    """Return the seed workflows, one per content type."""
    return (
        _workflow(
            ContentType.AI_INSIGHT,
            3,
            ("community_knowledge", "data_analysis"),
            elder_review_required=True,
            cultural_review_required=True,
            consensus_threshold=0.70,
            timeout_days=7,
        ),
        _workflow(
            ContentType.ANALYSIS_RESULT,
            2,
            ("research_methodology", "statistics"),
            elder_review_required=False,
            cultural_review_required=True,
            consensus_threshold=0.75,
            timeout_days=5,
        ),
        _workflow(
            ContentType.RECOMMENDATION,
            3,
            ("program_management", "community_development"),
            elder_review_required=True,
            cultural_review_required=True,
            consensus_threshold=0.80,
            timeout_days=10,
        ),
        _workflow(
            ContentType.PATTERN,
            2,
            ("pattern_recognition", "community_trends"),
            elder_review_required=False,
            cultural_review_required=False,
            consensus_threshold=0.70,
            timeout_days=7,
        ),
        _workflow(
            ContentType.PREDICTION,
            4,
            ("forecasting", "community_planning"),
            elder_review_required=True,
            cultural_review_required=True,
            consensus_threshold=0.85,
            timeout_days=14,
        ),
    )
