"""Factories for validation engine test data.

Every factory takes keyword overrides so tests only spell out the fields
they care about.
"""

from __future__ import annotations

from typing import Any

from uuid6 import uuid7

from src.domain.models.community_validation import CommunityValidation, OverallAssessment
from src.domain.models.validation_content import ValidationContent
from src.domain.models.validation_request import ValidationRequest, ValidationSubmission
from src.domain.models.validation_workflow import ContentType, ValidationWorkflow
from src.domain.models.validator import (
    CommunityValidator,
    ValidationHistory,
    ValidatorAvailability,
    ValidatorRole,
)

COMMUNITY_ID = "community-riverbend"


def make_content(**overrides: Any) -> ValidationContent:
    values: dict[str, Any] = {
        "title": "Youth program attendance",
        "description": "Attendance trends for after-school programs",
        "ai_generated_insight": "Attendance rises when sessions start after 4pm",
        "methodology": "Regression over twelve months of sign-in sheets",
        "assumptions": ("sign-in sheets are complete",),
        "limitations": ("single site",),
        "potential_impact": "Schedule changes for next term",
        "recommended_actions": ("move sessions to 4:30pm",),
    }
    values.update(overrides)
    return ValidationContent(**values)


def make_validator(
    validator_id: str,
    role: ValidatorRole = ValidatorRole.COMMUNITY_MEMBER,
    quality: float = 3.0,
    expertise: tuple[str, ...] = ("pattern_recognition",),
    community: str = COMMUNITY_ID,
    max_concurrent: int = 3,
    **overrides: Any,
) -> CommunityValidator:
    values: dict[str, Any] = {
        "id": validator_id,
        "name": validator_id.replace("-", " ").title(),
        "role": role,
        "expertise": expertise,
        "community_affiliation": community,
        "availability": ValidatorAvailability(max_concurrent_validations=max_concurrent),
        "history": ValidationHistory(quality_rating=quality),
    }
    values.update(overrides)
    return CommunityValidator(**values)


def make_validation(
    validator_id: str,
    score: float = 4.0,
    role: ValidatorRole = ValidatorRole.COMMUNITY_MEMBER,
    confidence: float = 0.8,
    review_cycle: int = 1,
    **overrides: Any,
) -> CommunityValidation:
    values: dict[str, Any] = {
        "validator_id": validator_id,
        "validator_name": validator_id,
        "validator_role": role,
        "validation_score": score,
        "accuracy": score,
        "relevance": score,
        "cultural_appropriateness": score,
        "completeness": score,
        "actionability": score,
        "overall_assessment": OverallAssessment.AGREE,
        "confidence_level": confidence,
        "review_cycle": review_cycle,
        "time_spent_minutes": 30,
    }
    values.update(overrides)
    return CommunityValidation(**values)


def make_submission(
    content_type: ContentType = ContentType.PATTERN,
    **overrides: Any,
) -> ValidationSubmission:
    values: dict[str, Any] = {
        "content_id": "content-1",
        "content_type": content_type,
        "content": make_content(),
        "submitted_by": "insights-pipeline",
        "community_id": COMMUNITY_ID,
        "community_name": "Riverbend",
    }
    values.update(overrides)
    return ValidationSubmission(**values)


def make_request(**overrides: Any) -> ValidationRequest:
    values: dict[str, Any] = {
        "id": str(uuid7()),
        "content_id": "content-1",
        "content_type": ContentType.PATTERN,
        "content": make_content(),
        "submitted_by": "insights-pipeline",
        "community_id": COMMUNITY_ID,
        "required_validators": 2,
    }
    values.update(overrides)
    return ValidationRequest(**values)


def make_workflow(**overrides: Any) -> ValidationWorkflow:
    values: dict[str, Any] = {
        "id": "workflow-test",
        "content_type": ContentType.PATTERN,
        "required_validators": 2,
        "required_expertise": ("pattern_recognition",),
        "consensus_threshold": 0.7,
        "timeout_days": 7,
    }
    values.update(overrides)
    return ValidationWorkflow(**values)
