"""Validation API request/response models.

Pydantic models for the community validation endpoints. Request models
convert into domain objects with ``to_domain``; response models are built
from domain objects with ``from_domain``.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. FAIL LOUD - Invalid requests return 404/409/422 with RFC 7807
3. DOMAIN OWNS INVARIANTS - score ranges are re-checked by the domain
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer, field_validator

from src.domain.models.community_validation import CommunityValidation, OverallAssessment
from src.domain.models.content_revision import ContentChange
from src.domain.models.validation_content import ValidationContent
from src.domain.models.validation_feedback import (
    FeedbackPriority,
    FeedbackType,
    ImplementationStatus,
    ValidationFeedback,
)
from src.domain.models.validation_metrics import ValidationMetrics
from src.domain.models.validation_request import (
    CulturalSensitivity,
    Priority,
    ValidationRequest,
    ValidationStatus,
    ValidationSubmission,
    as_utc,
)
from src.domain.models.validation_workflow import ContentType
from src.domain.models.validator import ValidatorRole

# Custom datetime serializer for ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]

Score = Annotated[float, Field(ge=1.0, le=5.0)]


class ValidationContentModel(BaseModel):
    """The AI-generated payload under review."""

    title: str = Field(..., min_length=1)
    description: str = ""
    ai_generated_insight: str = Field(..., min_length=1)
    methodology: str = ""
    supporting_data: list[Any] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    limitations: list[str] = Field(default_factory=list)
    cultural_context: str | None = None
    potential_impact: str = ""
    recommended_actions: list[str] = Field(default_factory=list)

    def to_domain(self) -> ValidationContent:
        return ValidationContent(
            title=self.title,
            description=self.description,
            ai_generated_insight=self.ai_generated_insight,
            methodology=self.methodology,
            supporting_data=tuple(self.supporting_data),
            assumptions=tuple(self.assumptions),
            limitations=tuple(self.limitations),
            cultural_context=self.cultural_context,
            potential_impact=self.potential_impact,
            recommended_actions=tuple(self.recommended_actions),
        )

    @classmethod
    def from_domain(cls, content: ValidationContent) -> ValidationContentModel:
        return cls(
            title=content.title,
            description=content.description,
            ai_generated_insight=content.ai_generated_insight,
            methodology=content.methodology,
            supporting_data=list(content.supporting_data),
            assumptions=list(content.assumptions),
            limitations=list(content.limitations),
            cultural_context=content.cultural_context,
            potential_impact=content.potential_impact,
            recommended_actions=list(content.recommended_actions),
        )


class SubmitForValidationRequest(BaseModel):
    """Request to route content to a validation panel.

    Attributes:
        content_id: Caller's identifier for the content.
        content_type: Selects the workflow.
        content: The payload.
        submitted_by: Submitter identifier.
        community_id: Community the content concerns.
        community_name: Display name of the community.
        priority: Review priority.
        deadline: Optional explicit deadline; defaults to the workflow timeout.
        cultural_sensitivity: Optional; classified from the content when omitted.
        traditional_knowledge_involved: Content draws on traditional knowledge.
        elder_review_required: Require an elder regardless of workflow.
    """

    content_id: str = Field(..., min_length=1)
    content_type: ContentType
    content: ValidationContentModel
    submitted_by: str = Field(..., min_length=1)
    community_id: str = Field(..., min_length=1)
    community_name: str = ""
    priority: Priority = Priority.MEDIUM
    deadline: datetime | None = None
    cultural_sensitivity: CulturalSensitivity | None = None
    traditional_knowledge_involved: bool = False
    elder_review_required: bool = False

    @field_validator("deadline")
    @classmethod
    def deadline_as_utc(cls, v: datetime | None) -> datetime | None:
        """Read a deadline without an offset as UTC."""
        return as_utc(v)

    def to_domain(self) -> ValidationSubmission:
        return ValidationSubmission(
            content_id=self.content_id,
            content_type=self.content_type,
            content=self.content.to_domain(),
            submitted_by=self.submitted_by,
            community_id=self.community_id,
            community_name=self.community_name,
            priority=self.priority,
            deadline=self.deadline,
            cultural_sensitivity=self.cultural_sensitivity,
            traditional_knowledge_involved=self.traditional_knowledge_involved,
            elder_review_required=self.elder_review_required,
        )


class SubmitValidationRequest(BaseModel):
    """One validator's structured judgment."""

    validator_id: str = Field(..., min_length=1)
    validator_name: str = ""
    validator_role: ValidatorRole
    validation_score: Score
    accuracy: Score
    relevance: Score
    cultural_appropriateness: Score
    completeness: Score
    actionability: Score
    overall_assessment: OverallAssessment
    confidence_level: float = Field(..., ge=0.0, le=1.0)
    review_cycle: int = Field(1, ge=1, description="Cycle the judgment was prepared against")
    comments: str = ""
    specific_concerns: list[str] = Field(default_factory=list)
    suggested_improvements: list[str] = Field(default_factory=list)
    cultural_considerations: list[str] = Field(default_factory=list)
    additional_sources: list[str] = Field(default_factory=list)
    validator_expertise: list[str] = Field(default_factory=list)
    cultural_affiliation: str | None = None
    time_spent_minutes: int = Field(0, ge=0)

    def to_domain(self) -> CommunityValidation:
        return CommunityValidation(
            validator_id=self.validator_id,
            validator_name=self.validator_name,
            validator_role=self.validator_role,
            validation_score=self.validation_score,
            accuracy=self.accuracy,
            relevance=self.relevance,
            cultural_appropriateness=self.cultural_appropriateness,
            completeness=self.completeness,
            actionability=self.actionability,
            overall_assessment=self.overall_assessment,
            confidence_level=self.confidence_level,
            review_cycle=self.review_cycle,
            comments=self.comments,
            specific_concerns=tuple(self.specific_concerns),
            suggested_improvements=tuple(self.suggested_improvements),
            cultural_considerations=tuple(self.cultural_considerations),
            additional_sources=tuple(self.additional_sources),
            validator_expertise=tuple(self.validator_expertise),
            cultural_affiliation=self.cultural_affiliation,
            time_spent_minutes=self.time_spent_minutes,
        )


class ValidationModel(BaseModel):
    id: str
    validator_id: str
    validator_name: str
    validator_role: ValidatorRole
    validation_score: float
    cultural_appropriateness: float
    overall_assessment: OverallAssessment
    confidence_level: float
    review_cycle: int
    comments: str
    suggested_improvements: list[str]
    validated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, v: CommunityValidation) -> ValidationModel:
        return cls(
            id=v.id,
            validator_id=v.validator_id,
            validator_name=v.validator_name,
            validator_role=v.validator_role,
            validation_score=v.validation_score,
            cultural_appropriateness=v.cultural_appropriateness,
            overall_assessment=v.overall_assessment,
            confidence_level=v.confidence_level,
            review_cycle=v.review_cycle,
            comments=v.comments,
            suggested_improvements=list(v.suggested_improvements),
            validated_at=v.validated_at,
        )


class AddFeedbackRequest(BaseModel):
    feedback_type: FeedbackType
    category: str = Field(..., min_length=1)
    feedback: str = Field(..., min_length=1)
    submitted_by: str = Field(..., min_length=1)
    priority: FeedbackPriority = FeedbackPriority.MEDIUM


class FeedbackModel(BaseModel):
    id: str
    request_id: str
    feedback_type: FeedbackType
    category: str
    feedback: str
    submitted_by: str
    priority: FeedbackPriority
    implementation_status: ImplementationStatus
    implementation_notes: str | None = None
    submitted_at: DateTimeWithZ
    implemented_at: DateTimeWithZ | None = None

    @classmethod
    def from_domain(cls, f: ValidationFeedback) -> FeedbackModel:
        return cls(
            id=f.id,
            request_id=f.request_id,
            feedback_type=f.feedback_type,
            category=f.category,
            feedback=f.feedback,
            submitted_by=f.submitted_by,
            priority=f.priority,
            implementation_status=f.implementation_status,
            implementation_notes=f.implementation_notes,
            submitted_at=f.submitted_at,
            implemented_at=f.implemented_at,
        )


class ContentChangeModel(BaseModel):
    field: str = Field(..., min_length=1, description="Revisable payload field")
    new_value: Any
    change_reason: str = ""
    cultural_justification: str | None = None

    def to_domain(self) -> ContentChange:
        return ContentChange(
            field=self.field,
            new_value=self.new_value,
            change_reason=self.change_reason,
            cultural_justification=self.cultural_justification,
        )


class ReviseContentRequest(BaseModel):
    revised_by: str = Field(..., min_length=1)
    revision_reason: str = ""
    changes: list[ContentChangeModel] = Field(..., min_length=1)
    approved_by: str | None = None


class RejectRequestBody(BaseModel):
    decided_by: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)


class RevisionModel(BaseModel):
    id: str
    revision_number: int
    revised_by: str
    revision_reason: str
    changed_fields: list[str]
    approved_by: str | None = None
    revised_at: DateTimeWithZ


class ValidationRequestResponse(BaseModel):
    """Full view of a validation request."""

    id: str
    content_id: str
    content_type: ContentType
    content: ValidationContentModel
    submitted_by: str
    community_id: str
    community_name: str
    priority: Priority
    status: ValidationStatus
    required_validators: int
    current_validators: int
    review_cycle: int
    consensus_reached: bool
    final_score: float
    confidence: float
    cultural_sensitivity: CulturalSensitivity
    traditional_knowledge_involved: bool
    elder_review_required: bool
    assigned_validator_ids: list[str]
    assignment_shortfall: int
    is_disputed: bool
    rejection_reason: str | None = None
    source_count: int
    validations: list[ValidationModel]
    feedback: list[FeedbackModel]
    revisions: list[RevisionModel]
    deadline: DateTimeWithZ | None = None
    submitted_at: DateTimeWithZ
    updated_at: DateTimeWithZ
    completed_at: DateTimeWithZ | None = None

    @classmethod
    def from_domain(cls, r: ValidationRequest) -> ValidationRequestResponse:
        return cls(
            id=r.id,
            content_id=r.content_id,
            content_type=r.content_type,
            content=ValidationContentModel.from_domain(r.content),
            submitted_by=r.submitted_by,
            community_id=r.community_id,
            community_name=r.community_name,
            priority=r.priority,
            status=r.status,
            required_validators=r.required_validators,
            current_validators=r.current_validators,
            review_cycle=r.review_cycle,
            consensus_reached=r.consensus_reached,
            final_score=r.final_score,
            confidence=r.confidence,
            cultural_sensitivity=r.cultural_sensitivity,
            traditional_knowledge_involved=r.traditional_knowledge_involved,
            elder_review_required=r.elder_review_required,
            assigned_validator_ids=list(r.assigned_validator_ids),
            assignment_shortfall=r.assignment_shortfall,
            is_disputed=r.is_disputed,
            rejection_reason=r.rejection_reason,
            source_count=len(r.source_attribution),
            validations=[ValidationModel.from_domain(v) for v in r.validations],
            feedback=[FeedbackModel.from_domain(f) for f in r.feedback],
            revisions=[
                RevisionModel(
                    id=rev.id,
                    revision_number=rev.revision_number,
                    revised_by=rev.revised_by,
                    revision_reason=rev.revision_reason,
                    changed_fields=list(rev.changed_fields),
                    approved_by=rev.approved_by,
                    revised_at=rev.revised_at,
                )
                for rev in r.revisions
            ],
            deadline=r.deadline,
            submitted_at=r.submitted_at,
            updated_at=r.updated_at,
            completed_at=r.completed_at,
        )


class ValidationRequestListResponse(BaseModel):
    requests: list[ValidationRequestResponse]
    total: int


class ValidationMetricsResponse(BaseModel):
    """Aggregated review statistics for a window."""

    window_start: DateTimeWithZ
    window_end: DateTimeWithZ
    community_id: str | None = None
    total_requests: int
    completed_validations: int
    average_completion_time_hours: float
    consensus_rate: float
    average_confidence: float
    validator_participation: dict[str, int]
    content_type_breakdown: dict[str, int]
    cultural_compliance_score: float
    model_improvement_suggestions: int
    implemented_improvements: int
    total_feedback: int

    @classmethod
    def from_domain(cls, m: ValidationMetrics) -> ValidationMetricsResponse:
        return cls(
            window_start=m.window_start,
            window_end=m.window_end,
            community_id=m.community_id,
            total_requests=m.total_requests,
            completed_validations=m.completed_validations,
            average_completion_time_hours=m.average_completion_time_hours,
            consensus_rate=m.consensus_rate,
            average_confidence=m.average_confidence,
            validator_participation=dict(m.validator_participation),
            content_type_breakdown=dict(m.content_type_breakdown),
            cultural_compliance_score=m.cultural_compliance_score,
            model_improvement_suggestions=m.model_improvement_suggestions,
            implemented_improvements=m.implemented_improvements,
            total_feedback=m.total_feedback,
        )


class ValidationErrorResponse(BaseModel):
    """RFC 7807 problem details."""

    type: str = Field(..., description="URI reference identifying the problem type")
    title: str
    status: int
    detail: str
    instance: str | None = None
