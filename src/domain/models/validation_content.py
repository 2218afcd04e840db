"""Validation content payload and source attribution models.

The engine treats the AI-generated payload as opaque except for
revisions: a content revision may only touch the fields in
``REVISABLE_FIELDS``. Everything else, in particular ``supporting_data``,
is fixed at submission.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from uuid6 import uuid7

from src.domain.errors.validation import InvalidFieldPathError

# Payload fields holding a single string.
STRING_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "description",
        "ai_generated_insight",
        "methodology",
        "cultural_context",
        "potential_impact",
    }
)

# Payload fields holding a list of strings.
LIST_FIELDS: frozenset[str] = frozenset(
    {"assumptions", "limitations", "recommended_actions"}
)

REVISABLE_FIELDS: frozenset[str] = STRING_FIELDS | LIST_FIELDS

# Wire-format spellings accepted for revisable fields.
FIELD_ALIASES: Mapping[str, str] = {
    "aiGeneratedInsight": "ai_generated_insight",
    "culturalContext": "cultural_context",
    "potentialImpact": "potential_impact",
    "recommendedActions": "recommended_actions",
}


def normalize_field(name: str) -> str:
    """Resolve a revision field name to its payload attribute.

    Args:
        name: Field name as supplied by the reviser.

    Returns:
        The canonical payload attribute name.

    Raises:
        InvalidFieldPathError: If the field is not revisable.
    """
    canonical = FIELD_ALIASES.get(name, name)
    if canonical not in REVISABLE_FIELDS:
        raise InvalidFieldPathError(name, REVISABLE_FIELDS)
    return canonical


@dataclass(frozen=True, eq=True)
class ValidationContent:
    """AI-generated content under review.

    Attributes:
        title: Short title.
        description: Summary of the content.
        ai_generated_insight: The claim produced by the AI system.
        methodology: How the claim was produced.
        supporting_data: References to supporting data (not revisable).
        assumptions: Stated assumptions.
        limitations: Stated limitations.
        cultural_context: Optional cultural context.
        potential_impact: Expected impact on the community.
        recommended_actions: Optional recommended actions.
    """

    title: str
    description: str
    ai_generated_insight: str
    methodology: str = ""
    supporting_data: tuple[Any, ...] = field(default=(), hash=False)
    assumptions: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()
    cultural_context: str | None = None
    potential_impact: str = ""
    recommended_actions: tuple[str, ...] = ()

    def value_of(self, field_name: str) -> Any:
        """Return the current value of a revisable field."""
        return getattr(self, normalize_field(field_name))

    def with_changes(self, changes: Mapping[str, Any]) -> ValidationContent:
        """Create a new payload with revisable fields replaced.

        All changes are validated before any is applied.

        Args:
            changes: Field name -> new value.

        Returns:
            New ValidationContent.

        Raises:
            InvalidFieldPathError: If any field is not revisable.
            ValueError: If a value has the wrong shape for its field.
        """
        updates: dict[str, Any] = {}
        for name, value in changes.items():
            canonical = normalize_field(name)
            if canonical in LIST_FIELDS:
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    raise ValueError(f"Field '{name}' requires a list of strings")
                updates[canonical] = tuple(str(v) for v in value)
            else:
                if value is not None and not isinstance(value, str):
                    raise ValueError(f"Field '{name}' requires a string")
                if value is None and canonical != "cultural_context":
                    raise ValueError(f"Field '{name}' cannot be cleared")
                updates[canonical] = value
        return replace(self, **updates)


class SourceType(Enum):
    DOCUMENT = "document"
    INTERVIEW = "interview"
    SURVEY = "survey"
    OBSERVATION = "observation"
    DATABASE = "database"
    EXPERT_KNOWLEDGE = "expert_knowledge"


class AccessLevel(Enum):
    PUBLIC = "public"
    COMMUNITY = "community"
    RESTRICTED = "restricted"
    CONFIDENTIAL = "confidential"


class VerificationStatus(Enum):
    VERIFIED = "verified"
    PENDING = "pending"
    DISPUTED = "disputed"
    UNVERIFIED = "unverified"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class SourceAttribution:
    """A source the content draws on.

    Attributes:
        source_name: Name of the source.
        source_type: Kind of source.
        source_description: Free-text description.
        reliability: Reliability rating (1-5).
        relevance: Relevance rating (1-5).
        access_level: Who may see the source.
        verification_status: Whether the source was checked.
        weight: Contribution to the insight (0-1).
        collected_by: Who collected it.
        cultural_context: Optional cultural context.
        date_collected: When it was collected.
        id: Generated id (UUIDv7).
    """

    source_name: str
    source_type: SourceType = SourceType.DOCUMENT
    source_description: str = ""
    reliability: int = 3
    relevance: int = 3
    access_level: AccessLevel = AccessLevel.COMMUNITY
    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED
    weight: float = 0.0
    collected_by: str = ""
    cultural_context: str | None = None
    date_collected: datetime = field(default_factory=_utc_now)
    id: str = field(default_factory=lambda: str(uuid7()))

    def __post_init__(self) -> None:
        """Validate ratings."""
        for name in ("reliability", "relevance"):
            value = getattr(self, name)
            if not 1 <= value <= 5:
                raise ValueError(f"{name} must be between 1 and 5, got {value}")
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"weight must be between 0 and 1, got {self.weight}")


def _enum_or_default(enum_cls: type[Enum], raw: Any, default: Enum) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def _rating_or_default(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool) and 1 <= raw <= 5:
        return raw
    return 3


def derive_source_attribution(
    content: ValidationContent,
    collected_by: str = "",
) -> list[SourceAttribution]:
    """Best-effort attribution from the payload's supporting data.

    Supporting data entries that are mappings naming a source
    (``source_name`` or ``name``) become attributions; any other entry is
    skipped. Unknown enum values and out-of-range ratings fall back to
    defaults rather than failing the submission.

    Args:
        content: The submitted payload.
        collected_by: Default collector (the submitter).

    Returns:
        Attributions, possibly empty. Weights are shared equally.
    """
    named = [
        entry
        for entry in content.supporting_data
        if isinstance(entry, Mapping) and (entry.get("source_name") or entry.get("name"))
    ]
    if not named:
        return []

    weight = round(1.0 / len(named), 4)
    attributions: list[SourceAttribution] = []
    for entry in named:
        attributions.append(
            SourceAttribution(
                source_name=str(entry.get("source_name") or entry.get("name")),
                source_type=_enum_or_default(
                    SourceType, entry.get("source_type"), SourceType.DOCUMENT
                ),
                source_description=str(entry.get("description", "")),
                reliability=_rating_or_default(entry.get("reliability")),
                relevance=_rating_or_default(entry.get("relevance")),
                access_level=_enum_or_default(
                    AccessLevel, entry.get("access_level"), AccessLevel.COMMUNITY
                ),
                verification_status=_enum_or_default(
                    VerificationStatus,
                    entry.get("verification_status"),
                    VerificationStatus.UNVERIFIED,
                ),
                weight=weight,
                collected_by=str(entry.get("collected_by", collected_by)),
                cultural_context=content.cultural_context,
            )
        )
    return attributions
