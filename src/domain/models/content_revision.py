"""Content revision domain model.

Revisions are ordered and append-only. Each carries its revision number,
assigned by the engine when the revision is accepted and never changed
afterwards, and the field-level changes it applied with the value each
field held before the change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from uuid6 import uuid7


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ContentChange:
    """A single field-level change.

    Attributes:
        field: Revisable payload field.
        new_value: Value after the change.
        change_reason: Why the field was changed.
        old_value: Value before the change (captured by the engine).
        cultural_justification: Optional cultural justification.
    """

    field: str
    new_value: Any = field(hash=False)
    change_reason: str = ""
    old_value: Any = field(default=None, hash=False)
    cultural_justification: str | None = None


@dataclass(frozen=True, eq=True)
class ContentRevision:
    """An accepted change-set applied to a request's payload.

    Attributes:
        revision_number: Strictly increasing per request, starting at 1.
        revised_by: Author of the revision.
        revision_reason: Why the content was revised.
        changes: Field-level changes, in application order.
        approved_by: Optional human approver.
        approved_at: When the approval was recorded.
        revised_at: When the revision was accepted.
        id: Generated id (UUIDv7).
    """

    revision_number: int
    revised_by: str
    revision_reason: str
    changes: tuple[ContentChange, ...]
    approved_by: str | None = None
    approved_at: datetime | None = None
    revised_at: datetime = field(default_factory=_utc_now)
    id: str = field(default_factory=lambda: str(uuid7()))

    def __post_init__(self) -> None:
        """Validate revision invariants."""
        if self.revision_number < 1:
            raise ValueError(
                f"revision_number must be >= 1, got {self.revision_number}"
            )
        if not self.changes:
            raise ValueError("A revision must contain at least one change")

    @property
    def changed_fields(self) -> tuple[str, ...]:
        return tuple(c.field for c in self.changes)
