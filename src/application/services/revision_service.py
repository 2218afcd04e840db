"""Content revision service.

Applies an accepted change-set to a request's payload and starts a new
review cycle. A revision is allowed from any non-terminal status; prior
validations are discarded and a fresh panel is staffed for the new
cycle. Validations prepared against the old cycle are rejected as stale
from then on.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.application.services.base import LoggingMixin
from src.application.services.request_updater import RequestUpdater
from src.application.services.validator_assignment_service import (
    ValidatorAssignmentService,
)
from src.domain.errors.validation import UnknownWorkflowError
from src.domain.models.content_revision import ContentChange, ContentRevision
from src.domain.models.validation_content import normalize_field
from src.domain.models.validation_request import ValidationRequest, _utc_now


class RevisionService(LoggingMixin):
    """Revises request content and re-staffs the new review cycle."""

    def __init__(
        self,
        catalog: WorkflowCatalogProtocol,
        updater: RequestUpdater,
        assignment: ValidatorAssignmentService,
    ) -> None:
        self._catalog = catalog
        self._updater = updater
        self._assignment = assignment
        self._init_logger()

    async def revise_content(
        self,
        request_id: str,
        revised_by: str,
        revision_reason: str,
        changes: Sequence[ContentChange],
        approved_by: str | None = None,
    ) -> ValidationRequest:
        """Apply a revision and reset the request to a new review cycle.

        Changes are applied in order; each change's ``old_value`` is
        captured from the payload as it stood just before that change.

        Args:
            request_id: The request to revise.
            revised_by: Author of the revision.
            revision_reason: Why the content changed.
            changes: Field-level changes, at least one.
            approved_by: Optional approver, stamped with the current time.

        Returns:
            The stored request after the new panel was staffed.

        Raises:
            ValueError: If ``changes`` is empty or a value has the wrong shape.
            InvalidFieldPathError: If a change names a non-revisable field.
            RequestNotFoundError: If the request doesn't exist.
            InvalidStateTransitionError: If the request is VALIDATED or REJECTED.
        """
        if not changes:
            raise ValueError("A revision must contain at least one change")
        # Reject bad field paths before touching the request.
        for change in changes:
            normalize_field(change.field)

        log = self._log_operation(
            "revise_content", request_id=request_id, revised_by=revised_by
        )

        def apply(current: ValidationRequest) -> ValidationRequest:
            content = current.content
            recorded: list[ContentChange] = []
            for change in changes:
                name = normalize_field(change.field)
                old_value = content.value_of(name)
                content = content.with_changes({name: change.new_value})
                recorded.append(
                    ContentChange(
                        field=name,
                        new_value=content.value_of(name),
                        change_reason=change.change_reason,
                        old_value=old_value,
                        cultural_justification=change.cultural_justification,
                    )
                )
            revision = ContentRevision(
                revision_number=len(current.revisions) + 1,
                revised_by=revised_by,
                revision_reason=revision_reason,
                changes=tuple(recorded),
                approved_by=approved_by,
                approved_at=_utc_now() if approved_by else None,
            )
            return current.revised(revision, content)

        before, after = await self._updater.mutate(request_id, apply)
        revision = after.revisions[-1]
        log.info(
            "content_revised",
            revision_number=revision.revision_number,
            changed_fields=list(revision.changed_fields),
            previous_status=before.status.value,
            review_cycle=after.review_cycle,
        )

        workflow = await self._catalog.get(after.content_type)
        if workflow is None:
            raise UnknownWorkflowError(after.content_type.value)
        return await self._assignment.staff(after, workflow)
