"""Workflow catalog port.

One review workflow per content type.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.validation_workflow import ContentType, ValidationWorkflow


class WorkflowCatalogProtocol(Protocol):
    """Protocol for workflow configuration storage.

    Methods:
        get: The workflow for a content type
        list_active: All active workflows
        save: Insert or replace the workflow for its content type
    """

    async def get(self, content_type: ContentType) -> ValidationWorkflow | None:
        """Return the workflow for a content type, active or not."""
        ...

    async def list_active(self) -> list[ValidationWorkflow]:
        ...

    async def save(self, workflow: ValidationWorkflow) -> None:
        """Insert or replace the workflow for ``workflow.content_type``."""
        ...
