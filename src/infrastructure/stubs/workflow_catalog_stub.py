"""Workflow catalog stub implementation.

In-memory workflow catalog, seeded with the default workflows unless
explicit workflows are given.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.config.default_workflows import default_workflows
from src.domain.models.validation_workflow import ContentType, ValidationWorkflow


class WorkflowCatalogStub(WorkflowCatalogProtocol):
    """In-memory stub implementation of WorkflowCatalogProtocol.

    Attributes:
        _workflows: Content type -> workflow.
        get_calls: Number of get calls (for cache tests).
    """

    def __init__(self, workflows: Iterable[ValidationWorkflow] | None = None) -> None:
        seed = default_workflows() if workflows is None else workflows
        self._workflows: dict[ContentType, ValidationWorkflow] = {
            w.content_type: w for w in seed
        }
        self.get_calls = 0

    async def get(self, content_type: ContentType) -> ValidationWorkflow | None:
        self.get_calls += 1
        return self._workflows.get(content_type)

    async def list_active(self) -> list[ValidationWorkflow]:
        return [w for w in self._workflows.values() if w.is_active]

    async def save(self, workflow: ValidationWorkflow) -> None:
        self._workflows[workflow.content_type] = workflow

    def clear(self) -> None:
        self._workflows.clear()
        self.get_calls = 0
