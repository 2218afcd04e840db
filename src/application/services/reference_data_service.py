"""Reference data management.

Registers and deactivates validators and saves workflow configurations.
When the registry and catalog are the caching wrappers, their writes
invalidate the cached reads.
"""

from __future__ import annotations

from src.application.ports.validator_registry import ValidatorRegistryProtocol
from src.application.ports.workflow_catalog import WorkflowCatalogProtocol
from src.application.services.base import LoggingMixin
from src.domain.errors.validation import ValidatorNotFoundError
from src.domain.models.validation_workflow import ValidationWorkflow
from src.domain.models.validator import CommunityValidator


class ReferenceDataService(LoggingMixin):
    """Validator registry and workflow catalog writes."""

    def __init__(
        self,
        registry: ValidatorRegistryProtocol,
        catalog: WorkflowCatalogProtocol,
    ) -> None:
        self._registry = registry
        self._catalog = catalog
        self._init_logger()

    async def register_validator(self, validator: CommunityValidator) -> CommunityValidator:
        await self._registry.save(validator)
        self._log_operation("register_validator", validator_id=validator.id).info(
            "validator_registered",
            role=validator.role.value,
            community_affiliation=validator.community_affiliation,
        )
        return validator

    async def deactivate_validator(self, validator_id: str) -> CommunityValidator:
        """Mark a validator inactive so it is no longer selected.

        Existing panel seats are kept.

        Raises:
            ValidatorNotFoundError: If the validator is unknown.
        """
        validator = await self._registry.get(validator_id)
        if validator is None:
            raise ValidatorNotFoundError(validator_id)
        deactivated = validator.deactivated()
        await self._registry.save(deactivated)
        self._log_operation("deactivate_validator", validator_id=validator_id).info(
            "validator_deactivated"
        )
        return deactivated

    async def save_workflow(self, workflow: ValidationWorkflow) -> ValidationWorkflow:
        await self._catalog.save(workflow)
        self._log_operation("save_workflow", workflow_id=workflow.id).info(
            "workflow_saved",
            content_type=workflow.content_type.value,
            is_active=workflow.is_active,
        )
        return workflow
