"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- ValidationRequestRepositoryProtocol: Request store with version-checked updates
- ValidatorRegistryProtocol: Validator lookup and registration
- WorkflowCatalogProtocol: Per-content-type workflow configuration
- FeedbackStreamProtocol: Durable feedback queue
- ValidatorNotifierProtocol: Assignment and completion notifications
- CulturalSafetyClassifierProtocol: Sensitivity labelling
"""

from src.application.ports.cultural_safety_classifier import (
    CulturalSafetyClassifierProtocol,
)
from src.application.ports.feedback_stream import FeedbackStreamProtocol
from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.application.ports.validator_notifier import ValidatorNotifierProtocol
from src.application.ports.validator_registry import ValidatorRegistryProtocol
from src.application.ports.workflow_catalog import WorkflowCatalogProtocol

__all__: list[str] = [
    "CulturalSafetyClassifierProtocol",
    "FeedbackStreamProtocol",
    "ValidationRequestRepositoryProtocol",
    "ValidatorNotifierProtocol",
    "ValidatorRegistryProtocol",
    "WorkflowCatalogProtocol",
]
