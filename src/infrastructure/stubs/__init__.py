"""Infrastructure stubs for development and testing.

Available stubs:
- ValidationRequestRepositoryStub: In-memory request store with version CAS
- ValidatorRegistryStub: In-memory validator registry
- WorkflowCatalogStub: Workflow catalog seeded with the default workflows
- FeedbackStreamStub: In-memory feedback queue
- ValidatorNotifierStub: Records notifications; can be made to fail
- KeywordCulturalSafetyClassifierStub: Keyword-based sensitivity labelling

WARNING: These stubs are NOT for production use.
"""

from src.infrastructure.stubs.feedback_stream_stub import FeedbackStreamStub
from src.infrastructure.stubs.keyword_cultural_safety_classifier_stub import (
    KeywordCulturalSafetyClassifierStub,
)
from src.infrastructure.stubs.validation_request_repository_stub import (
    ValidationRequestRepositoryStub,
)
from src.infrastructure.stubs.validator_notifier_stub import (
    SentNotification,
    ValidatorNotifierStub,
)
from src.infrastructure.stubs.validator_registry_stub import ValidatorRegistryStub
from src.infrastructure.stubs.workflow_catalog_stub import WorkflowCatalogStub

__all__: list[str] = [
    "FeedbackStreamStub",
    "KeywordCulturalSafetyClassifierStub",
    "SentNotification",
    "ValidationRequestRepositoryStub",
    "ValidatorNotifierStub",
    "ValidatorRegistryStub",
    "WorkflowCatalogStub",
]
