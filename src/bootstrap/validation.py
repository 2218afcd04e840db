"""Bootstrap wiring for the validation engine.

Process-wide singletons for the engine's ports and services. The ports
are backed by in-memory stubs; the validator registry and workflow
catalog are wrapped in read-through caches. One RequestUpdater (and so
one lock registry) is shared by every service that writes requests.
"""

from __future__ import annotations

from structlog import get_logger

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
from src.application.services.escalation_service import EscalationService
from src.application.services.reference_data_service import ReferenceDataService
from src.application.services.request_updater import RequestUpdater
from src.application.services.revision_service import RevisionService
from src.application.services.validation_metrics_service import (
    ValidationMetricsService,
)
from src.application.services.validation_request_service import (
    ValidationRequestService,
)
from src.application.services.validator_assignment_service import (
    ValidatorAssignmentService,
)
from src.config.validation_config import ValidationEngineConfig
from src.infrastructure.cache.reference_data_cache import (
    CachingValidatorRegistry,
    CachingWorkflowCatalog,
)
from src.infrastructure.monitoring.validation_metrics_collector import (
    ValidationMetricsCollector,
    get_validation_metrics_collector,
    reset_validation_metrics_collector,
)
from src.infrastructure.stubs.feedback_stream_stub import FeedbackStreamStub
from src.infrastructure.stubs.keyword_cultural_safety_classifier_stub import (
    KeywordCulturalSafetyClassifierStub,
)
from src.infrastructure.stubs.validation_request_repository_stub import (
    ValidationRequestRepositoryStub,
)
from src.infrastructure.stubs.validator_notifier_stub import ValidatorNotifierStub
from src.infrastructure.stubs.validator_registry_stub import ValidatorRegistryStub
from src.infrastructure.stubs.workflow_catalog_stub import WorkflowCatalogStub

logger = get_logger()

_config: ValidationEngineConfig | None = None
_request_repository: ValidationRequestRepositoryProtocol | None = None
_validator_registry: ValidatorRegistryProtocol | None = None
_workflow_catalog: WorkflowCatalogProtocol | None = None
_feedback_stream: FeedbackStreamProtocol | None = None
_notifier: ValidatorNotifierProtocol | None = None
_classifier: CulturalSafetyClassifierProtocol | None = None
_metrics_collector: ValidationMetricsCollector | None = None
_request_updater: RequestUpdater | None = None
_assignment_service: ValidatorAssignmentService | None = None
_request_service: ValidationRequestService | None = None
_revision_service: RevisionService | None = None
_metrics_service: ValidationMetricsService | None = None
_escalation_service: EscalationService | None = None
_reference_data_service: ReferenceDataService | None = None


def get_validation_config() -> ValidationEngineConfig:
    """Get engine configuration, loaded from the environment once."""
    global _config
    if _config is None:
        _config = ValidationEngineConfig.from_environment()
    return _config


def get_request_repository() -> ValidationRequestRepositoryProtocol:
    """Get validation request store instance."""
    global _request_repository
    if _request_repository is None:
        logger.warning(
            "validation_repository_initialized",
            repository_type="InMemoryStub",
            message="Using in-memory request store (data will not persist)",
        )
        _request_repository = ValidationRequestRepositoryStub()
    return _request_repository


def get_validator_registry() -> ValidatorRegistryProtocol:
    """Get the cached validator registry."""
    global _validator_registry
    if _validator_registry is None:
        _validator_registry = CachingValidatorRegistry(
            ValidatorRegistryStub(),
            ttl_seconds=get_validation_config().cache_ttl_seconds,
        )
    return _validator_registry


def get_workflow_catalog() -> WorkflowCatalogProtocol:
    """Get the cached workflow catalog, seeded with the default workflows."""
    global _workflow_catalog
    if _workflow_catalog is None:
        _workflow_catalog = CachingWorkflowCatalog(
            WorkflowCatalogStub(),
            ttl_seconds=get_validation_config().cache_ttl_seconds,
        )
    return _workflow_catalog


def get_feedback_stream() -> FeedbackStreamProtocol:
    global _feedback_stream
    if _feedback_stream is None:
        _feedback_stream = FeedbackStreamStub()
    return _feedback_stream


def get_validator_notifier() -> ValidatorNotifierProtocol:
    global _notifier
    if _notifier is None:
        _notifier = ValidatorNotifierStub()
    return _notifier


def get_cultural_safety_classifier() -> CulturalSafetyClassifierProtocol:
    global _classifier
    if _classifier is None:
        _classifier = KeywordCulturalSafetyClassifierStub()
    return _classifier


def get_metrics_collector() -> ValidationMetricsCollector:
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = get_validation_metrics_collector()
    return _metrics_collector


def get_request_updater() -> RequestUpdater:
    """Get the shared request updater (one lock registry per process)."""
    global _request_updater
    if _request_updater is None:
        _request_updater = RequestUpdater(
            get_request_repository(),
            max_retries=get_validation_config().cas_max_retries,
        )
    return _request_updater


def get_validator_assignment_service() -> ValidatorAssignmentService:
    global _assignment_service
    if _assignment_service is None:
        _assignment_service = ValidatorAssignmentService(
            registry=get_validator_registry(),
            store=get_request_repository(),
            updater=get_request_updater(),
            notifier=get_validator_notifier(),
            metrics=get_metrics_collector(),
        )
    return _assignment_service


def get_validation_request_service() -> ValidationRequestService:
    """Get the request lifecycle service."""
    global _request_service
    if _request_service is None:
        _request_service = ValidationRequestService(
            store=get_request_repository(),
            registry=get_validator_registry(),
            catalog=get_workflow_catalog(),
            feedback_stream=get_feedback_stream(),
            notifier=get_validator_notifier(),
            classifier=get_cultural_safety_classifier(),
            updater=get_request_updater(),
            assignment=get_validator_assignment_service(),
            config=get_validation_config(),
            metrics=get_metrics_collector(),
        )
    return _request_service


def get_revision_service() -> RevisionService:
    global _revision_service
    if _revision_service is None:
        _revision_service = RevisionService(
            catalog=get_workflow_catalog(),
            updater=get_request_updater(),
            assignment=get_validator_assignment_service(),
        )
    return _revision_service


def get_validation_metrics_service() -> ValidationMetricsService:
    global _metrics_service
    if _metrics_service is None:
        _metrics_service = ValidationMetricsService(
            store=get_request_repository(),
            config=get_validation_config(),
        )
    return _metrics_service


def get_escalation_service() -> EscalationService:
    global _escalation_service
    if _escalation_service is None:
        _escalation_service = EscalationService(
            store=get_request_repository(),
            catalog=get_workflow_catalog(),
            updater=get_request_updater(),
            assignment=get_validator_assignment_service(),
        )
    return _escalation_service


def get_reference_data_service() -> ReferenceDataService:
    global _reference_data_service
    if _reference_data_service is None:
        _reference_data_service = ReferenceDataService(
            registry=get_validator_registry(),
            catalog=get_workflow_catalog(),
        )
    return _reference_data_service


def _reset_services() -> None:
    global _request_updater
    global _assignment_service
    global _request_service
    global _revision_service
    global _metrics_service
    global _escalation_service
    global _reference_data_service

    _request_updater = None
    _assignment_service = None
    _request_service = None
    _revision_service = None
    _metrics_service = None
    _escalation_service = None
    _reference_data_service = None


def reset_validation_dependencies() -> None:
    """Reset all validation singletons.

    Call this in test fixtures to ensure clean state between tests.
    """
    global _config
    global _request_repository
    global _validator_registry
    global _workflow_catalog
    global _feedback_stream
    global _notifier
    global _classifier
    global _metrics_collector

    _config = None
    _request_repository = None
    _validator_registry = None
    _workflow_catalog = None
    _feedback_stream = None
    _notifier = None
    _classifier = None
    _metrics_collector = None
    reset_validation_metrics_collector()
    _reset_services()


def set_validation_config(config: ValidationEngineConfig) -> None:
    """Set custom configuration for testing."""
    global _config
    _config = config
    _reset_services()


def set_request_repository(repo: ValidationRequestRepositoryProtocol) -> None:
    """Set custom request store for testing."""
    global _request_repository
    _request_repository = repo
    _reset_services()


def set_validator_registry(registry: ValidatorRegistryProtocol) -> None:
    """Set custom validator registry for testing."""
    global _validator_registry
    _validator_registry = registry
    _reset_services()


def set_workflow_catalog(catalog: WorkflowCatalogProtocol) -> None:
    """Set custom workflow catalog for testing."""
    global _workflow_catalog
    _workflow_catalog = catalog
    _reset_services()


def set_validator_notifier(notifier: ValidatorNotifierProtocol) -> None:
    """Set custom notifier for testing."""
    global _notifier
    _notifier = notifier
    _reset_services()


def set_metrics_collector(collector: ValidationMetricsCollector) -> None:
    """Set custom metrics collector for testing."""
    global _metrics_collector
    _metrics_collector = collector
    _reset_services()
