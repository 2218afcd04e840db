"""In-memory validation engine wiring for service tests."""

from __future__ import annotations

from dataclasses import dataclass, field

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
from src.config.validation_config import TEST_VALIDATION_CONFIG, ValidationEngineConfig
from src.domain.models.validator import CommunityValidator
from src.infrastructure.monitoring.validation_metrics_collector import (
    ValidationMetricsCollector,
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


@dataclass
class ValidationEngine:
    """All services wired to one set of stubs."""

    config: ValidationEngineConfig = TEST_VALIDATION_CONFIG
    store: ValidationRequestRepositoryStub = field(
        default_factory=ValidationRequestRepositoryStub
    )
    registry: ValidatorRegistryStub = field(default_factory=ValidatorRegistryStub)
    catalog: WorkflowCatalogStub = field(default_factory=WorkflowCatalogStub)
    feedback_stream: FeedbackStreamStub = field(default_factory=FeedbackStreamStub)
    notifier: ValidatorNotifierStub = field(default_factory=ValidatorNotifierStub)
    classifier: KeywordCulturalSafetyClassifierStub = field(
        default_factory=KeywordCulturalSafetyClassifierStub
    )
    metrics: ValidationMetricsCollector = field(
        default_factory=ValidationMetricsCollector
    )

    def __post_init__(self) -> None:
        self.updater = RequestUpdater(
            self.store, max_retries=self.config.cas_max_retries
        )
        self.assignment = ValidatorAssignmentService(
            registry=self.registry,
            store=self.store,
            updater=self.updater,
            notifier=self.notifier,
            metrics=self.metrics,
        )
        self.requests = ValidationRequestService(
            store=self.store,
            registry=self.registry,
            catalog=self.catalog,
            feedback_stream=self.feedback_stream,
            notifier=self.notifier,
            classifier=self.classifier,
            updater=self.updater,
            assignment=self.assignment,
            config=self.config,
            metrics=self.metrics,
        )
        self.revisions = RevisionService(
            catalog=self.catalog, updater=self.updater, assignment=self.assignment
        )
        self.escalation = EscalationService(
            store=self.store,
            catalog=self.catalog,
            updater=self.updater,
            assignment=self.assignment,
        )
        self.metrics_service = ValidationMetricsService(self.store, self.config)
        self.reference_data = ReferenceDataService(self.registry, self.catalog)

    async def register(self, *validators: CommunityValidator) -> None:
        for validator in validators:
            await self.registry.save(validator)
