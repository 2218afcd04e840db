"""Application services - Use case orchestration.

Available services:
- ValidationRequestService: Submission, validation, feedback, rejection
- ValidatorAssignmentService: Panel selection and assignment
- ConsensusCalculatorService: Dispersion-based consensus and weighted score
- FeedbackExtractionService: Suggested improvements to feedback records
- RevisionService: Content revision and new review cycles
- EscalationService: Overdue detection and escalation rules
- ValidationMetricsService: Windowed review statistics
- ReferenceDataService: Validator and workflow management
- RequestUpdater: Serialized, version-checked request writes
"""

from src.application.services.consensus_calculator_service import (
    ConsensusCalculatorService,
)
from src.application.services.escalation_service import EscalationService
from src.application.services.feedback_extraction_service import (
    FeedbackExtractionService,
)
from src.application.services.reference_data_service import ReferenceDataService
from src.application.services.request_updater import (
    RequestLockRegistry,
    RequestUpdater,
)
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

__all__: list[str] = [
    "ConsensusCalculatorService",
    "EscalationService",
    "FeedbackExtractionService",
    "ReferenceDataService",
    "RequestLockRegistry",
    "RequestUpdater",
    "RevisionService",
    "ValidationMetricsService",
    "ValidationRequestService",
    "ValidatorAssignmentService",
]
