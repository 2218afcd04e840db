"""Community validation API routes.

FastAPI router for submitting content for review, recording validator
judgments, feedback, revisions, rejection and metrics.

Error responses are RFC 7807 problem details:
- 404: request not found
- 409: stale revision, duplicate validation, closed cycle, invalid
  transition, concurrent modification
- 422: unknown workflow, invalid field path, invalid values
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from src.api.dependencies.validation import (
    get_metrics_collector,
    get_revision_service,
    get_validation_metrics_service,
    get_validation_request_service,
)
from src.api.models.validation import (
    AddFeedbackRequest,
    FeedbackModel,
    RejectRequestBody,
    ReviseContentRequest,
    SubmitForValidationRequest,
    SubmitValidationRequest,
    ValidationErrorResponse,
    ValidationMetricsResponse,
    ValidationRequestListResponse,
    ValidationRequestResponse,
)
from src.application.services.revision_service import RevisionService
from src.application.services.validation_metrics_service import (
    ValidationMetricsService,
)
from src.application.services.validation_request_service import (
    ValidationRequestService,
)
from src.domain.errors import (
    ConcurrentModificationError,
    DuplicateValidationError,
    InvalidFieldPathError,
    InvalidStateTransitionError,
    RequestNotFoundError,
    ReviewCycleClosedError,
    StaleRevisionError,
    UnknownWorkflowError,
)
from src.domain.models.validation_metrics import MetricsTimeframe
from src.domain.models.validation_request import ValidationStatus
from src.infrastructure.monitoring.validation_metrics_collector import (
    METRICS_CONTENT_TYPE,
    ValidationMetricsCollector,
)

router = APIRouter(prefix="/v1/validation", tags=["validation"])

URN_PREFIX = "urn:community-validation"

# (status, urn suffix, title) per domain error.
_PROBLEMS: dict[type[Exception], tuple[int, str, str]] = {
    RequestNotFoundError: (404, "request-not-found", "Validation Request Not Found"),
    StaleRevisionError: (409, "stale-revision", "Stale Review Cycle"),
    DuplicateValidationError: (409, "duplicate-validation", "Duplicate Validation"),
    ReviewCycleClosedError: (409, "review-cycle-closed", "Review Cycle Closed"),
    InvalidStateTransitionError: (409, "invalid-transition", "Invalid State Transition"),
    ConcurrentModificationError: (409, "concurrent-modification", "Concurrent Modification"),
    UnknownWorkflowError: (422, "unknown-workflow", "Unknown Workflow"),
    InvalidFieldPathError: (422, "invalid-field-path", "Invalid Field Path"),
    ValueError: (422, "invalid-value", "Invalid Value"),
}

_ERROR_RESPONSES = {
    404: {"model": ValidationErrorResponse, "description": "Request not found"},
    409: {"model": ValidationErrorResponse, "description": "Lifecycle conflict"},
    422: {"model": ValidationErrorResponse, "description": "Invalid input"},
}


def _problem(exc: Exception, request: Request) -> HTTPException:
    """Translate a domain error into an RFC 7807 HTTPException."""
    for error_type, (status, suffix, title) in _PROBLEMS.items():
        if isinstance(exc, error_type):
            return HTTPException(
                status_code=status,
                detail={
                    "type": f"{URN_PREFIX}:{suffix}",
                    "title": title,
                    "status": status,
                    "detail": str(exc),
                    "instance": str(request.url),
                },
            )
    raise exc


_HANDLED = tuple(_PROBLEMS)


@router.post(
    "/requests",
    response_model=ValidationRequestResponse,
    status_code=201,
    responses={422: _ERROR_RESPONSES[422]},
    summary="Submit content for community validation",
)
async def submit_for_validation(
    body: SubmitForValidationRequest,
    request: Request,
    service: ValidationRequestService = Depends(get_validation_request_service),
) -> ValidationRequestResponse:
    """Create a validation request and assign a panel.

    Raises:
        HTTPException 422: No active workflow for the content type.
    """
    try:
        created = await service.submit_for_validation(body.to_domain())
    except _HANDLED as e:
        raise _problem(e, request) from None
    return ValidationRequestResponse.from_domain(created)


@router.get(
    "/requests/{request_id}",
    response_model=ValidationRequestResponse,
    responses={404: _ERROR_RESPONSES[404]},
)
async def get_request(
    request_id: str,
    request: Request,
    service: ValidationRequestService = Depends(get_validation_request_service),
) -> ValidationRequestResponse:
    found = await service.get_request(request_id)
    if found is None:
        raise _problem(RequestNotFoundError(request_id), request)
    return ValidationRequestResponse.from_domain(found)


@router.get("/requests", response_model=ValidationRequestListResponse)
async def list_requests(
    status: ValidationStatus = Query(...),
    community_id: str | None = Query(None),
    service: ValidationRequestService = Depends(get_validation_request_service),
) -> ValidationRequestListResponse:
    requests = await service.list_requests(status, community_id)
    return ValidationRequestListResponse(
        requests=[ValidationRequestResponse.from_domain(r) for r in requests],
        total=len(requests),
    )


@router.post(
    "/requests/{request_id}/validations",
    response_model=ValidationRequestResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Record a validator's judgment",
)
async def submit_validation(
    request_id: str,
    body: SubmitValidationRequest,
    request: Request,
    service: ValidationRequestService = Depends(get_validation_request_service),
) -> ValidationRequestResponse:
    """Append a validation; finalizes the cycle when the quorum is met.

    Raises:
        HTTPException 404: Request not found
        HTTPException 409: Stale cycle, duplicate, or cycle already closed
        HTTPException 422: Scores out of range
    """
    try:
        updated = await service.submit_validation(request_id, body.to_domain())
    except _HANDLED as e:
        raise _problem(e, request) from None
    return ValidationRequestResponse.from_domain(updated)


@router.post(
    "/requests/{request_id}/feedback",
    response_model=FeedbackModel,
    status_code=201,
    responses=_ERROR_RESPONSES,
)
async def add_feedback(
    request_id: str,
    body: AddFeedbackRequest,
    request: Request,
    service: ValidationRequestService = Depends(get_validation_request_service),
) -> FeedbackModel:
    try:
        item = await service.add_feedback(
            request_id=request_id,
            feedback_type=body.feedback_type,
            category=body.category,
            feedback=body.feedback,
            submitted_by=body.submitted_by,
            priority=body.priority,
        )
    except _HANDLED as e:
        raise _problem(e, request) from None
    return FeedbackModel.from_domain(item)


@router.post(
    "/requests/{request_id}/revisions",
    response_model=ValidationRequestResponse,
    responses=_ERROR_RESPONSES,
    summary="Revise content and start a new review cycle",
)
async def revise_content(
    request_id: str,
    body: ReviseContentRequest,
    request: Request,
    service: RevisionService = Depends(get_revision_service),
) -> ValidationRequestResponse:
    """Apply a revision.

    Raises:
        HTTPException 404: Request not found
        HTTPException 409: Request is validated or rejected
        HTTPException 422: Non-revisable field or wrong value shape
    """
    try:
        revised = await service.revise_content(
            request_id=request_id,
            revised_by=body.revised_by,
            revision_reason=body.revision_reason,
            changes=[c.to_domain() for c in body.changes],
            approved_by=body.approved_by,
        )
    except _HANDLED as e:
        raise _problem(e, request) from None
    return ValidationRequestResponse.from_domain(revised)


@router.post(
    "/requests/{request_id}/reject",
    response_model=ValidationRequestResponse,
    responses=_ERROR_RESPONSES,
)
async def reject_request(
    request_id: str,
    body: RejectRequestBody,
    request: Request,
    service: ValidationRequestService = Depends(get_validation_request_service),
) -> ValidationRequestResponse:
    try:
        rejected = await service.reject_request(
            request_id, decided_by=body.decided_by, reason=body.reason
        )
    except _HANDLED as e:
        raise _problem(e, request) from None
    return ValidationRequestResponse.from_domain(rejected)


@router.get("/metrics", response_model=ValidationMetricsResponse)
async def get_metrics(
    timeframe: MetricsTimeframe | None = Query(None),
    community_id: str | None = Query(None),
    service: ValidationMetricsService = Depends(get_validation_metrics_service),
) -> ValidationMetricsResponse:
    metrics = await service.get_metrics(timeframe=timeframe, community_id=community_id)
    return ValidationMetricsResponse.from_domain(metrics)


@router.get("/metrics/prometheus", include_in_schema=False)
async def prometheus_metrics(
    collector: ValidationMetricsCollector = Depends(get_metrics_collector),
) -> Response:
    """Operational counters in Prometheus text format."""
    return Response(content=collector.generate(), media_type=METRICS_CONTENT_TYPE)
