"""Validator notifier stub implementation.

Records notifications instead of delivering them. ``fail_with`` makes
every call raise, for exercising the fire-and-forget path.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.application.ports.validator_notifier import (
    NOTIFICATION_ASSIGNMENT,
    NOTIFICATION_COMPLETION,
    ValidatorNotifierProtocol,
)
from src.domain.models.validation_request import ValidationRequest, ValidationStatus
from src.domain.models.validator import CommunityValidator


@dataclass(frozen=True)
class SentNotification:
    """A notification captured by the stub."""

    notification_type: str
    validator_id: str
    request_id: str
    request_status: ValidationStatus


class ValidatorNotifierStub(ValidatorNotifierProtocol):
    """In-memory stub implementation of ValidatorNotifierProtocol.

    Attributes:
        sent: Notifications in delivery order.
        fail_with: Exception raised by every call when set.
    """

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.sent: list[SentNotification] = []
        self.fail_with = fail_with

    async def notify_assignment(
        self,
        validator: CommunityValidator,
        request: ValidationRequest,
    ) -> None:
        self._record(NOTIFICATION_ASSIGNMENT, validator.id, request)

    async def notify_completion(
        self,
        validator_id: str,
        request: ValidationRequest,
    ) -> None:
        self._record(NOTIFICATION_COMPLETION, validator_id, request)

    def _record(
        self, notification_type: str, validator_id: str, request: ValidationRequest
    ) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(
            SentNotification(
                notification_type=notification_type,
                validator_id=validator_id,
                request_id=request.id,
                request_status=request.status,
            )
        )

    def sent_of_type(self, notification_type: str) -> list[SentNotification]:
        return [n for n in self.sent if n.notification_type == notification_type]

    def clear(self) -> None:
        self.sent.clear()
