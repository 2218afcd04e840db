"""Validator notifier port.

Delivery mechanics (email, SMS, in-app) live behind this interface.
The engine calls it outside the request lock and treats every call as
fire-and-forget: a raised exception is logged and counted, never
propagated into assignment or finalization.
"""

from abc import abstractmethod
from typing import Protocol

from src.domain.models.validation_request import ValidationRequest
from src.domain.models.validator import CommunityValidator

# Notification kinds passed to notify_completion.
NOTIFICATION_ASSIGNMENT = "assignment"
NOTIFICATION_COMPLETION = "completion"


class ValidatorNotifierProtocol(Protocol):
    """Protocol for validator notification delivery."""

    @abstractmethod
    async def notify_assignment(
        self,
        validator: CommunityValidator,
        request: ValidationRequest,
    ) -> None:
        """Tell a validator they were placed on a request's panel.

        Args:
            validator: The assigned validator.
            request: The request, as stored after assignment.
        """
        ...

    @abstractmethod
    async def notify_completion(
        self,
        validator_id: str,
        request: ValidationRequest,
    ) -> None:
        """Tell a panel member that the review cycle was finalized.

        Args:
            validator_id: The panel member.
            request: The finalized request.
        """
        ...
