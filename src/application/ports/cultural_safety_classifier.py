"""Cultural safety classifier port.

Consulted once at submission to pre-populate a request's cultural
sensitivity when the submitter did not supply one. Never re-invoked.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.validation_content import ValidationContent
from src.domain.models.validation_request import CulturalSensitivity


class CulturalSafetyClassifierProtocol(Protocol):
    """Protocol for initial cultural sensitivity labelling."""

    async def classify(self, content: ValidationContent) -> CulturalSensitivity:
        """Return the sensitivity label for a payload."""
        ...
