"""Keyword-based cultural safety classifier stub.

Labels a payload by the most sensitive keyword family found in its text
fields. Good enough for development and tests; production deployments
plug a real classifier in behind the same port.
"""

from __future__ import annotations

import re

from src.application.ports.cultural_safety_classifier import (
    CulturalSafetyClassifierProtocol,
)
from src.domain.models.validation_content import ValidationContent
from src.domain.models.validation_request import CulturalSensitivity

# Checked most sensitive first; the first family with a hit wins.
KEYWORD_FAMILIES: tuple[tuple[CulturalSensitivity, tuple[str, ...]], ...] = (
    (
        CulturalSensitivity.CRITICAL,
        (
            "sacred",
            "ceremony",
            "ritual",
            "traditional law",
            "secret",
            "men only",
            "women only",
            "initiation",
        ),
    ),
    (
        CulturalSensitivity.HIGH,
        (
            "cultural protocol",
            "traditional knowledge",
            "elder",
            "ancestor",
            "spiritual",
            "cultural practice",
        ),
    ),
    (
        CulturalSensitivity.MEDIUM,
        ("community story", "local knowledge", "cultural context", "traditional", "cultural"),
    ),
    (
        CulturalSensitivity.LOW,
        ("sorry business", "deceased", "funeral", "mourning", "grief", "loss"),
    ),
)


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """Whole-word match for any keyword, allowing a plural s."""
    alternatives = "|".join(
        r"\s+".join(re.escape(word) for word in keyword.split()) for keyword in keywords
    )
    return re.compile(rf"\b(?:{alternatives})s?\b")


KEYWORD_PATTERNS: tuple[tuple[CulturalSensitivity, re.Pattern[str]], ...] = tuple(
    (level, _keyword_pattern(keywords)) for level, keywords in KEYWORD_FAMILIES
)


class KeywordCulturalSafetyClassifierStub(CulturalSafetyClassifierProtocol):
    """Keyword stub implementation of CulturalSafetyClassifierProtocol.

    Attributes:
        calls: Number of classify calls.
    """

    def __init__(self) -> None:
        self.calls = 0

    async def classify(self, content: ValidationContent) -> CulturalSensitivity:
        self.calls += 1
        text = " ".join(
            [
                content.title,
                content.description,
                content.ai_generated_insight,
                content.methodology,
                content.cultural_context or "",
                content.potential_impact,
            ]
        ).lower()
        for level, pattern in KEYWORD_PATTERNS:
            if pattern.search(text):
                return level
        return CulturalSensitivity.NONE
