"""Consensus calculator service.

Decides whether a panel agrees and computes the weighted final score and
aggregate confidence for one review cycle.

Agreement is dispersion-based, not majority voting: the panel agrees when
the population standard deviation of the overall scores is at most
``1 - consensus_threshold``. Threshold 1.0 demands (near) identical
scores; even threshold 0.0 rejects a spread above 1.0.

The service is stateless and deterministic: the same validations and
threshold always produce the same result.
"""

from __future__ import annotations

from collections.abc import Sequence
from statistics import fmean, pstdev

import structlog

from src.domain.models.community_validation import CommunityValidation
from src.domain.models.consensus_result import ConsensusResult

logger = structlog.get_logger(__name__)

# Flat confidence bonus when the panel agreed.
CONSENSUS_CONFIDENCE_BONUS = 0.1

# Absorbs float error so a dispersion exactly on the boundary still agrees.
DISPERSION_TOLERANCE = 1e-9


class ConsensusCalculatorService:
    """Dispersion-based consensus with role-weighted scoring."""

    def __init__(self) -> None:
        self._log = logger.bind(component="consensus_calculator")

    def evaluate(
        self,
        validations: Sequence[CommunityValidation],
        consensus_threshold: float,
    ) -> ConsensusResult:
        """Evaluate a cycle's validations.

        Args:
            validations: The cycle's validations.
            consensus_threshold: Workflow threshold in [0, 1].

        Returns:
            ConsensusResult with agreement, final score and confidence
            computed together. All zero when there are no validations.
        """
        if not validations:
            return ConsensusResult.empty()

        scores = [v.validation_score for v in validations]
        sigma = pstdev(scores)
        reached = self.is_consensus(sigma, consensus_threshold)
        result = ConsensusResult(
            reached=reached,
            standard_deviation=sigma,
            mean_score=fmean(scores),
            final_score=self.weighted_final_score(validations),
            confidence=self.aggregate_confidence(validations, reached),
            validation_count=len(validations),
        )
        self._log.debug(
            "consensus_evaluated",
            validation_count=result.validation_count,
            standard_deviation=round(sigma, 4),
            max_standard_deviation=round(1.0 - consensus_threshold, 4),
            reached=reached,
            final_score=round(result.final_score, 4),
        )
        return result

    @staticmethod
    def is_consensus(standard_deviation: float, consensus_threshold: float) -> bool:
        """Agreement test: sigma <= 1 - threshold."""
        return standard_deviation <= (1.0 - consensus_threshold) + DISPERSION_TOLERANCE

    @staticmethod
    def weighted_final_score(validations: Sequence[CommunityValidation]) -> float:
        """Weighted mean of overall scores.

        Each validation weighs ``role multiplier x confidence``. If every
        weight is zero (all confidences 0) the plain mean is returned so
        the score stays on the 1-5 scale.
        """
        if not validations:
            return 0.0
        total_weight = sum(v.weight for v in validations)
        if total_weight <= 0:
            return fmean(v.validation_score for v in validations)
        return sum(v.validation_score * v.weight for v in validations) / total_weight

    @staticmethod
    def aggregate_confidence(
        validations: Sequence[CommunityValidation],
        consensus_reached: bool,
    ) -> float:
        """Mean confidence plus the consensus bonus, capped at 1.0."""
        if not validations:
            return 0.0
        bonus = CONSENSUS_CONFIDENCE_BONUS if consensus_reached else 0.0
        return min(fmean(v.confidence_level for v in validations) + bonus, 1.0)
