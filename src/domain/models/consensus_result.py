"""Consensus result domain model.

A ConsensusResult is the outcome of evaluating one review cycle's
validations: whether the panel agreed, the role-weighted final score and
the aggregate confidence. The three values are computed together and
written to the request in a single update.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class ConsensusResult:
    """Outcome of a consensus evaluation.

    Attributes:
        reached: True if the score dispersion is within tolerance.
        standard_deviation: Population standard deviation of overall scores.
        mean_score: Unweighted mean of overall scores.
        final_score: Role- and confidence-weighted mean score.
        confidence: Mean validator confidence plus the consensus bonus,
            capped at 1.0.
        validation_count: Number of validations evaluated.
    """

    reached: bool
    standard_deviation: float
    mean_score: float
    final_score: float
    confidence: float
    validation_count: int

    @classmethod
    def empty(cls) -> ConsensusResult:
        """Result for a cycle with no validations."""
        return cls(
            reached=False,
            standard_deviation=0.0,
            mean_score=0.0,
            final_score=0.0,
            confidence=0.0,
            validation_count=0,
        )
