"""Unit tests for CommunityValidation and role weights."""

import pytest

from src.domain.models.community_validation import role_weight
from src.domain.models.validator import ValidatorRole
from tests.helpers.validation_factories import make_validation


class TestRoleWeight:
    """Tests for role multipliers."""

    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            (ValidatorRole.ELDER, 1.5),
            (ValidatorRole.COMMUNITY_EXPERT, 1.3),
            (ValidatorRole.ACADEMIC, 1.0),
            (ValidatorRole.SERVICE_PROVIDER, 1.0),
            (ValidatorRole.COMMUNITY_MEMBER, 1.0),
        ],
    )
    def test_role_weight(self, role: ValidatorRole, expected: float) -> None:
        assert role_weight(role) == expected

    def test_weight_is_role_times_confidence(self) -> None:
        validation = make_validation("e1", role=ValidatorRole.ELDER, confidence=0.5)

        assert validation.weight == pytest.approx(0.75)


class TestScoreRanges:
    """Tests for score range validation."""

    @pytest.mark.parametrize("score", [0.5, 5.5])
    def test_score_out_of_range(self, score: float) -> None:
        with pytest.raises(ValueError, match="validation_score"):
            make_validation("v1", score=score)

    def test_confidence_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="confidence_level"):
            make_validation("v1", confidence=1.2)

    def test_subscore_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="accuracy"):
            make_validation("v1", accuracy=0.0)


class TestDerivedProperties:
    def test_elder_is_culturally_grounded(self) -> None:
        assert make_validation("e1", role=ValidatorRole.ELDER).is_culturally_grounded

    def test_affiliation_is_culturally_grounded(self) -> None:
        validation = make_validation("v1", cultural_affiliation="Riverbend clan")

        assert validation.is_culturally_grounded
        assert not make_validation("v2").is_culturally_grounded

    def test_blank_suggestions_dropped(self) -> None:
        validation = make_validation(
            "v1", suggested_improvements=("  cite the survey ", "", "   ")
        )

        assert validation.improvement_suggestions == ("cite the survey",)
