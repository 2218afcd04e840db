"""Unit tests for CommunityValidator and ValidationHistory."""

import pytest

from src.domain.models.validator import ALL_COMMUNITIES, ValidationHistory, ValidatorRole
from tests.helpers.validation_factories import make_validator


class TestValidationHistory:
    def test_record_updates_running_means(self) -> None:
        history = ValidationHistory()

        history = history.record(score=4.0, time_spent_minutes=30, agreed_with_consensus=True)
        history = history.record(score=2.0, time_spent_minutes=50, agreed_with_consensus=False)

        assert history.total_validations == 2
        assert history.average_score == pytest.approx(3.0)
        assert history.average_time_spent == pytest.approx(40.0)
        assert history.consensus_rate == pytest.approx(0.5)


class TestCommunityValidator:
    def test_serves_own_and_wildcard_community(self) -> None:
        local = make_validator("v1", community="riverbend")
        roaming = make_validator("v2", community=ALL_COMMUNITIES)

        assert local.serves_community("riverbend")
        assert not local.serves_community("lakeside")
        assert roaming.serves_community("lakeside")

    def test_expertise_intersection(self) -> None:
        validator = make_validator("v1", expertise=("statistics",))

        assert validator.has_any_expertise(("statistics", "forecasting"))
        assert not validator.has_any_expertise(("forecasting",))
        assert validator.has_any_expertise(())

    def test_is_elder(self) -> None:
        assert make_validator("e1", role=ValidatorRole.ELDER).is_elder
        assert not make_validator("v1").is_elder

    def test_deactivated(self) -> None:
        assert make_validator("v1").deactivated().is_active is False
