"""Unit tests for ValidationWorkflow configuration."""

import pytest

from src.domain.models.validation_workflow import (
    CONDITION_INSUFFICIENT_VALIDATORS,
    CONDITION_TIMEOUT,
    ContentType,
    EscalationAction,
    EscalationRule,
)
from tests.helpers.validation_factories import make_workflow


def test_max_standard_deviation() -> None:
    assert make_workflow(consensus_threshold=0.8).max_standard_deviation == pytest.approx(0.2)


@pytest.mark.parametrize("threshold", [-0.1, 1.1])
def test_threshold_out_of_range(threshold: float) -> None:
    with pytest.raises(ValueError, match="consensus_threshold"):
        make_workflow(consensus_threshold=threshold)


def test_required_validators_positive() -> None:
    with pytest.raises(ValueError, match="required_validators"):
        make_workflow(required_validators=0)


def test_rules_for_condition_in_order() -> None:
    add = EscalationRule(CONDITION_TIMEOUT, EscalationAction.ADD_VALIDATOR)
    dispute = EscalationRule(CONDITION_INSUFFICIENT_VALIDATORS, EscalationAction.MARK_DISPUTED)
    elder = EscalationRule(CONDITION_TIMEOUT, EscalationAction.ESCALATE_TO_ELDER)
    workflow = make_workflow(escalation_rules=(add, dispute, elder))

    assert workflow.rules_for(CONDITION_TIMEOUT) == (add, elder)


def test_content_type_parse() -> None:
    assert ContentType.parse("ai_insight") == ContentType.AI_INSIGHT
