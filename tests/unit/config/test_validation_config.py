"""Unit tests for ValidationEngineConfig and the default workflows."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from src.config.default_workflows import default_workflows
from src.config.validation_config import (
    DEFAULT_VALIDATION_CONFIG,
    TEST_VALIDATION_CONFIG,
    ValidationEngineConfig,
)
from src.domain.models.validation_workflow import (
    CONDITION_TIMEOUT,
    ContentType,
    EscalationAction,
)


class TestValidationEngineConfig:
    """Tests for ValidationEngineConfig dataclass."""

    class TestDefaults:
        """Tests for default configuration values."""

        def test_defaults(self) -> None:
            config = ValidationEngineConfig()
            assert config.cache_ttl_seconds == 300
            assert config.max_revision_cycles == 3
            assert config.cas_max_retries == 5
            assert config.default_metrics_days == 30

        def test_named_configs(self) -> None:
            assert DEFAULT_VALIDATION_CONFIG == ValidationEngineConfig()
            assert TEST_VALIDATION_CONFIG.cache_ttl_seconds == 0

    class TestValidation:
        """Tests for configuration validation."""

        def test_cache_ttl_range(self) -> None:
            with pytest.raises(ValueError, match="cache_ttl_seconds"):
                ValidationEngineConfig(cache_ttl_seconds=-1)

        def test_revision_cycles_range(self) -> None:
            with pytest.raises(ValueError, match="max_revision_cycles"):
                ValidationEngineConfig(max_revision_cycles=0)

        def test_cas_retries_range(self) -> None:
            with pytest.raises(ValueError, match="cas_max_retries"):
                ValidationEngineConfig(cas_max_retries=51)

        def test_metrics_days_range(self) -> None:
            with pytest.raises(ValueError, match="default_metrics_days"):
                ValidationEngineConfig(default_metrics_days=366)

    class TestFromEnvironment:
        """Tests for environment variable loading."""

        def test_reads_environment(self) -> None:
            env = {
                "VALIDATION_CACHE_TTL_SECONDS": "60",
                "VALIDATION_MAX_REVISION_CYCLES": "5",
                "VALIDATION_CAS_MAX_RETRIES": "8",
                "VALIDATION_DEFAULT_METRICS_DAYS": "7",
            }
            with patch.dict(os.environ, env, clear=False):
                config = ValidationEngineConfig.from_environment()

            assert config.cache_ttl_seconds == 60
            assert config.max_revision_cycles == 5
            assert config.cas_max_retries == 8
            assert config.default_metrics_days == 7

        def test_clamps_out_of_range(self) -> None:
            env = {
                "VALIDATION_CACHE_TTL_SECONDS": "99999",
                "VALIDATION_CAS_MAX_RETRIES": "0",
            }
            with patch.dict(os.environ, env, clear=False):
                config = ValidationEngineConfig.from_environment()

            assert config.cache_ttl_seconds == 3600
            assert config.cas_max_retries == 1

        def test_invalid_falls_back_to_default(self) -> None:
            with patch.dict(
                os.environ, {"VALIDATION_MAX_REVISION_CYCLES": "many"}, clear=False
            ):
                config = ValidationEngineConfig.from_environment()

            assert config.max_revision_cycles == 3


class TestDefaultWorkflows:
    """Tests for the seeded workflow catalog."""

    def test_one_workflow_per_content_type(self) -> None:
        workflows = default_workflows()
        assert {w.content_type for w in workflows} == set(ContentType)

    @pytest.mark.parametrize(
        ("content_type", "quorum", "elder", "threshold"),
        [
            (ContentType.AI_INSIGHT, 3, True, 0.70),
            (ContentType.ANALYSIS_RESULT, 2, False, 0.75),
            (ContentType.RECOMMENDATION, 3, True, 0.80),
            (ContentType.PATTERN, 2, False, 0.70),
            (ContentType.PREDICTION, 4, True, 0.85),
        ],
    )
    def test_workflow_settings(
        self,
        content_type: ContentType,
        quorum: int,
        elder: bool,
        threshold: float,
    ) -> None:
        workflow = next(w for w in default_workflows() if w.content_type == content_type)
        assert workflow.required_validators == quorum
        assert workflow.elder_review_required is elder
        assert workflow.consensus_threshold == threshold

    def test_elder_workflows_escalate_to_elder(self) -> None:
        for workflow in default_workflows():
            actions = [r.action for r in workflow.rules_for(CONDITION_TIMEOUT)]
            assert actions[0] == EscalationAction.ADD_VALIDATOR
            assert (EscalationAction.ESCALATE_TO_ELDER in actions) is workflow.elder_review_required
