"""Unit tests for the validation API routes.

Exercises the routes through the FastAPI app with bootstrap singletons
backed by stubs: request lifecycle, error mapping to RFC 7807 problem
details, metrics and the Prometheus endpoint.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.bootstrap.validation import (
    get_escalation_service,
    set_validation_config,
    set_validator_registry,
)
from src.config.validation_config import TEST_VALIDATION_CONFIG
from src.domain.models.validator import ValidatorRole
from src.infrastructure.stubs.validator_registry_stub import ValidatorRegistryStub
from tests.helpers.validation_factories import COMMUNITY_ID, make_validator


@pytest.fixture
def client() -> Iterator[TestClient]:
    set_validation_config(TEST_VALIDATION_CONFIG)
    set_validator_registry(
        ValidatorRegistryStub(
            [
                make_validator("v1", quality=4.0),
                make_validator("v2", quality=3.0),
                make_validator("v3", quality=2.0),
                make_validator("elder", role=ValidatorRole.ELDER, expertise=()),
            ]
        )
    )
    with TestClient(app) as test_client:
        yield test_client


def _submission(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "content_id": "content-1",
        "content_type": "pattern",
        "content": {
            "title": "Youth program attendance",
            "description": "Attendance trends for after-school programs",
            "ai_generated_insight": "Attendance rises when sessions start after 4pm",
            "supporting_data": [{"source_name": "Sign-in sheets"}],
        },
        "submitted_by": "insights-pipeline",
        "community_id": COMMUNITY_ID,
    }
    body.update(overrides)
    return body


def _validation(validator_id: str, score: float = 4.0, **overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "validator_id": validator_id,
        "validator_role": "community_member",
        "validation_score": score,
        "accuracy": score,
        "relevance": score,
        "cultural_appropriateness": score,
        "completeness": score,
        "actionability": score,
        "overall_assessment": "agree",
        "confidence_level": 0.8,
    }
    body.update(overrides)
    return body


def _create(client: TestClient, **overrides: Any) -> dict[str, Any]:
    response = client.post("/v1/validation/requests", json=_submission(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestSubmitForValidation:
    """POST /v1/validation/requests."""

    def test_created(self, client: TestClient) -> None:
        data = _create(client)

        assert data["status"] == "in_review"
        assert data["required_validators"] == 2
        assert data["assigned_validator_ids"] == ["v1", "v2"]
        assert data["source_count"] == 1
        assert data["cultural_sensitivity"] == "none"
        assert data["submitted_at"].endswith("Z")

    def test_deadline_without_offset_read_as_utc(self, client: TestClient) -> None:
        data = _create(client, deadline="2020-01-01T00:00:00")

        assert data["deadline"] == "2020-01-01T00:00:00Z"
        overdue = asyncio.run(get_escalation_service().find_overdue())
        assert [r.id for r in overdue] == [data["id"]]

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.post(
            "/v1/validation/requests",
            json=_submission(),
            headers={"X-Correlation-ID": "corr-123"},
        )

        assert response.headers["X-Correlation-ID"] == "corr-123"

    def test_invalid_content_type(self, client: TestClient) -> None:
        response = client.post(
            "/v1/validation/requests", json=_submission(content_type="poem")
        )

        assert response.status_code == 422

    def test_missing_title(self, client: TestClient) -> None:
        body = _submission()
        del body["content"]["title"]

        response = client.post("/v1/validation/requests", json=body)

        assert response.status_code == 422


class TestReadRequests:
    """GET /v1/validation/requests."""

    def test_get_request(self, client: TestClient) -> None:
        created = _create(client)

        response = client.get(f"/v1/validation/requests/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_missing_request(self, client: TestClient) -> None:
        response = client.get("/v1/validation/requests/missing")

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["type"] == "urn:community-validation:request-not-found"
        assert detail["status"] == 404
        assert detail["instance"].endswith("/v1/validation/requests/missing")

    def test_list_by_status(self, client: TestClient) -> None:
        _create(client)
        _create(client, content_id="content-2", community_id="community-elsewhere")

        in_review = client.get("/v1/validation/requests", params={"status": "in_review"})
        pending = client.get(
            "/v1/validation/requests",
            params={"status": "pending", "community_id": "community-elsewhere"},
        )

        assert in_review.json()["total"] == 1
        assert pending.json()["total"] == 1

    def test_list_requires_status(self, client: TestClient) -> None:
        assert client.get("/v1/validation/requests").status_code == 422


class TestSubmitValidation:
    """POST /v1/validation/requests/{id}/validations."""

    def test_finalizes_on_quorum(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/v1/validation/requests/{created['id']}/validations"

        first = client.post(url, json=_validation("v1", 4.0))
        second = client.post(
            url,
            json=_validation("v2", 4.2, suggested_improvements=["Add weekend data"]),
        )

        assert first.status_code == 201
        assert first.json()["current_validators"] == 1
        data = second.json()
        assert data["status"] == "validated"
        assert data["consensus_reached"] is True
        assert data["final_score"] == pytest.approx(4.1)
        assert data["completed_at"] is not None
        assert [f["feedback_type"] for f in data["feedback"]] == ["model_improvement"]

    def test_duplicate_is_conflict(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/v1/validation/requests/{created['id']}/validations"
        client.post(url, json=_validation("v1"))

        response = client.post(url, json=_validation("v1"))

        assert response.status_code == 409
        assert response.json()["detail"]["type"].endswith("duplicate-validation")

    def test_stale_cycle_is_conflict(self, client: TestClient) -> None:
        created = _create(client)

        response = client.post(
            f"/v1/validation/requests/{created['id']}/validations",
            json=_validation("v1", review_cycle=2),
        )

        assert response.status_code == 409
        assert response.json()["detail"]["type"].endswith("stale-revision")

    def test_closed_cycle_is_conflict(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/v1/validation/requests/{created['id']}/validations"
        client.post(url, json=_validation("v1"))
        client.post(url, json=_validation("v2"))

        response = client.post(url, json=_validation("v3"))

        assert response.status_code == 409
        assert response.json()["detail"]["type"].endswith("review-cycle-closed")

    def test_score_out_of_range(self, client: TestClient) -> None:
        created = _create(client)

        response = client.post(
            f"/v1/validation/requests/{created['id']}/validations",
            json=_validation("v1", score=6.0),
        )

        assert response.status_code == 422

    def test_unknown_request(self, client: TestClient) -> None:
        response = client.post(
            "/v1/validation/requests/missing/validations", json=_validation("v1")
        )

        assert response.status_code == 404


class TestRevisionsAndRejection:
    """Revision, feedback and rejection endpoints."""

    def _needs_revision(self, client: TestClient) -> str:
        created = _create(client)
        url = f"/v1/validation/requests/{created['id']}/validations"
        client.post(url, json=_validation("v1", 1.0))
        response = client.post(url, json=_validation("v2", 5.0))
        assert response.json()["status"] == "needs_revision"
        return created["id"]

    def test_revise(self, client: TestClient) -> None:
        request_id = self._needs_revision(client)

        response = client.post(
            f"/v1/validation/requests/{request_id}/revisions",
            json={
                "revised_by": "analyst",
                "revision_reason": "Narrow the claim",
                "changes": [
                    {
                        "field": "aiGeneratedInsight",
                        "new_value": "Attendance rises after 4:30pm",
                        "change_reason": "Validator feedback",
                    }
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["review_cycle"] == 2
        assert data["validations"] == []
        assert data["revisions"][0]["changed_fields"] == ["ai_generated_insight"]
        assert data["status"] == "in_review"

    def test_revise_invalid_field(self, client: TestClient) -> None:
        request_id = self._needs_revision(client)

        response = client.post(
            f"/v1/validation/requests/{request_id}/revisions",
            json={
                "revised_by": "analyst",
                "changes": [{"field": "supporting_data", "new_value": []}],
            },
        )

        assert response.status_code == 422
        assert response.json()["detail"]["type"].endswith("invalid-field-path")

    def test_revise_requires_changes(self, client: TestClient) -> None:
        request_id = self._needs_revision(client)

        response = client.post(
            f"/v1/validation/requests/{request_id}/revisions",
            json={"revised_by": "analyst", "changes": []},
        )

        assert response.status_code == 422

    def test_add_feedback(self, client: TestClient) -> None:
        created = _create(client)

        response = client.post(
            f"/v1/validation/requests/{created['id']}/feedback",
            json={
                "feedback_type": "cultural_guidance",
                "category": "language",
                "feedback": "Use the community's own program name",
                "submitted_by": "v1",
                "priority": "high",
            },
        )

        assert response.status_code == 201
        assert response.json()["implementation_status"] == "pending"

    def test_reject(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/v1/validation/requests/{created['id']}/reject"

        response = client.post(url, json={"decided_by": "coordinator", "reason": "Duplicate"})
        again = client.post(url, json={"decided_by": "coordinator", "reason": "Duplicate"})

        assert response.status_code == 200
        assert response.json()["status"] == "rejected"
        assert response.json()["rejection_reason"] == "Duplicate"
        assert again.status_code == 409
        assert again.json()["detail"]["type"].endswith("invalid-transition")


class TestMetrics:
    """Metrics endpoints."""

    def test_metrics(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/v1/validation/requests/{created['id']}/validations"
        client.post(url, json=_validation("v1"))
        client.post(url, json=_validation("v2"))

        response = client.get("/v1/validation/metrics", params={"timeframe": "week"})

        assert response.status_code == 200
        data = response.json()
        assert data["total_requests"] == 1
        assert data["completed_validations"] == 1
        assert data["consensus_rate"] == 1.0
        assert data["validator_participation"] == {"v1": 1, "v2": 1}
        assert data["content_type_breakdown"] == {"pattern": 1}

    def test_invalid_timeframe(self, client: TestClient) -> None:
        assert client.get("/v1/validation/metrics", params={"timeframe": "decade"}).status_code == 422

    def test_prometheus(self, client: TestClient) -> None:
        _create(client)

        response = client.get("/v1/validation/metrics/prometheus")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "validation_requests_submitted_total" in response.text
