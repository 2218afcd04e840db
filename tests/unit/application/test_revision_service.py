"""Unit tests for RevisionService."""

import pytest

from src.domain.errors.validation import (
    InvalidFieldPathError,
    InvalidStateTransitionError,
    RequestNotFoundError,
    StaleRevisionError,
)
from src.domain.models.content_revision import ContentChange
from src.domain.models.validation_request import ValidationStatus
from tests.helpers.validation_engine import ValidationEngine
from tests.helpers.validation_factories import (
    make_submission,
    make_validation,
    make_validator,
)


@pytest.fixture
async def engine() -> ValidationEngine:
    engine = ValidationEngine()
    await engine.register(
        make_validator("v1", quality=4.0),
        make_validator("v2", quality=3.0),
        make_validator("v3", quality=2.0),
    )
    return engine


async def _needs_revision(engine: ValidationEngine):
    request = await engine.requests.submit_for_validation(make_submission())
    await engine.requests.submit_validation(request.id, make_validation("v1", score=1.0))
    return await engine.requests.submit_validation(
        request.id, make_validation("v2", score=5.0)
    )


@pytest.mark.asyncio
async def test_revision_starts_new_cycle(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)

    revised = await engine.revisions.revise_content(
        failed.id,
        revised_by="analyst",
        revision_reason="Validators disagreed on the time window",
        changes=[
            ContentChange(
                field="ai_generated_insight",
                new_value="Attendance rises when sessions start after 4:30pm",
                change_reason="Narrowed claim",
            )
        ],
    )

    assert revised.review_cycle == 2
    assert revised.validations == ()
    assert revised.current_validators == 0
    assert revised.consensus_reached is False
    assert revised.final_score == 0.0
    assert revised.completed_at is None
    assert revised.status == ValidationStatus.IN_REVIEW
    assert revised.content.ai_generated_insight.endswith("4:30pm")
    revision = revised.revisions[-1]
    assert revision.revision_number == 1
    assert revision.changes[0].old_value == "Attendance rises when sessions start after 4pm"


@pytest.mark.asyncio
async def test_old_cycle_validation_is_stale(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)
    await engine.revisions.revise_content(
        failed.id,
        revised_by="analyst",
        revision_reason="Rework",
        changes=[ContentChange(field="title", new_value="Youth program timing")],
    )

    with pytest.raises(StaleRevisionError) as exc_info:
        await engine.requests.submit_validation(
            failed.id, make_validation("v3", review_cycle=1)
        )

    assert exc_info.value.current_cycle == 2


@pytest.mark.asyncio
async def test_revision_from_in_review_discards_validations(
    engine: ValidationEngine,
) -> None:
    request = await engine.requests.submit_for_validation(make_submission())
    await engine.requests.submit_validation(request.id, make_validation("v1"))

    revised = await engine.revisions.revise_content(
        request.id,
        revised_by="analyst",
        revision_reason="Typo",
        changes=[ContentChange(field="description", new_value="Attendance trends")],
    )

    assert revised.validations == ()
    assert revised.review_cycle == 2


@pytest.mark.asyncio
async def test_changes_apply_in_order_with_aliases(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)

    revised = await engine.revisions.revise_content(
        failed.id,
        revised_by="analyst",
        revision_reason="Two passes",
        changes=[
            ContentChange(field="potentialImpact", new_value="First"),
            ContentChange(field="potential_impact", new_value="Second"),
            ContentChange(field="recommendedActions", new_value=["Pilot one site"]),
        ],
    )

    changes = revised.revisions[-1].changes
    assert [c.field for c in changes] == [
        "potential_impact",
        "potential_impact",
        "recommended_actions",
    ]
    assert changes[1].old_value == "First"
    assert revised.content.potential_impact == "Second"
    assert revised.content.recommended_actions == ("Pilot one site",)


@pytest.mark.asyncio
async def test_revision_numbers_increase(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)
    change = [ContentChange(field="title", new_value="Another title")]

    await engine.revisions.revise_content(failed.id, "analyst", "first", change)
    again = await engine.revisions.revise_content(failed.id, "analyst", "second", change)

    assert [r.revision_number for r in again.revisions] == [1, 2]
    assert again.review_cycle == 3


@pytest.mark.asyncio
async def test_approval_stamped(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)

    revised = await engine.revisions.revise_content(
        failed.id,
        revised_by="analyst",
        revision_reason="Approved change",
        changes=[ContentChange(field="title", new_value="Approved title")],
        approved_by="coordinator",
    )

    revision = revised.revisions[-1]
    assert revision.approved_by == "coordinator"
    assert revision.approved_at is not None


@pytest.mark.asyncio
async def test_empty_changes_rejected(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)

    with pytest.raises(ValueError):
        await engine.revisions.revise_content(failed.id, "analyst", "nothing", [])


@pytest.mark.asyncio
async def test_non_revisable_field_rejected(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)

    with pytest.raises(InvalidFieldPathError):
        await engine.revisions.revise_content(
            failed.id,
            "analyst",
            "bad field",
            [ContentChange(field="supporting_data", new_value=["x"])],
        )

    stored = await engine.requests.get_request(failed.id)
    assert stored == failed


@pytest.mark.asyncio
async def test_wrong_value_shape_rejected(engine: ValidationEngine) -> None:
    failed = await _needs_revision(engine)

    with pytest.raises(ValueError):
        await engine.revisions.revise_content(
            failed.id,
            "analyst",
            "bad value",
            [ContentChange(field="assumptions", new_value="not a list")],
        )


@pytest.mark.asyncio
async def test_validated_request_cannot_be_revised(engine: ValidationEngine) -> None:
    request = await engine.requests.submit_for_validation(make_submission())
    await engine.requests.submit_validation(request.id, make_validation("v1"))
    await engine.requests.submit_validation(request.id, make_validation("v2"))

    with pytest.raises(InvalidStateTransitionError):
        await engine.revisions.revise_content(
            request.id,
            "analyst",
            "too late",
            [ContentChange(field="title", new_value="New")],
        )


@pytest.mark.asyncio
async def test_missing_request(engine: ValidationEngine) -> None:
    with pytest.raises(RequestNotFoundError):
        await engine.revisions.revise_content(
            "missing", "analyst", "why", [ContentChange(field="title", new_value="New")]
        )
