"""Unit tests for RequestUpdater serialized, version-checked writes."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.application.services.request_updater import RequestLockRegistry, RequestUpdater
from src.domain.errors import ConcurrentModificationError, RequestNotFoundError
from src.domain.models.validation_request import ValidationRequest
from src.infrastructure.stubs.validation_request_repository_stub import (
    ValidationRequestRepositoryStub,
)
from tests.helpers.validation_factories import make_request


@pytest.fixture
def store() -> ValidationRequestRepositoryStub:
    return ValidationRequestRepositoryStub()


@pytest.fixture
def updater(store: ValidationRequestRepositoryStub) -> RequestUpdater:
    return RequestUpdater(store, max_retries=3)


@pytest.mark.asyncio
async def test_mutate_bumps_version(
    store: ValidationRequestRepositoryStub, updater: RequestUpdater
) -> None:
    saved = await store.save(make_request())

    before, after = await updater.mutate(saved.id, lambda r: r.marked_disputed())

    assert before.version == 1
    assert after.version == 2
    assert after.is_disputed


@pytest.mark.asyncio
async def test_none_skips_write(
    store: ValidationRequestRepositoryStub, updater: RequestUpdater
) -> None:
    saved = await store.save(make_request())

    before, after = await updater.mutate(saved.id, lambda r: None)

    assert before is after
    assert store.update_count == 0


@pytest.mark.asyncio
async def test_async_change_supported(
    store: ValidationRequestRepositoryStub, updater: RequestUpdater
) -> None:
    saved = await store.save(make_request())

    async def change(request: ValidationRequest) -> ValidationRequest:
        await asyncio.sleep(0)
        return request.marked_disputed()

    _, after = await updater.mutate(saved.id, change)

    assert after.is_disputed


@pytest.mark.asyncio
async def test_missing_request(updater: RequestUpdater) -> None:
    with pytest.raises(RequestNotFoundError):
        await updater.mutate("missing", lambda r: r)


@pytest.mark.asyncio
async def test_domain_error_leaves_request_unchanged(
    store: ValidationRequestRepositoryStub, updater: RequestUpdater
) -> None:
    saved = await store.save(make_request())

    def boom(request: ValidationRequest) -> ValidationRequest:
        raise ValueError("bad change")

    with pytest.raises(ValueError):
        await updater.mutate(saved.id, boom)

    assert (await store.get(saved.id)) == saved


@pytest.mark.asyncio
async def test_retries_whole_read_modify_write_on_conflict(
    store: ValidationRequestRepositoryStub, updater: RequestUpdater
) -> None:
    saved = await store.save(make_request())
    calls = 0

    def change(request: ValidationRequest) -> ValidationRequest:
        nonlocal calls
        calls += 1
        if calls == 1:
            # Another process writes between our read and our write.
            store.put(request.with_version(request.version + 1))
        return request.marked_disputed()

    _, after = await updater.mutate(saved.id, change)

    assert calls == 2
    assert after.version == 3


@pytest.mark.asyncio
async def test_retries_exhausted() -> None:
    request = make_request(version=1)
    store = AsyncMock()
    store.get = AsyncMock(return_value=request)
    store.update = AsyncMock(
        side_effect=ConcurrentModificationError(request.id, 1, 2)
    )
    updater = RequestUpdater(store, max_retries=2)

    with pytest.raises(ConcurrentModificationError):
        await updater.mutate(request.id, lambda r: r.marked_disputed())

    assert store.update.await_count == 2


@pytest.mark.asyncio
async def test_writers_for_same_request_are_serialized(
    store: ValidationRequestRepositoryStub, updater: RequestUpdater
) -> None:
    saved = await store.save(make_request())
    active = 0
    peak = 0

    async def change(request: ValidationRequest) -> ValidationRequest:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0)
        active -= 1
        return request.with_deadline(request.submitted_at)

    await asyncio.gather(*(updater.mutate(saved.id, change) for _ in range(5)))

    assert peak == 1
    assert store.update_count == 5


def test_lock_registry_discard() -> None:
    locks = RequestLockRegistry()
    lock = locks.lock_for("r1")

    assert locks.lock_for("r1") is lock
    locks.discard("r1")
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_lock_discarded_while_queued_is_dropped_after_last_holder() -> None:
    locks = RequestLockRegistry()
    order: list[str] = []
    first_inside = asyncio.Event()
    release_first = asyncio.Event()

    async def first() -> None:
        async with locks.hold("r1"):
            first_inside.set()
            await release_first.wait()
            order.append("first")

    async def second() -> None:
        await first_inside.wait()
        async with locks.hold("r1"):
            order.append("second")

    tasks = [asyncio.create_task(first()), asyncio.create_task(second())]
    await first_inside.wait()
    for _ in range(5):
        await asyncio.sleep(0)

    locks.discard("r1")
    assert len(locks) == 1
    release_first.set()
    await asyncio.gather(*tasks)

    assert order == ["first", "second"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_hold_without_discard_keeps_lock() -> None:
    locks = RequestLockRegistry()

    async with locks.hold("r1"):
        pass

    assert len(locks) == 1
