"""Serialized, version-checked updates of validation requests.

Every write to a validation request goes through RequestUpdater:

1. The per-request asyncio lock is taken, so in-process writers for the
   same request run one at a time (append atomicity, at-most-once
   finalization).
2. The request is re-read and the change is computed from that fresh copy.
3. The result is written with the store's compare-and-swap on ``version``,
   which catches writers in other processes. On a lost race the whole
   read-modify-write is retried, never just the write.

Notifications and other external calls belong after ``mutate`` returns,
outside the lock.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Union

from src.application.ports.validation_request_repository import (
    ValidationRequestRepositoryProtocol,
)
from src.application.services.base import LoggingMixin
from src.domain.errors.concurrent_modification import ConcurrentModificationError
from src.domain.errors.validation import RequestNotFoundError
from src.domain.models.validation_request import ValidationRequest

# A change returns the new request, or None to leave the request untouched.
RequestChange = Callable[
    [ValidationRequest],
    Union[ValidationRequest, None, Awaitable[Union[ValidationRequest, None]]],
]

DEFAULT_MAX_RETRIES = 5


class RequestLockRegistry:
    """Per-key asyncio locks.

    Locks are created on first use and keyed by request id (or any other
    id that needs serialized writes). ``hold`` counts holders and waiters,
    so ``discard`` never drops a lock someone is queued on: a lock
    discarded while in use is dropped when its last holder leaves.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}
        self._retired: set[str] = set()

    def lock_for(self, key: str) -> asyncio.Lock:
        return self._locks.setdefault(key, asyncio.Lock())

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Acquire the lock for ``key``, counting this caller while it waits."""
        lock = self.lock_for(key)
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._holders[key] - 1
            if remaining:
                self._holders[key] = remaining
            else:
                del self._holders[key]
                if key in self._retired:
                    self._retired.discard(key)
                    self._locks.pop(key, None)

    def discard(self, key: str) -> None:
        """Drop the lock for a key that will not be written again."""
        lock = self._locks.get(key)
        if lock is None:
            return
        if self._holders.get(key) or lock.locked():
            self._retired.add(key)
            return
        del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class RequestUpdater(LoggingMixin):
    """Applies changes to a request under its lock with CAS retries."""

    def __init__(
        self,
        store: ValidationRequestRepositoryProtocol,
        locks: RequestLockRegistry | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        """Initialize the updater.

        Args:
            store: Request store providing version-checked update.
            locks: Lock registry; share one per process.
            max_retries: Attempts before ConcurrentModificationError
                propagates.
        """
        self._store = store
        self._locks = locks if locks is not None else RequestLockRegistry()
        self._max_retries = max_retries
        self._init_logger()

    @property
    def locks(self) -> RequestLockRegistry:
        return self._locks

    async def mutate(
        self,
        request_id: str,
        change: RequestChange,
    ) -> tuple[ValidationRequest, ValidationRequest]:
        """Apply a change to the latest stored request.

        Domain errors raised by ``change`` propagate unchanged and leave
        the stored request as it was.

        Args:
            request_id: The request to change.
            change: Computes the new request from the current one. May be
                a coroutine function. Returning None skips the write.

        Returns:
            ``(before, after)``: the request the change was computed from
            and the stored result. They are the same object when the
            change returned None.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
            ConcurrentModificationError: If every attempt lost a race.
        """
        log = self._log_operation("mutate", request_id=request_id)
        async with self._locks.hold(request_id):
            last_error: ConcurrentModificationError | None = None
            for attempt in range(1, self._max_retries + 1):
                current = await self._store.get(request_id)
                if current is None:
                    raise RequestNotFoundError(request_id)

                updated = change(current)
                if inspect.isawaitable(updated):
                    updated = await updated
                if updated is None:
                    return current, current

                try:
                    stored = await self._store.update(updated, current.version)
                except ConcurrentModificationError as exc:
                    last_error = exc
                    log.warning(
                        "request_update_conflict",
                        attempt=attempt,
                        expected_version=exc.expected_version,
                        actual_version=exc.actual_version,
                    )
                    continue
                return current, stored

            assert last_error is not None
            log.error("request_update_retries_exhausted", attempts=self._max_retries)
            raise last_error
