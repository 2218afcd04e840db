"""Concurrent modification error for version-checked request updates.

The request store performs optimistic compare-and-swap on the record
version. A mismatch means another writer got there first; callers re-read
the request and retry the whole read-modify-write operation.
"""

from __future__ import annotations

from src.domain.exceptions import ValidationEngineError


class ConcurrentModificationError(ValidationEngineError):
    """Raised when a version-checked update loses a race.

    This is a recoverable error - the caller should re-read the request
    and decide whether to retry or abort.

    Attributes:
        request_id: Id of the request being modified.
        expected_version: Version the caller read.
        actual_version: Version currently stored.
    """

    def __init__(
        self,
        request_id: str,
        expected_version: int,
        actual_version: int,
    ) -> None:
        """Initialize concurrent modification error.

        Args:
            request_id: Id of the request being modified.
            expected_version: Version the caller read.
            actual_version: Version currently stored.
        """
        self.request_id = request_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrent modification detected for validation request "
            f"{request_id}: expected version {expected_version}, "
            f"found {actual_version}"
        )
