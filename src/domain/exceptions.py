"""Base exception classes for the community validation domain layer."""


class ValidationEngineError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so that
    the API layer and callers can handle engine failures uniformly.

    Subclasses live in ``src.domain.errors`` and carry the identifiers
    needed to act on the failure (request id, validator id, cycle number).
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
