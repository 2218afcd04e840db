"""Domain errors for the community validation engine.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ValidationEngineError.
"""

from src.domain.errors.concurrent_modification import ConcurrentModificationError
from src.domain.errors.validation import (
    DuplicateValidationError,
    FeedbackNotFoundError,
    InsufficientValidatorsError,
    InvalidFieldPathError,
    InvalidStateTransitionError,
    RequestNotFoundError,
    ReviewCycleClosedError,
    StaleRevisionError,
    UnknownWorkflowError,
    ValidationError,
    ValidatorNotFoundError,
)

__all__: list[str] = [
    "ConcurrentModificationError",
    "DuplicateValidationError",
    "FeedbackNotFoundError",
    "InsufficientValidatorsError",
    "InvalidFieldPathError",
    "InvalidStateTransitionError",
    "RequestNotFoundError",
    "ReviewCycleClosedError",
    "StaleRevisionError",
    "UnknownWorkflowError",
    "ValidationError",
    "ValidatorNotFoundError",
]
