"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is stored as an attribute so callers can inspect it without
    # parsing str(exception). Never raise this directly - use a specific subclass below.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationError(DomainException):
    """Input validation failed.

    Raised for values the engine cannot work with at all, e.g. an unknown
    timeline kind or a podium size below 1. Bad play rows are NOT validation
    errors - they are skipped.

    Example:
        raise ValidationError("Unknown timeline kind: 'albums'")
    """

    pass


class InvalidStateException(DomainException):
    """Raised when an object is in an invalid state for the requested operation.

    Example: feeding another play into a tracker that was already finished.
    """

    pass


__all__ = [
    "DomainException",
    "InvalidStateException",
    "ValidationError",
]
