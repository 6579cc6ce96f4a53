from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransitionError(ValidationError):
    """Raised when a clock event is not legal for the current attendance state."""

    def __init__(self, message: str, *, state=None, event_type=None):
        super().__init__(message)
        self.state = state
        self.event_type = event_type


class ClockSkewError(ValidationError):
    """Raised when an event would produce a negative duration."""


class PayProfileError(DomainError):
    """Raised when a staff pay profile is missing or unusable."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ConcurrentUpdateError(DomainError):
    """Raised when another writer holds a staff member's lock for too long."""
