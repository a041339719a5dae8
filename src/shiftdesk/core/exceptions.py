from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required record is missing."""


class PolicyViolation(DomainError):
    """Raised when an action is refused by a time policy (e.g. minimum stay)."""

    def __init__(self, message: str, *, remaining_minutes: int = 0):
        super().__init__(message)
        self.remaining_minutes = int(remaining_minutes)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PersistenceFailure(DomainError):
    """Raised when the storage layer rejects a read or write."""


class NotificationDispatchFailure(DomainError):
    """One recipient's notification could not be written.

    Never propagated out of a state transition; collected and logged.
    """

    def __init__(self, recipient_id: str, cause: BaseException):
        super().__init__(f"notification to {recipient_id} failed: {cause}")
        self.recipient_id = recipient_id
        self.cause = cause
