class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransition(DomainError):
    """Raised when an operation is attempted from a state that does not allow it."""


class BreakExhausted(DomainError):
    """Raised when a break is started with no allowance left."""

    def __init__(self, message: str, *, allowed_minutes: int, used_minutes: int):
        super().__init__(message)
        self.allowed_minutes = allowed_minutes
        self.used_minutes = used_minutes


class InvalidTimeInput(ValidationError):
    """Raised when an edited time value cannot be parsed."""


class OperationCancelled(DomainError):
    """Raised when the user declines a confirmation."""


class BreakNotConfirmed(OperationCancelled):
    """Raised when an over-limit break is not confirmed; the break stays open."""

    def __init__(self, message: str, *, exceeded_minutes: int):
        super().__init__(message)
        self.exceeded_minutes = exceeded_minutes


class MalformedPersistedData(Exception):
    """Raised when a stored slot cannot be decoded.

    Never escapes the store: it is logged and replaced with defaults.
    """
