class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class InvalidSchedule(ValidationError):
    """Raised when a schedule carries a malformed or inconsistent time of day."""


class NoActiveSchedule(DomainError):
    """Raised when no active schedule covers the user on the requested day."""

    def __init__(self, user_id, on_date):
        self.user_id = user_id
        self.on_date = on_date
        super().__init__(f"No schedule found for {on_date.strftime('%A').lower()}")


class MissingClockIn(DomainError):
    """Raised when a clock-out is finalized without a prior clock-in."""
