class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an employee or an attendance session cannot be found."""


class ConflictError(DomainError):
    """Raised when the existing attendance state does not allow the request."""


class TooManyRequestsError(DomainError):
    """Raised when a clock event arrives too soon after the previous change."""

    def __init__(self, message: str, *, retry_after: int):
        super().__init__(message)
        self.retry_after = retry_after
