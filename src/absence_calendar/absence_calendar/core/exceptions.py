class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class BackendError(DomainError):
    """Raised when the database rejects or fails a read or write."""


class MaintenanceError(DomainError):
    """Failure of a best-effort maintenance step.

    Never raised out of the maintenance layer; carried inside a result value.
    """

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step
        self.message = message
