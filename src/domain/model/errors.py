"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class StoreUniquenessViolation(DuplicateError):
    """Insert rejected by a unique index (e.g. a concurrent signup won the race)."""


class ConflictError(DomainError):
    """Operation conflicts with the current state of related entities."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates one or more business validation rules."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors if errors is not None else [message]
        super().__init__(message)


class HashingError(DomainError):
    """The password hashing primitive failed (not a credential mismatch)."""


class SerializationError(DomainError):
    """A principal without a stored id cannot be bound to a session."""


class ProviderExchangeError(DomainError):
    """The OAuth provider step failed or was denied."""


class AuthenticationRequiredError(DomainError):
    """Request carries no resolved principal."""


class AccountInactiveError(PermissionDeniedError):
    """Resolved principal is deactivated."""
