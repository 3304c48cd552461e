class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidFilterField(ValidationError):
    """Raised by strict filters when the requested column is not filterable."""

    def __init__(self, field: str, allowed):
        self.field = field
        self.allowed = tuple(sorted(allowed))
        super().__init__(f"Cannot filter on {field!r}; allowed: {', '.join(self.allowed)}")


class ProfileNotFoundError(DomainError):
    """Raised when a profile lookup has no match."""


class StoreUnavailable(DomainError):
    """Raised when the backing database cannot be reached."""


class NotificationError(DomainError):
    """Raised when a notification could not be delivered."""
