"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input is missing or violates a validation rule."""


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class StoreError(DomainError):
    """The user store failed to read or write."""
