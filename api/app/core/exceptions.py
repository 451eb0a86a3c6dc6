"""
Custom exceptions for the application.
"""


class CardwiseException(Exception):
    """Base exception for all Cardwise application exceptions."""
    pass


class ValidationError(CardwiseException):
    """Raised when request data is malformed or out of range."""
    pass


class NotFoundError(CardwiseException):
    """Raised when a requested resource is not found (or not owned by the caller)."""
    pass


class ConflictError(CardwiseException):
    """Raised when a state precondition is violated (e.g., request already resolved)."""
    pass


class AuthenticationError(CardwiseException):
    """Raised when authentication fails."""
    pass


class AuthorizationError(CardwiseException):
    """Raised when authorization fails."""
    pass


class InternalError(CardwiseException):
    """Raised when storage or stored data fails in a way the caller cannot fix."""
    pass
