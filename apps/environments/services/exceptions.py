"""
Domain-specific exceptions for environments app.

These exceptions represent business rule violations; the shared
exception handler converts them to HTTP responses by kind.
"""

from apps.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)
from apps.accounts.services.exceptions import NotAClientError


class EnvironmentsServiceError(ServiceError):
    """Base exception for all environments service errors."""
    pass


class EnvironmentNotFoundError(EnvironmentsServiceError, NotFoundError):
    """Raised when an environment does not exist."""
    default_message = 'Environment not found.'


class AlreadyMemberError(EnvironmentsServiceError, ConflictError):
    """Raised when a client tries to join an environment they're already in."""
    default_message = 'Client is already a member of this environment.'


class NotMemberError(EnvironmentsServiceError, ForbiddenError):
    """Raised when an action requires a membership that does not exist."""
    default_message = 'Client is not a member of this environment.'


class EnvironmentAccessDeniedError(EnvironmentsServiceError, ForbiddenError):
    """Raised when a company acts on an environment it does not own."""
    default_message = 'This environment belongs to another company.'


class InvalidPointsDeltaError(EnvironmentsServiceError, InvalidInputError):
    """Raised when a points accrual is negative."""
    default_message = 'Points delta must be zero or positive.'


__all__ = [
    'EnvironmentsServiceError',
    'EnvironmentNotFoundError',
    'AlreadyMemberError',
    'NotMemberError',
    'NotAClientError',
    'EnvironmentAccessDeniedError',
    'InvalidPointsDeltaError',
]
