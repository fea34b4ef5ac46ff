"""Domain-specific exceptions for accounts services."""

from apps.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)


class AccountsServiceError(ServiceError):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError, InvalidInputError):
    """Raised when user registration input is rejected."""
    pass


class EmailAlreadyRegisteredError(AccountsServiceError, ConflictError):
    """Raised when signing up with an email that already has an account."""
    default_message = 'An account with this email already exists.'


class InvalidCredentialsError(AccountsServiceError, UnauthorizedError):
    """Raised when authentication credentials are invalid."""
    default_message = 'Invalid email or password.'


class InactiveAccountError(AccountsServiceError, ForbiddenError):
    """Raised when account is deactivated."""
    default_message = 'Account is deactivated.'


class UserNotFoundError(AccountsServiceError, NotFoundError):
    """Raised when user does not exist."""
    pass


class NotAClientError(AccountsServiceError, ForbiddenError):
    """Raised when a principal without a Client record acts as a client."""
    default_message = 'Only clients can perform this action.'


class NotACompanyError(AccountsServiceError, ForbiddenError):
    """Raised when a principal without a Company record acts as a company."""
    default_message = 'Only companies can perform this action.'
