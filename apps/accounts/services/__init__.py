"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    NotAClientError,
    NotACompanyError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .profiles import (
    Profile,
    ClientProfile,
    CompanyProfile,
    get_profile,
    get_client_for_user,
    get_company_for_user,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'NotAClientError',
    'NotACompanyError',
    # Services
    'register_user',
    'authenticate_user',
    'get_profile',
    'get_client_for_user',
    'get_company_for_user',
    # Profile variants
    'Profile',
    'ClientProfile',
    'CompanyProfile',
]
