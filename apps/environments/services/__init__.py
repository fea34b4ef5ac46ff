"""
Environments app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    EnvironmentsServiceError,
    EnvironmentNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    NotAClientError,
    EnvironmentAccessDeniedError,
    InvalidPointsDeltaError,
)

from .environment_management import (
    create_environment,
    update_environment,
    get_environment,
    get_owned_environment,
    get_visible_environment,
    list_company_environments,
)

from .membership_management import (
    join_environment,
    leave_environment,
    get_membership,
    list_memberships,
    get_environment_members,
    accrue_points,
)


__all__ = [
    # Exceptions
    'EnvironmentsServiceError',
    'EnvironmentNotFoundError',
    'AlreadyMemberError',
    'NotMemberError',
    'NotAClientError',
    'EnvironmentAccessDeniedError',
    'InvalidPointsDeltaError',

    # Environment Management
    'create_environment',
    'update_environment',
    'get_environment',
    'get_owned_environment',
    'get_visible_environment',
    'list_company_environments',

    # Membership Management
    'join_environment',
    'leave_environment',
    'get_membership',
    'list_memberships',
    'get_environment_members',
    'accrue_points',
]
