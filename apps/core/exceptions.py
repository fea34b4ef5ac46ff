"""
Error taxonomy shared by all service layers.

Each app defines its own domain exceptions (``apps/<app>/services/exceptions.py``)
by subclassing one of the kinds below, so a transport layer only needs to
know about the kind to choose a response.

Exception Hierarchy:
    ServiceError (base)
    ├── InvalidInputError       kind='validation_error'   400
    ├── NotFoundError           kind='not_found'          404
    ├── ConflictError           kind='conflict'           409
    ├── ForbiddenError          kind='forbidden'          403
    ├── UnauthorizedError       kind='unauthorized'       401
    ├── StoreUnavailableError   kind='store_unavailable'  503
    └── InternalError           kind='internal'           500

Usage:
    from apps.core.exceptions import ConflictError

    class AlreadyMemberError(ConflictError):
        default_message = 'Client is already a member of this environment.'
"""


class ServiceError(Exception):
    """
    Base exception for all service errors.

    Carries a stable machine-readable ``kind`` and a human-readable message.
    """

    kind = 'internal'
    status_code = 500
    default_message = 'Service error.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.message, 'kind': self.kind}


class InvalidInputError(ServiceError):
    """Missing or malformed input. Caller's fault, never retried."""

    kind = 'validation_error'
    status_code = 400
    default_message = 'Invalid input.'


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    kind = 'not_found'
    status_code = 404
    default_message = 'Not found.'


class ConflictError(ServiceError):
    """Uniqueness violation."""

    kind = 'conflict'
    status_code = 409
    default_message = 'Conflict.'


class ForbiddenError(ServiceError):
    """Principal acting outside the tenant it owns or belongs to."""

    kind = 'forbidden'
    status_code = 403
    default_message = 'You do not have permission to perform this action.'


class UnauthorizedError(ServiceError):
    """Missing or invalid principal."""

    kind = 'unauthorized'
    status_code = 401
    default_message = 'Authentication credentials were not provided or are invalid.'


class StoreUnavailableError(ServiceError):
    """Transient database failure. Safe to retry at the transport layer."""

    kind = 'store_unavailable'
    status_code = 503
    default_message = 'Storage is temporarily unavailable.'


class InternalError(ServiceError):
    """Unexpected invariant violation."""

    kind = 'internal'
    status_code = 500
    default_message = 'Internal server error.'
