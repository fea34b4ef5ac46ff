"""
DRF exception handler mapping every failure onto the shared error kinds.

Configured through ``REST_FRAMEWORK['EXCEPTION_HANDLER']``. Responses always
have the shape ``{"error": <message>, "kind": <kind>}``; validation failures
add ``details`` with DRF's field errors.
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import InterfaceError, OperationalError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import set_rollback

from .exceptions import ServiceError, StoreUnavailableError, InternalError

logger = logging.getLogger(__name__)


DRF_KINDS = (
    (drf_exceptions.NotAuthenticated, 'unauthorized'),
    (drf_exceptions.AuthenticationFailed, 'unauthorized'),
    (drf_exceptions.PermissionDenied, 'forbidden'),
    (drf_exceptions.NotFound, 'not_found'),
    (drf_exceptions.ValidationError, 'validation_error'),
    (drf_exceptions.ParseError, 'validation_error'),
    (drf_exceptions.MethodNotAllowed, 'validation_error'),
    (drf_exceptions.UnsupportedMediaType, 'validation_error'),
)


def _kind_for(exc):
    for exc_class, kind in DRF_KINDS:
        if isinstance(exc, exc_class):
            return kind
    return 'internal'


def _service_response(exc):
    return Response(exc.to_dict(), status=exc.status_code)


def exception_handler(exc, context):
    """Render domain, DRF and database exceptions as typed error payloads."""
    view = context.get('view')
    set_rollback()
    view_name = view.__class__.__name__ if view is not None else 'unknown'

    if isinstance(exc, ServiceError):
        if isinstance(exc, InternalError):
            logger.error('Internal error in %s: %s', view_name, exc.message)
        return _service_response(exc)

    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.warning('Database unavailable in %s: %s', view_name, exc)
        return _service_response(StoreUnavailableError())

    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    if isinstance(exc, drf_exceptions.APIException):
        kind = _kind_for(exc)
        if isinstance(exc, drf_exceptions.ValidationError):
            payload = {
                'error': 'Invalid input.',
                'kind': kind,
                'details': exc.detail,
            }
        else:
            payload = {'error': str(exc.detail), 'kind': kind}

        headers = {}
        if getattr(exc, 'auth_header', None):
            headers['WWW-Authenticate'] = exc.auth_header
        if getattr(exc, 'wait', None):
            headers['Retry-After'] = '%d' % exc.wait

        return Response(payload, status=exc.status_code, headers=headers)

    logger.exception('Unhandled exception in %s', view_name)
    return Response(
        InternalError().to_dict(),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
