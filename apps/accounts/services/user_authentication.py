"""
Login service.

Checks an email/password pair for a client or company principal and stamps
``last_login``. Token issuing stays in the view (SimpleJWT).
"""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


def authenticate_user(*, email: str, password: str) -> User:
    """
    Resolve the principal behind an email/password pair.

    Unknown emails and wrong passwords raise the same error so a caller
    cannot probe which addresses are registered.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Correct password on a deactivated account
    """
    user = User.objects.filter(email__iexact=email).first()

    if user is None:
        # Run the hasher anyway so unknown emails cost the same time
        User().set_password(password)
        logger.warning("Login failed for unknown email")
        raise InvalidCredentialsError()

    if not user.check_password(password):
        logger.warning("Login failed for principal %s: bad password", user.id)
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.warning("Login refused for deactivated principal %s", user.id)
        raise InactiveAccountError()

    # Single UPDATE, no row lock needed for a timestamp
    user.last_login = timezone.now()
    User.objects.filter(pk=user.pk).update(last_login=user.last_login)

    logger.info("Principal %s logged in as %s", user.id, user.role)
    return user
