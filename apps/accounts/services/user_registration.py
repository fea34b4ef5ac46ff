"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import Client, Company, UserRole
from .exceptions import EmailAlreadyRegisteredError, UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


def register_user(
    *,
    email: str,
    password: str,
    role: str = UserRole.CLIENT,
    display_name: str = "",
    company_name: str = ""
) -> User:
    """
    Register a new principal together with its client or company record.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        role: 'client' or 'company'
        display_name: Optional display name
        company_name: Company name (company role only, falls back to display name)

    Returns:
        Created User instance

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
        UserRegistrationError: If the role is unknown
    """
    if role not in UserRole.values:
        raise UserRegistrationError(f"Unknown role: {role}")

    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError()

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name,
                role=role,
            )

            if role == UserRole.COMPANY:
                Company.objects.create(
                    user=user,
                    name=company_name or user.get_display_name(),
                )
            else:
                Client.objects.create(user=user)
    except IntegrityError:
        # Concurrent signup with the same email
        raise EmailAlreadyRegisteredError()

    logger.info("Registered %s principal %s", role, user.id)
    return user
