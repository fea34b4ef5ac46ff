"""
Environment management service.

Handles environment CRUD for the owning company.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Count, QuerySet

from apps.accounts.models import Company
from apps.environments.models import Environment

from .exceptions import (
    EnvironmentNotFoundError,
    EnvironmentAccessDeniedError,
)

logger = logging.getLogger(__name__)


def create_environment(*, company: Company, name: str) -> Environment:
    """
    Create a new environment owned by a company.

    Args:
        company: Owning company
        name: Environment name

    Returns:
        Created Environment instance
    """
    environment = Environment.objects.create(name=name, company=company)
    logger.info("Company %s created environment %s", company.id, environment.id)
    return environment


def get_environment(*, environment_id: UUID) -> Environment:
    """
    Get an environment by ID.

    Raises:
        EnvironmentNotFoundError: If environment doesn't exist
    """
    try:
        return (
            Environment.objects
            .select_related('company')
            .get(id=environment_id)
        )
    except Environment.DoesNotExist:
        raise EnvironmentNotFoundError(f"Environment with ID {environment_id} not found")


def get_owned_environment(*, environment_id: UUID, company: Company, lock: bool = False) -> Environment:
    """
    Get an environment and verify the company owns it.

    Args:
        environment_id: UUID of the environment
        company: Company that must own it
        lock: Take a row lock (only meaningful inside a transaction)

    Raises:
        EnvironmentNotFoundError: If environment doesn't exist
        EnvironmentAccessDeniedError: If another company owns it
    """
    queryset = Environment.objects.select_related('company')
    if lock:
        queryset = queryset.select_for_update(of=('self',))

    try:
        environment = queryset.get(id=environment_id)
    except Environment.DoesNotExist:
        raise EnvironmentNotFoundError(f"Environment with ID {environment_id} not found")

    if not environment.is_owned_by(company):
        logger.warning(
            "Company %s denied access to environment %s",
            company.id, environment_id
        )
        raise EnvironmentAccessDeniedError()

    return environment


@transaction.atomic
def update_environment(*, environment_id: UUID, company: Company, name: str) -> Environment:
    """
    Rename an environment (owner only).

    Uses select_for_update to prevent concurrent modifications.

    Raises:
        EnvironmentNotFoundError: If environment doesn't exist
        EnvironmentAccessDeniedError: If company is not the owner
    """
    environment = get_owned_environment(
        environment_id=environment_id,
        company=company,
        lock=True,
    )
    environment.name = name
    environment.save(update_fields=['name', 'updated_at'])
    return environment


def list_company_environments(*, company: Company) -> QuerySet[Environment]:
    """Environments owned by a company, with member counts."""
    return (
        Environment.objects
        .filter(company=company)
        .annotate(member_count=Count('memberships'))
        .order_by('created_at')
    )


def get_visible_environment(*, environment_id: UUID, user) -> Environment:
    """
    Get an environment the principal may read from.

    The owning company and member clients can see an environment's
    catalog and statistics; everybody else is rejected.

    Raises:
        EnvironmentNotFoundError: If environment doesn't exist
        EnvironmentAccessDeniedError: If the principal is neither owner nor member
    """
    environment = get_environment(environment_id=environment_id)

    if user.is_company and environment.is_owned_by(user.company_profile):
        return environment
    if user.is_client and environment.has_member(user.client_profile):
        return environment

    logger.warning("User %s denied read access to environment %s", user.id, environment_id)
    raise EnvironmentAccessDeniedError("You are not a member or owner of this environment.")
