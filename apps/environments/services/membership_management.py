"""
Membership management service.

Handles joining and leaving environments and points accrual.
At most one membership exists per (client, environment); the database
unique constraint is the final arbiter for concurrent joins.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import F, QuerySet

from apps.accounts.models import Client, Company
from apps.environments.models import Environment, Membership

from .environment_management import get_owned_environment
from .exceptions import (
    EnvironmentNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    NotAClientError,
    InvalidPointsDeltaError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def join_environment(*, client_id: UUID, environment_id: UUID) -> Membership:
    """
    Join an environment with zero points.

    Uses row-level locking on the environment to serialize joins.

    Args:
        client_id: UUID of the joining client
        environment_id: UUID of the environment

    Returns:
        Created Membership instance

    Raises:
        NotAClientError: If client_id has no Client record
        EnvironmentNotFoundError: If environment doesn't exist
        AlreadyMemberError: If a membership already exists (also from IntegrityError)
    """
    if not Client.objects.filter(id=client_id).exists():
        raise NotAClientError(f"No client with ID {client_id}")

    try:
        environment = (
            Environment.objects
            .select_for_update()
            .get(id=environment_id)
        )
    except Environment.DoesNotExist:
        raise EnvironmentNotFoundError(f"Environment with ID {environment_id} not found")

    if Membership.objects.filter(client_id=client_id, environment=environment).exists():
        raise AlreadyMemberError(f"Client is already a member of {environment.name}")

    try:
        with transaction.atomic():
            membership = Membership.objects.create(
                client_id=client_id,
                environment=environment,
                points=0,
            )
    except IntegrityError:
        # Database constraint caught a concurrent duplicate join
        raise AlreadyMemberError(f"Client is already a member of {environment.name}")

    logger.info("Client %s joined environment %s", client_id, environment_id)
    return membership


@transaction.atomic
def leave_environment(*, client_id: UUID, environment_id: UUID) -> None:
    """
    Leave an environment.

    Purchase history recorded in the environment is kept.

    Raises:
        NotMemberError: If no membership exists
    """
    try:
        membership = (
            Membership.objects
            .select_for_update()
            .get(client_id=client_id, environment_id=environment_id)
        )
    except Membership.DoesNotExist:
        raise NotMemberError()

    membership.delete()
    logger.info("Client %s left environment %s", client_id, environment_id)


def get_membership(*, client_id: UUID, environment_id: UUID, lock: bool = False) -> Membership:
    """
    Resolve the membership of a client in an environment.

    Args:
        lock: Take a row lock (only meaningful inside a transaction)

    Raises:
        NotMemberError: If no membership exists
    """
    queryset = Membership.objects.select_related('environment', 'environment__company')
    if lock:
        queryset = queryset.select_for_update(of=('self',))

    try:
        return queryset.get(client_id=client_id, environment_id=environment_id)
    except Membership.DoesNotExist:
        raise NotMemberError()


def list_memberships(*, client_id: UUID) -> QuerySet[Membership]:
    """
    Memberships of a client, oldest first.

    The queryset is lazy; nothing is fetched until iterated.
    """
    return (
        Membership.objects
        .filter(client_id=client_id)
        .select_related('environment', 'environment__company')
        .order_by('joined_at', 'id')
    )


def get_environment_members(*, environment_id: UUID, company: Company) -> QuerySet[Membership]:
    """
    Members of an environment owned by the company, highest points first.

    Raises:
        EnvironmentNotFoundError: If environment doesn't exist
        EnvironmentAccessDeniedError: If company is not the owner
    """
    get_owned_environment(environment_id=environment_id, company=company)

    return (
        Membership.objects
        .filter(environment_id=environment_id)
        .select_related('client__user')
        .order_by('-points', 'joined_at')
    )


@transaction.atomic
def accrue_points(*, client_id: UUID, environment_id: UUID, delta: int) -> Membership:
    """
    Atomically add points to a membership.

    The increment is a single UPDATE with an F() expression, so concurrent
    accruals never lose a point. When called from inside another atomic
    block it joins that transaction.

    Raises:
        InvalidPointsDeltaError: If delta is negative
        NotMemberError: If no membership exists
    """
    if delta < 0:
        raise InvalidPointsDeltaError()

    updated = (
        Membership.objects
        .filter(client_id=client_id, environment_id=environment_id)
        .update(points=F('points') + delta)
    )
    if not updated:
        raise NotMemberError()

    return Membership.objects.get(client_id=client_id, environment_id=environment_id)
