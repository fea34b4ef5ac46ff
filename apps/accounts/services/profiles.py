"""
Profile lookup service.

A principal is exactly one of client or company. The profile returned to
callers is a tagged variant instead of a dict with role-dependent keys.
"""

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from django.db.models import Sum

from apps.accounts.models import Client, Company, User, UserRole
from .exceptions import NotAClientError, NotACompanyError


@dataclass(frozen=True)
class ClientProfile:
    client_id: UUID
    points: int

    kind = UserRole.CLIENT


@dataclass(frozen=True)
class CompanyProfile:
    company_id: UUID
    name: str

    kind = UserRole.COMPANY


@dataclass(frozen=True)
class Profile:
    user_id: UUID
    email: str
    display_name: str
    payload: Optional[Union[ClientProfile, CompanyProfile]]

    @property
    def role(self):
        # Staff accounts made with createsuperuser have no profile record
        return self.payload.kind if self.payload is not None else None


def get_client_for_user(user: User) -> Client:
    try:
        return Client.objects.select_related('user').get(user_id=user.id)
    except Client.DoesNotExist:
        raise NotAClientError()


def get_company_for_user(user: User) -> Company:
    try:
        return Company.objects.select_related('user').get(user_id=user.id)
    except Company.DoesNotExist:
        raise NotACompanyError()


def get_profile(user: User) -> Profile:
    """
    Build the tagged profile of a principal.

    The variant follows the profile record that exists, the same check the
    IsClient and IsCompany permissions make. Client points are summed over
    all of the client's memberships.
    """
    payload = None
    if user.is_company:
        company = user.company_profile
        payload = CompanyProfile(company_id=company.id, name=company.name)
    elif user.is_client:
        client = user.client_profile
        points = client.memberships.aggregate(total=Sum('points'))['total'] or 0
        payload = ClientProfile(client_id=client.id, points=points)

    return Profile(
        user_id=user.id,
        email=user.email,
        display_name=user.get_display_name(),
        payload=payload,
    )
