import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import UserRole
from apps.accounts.services import register_user
from apps.environments.models import Environment, Membership


def _authenticate(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def company_user(db):
    """Company user owning environments."""
    return register_user(
        email='owner@bakery.example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Bakery',
    )


@pytest.fixture
def rival_company_user(db):
    return register_user(
        email='owner@rival.example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Rival Bakery',
    )


@pytest.fixture
def client_user(db):
    """Client user joining environments."""
    return register_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Member',
    )


@pytest.fixture
def other_client_user(db):
    return register_user(
        email='other.member@example.com',
        password='TestPass123!',
        display_name='Other Member',
    )


@pytest.fixture
def environment(company_user):
    """Environment owned by company_user."""
    return Environment.objects.create(name='Old Town', company=company_user.company_profile)


@pytest.fixture
def second_environment(company_user):
    return Environment.objects.create(name='Harbour', company=company_user.company_profile)


@pytest.fixture
def rival_environment(rival_company_user):
    return Environment.objects.create(name='Rival Corner', company=rival_company_user.company_profile)


@pytest.fixture
def membership(client_user, environment):
    """client_user is a member of environment with zero points."""
    return Membership.objects.create(client=client_user.client_profile, environment=environment)


@pytest.fixture
def company_client(company_user):
    """Return API client authenticated as the company."""
    return _authenticate(company_user)


@pytest.fixture
def rival_company_client(rival_company_user):
    return _authenticate(rival_company_user)


@pytest.fixture
def member_client(client_user):
    """Return API client authenticated as the client user."""
    return _authenticate(client_user)


@pytest.fixture
def other_member_client(other_client_user):
    return _authenticate(other_client_user)
