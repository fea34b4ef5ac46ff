import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import UserRole
from apps.accounts.services import register_user
from apps.catalog.models import Product
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
def grocer(db):
    """Company user owning the catalog environments."""
    return register_user(
        email='grocer@example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Green Grocer',
    )


@pytest.fixture
def rival_grocer(db):
    return register_user(
        email='rival.grocer@example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Rival Grocer',
    )


@pytest.fixture
def customer(db):
    """Client user."""
    return register_user(
        email='customer@example.com',
        password='TestPass123!',
        display_name='Customer',
    )


@pytest.fixture
def stranger(db):
    """Client user without memberships."""
    return register_user(
        email='stranger@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def market(grocer):
    return Environment.objects.create(name='Market Hall', company=grocer.company_profile)


@pytest.fixture
def stall(grocer):
    return Environment.objects.create(name='Street Stall', company=grocer.company_profile)


@pytest.fixture
def rival_market(rival_grocer):
    return Environment.objects.create(name='Rival Hall', company=rival_grocer.company_profile)


@pytest.fixture
def customer_in_market(customer, market):
    return Membership.objects.create(client=customer.client_profile, environment=market)


@pytest.fixture
def customer_in_stall(customer, stall):
    return Membership.objects.create(client=customer.client_profile, environment=stall)


@pytest.fixture
def apple(market):
    return Product.objects.create(
        environment=market,
        name='Apple',
        price=Decimal('0.60'),
        barcode='2000000000107',
    )


@pytest.fixture
def banana(market):
    return Product.objects.create(
        environment=market,
        name='Banana',
        price=Decimal('0.35'),
        barcode='2000000000206',
    )


@pytest.fixture
def stall_apple(stall):
    """Product in the stall sharing the market apple's barcode."""
    return Product.objects.create(
        environment=stall,
        name='Stall Apple',
        price=Decimal('0.70'),
        barcode='2000000000107',
    )


@pytest.fixture
def rival_apple(rival_market):
    return Product.objects.create(
        environment=rival_market,
        name='Rival Apple',
        price=Decimal('0.50'),
        barcode='2000000000107',
    )


@pytest.fixture
def grocer_client(grocer):
    """Return API client authenticated as the grocer."""
    return _authenticate(grocer)


@pytest.fixture
def rival_grocer_client(rival_grocer):
    return _authenticate(rival_grocer)


@pytest.fixture
def customer_client(customer):
    """Return API client authenticated as the customer."""
    return _authenticate(customer)


@pytest.fixture
def stranger_client(stranger):
    return _authenticate(stranger)
