import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import UserRole
from apps.accounts.services import register_user
from apps.catalog.models import Product
from apps.environments.models import Environment, Membership
from apps.purchases.services import PurchaseRecorder


def _authenticate(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def store_company(db):
    """Company owning the analytics environments."""
    return register_user(
        email='stats@store.example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Stats Store',
    )


@pytest.fixture
def rival_company(db):
    return register_user(
        email='stats@rival.example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Rival Store',
    )


@pytest.fixture
def alice(db):
    return register_user(email='alice@example.com', password='TestPass123!', display_name='Alice')


@pytest.fixture
def bob(db):
    return register_user(email='bob@example.com', password='TestPass123!', display_name='Bob')


@pytest.fixture
def carol(db):
    """Client without a display name."""
    return register_user(email='carol@example.com', password='TestPass123!')


@pytest.fixture
def stranger(db):
    """Client who is not a member of the store."""
    return register_user(email='stranger@example.com', password='TestPass123!', display_name='Stranger')


# =============================================================================
# Environments, memberships, products
# =============================================================================

@pytest.fixture
def store(store_company):
    return Environment.objects.create(name='Downtown', company=store_company.company_profile)


@pytest.fixture
def branch(store_company):
    return Environment.objects.create(name='Airport', company=store_company.company_profile)


@pytest.fixture
def rival_env(rival_company):
    return Environment.objects.create(name='Rival', company=rival_company.company_profile)


@pytest.fixture
def members(store, alice, bob, carol):
    """Alice, Bob and Carol joined the store, in that order."""
    return [
        Membership.objects.create(client=user.client_profile, environment=store)
        for user in (alice, bob, carol)
    ]


@pytest.fixture
def product_a(store):
    return Product.objects.create(environment=store, name='Product A', price=Decimal('10.00'), barcode='0001')


@pytest.fixture
def product_b(store):
    return Product.objects.create(environment=store, name='Product B', price=Decimal('5.00'), barcode='0002')


@pytest.fixture
def buy():
    """Record a purchase through the service, like a scan would."""
    def _buy(user, environment, product):
        return PurchaseRecorder.record_purchase(
            client_id=user.client_profile.id,
            environment_id=environment.id,
            product_id=product.id,
        )
    return _buy


@pytest.fixture
def store_sales(members, alice, bob, store, product_a, product_b, buy):
    """
    Alice buys A then B (15.00, 2 purchases).
    Bob buys B three times (15.00, 3 purchases).
    Carol buys nothing.
    """
    buy(alice, store, product_a)
    buy(alice, store, product_b)
    for _ in range(3):
        buy(bob, store, product_b)


# =============================================================================
# Authenticated clients
# =============================================================================

@pytest.fixture
def company_client(store_company):
    return _authenticate(store_company)


@pytest.fixture
def rival_client(rival_company):
    return _authenticate(rival_company)


@pytest.fixture
def alice_client(alice):
    return _authenticate(alice)


@pytest.fixture
def stranger_client(stranger):
    return _authenticate(stranger)
