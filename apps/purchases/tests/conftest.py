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
def shop_owner(db):
    """Company user owning the test environments."""
    return register_user(
        email='owner@shop.example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Corner Shop',
    )


@pytest.fixture
def other_owner(db):
    """Company user owning an unrelated environment."""
    return register_user(
        email='owner@other.example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        company_name='Other Shop',
    )


@pytest.fixture
def shopper(db):
    """Client user who scans purchases."""
    return register_user(
        email='shopper@example.com',
        password='TestPass123!',
        display_name='Shopper',
    )


@pytest.fixture
def second_shopper(db):
    return register_user(
        email='second@example.com',
        password='TestPass123!',
        display_name='Second Shopper',
    )


@pytest.fixture
def outsider(db):
    """Client user who is not a member of any environment."""
    return register_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def shop_env(shop_owner):
    return Environment.objects.create(name='Main Store', company=shop_owner.company_profile)


@pytest.fixture
def kiosk_env(shop_owner):
    return Environment.objects.create(name='Station Kiosk', company=shop_owner.company_profile)


@pytest.fixture
def other_env(other_owner):
    return Environment.objects.create(name='Elsewhere', company=other_owner.company_profile)


@pytest.fixture
def shopper_membership(shopper, shop_env):
    return Membership.objects.create(client=shopper.client_profile, environment=shop_env)


@pytest.fixture
def shopper_kiosk_membership(shopper, kiosk_env):
    return Membership.objects.create(client=shopper.client_profile, environment=kiosk_env)


@pytest.fixture
def second_shopper_membership(second_shopper, shop_env):
    return Membership.objects.create(client=second_shopper.client_profile, environment=shop_env)


@pytest.fixture
def coffee(shop_env):
    """Product in the main store."""
    return Product.objects.create(
        environment=shop_env,
        name='Coffee',
        price=Decimal('3.50'),
        barcode='4006381333931',
    )


@pytest.fixture
def kiosk_coffee(kiosk_env):
    """Product in the kiosk sharing the main store's coffee barcode."""
    return Product.objects.create(
        environment=kiosk_env,
        name='Kiosk Coffee',
        price=Decimal('2.90'),
        barcode='4006381333931',
    )


@pytest.fixture
def croissant(shop_env):
    return Product.objects.create(
        environment=shop_env,
        name='Croissant',
        price=Decimal('1.80'),
        barcode='2000000000015',
    )


@pytest.fixture
def foreign_product(other_env):
    return Product.objects.create(
        environment=other_env,
        name='Foreign Tea',
        price=Decimal('2.00'),
        barcode='9000000000001',
    )


@pytest.fixture
def owner_client(shop_owner):
    """Return API client authenticated as the shop owner."""
    return _authenticate(shop_owner)


@pytest.fixture
def other_owner_client(other_owner):
    return _authenticate(other_owner)


@pytest.fixture
def shopper_client(shopper):
    """Return API client authenticated as the shopper."""
    return _authenticate(shopper)


@pytest.fixture
def second_shopper_client(second_shopper):
    return _authenticate(second_shopper)


@pytest.fixture
def outsider_client(outsider):
    return _authenticate(outsider)
