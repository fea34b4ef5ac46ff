import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.accounts.services import register_user


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a client user."""
    return register_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def company_user(db):
    """Create and return a company user."""
    return register_user(
        email='company@example.com',
        password='TestPass123!',
        role=UserRole.COMPANY,
        display_name='Company Admin',
        company_name='Acme Stores',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    user = register_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
    )
    user.is_active = False
    user.save(update_fields=['is_active'])
    return user


@pytest.fixture
def bare_user(db):
    """User with neither a client nor a company record."""
    return User.objects.create_user(email='bare@example.com', password='TestPass123!')


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def company_client(company_user):
    """Return an API client authenticated as the company user."""
    client = APIClient()
    refresh = RefreshToken.for_user(company_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
