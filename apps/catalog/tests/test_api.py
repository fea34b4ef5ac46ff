import pytest
import uuid
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.catalog.models import Product


# =============================================================================
# Product List / Retrieve Tests
# =============================================================================

@pytest.mark.django_db
class TestProductList:
    """Tests for GET /api/catalog/products/?environment=<id>"""

    def test_owner_lists_products(self, grocer_client, market, apple, banana, stall_apple):
        url = reverse('catalog:product-list')
        response = grocer_client.get(url, {'environment': str(market.id)})

        assert response.status_code == status.HTTP_200_OK
        names = [product['name'] for product in response.data['results']]
        assert names == ['Apple', 'Banana']

    def test_member_lists_products(self, customer_client, market, apple, customer_in_market):
        url = reverse('catalog:product-list')
        response = customer_client.get(url, {'environment': str(market.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['environment_name'] == 'Market Hall'

    def test_non_member_cannot_list(self, stranger_client, market, apple):
        url = reverse('catalog:product-list')
        response = stranger_client.get(url, {'environment': str(market.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'forbidden'

    def test_environment_parameter_required(self, grocer_client):
        url = reverse('catalog:product-list')
        response = grocer_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'environment' in response.data['details']

    def test_unknown_environment(self, grocer_client):
        url = reverse('catalog:product-list')
        response = grocer_client.get(url, {'environment': str(uuid.uuid4())})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestProductRetrieve:
    """Tests for GET /api/catalog/products/{id}/"""

    def test_member_retrieves(self, customer_client, apple, customer_in_market):
        url = reverse('catalog:product-detail', kwargs={'pk': apple.id})
        response = customer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['price'] == '0.60'
        assert response.data['barcode'] == '2000000000107'

    def test_non_member_cannot_retrieve(self, stranger_client, apple):
        url = reverse('catalog:product-detail', kwargs={'pk': apple.id})
        response = stranger_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_retrieve_missing(self, grocer_client):
        url = reverse('catalog:product-detail', kwargs={'pk': uuid.uuid4()})
        response = grocer_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'


# =============================================================================
# Product Write Tests
# =============================================================================

@pytest.mark.django_db
class TestProductWrite:
    """Tests for POST/PATCH/DELETE on products."""

    def test_create_product(self, grocer_client, market):
        url = reverse('catalog:product-list')
        response = grocer_client.post(url, {
            'environment': str(market.id),
            'name': 'Pear',
            'price': '0.80',
            'barcode': '2000000000305',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Pear'
        assert response.data['environment_id'] == str(market.id)

    def test_create_duplicate_barcode(self, grocer_client, market, apple):
        url = reverse('catalog:product-list')
        response = grocer_client.post(url, {
            'environment': str(market.id),
            'name': 'Another Apple',
            'price': '0.90',
            'barcode': apple.barcode,
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['kind'] == 'conflict'

    def test_create_zero_price(self, grocer_client, market):
        url = reverse('catalog:product-list')
        response = grocer_client.post(url, {
            'environment': str(market.id),
            'name': 'Freebie',
            'price': '0.00',
            'barcode': '2000000000404',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation_error'

    def test_create_in_foreign_environment(self, rival_grocer_client, market):
        url = reverse('catalog:product-list')
        response = rival_grocer_client.post(url, {
            'environment': str(market.id),
            'name': 'Intruder',
            'price': '1.00',
            'barcode': '2000000000503',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Product.objects.filter(name='Intruder').exists()

    def test_client_cannot_create(self, customer_client, market, customer_in_market):
        url = reverse('catalog:product-list')
        response = customer_client.post(url, {
            'environment': str(market.id),
            'name': 'Homemade',
            'price': '1.00',
            'barcode': '2000000000701',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_price(self, grocer_client, apple):
        url = reverse('catalog:product-detail', kwargs={'pk': apple.id})
        response = grocer_client.patch(url, {'price': '0.95'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        apple.refresh_from_db()
        assert apple.price == Decimal('0.95')

    def test_barcode_is_not_updatable(self, grocer_client, apple):
        url = reverse('catalog:product-detail', kwargs={'pk': apple.id})
        response = grocer_client.patch(url, {'barcode': '9999'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        apple.refresh_from_db()
        assert apple.barcode == '2000000000107'

    def test_delete_product(self, grocer_client, apple):
        url = reverse('catalog:product-detail', kwargs={'pk': apple.id})
        response = grocer_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Product.objects.filter(id=apple.id).exists()

    def test_foreign_company_cannot_delete(self, rival_grocer_client, apple):
        url = reverse('catalog:product-detail', kwargs={'pk': apple.id})
        response = rival_grocer_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Product.objects.filter(id=apple.id).exists()


# =============================================================================
# Barcode Lookup Tests
# =============================================================================

@pytest.mark.django_db
class TestBarcodeLookupEndpoint:
    """Tests for GET /api/catalog/lookup/"""

    def test_lookup_unique(self, customer_client, apple, customer_in_market):
        url = reverse('catalog:barcode-lookup')
        response = customer_client.get(url, {'barcode': apple.barcode})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'unique'
        assert response.data['matches'][0]['id'] == str(apple.id)

    def test_lookup_multiple(self, customer_client, apple, stall_apple, customer_in_market, customer_in_stall):
        url = reverse('catalog:barcode-lookup')
        response = customer_client.get(url, {'barcode': apple.barcode})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'multiple'
        environments = {match['environment_name'] for match in response.data['matches']}
        assert environments == {'Market Hall', 'Street Stall'}

    def test_lookup_restricted_to_environment(
        self, customer_client, stall, apple, stall_apple, customer_in_market, customer_in_stall
    ):
        url = reverse('catalog:barcode-lookup')
        response = customer_client.get(url, {'barcode': apple.barcode, 'environment': str(stall.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'unique'
        assert response.data['matches'][0]['name'] == 'Stall Apple'

    def test_lookup_no_match(self, customer_client, customer_in_market):
        url = reverse('catalog:barcode-lookup')
        response = customer_client.get(url, {'barcode': '0000000000000'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'none'
        assert response.data['matches'] == []

    def test_owner_lookup_in_environment(self, grocer_client, market, apple):
        url = reverse('catalog:barcode-lookup')
        response = grocer_client.get(url, {'barcode': apple.barcode, 'environment': str(market.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'unique'

    def test_company_lookup_requires_environment(self, grocer_client, apple):
        url = reverse('catalog:barcode-lookup')
        response = grocer_client.get(url, {'barcode': apple.barcode})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_barcode_required(self, customer_client):
        url = reverse('catalog:barcode-lookup')
        response = customer_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
