import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.invoices.services import record_order
from apps.products.models import Product, Rating


def detail_url(scan_code):
    return reverse('products:product-detail', kwargs={'scan_code': scan_code})


def rating_url(scan_code):
    return reverse('products:product-rating', kwargs={'scan_code': scan_code})


# =============================================================================
# Read Tests
# =============================================================================

@pytest.mark.django_db
class TestProductRead:
    """Tests for GET /api/products/ and /api/products/{scan_code}/"""

    def test_requires_session(self, api_client, product):
        response = api_client.get(reverse('products:product-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list(self, authenticated_client, product, other_product, fake_catalog):
        response = authenticated_client.get(reverse('products:product-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [p['scan_code'] for p in response.data] == [product.scan_code, other_product.scan_code]

    def test_list_rejects_bad_limit(self, authenticated_client):
        response = authenticated_client.get(reverse('products:product-list'), {'limit': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_search_empty_query_returns_all(self, authenticated_client, product, other_product):
        response = authenticated_client.get(reverse('products:product-list'), {'query': ''})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2

    def test_search_by_name(self, authenticated_client, product, other_product):
        response = authenticated_client.get(reverse('products:product-list'), {'query': 'coca'})

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Coca-Cola']

    def test_search_without_match(self, authenticated_client, product):
        response = authenticated_client.get(reverse('products:product-list'), {'query': 'zzz'})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'No products found for the query'

    def test_retrieve_known_product(self, authenticated_client, product, fake_catalog):
        response = authenticated_client.get(detail_url(product.scan_code))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Nutella'
        assert response.data['price'] == Decimal('2.50')
        assert response.data['ratings'] == []
        assert fake_catalog.calls == []

    def test_retrieve_fetches_unknown_product(self, authenticated_client, fake_catalog, catalog_entry):
        fake_catalog.entries = {'3274080005003': catalog_entry}

        response = authenticated_client.get(detail_url('3274080005003'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['category'] == 'Boissons, Eaux'
        assert Product.objects.filter(scan_code='3274080005003').exists()

    def test_retrieve_unknown_everywhere(self, authenticated_client, fake_catalog):
        response = authenticated_client.get(detail_url('0000'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Product not found'}

    def test_retrieve_source_down(self, authenticated_client, failing_catalog):
        response = authenticated_client.get(detail_url('0000'))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert 'error' in response.data


# =============================================================================
# Admin Write Tests
# =============================================================================

@pytest.mark.django_db
class TestProductWrite:

    def test_create_as_moderator(self, moderator_client):
        data = {'scan_code': '42', 'name': 'Chips', 'category': 'Snacks', 'price': '1.99'}
        response = moderator_client.post(reverse('products:product-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Product.objects.get(scan_code='42').price == Decimal('1.99')

    def test_create_forbidden_for_user(self, authenticated_client):
        data = {'scan_code': '42', 'name': 'Chips'}
        response = authenticated_client.post(reverse('products:product-list'), data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Product.objects.filter(scan_code='42').exists()

    def test_create_duplicate(self, admin_client, product):
        data = {'scan_code': product.scan_code, 'name': 'Copy'}
        response = admin_client.post(reverse('products:product-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Product already exists'

    def test_update(self, admin_client, product):
        response = admin_client.put(detail_url(product.scan_code), {'stock': 99}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stock'] == 99

    def test_delete(self, admin_client, product):
        response = admin_client.delete(detail_url(product.scan_code))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Product deleted successfully'
        assert not Product.objects.filter(pk=product.pk).exists()

    def test_delete_forbidden_for_user(self, authenticated_client, product):
        response = authenticated_client.delete(detail_url(product.scan_code))

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Rating Tests
# =============================================================================

@pytest.mark.django_db
class TestRatingApi:
    """Tests for PUT /api/products/{scan_code}/rating/"""

    def test_rate_and_read_back(self, authenticated_client, product, user, fake_catalog):
        response = authenticated_client.put(rating_url(product.scan_code), {'score': 4, 'comment': 'Top'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['average_rating'] == 4

        read = authenticated_client.get(detail_url(product.scan_code))
        assert read.data['average_rating'] == 4
        assert read.data['ratings'][0]['username'] == user.username
        assert read.data['ratings'][0]['comment'] == 'Top'

    def test_rerating_replaces(self, authenticated_client, product, user):
        authenticated_client.put(rating_url(product.scan_code), {'score': 1}, format='json')
        response = authenticated_client.put(rating_url(product.scan_code), {'score': 3}, format='json')

        assert response.data['average_rating'] == 3
        assert Rating.objects.filter(product=product, user=user).count() == 1

    @pytest.mark.parametrize('score', [-1, 5.1, 'abc', True, False])
    def test_invalid_score(self, authenticated_client, product, score):
        response = authenticated_client.put(rating_url(product.scan_code), {'score': score}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid rating value'
        assert not product.ratings.exists()

    def test_missing_score(self, authenticated_client, product):
        response = authenticated_client.put(rating_url(product.scan_code), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid rating value'

    def test_unknown_product(self, authenticated_client):
        response = authenticated_client.put(rating_url('nope'), {'score': 3}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestBoughtProducts:
    """Tests for GET /api/products/bought/"""

    def test_bought(self, authenticated_client, product, other_product, user):
        record_order(owner=user, scan_codes=[product.scan_code], external_order_id='O-1')
        authenticated_client.put(rating_url(product.scan_code), {'score': 2}, format='json')

        response = authenticated_client.get(reverse('products:product-bought'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['scan_code'] == product.scan_code
        assert response.data[0]['rating'] == 2

    def test_bought_nothing(self, authenticated_client, product):
        response = authenticated_client.get(reverse('products:product-bought'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []
