"""
Service layer unit tests for products app.

Tests cover:
- Catalog source client parsing
- Price generation bands
- Lookup with lazy refresh and staleness
- Rating upsert and average recomputation
- Name search and purchased products
"""

import random
import pytest
import requests
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock
from django.utils import timezone

from apps.invoices.services import record_order
from apps.products.models import Product, Rating
from apps.products.services import (
    CatalogSourceError,
    DuplicateProductError,
    InvalidRatingError,
    OpenFoodFactsClient,
    ProductNotFoundError,
    create_product,
    delete_product,
    generate_price,
    get_or_refresh_product,
    list_products,
    list_purchased_products,
    price_band,
    rate_product,
    search_products_by_name,
    update_product,
)
from apps.products.services.catalog_source import split_ingredients


def make_stale(product, hours=25):
    Product.objects.filter(pk=product.pk).update(updated_at=timezone.now() - timedelta(hours=hours))
    product.refresh_from_db()


def fake_response(status_code=200, payload=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError('not json')
    else:
        response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} error')
    else:
        response.raise_for_status.return_value = None
    return response


# =============================================================================
# Catalog Source Client Tests
# =============================================================================

class TestOpenFoodFactsClient:

    def make_client(self, response=None, error=None):
        session = MagicMock()
        if error is not None:
            session.get.side_effect = error
        else:
            session.get.return_value = response
        return OpenFoodFactsClient(base_url='https://off.test/', timeout=3, session=session), session

    def test_fetch_maps_fields(self):
        payload = {
            'status': 1,
            'product': {
                'product_name': 'Eau minérale',
                'generic_name': 'Eau de source',
                'categories': 'Boissons, Eaux',
                'ingredients_text_fr': 'Eau, minéraux ',
                'ingredients_text': 'Water',
                'image_url': 'https://img.test/eau.jpg',
            },
        }
        client, session = self.make_client(fake_response(payload=payload))

        entry = client.fetch('3274080005003')

        session.get.assert_called_once_with('https://off.test/api/v0/product/3274080005003.json', timeout=3)
        assert entry.name == 'Eau minérale'
        assert entry.description == 'Eau de source'
        assert entry.category == 'Boissons, Eaux'
        assert entry.ingredients == ['Eau', 'minéraux']
        assert entry.image_url == 'https://img.test/eau.jpg'

    def test_fetch_falls_back_to_generic_ingredients(self):
        payload = {'status': 1, 'product': {'product_name': 'Water', 'ingredients_text': 'Water'}}
        client, _ = self.make_client(fake_response(payload=payload))

        assert client.fetch('1').ingredients == ['Water']

    def test_fetch_unknown_product(self):
        client, _ = self.make_client(fake_response(payload={'status': 0, 'status_verbose': 'product not found'}))

        assert client.fetch('0000') is None

    def test_fetch_404(self):
        client, _ = self.make_client(fake_response(status_code=404))

        assert client.fetch('0000') is None

    def test_fetch_network_error(self):
        client, _ = self.make_client(error=requests.ConnectionError('boom'))

        with pytest.raises(CatalogSourceError):
            client.fetch('1234')

    def test_fetch_server_error(self):
        client, _ = self.make_client(fake_response(status_code=503))

        with pytest.raises(CatalogSourceError):
            client.fetch('1234')

    def test_fetch_non_json(self):
        client, _ = self.make_client(fake_response(json_error=True))

        with pytest.raises(CatalogSourceError):
            client.fetch('1234')

    def test_split_ingredients(self):
        assert split_ingredients('Sucre, , cacao ,lait') == ['Sucre', 'cacao', 'lait']
        assert split_ingredients(None) == []


# =============================================================================
# Pricing Tests
# =============================================================================

class TestPricing:

    @pytest.mark.parametrize('category,band', [
        ('Boissons, Eaux', (Decimal('1.00'), Decimal('5.00'))),
        ('Snacks sucrés', (Decimal('0.50'), Decimal('3.00'))),
        ('Produits frais, Yaourts', (Decimal('2.00'), Decimal('10.00'))),
        ('Epicerie', (Decimal('1.00'), Decimal('20.00'))),
        ('', (Decimal('1.00'), Decimal('20.00'))),
        (None, (Decimal('1.00'), Decimal('20.00'))),
    ])
    def test_price_band(self, category, band):
        assert price_band(category) == band

    @pytest.mark.parametrize('category', ['Boissons', 'Snacks', 'Produits frais', 'Autre'])
    def test_generated_price_stays_in_band(self, category):
        rng = random.Random(42)
        low, high = price_band(category)
        for _ in range(50):
            price = generate_price(category, rng=rng)
            assert low <= price <= high
            assert price == price.quantize(Decimal('0.01'))


# =============================================================================
# Lookup and Refresh Tests
# =============================================================================

@pytest.mark.django_db
class TestGetOrRefreshProduct:

    def test_unknown_code_is_fetched_and_stored(self, fake_catalog, catalog_entry):
        fake_catalog.entries = {'3274080005003': catalog_entry}

        product = get_or_refresh_product(scan_code='3274080005003')

        assert product.pk is not None
        assert product.name == 'Eau minérale'
        assert Decimal('1.00') <= product.price <= Decimal('5.00')
        assert product.average_rating == 0
        assert fake_catalog.calls == ['3274080005003']

    def test_unknown_code_not_in_source(self, fake_catalog):
        with pytest.raises(ProductNotFoundError):
            get_or_refresh_product(scan_code='0000')

        assert not Product.objects.filter(scan_code='0000').exists()

    def test_unknown_code_source_down(self, failing_catalog):
        with pytest.raises(CatalogSourceError):
            get_or_refresh_product(scan_code='0000')

    def test_fresh_product_is_not_refetched(self, fake_catalog, product):
        """Two lookups within the window leave the stored entry untouched."""
        before = product.updated_at

        first = get_or_refresh_product(scan_code=product.scan_code)
        second = get_or_refresh_product(scan_code=product.scan_code)

        assert fake_catalog.calls == []
        assert first.updated_at == before
        assert second.price == product.price

    def test_stale_product_is_refreshed_and_keeps_ratings(self, fake_catalog, catalog_entry, product, user):
        rate_product(scan_code=product.scan_code, user=user, score=4)
        make_stale(product)
        fake_catalog.entries = {product.scan_code: catalog_entry}

        refreshed = get_or_refresh_product(scan_code=product.scan_code)

        assert fake_catalog.calls == [product.scan_code]
        assert refreshed.name == 'Eau minérale'
        assert refreshed.average_rating == 4
        assert refreshed.ratings.count() == 1
        assert not refreshed.is_stale()

    def test_stale_product_served_when_source_down(self, failing_catalog, product):
        make_stale(product)

        served = get_or_refresh_product(scan_code=product.scan_code)

        assert served.name == 'Nutella'
        assert served.price == Decimal('2.50')

    def test_stale_product_kept_when_source_forgot_it(self, fake_catalog, product):
        make_stale(product)

        served = get_or_refresh_product(scan_code=product.scan_code)

        assert served.name == 'Nutella'
        assert served.is_stale()

    def test_staleness_boundary(self, product):
        now = timezone.now()
        assert not product.is_stale(now)
        assert product.is_stale(now + timedelta(hours=24, seconds=1))

    def test_list_products_pages(self, fake_catalog, product, other_product):
        assert [p.scan_code for p in list_products(limit=1)] == [product.scan_code]
        assert [p.scan_code for p in list_products(limit=1, offset=1)] == [other_product.scan_code]
        assert fake_catalog.calls == []


# =============================================================================
# Admin CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestProductManagement:

    def test_create_generates_price(self):
        product = create_product(scan_code='42', name='Chips', category='Snacks', rng=random.Random(1))

        assert Decimal('0.50') <= product.price <= Decimal('3.00')

    def test_create_keeps_given_price(self):
        product = create_product(scan_code='42', name='Chips', price=Decimal('9.99'))

        assert product.price == Decimal('9.99')

    def test_create_duplicate(self, product):
        with pytest.raises(DuplicateProductError):
            create_product(scan_code=product.scan_code, name='Copy')

    def test_update(self, product):
        updated = update_product(scan_code=product.scan_code, data={'stock': 3, 'price': Decimal('3.10')})

        assert updated.stock == 3
        assert updated.price == Decimal('3.10')
        assert updated.name == 'Nutella'

    def test_update_unknown(self):
        with pytest.raises(ProductNotFoundError):
            update_product(scan_code='nope', data={'stock': 1})

    def test_delete(self, product):
        delete_product(scan_code=product.scan_code)

        assert not Product.objects.filter(pk=product.pk).exists()
        with pytest.raises(ProductNotFoundError):
            delete_product(scan_code=product.scan_code)


# =============================================================================
# Rating Tests
# =============================================================================

@pytest.mark.django_db
class TestRateProduct:

    def test_first_rating_sets_average(self, product, user):
        rated = rate_product(scan_code=product.scan_code, user=user, score=4, comment='Bon')

        assert rated.average_rating == 4
        rating = Rating.objects.get(product=product, user=user)
        assert rating.comment == 'Bon'

    def test_second_rating_replaces_first(self, product, user, other_user):
        rate_product(scan_code=product.scan_code, user=user, score=2)
        rate_product(scan_code=product.scan_code, user=other_user, score=4)
        rated = rate_product(scan_code=product.scan_code, user=user, score=5)

        assert product.ratings.count() == 2
        assert rated.average_rating == pytest.approx(4.5)

    @pytest.mark.parametrize('score', [0, 5, 2.5, '3'])
    def test_accepts_boundaries(self, product, user, score):
        rated = rate_product(scan_code=product.scan_code, user=user, score=score)

        assert rated.average_rating == float(score)

    @pytest.mark.parametrize('score', [-1, 5.1, 'abc', None, True, float('nan')])
    def test_rejects_out_of_range(self, product, user, score):
        with pytest.raises(InvalidRatingError):
            rate_product(scan_code=product.scan_code, user=user, score=score)

        assert not product.ratings.exists()

    def test_unknown_product_wins_over_bad_score(self, user):
        with pytest.raises(ProductNotFoundError):
            rate_product(scan_code='nope', user=user, score=99)

    def test_rating_does_not_touch_other_fields(self, product, user):
        rated = rate_product(scan_code=product.scan_code, user=user, score=3)

        assert rated.price == Decimal('2.50')
        assert rated.name == 'Nutella'


# =============================================================================
# Search and Purchased Products Tests
# =============================================================================

@pytest.mark.django_db
class TestSearch:

    def test_empty_query_returns_everything(self, product, other_product):
        results = search_products_by_name(query='')

        assert {p.scan_code for p in results} == {product.scan_code, other_product.scan_code}

    def test_case_insensitive_substring(self, product, other_product):
        results = search_products_by_name(query='tell')

        assert [p.scan_code for p in results] == [product.scan_code]

    def test_no_match(self, product):
        with pytest.raises(ProductNotFoundError):
            search_products_by_name(query='zzz')


@pytest.mark.django_db
class TestPurchasedProducts:

    def test_lists_bought_products_with_own_rating(self, product, other_product, user, other_user):
        record_order(owner=user, scan_codes=[product.scan_code, product.scan_code], external_order_id='O-1')
        record_order(owner=other_user, scan_codes=[other_product.scan_code], external_order_id='O-2')
        rate_product(scan_code=product.scan_code, user=other_user, score=1)

        bought = list(list_purchased_products(user=user))

        assert [p.scan_code for p in bought] == [product.scan_code]
        assert bought[0].user_rating == 0

        rate_product(scan_code=product.scan_code, user=user, score=5)
        assert list_purchased_products(user=user).get().user_rating == 5

    def test_nothing_bought(self, product, user):
        assert not list_purchased_products(user=user).exists()
