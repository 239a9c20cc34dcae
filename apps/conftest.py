"""Fixtures shared by every app's tests: accounts, clients and fake upstreams."""

import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from apps.accounts.models import User, Role
from apps.accounts.tokens import build_session_token
from apps.products.models import Product
from apps.products.services import CatalogEntry, CatalogSourceError


class FakeCatalogClient:
    """Stands in for OpenFoodFactsClient; ``entries`` maps scan code to CatalogEntry."""

    def __init__(self, entries=None, error=None):
        self.entries = entries or {}
        self.error = error
        self.calls = []

    def fetch(self, scan_code):
        self.calls.append(scan_code)
        if self.error is not None:
            raise self.error
        return self.entries.get(scan_code)


class FakePayPalClient:
    """Stands in for PayPalClient and records every call."""

    def __init__(self, order_id='ORDER-1', capture_status='COMPLETED'):
        self.order_id = order_id
        self.capture_status = capture_status
        self.created = []
        self.captured = []

    def get_access_token(self):
        return 'fake-access-token'

    def create_order(self, access_token, *, total, reference_id):
        self.created.append({'total': total, 'reference_id': reference_id})
        return {
            'id': self.order_id,
            'status': 'CREATED',
            'links': [
                {'href': f'https://www.sandbox.paypal.com/checkoutnow?token={self.order_id}',
                 'rel': 'payer-action', 'method': 'GET'},
            ],
        }

    def capture_order(self, access_token, order_id):
        self.captured.append(order_id)
        return {'id': order_id, 'status': self.capture_status}

    def get_order(self, access_token, order_id):
        return {'id': order_id, 'status': 'APPROVED'}


def authenticate(client, user):
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {build_session_token(user)}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a customer account."""
    return User.objects.create_user(
        email='alice@example.com',
        password='Sup3rSecret!',
        username='alice',
    )


@pytest.fixture
def other_user(db):
    """Create and return a second customer account."""
    return User.objects.create_user(
        email='bob@example.com',
        password='Sup3rSecret!',
        username='bob',
    )


@pytest.fixture
def moderator(db):
    return User.objects.create_user(
        email='mod@example.com',
        password='Sup3rSecret!',
        username='mod',
        role=Role.MODERATOR,
    )


@pytest.fixture
def admin_user(db):
    """Create and return the bootstrap admin."""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='Sup3rSecret!',
        username='admin',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """API client carrying the customer's session token."""
    return authenticate(api_client, user)


@pytest.fixture
def other_client(other_user):
    return authenticate(APIClient(), other_user)


@pytest.fixture
def moderator_client(moderator):
    return authenticate(APIClient(), moderator)


@pytest.fixture
def admin_client(admin_user):
    return authenticate(APIClient(), admin_user)


@pytest.fixture
def product(db):
    """A fresh catalog product priced at 2.50."""
    return Product.objects.create(
        scan_code='3017620422003',
        name='Nutella',
        description='Pâte à tartiner',
        category='Snacks sucrés',
        ingredients=['Sucre', 'huile de palme', 'noisettes'],
        stock=10,
        price=Decimal('2.50'),
    )


@pytest.fixture
def other_product(db):
    """A fresh catalog product priced at 1.20."""
    return Product.objects.create(
        scan_code='5449000000996',
        name='Coca-Cola',
        category='Boissons',
        stock=24,
        price=Decimal('1.20'),
    )


@pytest.fixture
def fake_catalog(monkeypatch):
    """Replace the catalog source client built from settings with a fake."""
    from apps.products.services import OpenFoodFactsClient

    fake = FakeCatalogClient()
    monkeypatch.setattr(OpenFoodFactsClient, 'from_settings', lambda: fake)
    return fake


@pytest.fixture
def failing_catalog(monkeypatch):
    from apps.products.services import OpenFoodFactsClient

    fake = FakeCatalogClient(error=CatalogSourceError("Catalog source request failed: timeout"))
    monkeypatch.setattr(OpenFoodFactsClient, 'from_settings', lambda: fake)
    return fake


@pytest.fixture
def paypal():
    """Fake PayPal client; order ids default to ORDER-1, captures to COMPLETED."""
    return FakePayPalClient()


@pytest.fixture
def fake_paypal(monkeypatch, paypal):
    """Replace the PayPal client built from settings with the fake."""
    from apps.payments.services import PayPalClient

    monkeypatch.setattr(PayPalClient, 'from_settings', lambda: paypal)
    return paypal


@pytest.fixture
def catalog_entry():
    return CatalogEntry(
        name='Eau minérale',
        description='Eau de source',
        category='Boissons, Eaux',
        ingredients=['Eau'],
        image_url='https://images.openfoodfacts.org/eau.jpg',
    )
