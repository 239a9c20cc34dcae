import pytest
from django.db import DatabaseError
from rest_framework import exceptions, status
from rest_framework.test import APIRequestFactory

from apps.core.exception_handler import api_exception_handler
from apps.core.exceptions import NotFoundError, UpstreamError


class DummyView:
    pass


@pytest.fixture
def context():
    return {'view': DummyView(), 'request': APIRequestFactory().get('/')}


class TestApiExceptionHandler:

    def test_domain_error(self, context):
        response = api_exception_handler(NotFoundError('Product not found'), context)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Product not found'}

    def test_upstream_error(self, context):
        response = api_exception_handler(UpstreamError(), context)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert 'error' in response.data

    def test_validation_error_keeps_fields(self, context):
        exc = exceptions.ValidationError({'email': ['Enter a valid email address.']})

        response = api_exception_handler(exc, context)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Enter a valid email address.'
        assert response.data['fields'] == {'email': ['Enter a valid email address.']}

    def test_not_authenticated(self, context):
        response = api_exception_handler(exceptions.NotAuthenticated(), context)

        assert response.data == {'error': 'Access denied, token missing'}

    def test_database_error(self, context):
        response = api_exception_handler(DatabaseError('disk full'), context)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert 'disk full' not in response.data['error']

    def test_unexpected_error_hides_details(self, context):
        response = api_exception_handler(KeyError('secret'), context)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Internal error'}


@pytest.mark.django_db
def test_health_check(client):
    response = client.get('/api/health/')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
