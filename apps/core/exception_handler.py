"""
REST exception handler.

Wired through ``REST_FRAMEWORK['EXCEPTION_HANDLER']``. Every failure leaves
the API as ``{"error": "<message>"}``; serializer validation failures also
carry the per-field messages under ``"fields"``.
"""
import logging

from django.db import DatabaseError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import PersistenceError

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = 'Access denied, token missing'


def _first_message(detail):
    """Flatten DRF error detail (str, list or dict) into one readable message."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return 'Invalid request.'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid request.'
    return str(detail)


def api_exception_handler(exc, context):
    """
    Convert any exception raised in a view into a JSON error response.

    Args:
        exc: The raised exception
        context: DRF handler context (view, request, args, kwargs)

    Returns:
        Response with an ``error`` key, never a traceback
    """
    if isinstance(exc, DatabaseError):
        logger.exception("Database failure in %s", context.get('view').__class__.__name__)
        exc = PersistenceError()

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled exception in %s", context.get('view').__class__.__name__)
        return Response(
            {'error': 'Internal error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, exceptions.NotAuthenticated):
        body = {'error': MISSING_TOKEN_MESSAGE}
    elif isinstance(exc, exceptions.ValidationError):
        body = {'error': _first_message(exc.detail)}
        if isinstance(exc.detail, dict):
            body['fields'] = exc.detail
    else:
        body = {'error': _first_message(exc.detail)}

    response.data = body
    return response
