"""
Error taxonomy shared by every app.

Each class is a DRF APIException carrying the HTTP status it maps to, so a
service can raise it and the REST exception handler turns it into a
``{"error": "<message>"}`` body. App-specific errors subclass these.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class ValidationError(APIException):
    """Malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'validation_error'


class AuthenticationError(APIException):
    """Missing, invalid or expired session or anti-forgery token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication failed.'
    default_code = 'authentication_error'


class AuthorizationError(APIException):
    """Role or ownership mismatch."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden'
    default_code = 'authorization_error'


class NotFoundError(APIException):
    """Entity absent."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class UpstreamError(APIException):
    """External processor or catalog source failure, including malformed responses."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Upstream service failure.'
    default_code = 'upstream_error'


class PersistenceError(APIException):
    """Store-level failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Persistence failure.'
    default_code = 'persistence_error'
