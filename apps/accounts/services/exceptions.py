"""Domain-specific exceptions for accounts services."""

from rest_framework import status

from apps.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class UserRegistrationError(ValidationError):
    """Raised when user registration fails."""
    default_detail = 'Registration failed.'
    default_code = 'registration_failed'


class InvalidCredentialsError(AuthenticationError):
    """Raised when authentication credentials are invalid."""
    # Login failures are reported as a bad request
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid credentials'
    default_code = 'invalid_credentials'


class MissingTokenError(AuthenticationError):
    """Raised when a protected endpoint is called without a session token."""
    default_detail = 'Access denied, token missing'
    default_code = 'token_missing'


class InvalidSessionTokenError(AuthenticationError):
    """Raised when the session token signature or expiry check fails."""
    default_detail = 'Invalid token'
    default_code = 'token_invalid'


class InvalidAntiForgeryTokenError(AuthenticationError):
    """Raised when the anti-forgery header does not match its cookie."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Invalid CSRF token'
    default_code = 'csrf_invalid'


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    default_detail = 'User not found'
    default_code = 'user_not_found'


class ProtectedAccountError(ValidationError):
    """Raised when deleting the bootstrap admin account."""
    default_detail = 'Cannot delete default admin user'
    default_code = 'protected_account'


class ForbiddenError(AuthorizationError):
    """Raised when the caller's role or identity does not allow the operation."""
    default_detail = 'Forbidden'
    default_code = 'forbidden'
