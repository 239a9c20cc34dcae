"""
Session token issuing and verification.

Session tokens are simplejwt access tokens (HS256, lifetime from
``SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']``) carrying ``userId``, ``username`` and
``role``. No refresh token is ever issued: clients log in again on expiry.
"""
import logging

from django.middleware.csrf import get_token
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from .services import authenticate_user
from .services.exceptions import InvalidSessionTokenError, MissingTokenError

logger = logging.getLogger(__name__)


def build_session_token(user) -> AccessToken:
    token = AccessToken.for_user(user)
    token['username'] = user.username
    token['role'] = user.role
    return token


def issue_session(*, email: str, password: str):
    """
    Check credentials and mint a session token.

    Args:
        email: Login email
        password: Plain password

    Returns:
        Tuple of (encoded token string, authenticated User)

    Raises:
        InvalidCredentialsError: If the credentials do not match an account
    """
    user = authenticate_user(email=email, password=password)
    return str(build_session_token(user)), user


def verify_session(raw_token) -> AccessToken:
    """
    Decode and validate a session token.

    Raises:
        MissingTokenError: If no token was supplied
        InvalidSessionTokenError: On a bad signature, expiry or malformed token
    """
    if not raw_token:
        raise MissingTokenError()

    if isinstance(raw_token, bytes):
        raw_token = raw_token.decode()

    try:
        return AccessToken(raw_token)
    except TokenError as e:
        logger.info("Rejected session token: %s", e)
        raise InvalidSessionTokenError()


def issue_anti_forgery_token(request) -> str:
    """Return a CSRF token; the middleware sets the matching private cookie."""
    return get_token(request)
