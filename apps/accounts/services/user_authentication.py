"""User authentication service."""

import logging

from django.contrib.auth import get_user_model

from .exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

User = get_user_model()


def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    No token is issued here; see ``apps.accounts.tokens.issue_session``.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: On unknown email, wrong password or a
            deactivated account
    """
    try:
        user = User.objects.get(email__iexact=email.strip())
    except User.DoesNotExist:
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError("Invalid credentials")

    if not user.check_password(password) or not user.is_active:
        logger.info("Login failed for user %s", user.id)
        raise InvalidCredentialsError("Invalid credentials")

    return user
