"""Self-service account management."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from .exceptions import ProtectedAccountError
from .user_registration import _ensure_unique

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def update_profile(*, user: User, username: str = None, email: str = None) -> User:
    """
    Update the caller's username and/or email.

    Args:
        user: The authenticated user
        username: New username, unchanged when None
        email: New email, unchanged when None

    Returns:
        Updated User instance

    Raises:
        UserRegistrationError: If the new email or username is taken
        ProtectedAccountError: If the bootstrap admin tries to change its email
    """
    username = username if username is not None else user.username
    email = email.strip().lower() if email is not None else user.email
    if user.is_bootstrap_admin and email != user.email:
        raise ProtectedAccountError("Cannot change the default admin user's email")
    _ensure_unique(username=username, email=email, exclude_id=user.id)

    user.username = username
    user.email = email
    user.save(update_fields=['username', 'email', 'updated_at'])
    return user


def delete_user_account(*, user: User) -> None:
    """
    Delete the caller's own account.

    Raises:
        ProtectedAccountError: If the caller is the bootstrap admin
    """
    if user.is_bootstrap_admin:
        raise ProtectedAccountError()

    logger.info("User %s deleted their account", user.id)
    user.delete()
