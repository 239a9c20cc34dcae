"""User registration service."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from ..models import Role
from .exceptions import UserRegistrationError

logger = logging.getLogger(__name__)

User = get_user_model()


def _ensure_unique(*, username: str, email: str, exclude_id=None) -> None:
    """Reject an email or username already held by another account."""
    users = User.objects.all()
    if exclude_id is not None:
        users = users.exclude(id=exclude_id)

    if users.filter(email__iexact=email).exists():
        raise UserRegistrationError("User already exists")
    if users.filter(username__iexact=username).exists():
        raise UserRegistrationError("Username already taken")


@transaction.atomic
def register_user(
    *,
    username: str,
    email: str,
    password: str,
    role: str = Role.USER
) -> User:
    """
    Register a new account.

    Args:
        username: Unique public name
        email: Unique login email
        password: Plain password (will be hashed)
        role: Account role, ``user`` for self-service registration

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email or username is taken or the
            password is rejected by the password validators
    """
    email = email.strip().lower()
    _ensure_unique(username=username, email=email)

    try:
        validate_password(password)
    except DjangoValidationError as e:
        raise UserRegistrationError(' '.join(e.messages))

    user = User.objects.create_user(
        email=email,
        password=password,
        username=username,
        role=role,
    )
    logger.info("Registered user %s (%s)", user.id, user.role)
    return user
