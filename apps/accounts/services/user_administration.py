"""Admin-side user management."""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet

from ..models import Role
from .exceptions import ProtectedAccountError, UserNotFoundError, UserRegistrationError
from .user_registration import _ensure_unique, register_user

logger = logging.getLogger(__name__)

User = get_user_model()


def list_users() -> QuerySet[User]:
    return User.objects.all().order_by('-created_at')


def get_user(*, user_id: UUID) -> User:
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError()


def create_user(*, username: str, email: str, password: str, role: str = Role.USER) -> User:
    """Create an account on behalf of an admin, any role allowed."""
    user = register_user(username=username, email=email, password=password, role=role)
    if role == Role.ADMIN:
        user.is_staff = True
        user.save(update_fields=['is_staff'])
    return user


@transaction.atomic
def update_user(*, user_id: UUID, data: dict) -> User:
    """
    Overwrite the given fields of an account.

    Args:
        user_id: Target user ID
        data: Any of ``username``, ``email``, ``role``, ``password``

    Returns:
        Updated User instance

    Raises:
        UserNotFoundError: If the user does not exist
        UserRegistrationError: On a taken email/username or rejected password
        ProtectedAccountError: On an email or role change to the bootstrap admin
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError()

    username = data.get('username', user.username)
    email = data.get('email', user.email).strip().lower()
    if user.is_bootstrap_admin:
        if email != user.email:
            raise ProtectedAccountError("Cannot change the default admin user's email")
        if data.get('role', Role.ADMIN) != Role.ADMIN:
            raise ProtectedAccountError("Cannot change the default admin user's role")
    _ensure_unique(username=username, email=email, exclude_id=user.id)

    user.username = username
    user.email = email

    if 'role' in data:
        user.role = data['role']
        user.is_staff = user.role == Role.ADMIN or user.is_superuser

    if data.get('password'):
        try:
            validate_password(data['password'], user=user)
        except DjangoValidationError as e:
            raise UserRegistrationError(' '.join(e.messages))
        user.set_password(data['password'])

    user.save()
    logger.info("User %s updated by admin", user.id)
    return user


def delete_user(*, user_id: UUID) -> None:
    """
    Delete an account.

    Raises:
        UserNotFoundError: If the user does not exist
        ProtectedAccountError: If the target is the bootstrap admin
    """
    user = get_user(user_id=user_id)
    if user.is_bootstrap_admin:
        raise ProtectedAccountError()

    user.delete()
    logger.info("User %s deleted by admin", user_id)
