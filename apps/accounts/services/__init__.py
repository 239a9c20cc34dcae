"""Services for accounts business logic."""

from .exceptions import (
    UserRegistrationError,
    InvalidCredentialsError,
    MissingTokenError,
    InvalidSessionTokenError,
    InvalidAntiForgeryTokenError,
    UserNotFoundError,
    ProtectedAccountError,
    ForbiddenError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import update_profile, delete_user_account
from .user_administration import list_users, get_user, create_user, update_user, delete_user
from .bootstrap import ensure_bootstrap_admin

__all__ = [
    # Exceptions
    'UserRegistrationError',
    'InvalidCredentialsError',
    'MissingTokenError',
    'InvalidSessionTokenError',
    'InvalidAntiForgeryTokenError',
    'UserNotFoundError',
    'ProtectedAccountError',
    'ForbiddenError',
    # Services
    'register_user',
    'authenticate_user',
    'update_profile',
    'delete_user_account',
    'list_users',
    'get_user',
    'create_user',
    'update_user',
    'delete_user',
    'ensure_bootstrap_admin',
]
