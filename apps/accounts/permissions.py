"""
Role and ownership permissions.

Compose them after ``IsAuthenticated`` in ``permission_classes``; DRF checks
them in order and stops at the first failure.
"""
from rest_framework.permissions import BasePermission

from .models import Role


class HasRole(BasePermission):
    """Allow only users whose role is in ``allowed_roles``."""

    allowed_roles = ()
    message = 'Forbidden'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role in self.allowed_roles)


class IsAdmin(HasRole):
    allowed_roles = (Role.ADMIN,)


class IsAdminOrModerator(HasRole):
    allowed_roles = (Role.ADMIN, Role.MODERATOR)


class IsSelf(BasePermission):
    """
    Allow only when the authenticated user is the one named in the URL.

    The view must route the id as the ``user_id`` keyword argument.
    """

    message = 'Forbidden'

    def has_permission(self, request, view):
        user_id = view.kwargs.get('user_id')
        return bool(
            request.user
            and request.user.is_authenticated
            and user_id is not None
            and str(request.user.id) == str(user_id)
        )
