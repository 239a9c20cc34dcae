"""
Custom permission classes for invoices app.
"""
from rest_framework.permissions import BasePermission

from apps.accounts.models import Role


class IsInvoiceOwnerOrStaff(BasePermission):
    """
    Permission to view an invoice.

    Allows if:
    - User owns the invoice
    - User is an admin or moderator
    """

    message = 'Forbidden'

    def has_object_permission(self, request, view, obj):
        if request.user.role in (Role.ADMIN, Role.MODERATOR):
            return True
        return obj.owner_id == request.user.id
