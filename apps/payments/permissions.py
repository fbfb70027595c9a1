"""
Custom permission classes for the payments app.
"""
from rest_framework.permissions import BasePermission


class IsPaymentTenant(BasePermission):
    """
    Only the tenant who owes the payment may mark it paid.

    Usage:
        def get_permissions(self):
            if self.action == 'mark_paid':
                return [IsAuthenticated(), IsPaymentTenant()]
            return super().get_permissions()
    """

    message = 'Only the paying tenant can mark this payment as paid'

    def has_object_permission(self, request, view, obj):
        return str(obj.tenant_id) == str(request.user.id)


class IsPaymentOwner(BasePermission):
    """Only the owner receiving the payment may verify it."""

    message = 'Only the property owner can verify this payment'

    def has_object_permission(self, request, view, obj):
        return str(obj.owner_id) == str(request.user.id)
