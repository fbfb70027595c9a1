"""
Custom permission classes for the offers app.
"""
from rest_framework.permissions import BasePermission


class IsOfferOwner(BasePermission):
    """
    Only the owner the offer was made to may change it.

    The tenant who sent the offer can read it through the sent listing but
    cannot drive its negotiation state.

    Usage:
        def get_permissions(self):
            if self.action in ['request_advance', 'set_status', 'confirm_move_in']:
                return [IsAuthenticated(), IsOfferOwner()]
            return super().get_permissions()
    """

    message = 'Only the property owner can manage this offer'

    def has_object_permission(self, request, view, obj):
        """Compare ids as strings so UUID and str forms match."""
        return str(obj.owner_id) == str(request.user.id)
