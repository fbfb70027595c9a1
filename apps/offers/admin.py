from django.contrib import admin
from django.utils.html import format_html
from .models import Offer, OfferStatus


@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):
    """
    Admin interface for offers.

    Negotiation and settlement fields are read-only; the state machine is
    driven through the offer services only.
    """

    list_display = [
        'id',
        'property',
        'tenant',
        'owner',
        'offer_rent',
        'status_badge',
        'booking_verified',
        'tenant_move_in_confirmed',
        'created_at',
    ]
    list_filter = ['status', 'action_type', 'booking_verified', 'tenant_move_in_confirmed', 'created_at']
    search_fields = ['property__property_name', 'tenant__email', 'owner__email']
    raw_id_fields = ['property', 'owner', 'tenant']
    readonly_fields = [
        'owner',
        'status',
        'action_type',
        'requested_advance_amount',
        'requested_advance_validity_days',
        'proposed_meeting_time',
        'desired_joining_date',
        'booking_verified',
        'booking_verified_at',
        'tenant_move_in_confirmed',
        'tenant_move_in_confirmed_at',
        'version',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'created_at'

    def status_badge(self, obj):
        """Display offer status as colored badge."""
        colors = {
            OfferStatus.PENDING: ('#E5C49A', '#2C1810'),
            OfferStatus.ACCEPTED: ('#6B8E5E', 'white'),
            OfferStatus.REJECTED: ('#B85C5C', 'white'),
            OfferStatus.ON_HOLD: ('#A47449', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
