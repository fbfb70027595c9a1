from django.contrib import admin
from django.utils.html import format_html
from .models import PaymentTransaction, PaymentStatus


@admin.register(PaymentTransaction)
class PaymentTransactionAdmin(admin.ModelAdmin):
    """
    Admin interface for payment transactions.

    Payment state is read-only here; verification has side effects on the
    offer and the rent schedule and must go through the ledger service.
    """

    list_display = [
        'transaction_id',
        'payment_type',
        'rent_month',
        'amount',
        'currency',
        'status_badge',
        'owner_verified',
        'tenant',
        'owner',
        'created_at',
    ]
    list_filter = ['payment_type', 'status', 'owner_verified', 'created_at']
    search_fields = ['transaction_id', 'tenant__email', 'owner__email', 'property__property_name']
    raw_id_fields = ['offer', 'property', 'tenant', 'owner']
    readonly_fields = [
        'transaction_id',
        'status',
        'paid_at',
        'owner_verified',
        'owner_verified_at',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'created_at'

    def status_badge(self, obj):
        """Display payment status as colored badge."""
        colors = {
            PaymentStatus.PENDING: ('#E5C49A', '#2C1810'),
            PaymentStatus.PAID: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        """Transactions are created by the ledger service."""
        return False
