from django.contrib import admin
from .models import RentMonthRecord


@admin.register(RentMonthRecord)
class RentMonthRecordAdmin(admin.ModelAdmin):
    """Admin interface for the monthly rent schedule."""

    list_display = ['offer', 'rent_month', 'due_date', 'amount', 'currency', 'status', 'paid_at']
    list_filter = ['status', 'rent_month']
    search_fields = ['tenant__email', 'owner__email', 'property__property_name']
    raw_id_fields = ['offer', 'property', 'tenant', 'owner', 'payment_transaction']
    readonly_fields = ['status', 'paid_at', 'payment_transaction', 'created_at', 'updated_at']
    ordering = ['-due_date']
