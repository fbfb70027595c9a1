from django.contrib import admin
from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    """Admin interface for listings referenced by offers."""

    list_display = ['property_name', 'owner', 'city', 'rent_amount', 'status', 'created_at']
    list_filter = ['status', 'parking_type', 'city']
    search_fields = ['property_name', 'address', 'owner__email']
    raw_id_fields = ['owner']
    readonly_fields = ['created_at', 'updated_at']
