from rest_framework import serializers
from .models import Property


class PropertySummarySerializer(serializers.ModelSerializer):
    """Listing fields joined into offer, payment and rent responses."""

    propertyName = serializers.CharField(source='property_name', read_only=True)
    rentAmount = serializers.DecimalField(source='rent_amount', max_digits=12, decimal_places=2, read_only=True)
    advanceAmount = serializers.DecimalField(source='advance_amount', max_digits=12, decimal_places=2, read_only=True)
    bookingAdvance = serializers.DecimalField(source='booking_advance', max_digits=12, decimal_places=2, read_only=True)
    bookingValidityDays = serializers.IntegerField(source='booking_validity_days', read_only=True)
    parkingType = serializers.CharField(source='parking_type', read_only=True)
    preferredTenantTypes = serializers.JSONField(source='preferred_tenant_types', read_only=True)

    class Meta:
        model = Property
        fields = [
            'id',
            'propertyName',
            'address',
            'city',
            'rentAmount',
            'advanceAmount',
            'bookingAdvance',
            'bookingValidityDays',
            'parkingType',
            'preferredTenantTypes',
            'photos',
        ]
        read_only_fields = fields
