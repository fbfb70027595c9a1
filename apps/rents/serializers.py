from rest_framework import serializers

from apps.accounts.serializers import UserSummarySerializer
from apps.payments.models import PaymentTransaction
from apps.payments.serializers import LowercaseChoiceField
from apps.properties.serializers import PropertySummarySerializer
from .models import RentMonthRecord, RentStatus
from .services import parse_rent_month, InvalidRentMonthError


class RentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters of the rent listings.

    Query Parameters:
        status (str): pending or paid
        rentMonth (str): YYYY-MM
    """

    status = LowercaseChoiceField(
        choices=RentStatus.choices,
        required=False,
        allow_null=True,
        error_messages={'invalid_choice': 'status must be pending or paid'},
    )
    rentMonth = serializers.CharField(
        source='rent_month',
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    def validate_rentMonth(self, value):
        if not value:
            return None
        try:
            parse_rent_month(value)
        except InvalidRentMonthError as e:
            raise serializers.ValidationError(str(e))
        return value.strip()


class PaymentReferenceSerializer(serializers.ModelSerializer):
    """The transaction that settled a month, as a short reference."""

    transactionId = serializers.CharField(source='transaction_id', read_only=True)
    ownerVerified = serializers.BooleanField(source='owner_verified', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)

    class Meta:
        model = PaymentTransaction
        fields = ['id', 'transactionId', 'status', 'ownerVerified', 'paidAt']
        read_only_fields = fields


class RentMonthRecordSerializer(serializers.ModelSerializer):
    """Rent month record with property, tenant, owner and payment summaries."""

    offerId = serializers.IntegerField(source='offer_id', read_only=True)
    propertyId = serializers.UUIDField(source='property_id', read_only=True)
    tenantId = serializers.UUIDField(source='tenant_id', read_only=True)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)
    rentMonth = serializers.CharField(source='rent_month', read_only=True)
    dueDate = serializers.DateField(source='due_date', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)
    paymentTransaction = PaymentReferenceSerializer(source='payment_transaction', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    property = PropertySummarySerializer(read_only=True)
    tenant = UserSummarySerializer(read_only=True)
    owner = UserSummarySerializer(read_only=True)

    class Meta:
        model = RentMonthRecord
        fields = [
            'id',
            'offerId',
            'propertyId',
            'tenantId',
            'ownerId',
            'rentMonth',
            'dueDate',
            'amount',
            'currency',
            'status',
            'paidAt',
            'paymentTransaction',
            'createdAt',
            'updatedAt',
            'property',
            'tenant',
            'owner',
        ]
        read_only_fields = fields
