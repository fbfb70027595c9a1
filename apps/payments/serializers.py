from rest_framework import serializers

from apps.accounts.serializers import UserSummarySerializer
from apps.properties.serializers import PropertySummarySerializer
from .models import PaymentTransaction, PaymentType, PaymentStatus


# =============================================================================
# Input Fields
# =============================================================================

class LowercaseChoiceField(serializers.ChoiceField):
    """Choice matched after trimming and lowercasing; blank means not supplied."""

    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip():
            data = None
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        return super().to_internal_value(str(data).strip().lower())


# =============================================================================
# Input Serializers
# =============================================================================

class BookingTransactionInputSerializer(serializers.Serializer):
    """Body of POST /api/payments/."""

    offerId = serializers.IntegerField(
        source='offer_id',
        error_messages={
            'required': 'offerId is required',
            'null': 'offerId is required',
            'invalid': 'offerId must be a valid id',
        },
    )


class RentTransactionInputSerializer(serializers.Serializer):
    """
    Body of POST /api/payments/rent/.

    Only presence is checked here; the YYYY-MM format is checked by the
    ledger after the tenant has been authorized.
    """

    offerId = serializers.IntegerField(
        source='offer_id',
        error_messages={
            'required': 'offerId is required',
            'null': 'offerId is required',
            'invalid': 'offerId must be a valid id',
        },
    )
    rentMonth = serializers.CharField(
        source='rent_month',
        error_messages={
            'required': 'rentMonth is required',
            'null': 'rentMonth is required',
            'blank': 'rentMonth is required',
        },
    )


class IncomingPaymentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters of the owner's incoming payments.

    Query Parameters:
        paymentType (str): booking or rent
        ownerVerified (bool): true/false/1/0
        status (str): pending or paid
    """

    paymentType = LowercaseChoiceField(
        source='payment_type',
        choices=PaymentType.choices,
        required=False,
        allow_null=True,
        error_messages={'invalid_choice': 'paymentType must be booking or rent'},
    )
    ownerVerified = serializers.BooleanField(
        source='owner_verified',
        required=False,
        allow_null=True,
        default=None,
        error_messages={'invalid': 'ownerVerified must be true or false'},
    )
    status = LowercaseChoiceField(
        choices=PaymentStatus.choices,
        required=False,
        allow_null=True,
        error_messages={'invalid_choice': 'status must be pending or paid'},
    )



# =============================================================================
# Output Serializers
# =============================================================================

class PaymentTransactionSerializer(serializers.ModelSerializer):
    """Transaction with property, tenant and owner summaries, in camelCase."""

    transactionId = serializers.CharField(source='transaction_id', read_only=True)
    offerId = serializers.IntegerField(source='offer_id', read_only=True)
    propertyId = serializers.UUIDField(source='property_id', read_only=True)
    tenantId = serializers.UUIDField(source='tenant_id', read_only=True)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)
    paymentType = serializers.CharField(source='payment_type', read_only=True)
    rentMonth = serializers.CharField(source='rent_month', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)
    ownerVerified = serializers.BooleanField(source='owner_verified', read_only=True)
    ownerVerifiedAt = serializers.DateTimeField(source='owner_verified_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    property = PropertySummarySerializer(read_only=True)
    tenant = UserSummarySerializer(read_only=True)
    owner = UserSummarySerializer(read_only=True)

    class Meta:
        model = PaymentTransaction
        fields = [
            'id',
            'transactionId',
            'offerId',
            'propertyId',
            'tenantId',
            'ownerId',
            'paymentType',
            'rentMonth',
            'amount',
            'currency',
            'status',
            'paidAt',
            'ownerVerified',
            'ownerVerifiedAt',
            'createdAt',
            'updatedAt',
            'property',
            'tenant',
            'owner',
        ]
        read_only_fields = fields
