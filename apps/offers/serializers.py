import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from rest_framework import ISO_8601, serializers

from apps.accounts.serializers import UserSummarySerializer
from apps.properties.serializers import PropertySummarySerializer
from .models import Offer, OfferStatus
from .services.offer_lifecycle import MAX_VALIDITY_DAYS
from .services.offer_store import MAX_AMOUNT, normalize_match_percent


CENT = Decimal('0.01')
DATE_INPUT_FORMATS = [ISO_8601, '%Y-%m-%d']


def _messages(label, required=None):
    """Error messages for a camelCase input field, keyed by DRF error code."""
    invalid = f'{label} must be a valid number'
    return {
        'required': required or f'{label} is required',
        'null': required or f'{label} is required',
        'invalid': invalid,
        'min_value': invalid,
        'max_value': invalid,
        'too_small': f'{label} must be at least 0.01',
    }


# =============================================================================
# Input Fields
# =============================================================================

class BlankAsNullMixin:
    """Treat blank strings as an omitted optional value."""

    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip():
            data = None
        return super().validate_empty_values(data)


class AmountField(BlankAsNullMixin, serializers.Field):
    """
    Money amount accepted as a JSON number or numeric string.

    Non-finite values are rejected; the result is rounded half-up to cents.
    """

    default_error_messages = {
        'invalid': 'A valid number is required.',
        'too_small': 'Ensure this amount is at least 0.01.',
    }

    def __init__(self, *, positive=False, **kwargs):
        self.positive = positive
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        try:
            value = Decimal(str(data).strip())
        except (InvalidOperation, ValueError):
            self.fail('invalid')
        # Bound before quantizing; huge exponents overflow the decimal context
        if not value.is_finite() or abs(value) > MAX_AMOUNT:
            self.fail('invalid')
        if self.positive and value <= 0:
            self.fail('invalid')

        rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
        if self.positive and rounded <= 0:
            self.fail('too_small')
        return rounded

    def to_representation(self, value):
        return value


class MatchPercentField(BlankAsNullMixin, serializers.Field):
    """Lenient 0-100 score; anything unusable becomes 0 instead of an error."""

    def validate_empty_values(self, data):
        if data is None:
            return (True, normalize_match_percent(None))
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        return normalize_match_percent(data)

    def to_representation(self, value):
        return value


class OptionalDateTimeField(BlankAsNullMixin, serializers.DateTimeField):
    """ISO-8601 datetime or plain YYYY-MM-DD date; blank means not supplied."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('input_formats', DATE_INPUT_FORMATS)
        super().__init__(**kwargs)


class OptionalFloatField(BlankAsNullMixin, serializers.FloatField):
    pass


class VersionField(BlankAsNullMixin, serializers.IntegerField):
    """Optional optimistic-concurrency token echoed back by clients."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        kwargs.setdefault('min_value', 1)
        kwargs.setdefault('error_messages', {
            'invalid': 'version must be a positive integer',
            'min_value': 'version must be a positive integer',
        })
        super().__init__(**kwargs)


# =============================================================================
# Input Serializers
# =============================================================================

class OfferTermsInputSerializer(serializers.Serializer):
    """Commercial terms of a new offer."""

    offerRent = AmountField(
        source='offer_rent',
        positive=True,
        error_messages=_messages('offerRent', required='offerRent must be a valid number'),
    )
    joiningDateEstimate = serializers.CharField(
        source='joining_date_estimate',
        max_length=100,
        error_messages={
            'required': 'joiningDateEstimate is required',
            'null': 'joiningDateEstimate is required',
            'blank': 'joiningDateEstimate is required',
            'max_length': 'joiningDateEstimate must be at most 100 characters',
        },
    )
    offerAdvance = AmountField(
        source='offer_advance',
        required=False,
        allow_null=True,
        error_messages=_messages('offerAdvance'),
    )
    offerBookingAmount = AmountField(
        source='offer_booking_amount',
        required=False,
        allow_null=True,
        error_messages=_messages('offerBookingAmount'),
    )
    needsBikeParking = serializers.BooleanField(source='needs_bike_parking', required=False, default=False)
    needsCarParking = serializers.BooleanField(source='needs_car_parking', required=False, default=False)
    tenantType = serializers.CharField(
        source='tenant_type',
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=50,
        default='',
    )
    acceptsRules = serializers.BooleanField(source='accepts_rules', required=False, default=False)
    matchPercent = MatchPercentField(source='match_percent', required=False, allow_null=True)


class OfferCreateInputSerializer(serializers.Serializer):
    """
    Body of POST /api/offers/.

    Any owner id sent by the client is ignored; the owner always comes from
    the property.
    """

    propertyId = serializers.UUIDField(
        source='property_id',
        error_messages={
            'required': 'propertyId is required',
            'null': 'propertyId is required',
            'invalid': 'propertyId must be a valid id',
        },
    )
    offer = OfferTermsInputSerializer(
        error_messages={
            'required': 'offer is required',
            'null': 'offer is required',
            'invalid': 'offer must be an object',
        },
    )


class RequestAdvanceInputSerializer(serializers.Serializer):
    """Body of PATCH /api/offers/<id>/request-advance/."""

    requestedAdvanceAmount = AmountField(
        source='amount',
        positive=True,
        allow_null=False,
        error_messages=_messages(
            'requestedAdvanceAmount',
            required='requestedAdvanceAmount must be a valid number',
        ),
    )
    requestedAdvanceValidityDays = OptionalFloatField(
        source='validity_days',
        required=False,
        allow_null=True,
        error_messages=_messages('requestedAdvanceValidityDays'),
    )
    proposedMeetingTime = OptionalDateTimeField(
        source='meeting_time',
        error_messages={'invalid': 'proposedMeetingTime must be a valid date'},
    )
    desiredJoiningDate = OptionalDateTimeField(
        source='joining_date',
        error_messages={'invalid': 'desiredJoiningDate must be a valid date'},
    )
    version = VersionField(source='expected_version')

    def validate_requestedAdvanceValidityDays(self, value):
        """Between 1 and MAX_VALIDITY_DAYS days, floored to an integer."""
        if value is None:
            return None
        if not math.isfinite(value) or not 1 <= math.floor(value) <= MAX_VALIDITY_DAYS:
            raise serializers.ValidationError(
                'requestedAdvanceValidityDays must be a valid number'
            )
        return math.floor(value)


class OfferStatusInputSerializer(serializers.Serializer):
    """Body of PATCH /api/offers/<id>/status/."""

    status = serializers.CharField(
        error_messages={
            'required': 'status is required',
            'null': 'status is required',
            'blank': 'status is required',
        },
    )
    version = VersionField(source='expected_version')

    def validate_status(self, value):
        parsed = OfferStatus.parse(value)
        if parsed is None:
            raise serializers.ValidationError('Invalid status')
        return parsed


class ConfirmMoveInInputSerializer(serializers.Serializer):
    """Body of PATCH /api/offers/<id>/confirm-move-in/ (may be empty)."""

    version = VersionField(source='expected_version')


class OfferHistoryParamsSerializer(serializers.Serializer):
    """Path parameters of the owner's negotiation history."""

    propertyId = serializers.UUIDField(
        source='property_id',
        error_messages={
            'required': 'propertyId and tenantId are required',
            'invalid': 'propertyId and tenantId are required',
        },
    )
    tenantId = serializers.UUIDField(
        source='tenant_id',
        error_messages={
            'required': 'propertyId and tenantId are required',
            'invalid': 'propertyId and tenantId are required',
        },
    )


# =============================================================================
# Output Serializers
# =============================================================================

class OfferSerializer(serializers.ModelSerializer):
    """Full offer representation in camelCase."""

    offerId = serializers.IntegerField(source='id', read_only=True)
    propertyId = serializers.UUIDField(source='property_id', read_only=True)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)
    tenantId = serializers.UUIDField(source='tenant_id', read_only=True)
    offerRent = serializers.DecimalField(source='offer_rent', max_digits=12, decimal_places=2, read_only=True)
    joiningDateEstimate = serializers.CharField(source='joining_date_estimate', read_only=True)
    offerAdvance = serializers.DecimalField(source='offer_advance', max_digits=12, decimal_places=2, read_only=True)
    offerBookingAmount = serializers.DecimalField(source='offer_booking_amount', max_digits=12, decimal_places=2, read_only=True)
    needsBikeParking = serializers.BooleanField(source='needs_bike_parking', read_only=True)
    needsCarParking = serializers.BooleanField(source='needs_car_parking', read_only=True)
    tenantType = serializers.CharField(source='tenant_type', read_only=True)
    acceptsRules = serializers.BooleanField(source='accepts_rules', read_only=True)
    matchPercent = serializers.FloatField(source='match_percent', read_only=True)
    actionType = serializers.CharField(source='action_type', read_only=True)
    requestedAdvanceAmount = serializers.DecimalField(
        source='requested_advance_amount', max_digits=12, decimal_places=2, read_only=True
    )
    requestedAdvanceValidityDays = serializers.IntegerField(source='requested_advance_validity_days', read_only=True)
    proposedMeetingTime = serializers.DateTimeField(source='proposed_meeting_time', read_only=True)
    desiredJoiningDate = serializers.DateTimeField(source='desired_joining_date', read_only=True)
    bookingVerified = serializers.BooleanField(source='booking_verified', read_only=True)
    bookingVerifiedAt = serializers.DateTimeField(source='booking_verified_at', read_only=True)
    tenantMoveInConfirmed = serializers.BooleanField(source='tenant_move_in_confirmed', read_only=True)
    tenantMoveInConfirmedAt = serializers.DateTimeField(source='tenant_move_in_confirmed_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Offer
        fields = [
            'offerId',
            'propertyId',
            'ownerId',
            'tenantId',
            'offerRent',
            'joiningDateEstimate',
            'offerAdvance',
            'offerBookingAmount',
            'needsBikeParking',
            'needsCarParking',
            'tenantType',
            'acceptsRules',
            'matchPercent',
            'status',
            'actionType',
            'requestedAdvanceAmount',
            'requestedAdvanceValidityDays',
            'proposedMeetingTime',
            'desiredJoiningDate',
            'bookingVerified',
            'bookingVerifiedAt',
            'tenantMoveInConfirmed',
            'tenantMoveInConfirmedAt',
            'version',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields


class ReceivedOfferSerializer(OfferSerializer):
    """Owner's view: the offer plus property and tenant summaries."""

    property = PropertySummarySerializer(read_only=True)
    tenant = UserSummarySerializer(read_only=True)

    class Meta(OfferSerializer.Meta):
        fields = OfferSerializer.Meta.fields + ['property', 'tenant']
        read_only_fields = fields


class SentOfferSerializer(OfferSerializer):
    """Tenant's view: the offer plus property and owner summaries."""

    property = PropertySummarySerializer(read_only=True)
    owner = UserSummarySerializer(read_only=True)

    class Meta(OfferSerializer.Meta):
        fields = OfferSerializer.Meta.fields + ['property', 'owner']
        read_only_fields = fields


class OfferHistorySerializer(serializers.ModelSerializer):
    """Negotiation fields only; used for the owner's per-tenant history."""

    offerId = serializers.IntegerField(source='id', read_only=True)
    offerRent = serializers.DecimalField(source='offer_rent', max_digits=12, decimal_places=2, read_only=True)
    joiningDateEstimate = serializers.CharField(source='joining_date_estimate', read_only=True)
    offerAdvance = serializers.DecimalField(source='offer_advance', max_digits=12, decimal_places=2, read_only=True)
    offerBookingAmount = serializers.DecimalField(source='offer_booking_amount', max_digits=12, decimal_places=2, read_only=True)
    actionType = serializers.CharField(source='action_type', read_only=True)
    requestedAdvanceAmount = serializers.DecimalField(
        source='requested_advance_amount', max_digits=12, decimal_places=2, read_only=True
    )
    requestedAdvanceValidityDays = serializers.IntegerField(source='requested_advance_validity_days', read_only=True)
    proposedMeetingTime = serializers.DateTimeField(source='proposed_meeting_time', read_only=True)
    desiredJoiningDate = serializers.DateTimeField(source='desired_joining_date', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Offer
        fields = [
            'offerId',
            'offerRent',
            'joiningDateEstimate',
            'offerAdvance',
            'offerBookingAmount',
            'status',
            'actionType',
            'requestedAdvanceAmount',
            'requestedAdvanceValidityDays',
            'proposedMeetingTime',
            'desiredJoiningDate',
            'createdAt',
        ]
        read_only_fields = fields
