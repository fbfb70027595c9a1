"""
Offer store service.

Validated creation of offers and the owner/tenant read paths. Offers are
never deleted here; their state only moves through offer_lifecycle.
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.offers.models import Offer, OfferStatus
from apps.properties.services import get_property, PropertyNotFoundError

from .exceptions import OfferNotFoundError, InvalidOfferError


logger = logging.getLogger(__name__)

MATCH_PERCENT_MIN = 0.0
MATCH_PERCENT_MAX = 100.0
# Offer amounts are stored as Decimal(12, 2)
MAX_AMOUNT = Decimal('9999999999.99')

HISTORY_FIELDS = [
    'id',
    'offer_rent',
    'joining_date_estimate',
    'offer_advance',
    'offer_booking_amount',
    'status',
    'action_type',
    'requested_advance_amount',
    'requested_advance_validity_days',
    'proposed_meeting_time',
    'desired_joining_date',
    'created_at',
]


def to_positive_decimal(value) -> Optional[Decimal]:
    """Return value as a finite Decimal in (0, MAX_AMOUNT], or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0 or amount > MAX_AMOUNT:
        return None
    return amount


def to_optional_decimal(value) -> Optional[Decimal]:
    """Return value as a finite Decimal, None when absent, or raise ValueError."""
    if value is None or value == '':
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f'{value!r} is not a number')
    if not amount.is_finite():
        raise ValueError(f'{value!r} is not a finite number')
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f'{value!r} is out of range')
    return amount


def normalize_match_percent(value) -> float:
    """Absent or non-finite values become 0; others are clamped to 0-100."""
    if value is None or isinstance(value, bool):
        return MATCH_PERCENT_MIN
    try:
        percent = float(value)
    except (TypeError, ValueError):
        return MATCH_PERCENT_MIN
    if not math.isfinite(percent):
        return MATCH_PERCENT_MIN
    return min(max(percent, MATCH_PERCENT_MIN), MATCH_PERCENT_MAX)


def create_offer(
    *,
    tenant: User,
    property_id: UUID,
    offer_rent,
    joining_date_estimate: str,
    offer_advance=None,
    offer_booking_amount=None,
    needs_bike_parking: bool = False,
    needs_car_parking: bool = False,
    tenant_type: str = '',
    accepts_rules: bool = False,
    match_percent=None,
) -> Offer:
    """
    Create a pending offer from a tenant against a property.

    The owner is always taken from the property; callers cannot choose it.

    Args:
        tenant: Authenticated user making the offer
        property_id: UUID of the target property
        offer_rent: Proposed monthly rent, must be a finite number > 0
        joining_date_estimate: Free-text joining estimate, must not be blank
        offer_advance: Optional proposed advance
        offer_booking_amount: Optional proposed booking amount
        needs_bike_parking: Tenant needs bike parking
        needs_car_parking: Tenant needs car parking
        tenant_type: e.g. "family", "bachelor"
        accepts_rules: Tenant accepts the house rules
        match_percent: Client-computed match score (0-100)

    Returns:
        Created Offer instance

    Raises:
        OfferNotFoundError: If the property does not exist
        InvalidOfferError: If rent or joining date are invalid
    """
    try:
        property_obj = get_property(property_id=property_id)
    except PropertyNotFoundError:
        raise OfferNotFoundError('Property not found')

    rent = to_positive_decimal(offer_rent)
    if rent is None:
        raise InvalidOfferError('offerRent must be a valid number')

    joining_estimate = str(joining_date_estimate or '').strip()
    if not joining_estimate:
        raise InvalidOfferError('joiningDateEstimate is required')

    try:
        advance = to_optional_decimal(offer_advance)
    except ValueError:
        raise InvalidOfferError('offerAdvance must be a valid number')
    try:
        booking_amount = to_optional_decimal(offer_booking_amount)
    except ValueError:
        raise InvalidOfferError('offerBookingAmount must be a valid number')

    offer = Offer.objects.create(
        property=property_obj,
        owner_id=property_obj.owner_id,
        tenant=tenant,
        offer_rent=rent,
        joining_date_estimate=joining_estimate,
        offer_advance=advance,
        offer_booking_amount=booking_amount,
        needs_bike_parking=bool(needs_bike_parking),
        needs_car_parking=bool(needs_car_parking),
        tenant_type=str(tenant_type or '').strip(),
        accepts_rules=bool(accepts_rules),
        match_percent=normalize_match_percent(match_percent),
        status=OfferStatus.PENDING,
    )

    logger.info(
        "Offer %s: submitted by tenant %s on property %s (rent=%s)",
        offer.id, tenant.id, property_obj.id, rent,
    )
    return offer


def list_received_offers(*, owner: User) -> QuerySet[Offer]:
    """Offers made to the owner's properties, newest first."""
    return (
        Offer.objects
        .filter(owner=owner)
        .select_related('property', 'tenant')
        .order_by('-created_at', '-id')
    )


def list_sent_offers(*, tenant: User) -> QuerySet[Offer]:
    """Offers the tenant has submitted, newest first."""
    return (
        Offer.objects
        .filter(tenant=tenant)
        .select_related('property', 'owner')
        .order_by('-created_at', '-id')
    )


def get_offer_history(
    *,
    owner: User,
    property_id: UUID,
    tenant_id: UUID
) -> QuerySet[Offer]:
    """
    Negotiation history between one tenant and one of the owner's properties.

    Offers on other owners' properties are never returned, even when the
    property and tenant ids match.
    """
    return (
        Offer.objects
        .filter(owner=owner, property_id=property_id, tenant_id=tenant_id)
        .only(*HISTORY_FIELDS)
        .order_by('-created_at', '-id')
    )
