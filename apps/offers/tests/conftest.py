import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from apps.offers.models import Offer, OfferStatus, OfferActionType


@pytest.fixture
def pending_offer(listing, owner, tenant):
    """A fresh pending offer from the tenant on the owner's listing."""
    return Offer.objects.create(
        property=listing,
        owner=owner,
        tenant=tenant,
        offer_rent=Decimal('14000.00'),
        joining_date_estimate='Early next month',
        tenant_type='family',
        match_percent=80,
    )


@pytest.fixture
def accepted_offer(pending_offer):
    """The pending offer after the owner accepted it and asked for an advance."""
    pending_offer.status = OfferStatus.ACCEPTED
    pending_offer.action_type = OfferActionType.ADVANCE_REQUESTED
    pending_offer.requested_advance_amount = Decimal('5000.00')
    pending_offer.requested_advance_validity_days = 3
    pending_offer.desired_joining_date = datetime(2025, 1, 31, tzinfo=dt_timezone.utc)
    pending_offer.save()
    return pending_offer


@pytest.fixture
def verified_offer(accepted_offer):
    """An accepted offer whose booking payment the owner has verified."""
    accepted_offer.booking_verified = True
    accepted_offer.booking_verified_at = datetime(2025, 1, 20, tzinfo=dt_timezone.utc)
    accepted_offer.save()
    return accepted_offer


@pytest.fixture
def offer_by_other_owner(other_listing, outsider, tenant):
    """An offer from the same tenant to a different owner."""
    return Offer.objects.create(
        property=other_listing,
        owner=outsider,
        tenant=tenant,
        offer_rent=Decimal('8500.00'),
        joining_date_estimate='ASAP',
    )
