import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from apps.offers.models import Offer, OfferStatus


@pytest.fixture
def rented_offer(listing, owner, tenant):
    """An accepted offer for a tenant joining on 31 January 2025."""
    return Offer.objects.create(
        property=listing,
        owner=owner,
        tenant=tenant,
        offer_rent=Decimal('14000.00'),
        joining_date_estimate='End of January',
        status=OfferStatus.ACCEPTED,
        requested_advance_amount=Decimal('5000.00'),
        desired_joining_date=datetime(2025, 1, 31, 12, 0, tzinfo=dt_timezone.utc),
        booking_verified=True,
        booking_verified_at=datetime(2025, 1, 20, tzinfo=dt_timezone.utc),
    )


@pytest.fixture
def undated_offer(other_listing, outsider, tenant):
    """An accepted offer without a desired joining date, on another owner's property."""
    return Offer.objects.create(
        property=other_listing,
        owner=outsider,
        tenant=tenant,
        offer_rent=Decimal('9000.00'),
        joining_date_estimate='Flexible',
        status=OfferStatus.ACCEPTED,
    )
