import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from apps.offers.models import Offer, OfferStatus, OfferActionType
from apps.payments.services import create_booking_transaction, create_rent_transaction, mark_paid


@pytest.fixture
def advance_offer(listing, owner, tenant):
    """A pending offer where the owner has asked for a 5000 advance."""
    return Offer.objects.create(
        property=listing,
        owner=owner,
        tenant=tenant,
        offer_rent=Decimal('14000.00'),
        joining_date_estimate='End of month',
        action_type=OfferActionType.ADVANCE_REQUESTED,
        requested_advance_amount=Decimal('5000.00'),
        requested_advance_validity_days=3,
        desired_joining_date=datetime(2025, 1, 31, 12, 0, tzinfo=dt_timezone.utc),
    )


@pytest.fixture
def accepted_offer(advance_offer):
    """The advance offer after the owner accepted it."""
    advance_offer.status = OfferStatus.ACCEPTED
    advance_offer.save()
    return advance_offer


@pytest.fixture
def bare_offer(listing, owner, tenant):
    """A pending offer without any advance request."""
    return Offer.objects.create(
        property=listing,
        owner=owner,
        tenant=tenant,
        offer_rent=Decimal('13000.00'),
        joining_date_estimate='Soon',
    )


@pytest.fixture
def booking_payment(accepted_offer, tenant):
    """A pending booking transaction for the accepted offer."""
    payment, _ = create_booking_transaction(offer_id=accepted_offer.id, user=tenant)
    return payment


@pytest.fixture
def paid_booking(booking_payment, tenant):
    """The booking transaction after the tenant marked it paid."""
    return mark_paid(transaction_id=booking_payment.transaction_id, user=tenant)


@pytest.fixture
def paid_rent(accepted_offer, tenant):
    """A paid rent transaction for March 2025."""
    payment, _ = create_rent_transaction(
        offer_id=accepted_offer.id, user=tenant, rent_month='2025-03'
    )
    return mark_paid(transaction_id=payment.transaction_id, user=tenant)
