"""
Service layer unit tests for the offers app.

Tests cover:
- Offer creation and validation
- Owner/tenant listings and negotiation history
- The status state machine
- Advance requests and move-in confirmation
- Version checks
"""

import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from uuid import uuid4

from apps.offers.models import Offer, OfferStatus, OfferActionType
from apps.offers.services import (
    create_offer,
    list_received_offers,
    list_sent_offers,
    get_offer_history,
    normalize_match_percent,
    can_transition,
    request_advance,
    set_status,
    confirm_move_in,
    mark_booking_verified,
)
from apps.offers.services.exceptions import (
    OfferNotFoundError,
    NotOfferOwnerError,
    InvalidOfferError,
    InvalidStatusTransitionError,
    StaleOfferError,
)


# =============================================================================
# Offer Store Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateOffer:
    """Tests for create_offer."""

    def test_create_offer_success(self, tenant, listing, owner):
        """Owner is taken from the property; the offer starts pending."""
        offer = create_offer(
            tenant=tenant,
            property_id=listing.id,
            offer_rent=Decimal('14500'),
            joining_date_estimate='  1st of next month ',
            needs_bike_parking=True,
            tenant_type='family',
        )

        assert offer.owner_id == owner.id
        assert offer.tenant_id == tenant.id
        assert offer.status == OfferStatus.PENDING
        assert offer.action_type == OfferActionType.NONE
        assert offer.offer_rent == Decimal('14500')
        assert offer.joining_date_estimate == '1st of next month'
        assert offer.needs_bike_parking is True
        assert offer.needs_car_parking is False
        assert offer.accepts_rules is False
        assert offer.match_percent == 0
        assert offer.booking_verified is False
        assert offer.version == 1

    def test_create_offer_property_not_found(self, tenant):
        with pytest.raises(OfferNotFoundError, match='Property not found'):
            create_offer(
                tenant=tenant,
                property_id=uuid4(),
                offer_rent=Decimal('100'),
                joining_date_estimate='soon',
            )

    @pytest.mark.parametrize('rent', [0, -5, 'abc', None, 'NaN', 'Infinity', True, '1e100'])
    def test_create_offer_invalid_rent(self, tenant, listing, rent):
        with pytest.raises(InvalidOfferError, match='offerRent must be a valid number'):
            create_offer(
                tenant=tenant,
                property_id=listing.id,
                offer_rent=rent,
                joining_date_estimate='soon',
            )
        assert Offer.objects.count() == 0

    @pytest.mark.parametrize('estimate', ['', '   ', None])
    def test_create_offer_requires_joining_estimate(self, tenant, listing, estimate):
        with pytest.raises(InvalidOfferError, match='joiningDateEstimate is required'):
            create_offer(
                tenant=tenant,
                property_id=listing.id,
                offer_rent=Decimal('100'),
                joining_date_estimate=estimate,
            )

    def test_create_offer_clamps_match_percent(self, tenant, listing):
        offer = create_offer(
            tenant=tenant,
            property_id=listing.id,
            offer_rent=Decimal('100'),
            joining_date_estimate='soon',
            match_percent=250,
        )
        assert offer.match_percent == 100


class TestNormalizeMatchPercent:
    """Absent or unusable scores become 0; others are clamped."""

    @pytest.mark.parametrize('value,expected', [
        (None, 0.0),
        (55.5, 55.5),
        ('70', 70.0),
        (-3, 0.0),
        (101, 100.0),
        (float('nan'), 0.0),
        (float('inf'), 0.0),
        ('not a number', 0.0),
    ])
    def test_normalize(self, value, expected):
        assert normalize_match_percent(value) == expected


@pytest.mark.django_db
class TestOfferListings:
    """Tests for the received/sent listings and history."""

    def test_received_offers_only_for_owner(self, owner, pending_offer, offer_by_other_owner):
        offers = list(list_received_offers(owner=owner))
        assert offers == [pending_offer]

    def test_sent_offers_include_all_owners(self, tenant, pending_offer, offer_by_other_owner):
        offers = list(list_sent_offers(tenant=tenant))
        assert set(o.id for o in offers) == {pending_offer.id, offer_by_other_owner.id}

    def test_listing_newest_first_with_insertion_tie_break(self, owner, tenant, listing):
        first = create_offer(
            tenant=tenant, property_id=listing.id,
            offer_rent=Decimal('100'), joining_date_estimate='a',
        )
        second = create_offer(
            tenant=tenant, property_id=listing.id,
            offer_rent=Decimal('200'), joining_date_estimate='b',
        )
        # Same creation instant: the later insert must still come first
        same_instant = datetime(2025, 1, 1, tzinfo=dt_timezone.utc)
        Offer.objects.filter(id__in=[first.id, second.id]).update(created_at=same_instant)

        offers = list(list_received_offers(owner=owner))
        assert [o.id for o in offers] == [second.id, first.id]

    def test_history_scoped_to_requesting_owner(
        self, owner, outsider, tenant, listing, pending_offer
    ):
        history = list(get_offer_history(
            owner=owner, property_id=listing.id, tenant_id=tenant.id
        ))
        assert [o.id for o in history] == [pending_offer.id]

        # Another owner asking about the same pair sees nothing
        assert list(get_offer_history(
            owner=outsider, property_id=listing.id, tenant_id=tenant.id
        )) == []

    def test_history_unknown_pair_is_empty(self, owner):
        assert list(get_offer_history(owner=owner, property_id=uuid4(), tenant_id=uuid4())) == []


# =============================================================================
# State Machine Tests
# =============================================================================

class TestTransitions:
    """Allowed status transitions."""

    @pytest.mark.parametrize('current,target,allowed', [
        ('pending', 'accepted', True),
        ('pending', 'rejected', True),
        ('pending', 'on_hold', True),
        ('on_hold', 'pending', True),
        ('on_hold', 'accepted', True),
        ('on_hold', 'rejected', True),
        ('rejected', 'pending', True),
        ('rejected', 'accepted', False),
        ('rejected', 'on_hold', False),
        ('accepted', 'pending', False),
        ('accepted', 'rejected', False),
        ('accepted', 'on_hold', False),
        ('accepted', 'accepted', True),
        ('pending', 'pending', True),
    ])
    def test_can_transition(self, current, target, allowed):
        assert can_transition(current, target) is allowed


@pytest.mark.django_db
class TestSetStatus:
    """Tests for set_status."""

    def test_accept_offer(self, owner, pending_offer):
        offer = set_status(offer_id=pending_offer.id, user=owner, status='accepted')

        assert offer.status == OfferStatus.ACCEPTED
        assert offer.version == 2
        pending_offer.refresh_from_db()
        assert pending_offer.status == OfferStatus.ACCEPTED

    def test_status_is_trimmed_and_case_insensitive(self, owner, pending_offer):
        offer = set_status(offer_id=pending_offer.id, user=owner, status='  On_Hold ')
        assert offer.status == OfferStatus.ON_HOLD

    def test_invalid_status_leaves_offer_unchanged(self, owner, pending_offer):
        with pytest.raises(InvalidOfferError, match='Invalid status'):
            set_status(offer_id=pending_offer.id, user=owner, status='maybe')

        pending_offer.refresh_from_db()
        assert pending_offer.status == OfferStatus.PENDING
        assert pending_offer.version == 1

    def test_same_status_is_noop(self, owner, pending_offer):
        before = pending_offer.updated_at
        offer = set_status(offer_id=pending_offer.id, user=owner, status='pending')

        assert offer.status == OfferStatus.PENDING
        pending_offer.refresh_from_db()
        assert pending_offer.version == 1
        assert pending_offer.updated_at == before

    def test_accepted_is_terminal(self, owner, accepted_offer):
        with pytest.raises(InvalidStatusTransitionError):
            set_status(offer_id=accepted_offer.id, user=owner, status='pending')

        accepted_offer.refresh_from_db()
        assert accepted_offer.status == OfferStatus.ACCEPTED

    def test_rejected_can_reopen_but_not_accept(self, owner, pending_offer):
        set_status(offer_id=pending_offer.id, user=owner, status='rejected')

        with pytest.raises(InvalidStatusTransitionError):
            set_status(offer_id=pending_offer.id, user=owner, status='accepted')

        offer = set_status(offer_id=pending_offer.id, user=owner, status='pending')
        assert offer.status == OfferStatus.PENDING

    def test_only_owner_can_change_status(self, tenant, outsider, pending_offer):
        for user in (tenant, outsider):
            with pytest.raises(NotOfferOwnerError):
                set_status(offer_id=pending_offer.id, user=user, status='accepted')

        pending_offer.refresh_from_db()
        assert pending_offer.status == OfferStatus.PENDING

    def test_ownership_checked_before_status_value(self, outsider, pending_offer):
        with pytest.raises(NotOfferOwnerError):
            set_status(offer_id=pending_offer.id, user=outsider, status='maybe')

    def test_missing_offer(self, owner):
        with pytest.raises(OfferNotFoundError, match='Offer not found'):
            set_status(offer_id=999999, user=owner, status='accepted')

    def test_stale_version_rejected(self, owner, pending_offer):
        with pytest.raises(StaleOfferError):
            set_status(
                offer_id=pending_offer.id, user=owner,
                status='accepted', expected_version=5,
            )

        pending_offer.refresh_from_db()
        assert pending_offer.status == OfferStatus.PENDING

    def test_matching_version_accepted(self, owner, pending_offer):
        offer = set_status(
            offer_id=pending_offer.id, user=owner,
            status='accepted', expected_version=1,
        )
        assert offer.version == 2


@pytest.mark.django_db
class TestRequestAdvance:
    """Tests for request_advance."""

    def test_request_advance_success(self, owner, pending_offer):
        offer = request_advance(
            offer_id=pending_offer.id,
            user=owner,
            amount=Decimal('5000'),
            validity_days=2.9,
            meeting_time='2025-01-10T10:30:00Z',
            joining_date='2025-02-01',
        )

        assert offer.requested_advance_amount == Decimal('5000')
        assert offer.requested_advance_validity_days == 2
        assert offer.proposed_meeting_time == datetime(2025, 1, 10, 10, 30, tzinfo=dt_timezone.utc)
        assert offer.desired_joining_date.date().isoformat() == '2025-02-01'
        assert offer.action_type == OfferActionType.ADVANCE_REQUESTED
        assert offer.status == OfferStatus.PENDING
        assert offer.version == 2

    def test_request_advance_overwrites_previous(self, owner, pending_offer):
        request_advance(
            offer_id=pending_offer.id, user=owner,
            amount=Decimal('5000'), validity_days=3,
            meeting_time='2025-01-10T10:30:00Z',
        )
        offer = request_advance(offer_id=pending_offer.id, user=owner, amount=Decimal('7000'))

        assert offer.requested_advance_amount == Decimal('7000')
        assert offer.requested_advance_validity_days is None
        assert offer.proposed_meeting_time is None

    @pytest.mark.parametrize('amount', [0, -10, 'abc', None, 'NaN', Decimal('1e30')])
    def test_request_advance_invalid_amount(self, owner, pending_offer, amount):
        with pytest.raises(InvalidOfferError, match='requestedAdvanceAmount must be a valid number'):
            request_advance(offer_id=pending_offer.id, user=owner, amount=amount)

        pending_offer.refresh_from_db()
        assert pending_offer.requested_advance_amount is None
        assert pending_offer.action_type == OfferActionType.NONE

    @pytest.mark.parametrize('days', [0, -1, 0.5, 'x', 366, 1e20])
    def test_request_advance_invalid_validity(self, owner, pending_offer, days):
        with pytest.raises(InvalidOfferError, match='requestedAdvanceValidityDays'):
            request_advance(
                offer_id=pending_offer.id, user=owner,
                amount=Decimal('100'), validity_days=days,
            )

    def test_request_advance_validity_upper_bound(self, owner, pending_offer):
        offer = request_advance(
            offer_id=pending_offer.id, user=owner,
            amount=Decimal('100'), validity_days=365.9,
        )

        assert offer.requested_advance_validity_days == 365

    def test_request_advance_invalid_date(self, owner, pending_offer):
        with pytest.raises(InvalidOfferError, match='proposedMeetingTime must be a valid date'):
            request_advance(
                offer_id=pending_offer.id, user=owner,
                amount=Decimal('100'), meeting_time='not-a-date',
            )

    def test_request_advance_forbidden_for_tenant(self, tenant, pending_offer):
        with pytest.raises(NotOfferOwnerError):
            request_advance(offer_id=pending_offer.id, user=tenant, amount=Decimal('100'))

        pending_offer.refresh_from_db()
        assert pending_offer.requested_advance_amount is None

    def test_request_advance_on_rejected_offer(self, owner, pending_offer):
        set_status(offer_id=pending_offer.id, user=owner, status='rejected')

        with pytest.raises(InvalidOfferError, match='rejected'):
            request_advance(offer_id=pending_offer.id, user=owner, amount=Decimal('100'))

    def test_request_advance_after_booking_verified(self, owner, verified_offer):
        with pytest.raises(InvalidOfferError, match='already verified'):
            request_advance(offer_id=verified_offer.id, user=owner, amount=Decimal('9999'))

        verified_offer.refresh_from_db()
        assert verified_offer.requested_advance_amount == Decimal('5000.00')

    def test_request_advance_stale_version(self, owner, pending_offer):
        with pytest.raises(StaleOfferError):
            request_advance(
                offer_id=pending_offer.id, user=owner,
                amount=Decimal('100'), expected_version=2,
            )


@pytest.mark.django_db
class TestConfirmMoveIn:
    """Tests for confirm_move_in."""

    def test_requires_accepted_offer(self, owner, pending_offer):
        with pytest.raises(InvalidOfferError, match='Offer is not accepted'):
            confirm_move_in(offer_id=pending_offer.id, user=owner)

    def test_requires_verified_booking(self, owner, accepted_offer):
        with pytest.raises(InvalidOfferError, match='Booking payment is not verified yet'):
            confirm_move_in(offer_id=accepted_offer.id, user=owner)

        accepted_offer.refresh_from_db()
        assert accepted_offer.tenant_move_in_confirmed is False

    def test_confirm_move_in_success(self, owner, verified_offer):
        offer = confirm_move_in(offer_id=verified_offer.id, user=owner)

        assert offer.tenant_move_in_confirmed is True
        assert offer.tenant_move_in_confirmed_at is not None
        assert offer.status == OfferStatus.ACCEPTED

    def test_confirm_twice_returns_unchanged(self, owner, verified_offer):
        first = confirm_move_in(offer_id=verified_offer.id, user=owner)
        second = confirm_move_in(offer_id=verified_offer.id, user=owner)

        assert second.tenant_move_in_confirmed_at == first.tenant_move_in_confirmed_at
        assert second.version == first.version

    def test_only_owner_can_confirm(self, tenant, verified_offer):
        with pytest.raises(NotOfferOwnerError):
            confirm_move_in(offer_id=verified_offer.id, user=tenant)


@pytest.mark.django_db
class TestMarkBookingVerified:
    """Tests for the payment ledger hook."""

    def test_sets_flag_and_timestamp(self, accepted_offer):
        verified_at = datetime(2025, 1, 15, 9, 0, tzinfo=dt_timezone.utc)
        offer = mark_booking_verified(offer=accepted_offer, verified_at=verified_at)

        assert offer.booking_verified is True
        assert offer.booking_verified_at == verified_at
        assert offer.status == OfferStatus.ACCEPTED

    def test_already_verified_is_untouched(self, verified_offer):
        before = verified_offer.booking_verified_at
        version = verified_offer.version

        offer = mark_booking_verified(
            offer=verified_offer,
            verified_at=datetime(2030, 1, 1, tzinfo=dt_timezone.utc),
        )

        assert offer.booking_verified_at == before
        assert offer.version == version
