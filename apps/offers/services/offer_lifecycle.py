"""
Offer lifecycle service.

State machine for an offer once it has been submitted:

    pending  -> accepted | rejected | on_hold
    on_hold  -> pending | accepted | rejected
    rejected -> pending              (owner changes their decision)
    accepted -> (terminal)

Requesting the same status again is a successful no-op. Advance requests
and move-in confirmation never change the status.

Every operation takes the acting user explicitly, locks the offer row,
checks ownership before any business rule, and honours an optional
version token for optimistic concurrency.
"""

import logging
import math
from datetime import date, datetime, time
from typing import Optional

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from apps.accounts.models import User
from apps.offers.models import Offer, OfferStatus, OfferActionType
from apps.payments.models import PaymentStatus, PaymentType

from .exceptions import (
    OfferNotFoundError,
    NotOfferOwnerError,
    InvalidOfferError,
    InvalidStatusTransitionError,
    StaleOfferError,
)
from .offer_store import to_positive_decimal


logger = logging.getLogger(__name__)


MAX_VALIDITY_DAYS = 365

ALLOWED_TRANSITIONS = {
    OfferStatus.PENDING: {OfferStatus.ACCEPTED, OfferStatus.REJECTED, OfferStatus.ON_HOLD},
    OfferStatus.ON_HOLD: {OfferStatus.PENDING, OfferStatus.ACCEPTED, OfferStatus.REJECTED},
    OfferStatus.REJECTED: {OfferStatus.PENDING},
    OfferStatus.ACCEPTED: set(),
}


def can_transition(current, target) -> bool:
    """Whether an offer in ``current`` status may be set to ``target``."""
    current = OfferStatus(current)
    target = OfferStatus(target)
    return current == target or target in ALLOWED_TRANSITIONS[current]


def _lock_offer_for_owner(*, offer_id: int, user: User) -> Offer:
    try:
        offer = Offer.objects.select_for_update().get(id=offer_id)
    except (Offer.DoesNotExist, ValueError, TypeError):
        raise OfferNotFoundError('Offer not found')

    if str(offer.owner_id) != str(user.id):
        logger.warning(
            "Offer %s: user %s is not the owner, mutation refused",
            offer.id, user.id,
        )
        raise NotOfferOwnerError('Only the property owner can manage this offer')

    return offer


def _check_version(offer: Offer, expected_version: Optional[int]) -> None:
    if expected_version is not None and int(expected_version) != offer.version:
        raise StaleOfferError(
            'Offer was modified by another request; reload it and try again'
        )


def _to_aware_datetime(value, label: str) -> Optional[datetime]:
    """Accept datetime, date or ISO-8601 text; None/blank means not supplied."""
    if value is None or value == '':
        return None

    parsed = value
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = parse_datetime(text) or parse_date(text)
        except ValueError:
            parsed = None

    if isinstance(parsed, datetime):
        result = parsed
    elif isinstance(parsed, date):
        result = datetime.combine(parsed, time.min)
    else:
        raise InvalidOfferError(f'{label} must be a valid date')

    if timezone.is_naive(result):
        result = timezone.make_aware(result)
    return result


def _to_validity_days(value) -> Optional[int]:
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise InvalidOfferError('requestedAdvanceValidityDays must be a valid number')
    try:
        days = float(value)
    except (TypeError, ValueError):
        raise InvalidOfferError('requestedAdvanceValidityDays must be a valid number')
    if not math.isfinite(days) or not 1 <= math.floor(days) <= MAX_VALIDITY_DAYS:
        raise InvalidOfferError('requestedAdvanceValidityDays must be a valid number')
    return math.floor(days)


@transaction.atomic
def request_advance(
    *,
    offer_id: int,
    user: User,
    amount,
    validity_days=None,
    meeting_time=None,
    joining_date=None,
    expected_version: Optional[int] = None,
) -> Offer:
    """
    Ask the tenant for a booking advance.

    A new request replaces the previous one. The status is left unchanged.

    Args:
        offer_id: Offer to update
        user: Acting owner
        amount: Requested advance, finite and > 0
        validity_days: Optional 1-MAX_VALIDITY_DAYS days, floored to an int
        meeting_time: Optional proposed meeting time
        joining_date: Optional desired joining date
        expected_version: Optional version token the caller last saw

    Returns:
        Updated Offer instance

    Raises:
        OfferNotFoundError: If the offer doesn't exist
        NotOfferOwnerError: If user is not the offer's owner
        StaleOfferError: If expected_version is outdated
        InvalidOfferError: If an argument is invalid, the offer was
            rejected, its booking is already settled, or a paid booking
            payment is awaiting verification
    """
    offer = _lock_offer_for_owner(offer_id=offer_id, user=user)
    _check_version(offer, expected_version)

    requested_amount = to_positive_decimal(amount)
    if requested_amount is None:
        raise InvalidOfferError('requestedAdvanceAmount must be a valid number')

    days = _to_validity_days(validity_days)
    meeting = _to_aware_datetime(meeting_time, 'proposedMeetingTime')
    joining = _to_aware_datetime(joining_date, 'desiredJoiningDate')

    if offer.status == OfferStatus.REJECTED:
        raise InvalidOfferError('Cannot request an advance on a rejected offer')
    if offer.is_settled():
        raise InvalidOfferError('Booking payment is already verified for this offer')
    if offer.payment_transactions.filter(
        payment_type=PaymentType.BOOKING,
        status=PaymentStatus.PAID,
        owner_verified=False,
    ).exists():
        raise InvalidOfferError(
            'Booking payment is awaiting verification; verify it before requesting a new advance'
        )

    offer.requested_advance_amount = requested_amount
    offer.requested_advance_validity_days = days
    offer.proposed_meeting_time = meeting
    offer.desired_joining_date = joining
    offer.action_type = OfferActionType.ADVANCE_REQUESTED
    offer.save_changes([
        'requested_advance_amount',
        'requested_advance_validity_days',
        'proposed_meeting_time',
        'desired_joining_date',
        'action_type',
    ])

    logger.info(
        "Offer %s: advance of %s requested by owner %s",
        offer.id, requested_amount, user.id,
    )
    return offer


@transaction.atomic
def set_status(
    *,
    offer_id: int,
    user: User,
    status: str,
    expected_version: Optional[int] = None,
) -> Offer:
    """
    Move the offer to another status.

    Raises:
        OfferNotFoundError: If the offer doesn't exist
        NotOfferOwnerError: If user is not the offer's owner
        InvalidOfferError: If status is not a known value
        StaleOfferError: If expected_version is outdated
        InvalidStatusTransitionError: If the transition is not allowed
    """
    offer = _lock_offer_for_owner(offer_id=offer_id, user=user)

    target = OfferStatus.parse(status)
    if target is None:
        raise InvalidOfferError('Invalid status')

    _check_version(offer, expected_version)

    current = OfferStatus(offer.status)
    if target == current:
        return offer

    if not can_transition(current, target):
        raise InvalidStatusTransitionError(
            f'Cannot change offer status from {current.value} to {target.value}'
        )

    offer.status = target
    offer.save_changes(['status'])

    logger.info(
        "Offer %s: status %s -> %s by owner %s",
        offer.id, current.value, target.value, user.id,
    )
    return offer


@transaction.atomic
def confirm_move_in(
    *,
    offer_id: int,
    user: User,
    expected_version: Optional[int] = None,
) -> Offer:
    """
    Record that the tenant has moved in.

    Only allowed for accepted offers whose booking payment has been
    verified. Confirming twice returns the offer unchanged.

    Raises:
        OfferNotFoundError: If the offer doesn't exist
        NotOfferOwnerError: If user is not the offer's owner
        StaleOfferError: If expected_version is outdated
        InvalidOfferError: If the offer is not accepted or not verified
    """
    offer = _lock_offer_for_owner(offer_id=offer_id, user=user)
    _check_version(offer, expected_version)

    if not offer.is_accepted():
        raise InvalidOfferError('Offer is not accepted')
    if not offer.booking_verified:
        raise InvalidOfferError('Booking payment is not verified yet')

    if offer.tenant_move_in_confirmed:
        return offer

    offer.tenant_move_in_confirmed = True
    offer.tenant_move_in_confirmed_at = timezone.now()
    offer.save_changes(['tenant_move_in_confirmed', 'tenant_move_in_confirmed_at'])

    logger.info("Offer %s: tenant move-in confirmed by owner %s", offer.id, user.id)
    return offer


def mark_booking_verified(*, offer: Offer, verified_at: datetime) -> Offer:
    """
    Mirror an owner-verified booking transaction onto its offer.

    Must be called by the payment ledger inside the same database
    transaction that verifies the booking payment, with the offer row
    already locked.
    """
    if offer.booking_verified:
        return offer

    offer.booking_verified = True
    offer.booking_verified_at = verified_at
    offer.save_changes(['booking_verified', 'booking_verified_at'])

    logger.info("Offer %s: booking payment verified", offer.id)
    return offer
