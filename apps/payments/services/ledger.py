"""
Payment transaction ledger.

Tenants create a transaction for the booking advance or a month of rent and
mark it paid; owners verify it. Verification is the only path that updates
the offer's booking flag and the rent schedule, and it does so in the same
database transaction.

Lock order is always offer row first, then transaction row.
"""

import logging
import secrets
import string
import time
from typing import Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.offers.models import Offer
from apps.offers.services import mark_booking_verified
from apps.payments.models import PaymentTransaction, PaymentType, PaymentStatus
from apps.rents.services import (
    parse_rent_month,
    current_rent_month,
    due_date_for,
    ensure_month_record,
    mark_month_paid,
    InvalidRentMonthError,
)

from .exceptions import (
    PaymentNotFoundError,
    NotPaymentTenantError,
    NotPaymentOwnerError,
    InvalidPaymentError,
)


logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_uppercase
REFERENCE_RANDOM_LENGTH = 8


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits)) or '0'


def generate_transaction_id() -> str:
    """
    Public payment reference: PREFIX_<base36 epoch millis>_<random>.

    Example: TXN_LZ3K9Q2A_7HD02KXM
    """
    prefix = getattr(settings, 'PAYMENT_TRANSACTION_PREFIX', 'TXN')
    stamp = _to_base36(int(time.time() * 1000))
    suffix = ''.join(
        secrets.choice(BASE36_ALPHABET) for _ in range(REFERENCE_RANDOM_LENGTH)
    )
    return f'{prefix}_{stamp}_{suffix}'


def _create_transaction(
    *,
    offer: Offer,
    payment_type: str,
    amount,
    rent_month: str = '',
    max_retries: int = 5
) -> PaymentTransaction:
    """Insert a pending transaction, retrying on a transaction_id collision."""
    for attempt in range(max_retries):
        try:
            with transaction.atomic():
                return PaymentTransaction.objects.create(
                    transaction_id=generate_transaction_id(),
                    offer=offer,
                    property_id=offer.property_id,
                    tenant_id=offer.tenant_id,
                    owner_id=offer.owner_id,
                    payment_type=payment_type,
                    rent_month=rent_month,
                    amount=amount,
                    currency=getattr(settings, 'PAYMENT_CURRENCY', 'INR'),
                    status=PaymentStatus.PENDING,
                )
        except IntegrityError:
            # Collision detected, retry
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique transaction id after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in transaction id generation")


def _lock_offer_for_tenant(*, offer_id: int, user: User) -> Offer:
    try:
        offer = Offer.objects.select_for_update().get(id=offer_id)
    except (Offer.DoesNotExist, ValueError, TypeError):
        raise PaymentNotFoundError('Offer not found')

    if str(offer.tenant_id) != str(user.id):
        logger.warning(
            "Offer %s: user %s is not the tenant, payment refused",
            offer.id, user.id,
        )
        raise NotPaymentTenantError('Only the tenant of this offer can pay for it')
    return offer


def _lock_transaction(*, transaction_id: str) -> PaymentTransaction:
    """Lock the transaction's offer, then the transaction itself."""
    offer_id = (
        PaymentTransaction.objects
        .filter(transaction_id=transaction_id)
        .values_list('offer_id', flat=True)
        .first()
    )
    if offer_id is None:
        raise PaymentNotFoundError('Transaction not found')

    offer = Offer.objects.select_for_update().get(id=offer_id)
    try:
        payment = (
            PaymentTransaction.objects
            .select_for_update()
            .get(transaction_id=transaction_id)
        )
    except PaymentTransaction.DoesNotExist:
        raise PaymentNotFoundError('Transaction not found')

    payment.offer = offer
    return payment


@transaction.atomic
def create_booking_transaction(*, offer_id: int, user: User) -> tuple:
    """
    Start (or resume) the booking-advance payment of an offer.

    The latest booking transaction of the offer is reused when one exists;
    while it is still pending its amount follows the owner's latest advance
    request.

    Args:
        offer_id: Offer being paid for
        user: Tenant who made the offer

    Returns:
        (PaymentTransaction, reused)

    Raises:
        PaymentNotFoundError: If the offer doesn't exist
        NotPaymentTenantError: If user is not the offer's tenant
        InvalidPaymentError: If no advance has been requested
    """
    offer = _lock_offer_for_tenant(offer_id=offer_id, user=user)

    amount = offer.requested_advance_amount
    if amount is None or amount <= 0:
        raise InvalidPaymentError('Offer does not have a valid requestedAdvanceAmount')

    existing = (
        PaymentTransaction.objects
        .select_for_update()
        .filter(offer=offer, payment_type=PaymentType.BOOKING)
        .order_by('-created_at')
        .first()
    )
    if existing:
        if existing.status == PaymentStatus.PENDING and existing.amount != amount:
            existing.amount = amount
            existing.save(update_fields=['amount', 'updated_at'])
        return existing, True

    payment = _create_transaction(
        offer=offer,
        payment_type=PaymentType.BOOKING,
        amount=amount,
    )
    logger.info(
        "Transaction %s: booking payment of %s created for offer %s",
        payment.transaction_id, amount, offer.id,
    )
    return payment, False


@transaction.atomic
def create_rent_transaction(*, offer_id: int, user: User, rent_month: str) -> tuple:
    """
    Start (or resume) the rent payment of one month.

    Returns:
        (PaymentTransaction, reused)

    Raises:
        PaymentNotFoundError: If the offer doesn't exist
        NotPaymentTenantError: If user is not the offer's tenant
        InvalidPaymentError: If the offer is not accepted or the month is malformed
    """
    offer = _lock_offer_for_tenant(offer_id=offer_id, user=user)

    if not offer.is_accepted():
        raise InvalidPaymentError('Offer is not accepted')

    month = str(rent_month or '').strip()
    try:
        parse_rent_month(month)
    except InvalidRentMonthError as e:
        raise InvalidPaymentError(str(e))

    amount = offer.offer_rent
    if amount is None or amount <= 0:
        raise InvalidPaymentError('Offer does not have a valid offerRent')

    existing = (
        PaymentTransaction.objects
        .filter(offer=offer, payment_type=PaymentType.RENT, rent_month=month)
        .order_by('-created_at')
        .first()
    )
    if existing:
        return existing, True

    payment = _create_transaction(
        offer=offer,
        payment_type=PaymentType.RENT,
        amount=amount,
        rent_month=month,
    )
    logger.info(
        "Transaction %s: rent payment for %s created for offer %s",
        payment.transaction_id, month, offer.id,
    )
    return payment, False


@transaction.atomic
def mark_paid(*, transaction_id: str, user: User) -> PaymentTransaction:
    """
    Tenant reports the payment as made. Marking twice is a no-op.

    Raises:
        PaymentNotFoundError: If the transaction doesn't exist
        NotPaymentTenantError: If user is not the paying tenant
    """
    payment = _lock_transaction(transaction_id=transaction_id)

    if str(payment.tenant_id) != str(user.id):
        logger.warning(
            "Transaction %s: user %s is not the tenant, mark-paid refused",
            payment.transaction_id, user.id,
        )
        raise NotPaymentTenantError('Only the paying tenant can mark this payment as paid')

    if payment.status != PaymentStatus.PAID:
        payment.status = PaymentStatus.PAID
        payment.paid_at = timezone.now()
        payment.save(update_fields=['status', 'paid_at', 'updated_at'])
        logger.info("Transaction %s: marked paid by tenant %s", payment.transaction_id, user.id)

    return payment


@transaction.atomic
def verify_transaction(*, transaction_id: str, user: User) -> PaymentTransaction:
    """
    Owner confirms receipt of a paid transaction.

    Booking payments set the offer's booking flag and seed the current
    month's rent record for accepted offers with a desired joining date.
    Rent payments settle their month's record. All of it commits or rolls
    back together.

    Raises:
        PaymentNotFoundError: If the transaction doesn't exist
        NotPaymentOwnerError: If user is not the receiving owner
        InvalidPaymentError: If the transaction has not been paid
    """
    payment = _lock_transaction(transaction_id=transaction_id)

    if str(payment.owner_id) != str(user.id):
        logger.warning(
            "Transaction %s: user %s is not the owner, verification refused",
            payment.transaction_id, user.id,
        )
        raise NotPaymentOwnerError('Only the property owner can verify this payment')

    if not payment.is_paid():
        raise InvalidPaymentError('Payment is not marked as paid yet')

    if payment.owner_verified:
        return payment

    verified_at = timezone.now()
    payment.owner_verified = True
    payment.owner_verified_at = verified_at
    payment.save(update_fields=['owner_verified', 'owner_verified_at', 'updated_at'])

    offer = payment.offer
    if payment.payment_type == PaymentType.BOOKING:
        mark_booking_verified(offer=offer, verified_at=verified_at)

        if offer.is_accepted() and offer.desired_joining_date:
            rent_month = current_rent_month(verified_at)
            ensure_month_record(
                offer=offer,
                rent_month=rent_month,
                due_date=due_date_for(offer.desired_joining_date, rent_month),
            )
    elif payment.payment_type == PaymentType.RENT and payment.rent_month:
        mark_month_paid(
            offer=offer,
            rent_month=payment.rent_month,
            payment=payment,
            paid_at=verified_at,
        )

    logger.info(
        "Transaction %s: %s payment verified by owner %s",
        payment.transaction_id, payment.payment_type, user.id,
    )
    return payment


def get_transaction(*, transaction_id: str) -> PaymentTransaction:
    """Fetch a transaction with its joined summaries."""
    try:
        return (
            PaymentTransaction.objects
            .select_related('property', 'tenant', 'owner')
            .get(transaction_id=transaction_id)
        )
    except PaymentTransaction.DoesNotExist:
        raise PaymentNotFoundError('Transaction not found')


def list_tenant_transactions(*, user: User) -> QuerySet[PaymentTransaction]:
    """Payments the user made as tenant, newest first."""
    return (
        PaymentTransaction.objects
        .filter(tenant=user)
        .select_related('property', 'tenant', 'owner')
        .order_by('-created_at')
    )


def list_owner_transactions(
    *,
    user: User,
    payment_type: Optional[str] = None,
    owner_verified: Optional[bool] = None,
    status: Optional[str] = None
) -> QuerySet[PaymentTransaction]:
    """Payments made to the user as owner, newest first, optionally filtered."""
    queryset = PaymentTransaction.objects.filter(owner=user)

    if payment_type:
        queryset = queryset.filter(payment_type=payment_type)
    if owner_verified is not None:
        queryset = queryset.filter(owner_verified=owner_verified)
    if status:
        queryset = queryset.filter(status=status)

    return queryset.select_related('property', 'tenant', 'owner').order_by('-created_at')
