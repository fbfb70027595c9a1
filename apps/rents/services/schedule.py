"""
Rent schedule service.

Keeps one RentMonthRecord per (offer, month). Records are created when a
booking payment is verified and marked paid when the month's rent payment
is verified; both happen inside the payment ledger's transaction.
"""

import calendar
import logging
import re
from datetime import date, datetime
from typing import Optional

from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.offers.models import Offer
from apps.rents.models import RentMonthRecord, RentStatus

from .exceptions import InvalidRentMonthError


logger = logging.getLogger(__name__)

RENT_MONTH_PATTERN = re.compile(r'^(\d{4})-(\d{2})$')


def parse_rent_month(value) -> tuple:
    """
    Split "YYYY-MM" into (year, month).

    Raises:
        InvalidRentMonthError: If the value is not a real month
    """
    match = RENT_MONTH_PATTERN.match(str(value or '').strip())
    if not match:
        raise InvalidRentMonthError('rentMonth must be in YYYY-MM format')

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidRentMonthError('rentMonth must be in YYYY-MM format')
    return year, month


def month_key(day: date) -> str:
    return f'{day.year:04d}-{day.month:02d}'


def current_rent_month(now: Optional[datetime] = None) -> str:
    """The rent month of ``now`` in the project's time zone."""
    now = now or timezone.now()
    return month_key(timezone.localtime(now).date())


def due_date_for(joining_date, rent_month: str) -> date:
    """
    Due date of a rent month for a tenant who joined on ``joining_date``.

    The due day is the joining day of month, clamped to the last day of the
    rent month (joined on the 31st -> due on the 28th/29th in February).
    """
    year, month = parse_rent_month(rent_month)

    if isinstance(joining_date, datetime) and timezone.is_aware(joining_date):
        joining_date = timezone.localtime(joining_date)

    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(joining_date.day, last_day))


def _default_due_date(offer: Offer, rent_month: str) -> date:
    # Offers without a desired joining date fall due on the 1st
    if offer.desired_joining_date:
        return due_date_for(offer.desired_joining_date, rent_month)
    year, month = parse_rent_month(rent_month)
    return date(year, month, 1)


def ensure_month_record(
    *,
    offer: Offer,
    rent_month: str,
    due_date: Optional[date] = None
) -> tuple:
    """
    Insert the month's record if it does not exist yet.

    An existing record is returned untouched, so repeated verifications
    never duplicate or reset it.

    Returns:
        (RentMonthRecord, created)
    """
    parse_rent_month(rent_month)

    record, created = RentMonthRecord.objects.get_or_create(
        offer=offer,
        rent_month=rent_month,
        defaults={
            'property_id': offer.property_id,
            'tenant_id': offer.tenant_id,
            'owner_id': offer.owner_id,
            'due_date': due_date or _default_due_date(offer, rent_month),
            'amount': offer.offer_rent,
            'currency': getattr(settings, 'PAYMENT_CURRENCY', 'INR'),
            'status': RentStatus.PENDING,
        }
    )

    if created:
        logger.info(
            "Offer %s: rent record for %s created (due %s)",
            offer.id, rent_month, record.due_date,
        )
    return record, created


def mark_month_paid(
    *,
    offer: Offer,
    rent_month: str,
    payment,
    paid_at: datetime
) -> RentMonthRecord:
    """Settle the month's record with a verified rent payment, creating it if missing."""
    record, _ = ensure_month_record(offer=offer, rent_month=rent_month)

    record.status = RentStatus.PAID
    record.paid_at = paid_at
    record.payment_transaction = payment
    record.save(update_fields=['status', 'paid_at', 'payment_transaction', 'updated_at'])

    logger.info(
        "Offer %s: rent for %s paid by transaction %s",
        offer.id, rent_month, payment.transaction_id,
    )
    return record


def _filtered(queryset: QuerySet, status: Optional[str], rent_month: Optional[str]) -> QuerySet:
    if status:
        queryset = queryset.filter(status=status)
    if rent_month:
        queryset = queryset.filter(rent_month=rent_month)
    return queryset.select_related(
        'property', 'tenant', 'owner', 'payment_transaction'
    ).order_by('-due_date', '-created_at')


def list_owner_rent_records(
    *,
    user: User,
    status: Optional[str] = None,
    rent_month: Optional[str] = None
) -> QuerySet[RentMonthRecord]:
    """Rent owed to the user as owner, latest due date first."""
    return _filtered(RentMonthRecord.objects.filter(owner=user), status, rent_month)


def list_tenant_rent_records(
    *,
    user: User,
    status: Optional[str] = None,
    rent_month: Optional[str] = None
) -> QuerySet[RentMonthRecord]:
    """Rent the user owes as tenant, latest due date first."""
    return _filtered(RentMonthRecord.objects.filter(tenant=user), status, rent_month)
