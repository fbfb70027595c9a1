"""
Service layer unit tests for the rent schedule.
"""

import pytest
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

from apps.payments.models import PaymentTransaction, PaymentType, PaymentStatus
from apps.rents.models import RentMonthRecord, RentStatus
from apps.rents.services import (
    parse_rent_month,
    month_key,
    current_rent_month,
    due_date_for,
    ensure_month_record,
    mark_month_paid,
    list_owner_rent_records,
    list_tenant_rent_records,
)
from apps.rents.services.exceptions import InvalidRentMonthError


def make_rent_payment(offer, rent_month):
    return PaymentTransaction.objects.create(
        transaction_id=f'TXN_TEST_{rent_month.replace("-", "")}',
        offer=offer,
        property_id=offer.property_id,
        tenant_id=offer.tenant_id,
        owner_id=offer.owner_id,
        payment_type=PaymentType.RENT,
        rent_month=rent_month,
        amount=offer.offer_rent,
        status=PaymentStatus.PAID,
        paid_at=datetime(2025, 3, 2, tzinfo=dt_timezone.utc),
    )


class TestRentMonthParsing:

    @pytest.mark.parametrize('value,expected', [
        ('2025-01', (2025, 1)),
        (' 2024-12 ', (2024, 12)),
    ])
    def test_valid(self, value, expected):
        assert parse_rent_month(value) == expected

    @pytest.mark.parametrize('value', ['2025-13', '2025-00', '2025-1', '202501', '', None, 'Jan 2025'])
    def test_invalid(self, value):
        with pytest.raises(InvalidRentMonthError):
            parse_rent_month(value)

    def test_month_key(self):
        assert month_key(date(2025, 3, 9)) == '2025-03'

    def test_current_rent_month(self):
        assert current_rent_month(datetime(2025, 7, 15, 10, 0, tzinfo=dt_timezone.utc)) == '2025-07'


class TestDueDate:
    """The due day follows the joining day, clamped to the month's length."""

    @pytest.mark.parametrize('joining,month,expected', [
        (date(2025, 1, 15), '2025-03', date(2025, 3, 15)),
        (date(2025, 1, 31), '2025-02', date(2025, 2, 28)),
        (date(2023, 12, 31), '2024-02', date(2024, 2, 29)),
        (date(2025, 1, 31), '2025-04', date(2025, 4, 30)),
        (datetime(2025, 1, 31, 12, 0, tzinfo=dt_timezone.utc), '2025-06', date(2025, 6, 30)),
    ])
    def test_due_date_for(self, joining, month, expected):
        assert due_date_for(joining, month) == expected


@pytest.mark.django_db
class TestEnsureMonthRecord:
    """Tests for ensure_month_record."""

    def test_creates_record(self, rented_offer, owner, tenant, listing):
        record, created = ensure_month_record(offer=rented_offer, rent_month='2025-02')

        assert created is True
        assert record.status == RentStatus.PENDING
        assert record.amount == Decimal('14000.00')
        assert record.currency == 'INR'
        assert record.due_date == date(2025, 2, 28)
        assert record.owner_id == owner.id
        assert record.tenant_id == tenant.id
        assert record.property_id == listing.id

    def test_existing_record_untouched(self, rented_offer):
        first, _ = ensure_month_record(offer=rented_offer, rent_month='2025-02')
        second, created = ensure_month_record(
            offer=rented_offer, rent_month='2025-02', due_date=date(2025, 2, 1)
        )

        assert created is False
        assert second.id == first.id
        assert second.due_date == date(2025, 2, 28)
        assert RentMonthRecord.objects.count() == 1

    def test_explicit_due_date(self, rented_offer):
        record, _ = ensure_month_record(
            offer=rented_offer, rent_month='2025-05', due_date=date(2025, 5, 5)
        )
        assert record.due_date == date(2025, 5, 5)

    def test_without_joining_date_due_on_first(self, undated_offer):
        record, _ = ensure_month_record(offer=undated_offer, rent_month='2025-04')
        assert record.due_date == date(2025, 4, 1)

    def test_invalid_month(self, rented_offer):
        with pytest.raises(InvalidRentMonthError):
            ensure_month_record(offer=rented_offer, rent_month='2025/04')


@pytest.mark.django_db
class TestMarkMonthPaid:
    """Tests for mark_month_paid."""

    def test_settles_existing_record(self, rented_offer):
        existing, _ = ensure_month_record(offer=rented_offer, rent_month='2025-03')
        payment = make_rent_payment(rented_offer, '2025-03')
        paid_at = datetime(2025, 3, 3, tzinfo=dt_timezone.utc)

        record = mark_month_paid(offer=rented_offer, rent_month='2025-03', payment=payment, paid_at=paid_at)

        assert record.id == existing.id
        assert record.status == RentStatus.PAID
        assert record.paid_at == paid_at
        assert record.payment_transaction_id == payment.id

    def test_creates_missing_record(self, rented_offer):
        payment = make_rent_payment(rented_offer, '2025-04')

        record = mark_month_paid(
            offer=rented_offer,
            rent_month='2025-04',
            payment=payment,
            paid_at=datetime(2025, 4, 2, tzinfo=dt_timezone.utc),
        )

        assert record.status == RentStatus.PAID
        assert record.due_date == date(2025, 4, 30)


@pytest.mark.django_db
class TestRentListings:
    """Tests for the owner/tenant rent listings."""

    def test_owner_listing_latest_due_first(self, owner, rented_offer, undated_offer):
        ensure_month_record(offer=rented_offer, rent_month='2025-02')
        ensure_month_record(offer=rented_offer, rent_month='2025-03')
        ensure_month_record(offer=undated_offer, rent_month='2025-05')

        records = list(list_owner_rent_records(user=owner))

        assert [r.rent_month for r in records] == ['2025-03', '2025-02']

    def test_tenant_listing_spans_owners(self, tenant, rented_offer, undated_offer):
        ensure_month_record(offer=rented_offer, rent_month='2025-02')
        ensure_month_record(offer=undated_offer, rent_month='2025-05')

        records = list(list_tenant_rent_records(user=tenant))

        assert [r.rent_month for r in records] == ['2025-05', '2025-02']

    def test_filters(self, owner, rented_offer):
        ensure_month_record(offer=rented_offer, rent_month='2025-02')
        payment = make_rent_payment(rented_offer, '2025-03')
        mark_month_paid(
            offer=rented_offer, rent_month='2025-03', payment=payment,
            paid_at=datetime(2025, 3, 3, tzinfo=dt_timezone.utc),
        )

        paid = list(list_owner_rent_records(user=owner, status='paid'))
        assert [r.rent_month for r in paid] == ['2025-03']

        february = list(list_owner_rent_records(user=owner, rent_month='2025-02'))
        assert [r.status for r in february] == [RentStatus.PENDING]

        assert list(list_owner_rent_records(user=owner, status='paid', rent_month='2025-02')) == []
