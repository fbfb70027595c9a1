"""
Rents services - the monthly rent schedule of accepted offers.
"""

from .schedule import (
    parse_rent_month,
    month_key,
    current_rent_month,
    due_date_for,
    ensure_month_record,
    mark_month_paid,
    list_owner_rent_records,
    list_tenant_rent_records,
)

from .exceptions import (
    RentsServiceError,
    InvalidRentMonthError,
)

__all__ = [
    'parse_rent_month',
    'month_key',
    'current_rent_month',
    'due_date_for',
    'ensure_month_record',
    'mark_month_paid',
    'list_owner_rent_records',
    'list_tenant_rent_records',
    'RentsServiceError',
    'InvalidRentMonthError',
]
