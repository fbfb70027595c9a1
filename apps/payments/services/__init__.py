"""
Payments services - the payment transaction ledger.

- Booking advance and monthly rent transactions (tenant)
- Mark paid (tenant) and verify (owner)
- Tenant and owner listings
"""

from .ledger import (
    generate_transaction_id,
    create_booking_transaction,
    create_rent_transaction,
    mark_paid,
    verify_transaction,
    get_transaction,
    list_tenant_transactions,
    list_owner_transactions,
)

# Domain Exceptions
from .exceptions import (
    PaymentsServiceError,
    PaymentNotFoundError,
    NotPaymentTenantError,
    NotPaymentOwnerError,
    InvalidPaymentError,
)

__all__ = [
    # Ledger Services
    'generate_transaction_id',
    'create_booking_transaction',
    'create_rent_transaction',
    'mark_paid',
    'verify_transaction',
    'get_transaction',
    'list_tenant_transactions',
    'list_owner_transactions',
    # Exceptions
    'PaymentsServiceError',
    'PaymentNotFoundError',
    'NotPaymentTenantError',
    'NotPaymentOwnerError',
    'InvalidPaymentError',
]
