"""
Domain exceptions for the payments app.

    PaymentsServiceError (base)
    ├── PaymentNotFoundError     -> 404
    ├── NotPaymentTenantError    -> 403
    ├── NotPaymentOwnerError     -> 403
    └── InvalidPaymentError      -> 400
"""


class PaymentsServiceError(Exception):
    """Base exception for all payment service errors."""
    pass


class PaymentNotFoundError(PaymentsServiceError):
    """Raised when a transaction (or the offer it pays for) does not exist."""
    pass


class NotPaymentTenantError(PaymentsServiceError):
    """Raised when someone other than the paying tenant acts as the payer."""
    pass


class NotPaymentOwnerError(PaymentsServiceError):
    """Raised when someone other than the receiving owner verifies a payment."""
    pass


class InvalidPaymentError(PaymentsServiceError):
    """Raised when the offer or transaction state does not allow the operation."""
    pass
