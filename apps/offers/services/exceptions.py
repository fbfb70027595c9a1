"""
Domain exceptions for the offers app.

These exceptions represent business rule violations and are converted to
HTTP responses by the offer views:

    OffersServiceError (base)
    ├── OfferNotFoundError            -> 404
    ├── NotOfferOwnerError            -> 403
    ├── InvalidOfferError             -> 400
    │   └── InvalidStatusTransitionError
    └── StaleOfferError               -> 409
"""


class OffersServiceError(Exception):
    """Base exception for all offer service errors."""
    pass


class OfferNotFoundError(OffersServiceError):
    """Raised when an offer (or the property it targets) does not exist."""
    pass


class NotOfferOwnerError(OffersServiceError):
    """Raised when the caller is not the owner the offer was made to."""
    pass


class InvalidOfferError(OffersServiceError):
    """Raised when offer input or the offer's current state rejects the operation."""
    pass


class InvalidStatusTransitionError(InvalidOfferError):
    """Raised when the requested status cannot follow the current one."""
    pass


class StaleOfferError(OffersServiceError):
    """Raised when the caller's version token no longer matches the stored offer."""
    pass
