"""
Offers services - Business logic layer.

This package contains all business operations for the offers app:
- Offer creation and owner/tenant listings
- Negotiation lifecycle (advance requests, status changes, move-in)
- The booking verification hook used by the payment ledger
"""

# Offer Store
from .offer_store import (
    create_offer,
    list_received_offers,
    list_sent_offers,
    get_offer_history,
    normalize_match_percent,
)

# Offer Lifecycle
from .offer_lifecycle import (
    ALLOWED_TRANSITIONS,
    can_transition,
    request_advance,
    set_status,
    confirm_move_in,
    mark_booking_verified,
)

# Domain Exceptions
from .exceptions import (
    OffersServiceError,
    OfferNotFoundError,
    NotOfferOwnerError,
    InvalidOfferError,
    InvalidStatusTransitionError,
    StaleOfferError,
)

__all__ = [
    # Offer Store Services
    'create_offer',
    'list_received_offers',
    'list_sent_offers',
    'get_offer_history',
    'normalize_match_percent',
    # Offer Lifecycle Services
    'ALLOWED_TRANSITIONS',
    'can_transition',
    'request_advance',
    'set_status',
    'confirm_move_in',
    'mark_booking_verified',
    # Exceptions
    'OffersServiceError',
    'OfferNotFoundError',
    'NotOfferOwnerError',
    'InvalidOfferError',
    'InvalidStatusTransitionError',
    'StaleOfferError',
]
