"""
Domain exceptions for the rents app.
"""


class RentsServiceError(Exception):
    """Base exception for all rent schedule errors."""
    pass


class InvalidRentMonthError(RentsServiceError):
    """Raised when a rent month is not a real YYYY-MM month."""
    pass
