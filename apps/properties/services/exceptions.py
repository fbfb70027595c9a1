"""
Domain exceptions for the property directory.
"""


class PropertyDirectoryError(Exception):
    """Base exception for property directory lookups."""
    pass


class PropertyNotFoundError(PropertyDirectoryError):
    """Raised when a referenced property does not exist."""
    pass
