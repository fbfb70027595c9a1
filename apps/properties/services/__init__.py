"""
Property directory services.

The offer workflow only reads listings; creation and editing live in the
listing service.
"""

from .exceptions import (
    PropertyDirectoryError,
    PropertyNotFoundError,
)

from .directory import (
    get_property,
)


__all__ = [
    'PropertyDirectoryError',
    'PropertyNotFoundError',
    'get_property',
]
