"""
Read-only property lookups used by the offer workflow.
"""

from uuid import UUID

from apps.properties.models import Property

from .exceptions import PropertyNotFoundError


def get_property(*, property_id: UUID) -> Property:
    """
    Fetch a property with its owner.

    Raises:
        PropertyNotFoundError: If no property has this id
    """
    try:
        return Property.objects.select_related('owner').get(id=property_id)
    except Property.DoesNotExist:
        raise PropertyNotFoundError('Property not found')

