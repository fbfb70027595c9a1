from django.db import models
import uuid


class ParkingType(models.TextChoices):
    NONE = 'none', 'None'
    BIKE = 'bike', 'Bike'
    CAR = 'car', 'Car'
    BOTH = 'both', 'Bike and car'


class PropertyStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    OCCUPIED = 'occupied', 'Occupied'


class Property(models.Model):
    """
    Rental listing as seen by the offer workflow.

    Listings are created and edited by the listing service; here they are
    only looked up for ownership and joined into offer responses.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='properties'
    )

    property_name = models.CharField(max_length=200)
    address = models.CharField(max_length=300, blank=True)
    city = models.CharField(max_length=100, blank=True)

    # Asking terms
    rent_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    advance_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    booking_advance = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    booking_validity_days = models.PositiveIntegerField(null=True, blank=True)

    parking_type = models.CharField(
        max_length=10,
        choices=ParkingType.choices,
        default=ParkingType.NONE
    )
    preferred_tenant_types = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=20,
        choices=PropertyStatus.choices,
        default=PropertyStatus.AVAILABLE
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'properties'
        verbose_name_plural = 'properties'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='properties_owner_created_idx'),
            models.Index(fields=['status'], name='properties_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.property_name
