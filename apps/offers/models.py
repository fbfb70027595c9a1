from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal


class OfferStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'
    ON_HOLD = 'on_hold', 'On hold'

    @classmethod
    def parse(cls, value):
        """Return the member for a trimmed, case-insensitive value, or None."""
        normalized = str(value or '').strip().lower()
        if normalized in cls.values:
            return cls(normalized)
        return None


class OfferActionType(models.TextChoices):
    NONE = '', 'None'
    ADVANCE_REQUESTED = 'advance_requested', 'Advance requested'


class Offer(models.Model):
    """
    A tenant's proposed rental terms against a property.

    Mutations go through apps.offers.services; every persisted change bumps
    ``version`` so clients can detect concurrent edits.
    """

    # Auto-increment id is also the insertion-order tie-breaker in listings
    id = models.BigAutoField(primary_key=True)

    property = models.ForeignKey(
        'properties.Property',
        on_delete=models.CASCADE,
        related_name='offers'
    )
    # Copied from the property when the offer is created, never changed
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='offers_received'
    )
    tenant = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='offers_sent'
    )

    # Commercial terms
    offer_rent = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    joining_date_estimate = models.CharField(max_length=100)
    offer_advance = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    offer_booking_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    needs_bike_parking = models.BooleanField(default=False)
    needs_car_parking = models.BooleanField(default=False)
    tenant_type = models.CharField(max_length=50, blank=True)
    accepts_rules = models.BooleanField(default=False)
    match_percent = models.FloatField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )

    # Negotiation state
    status = models.CharField(
        max_length=20,
        choices=OfferStatus.choices,
        default=OfferStatus.PENDING
    )
    action_type = models.CharField(
        max_length=32,
        choices=OfferActionType.choices,
        default=OfferActionType.NONE,
        blank=True
    )
    requested_advance_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    requested_advance_validity_days = models.PositiveIntegerField(null=True, blank=True)
    proposed_meeting_time = models.DateTimeField(null=True, blank=True)
    desired_joining_date = models.DateTimeField(null=True, blank=True)

    # Settlement state
    booking_verified = models.BooleanField(default=False)
    booking_verified_at = models.DateTimeField(null=True, blank=True)
    tenant_move_in_confirmed = models.BooleanField(default=False)
    tenant_move_in_confirmed_at = models.DateTimeField(null=True, blank=True)

    version = models.PositiveIntegerField(default=1)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'offers'
        indexes = [
            models.Index(fields=['owner', 'property', '-created_at'], name='offers_owner_property_idx'),
            models.Index(fields=['tenant', 'property', '-created_at'], name='offers_tenant_property_idx'),
            models.Index(fields=['status'], name='offers_status_idx'),
        ]
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Offer #{self.id} on {self.property_id} ({self.status})"

    def is_accepted(self):
        return self.status == OfferStatus.ACCEPTED

    def is_settled(self):
        """Booking verified or tenant moved in; the advance can no longer change."""
        return self.booking_verified or self.tenant_move_in_confirmed

    def save_changes(self, fields):
        """Persist the given fields as one mutation and bump the version."""
        self.version += 1
        self.save(update_fields=[*fields, 'version', 'updated_at'])
