from django.db import models
import uuid


class PaymentType(models.TextChoices):
    BOOKING = 'booking', 'Booking advance'
    RENT = 'rent', 'Monthly rent'


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'


class PaymentTransaction(models.Model):
    """
    A tenant's payment against an offer: the booking advance or one month of rent.

    The tenant marks it paid; the owner then verifies it. Verification of a
    booking payment is mirrored onto the offer in the same database
    transaction.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Public reference shown to users and used in URLs
    transaction_id = models.CharField(max_length=64, unique=True)

    offer = models.ForeignKey(
        'offers.Offer',
        on_delete=models.CASCADE,
        related_name='payment_transactions'
    )
    # Copied from the offer at creation
    property = models.ForeignKey(
        'properties.Property',
        on_delete=models.CASCADE,
        related_name='payment_transactions'
    )
    tenant = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='payments_sent'
    )
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='payments_received'
    )

    payment_type = models.CharField(
        max_length=20,
        choices=PaymentType.choices,
        default=PaymentType.BOOKING
    )
    # YYYY-MM, rent payments only
    rent_month = models.CharField(max_length=7, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='INR')

    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    owner_verified = models.BooleanField(default=False)
    owner_verified_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_transactions'
        indexes = [
            models.Index(fields=['offer', 'payment_type', '-created_at'], name='payments_offer_type_idx'),
            models.Index(fields=['tenant', '-created_at'], name='payments_tenant_created_idx'),
            models.Index(fields=['owner', '-created_at'], name='payments_owner_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.transaction_id} ({self.payment_type}, {self.status})"

    def is_paid(self):
        return self.status == PaymentStatus.PAID
