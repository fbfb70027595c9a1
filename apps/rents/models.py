from django.db import models
import uuid


class RentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'


class RentMonthRecord(models.Model):
    """
    One month of rent owed on an accepted offer.

    Seeded when the booking payment is verified and settled when a rent
    payment for that month is verified. There is at most one record per
    offer and month.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    offer = models.ForeignKey(
        'offers.Offer',
        on_delete=models.CASCADE,
        related_name='rent_records'
    )
    property = models.ForeignKey(
        'properties.Property',
        on_delete=models.CASCADE,
        related_name='rent_records'
    )
    tenant = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='rent_records_as_tenant'
    )
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='rent_records_as_owner'
    )

    rent_month = models.CharField(max_length=7)
    due_date = models.DateField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='INR')

    status = models.CharField(
        max_length=20,
        choices=RentStatus.choices,
        default=RentStatus.PENDING
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    payment_transaction = models.ForeignKey(
        'payments.PaymentTransaction',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='rent_records'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rent_month_records'
        constraints = [
            models.UniqueConstraint(fields=['offer', 'rent_month'], name='rent_records_offer_month_uniq'),
        ]
        indexes = [
            models.Index(fields=['owner', '-rent_month', 'status'], name='rent_records_owner_month_idx'),
            models.Index(fields=['tenant', '-rent_month', 'status'], name='rent_records_tenant_month_idx'),
        ]
        ordering = ['-due_date', '-created_at']

    def __str__(self):
        return f"Rent {self.rent_month} for offer #{self.offer_id} ({self.status})"
