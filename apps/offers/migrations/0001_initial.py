# Generated manually for the offers app

from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('properties', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Offer',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('offer_rent', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('joining_date_estimate', models.CharField(max_length=100)),
                ('offer_advance', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('offer_booking_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('needs_bike_parking', models.BooleanField(default=False)),
                ('needs_car_parking', models.BooleanField(default=False)),
                ('tenant_type', models.CharField(blank=True, max_length=50)),
                ('accepts_rules', models.BooleanField(default=False)),
                ('match_percent', models.FloatField(default=0, validators=[MinValueValidator(0), MaxValueValidator(100)])),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected'), ('on_hold', 'On hold')], default='pending', max_length=20)),
                ('action_type', models.CharField(blank=True, choices=[('', 'None'), ('advance_requested', 'Advance requested')], default='', max_length=32)),
                ('requested_advance_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('requested_advance_validity_days', models.PositiveIntegerField(blank=True, null=True)),
                ('proposed_meeting_time', models.DateTimeField(blank=True, null=True)),
                ('desired_joining_date', models.DateTimeField(blank=True, null=True)),
                ('booking_verified', models.BooleanField(default=False)),
                ('booking_verified_at', models.DateTimeField(blank=True, null=True)),
                ('tenant_move_in_confirmed', models.BooleanField(default=False)),
                ('tenant_move_in_confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='offers_received', to=settings.AUTH_USER_MODEL)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='offers', to='properties.property')),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='offers_sent', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'offers',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['owner', 'property', '-created_at'], name='offers_owner_property_idx'),
                    models.Index(fields=['tenant', 'property', '-created_at'], name='offers_tenant_property_idx'),
                    models.Index(fields=['status'], name='offers_status_idx'),
                ],
            },
        ),
    ]
