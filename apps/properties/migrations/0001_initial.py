# Generated manually for the property directory

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('property_name', models.CharField(max_length=200)),
                ('address', models.CharField(blank=True, max_length=300)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('rent_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('advance_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('booking_advance', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('booking_validity_days', models.PositiveIntegerField(blank=True, null=True)),
                ('parking_type', models.CharField(choices=[('none', 'None'), ('bike', 'Bike'), ('car', 'Car'), ('both', 'Bike and car')], default='none', max_length=10)),
                ('preferred_tenant_types', models.JSONField(blank=True, default=list)),
                ('photos', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('available', 'Available'), ('occupied', 'Occupied')], default='available', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'properties',
                'verbose_name_plural': 'properties',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['owner', 'created_at'], name='properties_owner_created_idx'),
                    models.Index(fields=['status'], name='properties_status_idx'),
                ],
            },
        ),
    ]
