# Generated manually for the rents app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('offers', '0001_initial'),
        ('payments', '0001_initial'),
        ('properties', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RentMonthRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('rent_month', models.CharField(max_length=7)),
                ('due_date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('currency', models.CharField(default='INR', max_length=3)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid')], default='pending', max_length=20)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('offer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_records', to='offers.offer')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_records_as_owner', to=settings.AUTH_USER_MODEL)),
                ('payment_transaction', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='rent_records', to='payments.paymenttransaction')),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_records', to='properties.property')),
                ('tenant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_records_as_tenant', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'rent_month_records',
                'ordering': ['-due_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['owner', '-rent_month', 'status'], name='rent_records_owner_month_idx'),
                    models.Index(fields=['tenant', '-rent_month', 'status'], name='rent_records_tenant_month_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=['offer', 'rent_month'], name='rent_records_offer_month_uniq'),
                ],
            },
        ),
    ]
