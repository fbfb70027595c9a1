"""
Fixtures shared by every app's tests: users, authenticated clients and
properties.
"""
import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.properties.models import Property, ParkingType


def authenticated_client(user):
    """Return a new API client carrying a bearer token for user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    """Create and return a property owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Olivia Owner',
        first_name='Olivia',
        last_name='Owner',
        username='olivia',
        phone='+911234567890',
        city='Pune',
    )


@pytest.fixture
def tenant(db):
    """Create and return a prospective tenant."""
    return User.objects.create_user(
        email='tenant@example.com',
        password='TestPass123!',
        first_name='Tariq',
        last_name='Tenant',
        username='tariq',
    )


@pytest.fixture
def outsider(db):
    """Create and return a user unrelated to the offers under test."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider User',
    )


@pytest.fixture
def owner_client(owner):
    """Return API client authenticated as the owner."""
    return authenticated_client(owner)


@pytest.fixture
def tenant_client(tenant):
    """Return API client authenticated as the tenant."""
    return authenticated_client(tenant)


@pytest.fixture
def outsider_client(outsider):
    """Return API client authenticated as the outsider."""
    return authenticated_client(outsider)


@pytest.fixture
def listing(owner):
    """Create and return a property owned by the owner."""
    return Property.objects.create(
        owner=owner,
        property_name='Sunny 2BHK',
        address='12 MG Road',
        city='Pune',
        rent_amount=Decimal('15000.00'),
        advance_amount=Decimal('30000.00'),
        booking_advance=Decimal('5000.00'),
        booking_validity_days=7,
        parking_type=ParkingType.BIKE,
        preferred_tenant_types=['family'],
        photos=['https://example.com/p1.jpg'],
    )


@pytest.fixture
def other_listing(outsider):
    """Create and return a property owned by someone else."""
    return Property.objects.create(
        owner=outsider,
        property_name='Lake View Studio',
        city='Pune',
        rent_amount=Decimal('9000.00'),
    )
