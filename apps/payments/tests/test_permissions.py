"""
Tests for payments permission classes.
"""
import pytest
from unittest.mock import Mock
from apps.payments.permissions import IsPaymentTenant, IsPaymentOwner


@pytest.mark.django_db
class TestIsPaymentTenant:
    """Test IsPaymentTenant permission class."""

    def test_tenant_allowed(self, tenant, booking_payment):
        request = Mock()
        request.user = tenant

        assert IsPaymentTenant().has_object_permission(request, Mock(), booking_payment) is True

    def test_owner_denied(self, owner, booking_payment):
        request = Mock()
        request.user = owner

        assert IsPaymentTenant().has_object_permission(request, Mock(), booking_payment) is False


@pytest.mark.django_db
class TestIsPaymentOwner:
    """Test IsPaymentOwner permission class."""

    def test_owner_allowed(self, owner, booking_payment):
        request = Mock()
        request.user = owner

        assert IsPaymentOwner().has_object_permission(request, Mock(), booking_payment) is True

    def test_tenant_denied(self, tenant, booking_payment):
        request = Mock()
        request.user = tenant

        assert IsPaymentOwner().has_object_permission(request, Mock(), booking_payment) is False

    def test_outsider_denied(self, outsider, booking_payment):
        request = Mock()
        request.user = outsider

        assert IsPaymentOwner().has_object_permission(request, Mock(), booking_payment) is False
