from django.http import Http404
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import PaymentTransaction
from .permissions import IsPaymentTenant, IsPaymentOwner
from .serializers import (
    PaymentTransactionSerializer,
    # Input serializers
    BookingTransactionInputSerializer,
    RentTransactionInputSerializer,
    IncomingPaymentFilterSerializer,
)
from .services import (
    create_booking_transaction,
    create_rent_transaction,
    mark_paid,
    verify_transaction,
    get_transaction,
    list_tenant_transactions,
    list_owner_transactions,
    PaymentNotFoundError,
    NotPaymentTenantError,
    NotPaymentOwnerError,
    InvalidPaymentError,
)


# Response serializers for API documentation
class MessageResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class TransactionResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    transaction = PaymentTransactionSerializer()
    reused = drf_serializers.BooleanField(required=False)


class PaymentListResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    count = drf_serializers.IntegerField()
    payments = PaymentTransactionSerializer(many=True)


CREATE_RESPONSES = {
    200: TransactionResponseSerializer,
    201: TransactionResponseSerializer,
    400: MessageResponseSerializer,
    403: MessageResponseSerializer,
    404: MessageResponseSerializer,
}


def _created_or_reused(payment, reused):
    """201 for a new transaction, 200 with reused=true for an existing one."""
    data = PaymentTransactionSerializer(
        get_transaction(transaction_id=payment.transaction_id)
    ).data
    if reused:
        return Response({'success': True, 'transaction': data, 'reused': True})
    return Response({'success': True, 'transaction': data}, status=status.HTTP_201_CREATED)


def _transaction_response(payment):
    data = PaymentTransactionSerializer(
        get_transaction(transaction_id=payment.transaction_id)
    ).data
    return Response({'success': True, 'transaction': data})


class PaymentTransactionViewSet(viewsets.GenericViewSet):
    """
    ViewSet for booking and rent payments.

    create: Tenant starts (or resumes) the booking-advance payment
    rent: Tenant starts (or resumes) a month's rent payment
    mark_paid: Tenant reports the payment as made
    verify: Owner confirms the payment was received
    my: Tenant's payments
    incoming: Owner's incoming payments (filterable)
    """

    queryset = PaymentTransaction.objects.select_related('property', 'tenant', 'owner')
    serializer_class = PaymentTransactionSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'transaction_id'
    lookup_value_regex = r'[A-Za-z0-9_-]+'

    def get_permissions(self):
        """Tenant-only mark paid, owner-only verify."""
        if self.action == 'mark_paid':
            return [IsAuthenticated(), IsPaymentTenant()]
        elif self.action == 'verify':
            return [IsAuthenticated(), IsPaymentOwner()]
        return super().get_permissions()

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound('Transaction not found')

    @extend_schema(
        request=BookingTransactionInputSerializer,
        responses=CREATE_RESPONSES,
        description="Create the booking-advance payment of an offer, or reuse the existing one.",
        tags=['payments'],
    )
    def create(self, request):
        """
        POST /api/payments/
        Body: {"offerId": 12}
        """
        input_serializer = BookingTransactionInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            payment, reused = create_booking_transaction(
                offer_id=input_serializer.validated_data['offer_id'],
                user=request.user,
            )
        except PaymentNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotPaymentTenantError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidPaymentError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return _created_or_reused(payment, reused)

    @extend_schema(
        request=RentTransactionInputSerializer,
        responses=CREATE_RESPONSES,
        description="Create the rent payment for one month of an accepted offer, or reuse the existing one.",
        tags=['payments'],
    )
    @action(detail=False, methods=['post'])
    def rent(self, request):
        """
        POST /api/payments/rent/
        Body: {"offerId": 12, "rentMonth": "2025-01"}
        """
        input_serializer = RentTransactionInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            payment, reused = create_rent_transaction(
                offer_id=input_serializer.validated_data['offer_id'],
                user=request.user,
                rent_month=input_serializer.validated_data['rent_month'],
            )
        except PaymentNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotPaymentTenantError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidPaymentError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return _created_or_reused(payment, reused)

    @extend_schema(
        request=None,
        responses={
            200: TransactionResponseSerializer,
            403: MessageResponseSerializer,
            404: MessageResponseSerializer,
        },
        description="Tenant marks the payment as made. Repeating is a no-op.",
        tags=['payments'],
    )
    @action(detail=True, methods=['patch'], url_path='mark-paid', url_name='mark-paid')
    def mark_paid(self, request, transaction_id=None):
        """
        PATCH /api/payments/{transactionId}/mark-paid/
        """
        payment = self.get_object()

        try:
            payment = mark_paid(transaction_id=payment.transaction_id, user=request.user)
        except PaymentNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotPaymentTenantError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return _transaction_response(payment)

    @extend_schema(
        request=None,
        responses={
            200: TransactionResponseSerializer,
            400: MessageResponseSerializer,
            403: MessageResponseSerializer,
            404: MessageResponseSerializer,
        },
        description="Owner verifies a paid transaction; booking payments mark the offer's booking verified.",
        tags=['payments'],
    )
    @action(detail=True, methods=['patch'])
    def verify(self, request, transaction_id=None):
        """
        PATCH /api/payments/{transactionId}/verify/
        """
        payment = self.get_object()

        try:
            payment = verify_transaction(transaction_id=payment.transaction_id, user=request.user)
        except PaymentNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotPaymentOwnerError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidPaymentError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return _transaction_response(payment)

    @extend_schema(
        responses={200: PaymentListResponseSerializer},
        description="Payments made by the current user, newest first.",
        tags=['payments'],
    )
    @action(detail=False, methods=['get'])
    def my(self, request):
        """
        GET /api/payments/my/
        """
        payments = list(list_tenant_transactions(user=request.user))
        return Response({
            'success': True,
            'count': len(payments),
            'payments': PaymentTransactionSerializer(payments, many=True).data,
        })

    @extend_schema(
        parameters=[
            OpenApiParameter('paymentType', OpenApiTypes.STR, enum=['booking', 'rent']),
            OpenApiParameter('ownerVerified', OpenApiTypes.BOOL),
            OpenApiParameter('status', OpenApiTypes.STR, enum=['pending', 'paid']),
        ],
        responses={200: PaymentListResponseSerializer, 400: MessageResponseSerializer},
        description="Payments made to the current user's properties, newest first.",
        tags=['payments'],
    )
    @action(detail=False, methods=['get'])
    def incoming(self, request):
        """
        GET /api/payments/incoming/?paymentType=&ownerVerified=&status=
        """
        filter_serializer = IncomingPaymentFilterSerializer(data=request.query_params.dict())
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        payments = list(list_owner_transactions(
            user=request.user,
            payment_type=params.get('payment_type'),
            owner_verified=params.get('owner_verified'),
            status=params.get('status'),
        ))
        return Response({
            'success': True,
            'count': len(payments),
            'payments': PaymentTransactionSerializer(payments, many=True).data,
        })
