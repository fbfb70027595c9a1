from django.http import Http404
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Offer
from .permissions import IsOfferOwner
from .serializers import (
    OfferSerializer,
    ReceivedOfferSerializer,
    SentOfferSerializer,
    OfferHistorySerializer,
    # Input serializers
    OfferCreateInputSerializer,
    RequestAdvanceInputSerializer,
    OfferStatusInputSerializer,
    ConfirmMoveInInputSerializer,
    OfferHistoryParamsSerializer,
)
from .services import (
    create_offer,
    list_received_offers,
    list_sent_offers,
    get_offer_history,
    request_advance,
    set_status,
    confirm_move_in,
    OfferNotFoundError,
    NotOfferOwnerError,
    InvalidOfferError,
    StaleOfferError,
)


# Response serializers for API documentation
class MessageResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


class OfferResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    offer = OfferSerializer()


class ReceivedOffersResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    count = drf_serializers.IntegerField()
    offers = ReceivedOfferSerializer(many=True)


class SentOffersResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    count = drf_serializers.IntegerField()
    offers = SentOfferSerializer(many=True)


class OfferHistoryResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    offers = OfferHistorySerializer(many=True)


MUTATION_RESPONSES = {
    200: OfferResponseSerializer,
    400: MessageResponseSerializer,
    403: MessageResponseSerializer,
    404: MessageResponseSerializer,
    409: MessageResponseSerializer,
}


def _offer_response(offer):
    return Response({'success': True, 'offer': OfferSerializer(offer).data})


class OfferViewSet(viewsets.GenericViewSet):
    """
    ViewSet for the offer negotiation workflow.

    create: Tenant submits an offer on a property
    received: Offers made to the current owner
    sent: Offers submitted by the current tenant
    history: Owner's negotiation history with one tenant on one property
    request_advance: Owner asks for a booking advance
    set_status: Owner accepts, rejects, holds or reopens an offer
    confirm_move_in: Owner confirms the tenant moved in
    """

    queryset = Offer.objects.all()
    serializer_class = OfferSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        """Owner-only permission for state changes."""
        if self.action in ['request_advance', 'set_status', 'confirm_move_in']:
            return [IsAuthenticated(), IsOfferOwner()]
        return super().get_permissions()

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound('Offer not found')

    @extend_schema(
        request=OfferCreateInputSerializer,
        responses={
            201: OfferResponseSerializer,
            400: MessageResponseSerializer,
            404: MessageResponseSerializer,
        },
        description="Submit an offer on a property. The owner is taken from the property.",
        tags=['offers'],
    )
    def create(self, request):
        """
        Create a pending offer.

        POST /api/offers/
        Body: {"propertyId": "<uuid>", "offer": {"offerRent": 15000, "joiningDateEstimate": "..."}}
        """
        input_serializer = OfferCreateInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            offer = create_offer(
                tenant=request.user,
                property_id=data['property_id'],
                **data['offer'],
            )
        except OfferNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {'success': True, 'offer': OfferSerializer(offer).data},
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        responses={200: ReceivedOffersResponseSerializer},
        description="Offers made to the current user's properties, newest first.",
        tags=['offers'],
    )
    @action(detail=False, methods=['get'])
    def received(self, request):
        """
        GET /api/offers/received/
        """
        offers = list(list_received_offers(owner=request.user))
        return Response({
            'success': True,
            'count': len(offers),
            'offers': ReceivedOfferSerializer(offers, many=True).data,
        })

    @extend_schema(
        responses={200: SentOffersResponseSerializer},
        description="Offers submitted by the current user, newest first.",
        tags=['offers'],
    )
    @action(detail=False, methods=['get'])
    def sent(self, request):
        """
        GET /api/offers/sent/
        """
        offers = list(list_sent_offers(tenant=request.user))
        return Response({
            'success': True,
            'count': len(offers),
            'offers': SentOfferSerializer(offers, many=True).data,
        })

    @extend_schema(
        parameters=[
            OpenApiParameter('property_id', OpenApiTypes.UUID, OpenApiParameter.PATH),
            OpenApiParameter('tenant_id', OpenApiTypes.UUID, OpenApiParameter.PATH),
        ],
        responses={200: OfferHistoryResponseSerializer, 400: MessageResponseSerializer},
        description="Negotiation history between the current owner and one tenant on one property.",
        tags=['offers'],
    )
    @action(
        detail=False,
        methods=['get'],
        url_path=r'history/(?P<property_id>[^/.]+)/(?P<tenant_id>[^/.]+)',
        url_name='history',
    )
    def history(self, request, property_id=None, tenant_id=None):
        """
        GET /api/offers/history/{propertyId}/{tenantId}/
        """
        params = OfferHistoryParamsSerializer(data={
            'propertyId': property_id,
            'tenantId': tenant_id,
        })
        params.is_valid(raise_exception=True)

        offers = get_offer_history(
            owner=request.user,
            property_id=params.validated_data['property_id'],
            tenant_id=params.validated_data['tenant_id'],
        )
        return Response({
            'success': True,
            'offers': OfferHistorySerializer(offers, many=True).data,
        })

    @extend_schema(
        request=RequestAdvanceInputSerializer,
        responses=MUTATION_RESPONSES,
        description="Ask the tenant for a booking advance. The offer status is not changed.",
        tags=['offers'],
    )
    @action(detail=True, methods=['patch'], url_path='request-advance', url_name='request-advance')
    def request_advance(self, request, pk=None):
        """
        PATCH /api/offers/{id}/request-advance/
        Body: {"requestedAdvanceAmount": 5000, "requestedAdvanceValidityDays": 3, ...}
        """
        offer = self.get_object()

        input_serializer = RequestAdvanceInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            offer = request_advance(
                offer_id=offer.id,
                user=request.user,
                **input_serializer.validated_data,
            )
        except OfferNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotOfferOwnerError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except StaleOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return _offer_response(offer)

    @extend_schema(
        request=OfferStatusInputSerializer,
        responses=MUTATION_RESPONSES,
        description="Change the offer status (pending, accepted, rejected, on_hold).",
        tags=['offers'],
    )
    @action(detail=True, methods=['patch'], url_path='status', url_name='status')
    def set_status(self, request, pk=None):
        """
        PATCH /api/offers/{id}/status/
        Body: {"status": "accepted"}
        """
        offer = self.get_object()

        input_serializer = OfferStatusInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            offer = set_status(
                offer_id=offer.id,
                user=request.user,
                **input_serializer.validated_data,
            )
        except OfferNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotOfferOwnerError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except StaleOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return _offer_response(offer)

    @extend_schema(
        request=ConfirmMoveInInputSerializer,
        responses=MUTATION_RESPONSES,
        description="Confirm the tenant moved in. Requires an accepted offer with a verified booking.",
        tags=['offers'],
    )
    @action(detail=True, methods=['patch'], url_path='confirm-move-in', url_name='confirm-move-in')
    def confirm_move_in(self, request, pk=None):
        """
        PATCH /api/offers/{id}/confirm-move-in/
        """
        offer = self.get_object()

        input_serializer = ConfirmMoveInInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            offer = confirm_move_in(
                offer_id=offer.id,
                user=request.user,
                **input_serializer.validated_data,
            )
        except OfferNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotOfferOwnerError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except StaleOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidOfferError as e:
            return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return _offer_response(offer)
