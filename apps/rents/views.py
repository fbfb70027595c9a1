from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import RentMonthRecordSerializer, RentFilterSerializer
from .services import list_owner_rent_records, list_tenant_rent_records


# Response serializers for API documentation
class RentListResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    count = drf_serializers.IntegerField()
    rents = RentMonthRecordSerializer(many=True)


RENT_FILTER_PARAMETERS = [
    OpenApiParameter('status', OpenApiTypes.STR, enum=['pending', 'paid']),
    OpenApiParameter('rentMonth', OpenApiTypes.STR, description='YYYY-MM'),
]


def _rent_list_response(records):
    records = list(records)
    return Response({
        'success': True,
        'count': len(records),
        'rents': RentMonthRecordSerializer(records, many=True).data,
    })


@extend_schema(
    parameters=RENT_FILTER_PARAMETERS,
    responses={200: RentListResponseSerializer},
    description="Rent owed to the current user as owner, latest due date first.",
    tags=['rents'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def incoming_rents(request):
    """GET /api/rents/incoming/?status=&rentMonth="""
    filter_serializer = RentFilterSerializer(data=request.query_params.dict())
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    return _rent_list_response(list_owner_rent_records(
        user=request.user,
        status=params.get('status'),
        rent_month=params.get('rent_month'),
    ))


@extend_schema(
    parameters=RENT_FILTER_PARAMETERS,
    responses={200: RentListResponseSerializer},
    description="Rent the current user owes as tenant, latest due date first.",
    tags=['rents'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_rents(request):
    """GET /api/rents/my/?status=&rentMonth="""
    filter_serializer = RentFilterSerializer(data=request.query_params.dict())
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    return _rent_list_response(list_tenant_rent_records(
        user=request.user,
        status=params.get('status'),
        rent_month=params.get('rent_month'),
    ))
