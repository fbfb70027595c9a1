import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


logger = logging.getLogger(__name__)


@extend_schema(
    responses={
        200: inline_serializer('HealthResponse', {
            'status': serializers.CharField(),
            'database': serializers.CharField(),
        }),
    },
    description="Liveness and database connectivity check. No authentication.",
    tags=['health'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """GET /api/health/"""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        return Response({'status': 'error', 'database': 'unavailable'}, status=503)

    return Response({'status': 'ok', 'database': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({'message': 'Not found'}, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({'message': 'Internal server error'}, status=500)
