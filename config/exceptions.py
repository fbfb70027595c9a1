"""
Project-wide DRF exception handler.

Every error leaves the API as ``{"message": "..."}``. Validation errors are
reduced to their first message; anything DRF does not recognise is logged
with its traceback and answered with a generic 500.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler


logger = logging.getLogger(__name__)


def first_error_message(detail):
    """Walk nested serializer errors and return the first message found."""
    if isinstance(detail, dict):
        for value in detail.values():
            message = first_error_message(value)
            if message:
                return message
        return ''
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = first_error_message(value)
            if message:
                return message
        return ''
    return str(detail) if detail is not None else ''


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            "Unhandled error in %s",
            view.__class__.__name__ if view is not None else 'unknown view',
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return Response(
            {'message': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    response.data = {'message': first_error_message(response.data) or 'Request failed'}
    return response
