import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    """
    Render every API error as ``{"error": "..."}``.

    Field-level validation errors keep DRF's ``{field: [messages]}`` shape so
    forms can show them inline. Anything DRF does not recognise is logged and
    answered with a 500 instead of escaping to Django's error page.
    """
    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: "
            f"{type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return Response(
            {"error": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = response.data.get('detail') if isinstance(response.data, dict) else None
    if detail is not None and len(response.data) == 1:
        response.data = {"error": str(detail)}

    return response
