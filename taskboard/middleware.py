"""
Request logging for the JSON API.
"""
import logging

from django.conf import settings

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Logs each /api/ request with its outcome. Only cookie presence is
    recorded, never the token values.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if request.path.startswith('/api/'):
            logger.info(
                f"{request.method} {request.path} -> {response.status_code} "
                f"has_access_token={settings.AUTH_COOKIE_ACCESS in request.COOKIES}, "
                f"has_refresh_token={settings.AUTH_COOKIE_REFRESH in request.COOKIES}"
            )

        return response
