"""
Cookie-based JWT authentication and the helpers that issue and clear the
session cookies.

The browser client never sees the tokens: login sets them as HttpOnly
cookies and every API request carries them back automatically.
"""

from django.conf import settings
from django.http import HttpRequest
from rest_framework_simplejwt.authentication import JWTAuthentication
from typing import Tuple, Optional


class CookieJWTAuthentication(JWTAuthentication):
    """
    Reads the access token from the ``access_token`` HttpOnly cookie.
    Falls back to the Authorization header so scripts and tests can pass a
    Bearer token directly.
    """

    def authenticate(self, request: HttpRequest) -> Optional[Tuple]:
        access_token = request.COOKIES.get(settings.AUTH_COOKIE_ACCESS)

        if not access_token:
            return super().authenticate(request)

        # Raises AuthenticationFailed (401) for an expired or forged token
        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token

    def authenticate_header(self, request: HttpRequest) -> str:
        """
        Value of the `WWW-Authenticate` header; its presence is what makes DRF
        answer 401 instead of 403 for unauthenticated requests.
        """
        return 'Bearer'


def _cookie_kwargs():
    return {
        'secure': settings.AUTH_COOKIE_SECURE,
        'httponly': True,
        'samesite': settings.AUTH_COOKIE_SAMESITE,
        'path': '/',
        'domain': settings.AUTH_COOKIE_DOMAIN,
    }


def set_access_cookie(response, access_token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_ACCESS,
        value=access_token,
        max_age=int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds()),
        **_cookie_kwargs(),
    )


def set_auth_cookies(response, access_token: str, refresh_token: str) -> None:
    set_access_cookie(response, access_token)
    response.set_cookie(
        key=settings.AUTH_COOKIE_REFRESH,
        value=refresh_token,
        max_age=int(settings.SIMPLE_JWT['REFRESH_TOKEN_LIFETIME'].total_seconds()),
        **_cookie_kwargs(),
    )


def clear_auth_cookies(response) -> None:
    for key in (settings.AUTH_COOKIE_ACCESS, settings.AUTH_COOKIE_REFRESH):
        response.delete_cookie(
            key,
            path='/',
            domain=settings.AUTH_COOKIE_DOMAIN,
            samesite=settings.AUTH_COOKIE_SAMESITE,
        )
