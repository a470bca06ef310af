import logging

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from taskboard.jwt_auth import CookieJWTAuthentication
from utils.request_data import body_dict
from ..serializers.user_serializers import ProfileSerializer, UserSerializer, email_in_use
from ...models import UserProfile

logger = logging.getLogger(__name__)


class ProfileView(APIView):
    """The signed-in user's own name and email."""
    permission_classes = [IsAuthenticated]
    authentication_classes = [CookieJWTAuthentication]

    @extend_schema(responses={200: ProfileSerializer})
    def get(self, request):
        return Response(ProfileSerializer(request.user).data)

    @extend_schema(request=UserSerializer, responses={200: UserSerializer})
    def put(self, request):
        user = request.user
        data = body_dict(request)
        name = (data.get("name") or "").strip()
        email = (data.get("email") or "").strip()

        if not name:
            return Response({"error": "Name is required"}, status=status.HTTP_400_BAD_REQUEST)

        if not email:
            return Response({"error": "Email is required"}, status=status.HTTP_400_BAD_REQUEST)

        if email_in_use(email, exclude=user):
            return Response({"error": "Email is already taken"}, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            # The login username mirrors the email
            user.email = email
            user.username = email
            user.save(update_fields=["email", "username"])
            UserProfile.objects.update_or_create(user=user, defaults={"name": name})

        user.refresh_from_db()
        logger.info(f"Profile updated for user {user.id}")

        return Response({
            "user": UserSerializer(user).data,
            "message": "Profile updated successfully",
        })
