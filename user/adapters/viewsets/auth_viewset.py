import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import User
from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from taskboard.jwt_auth import set_auth_cookies, clear_auth_cookies
from utils.request_data import body_dict
from ..serializers.user_serializers import LoginSerializer, RegisterSerializer, UserSerializer, email_in_use
from ...models import UserProfile

logger = logging.getLogger(__name__)


class AuthViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]  # applies to all actions in this viewset
    authentication_classes = []
    serializer_class = LoginSerializer

    @extend_schema(request=RegisterSerializer, responses={201: UserSerializer})
    @action(detail=False, methods=["post"])
    def register(self, request):
        data = body_dict(request)
        name = (data.get("name") or "").strip()
        email = (data.get("email") or "").strip()
        password = data.get("password")

        if not name or not email or not password:
            return Response(
                {"error": "Name, email and password are required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = RegisterSerializer(data={"name": name, "email": email, "password": password})
        serializer.is_valid(raise_exception=True)

        if email_in_use(email):
            return Response(
                {"error": "Email is already taken"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        with transaction.atomic():
            user = User.objects.create_user(username=email, email=email, password=password)
            UserProfile.objects.create(user=user, name=name)

        logger.info(f"Registered user {user.id}")
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer})
    @action(detail=False, methods=["post"])
    def login(self, request):
        data = body_dict(request)
        email = data.get("email")
        password = data.get("password")

        if not email or not password:
            return Response(
                {"error": "Email and password are required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        # Find user by email
        find_user = User.objects.filter(email__iexact=email).first()
        if not find_user:
            return Response(
                {"error": "Invalid email or password"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        user = authenticate(request, username=find_user.username, password=password)
        if not user:
            logger.info(f"Failed login for user {find_user.id}")
            return Response(
                {"error": "Invalid email or password"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        refresh = RefreshToken.for_user(user)

        # Tokens travel only as HttpOnly cookies, never in the body
        response = Response({"user": UserSerializer(user).data}, status=status.HTTP_200_OK)
        set_auth_cookies(response, str(refresh.access_token), str(refresh))
        return response

    @action(detail=False, methods=["post"])
    def logout(self, request):
        response = Response(
            {"message": "Successfully logged out"},
            status=status.HTTP_200_OK
        )
        clear_auth_cookies(response)
        return response
