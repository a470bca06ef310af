import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from taskboard.jwt_auth import CookieJWTAuthentication
from utils.request_data import body_dict
from ...models import Board
from ...permission import BoardAccessPermission
from ..serializers.board_serializer import BoardSerializer, BoardDetailSerializer, BoardWriteSerializer

logger = logging.getLogger(__name__)


class BoardViewSet(viewsets.ModelViewSet):
    """
    Boards API with:
    - cookie JWT auth
    - listing scoped to boards the user owns or is a member of
    - object-level permissions via BoardAccessPermission (401 on mismatch)
    - read/write serializer switching
    """
    serializer_class = BoardSerializer
    pagination_class = None
    permission_classes = [IsAuthenticated, BoardAccessPermission]
    authentication_classes = [CookieJWTAuthentication]
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        user = self.request.user

        qs = Board.objects.filter(Q(owner=user) | Q(members=user))

        qs = qs.select_related("owner", "owner__profile").prefetch_related(
            "members__profile",
            "columns",
            "tasks",
        )

        return qs.distinct()

    def get_object(self):
        try:
            board = (
                Board.objects.filter(pk=self.kwargs[self.lookup_field])
                .select_related("owner", "owner__profile")
                .prefetch_related(
                    "members__profile",
                    "columns",
                    "tasks__owner__profile",
                    "tasks__assignees__profile",
                    "tasks__subtasks",
                    "tasks__attachments",
                )
                .first()
            )
        except DjangoValidationError:
            board = None

        if board is None:
            raise NotFound('Board not found')

        self.check_object_permissions(self.request, board)
        return board

    def get_serializer_class(self):
        if self.action in ("create", "update", "partial_update"):
            return BoardWriteSerializer
        if self.action == "retrieve":
            return BoardDetailSerializer
        return BoardSerializer

    @extend_schema(
        request=BoardWriteSerializer,
        responses={201: BoardSerializer}
    )
    def create(self, request, *args, **kwargs):
        data = body_dict(request)
        name = data.get("name")
        if not name or not str(name).strip():
            return Response(
                {"error": "Name is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        # Use write serializer for validation and saving
        write_serializer = self.get_serializer(data=data)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()
        logger.info(f"Board {instance.id} created by user {request.user.id}")

        # Use read serializer for response to include columns and members
        read_serializer = BoardSerializer(instance, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @extend_schema(
        request=BoardWriteSerializer,
        responses={200: BoardSerializer}
    )
    def update(self, request, *args, **kwargs):
        kwargs.pop('partial', None)
        instance = self.get_object()

        write_serializer = self.get_serializer(instance, data=request.data, partial=True)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()

        # Drop prefetched relations so the response reflects the new member set
        instance._prefetched_objects_cache = {}
        read_serializer = BoardSerializer(instance, context=self.get_serializer_context())
        return Response(read_serializer.data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.delete()
        logger.info(f"Board {kwargs.get(self.lookup_field)} deleted by user {request.user.id}")
        return Response({"message": "Board deleted successfully"}, status=status.HTTP_200_OK)
