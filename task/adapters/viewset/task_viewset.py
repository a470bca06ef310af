import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, filters, status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from board.models import Board
from taskboard.jwt_auth import CookieJWTAuthentication
from utils.exceptions import OwnershipDenied
from utils.request_data import body_dict
from ...filters import TaskFilter
from ...models import Task
from ...permission import TaskOwnerPermission
from ..serializers.task_serializer import TaskSerializer, TaskWriteSerializer

logger = logging.getLogger(__name__)


class TaskViewset(viewsets.ModelViewSet):
    """Tasks API, scoped to the requesting owner.

    Lists only top-level tasks; subtasks are nested inside their parent.
    Updates are always sparse: fields missing from the body are left alone.
    """
    # Keep a class-level queryset so DRF's router can infer a basename when registering
    queryset = Task.objects.all()
    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated, TaskOwnerPermission]
    authentication_classes = [CookieJWTAuthentication]
    pagination_class = None
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = TaskFilter
    search_fields = ['title', 'description']
    ordering_fields = ['due_date', 'created_at', 'priority', 'title']
    ordering = ['-created_at']

    def get_queryset(self):
        return (
            Task.objects.filter(owner=self.request.user, parent__isnull=True)
            .prefetch_related('subtasks', 'attachments')
        )

    def get_object(self):
        try:
            task = Task.objects.filter(pk=self.kwargs[self.lookup_field]).first()
        except DjangoValidationError:
            task = None
        if task is None:
            raise NotFound('Task not found')

        self.check_object_permissions(self.request, task)
        return task

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return TaskWriteSerializer
        return TaskSerializer

    @extend_schema(
        request=TaskWriteSerializer,
        responses={201: TaskSerializer}
    )
    def create(self, request, *args, **kwargs):
        data = body_dict(request)
        if not data.get('title') or not data.get('boardId'):
            return Response(
                {"error": "Title and board ID are required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            board = Board.objects.filter(pk=data['boardId']).first()
        except DjangoValidationError:
            board = None
        if board is None:
            raise NotFound('Board not found')
        if not board.has_access(request.user):
            raise OwnershipDenied()

        # Use write serializer for validation and saving
        write_serializer = self.get_serializer(data=data)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()
        logger.info(f"Task {instance.id} created on board {board.id} by user {request.user.id}")

        # Use read serializer for response to include subtasks and all fields
        read_serializer = TaskSerializer(instance, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response({"data": read_serializer.data}, status=status.HTTP_201_CREATED, headers=headers)

    @extend_schema(
        request=TaskWriteSerializer,
        responses={200: TaskSerializer}
    )
    def update(self, request, *args, **kwargs):
        kwargs.pop('partial', None)
        instance = self.get_object()

        # PUT and PATCH both merge: absent fields keep their stored value
        write_serializer = self.get_serializer(instance, data=request.data, partial=True)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()

        read_serializer = TaskSerializer(instance, context=self.get_serializer_context())
        return Response(read_serializer.data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.delete()
        logger.info(f"Task {kwargs.get(self.lookup_field)} deleted by user {request.user.id}")
        return Response({"message": "Task deleted successfully"}, status=status.HTTP_200_OK)
