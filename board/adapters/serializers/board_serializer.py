from django.db import transaction
from rest_framework import serializers
from django.contrib.auth.models import User

from board.models import DEFAULT_COLUMNS, Board, Column
from task.choices import Status
from task.adapters.serializers.task_serializer import BoardTaskSerializer, TaskStatusSerializer
from user.adapters.serializers.user_serializers import UserSerializer


class ColumnSerializer(serializers.ModelSerializer):
    class Meta:
        model = Column
        fields = ('id', 'name', 'order')


class BoardSerializer(serializers.ModelSerializer):
    """Board as listed on the dashboard: tasks carry only id and status."""
    owner = UserSerializer(read_only=True)
    members = UserSerializer(many=True, read_only=True)
    columns = ColumnSerializer(many=True, read_only=True)
    tasks = serializers.SerializerMethodField()
    progress = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Board
        fields = (
            'id',
            'name',
            'description',
            'owner',
            'members',
            'columns',
            'tasks',
            'progress',
            'createdAt',
            'updatedAt',
        )

    def _top_level_tasks(self, obj):
        return [task for task in obj.tasks.all() if task.parent_id is None]

    def get_tasks(self, obj):
        return TaskStatusSerializer(self._top_level_tasks(obj), many=True).data

    def get_progress(self, obj):
        tasks = self._top_level_tasks(obj)
        if not tasks:
            return 0
        done = sum(1 for task in tasks if task.status == Status.DONE)
        return int(done * 100 / len(tasks) + 0.5)


class BoardDetailSerializer(BoardSerializer):
    """Board page payload: full tasks with owner, assignees, subtasks and attachments."""

    def get_tasks(self, obj):
        return BoardTaskSerializer(self._top_level_tasks(obj), many=True, context=self.context).data


class BoardWriteSerializer(serializers.ModelSerializer):
    memberIds = serializers.PrimaryKeyRelatedField(
        source='members',
        queryset=User.objects.all(),
        many=True,
        required=False,
    )

    class Meta:
        model = Board
        fields = ('name', 'description', 'memberIds')

    def create(self, validated_data):
        members = validated_data.pop('members', [])
        owner = self.context['request'].user

        with transaction.atomic():
            board = Board.objects.create(owner=owner, **validated_data)
            board.members.set([owner, *members])
            Column.objects.bulk_create([
                Column(board=board, **column) for column in DEFAULT_COLUMNS
            ])

        return board
