from django.db import transaction
from rest_framework import serializers

from board.models import Board
from user.adapters.serializers.user_serializers import UserSerializer
from ...choices import Status
from ...models import Attachment, Task


class AttachmentSerializer(serializers.ModelSerializer):
    taskId = serializers.UUIDField(source='task_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Attachment
        fields = ('id', 'name', 'url', 'type', 'taskId', 'createdAt')


class SubtaskSerializer(serializers.ModelSerializer):
    dueDate = serializers.DateTimeField(source='due_date', read_only=True)
    parentId = serializers.UUIDField(source='parent_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Task
        fields = (
            'id',
            'title',
            'description',
            'priority',
            'status',
            'dueDate',
            'recurring',
            'progress',
            'parentId',
            'createdAt',
            'updatedAt',
        )


class TaskSerializer(SubtaskSerializer):
    boardId = serializers.UUIDField(source='board_id', read_only=True)
    ownerId = serializers.IntegerField(source='owner_id', read_only=True)
    subtasks = serializers.SerializerMethodField()
    attachments = AttachmentSerializer(many=True, read_only=True)

    class Meta(SubtaskSerializer.Meta):
        fields = SubtaskSerializer.Meta.fields + ('boardId', 'ownerId', 'subtasks', 'attachments')

    def get_subtasks(self, obj):
        # Creation order; works on both prefetched and fresh instances.
        subtasks = sorted(obj.subtasks.all(), key=lambda subtask: subtask.created_at)
        return SubtaskSerializer(subtasks, many=True, context=self.context).data


class BoardTaskSerializer(TaskSerializer):
    """Task as embedded in a board: adds owner and assignees."""
    owner = UserSerializer(read_only=True)
    assignees = UserSerializer(many=True, read_only=True)

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ('owner', 'assignees')


class TaskStatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = ('id', 'status')


class SubtaskDraftSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    completed = serializers.BooleanField(default=False)


class TaskWriteSerializer(serializers.ModelSerializer):
    dueDate = serializers.DateTimeField(source='due_date', required=False, allow_null=True)
    boardId = serializers.PrimaryKeyRelatedField(
        source='board',
        queryset=Board.objects.all(),
        required=False,
    )
    subtasks = SubtaskDraftSerializer(many=True, required=False)

    class Meta:
        model = Task
        fields = (
            'title',
            'description',
            'priority',
            'dueDate',
            'recurring',
            'status',
            'progress',
            'subtasks',
            'boardId',
        )

    def create(self, validated_data):
        subtasks_data = validated_data.pop('subtasks', [])
        owner = self.context['request'].user

        with transaction.atomic():
            task = Task.objects.create(owner=owner, **validated_data)
            self._create_subtasks(task, subtasks_data)

        return task

    def update(self, instance, validated_data):
        subtasks_data = validated_data.pop('subtasks', None)
        # A task stays on the board it was created on.
        validated_data.pop('board', None)

        with transaction.atomic():
            instance = super().update(instance, validated_data)

            if subtasks_data is not None:
                # Full replace: drop every existing subtask, then recreate.
                instance.subtasks.all().delete()
                self._create_subtasks(instance, subtasks_data)

        return instance

    def _create_subtasks(self, task, subtasks_data):
        Task.objects.bulk_create([
            Task(
                title=subtask['title'],
                description='',
                priority=task.priority,
                status=Status.TODO,
                progress=100 if subtask.get('completed') else 0,
                owner=task.owner,
                parent=task,
            )
            for subtask in subtasks_data
        ])
