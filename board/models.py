import uuid

from django.db import models
from django.contrib.auth.models import User

from task.choices import Status

# Columns created with every new board, one per task status.
DEFAULT_COLUMNS = [
    {'name': status.label, 'order': order}
    for order, status in enumerate(Status)
]


class Board(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='owned_boards')
    members = models.ManyToManyField(User, related_name='boards', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def has_access(self, user):
        return self.owner_id == user.id or self.members.filter(id=user.id).exists()

    class Meta:
        ordering = ['-created_at']


class Column(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='columns')
    name = models.CharField(max_length=100)
    order = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.name} - {self.board.name}"

    class Meta:
        ordering = ['order']
