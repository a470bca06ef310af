from rest_framework.permissions import BasePermission
from utils.exceptions import OwnershipDenied


class TaskOwnerPermission(BasePermission):
    """
    Tasks are private to their owner for every method. A task owned by
    someone else is reported as 401, not 403.
    """

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if obj.owner_id != request.user.id:
            raise OwnershipDenied()
        return True
