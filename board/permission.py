from rest_framework.permissions import BasePermission, SAFE_METHODS
from utils.exceptions import OwnershipDenied


class BoardAccessPermission(BasePermission):
    """
    Object permission for boards.

    - owner: full access
    - member: read-only
    - anyone else: denied with 401, matching an absent session
    """

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        user = request.user

        if obj.owner_id == user.id:
            return True

        if request.method in SAFE_METHODS and obj.members.filter(id=user.id).exists():
            return True

        raise OwnershipDenied()
