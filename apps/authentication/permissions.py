from rest_framework.permissions import BasePermission


class IsOwner(BasePermission):
    """Object level check: only the user who created an object may touch it."""

    def has_object_permission(self, request, view, obj):
        return (
            request.user.is_authenticated and
            getattr(obj, 'user_id', None) == request.user.id
        )
