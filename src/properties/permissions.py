from rest_framework import permissions


class IsStaffOrReadOnly(permissions.BasePermission):
    """Read for everyone; listing management only for staff (site admins)."""
    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)


class IsStaffOrListingCreator(permissions.BasePermission):
    """Per-listing analytics: staff or whoever created the listing."""
    def has_object_permission(self, request, view, obj):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and (user.is_staff or obj.created_by_id == user.id)
        )
