from rest_framework import permissions

from .auth import authorize
from .models import User


class HasRole(permissions.BasePermission):
    required_roles = ()
    message = "Access denied. Insufficient permissions."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return authorize(user.role, self.required_roles)


class IsAdminRole(HasRole):
    required_roles = (User.Role.ADMIN,)
