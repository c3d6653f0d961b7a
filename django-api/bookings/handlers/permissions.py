"""Role permissions resolved from the directory at request time."""

from rest_framework.permissions import BasePermission

from bookings.container import get_container
from bookings.domain import Role
from bookings.domain.errors import AuthorizationError


class HasRole(BasePermission):
    """Allows callers whose directory role is exactly ``required_role``."""

    required_role: Role

    def has_permission(self, request, view) -> bool:
        identity = request.user
        if identity is None or not identity.is_authenticated:
            return False
        try:
            get_container().authorization.require_role(identity.email, self.required_role)
        except AuthorizationError as exc:
            self.message = exc.message
            return False
        return True


class IsAdmin(HasRole):
    required_role = Role.ADMIN
    message = "Admin access required"


class IsMember(HasRole):
    required_role = Role.MEMBER
    message = "Member access required"
