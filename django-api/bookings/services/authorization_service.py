"""Role-based authorization against the directory."""

from bookings.domain import Role
from bookings.domain.errors import NotBookingOwnerError, RoleRequiredError
from bookings.stores.interfaces import DirectoryStore


class AuthorizationService:
    """Resolves caller roles from the directory and enforces them."""

    def __init__(self, store: DirectoryStore) -> None:
        self._store = store

    def role_of(self, email: str | None) -> Role | None:
        if not email:
            return None
        user = self._store.get_user(email)
        return user.role if user else None

    def require_role(self, email: str | None, role: Role) -> None:
        """Raises RoleRequiredError unless the caller holds exactly ``role``."""
        if self.role_of(email) is not role:
            raise RoleRequiredError(role.value)

    def require_owner_or_role(
        self, email: str | None, owner_email: str, role: Role = Role.ADMIN
    ) -> None:
        if email and email.lower() == (owner_email or "").lower():
            return
        if self.role_of(email) is role:
            return
        raise NotBookingOwnerError()
