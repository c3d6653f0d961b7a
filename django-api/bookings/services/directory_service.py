"""Directory service - users and members outside the lifecycle transitions."""

import logging

from bookings.domain import Member, Role, UpdateResult, User, UserId
from bookings.domain.errors import MemberNotFoundError, MissingFieldError, UserNotFoundError
from bookings.services.identifiers import parse_id
from bookings.stores.interfaces import DirectoryStore

logger = logging.getLogger(__name__)


class DirectoryService:
    """Service for user and member lookups and direct role administration."""

    def __init__(self, store: DirectoryStore) -> None:
        self._store = store

    def upsert_user(
        self,
        email: str,
        name: str = "",
        role: Role | None = None,
        photo: str | None = None,
    ) -> UpdateResult:
        """Create or refresh a user record keyed by email.

        Raises:
            MissingFieldError: If email is blank.
        """
        if not email or not email.strip():
            raise MissingFieldError("email", "Email is required")
        return self._store.upsert_user(
            email=email, name=name or "", role=role or Role.USER, photo=photo
        )

    def list_users(self, email_contains: str | None = None) -> list[User]:
        return self._store.list_users(email_contains)

    def search_users(self, email: str) -> list[User]:
        """Raises MissingFieldError on a blank query, UserNotFoundError on no match."""
        if not email:
            raise MissingFieldError("email", "Email required")
        users = self._store.list_users(email)
        if not users:
            raise UserNotFoundError(email)
        return users

    def get_user(self, email: str) -> User:
        user = self._store.get_user(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def get_role(self, email: str) -> Role:
        """Role of the user with this email, ``user`` when unknown."""
        user = self._store.get_user(email)
        return user.role if user else Role.USER

    def set_role(self, user_id: str, role: Role) -> UpdateResult:
        """Set a role directly, bypassing the approval workflow.

        Raises:
            InvalidIdError: If the user_id is not a valid UUID.
        """
        result = self._store.set_user_role_by_id(parse_id(UserId, user_id, "user"), role)
        logger.info("Role of user %s set to %s (modified=%d)", user_id, role.value, result.modified)
        return result

    def count_users(self) -> int:
        return self._store.count_users()

    def list_members(self) -> list[Member]:
        return self._store.list_members()

    def find_member(self, email: str) -> Member:
        member = self._store.find_member_by_email(email)
        if member is None:
            raise MemberNotFoundError(email)
        return member

    def count_members(self) -> int:
        return self._store.count_members()
