"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Each method is a single
atomic store operation; nothing here spans more than one document.
Implementations raise StoreUnavailableError when the backing store fails.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from bookings.domain import (
    Booking,
    BookingFilter,
    BookingId,
    BookingStatus,
    Court,
    CourtId,
    Member,
    MemberId,
    Money,
    Payment,
    PaymentId,
    Role,
    UpdateResult,
    User,
    UserId,
)


class DirectoryStore(ABC):
    """Interface for user and member persistence."""

    @abstractmethod
    def get_user(self, email: str) -> User | None:
        """Return the user with this email, ignoring case, or None."""
        ...

    @abstractmethod
    def list_users(self, email_contains: str | None = None) -> list[User]:
        """Return users whose email contains the fragment, case-insensitively."""
        ...

    @abstractmethod
    def upsert_user(
        self, email: str, name: str, role: Role, photo: str | None
    ) -> UpdateResult:
        """Insert or update a user by email. created_at is only set on insert."""
        ...

    @abstractmethod
    def set_user_role(self, email: str, role: Role) -> UpdateResult:
        """Set the role of the user with this email, ignoring case."""
        ...

    @abstractmethod
    def set_user_role_by_id(self, user_id: UserId, role: Role) -> UpdateResult:
        """Set the role of the user with this id."""
        ...

    @abstractmethod
    def count_users(self) -> int:
        ...

    @abstractmethod
    def ensure_member(
        self, email: str, name: str, joined_at: datetime
    ) -> tuple[Member, bool]:
        """Insert a member, or return the live member with the same email.

        Returns the member and whether it was created.
        """
        ...

    @abstractmethod
    def get_member(self, member_id: MemberId) -> Member | None:
        ...

    @abstractmethod
    def find_member_by_email(self, email: str) -> Member | None:
        """Return the member whose email matches case-insensitively."""
        ...

    @abstractmethod
    def list_members(self) -> list[Member]:
        ...

    @abstractmethod
    def delete_member(self, member_id: MemberId) -> int:
        """Delete a member by id. Returns the deleted count."""
        ...

    @abstractmethod
    def count_members(self) -> int:
        ...


class LedgerStore(ABC):
    """Interface for booking and payment persistence."""

    @abstractmethod
    def insert_booking(
        self,
        court_id: str,
        user_email: str,
        title: str,
        status: BookingStatus,
        price: Money | None,
    ) -> BookingId:
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        ...

    @abstractmethod
    def list_bookings(self, booking_filter: BookingFilter) -> list[Booking]:
        """Return bookings matching every given predicate, in store order."""
        ...

    @abstractmethod
    def update_booking(
        self,
        booking_id: BookingId,
        *,
        status: BookingStatus | None = None,
        is_paid: bool | None = None,
        from_statuses: tuple[BookingStatus, ...] | None = None,
    ) -> UpdateResult:
        """Apply a partial update to one booking.

        When from_statuses is given the update only matches a booking
        currently in one of them. ``modified`` is 0 when nothing changed.
        """
        ...

    @abstractmethod
    def delete_booking(self, booking_id: BookingId) -> int:
        """Delete a booking by id. Returns the deleted count."""
        ...

    @abstractmethod
    def insert_payment(
        self,
        booking_id: str,
        email: str,
        amount: Money,
        currency: str,
        transaction_id: str | None,
        paid_at: datetime,
    ) -> PaymentId:
        ...

    @abstractmethod
    def list_payments(
        self, email: str | None = None, newest_first: bool = False
    ) -> list[Payment]:
        ...

    @abstractmethod
    def payments_for_booking(self, booking_id: str) -> list[Payment]:
        ...


class CourtStore(ABC):
    """Interface for court catalog persistence."""

    @abstractmethod
    def list_courts(self) -> list[Court]:
        ...

    @abstractmethod
    def insert_court(
        self, name: str, court_type: str, price: Money, image_url: str | None
    ) -> CourtId:
        ...

    @abstractmethod
    def delete_court(self, court_id: CourtId) -> int:
        ...

    @abstractmethod
    def count_courts(self) -> int:
        ...
