"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in bookings/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime

from bookings.domain.value_objects import (
    BookingId,
    BookingStatus,
    CourtId,
    MemberId,
    Money,
    PaymentId,
    Role,
    UserId,
)


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    court_id: str
    user_email: str
    title: str
    status: BookingStatus
    created_at: datetime
    is_paid: bool = False
    price: Money | None = None

    def __post_init__(self) -> None:
        if self.is_paid and self.status is not BookingStatus.CONFIRMED:
            raise ValueError("A paid booking must be confirmed")

    @property
    def requester_email(self) -> str:
        return (self.user_email or "").strip()


@dataclass(frozen=True)
class User:
    """Domain representation of a directory User."""

    id: UserId
    email: str
    name: str
    role: Role
    photo: str | None
    created_at: datetime


@dataclass(frozen=True)
class Member:
    """Domain representation of a club Member."""

    id: MemberId
    email: str
    name: str
    joined_at: datetime


@dataclass(frozen=True)
class Payment:
    """Domain representation of a recorded Payment."""

    id: PaymentId
    booking_id: str
    email: str
    amount: Money
    currency: str
    paid_at: datetime
    transaction_id: str | None = None


@dataclass(frozen=True)
class Court:
    """Domain representation of a bookable Court."""

    id: CourtId
    name: str
    court_type: str
    price: Money
    created_at: datetime
    image_url: str | None = None


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a single-document update."""

    matched: int
    modified: int
    upserted_id: str | None = None

    @property
    def changed(self) -> bool:
        return self.modified > 0


@dataclass(frozen=True)
class BookingFilter:
    """Conjunction of optional booking predicates."""

    status: BookingStatus | None = None
    user_email: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class CallerIdentity:
    """A verified caller, as yielded by the identity provider."""

    email: str
    uid: str | None = None
    claims: dict = field(default_factory=dict, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return True


@dataclass(frozen=True)
class ApprovalSummary:
    """Result of approving a booking."""

    booking_id: BookingId
    member_id: MemberId
    member_created: bool
    role_changed: bool
    status_changed: bool
    message: str = "Booking approved, member created, user promoted"


@dataclass(frozen=True)
class PaymentSummary:
    """Result of recording a payment."""

    payment_id: PaymentId
    booking_id: BookingId
    booking_update: UpdateResult
    message: str = "Payment recorded and booking confirmed"


@dataclass(frozen=True)
class RemovalSummary:
    """Result of removing a member."""

    member_id: MemberId
    email: str
    role_changed: bool
    message: str = "Member deleted successfully"


@dataclass(frozen=True)
class PaymentIntent:
    """A payment authorization created by the payment provider."""

    id: str
    client_secret: str
    amount: Money
    currency: str
