from bookings.domain.models import (
    ApprovalSummary,
    Booking,
    BookingFilter,
    CallerIdentity,
    Court,
    Member,
    Payment,
    PaymentIntent,
    PaymentSummary,
    RemovalSummary,
    UpdateResult,
    User,
)
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

__all__ = [
    "Booking",
    "User",
    "Member",
    "Payment",
    "Court",
    "UpdateResult",
    "BookingFilter",
    "CallerIdentity",
    "ApprovalSummary",
    "PaymentSummary",
    "RemovalSummary",
    "PaymentIntent",
    "BookingId",
    "MemberId",
    "UserId",
    "PaymentId",
    "CourtId",
    "Money",
    "Role",
    "BookingStatus",
]
