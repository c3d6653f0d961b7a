"""Domain error codes for the bookings module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BOOKING_NOT_UPDATED = "BOOKING_NOT_UPDATED"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ROLE_REQUIRED = "ROLE_REQUIRED"
    NOT_OWNER = "NOT_OWNER"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    PARTIAL_TRANSITION = "PARTIAL_TRANSITION"
    PAYMENT_PROVIDER_FAILED = "PAYMENT_PROVIDER_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """A required field is missing or malformed. Nothing was mutated."""


class NotFoundError(DomainError):
    """A referenced record is absent or an update matched nothing."""


class AuthenticationError(DomainError):
    """The caller's credential could not be verified."""


class AuthorizationError(DomainError):
    """The caller lacks the role or ownership an operation requires."""


class StoreError(DomainError):
    """A store operation failed. Earlier committed steps stay committed."""


class PaymentProviderError(DomainError):
    """The payment-intent provider failed."""


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class BookingNotUpdatedError(NotFoundError):
    """Raised when a payment's booking update modified nothing.

    The payment itself has already been persisted; ``payment_id`` points at it.
    """

    def __init__(self, booking_id: str, payment_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_UPDATED,
            message="Booking not found or already updated",
        )
        self.booking_id = booking_id
        self.payment_id = payment_id


class MemberNotFoundError(NotFoundError):
    """Raised when a member is not found."""

    def __init__(self, member_ref: str) -> None:
        super().__init__(
            code=ErrorCode.MEMBER_NOT_FOUND,
            message="Member not found or already deleted",
        )
        self.member_ref = member_ref


class UserNotFoundError(NotFoundError):
    """Raised when no user matches an email or id."""

    def __init__(self, user_ref: str) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
        )
        self.user_ref = user_ref


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str = "record") -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID format",
        )


class MissingFieldError(ValidationError):
    """Raised when a required payload field is absent or blank."""

    def __init__(self, field_name: str, message: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELD,
            message=message or f"{field_name} is required",
        )
        self.field_name = field_name


class MissingRequesterEmailError(MissingFieldError):
    """Raised when a booking carries no requester email."""

    def __init__(self) -> None:
        super().__init__("userEmail", "Email not found in booking")


class MissingBookingReferenceError(MissingFieldError):
    """Raised when a payment payload carries no booking id."""

    def __init__(self) -> None:
        super().__init__("bookingId", "bookingId is required in payment data")


class InvalidTransitionError(ValidationError):
    """Raised when a booking cannot move from its current status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Booking cannot move from {current} to {target}",
        )
        self.current = current
        self.target = target


class InvalidCredentialsError(AuthenticationError):
    """Raised when a bearer credential is missing or fails verification."""

    def __init__(self, reason: str = "Invalid token") -> None:
        super().__init__(
            code=ErrorCode.INVALID_CREDENTIALS,
            message=reason,
        )


class RoleRequiredError(AuthorizationError):
    """Raised when the caller does not hold the required role."""

    def __init__(self, role: str) -> None:
        super().__init__(
            code=ErrorCode.ROLE_REQUIRED,
            message=f"{role.capitalize()} access required",
        )
        self.role = role


class NotBookingOwnerError(AuthorizationError):
    """Raised when the caller neither owns the booking nor holds the override role."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_OWNER,
            message="Only the booking owner or an admin may do this",
        )


class StoreUnavailableError(StoreError):
    """Raised when a single store operation fails."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Storage operation failed",
        )
        self.operation = operation


class PartialTransitionError(StoreError):
    """Raised when a multi-step transition fails after committing some steps."""

    def __init__(self, transition: str, completed_steps: tuple[str, ...], failed_step: str) -> None:
        super().__init__(
            code=ErrorCode.PARTIAL_TRANSITION,
            message="Storage operation failed",
        )
        self.transition = transition
        self.completed_steps = completed_steps
        self.failed_step = failed_step


class PaymentIntentFailedError(PaymentProviderError):
    """Raised when the provider cannot create a payment intent."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_PROVIDER_FAILED,
            message="Payment intent creation failed",
        )
