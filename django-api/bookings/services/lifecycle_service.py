"""Booking lifecycle service - the state machine and its side effects.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Transitions that touch several documents run as ordered steps, each
committing on its own. There is no rollback: when a later step fails the
earlier ones stay applied, the partial completion is logged, and a
PartialTransitionError names the committed steps so operators can reconcile.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from bookings.domain import (
    ApprovalSummary,
    Booking,
    BookingFilter,
    BookingId,
    BookingStatus,
    MemberId,
    Money,
    PaymentSummary,
    RemovalSummary,
    Role,
)
from bookings.domain.errors import (
    BookingNotFoundError,
    BookingNotUpdatedError,
    InvalidIdError,
    InvalidTransitionError,
    MemberNotFoundError,
    MissingBookingReferenceError,
    MissingRequesterEmailError,
    PartialTransitionError,
    StoreError,
)
from bookings.services.identifiers import parse_id
from bookings.stores.interfaces import DirectoryStore, LedgerStore

logger = logging.getLogger(__name__)

UNNAMED_MEMBER = "Unnamed"
DEFAULT_CURRENCY = "usd"

T = TypeVar("T")

# Statuses from which a payment may confirm a booking.
CONFIRMABLE_STATUSES = tuple(
    status for status in BookingStatus if status.can_transition_to(BookingStatus.CONFIRMED)
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _StepRunner:
    """Runs the committing steps of one transition and records progress."""

    def __init__(self, transition: str, subject: str) -> None:
        self.transition = transition
        self.subject = subject
        self.completed: list[str] = []

    def run(self, step: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            result = func(*args, **kwargs)
        except StoreError as exc:
            if not self.completed:
                raise
            logger.error(
                "%s for %s partially applied: committed %s, failed at %s",
                self.transition,
                self.subject,
                ", ".join(self.completed),
                step,
            )
            raise PartialTransitionError(
                self.transition, tuple(self.completed), step
            ) from exc
        self.completed.append(step)
        return result


class BookingLifecycleManager:
    """Service for the booking lifecycle: create, approve, pay, withdraw."""

    def __init__(
        self,
        directory: DirectoryStore,
        ledger: LedgerStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._directory = directory
        self._ledger = ledger
        self._clock = clock

    def create_booking(
        self,
        court_id: str,
        user_email: str,
        title: str,
        status: BookingStatus | None = None,
        price: Money | None = None,
    ) -> BookingId:
        """Insert a booking, pending unless a status is given."""
        booking_id = self._ledger.insert_booking(
            court_id=court_id,
            user_email=user_email,
            title=title,
            status=status or BookingStatus.PENDING,
            price=price,
        )
        logger.info("Booking %s created for %s", booking_id, user_email)
        return booking_id

    def list_bookings(
        self,
        status: BookingStatus | None = None,
        user_email: str | None = None,
        title: str | None = None,
    ) -> list[Booking]:
        return self._ledger.list_bookings(
            BookingFilter(status=status, user_email=user_email, title=title)
        )

    def find_booking(self, booking_id: str) -> Booking | None:
        """Return a booking by ID, or None.

        Raises:
            InvalidIdError: If the booking_id is not a valid UUID.
        """
        return self._ledger.get_booking(parse_id(BookingId, booking_id, "booking"))

    def get_booking(self, booking_id: str) -> Booking:
        """Return a booking by ID.

        Raises:
            InvalidIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        booking = self.find_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def approve_booking(self, booking_id: str) -> ApprovalSummary:
        """Approve a pending booking and promote its requester to member.

        Steps, in order: ensure the member record, promote the user's role,
        then move the booking to approved. The status change is conditional on
        the booking still being pending.

        Raises:
            InvalidIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            MissingRequesterEmailError: If the booking has no requester email.
            InvalidTransitionError: If the booking is not pending.
            StoreError: If a store operation fails; committed steps remain.
        """
        booking = self.get_booking(booking_id)
        email = booking.requester_email
        if not email:
            raise MissingRequesterEmailError()
        if not booking.status.can_transition_to(BookingStatus.APPROVED):
            raise InvalidTransitionError(booking.status.value, BookingStatus.APPROVED.value)

        user = self._directory.get_user(email)
        name = ((user.name if user else "") or "").strip() or UNNAMED_MEMBER
        if user is None:
            logger.warning("Approving booking %s for %s with no user record", booking.id, email)

        steps = _StepRunner("approve_booking", str(booking.id))
        member, member_created = steps.run(
            "insert_member", self._directory.ensure_member, email, name, self._clock()
        )
        role_result = steps.run(
            "promote_user", self._directory.set_user_role, email, Role.MEMBER
        )
        status_result = steps.run(
            "approve_status",
            self._ledger.update_booking,
            booking.id,
            status=BookingStatus.APPROVED,
            from_statuses=(BookingStatus.PENDING,),
        )
        if not member_created:
            logger.info("Reused existing member %s for %s", member.id, email)
        if not role_result.changed:
            logger.info("Role of %s not changed (matched=%d)", email, role_result.matched)
        if not status_result.changed:
            logger.warning("Booking %s was no longer pending when approval was written", booking.id)

        logger.info(
            "Approval of booking %s for %s finished (member_created=%s role_changed=%s "
            "status_changed=%s)",
            booking.id,
            email,
            member_created,
            role_result.changed,
            status_result.changed,
        )
        return ApprovalSummary(
            booking_id=booking.id,
            member_id=member.id,
            member_created=member_created,
            role_changed=role_result.changed,
            status_changed=status_result.changed,
        )

    def record_payment(
        self,
        booking_id: str | None,
        email: str,
        amount: Money,
        currency: str | None = None,
        transaction_id: str | None = None,
    ) -> PaymentSummary:
        """Persist a payment and confirm its booking.

        The payment is written first. If the booking update then changes
        nothing (booking missing or already confirmed) the payment stays
        persisted and BookingNotUpdatedError carries its id. A reference that
        is not a booking id at all cannot match a booking, so its payment is
        stored under the raw reference and reported the same way.

        Raises:
            MissingBookingReferenceError: If no booking id is given.
            BookingNotUpdatedError: If the booking update modified nothing.
            StoreError: If a store operation fails.
        """
        if not booking_id or not str(booking_id).strip():
            raise MissingBookingReferenceError()
        try:
            parsed_id = parse_id(BookingId, booking_id, "booking")
        except InvalidIdError:
            parsed_id = None
        reference = str(parsed_id) if parsed_id else str(booking_id).strip()

        steps = _StepRunner("record_payment", reference)
        payment_id = steps.run(
            "insert_payment",
            self._ledger.insert_payment,
            booking_id=reference,
            email=email,
            amount=amount,
            currency=currency or DEFAULT_CURRENCY,
            transaction_id=transaction_id,
            paid_at=self._clock(),
        )
        if parsed_id is None:
            logger.warning(
                "Payment %s recorded against unknown booking reference %r", payment_id, reference
            )
            raise BookingNotUpdatedError(reference, str(payment_id))

        update = steps.run(
            "confirm_booking",
            self._ledger.update_booking,
            parsed_id,
            status=BookingStatus.CONFIRMED,
            is_paid=True,
            from_statuses=CONFIRMABLE_STATUSES,
        )
        if not update.changed:
            # TODO: decide with product whether this payment should be refused
            # up front instead of persisted without a confirmed booking.
            logger.warning(
                "Payment %s recorded but booking %s was not confirmed", payment_id, parsed_id
            )
            raise BookingNotUpdatedError(str(parsed_id), str(payment_id))

        logger.info("Payment %s recorded, booking %s confirmed", payment_id, parsed_id)
        return PaymentSummary(payment_id=payment_id, booking_id=parsed_id, booking_update=update)

    def delete_booking(self, booking_id: str) -> int:
        """Delete a booking. Linked payments are left untouched.

        Raises:
            InvalidIdError: If the booking_id is not a valid UUID.
        """
        deleted = self._ledger.delete_booking(parse_id(BookingId, booking_id, "booking"))
        logger.info("Booking %s withdrawn (deleted=%d)", booking_id, deleted)
        return deleted

    def remove_member(self, member_id: str) -> RemovalSummary:
        """Delete a member and downgrade the matching user back to user role.

        Raises:
            InvalidIdError: If the member_id is not a valid UUID.
            MemberNotFoundError: If the member does not exist.
            StoreError: If a store operation fails; committed steps remain.
        """
        parsed_id = parse_id(MemberId, member_id, "member")
        member = self._directory.get_member(parsed_id)
        if member is None:
            raise MemberNotFoundError(member_id)

        steps = _StepRunner("remove_member", member_id)
        deleted = steps.run("delete_member", self._directory.delete_member, parsed_id)
        if not deleted:
            raise MemberNotFoundError(member_id)
        role_result = steps.run(
            "downgrade_user", self._directory.set_user_role, member.email, Role.USER
        )

        logger.info("Member %s removed, %s downgraded to user", member_id, member.email)
        return RemovalSummary(
            member_id=member.id, email=member.email, role_changed=role_result.changed
        )
