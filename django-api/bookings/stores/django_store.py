"""Django ORM implementations of the stores.

Every public method maps to one ORM statement (or a read followed by one
write) and converts rows to domain models. Database failures surface as
StoreUnavailableError.
"""

import functools
import logging
from datetime import datetime

from django.db import DatabaseError, IntegrityError, transaction

from bookings import models
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
from bookings.domain.errors import StoreUnavailableError
from bookings.stores.interfaces import CourtStore, DirectoryStore, LedgerStore

logger = logging.getLogger(__name__)


def _translate_errors(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError as exc:
            logger.error("Store operation %s failed: %s", method.__name__, exc)
            raise StoreUnavailableError(method.__name__) from exc

    return wrapper


def _to_user(row: models.User) -> User:
    return User(
        id=UserId(row.id),
        email=row.email,
        name=row.name,
        role=Role(row.role),
        photo=row.photo,
        created_at=row.created_at,
    )


def _to_member(row: models.Member) -> Member:
    return Member(
        id=MemberId(row.id),
        email=row.email,
        name=row.name,
        joined_at=row.joined_at,
    )


def _to_booking(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        court_id=row.court_ref,
        user_email=row.user_email,
        title=row.title,
        status=BookingStatus(row.status),
        is_paid=row.is_paid,
        price=Money(row.price) if row.price is not None else None,
        created_at=row.created_at,
    )


def _to_payment(row: models.Payment) -> Payment:
    return Payment(
        id=PaymentId(row.id),
        booking_id=row.booking_ref,
        email=row.email,
        amount=Money(row.amount),
        currency=row.currency,
        transaction_id=row.transaction_id,
        paid_at=row.paid_at,
    )


def _to_court(row: models.Court) -> Court:
    return Court(
        id=CourtId(row.id),
        name=row.name,
        court_type=row.court_type,
        price=Money(row.price),
        image_url=row.image_url,
        created_at=row.created_at,
    )


class DjangoDirectoryStore(DirectoryStore):
    """Users and members backed by the Django ORM."""

    @_translate_errors
    def get_user(self, email: str) -> User | None:
        row = models.User.objects.filter(email__iexact=email).first()
        return _to_user(row) if row else None

    @_translate_errors
    def list_users(self, email_contains: str | None = None) -> list[User]:
        qs = models.User.objects.all()
        if email_contains:
            qs = qs.filter(email__icontains=email_contains)
        return [_to_user(row) for row in qs]

    @_translate_errors
    def upsert_user(
        self, email: str, name: str, role: Role, photo: str | None
    ) -> UpdateResult:
        row, created = models.User.objects.update_or_create(
            email=email,
            defaults={"name": name, "role": role.value, "photo": photo},
        )
        if created:
            return UpdateResult(matched=0, modified=0, upserted_id=str(row.id))
        return UpdateResult(matched=1, modified=1)

    @_translate_errors
    def set_user_role(self, email: str, role: Role) -> UpdateResult:
        qs = models.User.objects.filter(email__iexact=email)
        return self._set_role(qs, role)

    @_translate_errors
    def set_user_role_by_id(self, user_id: UserId, role: Role) -> UpdateResult:
        qs = models.User.objects.filter(pk=user_id.value)
        return self._set_role(qs, role)

    @staticmethod
    def _set_role(qs, role: Role) -> UpdateResult:
        matched = qs.count()
        if not matched:
            return UpdateResult(matched=0, modified=0)
        modified = qs.exclude(role=role.value).update(role=role.value)
        return UpdateResult(matched=matched, modified=modified)

    @_translate_errors
    def count_users(self) -> int:
        return models.User.objects.count()

    @_translate_errors
    def ensure_member(
        self, email: str, name: str, joined_at: datetime
    ) -> tuple[Member, bool]:
        existing = models.Member.objects.filter(email__iexact=email).first()
        if existing is not None:
            return _to_member(existing), False
        try:
            with transaction.atomic():
                row = models.Member.objects.create(
                    email=email, name=name, joined_at=joined_at
                )
        except IntegrityError:
            # Lost a race with a concurrent approval for the same email.
            existing = models.Member.objects.filter(email__iexact=email).first()
            if existing is None:
                raise
            return _to_member(existing), False
        return _to_member(row), True

    @_translate_errors
    def get_member(self, member_id: MemberId) -> Member | None:
        row = models.Member.objects.filter(pk=member_id.value).first()
        return _to_member(row) if row else None

    @_translate_errors
    def find_member_by_email(self, email: str) -> Member | None:
        row = models.Member.objects.filter(email__iexact=email).first()
        return _to_member(row) if row else None

    @_translate_errors
    def list_members(self) -> list[Member]:
        return [_to_member(row) for row in models.Member.objects.all()]

    @_translate_errors
    def delete_member(self, member_id: MemberId) -> int:
        deleted, _ = models.Member.objects.filter(pk=member_id.value).delete()
        return deleted

    @_translate_errors
    def count_members(self) -> int:
        return models.Member.objects.count()


class DjangoLedgerStore(LedgerStore):
    """Bookings and payments backed by the Django ORM."""

    @_translate_errors
    def insert_booking(
        self,
        court_id: str,
        user_email: str,
        title: str,
        status: BookingStatus,
        price: Money | None,
    ) -> BookingId:
        row = models.Booking.objects.create(
            court_ref=court_id,
            user_email=user_email,
            title=title,
            status=status.value,
            price=price.amount if price is not None else None,
        )
        return BookingId(row.id)

    @_translate_errors
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.filter(pk=booking_id.value).first()
        return _to_booking(row) if row else None

    @_translate_errors
    def list_bookings(self, booking_filter: BookingFilter) -> list[Booking]:
        qs = models.Booking.objects.all()
        if booking_filter.status is not None:
            qs = qs.filter(status=booking_filter.status.value)
        if booking_filter.user_email:
            qs = qs.filter(user_email=booking_filter.user_email)
        if booking_filter.title:
            qs = qs.filter(title__icontains=booking_filter.title)
        return [_to_booking(row) for row in qs]

    @_translate_errors
    def update_booking(
        self,
        booking_id: BookingId,
        *,
        status: BookingStatus | None = None,
        is_paid: bool | None = None,
        from_statuses: tuple[BookingStatus, ...] | None = None,
    ) -> UpdateResult:
        changes: dict[str, object] = {}
        if status is not None:
            changes["status"] = status.value
        if is_paid is not None:
            changes["is_paid"] = is_paid

        qs = models.Booking.objects.filter(pk=booking_id.value)
        if from_statuses is not None:
            qs = qs.filter(status__in=[s.value for s in from_statuses])
        matched = qs.count()
        if not matched or not changes:
            return UpdateResult(matched=matched, modified=0)
        # Rows already holding every target value are not modified.
        modified = qs.exclude(**changes).update(**changes)
        return UpdateResult(matched=matched, modified=modified)

    @_translate_errors
    def delete_booking(self, booking_id: BookingId) -> int:
        deleted, _ = models.Booking.objects.filter(pk=booking_id.value).delete()
        return deleted

    @_translate_errors
    def insert_payment(
        self,
        booking_id: str,
        email: str,
        amount: Money,
        currency: str,
        transaction_id: str | None,
        paid_at: datetime,
    ) -> PaymentId:
        row = models.Payment.objects.create(
            booking_ref=booking_id,
            email=email,
            amount=amount.amount,
            currency=currency,
            transaction_id=transaction_id,
            paid_at=paid_at,
        )
        return PaymentId(row.id)

    @_translate_errors
    def list_payments(
        self, email: str | None = None, newest_first: bool = False
    ) -> list[Payment]:
        qs = models.Payment.objects.all()
        if email:
            qs = qs.filter(email=email)
        if newest_first:
            qs = qs.order_by("-paid_at")
        return [_to_payment(row) for row in qs]

    @_translate_errors
    def payments_for_booking(self, booking_id: str) -> list[Payment]:
        qs = models.Payment.objects.filter(booking_ref=booking_id)
        return [_to_payment(row) for row in qs]


class DjangoCourtStore(CourtStore):
    """Court catalog backed by the Django ORM."""

    @_translate_errors
    def list_courts(self) -> list[Court]:
        return [_to_court(row) for row in models.Court.objects.all()]

    @_translate_errors
    def insert_court(
        self, name: str, court_type: str, price: Money, image_url: str | None
    ) -> CourtId:
        row = models.Court.objects.create(
            name=name, court_type=court_type, price=price.amount, image_url=image_url
        )
        return CourtId(row.id)

    @_translate_errors
    def delete_court(self, court_id: CourtId) -> int:
        deleted, _ = models.Court.objects.filter(pk=court_id.value).delete()
        return deleted

    @_translate_errors
    def count_courts(self) -> int:
        return models.Court.objects.count()
