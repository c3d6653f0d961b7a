"""Pytest configuration and shared fixtures.

The in-memory stores follow the same contract as the ORM stores, including
matched/modified counts, and can be told to fail specific operations.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

import pytest
from rest_framework.test import APIClient

from bookings.container import build_container, use_container
from bookings.domain import (
    Booking,
    BookingFilter,
    BookingId,
    BookingStatus,
    CallerIdentity,
    Court,
    CourtId,
    Member,
    MemberId,
    Money,
    Payment,
    PaymentId,
    PaymentIntent,
    Role,
    UpdateResult,
    User,
    UserId,
)
from bookings.domain.errors import InvalidCredentialsError, StoreUnavailableError
from bookings.gateways.interfaces import IdentityVerifier, PaymentIntentProvider
from bookings.services.lifecycle_service import BookingLifecycleManager
from bookings.stores.interfaces import CourtStore, DirectoryStore, LedgerStore

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FailureInjection:
    """Mixin letting a test make named store operations raise."""

    def __init__(self) -> None:
        self.failing: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreUnavailableError(operation)


class InMemoryDirectoryStore(FailureInjection, DirectoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.users: dict[str, User] = {}
        self.members: dict[uuid.UUID, Member] = {}

    def add_user(self, email: str, name: str = "", role: Role = Role.USER) -> User:
        user = User(
            id=UserId(uuid.uuid4()),
            email=email,
            name=name,
            role=role,
            photo=None,
            created_at=FIXED_NOW,
        )
        self.users[email] = user
        return user

    def _find_user(self, email):
        for user in self.users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    def get_user(self, email):
        self._check("get_user")
        return self._find_user(email)

    def list_users(self, email_contains=None):
        self._check("list_users")
        return [
            user
            for user in self.users.values()
            if not email_contains or email_contains.lower() in user.email.lower()
        ]

    def upsert_user(self, email, name, role, photo):
        self._check("upsert_user")
        existing = self.users.get(email)
        if existing is None:
            user = self.add_user(email, name, role)
            return UpdateResult(matched=0, modified=0, upserted_id=str(user.id))
        self.users[email] = replace(existing, name=name, role=role, photo=photo)
        return UpdateResult(matched=1, modified=1)

    def set_user_role(self, email, role):
        self._check("set_user_role")
        user = self._find_user(email)
        if user is None:
            return UpdateResult(matched=0, modified=0)
        if user.role is role:
            return UpdateResult(matched=1, modified=0)
        self.users[user.email] = replace(user, role=role)
        return UpdateResult(matched=1, modified=1)

    def set_user_role_by_id(self, user_id, role):
        self._check("set_user_role_by_id")
        for user in self.users.values():
            if user.id == user_id:
                return self.set_user_role(user.email, role)
        return UpdateResult(matched=0, modified=0)

    def count_users(self):
        return len(self.users)

    def ensure_member(self, email, name, joined_at):
        self._check("ensure_member")
        existing = self.find_member_by_email(email)
        if existing is not None:
            return existing, False
        member = Member(id=MemberId(uuid.uuid4()), email=email, name=name, joined_at=joined_at)
        self.members[member.id.value] = member
        return member, True

    def get_member(self, member_id):
        self._check("get_member")
        return self.members.get(member_id.value)

    def find_member_by_email(self, email):
        for member in self.members.values():
            if member.email.lower() == email.lower():
                return member
        return None

    def list_members(self):
        return list(self.members.values())

    def delete_member(self, member_id):
        self._check("delete_member")
        return 1 if self.members.pop(member_id.value, None) else 0

    def count_members(self):
        return len(self.members)


class InMemoryLedgerStore(FailureInjection, LedgerStore):
    def __init__(self) -> None:
        super().__init__()
        self.bookings: dict[uuid.UUID, Booking] = {}
        self.payments: list[Payment] = []

    def add_booking(
        self,
        user_email: str = "a@x.com",
        status: BookingStatus = BookingStatus.PENDING,
        title: str = "Court 1 evening",
        is_paid: bool = False,
    ) -> Booking:
        booking = Booking(
            id=BookingId(uuid.uuid4()),
            court_id="court-1",
            user_email=user_email,
            title=title,
            status=status,
            is_paid=is_paid,
            created_at=FIXED_NOW,
        )
        self.bookings[booking.id.value] = booking
        return booking

    def insert_booking(self, court_id, user_email, title, status, price):
        self._check("insert_booking")
        booking = Booking(
            id=BookingId(uuid.uuid4()),
            court_id=court_id,
            user_email=user_email,
            title=title,
            status=status,
            price=price,
            created_at=FIXED_NOW,
        )
        self.bookings[booking.id.value] = booking
        return booking.id

    def get_booking(self, booking_id):
        self._check("get_booking")
        return self.bookings.get(booking_id.value)

    def list_bookings(self, booking_filter: BookingFilter):
        self._check("list_bookings")
        result = []
        for booking in self.bookings.values():
            if booking_filter.status is not None and booking.status is not booking_filter.status:
                continue
            if booking_filter.user_email and booking.user_email != booking_filter.user_email:
                continue
            if booking_filter.title and booking_filter.title.lower() not in booking.title.lower():
                continue
            result.append(booking)
        return result

    def update_booking(self, booking_id, *, status=None, is_paid=None, from_statuses=None):
        self._check("update_booking")
        booking = self.bookings.get(booking_id.value)
        if booking is None or (from_statuses is not None and booking.status not in from_statuses):
            return UpdateResult(matched=0, modified=0)
        changes = {}
        if status is not None and booking.status is not status:
            changes["status"] = status
        if is_paid is not None and booking.is_paid != is_paid:
            changes["is_paid"] = is_paid
        if not changes:
            return UpdateResult(matched=1, modified=0)
        self.bookings[booking_id.value] = replace(booking, **changes)
        return UpdateResult(matched=1, modified=1)

    def delete_booking(self, booking_id):
        self._check("delete_booking")
        return 1 if self.bookings.pop(booking_id.value, None) else 0

    def insert_payment(self, booking_id, email, amount, currency, transaction_id, paid_at):
        self._check("insert_payment")
        payment = Payment(
            id=PaymentId(uuid.uuid4()),
            booking_id=booking_id,
            email=email,
            amount=amount,
            currency=currency,
            transaction_id=transaction_id,
            paid_at=paid_at,
        )
        self.payments.append(payment)
        return payment.id

    def list_payments(self, email=None, newest_first=False):
        payments = [p for p in self.payments if not email or p.email == email]
        if newest_first:
            payments.sort(key=lambda p: p.paid_at, reverse=True)
        return payments

    def payments_for_booking(self, booking_id):
        return [p for p in self.payments if p.booking_id == booking_id]


class InMemoryCourtStore(CourtStore):
    def __init__(self) -> None:
        self.courts: dict[uuid.UUID, Court] = {}

    def list_courts(self):
        return list(self.courts.values())

    def insert_court(self, name, court_type, price, image_url):
        court = Court(
            id=CourtId(uuid.uuid4()),
            name=name,
            court_type=court_type,
            price=price,
            image_url=image_url,
            created_at=FIXED_NOW,
        )
        self.courts[court.id.value] = court
        return court.id

    def delete_court(self, court_id):
        return 1 if self.courts.pop(court_id.value, None) else 0

    def count_courts(self):
        return len(self.courts)


class FakeIdentityVerifier(IdentityVerifier):
    """Accepts any token that looks like an email and treats it as the caller."""

    def verify(self, token: str) -> CallerIdentity:
        if "@" not in token:
            raise InvalidCredentialsError("Invalid token")
        return CallerIdentity(email=token, uid=f"uid-{token}")


class FakePaymentProvider(PaymentIntentProvider):
    def __init__(self) -> None:
        self.requests: list[tuple[Money, str]] = []

    def create_intent(self, amount: Money, currency: str) -> PaymentIntent:
        self.requests.append((amount, currency))
        return PaymentIntent(
            id="pi_test_1",
            client_secret="pi_test_1_secret_abc",
            amount=amount,
            currency=currency,
        )


@pytest.fixture
def directory_store() -> InMemoryDirectoryStore:
    return InMemoryDirectoryStore()


@pytest.fixture
def ledger_store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def manager(directory_store, ledger_store) -> BookingLifecycleManager:
    return BookingLifecycleManager(directory_store, ledger_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def payment_provider() -> FakePaymentProvider:
    return FakePaymentProvider()


@pytest.fixture
def orm_container(db, payment_provider):
    """Installs a container backed by the ORM stores and fake external providers."""
    from bookings.stores.django_store import (
        DjangoCourtStore,
        DjangoDirectoryStore,
        DjangoLedgerStore,
    )

    container = build_container(
        directory_store=DjangoDirectoryStore(),
        ledger_store=DjangoLedgerStore(),
        court_store=DjangoCourtStore(),
        identity=FakeIdentityVerifier(),
        payment_provider=payment_provider,
    )
    previous = use_container(container)
    yield container
    use_container(previous)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def as_user(api_client):
    """Returns a function that authenticates the client as the given email."""

    def authenticate(email: str) -> APIClient:
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {email}")
        return api_client

    return authenticate
