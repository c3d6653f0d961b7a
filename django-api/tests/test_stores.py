"""Tests for the Django ORM stores.

These hit the test database and check the matched/modified semantics the
lifecycle transitions rely on.
Run with: pytest tests/test_stores.py -v
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from django.db import DatabaseError

from bookings import models
from bookings.domain import BookingFilter, BookingId, BookingStatus, MemberId, Money, Role
from bookings.domain.errors import StoreUnavailableError
from bookings.stores.django_store import (
    DjangoCourtStore,
    DjangoDirectoryStore,
    DjangoLedgerStore,
)

JOINED = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

pytestmark = pytest.mark.django_db


@pytest.fixture
def directory():
    return DjangoDirectoryStore()


@pytest.fixture
def ledger():
    return DjangoLedgerStore()


def _booking(ledger, status=BookingStatus.PENDING, user_email="a@x.com", title="Evening"):
    return ledger.insert_booking(
        court_id="court-1", user_email=user_email, title=title, status=status, price=None
    )


class TestUpdateBooking:
    """Tests for DjangoLedgerStore.update_booking."""

    def test_update_reports_matched_and_modified(self, ledger):
        booking_id = _booking(ledger)

        result = ledger.update_booking(booking_id, status=BookingStatus.APPROVED)

        assert (result.matched, result.modified) == (1, 1)
        assert ledger.get_booking(booking_id).status is BookingStatus.APPROVED

    def test_update_to_same_values_modifies_nothing(self, ledger):
        booking_id = _booking(ledger, status=BookingStatus.APPROVED)

        result = ledger.update_booking(booking_id, status=BookingStatus.APPROVED)

        assert (result.matched, result.modified) == (1, 0)

    def test_unknown_booking_matches_nothing(self, ledger):
        result = ledger.update_booking(BookingId(uuid.uuid4()), status=BookingStatus.CONFIRMED)

        assert (result.matched, result.modified) == (0, 0)

    def test_from_statuses_guards_the_write(self, ledger):
        booking_id = _booking(ledger, status=BookingStatus.APPROVED)

        result = ledger.update_booking(
            booking_id,
            status=BookingStatus.APPROVED,
            from_statuses=(BookingStatus.PENDING,),
        )

        assert (result.matched, result.modified) == (0, 0)

    def test_confirm_sets_paid_flag(self, ledger):
        booking_id = _booking(ledger, status=BookingStatus.APPROVED)

        result = ledger.update_booking(
            booking_id,
            status=BookingStatus.CONFIRMED,
            is_paid=True,
            from_statuses=(BookingStatus.PENDING, BookingStatus.APPROVED),
        )

        booking = ledger.get_booking(booking_id)
        assert result.modified == 1
        assert booking.status is BookingStatus.CONFIRMED
        assert booking.is_paid


class TestLedgerQueries:
    """Tests for booking and payment queries."""

    def test_list_filters(self, ledger):
        _booking(ledger, title="Tennis Evening")
        _booking(ledger, title="Squash", status=BookingStatus.APPROVED)
        _booking(ledger, user_email="b@x.com", title="tennis morning")

        assert len(ledger.list_bookings(BookingFilter(title="TENNIS"))) == 2
        assert len(ledger.list_bookings(BookingFilter(status=BookingStatus.APPROVED))) == 1
        assert len(ledger.list_bookings(BookingFilter(user_email="a@x.com", title="tennis"))) == 1

    def test_delete_booking_leaves_payments(self, ledger):
        booking_id = _booking(ledger)
        ledger.insert_payment(
            booking_id=str(booking_id),
            email="a@x.com",
            amount=Money(Decimal("20")),
            currency="usd",
            transaction_id="pi_1",
            paid_at=JOINED,
        )

        assert ledger.delete_booking(booking_id) == 1
        assert ledger.delete_booking(booking_id) == 0
        payments = ledger.payments_for_booking(str(booking_id))
        assert len(payments) == 1
        assert payments[0].amount == Money(Decimal("20"))
        assert payments[0].transaction_id == "pi_1"

    def test_payments_for_email_newest_first(self, ledger):
        for day in (1, 3, 2):
            ledger.insert_payment(
                booking_id=str(uuid.uuid4()),
                email="a@x.com",
                amount=Money(Decimal(day)),
                currency="usd",
                transaction_id=None,
                paid_at=datetime(2024, 6, day, tzinfo=timezone.utc),
            )

        payments = ledger.list_payments(email="a@x.com", newest_first=True)

        assert [p.paid_at.day for p in payments] == [3, 2, 1]
        assert ledger.list_payments(email="b@x.com") == []


class TestDirectoryStore:
    """Tests for DjangoDirectoryStore."""

    def test_upsert_creates_then_updates(self, directory):
        created = directory.upsert_user("a@x.com", "Ann", Role.USER, None)
        updated = directory.upsert_user("a@x.com", "Ann B", Role.USER, "https://x.com/a.png")

        assert created.matched == 0
        assert created.upserted_id is not None
        assert (updated.matched, updated.modified) == (1, 1)
        assert directory.get_user("a@x.com").name == "Ann B"
        assert directory.count_users() == 1

    def test_set_user_role_counts(self, directory):
        directory.upsert_user("a@x.com", "Ann", Role.USER, None)

        first = directory.set_user_role("a@x.com", Role.MEMBER)
        second = directory.set_user_role("a@x.com", Role.MEMBER)
        missing = directory.set_user_role("nobody@x.com", Role.MEMBER)

        assert (first.matched, first.modified) == (1, 1)
        assert (second.matched, second.modified) == (1, 0)
        assert (missing.matched, missing.modified) == (0, 0)
        assert directory.get_user("a@x.com").role is Role.MEMBER

    def test_list_users_by_substring(self, directory):
        directory.upsert_user("ann@x.com", "Ann", Role.USER, None)
        directory.upsert_user("bob@y.com", "Bob", Role.USER, None)

        assert [u.email for u in directory.list_users("X.COM")] == ["ann@x.com"]
        assert len(directory.list_users()) == 2

    def test_ensure_member_reuses_case_insensitively(self, directory):
        member, created = directory.ensure_member("Ann@X.com", "Ann", JOINED)
        again, created_again = directory.ensure_member("ann@x.com", "Other", JOINED)

        assert created
        assert not created_again
        assert again.id == member.id
        assert models.Member.objects.count() == 1

    def test_ensure_member_reuses_row_after_losing_insert_race(self, directory, monkeypatch):
        """A concurrent insert between the lookup and the create is absorbed."""
        winner = models.Member.objects.create(email="a@x.com", name="Ann", joined_at=JOINED)
        original_filter = models.Member.objects.filter
        calls = []

        def filter_missing_first(*args, **kwargs):
            calls.append(kwargs)
            if len(calls) == 1:
                return models.Member.objects.none()
            return original_filter(*args, **kwargs)

        monkeypatch.setattr(models.Member.objects, "filter", filter_missing_first)

        member, created = directory.ensure_member("A@x.com", "Ann", JOINED)

        assert not created
        assert member.id.value == winner.id
        assert len(calls) == 2
        assert models.Member.objects.count() == 1

    def test_user_lookup_and_role_ignore_case(self, directory):
        directory.upsert_user("ann@x.com", "Ann", Role.USER, None)

        result = directory.set_user_role("Ann@X.com", Role.MEMBER)

        assert (result.matched, result.modified) == (1, 1)
        assert directory.get_user("ANN@x.com").role is Role.MEMBER

    def test_delete_member_returns_count(self, directory):
        member, _ = directory.ensure_member("a@x.com", "Ann", JOINED)

        assert directory.delete_member(member.id) == 1
        assert directory.delete_member(member.id) == 0
        assert directory.get_member(MemberId(uuid.uuid4())) is None


class TestStoreErrors:
    """Tests for database failure translation."""

    def test_database_error_becomes_store_unavailable(self, ledger, monkeypatch):
        def broken_filter(*args, **kwargs):
            raise DatabaseError("connection lost")

        monkeypatch.setattr(models.Booking.objects, "filter", broken_filter)

        with pytest.raises(StoreUnavailableError) as excinfo:
            ledger.get_booking(BookingId(uuid.uuid4()))

        assert excinfo.value.message == "Storage operation failed"
        assert isinstance(excinfo.value.__cause__, DatabaseError)


class TestCourtStore:
    """Tests for DjangoCourtStore."""

    def test_insert_list_delete(self):
        store = DjangoCourtStore()
        court_id = store.insert_court("Court 1", "clay", Money(Decimal("15.50")), None)

        courts = store.list_courts()
        assert [c.name for c in courts] == ["Court 1"]
        assert courts[0].price == Money(Decimal("15.50"))
        assert store.count_courts() == 1
        assert store.delete_court(court_id) == 1
        assert store.count_courts() == 0
