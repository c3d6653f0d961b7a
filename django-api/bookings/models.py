"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.db.models.functions import Lower


class User(models.Model):
    """Persistence model for directory users."""

    class Role(models.TextChoices):
        USER = "user"
        MEMBER = "member"
        ADMIN = "admin"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=254, unique=True)
    name = models.CharField(max_length=255, blank=True, default="")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.USER)
    photo = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.email


class Member(models.Model):
    """Persistence model for club members."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=254)
    name = models.CharField(max_length=255)
    joined_at = models.DateTimeField()

    class Meta:
        constraints = [
            models.UniqueConstraint(Lower("email"), name="unique_member_email_ci"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Court(models.Model):
    """Persistence model for bookable courts."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    court_type = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Booking(models.Model):
    """Persistence model for court bookings."""

    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"
        CONFIRMED = "confirmed"
        REJECTED = "rejected"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    court_ref = models.CharField(max_length=64, blank=True, default="")
    user_email = models.EmailField(max_length=254, blank=True, default="")
    title = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    is_paid = models.BooleanField(default=False)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["status"], name="bookings_bo_status_idx"),
            models.Index(fields=["user_email"], name="bookings_bo_user_em_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"


class Payment(models.Model):
    """Persistence model for recorded payments.

    booking_ref is a plain reference, not a foreign key: a payment may outlive
    or precede its booking.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_ref = models.CharField(max_length=64)
    email = models.EmailField(max_length=254, blank=True, default="")
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=8, default="usd")
    transaction_id = models.CharField(max_length=255, blank=True, null=True)
    paid_at = models.DateTimeField()

    class Meta:
        indexes = [
            models.Index(fields=["email", "-paid_at"], name="bookings_pa_email_idx"),
            models.Index(fields=["booking_ref"], name="bookings_pa_booking_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.amount} {self.currency} for {self.booking_ref}"
