"""Serializers for request payloads and domain model responses.

Input serializers check format only; business rules stay in the services.
Output serializers read domain models and use the API's camelCase keys.
"""

from rest_framework import serializers

from bookings.domain import BookingStatus, Role

ROLE_CHOICES = [role.value for role in Role]
STATUS_CHOICES = [status.value for status in BookingStatus]


class UserUpsertSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, default="")
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    role = serializers.ChoiceField(choices=ROLE_CHOICES, required=False, allow_null=True)
    photo = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=ROLE_CHOICES)


class BookingCreateSerializer(serializers.Serializer):
    courtId = serializers.CharField(required=False, allow_blank=True, default="")
    userEmail = serializers.CharField(required=False, allow_blank=True)
    title = serializers.CharField(required=False, allow_blank=True, default="")
    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False, allow_null=True)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class BookingQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)
    userEmail = serializers.CharField(required=False, allow_blank=True)
    title = serializers.CharField(required=False, allow_blank=True)


class PaymentCreateSerializer(serializers.Serializer):
    bookingId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    email = serializers.CharField(required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    currency = serializers.CharField(required=False, allow_blank=True, max_length=8)
    transactionId = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PaymentIntentRequestSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)


class CourtCreateSerializer(serializers.Serializer):
    name = serializers.CharField()
    type = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class UserSerializer(serializers.Serializer):
    """Serializer for User domain model."""

    id = serializers.CharField()
    email = serializers.CharField()
    name = serializers.CharField()
    role = serializers.CharField(source="role.value")
    photo = serializers.CharField(allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


class MemberSerializer(serializers.Serializer):
    """Serializer for Member domain model."""

    id = serializers.CharField()
    email = serializers.CharField()
    name = serializers.CharField()
    joinedAt = serializers.DateTimeField(source="joined_at")


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField()
    courtId = serializers.CharField(source="court_id")
    userEmail = serializers.CharField(source="user_email")
    title = serializers.CharField()
    status = serializers.CharField(source="status.value")
    isPaid = serializers.BooleanField(source="is_paid")
    price = serializers.DecimalField(
        source="price.amount", max_digits=10, decimal_places=2, allow_null=True
    )
    createdAt = serializers.DateTimeField(source="created_at")


class PaymentSerializer(serializers.Serializer):
    """Serializer for Payment domain model."""

    id = serializers.CharField()
    bookingId = serializers.CharField(source="booking_id")
    email = serializers.CharField()
    amount = serializers.DecimalField(source="amount.amount", max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    transactionId = serializers.CharField(source="transaction_id", allow_null=True)
    paidAt = serializers.DateTimeField(source="paid_at")


class CourtSerializer(serializers.Serializer):
    """Serializer for Court domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    type = serializers.CharField(source="court_type")
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    image = serializers.CharField(source="image_url", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


def update_result_data(result) -> dict:
    return {
        "matchedCount": result.matched,
        "modifiedCount": result.modified,
        "upsertedId": result.upserted_id,
    }
