"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to domain_exception_handler for HTTP mapping
- Never contain business logic
- Never expose internal error details
"""

from decimal import Decimal

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.container import get_container
from bookings.domain import BookingStatus, Money, Role
from bookings.handlers.permissions import IsAdmin, IsMember
from bookings.handlers.serializers import (
    BookingCreateSerializer,
    BookingQuerySerializer,
    BookingSerializer,
    CourtCreateSerializer,
    CourtSerializer,
    MemberSerializer,
    PaymentCreateSerializer,
    PaymentIntentRequestSerializer,
    PaymentSerializer,
    RoleUpdateSerializer,
    UserSerializer,
    UserUpsertSerializer,
    update_result_data,
)


class MethodPermissionsMixin:
    """Picks permission classes per HTTP method."""

    permission_classes_by_method: dict[str, list] = {}

    def get_permissions(self):
        classes = self.permission_classes_by_method.get(
            self.request.method, self.permission_classes
        )
        return [permission() for permission in classes]


class HealthView(APIView):
    """Handler for GET /api/"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        return Response({"message": "Club bookings API running"})


class UserListView(APIView):
    """Handler for GET/POST /api/users"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        users = get_container().directory.list_users(request.query_params.get("email"))
        return Response(UserSerializer(users, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = UserUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = get_container().directory.upsert_user(
            email=data.get("email", ""),
            name=data.get("name") or "",
            role=Role(data["role"]) if data.get("role") else None,
            photo=data.get("photo"),
        )
        return Response(update_result_data(result))


class UserCountView(APIView):
    """Handler for GET /api/users/count"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request: Request) -> Response:
        return Response({"count": get_container().directory.count_users()})


class UserSearchView(APIView):
    """Handler for GET /api/users/search"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request: Request) -> Response:
        users = get_container().directory.search_users(request.query_params.get("email", ""))
        return Response(UserSerializer(users, many=True).data)


class UserRoleView(APIView):
    """Handler for GET /api/users/role/{email}"""

    def get(self, request: Request, email: str) -> Response:
        role = get_container().directory.get_role(email)
        return Response({"role": role.value})


class UserRoleUpdateView(APIView):
    """Handler for PATCH /api/users/{user_id}/role"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request: Request, user_id: str) -> Response:
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = get_container().directory.set_role(
            user_id, Role(serializer.validated_data["role"])
        )
        return Response(update_result_data(result))


class UserDetailView(APIView):
    """Handler for GET /api/users/{email}"""

    def get(self, request: Request, email: str) -> Response:
        user = get_container().directory.get_user(email)
        return Response(UserSerializer(user).data)


class MemberListView(APIView):
    """Handler for GET /api/members"""

    def get(self, request: Request) -> Response:
        directory = get_container().directory
        email = request.query_params.get("email")
        if email:
            return Response(MemberSerializer(directory.find_member(email)).data)
        return Response(MemberSerializer(directory.list_members(), many=True).data)


class MemberCountView(APIView):
    """Handler for GET /api/members/count"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request: Request) -> Response:
        return Response({"count": get_container().directory.count_members()})


class MemberDetailView(APIView):
    """Handler for DELETE /api/members/{member_id}"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def delete(self, request: Request, member_id: str) -> Response:
        summary = get_container().lifecycle.remove_member(member_id)
        return Response(
            {
                "message": summary.message,
                "memberId": str(summary.member_id),
                "email": summary.email,
                "roleChanged": summary.role_changed,
            }
        )


class BookingListView(APIView):
    """Handler for GET/POST /api/bookings"""

    def get(self, request: Request) -> Response:
        query = BookingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        bookings = get_container().lifecycle.list_bookings(
            status=BookingStatus(params["status"]) if params.get("status") else None,
            user_email=params.get("userEmail") or None,
            title=params.get("title") or None,
        )
        return Response(BookingSerializer(bookings, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        price = data.get("price")
        booking_id = get_container().lifecycle.create_booking(
            court_id=data.get("courtId", ""),
            user_email=data.get("userEmail") or request.user.email,
            title=data.get("title", ""),
            status=BookingStatus(data["status"]) if data.get("status") else None,
            price=Money(price) if price is not None else None,
        )
        return Response({"insertedId": str(booking_id)}, status=status.HTTP_201_CREATED)


class BookingDetailView(MethodPermissionsMixin, APIView):
    """Handler for PATCH (approve) and DELETE (withdraw) /api/bookings/{booking_id}"""

    permission_classes_by_method = {
        "PATCH": [IsAuthenticated, IsAdmin],
        "DELETE": [IsAuthenticated],
    }

    def patch(self, request: Request, booking_id: str) -> Response:
        summary = get_container().lifecycle.approve_booking(booking_id)
        return Response(
            {
                "message": summary.message,
                "bookingId": str(summary.booking_id),
                "memberId": str(summary.member_id),
                "memberCreated": summary.member_created,
                "roleChanged": summary.role_changed,
                "statusChanged": summary.status_changed,
            }
        )

    def delete(self, request: Request, booking_id: str) -> Response:
        container = get_container()
        booking = container.lifecycle.find_booking(booking_id)
        if booking is not None:
            container.authorization.require_owner_or_role(
                request.user.email, booking.user_email, Role.ADMIN
            )
        deleted = container.lifecycle.delete_booking(booking_id)
        return Response({"deletedCount": deleted})


class PaymentListView(APIView):
    """Handler for GET/POST /api/payments"""

    permission_classes = [IsAuthenticated, IsMember]

    def get(self, request: Request) -> Response:
        payments = get_container().payments.list_payments(request.query_params.get("email"))
        return Response(PaymentSerializer(payments, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        summary = get_container().lifecycle.record_payment(
            booking_id=data.get("bookingId"),
            email=data.get("email") or request.user.email,
            amount=Money(data["amount"]),
            currency=data.get("currency") or None,
            transaction_id=data.get("transactionId") or None,
        )
        return Response(
            {
                "message": summary.message,
                "paymentId": str(summary.payment_id),
                "bookingUpdate": update_result_data(summary.booking_update),
            }
        )


class UserPaymentListView(APIView):
    """Handler for GET /api/payments/user/{email}"""

    permission_classes = [IsAuthenticated, IsMember]

    def get(self, request: Request, email: str) -> Response:
        payments = get_container().payments.payments_for_user(email)
        return Response(PaymentSerializer(payments, many=True).data)


class PaymentIntentView(APIView):
    """Handler for POST /api/create-payment-intent"""

    permission_classes = [IsAuthenticated, IsMember]

    def post(self, request: Request) -> Response:
        serializer = PaymentIntentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        intent = get_container().payments.create_intent(
            Money(Decimal(serializer.validated_data["amount"]))
        )
        return Response({"clientSecret": intent.client_secret})


class CourtListView(MethodPermissionsMixin, APIView):
    """Handler for GET/POST /api/courts"""

    permission_classes_by_method = {
        "GET": [AllowAny],
        "POST": [IsAuthenticated, IsAdmin],
    }

    def get(self, request: Request) -> Response:
        return Response(CourtSerializer(get_container().courts.list_courts(), many=True).data)

    def post(self, request: Request) -> Response:
        serializer = CourtCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        court_id = get_container().courts.create_court(
            name=data["name"],
            court_type=data["type"],
            price=Money(data["price"]),
            image_url=data.get("image") or None,
        )
        return Response({"insertedId": str(court_id)}, status=status.HTTP_201_CREATED)


class CourtCountView(APIView):
    """Handler for GET /api/courts/count"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request: Request) -> Response:
        return Response({"count": get_container().courts.count_courts()})


class CourtDetailView(APIView):
    """Handler for DELETE /api/courts/{court_id}"""

    permission_classes = [IsAuthenticated, IsAdmin]

    def delete(self, request: Request, court_id: str) -> Response:
        return Response({"deletedCount": get_container().courts.delete_court(court_id)})
