from django.urls import path

from bookings.handlers import (
    BookingDetailView,
    BookingListView,
    CourtCountView,
    CourtDetailView,
    CourtListView,
    HealthView,
    MemberCountView,
    MemberDetailView,
    MemberListView,
    PaymentIntentView,
    PaymentListView,
    UserCountView,
    UserDetailView,
    UserListView,
    UserPaymentListView,
    UserRoleUpdateView,
    UserRoleView,
    UserSearchView,
)

urlpatterns = [
    path("", HealthView.as_view(), name="health"),
    path("users", UserListView.as_view(), name="user-list"),
    path("users/count", UserCountView.as_view(), name="user-count"),
    path("users/search", UserSearchView.as_view(), name="user-search"),
    path("users/role/<str:email>", UserRoleView.as_view(), name="user-role"),
    path("users/<str:user_id>/role", UserRoleUpdateView.as_view(), name="user-role-update"),
    path("users/<str:email>", UserDetailView.as_view(), name="user-detail"),
    path("members", MemberListView.as_view(), name="member-list"),
    path("members/count", MemberCountView.as_view(), name="member-count"),
    path("members/<str:member_id>", MemberDetailView.as_view(), name="member-detail"),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path("payments", PaymentListView.as_view(), name="payment-list"),
    path("payments/user/<str:email>", UserPaymentListView.as_view(), name="payment-user-list"),
    path("create-payment-intent", PaymentIntentView.as_view(), name="payment-intent"),
    path("courts", CourtListView.as_view(), name="court-list"),
    path("courts/count", CourtCountView.as_view(), name="court-count"),
    path("courts/<str:court_id>", CourtDetailView.as_view(), name="court-detail"),
]
