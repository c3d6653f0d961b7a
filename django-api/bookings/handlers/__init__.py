from bookings.handlers.views import (
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

__all__ = [
    "HealthView",
    "UserListView",
    "UserCountView",
    "UserSearchView",
    "UserRoleView",
    "UserRoleUpdateView",
    "UserDetailView",
    "MemberListView",
    "MemberCountView",
    "MemberDetailView",
    "BookingListView",
    "BookingDetailView",
    "PaymentListView",
    "UserPaymentListView",
    "PaymentIntentView",
    "CourtListView",
    "CourtCountView",
    "CourtDetailView",
]
