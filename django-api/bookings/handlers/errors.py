"""Mapping of domain errors to HTTP responses."""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from bookings.domain.errors import (
    AuthenticationError,
    AuthorizationError,
    BookingNotUpdatedError,
    DomainError,
    NotFoundError,
    PartialTransitionError,
    PaymentProviderError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (PaymentProviderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: DomainError) -> int:
    for kind, status_code in STATUS_BY_KIND:
        if isinstance(exc, kind):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_exception_handler(exc, context):
    """DRF exception handler that understands DomainError."""
    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    status_code = status_for(exc)
    body: dict[str, object] = {"code": exc.code.value, "message": exc.message}
    if isinstance(exc, BookingNotUpdatedError):
        body["paymentId"] = exc.payment_id
    if status_code >= 500:
        view = context.get("view")
        if isinstance(exc, PartialTransitionError):
            logger.error(
                "%s failed at %s after committing %s",
                exc.transition,
                exc.failed_step,
                list(exc.completed_steps),
            )
        else:
            logger.error("%s failed in %s", exc, type(view).__name__ if view else "view")
    return Response(body, status=status_code)
