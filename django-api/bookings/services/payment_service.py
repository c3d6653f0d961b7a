"""Payment queries and payment-intent creation."""

import logging

from bookings.domain import Money, Payment, PaymentIntent
from bookings.gateways.interfaces import PaymentIntentProvider
from bookings.stores.interfaces import LedgerStore

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for payment history and provider authorizations."""

    def __init__(
        self, ledger: LedgerStore, provider: PaymentIntentProvider, currency: str = "usd"
    ) -> None:
        self._ledger = ledger
        self._provider = provider
        self._currency = currency

    def list_payments(self, email: str | None = None) -> list[Payment]:
        return self._ledger.list_payments(email=email)

    def payments_for_user(self, email: str) -> list[Payment]:
        """Payments by this payer, newest first."""
        return self._ledger.list_payments(email=email, newest_first=True)

    def create_intent(self, amount: Money) -> PaymentIntent:
        """Authorize ``amount`` with the provider. Failures are not retried.

        Raises:
            PaymentIntentFailedError: If the provider fails.
        """
        return self._provider.create_intent(amount, self._currency)
