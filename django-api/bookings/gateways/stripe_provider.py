"""Stripe-backed payment intent provider."""

import logging

import stripe

from bookings.domain import Money, PaymentIntent
from bookings.domain.errors import PaymentIntentFailedError
from bookings.gateways.interfaces import PaymentIntentProvider

logger = logging.getLogger(__name__)


class StripePaymentIntentProvider(PaymentIntentProvider):
    """Creates card payment intents through the Stripe API."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def create_intent(self, amount: Money, currency: str) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount.to_minor_units(),
                currency=currency,
                payment_method_types=["card"],
                api_key=self.api_key,
            )
        except stripe.StripeError as exc:
            logger.error("Stripe error creating payment intent: %s", exc)
            raise PaymentIntentFailedError() from exc

        logger.info("Created payment intent %s for %s %s", intent.id, amount, currency)
        return PaymentIntent(
            id=intent.id,
            client_secret=intent.client_secret,
            amount=amount,
            currency=currency,
        )
