"""Interfaces for external collaborators the lifecycle depends on."""

from abc import ABC, abstractmethod

from bookings.domain import CallerIdentity, Money, PaymentIntent


class IdentityVerifier(ABC):
    """Verifies a bearer credential and yields the caller."""

    @abstractmethod
    def verify(self, token: str) -> CallerIdentity:
        """Return the verified identity.

        Raises:
            InvalidCredentialsError: If the token cannot be verified.
        """
        ...


class PaymentIntentProvider(ABC):
    """Creates monetary authorizations with an external processor."""

    @abstractmethod
    def create_intent(self, amount: Money, currency: str) -> PaymentIntent:
        """Return a created intent carrying the client-facing secret.

        Raises:
            PaymentIntentFailedError: If the processor rejects the request.
        """
        ...
