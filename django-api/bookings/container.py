"""Explicitly constructed service graph.

Built once by BookingsConfig.ready() and read by the HTTP layer through
get_container(). Tests install their own container with use_container().
"""

from dataclasses import dataclass

from django.apps import apps
from django.conf import settings

from bookings.gateways.identity import FirebaseTokenVerifier
from bookings.gateways.interfaces import IdentityVerifier, PaymentIntentProvider
from bookings.gateways.stripe_provider import StripePaymentIntentProvider
from bookings.services.authorization_service import AuthorizationService
from bookings.services.court_service import CourtService
from bookings.services.directory_service import DirectoryService
from bookings.services.lifecycle_service import BookingLifecycleManager
from bookings.services.payment_service import PaymentService
from bookings.stores.interfaces import CourtStore, DirectoryStore, LedgerStore


@dataclass
class ServiceContainer:
    lifecycle: BookingLifecycleManager
    directory: DirectoryService
    authorization: AuthorizationService
    payments: PaymentService
    courts: CourtService
    identity: IdentityVerifier


def build_container(
    directory_store: DirectoryStore,
    ledger_store: LedgerStore,
    court_store: CourtStore,
    identity: IdentityVerifier,
    payment_provider: PaymentIntentProvider,
    currency: str = "usd",
) -> ServiceContainer:
    return ServiceContainer(
        lifecycle=BookingLifecycleManager(directory_store, ledger_store),
        directory=DirectoryService(directory_store),
        authorization=AuthorizationService(directory_store),
        payments=PaymentService(ledger_store, payment_provider, currency),
        courts=CourtService(court_store),
        identity=identity,
    )


def build_default_container() -> ServiceContainer:
    """Wire the ORM stores and the configured external providers."""
    from bookings.stores.django_store import (
        DjangoCourtStore,
        DjangoDirectoryStore,
        DjangoLedgerStore,
    )

    return build_container(
        directory_store=DjangoDirectoryStore(),
        ledger_store=DjangoLedgerStore(),
        court_store=DjangoCourtStore(),
        identity=FirebaseTokenVerifier(settings.IDENTITY_PROJECT_ID),
        payment_provider=StripePaymentIntentProvider(settings.PAYMENT_GATEWAY_KEY),
        currency=settings.PAYMENT_CURRENCY,
    )


def get_container() -> ServiceContainer:
    return apps.get_app_config("bookings").container


def use_container(container: ServiceContainer) -> ServiceContainer:
    """Install ``container`` and return the one it replaced."""
    config = apps.get_app_config("bookings")
    previous = config.container
    config.container = container
    return previous
