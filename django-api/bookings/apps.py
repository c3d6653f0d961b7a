import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class BookingsConfig(AppConfig):
    name = "bookings"

    def ready(self) -> None:
        from bookings.container import build_default_container

        self.container = build_default_container()
        logger.debug("Bookings service container initialized")
