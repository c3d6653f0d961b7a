"""Court catalog service."""

import logging

from bookings.domain import Court, CourtId, Money
from bookings.services.identifiers import parse_id
from bookings.stores.interfaces import CourtStore

logger = logging.getLogger(__name__)


class CourtService:
    """Service for the bookable court catalog."""

    def __init__(self, store: CourtStore) -> None:
        self._store = store

    def list_courts(self) -> list[Court]:
        return self._store.list_courts()

    def create_court(
        self, name: str, court_type: str, price: Money, image_url: str | None = None
    ) -> CourtId:
        court_id = self._store.insert_court(name, court_type, price, image_url)
        logger.info("Court %s created", court_id)
        return court_id

    def delete_court(self, court_id: str) -> int:
        """Raises InvalidIdError if the court_id is not a valid UUID."""
        return self._store.delete_court(parse_id(CourtId, court_id, "court"))

    def count_courts(self) -> int:
        return self._store.count_courts()
