"""Parsing of raw identifiers coming from callers."""

from typing import TypeVar

from bookings.domain.errors import InvalidIdError

IdT = TypeVar("IdT")


def parse_id(id_type: type[IdT], raw: str, kind: str) -> IdT:
    """Parse ``raw`` into ``id_type``.

    Raises:
        InvalidIdError: If the value is not a valid UUID.
    """
    try:
        return id_type.from_string(str(raw))  # type: ignore[attr-defined]
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidIdError(kind) from exc
