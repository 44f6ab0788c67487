"""Helpers shared by the partnership services."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar

from partnerships.domain import Event, EventId, Partnership, PartnershipId
from partnerships.domain.errors import (
    EventNotFoundError,
    InvalidIdError,
    PartnershipNotFoundError,
)
from partnerships.domain.value_objects import Identifier
from partnerships.stores.interfaces import PartnershipStore

Clock = Callable[[], datetime]

IdT = TypeVar("IdT", bound=Identifier)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_id(id_type: type[IdT], value: object, kind: str) -> IdT:
    """Parse an identifier coming from the caller.

    Raises:
        InvalidIdError: If the value is not a valid UUID.
    """
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(str(value))
    except ValueError as exc:
        raise InvalidIdError(kind, value) from exc


def require_event(store: PartnershipStore, event_id: EventId) -> Event:
    event = store.get_event(event_id)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


def require_partnership(
    store: PartnershipStore,
    event_id: EventId,
    partnership_id: PartnershipId,
    *,
    for_update: bool = False,
) -> Partnership:
    """Return the partnership scoped to the event.

    Raises:
        PartnershipNotFoundError: If it does not exist for this event.
    """
    partnership = store.get_partnership(event_id, partnership_id, for_update=for_update)
    if partnership is None:
        raise PartnershipNotFoundError(partnership_id)
    return partnership
