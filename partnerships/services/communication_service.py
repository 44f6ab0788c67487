"""Communication schedule of the partners of an event."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime

from partnerships.domain import EventId, Partnership, PartnershipId
from partnerships.services.common import Clock, parse_id, require_event, require_partnership, utcnow
from partnerships.stores.interfaces import PartnershipFilters, PartnershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommunicationItem:
    partnership_id: PartnershipId
    company_name: str
    publication_date: datetime | None
    support_url: str | None


@dataclass(frozen=True)
class CommunicationPlan:
    done: tuple[CommunicationItem, ...]
    planned: tuple[CommunicationItem, ...]
    unplanned: tuple[CommunicationItem, ...]


class CommunicationService:
    def __init__(self, store: PartnershipStore, clock: Clock = utcnow) -> None:
        self._store = store
        self._clock = clock

    def set_publication_date(
        self, event_id: str, partnership_id: str, publication_date: datetime
    ) -> Partnership:
        return self._update(
            event_id, partnership_id, communication_publication_date=publication_date
        )

    def set_support_url(self, event_id: str, partnership_id: str, support_url: str) -> Partnership:
        return self._update(event_id, partnership_id, communication_support_url=support_url)

    def update(
        self,
        event_id: str,
        partnership_id: str,
        *,
        publication_date: datetime | None = None,
        support_url: str | None = None,
    ) -> Partnership:
        """Apply the given communication details in one write; None leaves a field untouched."""
        changes = {}
        if publication_date is not None:
            changes["communication_publication_date"] = publication_date
        if support_url is not None:
            changes["communication_support_url"] = support_url
        return self._update(event_id, partnership_id, **changes)

    def _update(self, event_id: str, partnership_id: str, **changes) -> Partnership:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            if changes:
                partnership = replace(partnership, **changes)
                self._store.save_partnership(partnership)
        logger.info("Updated communication of partnership %s (%s)", pid, ", ".join(changes))
        return partnership

    def plan(self, event_id: str) -> CommunicationPlan:
        """Split validated partnerships by publication date.

        ``done`` is newest first, ``planned`` soonest first, ``unplanned``
        by company name.
        """
        eid = parse_id(EventId, event_id, "event")
        require_event(self._store, eid)
        now = self._clock()
        items = []
        for partnership in self._store.list_partnerships(eid, PartnershipFilters(validated=True)):
            company = self._store.get_company(partnership.company_id)
            items.append(
                CommunicationItem(
                    partnership_id=partnership.id,
                    company_name=company.name if company is not None else "",
                    publication_date=partnership.communication_publication_date,
                    support_url=partnership.communication_support_url,
                )
            )

        dated = [item for item in items if item.publication_date is not None]
        return CommunicationPlan(
            done=tuple(
                sorted(
                    (item for item in dated if item.publication_date <= now),
                    key=lambda item: item.publication_date,
                    reverse=True,
                )
            ),
            planned=tuple(
                sorted(
                    (item for item in dated if item.publication_date > now),
                    key=lambda item: item.publication_date,
                )
            ),
            unplanned=tuple(
                sorted(
                    (item for item in items if item.publication_date is None),
                    key=lambda item: item.company_name.lower(),
                )
            ),
        )
