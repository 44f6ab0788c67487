"""Booth location assignment, unique per event."""

import logging
from dataclasses import replace

from partnerships.domain import EventId, Partnership, PartnershipId
from partnerships.domain.errors import BoothLocationTakenError, CompanyNotFoundError
from partnerships.services.common import parse_id, require_partnership
from partnerships.stores.interfaces import PartnershipStore

logger = logging.getLogger(__name__)


class BoothService:
    def __init__(self, store: PartnershipStore) -> None:
        self._store = store

    def assign_location(self, event_id: str, partnership_id: str, location: str) -> Partnership:
        """Give a booth location to a partnership.

        Reassigning the partnership's own location is a no-op.

        Raises:
            BoothLocationTakenError: If another partnership of the event holds it.
        """
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            holder = self._store.find_by_booth_location(eid, location, exclude=pid)
            if holder is not None:
                company = self._store.get_company(holder.company_id)
                if company is None:
                    raise CompanyNotFoundError(holder.company_id)
                logger.warning("Booth location requested by %s is held by %s", pid, holder.id)
                raise BoothLocationTakenError(location, company.name)
            partnership = replace(partnership, booth_location=location)
            # The unique constraint covers a concurrent writer.
            self._store.save_partnership(partnership)

        logger.info("Assigned booth location to partnership %s", pid)
        return partnership
