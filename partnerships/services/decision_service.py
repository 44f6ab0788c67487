"""Organiser decision on a partnership: validate or decline."""

import logging
from dataclasses import replace

from partnerships.domain import DecisionStatus, EventId, Partnership, PartnershipId
from partnerships.domain.errors import DecisionAlreadyTakenError
from partnerships.services.common import Clock, parse_id, require_partnership, utcnow
from partnerships.stores.interfaces import PartnershipStore

logger = logging.getLogger(__name__)


class DecisionService:
    """State machine pending -> validated | declined.

    Repeating a decision refreshes its timestamp; switching to the other
    outcome is refused.
    """

    def __init__(self, store: PartnershipStore, clock: Clock = utcnow) -> None:
        self._store = store
        self._clock = clock

    def validate(self, event_id: str, partnership_id: str) -> Partnership:
        return self._decide(event_id, partnership_id, DecisionStatus.VALIDATED)

    def decline(self, event_id: str, partnership_id: str) -> Partnership:
        return self._decide(event_id, partnership_id, DecisionStatus.DECLINED)

    def _decide(self, event_id: str, partnership_id: str, outcome: DecisionStatus) -> Partnership:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            current = partnership.decision_status
            if current is not DecisionStatus.PENDING and current is not outcome:
                raise DecisionAlreadyTakenError(pid, current.value)

            now = self._clock()
            if outcome is DecisionStatus.VALIDATED:
                partnership = replace(partnership, validated_at=now)
            else:
                partnership = replace(partnership, declined_at=now)
            self._store.save_partnership(partnership)

        logger.info("Partnership %s %s", pid, outcome.value)
        return partnership
