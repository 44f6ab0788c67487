"""Negotiation of an alternate pack proposed by the organisers."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from partnerships.domain import EventId, PackId, Partnership, PartnershipId, Suggestion
from partnerships.domain.errors import SuggestionNotFoundError
from partnerships.domain.selections import OptionSelection
from partnerships.services.catalog_service import CatalogService
from partnerships.services.common import Clock, parse_id, require_partnership, utcnow
from partnerships.services.notification_service import NotificationService
from partnerships.stores.interfaces import PartnershipStore

logger = logging.getLogger(__name__)


class SuggestionService:
    """Suggest, approve and decline alternate packs.

    The suggestion track is independent from the organiser decision: an
    approved suggestion becomes the validated pack right away.
    """

    def __init__(
        self,
        store: PartnershipStore,
        catalog: CatalogService,
        notifications: NotificationService | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._notifications = notifications
        self._clock = clock

    def suggest(
        self,
        event_id: str,
        partnership_id: str,
        pack_id: str,
        selections: Sequence[OptionSelection],
        language: str,
    ) -> Partnership:
        """Propose a pack with its options, replacing any previous suggestion.

        Option translations are checked against the partnership language;
        ``language`` is the language of the message sent to the company.

        Raises:
            PartnershipNotFoundError, PackNotFoundError: If out of scope.
            ValidationError, ForbiddenError: If the option selections are invalid.
        """
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        suggested_pack_id = parse_id(PackId, pack_id, "pack")

        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            pack = self._catalog.require_pack(eid, suggested_pack_id)
            choices = self._catalog.validate_selections(pack, selections, partnership.language)

            self._store.replace_options(pid, pack.id, choices, suggested=True)

            partnership = replace(
                partnership,
                suggestion=Suggestion(pack_id=pack.id, sent_at=self._clock()),
            )
            self._store.save_partnership(partnership)

            if self._notifications is not None:
                self._notifications.notify(
                    partnership,
                    "suggestion",
                    language,
                    {"pack_name": pack.name, "option_count": len(choices)},
                )

        logger.info("Suggested pack %s to partnership %s", pack.id, pid)
        return partnership

    def approve(self, event_id: str, partnership_id: str) -> Partnership:
        return self._answer(event_id, partnership_id, approved=True)

    def decline(self, event_id: str, partnership_id: str) -> Partnership:
        return self._answer(event_id, partnership_id, approved=False)

    def _answer(self, event_id: str, partnership_id: str, *, approved: bool) -> Partnership:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            suggestion = partnership.suggestion
            if suggestion.pack_id is None:
                raise SuggestionNotFoundError(pid)

            now = self._clock()
            if approved:
                suggestion = replace(suggestion, approved_at=now)
            else:
                suggestion = replace(suggestion, declined_at=now)
            partnership = replace(partnership, suggestion=suggestion)
            self._store.save_partnership(partnership)

        logger.info(
            "Suggestion of pack %s %s for partnership %s",
            suggestion.pack_id,
            "approved" if approved else "declined",
            pid,
        )
        return partnership
