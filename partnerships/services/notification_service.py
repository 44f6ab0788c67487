"""Assembly of message destinations and delivery through the notification gateway.

Message templates live under ``partnerships/emails/<kind>/<language>.html``;
the first line of a rendered template is the subject, the rest the body.
Every message handed to the gateway is recorded in the partnership email
history together with its per-recipient delivery status.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from partnerships.domain import DeliveryStatus, EmailHistory, EventId, Partnership, PartnershipId
from partnerships.domain.errors import (
    CompanyNotFoundError,
    InvalidPageError,
    NoMatchingPartnershipsError,
)
from partnerships.gateways.interfaces import Destination, DocumentRenderer, NotificationGateway
from partnerships.services.common import (
    Clock,
    parse_id,
    require_event,
    require_partnership,
    utcnow,
)
from partnerships.stores.interfaces import PartnershipFilters, PartnershipStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class EmailHistoryPage:
    items: tuple[EmailHistory, ...]
    page: int
    page_size: int
    total: int


class NotificationService:
    def __init__(
        self,
        store: PartnershipStore,
        gateway: NotificationGateway,
        renderer: DocumentRenderer,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._renderer = renderer
        self._clock = clock

    def destination(self, partnership: Partnership) -> Destination:
        company = self._store.get_company(partnership.company_id)
        if company is None:
            raise CompanyNotFoundError(partnership.company_id)
        reply_to = (partnership.organiser.email,) if partnership.organiser else ()
        return Destination(
            partnership_id=partnership.id,
            company_name=company.name,
            to=tuple(self._store.list_emails(partnership.id)),
            reply_to=reply_to,
        )

    def destinations(self, event_id: str, filters: PartnershipFilters) -> list[Destination]:
        """Return one destination per matching partnership that has contact emails.

        Raises:
            EventNotFoundError: If the event does not exist.
            NoMatchingPartnershipsError: If nothing matches the filters.
        """
        eid = parse_id(EventId, event_id, "event")
        require_event(self._store, eid)
        destinations = [
            destination
            for destination in map(self.destination, self._store.list_partnerships(eid, filters))
            if destination.to
        ]
        if not destinations:
            raise NoMatchingPartnershipsError()
        return destinations

    def send_bulk(
        self, event_id: str, filters: PartnershipFilters, subject: str, body: str
    ) -> int:
        """Send the same message to every matching partnership, return how many were reached."""
        with self._store.atomic():
            destinations = self.destinations(event_id, filters)
            for destination in destinations:
                self._send(destination, subject, body)
        logger.info("Sent bulk email to %d partnerships of event %s", len(destinations), event_id)
        return len(destinations)

    def notify(
        self,
        partnership: Partnership,
        kind: str,
        language: str,
        context: Mapping[str, Any],
    ) -> None:
        """Render a per-language message and send it to the partnership contacts.

        Partnerships without contact emails are skipped.
        """
        destination = self.destination(partnership)
        if not destination.to:
            logger.warning("Partnership %s has no contact email, %s not sent", partnership.id, kind)
            return
        rendered = self._renderer.render(
            f"partnerships/emails/{kind}/{language}.html",
            {**context, "company_name": destination.company_name},
        )
        subject, _, body = rendered.decode("utf-8").strip().partition("\n")
        self._send(destination, subject.strip(), body.strip())

    def _send(self, destination: Destination, subject: str, body: str) -> None:
        delivery = self._gateway.send(destination, subject, body)
        self._store.add_email_history(destination.partnership_id, self._clock(), delivery)
        if delivery.overall_status is not DeliveryStatus.SENT:
            logger.warning(
                "Email to partnership %s delivered with status %s",
                destination.partnership_id,
                delivery.overall_status.value,
            )

    def email_history(
        self,
        event_id: str,
        partnership_id: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> EmailHistoryPage:
        """Return the messages sent to a partnership, newest first; ``page`` starts at 1.

        Raises:
            InvalidPageError: If page or page_size is below 1.
            PartnershipNotFoundError: If the partnership does not exist for the event.
        """
        if page < 1 or page_size < 1:
            raise InvalidPageError(page, page_size)
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        require_partnership(self._store, eid, pid)
        items, total = self._store.list_email_history(
            pid, offset=(page - 1) * page_size, limit=page_size
        )
        return EmailHistoryPage(items=tuple(items), page=page, page_size=page_size, total=total)
