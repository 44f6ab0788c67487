"""Ticket issuance, gated by the validated pack's capacity and a paid invoice."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from partnerships.domain import EventId, InvoiceStatus, PartnershipId, Ticket, TicketId
from partnerships.domain.errors import (
    BillingNotFoundError,
    InvalidTicketOrderError,
    InvoiceNotPaidError,
    TicketNotFoundError,
    TicketQuotaExceededError,
)
from partnerships.services.common import parse_id, require_partnership
from partnerships.services.validated_pack import ValidatedPackResolver
from partnerships.stores.interfaces import BillingStore, NewTicket, PartnershipStore, TicketStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketHolder:
    external_id: str
    first_name: str
    last_name: str
    url: str | None = None


@dataclass(frozen=True)
class TicketOrder:
    """Tickets bought through the ticketing provider under one order."""

    order_id: str
    holders: Sequence[TicketHolder]


class TicketService:
    def __init__(
        self,
        store: PartnershipStore,
        billing: BillingStore,
        tickets: TicketStore,
        resolver: ValidatedPackResolver,
    ) -> None:
        self._store = store
        self._billing = billing
        self._tickets = tickets
        self._resolver = resolver

    def issue_tickets(self, event_id: str, partnership_id: str, order: TicketOrder) -> list[Ticket]:
        """Record one ticket per holder.

        Gates are checked in order: validated pack, remaining capacity,
        billing record, paid invoice. The partnership row stays locked until
        the tickets are written so concurrent orders cannot exceed the pack.

        Raises:
            InvalidTicketOrderError: If the order has no holder.
            ValidatedPackNotFoundError: If the partnership has no validated pack.
            TicketQuotaExceededError: If the pack cannot cover the request.
            BillingNotFoundError: If the partnership has no billing record.
            InvoiceNotPaidError: If the invoice is not PAID.
        """
        if not order.holders:
            raise InvalidTicketOrderError("A ticket order needs at least one holder")
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")

        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            validated = self._resolver.resolve(partnership)

            requested = len(order.holders)
            available = validated.pack.ticket_capacity.remaining(self._tickets.count_tickets(pid))
            if requested > available:
                logger.warning(
                    "Ticket quota exceeded for partnership %s: %d available, %d requested",
                    pid,
                    available,
                    requested,
                )
                raise TicketQuotaExceededError(available, requested)

            billing = self._billing.get_billing(eid, pid)
            if billing is None:
                raise BillingNotFoundError(pid)
            if billing.status is not InvoiceStatus.PAID:
                logger.warning(
                    "Tickets refused for partnership %s, invoice is %s", pid, billing.status.value
                )
                raise InvoiceNotPaidError(billing.status.value, InvoiceStatus.PAID.value)

            tickets = self._tickets.create_tickets(
                [
                    NewTicket(
                        partnership_id=pid,
                        order_id=order.order_id,
                        external_id=holder.external_id,
                        first_name=holder.first_name,
                        last_name=holder.last_name,
                        email=billing.contact_email,
                        url=holder.url,
                    )
                    for holder in order.holders
                ]
            )

        logger.info("Issued %d tickets for partnership %s (order %s)", len(tickets), pid, order.order_id)
        return tickets

    def list_tickets(self, event_id: str, partnership_id: str) -> list[Ticket]:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        require_partnership(self._store, eid, pid)
        return self._tickets.list_tickets(pid)

    def update_ticket(
        self,
        event_id: str,
        partnership_id: str,
        ticket_id: str,
        first_name: str,
        last_name: str,
    ) -> Ticket:
        """Correct the holder of an issued ticket. Gates are not checked again."""
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        tid = parse_id(TicketId, ticket_id, "ticket")
        with self._store.atomic():
            require_partnership(self._store, eid, pid)
            if self._tickets.get_ticket(pid, tid) is None:
                raise TicketNotFoundError(tid)
            return self._tickets.update_holder(tid, first_name, last_name)
