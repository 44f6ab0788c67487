"""Administration of partnerships: detail, listings, contact details, organiser."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from partnerships.domain import (
    CompanyId,
    EventId,
    InvoiceStatus,
    PackId,
    Partnership,
    PartnershipId,
    PartnershipOption,
)
from partnerships.domain.errors import PartnershipNotPendingError, UserNotFoundError
from partnerships.domain.value_objects import DecisionStatus
from partnerships.services.common import parse_id, require_event, require_partnership
from partnerships.stores.interfaces import BillingStore, PartnershipFilters, PartnershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartnershipDetail:
    partnership: Partnership
    emails: tuple[str, ...]
    selected_options: tuple[PartnershipOption, ...]
    suggested_options: tuple[PartnershipOption, ...]
    validated_pack_id: PackId | None
    billing_status: InvoiceStatus | None


@dataclass(frozen=True)
class ContactUpdate:
    """Partial update; None leaves a field untouched."""

    contact_name: str | None = None
    contact_role: str | None = None
    language: str | None = None
    phone: str | None = None
    emails: Sequence[str] | None = None


class PartnershipService:
    def __init__(self, store: PartnershipStore, billing: BillingStore) -> None:
        self._store = store
        self._billing = billing

    def get_detail(self, event_id: str, partnership_id: str) -> PartnershipDetail:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        partnership = require_partnership(self._store, eid, pid)
        return self._detail(partnership)

    def _detail(self, partnership: Partnership) -> PartnershipDetail:
        selected = ()
        if partnership.selected_pack_id is not None:
            selected = tuple(self._store.list_options(partnership.id, partnership.selected_pack_id))
        suggested = ()
        suggested_pack_id = partnership.suggestion.pack_id
        if suggested_pack_id is not None:
            suggested = tuple(
                self._store.list_options(partnership.id, suggested_pack_id, suggested=True)
            )
        billing = self._billing.get_billing(partnership.event_id, partnership.id)
        return PartnershipDetail(
            partnership=partnership,
            emails=tuple(self._store.list_emails(partnership.id)),
            selected_options=selected,
            suggested_options=suggested,
            validated_pack_id=partnership.validated_pack_id(),
            billing_status=billing.status if billing is not None else None,
        )

    def list_partnerships(
        self,
        event_id: str,
        filters: PartnershipFilters | None = None,
        direction: str = "asc",
    ) -> list[Partnership]:
        """List partnerships of an event ordered by creation, ``direction`` being asc or desc."""
        eid = parse_id(EventId, event_id, "event")
        require_event(self._store, eid)
        return self._store.list_partnerships(
            eid, filters or PartnershipFilters(), descending=direction == "desc"
        )

    def list_company_partnerships(self, company_id: str) -> list[Partnership]:
        return self._store.list_partnerships_by_company(parse_id(CompanyId, company_id, "company"))

    def delete(self, event_id: str, partnership_id: str) -> None:
        """Delete a partnership that has not been decided yet.

        Raises:
            PartnershipNotPendingError: If it was validated or declined.
        """
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            if partnership.decision_status is not DecisionStatus.PENDING:
                raise PartnershipNotPendingError(pid)
            self._store.delete_partnership(pid)
        logger.info("Deleted partnership %s", pid)

    def update_contact(
        self, event_id: str, partnership_id: str, update: ContactUpdate
    ) -> PartnershipDetail:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        changes = {
            name: value
            for name, value in (
                ("contact_name", update.contact_name),
                ("contact_role", update.contact_role),
                ("language", update.language),
                ("phone", update.phone),
            )
            if value is not None
        }
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            if changes:
                partnership = replace(partnership, **changes)
                self._store.save_partnership(partnership)
            if update.emails is not None:
                self._store.replace_emails(pid, update.emails)
            detail = self._detail(partnership)
        logger.info("Updated contact of partnership %s (%s)", pid, ", ".join(changes) or "emails")
        return detail

    def assign_organiser(self, event_id: str, partnership_id: str, email: str) -> Partnership:
        """Raises UserNotFoundError if no user has this email."""
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            organiser = self._store.find_organiser(email)
            if organiser is None:
                raise UserNotFoundError()
            partnership = replace(partnership, organiser=organiser)
            self._store.save_partnership(partnership)
        logger.info("Assigned organiser %s to partnership %s", organiser.id, pid)
        return partnership

    def remove_organiser(self, event_id: str, partnership_id: str) -> Partnership:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            partnership = replace(partnership, organiser=None)
            self._store.save_partnership(partnership)
        logger.info("Removed organiser of partnership %s", pid)
        return partnership
