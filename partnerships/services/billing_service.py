"""Billing records and the invoice status reported by the invoicing provider."""

import logging
from dataclasses import dataclass, replace
from uuid import uuid4

from partnerships.domain import Billing, EventId, InvoiceStatus, PartnershipId
from partnerships.domain.errors import (
    BillingNotFoundError,
    CompanyNotFoundError,
    InvalidInvoiceStatusError,
)
from partnerships.services.common import parse_id, require_partnership
from partnerships.stores.interfaces import BillingStore, PartnershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillingData:
    contact_first_name: str
    contact_last_name: str
    contact_email: str
    name: str | None = None
    po: str | None = None


def parse_invoice_status(value: str) -> InvoiceStatus:
    try:
        return InvoiceStatus(value)
    except ValueError as exc:
        raise InvalidInvoiceStatusError(value, [s.value for s in InvoiceStatus]) from exc


class BillingService:
    def __init__(self, store: PartnershipStore, billing: BillingStore) -> None:
        self._store = store
        self._billing = billing

    def upsert_billing(self, event_id: str, partnership_id: str, data: BillingData) -> Billing:
        """Create the billing record in PENDING status, or update its contact details.

        The name falls back to the company name. An existing purchase order is
        only replaced by a new non-null one.
        """
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid)
            name = data.name
            if not name:
                company = self._store.get_company(partnership.company_id)
                if company is None:
                    raise CompanyNotFoundError(partnership.company_id)
                name = company.name

            existing = self._billing.get_billing(eid, pid)
            if existing is None:
                billing = Billing(
                    id=uuid4(),
                    event_id=eid,
                    partnership_id=pid,
                    name=name,
                    contact_first_name=data.contact_first_name,
                    contact_last_name=data.contact_last_name,
                    contact_email=data.contact_email,
                    po=data.po,
                )
            else:
                billing = replace(
                    existing,
                    name=name,
                    contact_first_name=data.contact_first_name,
                    contact_last_name=data.contact_last_name,
                    contact_email=data.contact_email,
                    po=data.po if data.po is not None else existing.po,
                )
            billing = self._billing.save_billing(billing)

        logger.info(
            "%s billing %s for partnership %s",
            "Created" if existing is None else "Updated",
            billing.id,
            pid,
        )
        return billing

    def get_billing(self, event_id: str, partnership_id: str) -> Billing:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        require_partnership(self._store, eid, pid)
        billing = self._billing.get_billing(eid, pid)
        if billing is None:
            raise BillingNotFoundError(pid)
        return billing

    def update_status(self, event_id: str, partnership_id: str, status: str) -> Billing:
        """Record the invoice status reported for a partnership.

        Raises:
            InvalidInvoiceStatusError: If the status is unknown.
            BillingNotFoundError: If the partnership has no billing record.
        """
        new_status = parse_invoice_status(status)
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            require_partnership(self._store, eid, pid)
            billing = self._billing.get_billing(eid, pid)
            if billing is None:
                raise BillingNotFoundError(pid)
            previous = billing.status
            billing = self._billing.save_billing(replace(billing, status=new_status))

        logger.info(
            "Invoice status of partnership %s changed from %s to %s",
            pid,
            previous.value,
            new_status.value,
        )
        return billing
