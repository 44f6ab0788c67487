"""Registration of a company to an event's sponsoring programme."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from partnerships.domain import CompanyId, EventId, NewPartnership, PackId, PartnershipId
from partnerships.domain.errors import CompanyNotFoundError, PartnershipAlreadyExistsError
from partnerships.domain.selections import OptionSelection
from partnerships.services.catalog_service import CatalogService
from partnerships.services.common import parse_id, require_event
from partnerships.stores.interfaces import PartnershipStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisterPartnership:
    company_id: str
    pack_id: str
    language: str
    contact_name: str
    contact_role: str
    phone: str | None = None
    emails: Sequence[str] = ()
    option_selections: Sequence[OptionSelection] = field(default_factory=tuple)


class RegistrationService:
    """Service for partnership registration."""

    def __init__(self, store: PartnershipStore, catalog: CatalogService) -> None:
        self._store = store
        self._catalog = catalog

    def register(self, event_id: str, register: RegisterPartnership) -> PartnershipId:
        """Create a partnership with its emails and option selections.

        Nothing is persisted when any check fails.

        Raises:
            InvalidIdError: If an identifier is not a valid UUID.
            EventNotFoundError, CompanyNotFoundError, PackNotFoundError: If a
                referenced entity does not exist.
            PartnershipAlreadyExistsError: If the company already registered to the event.
            ValidationError, ForbiddenError: If the option selections are invalid.
        """
        eid = parse_id(EventId, event_id, "event")
        company_id = parse_id(CompanyId, register.company_id, "company")
        pack_id = parse_id(PackId, register.pack_id, "pack")

        with self._store.atomic():
            require_event(self._store, eid)
            if self._store.get_company(company_id) is None:
                raise CompanyNotFoundError(company_id)
            pack = self._catalog.require_pack(eid, pack_id)
            if self._store.partnership_exists(eid, company_id):
                raise PartnershipAlreadyExistsError()

            choices = self._catalog.validate_selections(
                pack, register.option_selections, register.language
            )
            partnership_id = self._store.create_partnership(
                NewPartnership(
                    event_id=eid,
                    company_id=company_id,
                    pack_id=pack.id,
                    language=register.language,
                    contact_name=register.contact_name,
                    contact_role=register.contact_role,
                    phone=register.phone,
                )
            )
            self._store.replace_emails(partnership_id, register.emails)
            self._store.replace_options(partnership_id, pack.id, choices)

        logger.info(
            "Registered partnership %s for event %s with pack %s (%d options)",
            partnership_id,
            eid,
            pack.id,
            len(choices),
        )
        return partnership_id
