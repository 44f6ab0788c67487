"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from partnerships.domain import (
    Billing,
    Company,
    CompanyId,
    DeliveryResult,
    EmailHistory,
    Event,
    EventId,
    Money,
    NewPartnership,
    OptionChoice,
    OptionId,
    Organisation,
    Organiser,
    PackId,
    PackOption,
    Partnership,
    PartnershipId,
    PartnershipOption,
    SponsoringOption,
    SponsoringPack,
    Ticket,
    TicketId,
)


@dataclass(frozen=True)
class PartnershipFilters:
    """Criteria shared by partnership listings and email destinations."""

    pack_id: PackId | None = None
    validated: bool | None = None
    suggestion: bool | None = None
    paid: bool | None = None
    agreement_generated: bool | None = None
    agreement_signed: bool | None = None
    organiser_email: str | None = None


@dataclass(frozen=True)
class NewTicket:
    partnership_id: PartnershipId
    order_id: str
    external_id: str
    first_name: str
    last_name: str
    email: str
    url: str | None = None


class CatalogStore(ABC):
    """Interface for read access to the sponsoring catalog."""

    @abstractmethod
    def get_pack(self, event_id: EventId, pack_id: PackId) -> SponsoringPack | None:
        """Return a pack of the event, or None if not found."""
        ...

    @abstractmethod
    def list_pack_options(self, pack_id: PackId) -> list[PackOption]:
        """Return every option associated with the pack and its required flag."""
        ...

    @abstractmethod
    def get_options(self, option_ids: Sequence[OptionId]) -> dict[OptionId, SponsoringOption]:
        """Return the requested options with translations, keyed by id. Missing ids are absent."""
        ...


class PartnershipStore(ABC):
    """Interface for the partnership aggregate and the entities it references."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager making every write inside it all-or-nothing."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        ...

    @abstractmethod
    def get_organisation(self, organisation_id: UUID) -> Organisation | None:
        ...

    @abstractmethod
    def get_company(self, company_id: CompanyId) -> Company | None:
        ...

    @abstractmethod
    def find_organiser(self, email: str) -> Organiser | None:
        """Return the internal user with this email, or None."""
        ...

    @abstractmethod
    def get_partnership(
        self, event_id: EventId, partnership_id: PartnershipId, *, for_update: bool = False
    ) -> Partnership | None:
        """Return a partnership scoped to the event, or None if not found."""
        ...

    @abstractmethod
    def partnership_exists(self, event_id: EventId, company_id: CompanyId) -> bool:
        ...

    @abstractmethod
    def create_partnership(self, data: NewPartnership) -> PartnershipId:
        """Insert a partnership.

        Raises:
            PartnershipAlreadyExistsError: If the company already has one for the event.
        """
        ...

    @abstractmethod
    def save_partnership(self, partnership: Partnership) -> None:
        """Persist the mutable fields of a partnership.

        Raises:
            BoothLocationTakenError: If the booth location is held by another partnership.
        """
        ...

    @abstractmethod
    def delete_partnership(self, partnership_id: PartnershipId) -> None:
        ...

    @abstractmethod
    def list_partnerships(
        self, event_id: EventId, filters: PartnershipFilters, descending: bool = False
    ) -> list[Partnership]:
        """Return partnerships of an event matching the filters, ordered by creation."""
        ...

    @abstractmethod
    def list_partnerships_by_company(self, company_id: CompanyId) -> list[Partnership]:
        """Return every partnership of a company, newest first."""
        ...

    @abstractmethod
    def find_by_booth_location(
        self, event_id: EventId, location: str, exclude: PartnershipId
    ) -> Partnership | None:
        """Return another partnership of the event holding the booth location."""
        ...

    @abstractmethod
    def list_emails(self, partnership_id: PartnershipId) -> list[str]:
        ...

    @abstractmethod
    def replace_emails(self, partnership_id: PartnershipId, emails: Sequence[str]) -> None:
        ...

    @abstractmethod
    def list_options(
        self, partnership_id: PartnershipId, pack_id: PackId, *, suggested: bool = False
    ) -> list[PartnershipOption]:
        """Return the options stored for the partnership against one pack.

        ``suggested`` picks the suggestion set instead of the registrant selection.
        """
        ...

    @abstractmethod
    def replace_options(
        self,
        partnership_id: PartnershipId,
        pack_id: PackId,
        choices: Sequence[OptionChoice],
        *,
        suggested: bool = False,
    ) -> None:
        """Delete every option of the set, whatever its pack, then store the new choices."""
        ...

    @abstractmethod
    def set_option_price_override(
        self,
        partnership_id: PartnershipId,
        pack_id: PackId,
        option_id: OptionId,
        price: Money | None,
        *,
        suggested: bool = False,
    ) -> None:
        ...

    @abstractmethod
    def add_email_history(
        self, partnership_id: PartnershipId, sent_at: datetime, delivery: DeliveryResult
    ) -> EmailHistory:
        ...

    @abstractmethod
    def list_email_history(
        self, partnership_id: PartnershipId, offset: int, limit: int
    ) -> tuple[list[EmailHistory], int]:
        """Return one page of messages, newest first, and the total count."""
        ...


class BillingStore(ABC):
    """Interface for partnership billing records."""

    @abstractmethod
    def get_billing(self, event_id: EventId, partnership_id: PartnershipId) -> Billing | None:
        ...

    @abstractmethod
    def save_billing(self, billing: Billing) -> Billing:
        """Insert or update the billing record identified by billing.id."""
        ...


class TicketStore(ABC):
    """Interface for tickets issued to partnerships."""

    @abstractmethod
    def count_tickets(self, partnership_id: PartnershipId) -> int:
        ...

    @abstractmethod
    def list_tickets(self, partnership_id: PartnershipId) -> list[Ticket]:
        """Return tickets ordered by issuance."""
        ...

    @abstractmethod
    def get_ticket(self, partnership_id: PartnershipId, ticket_id: TicketId) -> Ticket | None:
        ...

    @abstractmethod
    def create_tickets(self, tickets: Sequence[NewTicket]) -> list[Ticket]:
        ...

    @abstractmethod
    def update_holder(self, ticket_id: TicketId, first_name: str, last_name: str) -> Ticket:
        ...
