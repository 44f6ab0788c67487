"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in partnerships/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from partnerships.domain.value_objects import (
    Capacity,
    CompanyId,
    DecisionStatus,
    DeliveryStatus,
    EventId,
    InvoiceStatus,
    Money,
    OptionId,
    OptionType,
    PackId,
    PartnershipId,
    TicketId,
)


@dataclass(frozen=True)
class Organisation:
    """Legal entity organising events and signing partnership documents."""

    id: UUID
    name: str
    head_office: str | None = None
    iban: str | None = None
    bic: str | None = None
    creation_location: str | None = None
    created_at: date | None = None
    published_at: date | None = None
    representative_name: str | None = None
    representative_role: str | None = None


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    organisation_id: UUID
    name: str
    starts_at: datetime
    ends_at: datetime


@dataclass(frozen=True)
class Company:
    """Domain representation of a sponsoring Company."""

    id: CompanyId
    name: str
    siret: str | None = None
    address: str | None = None
    zip_code: str | None = None
    city: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class SponsoringPack:
    """Domain representation of a SponsoringPack."""

    id: PackId
    event_id: EventId
    name: str
    base_price: Money
    max_quantity: Capacity | None = None
    with_booth: bool = False

    @property
    def ticket_capacity(self) -> Capacity:
        """A pack without a configured ceiling grants no tickets."""
        return self.max_quantity or Capacity(0)


@dataclass(frozen=True)
class OptionTranslation:
    language: str
    name: str
    description: str | None = None


@dataclass(frozen=True)
class SelectableValue:
    id: UUID
    value: str
    price: Money


@dataclass(frozen=True)
class SponsoringOption:
    """Domain representation of a SponsoringOption with its translations."""

    id: OptionId
    event_id: EventId
    option_type: OptionType = OptionType.TEXT
    price: Money | None = None
    fixed_quantity: int | None = None
    translations: tuple[OptionTranslation, ...] = ()
    selectable_values: tuple[SelectableValue, ...] = ()

    def translation(self, language: str) -> OptionTranslation | None:
        return next((t for t in self.translations if t.language == language), None)

    def selectable_value(self, value_id: UUID) -> SelectableValue | None:
        return next((v for v in self.selectable_values if v.id == value_id), None)


@dataclass(frozen=True)
class PackOption:
    """Association between a pack and one of its options."""

    option_id: OptionId
    required: bool


@dataclass(frozen=True)
class OptionChoice:
    """A validated selection, ready to be stored against a pack."""

    option_id: OptionId
    selected_quantity: int | None = None
    selected_value_id: UUID | None = None


@dataclass(frozen=True)
class PartnershipOption:
    """An option stored for a partnership against one of its packs."""

    partnership_id: PartnershipId
    pack_id: PackId
    option: SponsoringOption
    selected_quantity: int | None = None
    selected_value: SelectableValue | None = None
    price_override: Money | None = None
    suggested: bool = False

    @property
    def effective_price(self) -> Money | None:
        if self.price_override is not None:
            return self.price_override
        return self.option.price


@dataclass(frozen=True)
class Suggestion:
    """Alternate pack proposed by the organisers, negotiated on its own track."""

    pack_id: PackId | None = None
    sent_at: datetime | None = None
    approved_at: datetime | None = None
    declined_at: datetime | None = None

    @property
    def is_approved(self) -> bool:
        return self.pack_id is not None and _later(self.approved_at, self.declined_at)


@dataclass(frozen=True)
class Organiser:
    id: int
    email: str
    display_name: str = ""


@dataclass(frozen=True)
class Partnership:
    """Aggregate root for one company's sponsorship of one event."""

    id: PartnershipId
    event_id: EventId
    company_id: CompanyId
    language: str
    selected_pack_id: PackId | None = None
    contact_name: str = ""
    contact_role: str = ""
    phone: str | None = None
    validated_at: datetime | None = None
    declined_at: datetime | None = None
    suggestion: Suggestion = field(default_factory=Suggestion)
    organiser: Organiser | None = None
    pack_price_override: Money | None = None
    booth_location: str | None = None
    agreement_url: str | None = None
    agreement_signed_url: str | None = None
    assignment_url: str | None = None
    communication_publication_date: datetime | None = None
    communication_support_url: str | None = None
    created_at: datetime | None = None

    @property
    def decision_status(self) -> DecisionStatus:
        if self.validated_at is None and self.declined_at is None:
            return DecisionStatus.PENDING
        if _later(self.validated_at, self.declined_at):
            return DecisionStatus.VALIDATED
        return DecisionStatus.DECLINED

    def validated_pack_id(self) -> PackId | None:
        """Return the pack that is authoritative for pricing, tickets and documents.

        An approved suggestion wins over the selected pack as soon as it is
        approved. Otherwise the selected pack counts once the partnership has
        been validated. Every consumer must go through this method.
        """
        if self.suggestion.is_approved:
            return self.suggestion.pack_id
        if self.selected_pack_id is not None and self.decision_status is DecisionStatus.VALIDATED:
            return self.selected_pack_id
        return None


@dataclass(frozen=True)
class NewPartnership:
    """Data required to create a Partnership row."""

    event_id: EventId
    company_id: CompanyId
    pack_id: PackId
    language: str
    contact_name: str
    contact_role: str
    phone: str | None = None


@dataclass(frozen=True)
class Billing:
    """Billing record of a partnership, one per event and partnership."""

    id: UUID
    event_id: EventId
    partnership_id: PartnershipId
    name: str
    contact_first_name: str
    contact_last_name: str
    contact_email: str
    po: str | None = None
    status: InvoiceStatus = InvoiceStatus.PENDING


@dataclass(frozen=True)
class Ticket:
    """Ticket entitlement recorded after purchase through the ticketing provider."""

    id: TicketId
    partnership_id: PartnershipId
    order_id: str
    external_id: str
    first_name: str
    last_name: str
    email: str
    url: str | None = None


@dataclass(frozen=True)
class RecipientResult:
    email: str
    status: DeliveryStatus


@dataclass(frozen=True)
class DeliveryResult:
    """What the notification gateway reports after sending one message."""

    sender_email: str
    subject: str
    body: str
    recipients: tuple[RecipientResult, ...]

    @property
    def overall_status(self) -> DeliveryStatus:
        statuses = {recipient.status for recipient in self.recipients}
        if statuses == {DeliveryStatus.SENT}:
            return DeliveryStatus.SENT
        if DeliveryStatus.SENT in statuses:
            return DeliveryStatus.PARTIAL
        return DeliveryStatus.FAILED


@dataclass(frozen=True)
class EmailHistory:
    """A message sent to a partnership, kept after the partnership is deleted."""

    id: UUID
    partnership_id: PartnershipId
    sent_at: datetime
    sender_email: str
    subject: str
    body: str
    overall_status: DeliveryStatus
    recipients: tuple[RecipientResult, ...]


def _later(first: datetime | None, second: datetime | None) -> bool:
    """Compare two optional timestamps, a missing one being the earliest."""
    if first is None:
        return False
    if second is None:
        return True
    return first > second
