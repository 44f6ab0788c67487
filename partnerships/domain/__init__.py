from partnerships.domain.models import (
    Billing,
    Company,
    DeliveryResult,
    EmailHistory,
    Event,
    NewPartnership,
    OptionChoice,
    OptionTranslation,
    Organisation,
    Organiser,
    PackOption,
    Partnership,
    PartnershipOption,
    RecipientResult,
    SelectableValue,
    SponsoringOption,
    SponsoringPack,
    Suggestion,
    Ticket,
)
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

__all__ = [
    "Billing",
    "Company",
    "DeliveryResult",
    "EmailHistory",
    "Event",
    "NewPartnership",
    "OptionChoice",
    "OptionTranslation",
    "Organisation",
    "Organiser",
    "PackOption",
    "Partnership",
    "PartnershipOption",
    "RecipientResult",
    "SelectableValue",
    "SponsoringOption",
    "SponsoringPack",
    "Suggestion",
    "Ticket",
    "Capacity",
    "CompanyId",
    "DecisionStatus",
    "DeliveryStatus",
    "EventId",
    "InvoiceStatus",
    "Money",
    "OptionId",
    "OptionType",
    "PackId",
    "PartnershipId",
    "TicketId",
]
