"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class Identifier:
    """Opaque UUID identifier; subclasses name the entity they point to."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId(Identifier):
    """Unique identifier for an Event."""


@dataclass(frozen=True)
class CompanyId(Identifier):
    """Unique identifier for a Company."""


@dataclass(frozen=True)
class PackId(Identifier):
    """Unique identifier for a SponsoringPack."""


@dataclass(frozen=True)
class OptionId(Identifier):
    """Unique identifier for a SponsoringOption."""


@dataclass(frozen=True)
class PartnershipId(Identifier):
    """Unique identifier for a Partnership."""


@dataclass(frozen=True)
class TicketId(Identifier):
    """Unique identifier for a partnership Ticket."""


@dataclass(frozen=True)
class Money:
    """Amount in the smallest currency unit."""

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def remaining(self, used: int) -> int:
        return max(self.value - used, 0)


class InvoiceStatus(Enum):
    """Billing status reported by the invoicing provider. Only PAID unlocks tickets."""

    PENDING = "PENDING"
    SENT = "SENT"
    PAID = "PAID"


class OptionType(Enum):
    TEXT = "text"
    TYPED_QUANTITATIVE = "typed_quantitative"
    TYPED_NUMBER = "typed_number"
    TYPED_SELECTABLE = "typed_selectable"


class DecisionStatus(Enum):
    PENDING = "pending"
    VALIDATED = "validated"
    DECLINED = "declined"


class DeliveryStatus(Enum):
    """Email outcome. PARTIAL only describes a message, never a single recipient."""

    SENT = "SENT"
    FAILED = "FAILED"
    PARTIAL = "PARTIAL"
