"""Domain error codes for the partnerships module.

Every error belongs to one of four families the HTTP layer maps to a status:
NotFoundError, ValidationError, ForbiddenError and ConflictError.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    COMPANY_NOT_FOUND = "COMPANY_NOT_FOUND"
    PACK_NOT_FOUND = "PACK_NOT_FOUND"
    OPTION_NOT_FOUND = "OPTION_NOT_FOUND"
    PARTNERSHIP_NOT_FOUND = "PARTNERSHIP_NOT_FOUND"
    SUGGESTION_NOT_FOUND = "SUGGESTION_NOT_FOUND"
    VALIDATED_PACK_NOT_FOUND = "VALIDATED_PACK_NOT_FOUND"
    BILLING_NOT_FOUND = "BILLING_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    REPRESENTATIVE_NOT_FOUND = "REPRESENTATIVE_NOT_FOUND"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    NO_MATCHING_PARTNERSHIPS = "NO_MATCHING_PARTNERSHIPS"

    INVALID_ID = "INVALID_ID"
    INVALID_SELECTION = "INVALID_SELECTION"
    OPTION_NOT_IN_PACK = "OPTION_NOT_IN_PACK"
    INVALID_PRICE = "INVALID_PRICE"
    INVALID_INVOICE_STATUS = "INVALID_INVOICE_STATUS"
    INVALID_TICKET_ORDER = "INVALID_TICKET_ORDER"
    INVALID_CONTENT_TYPE = "INVALID_CONTENT_TYPE"
    INVALID_PAGE = "INVALID_PAGE"

    OPTION_NOT_OPTIONAL = "OPTION_NOT_OPTIONAL"
    TRANSLATION_NOT_FOUND = "TRANSLATION_NOT_FOUND"
    INVALID_SELECTED_VALUE = "INVALID_SELECTED_VALUE"
    TICKET_QUOTA_EXCEEDED = "TICKET_QUOTA_EXCEEDED"
    INVOICE_NOT_PAID = "INVOICE_NOT_PAID"
    BOOTH_LOCATION_TAKEN = "BOOTH_LOCATION_TAKEN"
    MISSING_LEGAL_FIELDS = "MISSING_LEGAL_FIELDS"

    PARTNERSHIP_ALREADY_EXISTS = "PARTNERSHIP_ALREADY_EXISTS"
    PARTNERSHIP_NOT_PENDING = "PARTNERSHIP_NOT_PENDING"
    DECISION_ALREADY_TAKEN = "DECISION_ALREADY_TAKEN"
    PRICING_WITHOUT_PACK = "PRICING_WITHOUT_PACK"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code, user-safe message and structured details."""

    code: ErrorCode
    message: str
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced entity does not exist in the given scope."""


class ValidationError(DomainError):
    """Input is malformed or semantically invalid."""


class ForbiddenError(DomainError):
    """A business-rule gate refused well-formed input."""


class ConflictError(DomainError):
    """A uniqueness or state-exclusivity rule would be violated."""


def _ids(values: Iterable[object]) -> list[str]:
    return [str(value) for value in values]


# Not found


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event {event_id} not found",
            meta={"event_id": str(event_id)},
        )


class CompanyNotFoundError(NotFoundError):
    def __init__(self, company_id: object) -> None:
        super().__init__(
            code=ErrorCode.COMPANY_NOT_FOUND,
            message=f"Company {company_id} not found",
            meta={"company_id": str(company_id)},
        )


class PackNotFoundError(NotFoundError):
    def __init__(self, pack_id: object) -> None:
        super().__init__(
            code=ErrorCode.PACK_NOT_FOUND,
            message=f"Pack {pack_id} not found",
            meta={"pack_id": str(pack_id)},
        )


class OptionNotFoundError(NotFoundError):
    def __init__(self, option_ids: Iterable[object]) -> None:
        ids = _ids(option_ids)
        super().__init__(
            code=ErrorCode.OPTION_NOT_FOUND,
            message=f"Options not found: {ids}",
            meta={"option_ids": ids},
        )


class PartnershipNotFoundError(NotFoundError):
    def __init__(self, partnership_id: object) -> None:
        super().__init__(
            code=ErrorCode.PARTNERSHIP_NOT_FOUND,
            message="Partnership not found",
            meta={"partnership_id": str(partnership_id)},
        )


class SuggestionNotFoundError(NotFoundError):
    def __init__(self, partnership_id: object) -> None:
        super().__init__(
            code=ErrorCode.SUGGESTION_NOT_FOUND,
            message=f"No suggestion was sent for partnership {partnership_id}",
            meta={"partnership_id": str(partnership_id)},
        )


class ValidatedPackNotFoundError(NotFoundError):
    def __init__(self, partnership_id: object) -> None:
        super().__init__(
            code=ErrorCode.VALIDATED_PACK_NOT_FOUND,
            message=f"No validated pack found for partnership {partnership_id}",
            meta={"partnership_id": str(partnership_id)},
        )


class BillingNotFoundError(NotFoundError):
    def __init__(self, partnership_id: object) -> None:
        super().__init__(
            code=ErrorCode.BILLING_NOT_FOUND,
            message=f"Billing not found for partnership {partnership_id}",
            meta={"partnership_id": str(partnership_id)},
        )


class TicketNotFoundError(NotFoundError):
    def __init__(self, ticket_id: object) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message=f"Ticket {ticket_id} not found",
            meta={"ticket_id": str(ticket_id)},
        )


class UserNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.USER_NOT_FOUND, message="User not found")


class RepresentativeNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REPRESENTATIVE_NOT_FOUND,
            message="Representative not found",
        )


class TemplateNotFoundError(NotFoundError):
    def __init__(self, template_name: str) -> None:
        super().__init__(
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            message=f"Document template {template_name} not found",
            meta={"template": template_name},
        )


class NoMatchingPartnershipsError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_MATCHING_PARTNERSHIPS,
            message="No partnerships match the provided filters",
        )


# Validation


class InvalidIdError(ValidationError):
    def __init__(self, kind: str, value: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID format",
            meta={"kind": kind, "value": str(value)},
        )


class InvalidSelectionError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SELECTION, message=reason)


class OptionNotInPackError(ValidationError):
    def __init__(self, option_ids: Iterable[object]) -> None:
        ids = _ids(option_ids)
        super().__init__(
            code=ErrorCode.OPTION_NOT_IN_PACK,
            message=f"Some options are not associated with the selected pack: {ids}",
            meta={"option_ids": ids},
        )


class InvalidPriceError(ValidationError):
    def __init__(self, price: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PRICE,
            message=f"Price override must be a non-negative amount, got {price}",
            meta={"price": str(price)},
        )


class InvalidInvoiceStatusError(ValidationError):
    def __init__(self, status: str, allowed: Iterable[str]) -> None:
        allowed = list(allowed)
        super().__init__(
            code=ErrorCode.INVALID_INVOICE_STATUS,
            message=f"Invoice status {status} is not one of {allowed}",
            meta={"status": status, "allowed": allowed},
        )


class InvalidTicketOrderError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_TICKET_ORDER, message=reason)


class InvalidContentTypeError(ValidationError):
    def __init__(self, content_type: str, expected: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CONTENT_TYPE,
            message=f"Invalid file type {content_type}, expected {expected}",
            meta={"content_type": content_type, "expected": expected},
        )


class InvalidPageError(ValidationError):
    def __init__(self, page: int, page_size: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAGE,
            message=f"Page {page} of size {page_size} is invalid, both must be at least 1",
            meta={"page": page, "page_size": page_size},
        )


# Forbidden


class OptionNotOptionalError(ForbiddenError):
    def __init__(self, option_ids: Iterable[object]) -> None:
        ids = _ids(option_ids)
        super().__init__(
            code=ErrorCode.OPTION_NOT_OPTIONAL,
            message=f"Some options are not optional in the selected pack: {ids}",
            meta={"option_ids": ids},
        )


class MissingTranslationError(ForbiddenError):
    def __init__(self, option_id: object, language: str) -> None:
        super().__init__(
            code=ErrorCode.TRANSLATION_NOT_FOUND,
            message=f"Option {option_id} does not have a translation for language {language}",
            meta={"option_id": str(option_id), "language": language},
        )


class InvalidSelectedValueError(ForbiddenError):
    def __init__(self, option_id: object, value_id: object, valid: Iterable[str]) -> None:
        valid = list(valid)
        super().__init__(
            code=ErrorCode.INVALID_SELECTED_VALUE,
            message=(
                f"Selected value ID '{value_id}' is not valid for option {option_id}. "
                f"Valid values: {', '.join(valid)}"
            ),
            meta={"option_id": str(option_id), "selected_value_id": str(value_id)},
        )


class TicketQuotaExceededError(ForbiddenError):
    def __init__(self, available: int, requested: int) -> None:
        super().__init__(
            code=ErrorCode.TICKET_QUOTA_EXCEEDED,
            message=(
                "Not enough tickets in the validated pack: "
                f"{available} available, {requested} requested"
            ),
            meta={"available_tickets": available, "requested_tickets": requested},
        )


class InvoiceNotPaidError(ForbiddenError):
    def __init__(self, status: str, required: str) -> None:
        super().__init__(
            code=ErrorCode.INVOICE_NOT_PAID,
            message=f"Invoice status {status} is not {required}",
            meta={"invoice_status": status, "required_status": required},
        )


class BoothLocationTakenError(ForbiddenError):
    def __init__(self, location: str, company_name: str) -> None:
        super().__init__(
            code=ErrorCode.BOOTH_LOCATION_TAKEN,
            message=(
                f"Location '{location}' is already assigned to another partnership "
                f"for this event by company '{company_name}'"
            ),
            meta={"location": location, "company_name": company_name},
        )


class MissingLegalFieldsError(ForbiddenError):
    def __init__(self, fields: Iterable[str]) -> None:
        fields = list(fields)
        super().__init__(
            code=ErrorCode.MISSING_LEGAL_FIELDS,
            message=f"Fields {', '.join(fields)} are required to perform this operation.",
            meta={"fields": fields},
        )


# Conflict


class PartnershipAlreadyExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PARTNERSHIP_ALREADY_EXISTS,
            message="Company already subscribed to this event",
        )


class PartnershipNotPendingError(ConflictError):
    def __init__(self, partnership_id: object) -> None:
        super().__init__(
            code=ErrorCode.PARTNERSHIP_NOT_PENDING,
            message="Only pending partnerships can be deleted",
            meta={"partnership_id": str(partnership_id)},
        )


class DecisionAlreadyTakenError(ConflictError):
    def __init__(self, partnership_id: object, status: str) -> None:
        super().__init__(
            code=ErrorCode.DECISION_ALREADY_TAKEN,
            message=f"Partnership is already {status}",
            meta={"partnership_id": str(partnership_id), "status": status},
        )


class PricingWithoutPackError(ConflictError):
    def __init__(self, partnership_id: object) -> None:
        super().__init__(
            code=ErrorCode.PRICING_WITHOUT_PACK,
            message="Cannot override prices of a partnership without a validated pack",
            meta={"partnership_id": str(partnership_id)},
        )
