"""Legal document generation for partnerships.

A document is rendered from an immutable snapshot assembled in one pass.
Every precondition (legal fields, validated pack, translations) is checked
while building the snapshot, so nothing is rendered or stored when one fails.
"""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime, timedelta

from partnerships.domain import (
    Company,
    Event,
    EventId,
    Organisation,
    Partnership,
    PartnershipId,
)
from partnerships.domain.errors import (
    CompanyNotFoundError,
    InvalidContentTypeError,
    MissingLegalFieldsError,
    MissingTranslationError,
    RepresentativeNotFoundError,
)
from partnerships.gateways.interfaces import DocumentRenderer, ObjectStore
from partnerships.services.common import Clock, parse_id, require_event, require_partnership, utcnow
from partnerships.services.pricing_service import PricingService
from partnerships.services.validated_pack import ValidatedPackResolver
from partnerships.stores.interfaces import PartnershipStore

logger = logging.getLogger(__name__)

AGREEMENT = "agreement"
ASSIGNMENT = "assignment"

PDF_CONTENT_TYPE = "application/pdf"
MARKDOWN_CONTENT_TYPE = "text/markdown"

PAYMENT_DEADLINE_OFFSET = timedelta(days=30)
END_DATE_OFFSET = timedelta(days=30)

DEFAULT_LOCATION = "Lille, France"
DEFAULT_DATE_FORMAT = "%Y/%m/%d"


@dataclass(frozen=True)
class Contact:
    name: str
    role: str


@dataclass(frozen=True)
class OrganisationSnapshot:
    name: str
    head_office: str
    iban: str
    bic: str
    creation_location: str
    created_at: str
    published_at: str
    representative: Contact


@dataclass(frozen=True)
class EventSnapshot:
    name: str
    payment_deadline: str
    end_date: str


@dataclass(frozen=True)
class CompanySnapshot:
    name: str
    siret: str
    head_office: str


@dataclass(frozen=True)
class PartnershipSnapshot:
    amount: int
    options: tuple[str, ...]
    has_booth: bool
    contact: Contact


@dataclass(frozen=True)
class DocumentSnapshot:
    organisation: OrganisationSnapshot
    event: EventSnapshot
    company: CompanySnapshot
    partnership: PartnershipSnapshot
    created_at: str
    location: str


def _require_fields(entity: object, names: tuple[str, ...]) -> None:
    missing = [name for name in names if getattr(entity, name) is None]
    if missing:
        raise MissingLegalFieldsError(missing)


_ORGANISATION_FIELDS = (
    "head_office",
    "iban",
    "bic",
    "creation_location",
    "created_at",
    "published_at",
    "representative_role",
)

_COMPANY_FIELDS = ("siret", "address", "zip_code", "city", "country")


class DocumentService:
    """Generates the agreement and assignment documents of a partnership."""

    def __init__(
        self,
        store: PartnershipStore,
        resolver: ValidatedPackResolver,
        pricing: PricingService,
        renderer: DocumentRenderer,
        objects: ObjectStore,
        *,
        location: str = DEFAULT_LOCATION,
        date_format: str = DEFAULT_DATE_FORMAT,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._pricing = pricing
        self._renderer = renderer
        self._objects = objects
        self._location = location
        self._date_format = date_format
        self._clock = clock

    def _format(self, value: date | datetime) -> str:
        return value.strftime(self._date_format)

    def _organisation(self, organisation: Organisation) -> OrganisationSnapshot:
        _require_fields(organisation, _ORGANISATION_FIELDS)
        if not organisation.representative_name:
            raise RepresentativeNotFoundError()
        return OrganisationSnapshot(
            name=organisation.name,
            head_office=organisation.head_office,
            iban=organisation.iban,
            bic=organisation.bic,
            creation_location=organisation.creation_location,
            created_at=self._format(organisation.created_at),
            published_at=self._format(organisation.published_at),
            representative=Contact(
                name=organisation.representative_name,
                role=organisation.representative_role,
            ),
        )

    def _event(self, event: Event) -> EventSnapshot:
        return EventSnapshot(
            name=event.name,
            payment_deadline=self._format(event.ends_at - PAYMENT_DEADLINE_OFFSET),
            end_date=self._format(event.ends_at.date() + END_DATE_OFFSET),
        )

    @staticmethod
    def _company(company: Company) -> CompanySnapshot:
        _require_fields(company, _COMPANY_FIELDS)
        return CompanySnapshot(
            name=company.name,
            siret=company.siret,
            head_office=f"{company.address}, {company.zip_code} {company.city}, {company.country}",
        )

    def snapshot(self, event: Event, partnership: Partnership) -> DocumentSnapshot:
        """Assemble everything a document needs.

        Raises:
            MissingLegalFieldsError: If the organisation or company lacks legal fields.
            RepresentativeNotFoundError: If the organisation has no representative.
            ValidatedPackNotFoundError: If the partnership has no validated pack.
            MissingTranslationError: If an option has no name in the partnership language.
        """
        organisation = self._store.get_organisation(event.organisation_id)
        if organisation is None:
            raise MissingLegalFieldsError(["organisation"])
        company = self._store.get_company(partnership.company_id)
        if company is None:
            raise CompanyNotFoundError(partnership.company_id)

        organisation_snapshot = self._organisation(organisation)
        company_snapshot = self._company(company)

        validated = self._resolver.resolve(partnership)
        option_names = []
        for row in validated.options:
            translation = row.option.translation(partnership.language)
            if translation is None:
                raise MissingTranslationError(row.option.id, partnership.language)
            option_names.append(translation.name)

        return DocumentSnapshot(
            organisation=organisation_snapshot,
            event=self._event(event),
            company=company_snapshot,
            partnership=PartnershipSnapshot(
                amount=self._pricing.price(validated).amount.amount,
                options=tuple(option_names),
                has_booth=validated.pack.with_booth,
                contact=Contact(name=partnership.contact_name, role=partnership.contact_role),
            ),
            created_at=self._format(self._clock()),
            location=self._location,
        )

    def generate_agreement(self, event_id: str, partnership_id: str) -> str:
        return self._generate(event_id, partnership_id, AGREEMENT)

    def generate_assignment(self, event_id: str, partnership_id: str) -> str:
        return self._generate(event_id, partnership_id, ASSIGNMENT)

    def _generate(self, event_id: str, partnership_id: str, kind: str) -> str:
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            event = require_event(self._store, eid)
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            snapshot = self.snapshot(event, partnership)

            content = self._renderer.render(
                f"partnerships/{kind}/{partnership.language}.md", asdict(snapshot)
            )
            url = self._objects.upload(
                f"events/{eid}/partnerships/{pid}/{kind}.md", content, MARKDOWN_CONTENT_TYPE
            )
            if kind == AGREEMENT:
                partnership = replace(partnership, agreement_url=url)
            else:
                partnership = replace(partnership, assignment_url=url)
            self._store.save_partnership(partnership)

        logger.info("Generated %s for partnership %s", kind, pid)
        return url

    def upload_signed_agreement(
        self, event_id: str, partnership_id: str, content: bytes, content_type: str
    ) -> str:
        """Store the signed agreement PDF and record its URL.

        Raises:
            InvalidContentTypeError: If the file is not a PDF.
        """
        if content_type != PDF_CONTENT_TYPE:
            raise InvalidContentTypeError(content_type, PDF_CONTENT_TYPE)
        eid = parse_id(EventId, event_id, "event")
        pid = parse_id(PartnershipId, partnership_id, "partnership")
        with self._store.atomic():
            partnership = require_partnership(self._store, eid, pid, for_update=True)
            url = self._objects.upload(
                f"events/{eid}/partnerships/{pid}/signed-agreement.pdf", content, PDF_CONTENT_TYPE
            )
            self._store.save_partnership(replace(partnership, agreement_signed_url=url))

        logger.info("Stored signed agreement for partnership %s", pid)
        return url
