"""Django ORM implementation of the partnership stores."""

import logging
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q

from partnerships import models
from partnerships.domain import (
    Billing,
    Capacity,
    Company,
    CompanyId,
    DeliveryResult,
    DeliveryStatus,
    EmailHistory,
    Event,
    EventId,
    InvoiceStatus,
    Money,
    NewPartnership,
    OptionChoice,
    OptionId,
    OptionTranslation,
    OptionType,
    Organisation,
    Organiser,
    PackId,
    PackOption,
    Partnership,
    PartnershipId,
    PartnershipOption,
    RecipientResult,
    SelectableValue,
    SponsoringOption,
    SponsoringPack,
    Suggestion,
    Ticket,
    TicketId,
)
from partnerships.domain.errors import (
    BoothLocationTakenError,
    PartnershipAlreadyExistsError,
    TicketNotFoundError,
)
from partnerships.stores.interfaces import (
    BillingStore,
    CatalogStore,
    NewTicket,
    PartnershipFilters,
    PartnershipStore,
    TicketStore,
)

logger = logging.getLogger(__name__)


def _money(amount: int | None) -> Money | None:
    return Money(amount) if amount is not None else None


def _amount(money: Money | None) -> int | None:
    return money.amount if money is not None else None


def _to_pack(obj: models.SponsoringPack) -> SponsoringPack:
    return SponsoringPack(
        id=PackId(obj.id),
        event_id=EventId(obj.event_id),
        name=obj.name,
        base_price=Money(obj.base_price),
        max_quantity=Capacity(obj.max_quantity) if obj.max_quantity is not None else None,
        with_booth=obj.with_booth,
    )


def _to_selectable_value(obj: models.SelectableValue) -> SelectableValue:
    return SelectableValue(id=obj.id, value=obj.value, price=Money(obj.price))


def _to_option(obj: models.SponsoringOption) -> SponsoringOption:
    return SponsoringOption(
        id=OptionId(obj.id),
        event_id=EventId(obj.event_id),
        option_type=OptionType(obj.option_type),
        price=_money(obj.price),
        fixed_quantity=obj.fixed_quantity,
        translations=tuple(
            OptionTranslation(language=t.language, name=t.name, description=t.description)
            for t in obj.translations.all()
        ),
        selectable_values=tuple(_to_selectable_value(v) for v in obj.selectable_values.all()),
    )


def _to_partnership(obj: models.Partnership) -> Partnership:
    organiser = None
    if obj.organiser is not None:
        organiser = Organiser(
            id=obj.organiser.pk,
            email=obj.organiser.email,
            display_name=obj.organiser.get_full_name(),
        )
    return Partnership(
        id=PartnershipId(obj.id),
        event_id=EventId(obj.event_id),
        company_id=CompanyId(obj.company_id),
        language=obj.language,
        selected_pack_id=PackId(obj.selected_pack_id) if obj.selected_pack_id else None,
        contact_name=obj.contact_name,
        contact_role=obj.contact_role,
        phone=obj.phone,
        validated_at=obj.validated_at,
        declined_at=obj.declined_at,
        suggestion=Suggestion(
            pack_id=PackId(obj.suggestion_pack_id) if obj.suggestion_pack_id else None,
            sent_at=obj.suggestion_sent_at,
            approved_at=obj.suggestion_approved_at,
            declined_at=obj.suggestion_declined_at,
        ),
        organiser=organiser,
        pack_price_override=_money(obj.pack_price_override),
        booth_location=obj.booth_location,
        agreement_url=obj.agreement_url,
        agreement_signed_url=obj.agreement_signed_url,
        assignment_url=obj.assignment_url,
        communication_publication_date=obj.communication_publication_date,
        communication_support_url=obj.communication_support_url,
        created_at=obj.created_at,
    )


def _to_billing(obj: models.Billing) -> Billing:
    return Billing(
        id=obj.id,
        event_id=EventId(obj.event_id),
        partnership_id=PartnershipId(obj.partnership_id),
        name=obj.name,
        contact_first_name=obj.contact_first_name,
        contact_last_name=obj.contact_last_name,
        contact_email=obj.contact_email,
        po=obj.po,
        status=InvoiceStatus(obj.status),
    )


def _to_ticket(obj: models.PartnershipTicket) -> Ticket:
    return Ticket(
        id=TicketId(obj.id),
        partnership_id=PartnershipId(obj.partnership_id),
        order_id=obj.order_id,
        external_id=obj.external_id,
        first_name=obj.first_name,
        last_name=obj.last_name,
        email=obj.email,
        url=obj.url,
    )


def _to_email_history(obj: models.PartnershipEmailHistory) -> EmailHistory:
    return EmailHistory(
        id=obj.id,
        partnership_id=PartnershipId(obj.partnership_id),
        sent_at=obj.sent_at,
        sender_email=obj.sender_email,
        subject=obj.subject,
        body=obj.body,
        overall_status=DeliveryStatus(obj.overall_status),
        recipients=tuple(
            RecipientResult(email=row.email, status=DeliveryStatus(row.status))
            for row in obj.recipients.all()
        ),
    )


class DjangoCatalogStore(CatalogStore):
    """Catalog store backed by Django ORM."""

    def get_pack(self, event_id: EventId, pack_id: PackId) -> SponsoringPack | None:
        obj = models.SponsoringPack.objects.filter(id=pack_id.value, event_id=event_id.value).first()
        return _to_pack(obj) if obj is not None else None

    def list_pack_options(self, pack_id: PackId) -> list[PackOption]:
        rows = models.PackOption.objects.filter(pack_id=pack_id.value)
        return [PackOption(option_id=OptionId(row.option_id), required=row.required) for row in rows]

    def get_options(self, option_ids: Sequence[OptionId]) -> dict[OptionId, SponsoringOption]:
        queryset = models.SponsoringOption.objects.filter(
            id__in=[option_id.value for option_id in option_ids]
        ).prefetch_related("translations", "selectable_values")
        return {OptionId(obj.id): _to_option(obj) for obj in queryset}


class DjangoPartnershipStore(PartnershipStore):
    """Partnership store backed by Django ORM."""

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def get_event(self, event_id: EventId) -> Event | None:
        obj = models.Event.objects.filter(id=event_id.value).first()
        if obj is None:
            return None
        return Event(
            id=EventId(obj.id),
            organisation_id=obj.organisation_id,
            name=obj.name,
            starts_at=obj.starts_at,
            ends_at=obj.ends_at,
        )

    def get_organisation(self, organisation_id: UUID) -> Organisation | None:
        obj = models.Organisation.objects.filter(id=organisation_id).first()
        if obj is None:
            return None
        return Organisation(
            id=obj.id,
            name=obj.name,
            head_office=obj.head_office,
            iban=obj.iban,
            bic=obj.bic,
            creation_location=obj.creation_location,
            created_at=obj.created_at,
            published_at=obj.published_at,
            representative_name=obj.representative_name,
            representative_role=obj.representative_role,
        )

    def get_company(self, company_id: CompanyId) -> Company | None:
        obj = models.Company.objects.filter(id=company_id.value).first()
        if obj is None:
            return None
        return Company(
            id=CompanyId(obj.id),
            name=obj.name,
            siret=obj.siret,
            address=obj.address,
            zip_code=obj.zip_code,
            city=obj.city,
            country=obj.country,
        )

    def find_organiser(self, email: str) -> Organiser | None:
        user = get_user_model().objects.filter(email__iexact=email).first()
        if user is None:
            return None
        return Organiser(id=user.pk, email=user.email, display_name=user.get_full_name())

    def _partnerships(self):
        return models.Partnership.objects.select_related("organiser")

    def get_partnership(
        self, event_id: EventId, partnership_id: PartnershipId, *, for_update: bool = False
    ) -> Partnership | None:
        queryset = self._partnerships().filter(id=partnership_id.value, event_id=event_id.value)
        if for_update:
            # Lock the root row only; the organiser join is nullable.
            queryset = queryset.select_for_update(of=("self",))
        obj = queryset.first()
        if obj is None:
            return None
        return _to_partnership(obj)

    def partnership_exists(self, event_id: EventId, company_id: CompanyId) -> bool:
        return models.Partnership.objects.filter(
            event_id=event_id.value, company_id=company_id.value
        ).exists()

    def create_partnership(self, data: NewPartnership) -> PartnershipId:
        try:
            with transaction.atomic():
                obj = models.Partnership.objects.create(
                    event_id=data.event_id.value,
                    company_id=data.company_id.value,
                    selected_pack_id=data.pack_id.value,
                    language=data.language,
                    contact_name=data.contact_name,
                    contact_role=data.contact_role,
                    phone=data.phone,
                )
        except IntegrityError as exc:
            raise PartnershipAlreadyExistsError() from exc
        return PartnershipId(obj.id)

    def save_partnership(self, partnership: Partnership) -> None:
        fields = {
            "selected_pack_id": partnership.selected_pack_id.value
            if partnership.selected_pack_id
            else None,
            "contact_name": partnership.contact_name,
            "contact_role": partnership.contact_role,
            "language": partnership.language,
            "phone": partnership.phone,
            "validated_at": partnership.validated_at,
            "declined_at": partnership.declined_at,
            "suggestion_pack_id": partnership.suggestion.pack_id.value
            if partnership.suggestion.pack_id
            else None,
            "suggestion_sent_at": partnership.suggestion.sent_at,
            "suggestion_approved_at": partnership.suggestion.approved_at,
            "suggestion_declined_at": partnership.suggestion.declined_at,
            "organiser_id": partnership.organiser.id if partnership.organiser else None,
            "pack_price_override": _amount(partnership.pack_price_override),
            "booth_location": partnership.booth_location,
            "agreement_url": partnership.agreement_url,
            "agreement_signed_url": partnership.agreement_signed_url,
            "assignment_url": partnership.assignment_url,
            "communication_publication_date": partnership.communication_publication_date,
            "communication_support_url": partnership.communication_support_url,
        }
        try:
            with transaction.atomic():
                models.Partnership.objects.filter(id=partnership.id.value).update(**fields)
        except IntegrityError as exc:
            holder = None
            if partnership.booth_location is not None:
                holder = self.find_by_booth_location(
                    partnership.event_id, partnership.booth_location, partnership.id
                )
            if holder is None:
                raise
            logger.warning("Booth location conflict on write for partnership %s", partnership.id)
            raise BoothLocationTakenError(
                partnership.booth_location, self._company_name(holder)
            ) from exc

    def _company_name(self, partnership: Partnership) -> str:
        return models.Company.objects.values_list("name", flat=True).get(
            id=partnership.company_id.value
        )

    def delete_partnership(self, partnership_id: PartnershipId) -> None:
        models.Partnership.objects.filter(id=partnership_id.value).delete()

    def list_partnerships(
        self, event_id: EventId, filters: PartnershipFilters, descending: bool = False
    ) -> list[Partnership]:
        queryset = self._partnerships().filter(event_id=event_id.value)
        if filters.pack_id is not None:
            queryset = queryset.filter(selected_pack_id=filters.pack_id.value)
        if filters.validated is not None:
            queryset = queryset.filter(validated_at__isnull=not filters.validated)
        if filters.suggestion is not None:
            queryset = queryset.filter(suggestion_pack__isnull=not filters.suggestion)
        if filters.agreement_generated is not None:
            queryset = queryset.filter(agreement_url__isnull=not filters.agreement_generated)
        if filters.agreement_signed is not None:
            queryset = queryset.filter(agreement_signed_url__isnull=not filters.agreement_signed)
        if filters.organiser_email is not None:
            queryset = queryset.filter(organiser__email__iexact=filters.organiser_email)
        if filters.paid is not None:
            paid = Q(billing__status=models.Billing.Status.PAID)
            queryset = queryset.filter(paid) if filters.paid else queryset.exclude(paid)
        queryset = queryset.order_by("-created_at" if descending else "created_at")
        return [_to_partnership(obj) for obj in queryset]

    def list_partnerships_by_company(self, company_id: CompanyId) -> list[Partnership]:
        queryset = self._partnerships().filter(company_id=company_id.value).order_by("-created_at")
        return [_to_partnership(obj) for obj in queryset]

    def find_by_booth_location(
        self, event_id: EventId, location: str, exclude: PartnershipId
    ) -> Partnership | None:
        obj = (
            self._partnerships()
            .filter(event_id=event_id.value, booth_location=location)
            .exclude(id=exclude.value)
            .first()
        )
        return _to_partnership(obj) if obj is not None else None

    def list_emails(self, partnership_id: PartnershipId) -> list[str]:
        return list(
            models.PartnershipEmail.objects.filter(partnership_id=partnership_id.value)
            .order_by("id")
            .values_list("email", flat=True)
        )

    def replace_emails(self, partnership_id: PartnershipId, emails: Sequence[str]) -> None:
        models.PartnershipEmail.objects.filter(partnership_id=partnership_id.value).delete()
        models.PartnershipEmail.objects.bulk_create(
            [
                models.PartnershipEmail(partnership_id=partnership_id.value, email=email)
                for email in dict.fromkeys(emails)
            ]
        )

    def list_options(
        self, partnership_id: PartnershipId, pack_id: PackId, *, suggested: bool = False
    ) -> list[PartnershipOption]:
        rows = (
            models.PartnershipOption.objects.filter(
                partnership_id=partnership_id.value, pack_id=pack_id.value, suggested=suggested
            )
            .select_related("option", "selected_value")
            .prefetch_related("option__translations", "option__selectable_values")
            .order_by("option_id")
        )
        return [
            PartnershipOption(
                partnership_id=partnership_id,
                pack_id=pack_id,
                option=_to_option(row.option),
                selected_quantity=row.selected_quantity,
                selected_value=_to_selectable_value(row.selected_value)
                if row.selected_value is not None
                else None,
                price_override=_money(row.price_override),
                suggested=row.suggested,
            )
            for row in rows
        ]

    def replace_options(
        self,
        partnership_id: PartnershipId,
        pack_id: PackId,
        choices: Sequence[OptionChoice],
        *,
        suggested: bool = False,
    ) -> None:
        models.PartnershipOption.objects.filter(
            partnership_id=partnership_id.value, suggested=suggested
        ).delete()
        models.PartnershipOption.objects.bulk_create(
            [
                models.PartnershipOption(
                    partnership_id=partnership_id.value,
                    pack_id=pack_id.value,
                    option_id=choice.option_id.value,
                    selected_quantity=choice.selected_quantity,
                    selected_value_id=choice.selected_value_id,
                    suggested=suggested,
                )
                for choice in choices
            ]
        )

    def set_option_price_override(
        self,
        partnership_id: PartnershipId,
        pack_id: PackId,
        option_id: OptionId,
        price: Money | None,
        *,
        suggested: bool = False,
    ) -> None:
        models.PartnershipOption.objects.filter(
            partnership_id=partnership_id.value,
            pack_id=pack_id.value,
            option_id=option_id.value,
            suggested=suggested,
        ).update(price_override=_amount(price))

    def add_email_history(
        self, partnership_id: PartnershipId, sent_at: datetime, delivery: DeliveryResult
    ) -> EmailHistory:
        obj = models.PartnershipEmailHistory.objects.create(
            partnership_id=partnership_id.value,
            sent_at=sent_at,
            sender_email=delivery.sender_email,
            subject=delivery.subject[:500],
            body=delivery.body,
            overall_status=delivery.overall_status.value,
        )
        models.PartnershipEmailRecipient.objects.bulk_create(
            [
                models.PartnershipEmailRecipient(
                    history=obj, email=recipient.email, status=recipient.status.value
                )
                for recipient in delivery.recipients
            ]
        )
        return _to_email_history(obj)

    def list_email_history(
        self, partnership_id: PartnershipId, offset: int, limit: int
    ) -> tuple[list[EmailHistory], int]:
        queryset = models.PartnershipEmailHistory.objects.filter(
            partnership_id=partnership_id.value
        ).order_by("-sent_at")
        page = queryset.prefetch_related("recipients")[offset : offset + limit]
        return [_to_email_history(obj) for obj in page], queryset.count()


class DjangoBillingStore(BillingStore):
    """Billing store backed by Django ORM."""

    def get_billing(self, event_id: EventId, partnership_id: PartnershipId) -> Billing | None:
        obj = models.Billing.objects.filter(
            event_id=event_id.value, partnership_id=partnership_id.value
        ).first()
        return _to_billing(obj) if obj is not None else None

    def save_billing(self, billing: Billing) -> Billing:
        obj, _ = models.Billing.objects.update_or_create(
            id=billing.id,
            defaults={
                "event_id": billing.event_id.value,
                "partnership_id": billing.partnership_id.value,
                "name": billing.name,
                "contact_first_name": billing.contact_first_name,
                "contact_last_name": billing.contact_last_name,
                "contact_email": billing.contact_email,
                "po": billing.po,
                "status": billing.status.value,
            },
        )
        return _to_billing(obj)


class DjangoTicketStore(TicketStore):
    """Ticket store backed by Django ORM."""

    def count_tickets(self, partnership_id: PartnershipId) -> int:
        return models.PartnershipTicket.objects.filter(partnership_id=partnership_id.value).count()

    def list_tickets(self, partnership_id: PartnershipId) -> list[Ticket]:
        queryset = models.PartnershipTicket.objects.filter(partnership_id=partnership_id.value)
        return [_to_ticket(obj) for obj in queryset]

    def get_ticket(self, partnership_id: PartnershipId, ticket_id: TicketId) -> Ticket | None:
        obj = models.PartnershipTicket.objects.filter(
            id=ticket_id.value, partnership_id=partnership_id.value
        ).first()
        return _to_ticket(obj) if obj is not None else None

    def create_tickets(self, tickets: Sequence[NewTicket]) -> list[Ticket]:
        created = [
            models.PartnershipTicket.objects.create(
                partnership_id=ticket.partnership_id.value,
                order_id=ticket.order_id,
                external_id=ticket.external_id,
                url=ticket.url,
                first_name=ticket.first_name,
                last_name=ticket.last_name,
                email=ticket.email,
            )
            for ticket in tickets
        ]
        return [_to_ticket(obj) for obj in created]

    def update_holder(self, ticket_id: TicketId, first_name: str, last_name: str) -> Ticket:
        updated = models.PartnershipTicket.objects.filter(id=ticket_id.value).update(
            first_name=first_name, last_name=last_name
        )
        if not updated:
            raise TicketNotFoundError(ticket_id)
        return _to_ticket(models.PartnershipTicket.objects.get(id=ticket_id.value))
