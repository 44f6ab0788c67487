"""Service construction for the HTTP handlers, on the Django-backed adapters."""

from django.conf import settings

from partnerships.gateways.django_gateways import (
    MailNotificationGateway,
    StorageObjectStore,
    TemplateDocumentRenderer,
)
from partnerships.services.billing_service import BillingService
from partnerships.services.booth_service import BoothService
from partnerships.services.catalog_service import CatalogService
from partnerships.services.communication_service import CommunicationService
from partnerships.services.decision_service import DecisionService
from partnerships.services.document_service import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_LOCATION,
    DocumentService,
)
from partnerships.services.notification_service import NotificationService
from partnerships.services.partnership_service import PartnershipService
from partnerships.services.pricing_service import PricingService
from partnerships.services.registration_service import RegistrationService
from partnerships.services.suggestion_service import SuggestionService
from partnerships.services.ticket_service import TicketService
from partnerships.services.validated_pack import ValidatedPackResolver
from partnerships.stores.django_store import (
    DjangoBillingStore,
    DjangoCatalogStore,
    DjangoPartnershipStore,
    DjangoTicketStore,
)


def _resolver() -> ValidatedPackResolver:
    return ValidatedPackResolver(DjangoPartnershipStore(), DjangoCatalogStore())


def _config(name: str, default: str) -> str:
    return getattr(settings, "PARTNERSHIPS", {}).get(name, default)


def registration_service() -> RegistrationService:
    return RegistrationService(DjangoPartnershipStore(), CatalogService(DjangoCatalogStore()))


def decision_service() -> DecisionService:
    return DecisionService(DjangoPartnershipStore())


def notification_service() -> NotificationService:
    return NotificationService(
        DjangoPartnershipStore(), MailNotificationGateway(), TemplateDocumentRenderer()
    )


def suggestion_service() -> SuggestionService:
    return SuggestionService(
        DjangoPartnershipStore(),
        CatalogService(DjangoCatalogStore()),
        notifications=notification_service(),
    )


def pricing_service() -> PricingService:
    return PricingService(DjangoPartnershipStore(), _resolver())


def billing_service() -> BillingService:
    return BillingService(DjangoPartnershipStore(), DjangoBillingStore())


def ticket_service() -> TicketService:
    return TicketService(
        DjangoPartnershipStore(), DjangoBillingStore(), DjangoTicketStore(), _resolver()
    )


def document_service() -> DocumentService:
    return DocumentService(
        DjangoPartnershipStore(),
        _resolver(),
        pricing_service(),
        TemplateDocumentRenderer(),
        StorageObjectStore(),
        location=_config("DOCUMENT_LOCATION", DEFAULT_LOCATION),
        date_format=_config("DOCUMENT_DATE_FORMAT", DEFAULT_DATE_FORMAT),
    )


def partnership_service() -> PartnershipService:
    return PartnershipService(DjangoPartnershipStore(), DjangoBillingStore())


def booth_service() -> BoothService:
    return BoothService(DjangoPartnershipStore())


def communication_service() -> CommunicationService:
    return CommunicationService(DjangoPartnershipStore())
