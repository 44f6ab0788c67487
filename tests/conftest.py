"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from rest_framework.test import APIClient

from partnerships import models
from partnerships.gateways.django_gateways import MailNotificationGateway, TemplateDocumentRenderer
from partnerships.gateways.interfaces import DocumentRenderer, ObjectStore
from partnerships.services.billing_service import BillingService
from partnerships.services.booth_service import BoothService
from partnerships.services.catalog_service import CatalogService
from partnerships.services.communication_service import CommunicationService
from partnerships.services.decision_service import DecisionService
from partnerships.services.document_service import DocumentService
from partnerships.services.notification_service import NotificationService
from partnerships.services.partnership_service import PartnershipService
from partnerships.services.pricing_service import PricingService
from partnerships.services.registration_service import RegisterPartnership, RegistrationService
from partnerships.services.suggestion_service import SuggestionService
from partnerships.services.ticket_service import TicketService
from partnerships.services.validated_pack import ValidatedPackResolver
from partnerships.stores.django_store import (
    DjangoBillingStore,
    DjangoCatalogStore,
    DjangoPartnershipStore,
    DjangoTicketStore,
)


class FakeClock:
    """Deterministic clock, one second later on every call."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class FakeRenderer(DocumentRenderer):
    def __init__(self) -> None:
        self.calls = []

    def render(self, template_name, context):
        self.calls.append((template_name, context))
        return f"rendered {template_name}".encode()


class FakeObjectStore(ObjectStore):
    def __init__(self) -> None:
        self.uploads = {}
        self.fail = False

    def upload(self, name, content, content_type):
        if self.fail:
            raise OSError("storage unavailable")
        self.uploads[name] = (content, content_type)
        return f"https://storage.test/{name}"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def organisation(db) -> models.Organisation:
    return models.Organisation.objects.create(
        name="DevLille",
        head_office="1 place de la Gare, 59000 Lille",
        iban="FR7630006000011234567890189",
        bic="AGRIFRPP",
        creation_location="Lille",
        created_at=date(2015, 3, 2),
        published_at=date(2015, 3, 20),
        representative_name="Jane Martin",
        representative_role="President",
    )


@pytest.fixture
def event(organisation) -> models.Event:
    return models.Event.objects.create(
        organisation=organisation,
        name="DevLille 2025",
        starts_at=datetime(2025, 6, 12, 8, 0, tzinfo=timezone.utc),
        ends_at=datetime(2025, 6, 13, 18, 0, tzinfo=timezone.utc),
    )


def make_company(name: str = "Acme", **fields) -> models.Company:
    values = {
        "siret": "12345678900011",
        "address": "10 rue Nationale",
        "zip_code": "59000",
        "city": "Lille",
        "country": "France",
    }
    values.update(fields)
    return models.Company.objects.create(name=name, **values)


@pytest.fixture
def company(db) -> models.Company:
    return make_company()


def make_option(
    event: models.Event,
    name: str,
    *,
    price: int | None = None,
    option_type: str = models.SponsoringOption.OptionType.TEXT,
    fixed_quantity: int | None = None,
    languages: tuple[str, ...] = ("en", "fr"),
) -> models.SponsoringOption:
    option = models.SponsoringOption.objects.create(
        event=event, option_type=option_type, price=price, fixed_quantity=fixed_quantity
    )
    for language in languages:
        models.OptionTranslation.objects.create(
            option=option, language=language, name=f"{name} ({language})"
        )
    return option


def make_pack(
    event: models.Event,
    name: str,
    base_price: int,
    *,
    max_quantity: int | None = None,
    with_booth: bool = False,
    required: tuple[models.SponsoringOption, ...] = (),
    optional: tuple[models.SponsoringOption, ...] = (),
) -> models.SponsoringPack:
    pack = models.SponsoringPack.objects.create(
        event=event,
        name=name,
        base_price=base_price,
        max_quantity=max_quantity,
        with_booth=with_booth,
    )
    for option in required:
        models.PackOption.objects.create(pack=pack, option=option, required=True)
    for option in optional:
        models.PackOption.objects.create(pack=pack, option=option, required=False)
    return pack


@pytest.fixture
def catalog(event) -> SimpleNamespace:
    """Two packs sharing a talk option.

    silver: 100000, 2 tickets, logo required, talk/goodies/size optional.
    gold: 150000, 4 tickets, booth, talk/video optional.
    """
    logo = make_option(event, "Logo")
    talk = make_option(event, "Talk", price=5000)
    goodies = make_option(
        event,
        "Goodies",
        price=500,
        option_type=models.SponsoringOption.OptionType.TYPED_QUANTITATIVE,
    )
    size = make_option(
        event, "Booth size", option_type=models.SponsoringOption.OptionType.TYPED_SELECTABLE
    )
    small = models.SelectableValue.objects.create(option=size, value="6m2", price=0)
    large = models.SelectableValue.objects.create(option=size, value="12m2", price=2000)
    video = make_option(event, "Video", price=30000, languages=("fr",))
    lunch = make_option(
        event,
        "Lunch",
        option_type=models.SponsoringOption.OptionType.TYPED_NUMBER,
        fixed_quantity=3,
    )
    silver = make_pack(
        event,
        "Silver",
        100000,
        max_quantity=2,
        required=(logo,),
        optional=(talk, goodies, size, lunch),
    )
    gold = make_pack(event, "Gold", 150000, max_quantity=4, with_booth=True, optional=(talk, video))
    return SimpleNamespace(
        logo=logo,
        talk=talk,
        goodies=goodies,
        size=size,
        small=small,
        large=large,
        video=video,
        lunch=lunch,
        silver=silver,
        gold=gold,
    )


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def services(clock, renderer, object_store) -> SimpleNamespace:
    """Every service wired on the Django stores with a fake clock and fake documents."""
    store = DjangoPartnershipStore()
    catalog_store = DjangoCatalogStore()
    billing_store = DjangoBillingStore()
    resolver = ValidatedPackResolver(store, catalog_store)
    catalog = CatalogService(catalog_store)
    pricing = PricingService(store, resolver)
    notifications = NotificationService(
        store,
        MailNotificationGateway("partners@devlille.test"),
        TemplateDocumentRenderer(),
        clock=clock,
    )
    return SimpleNamespace(
        store=store,
        resolver=resolver,
        registration=RegistrationService(store, catalog),
        decision=DecisionService(store, clock=clock),
        suggestion=SuggestionService(store, catalog, notifications=notifications, clock=clock),
        pricing=pricing,
        billing=BillingService(store, billing_store),
        tickets=TicketService(store, billing_store, DjangoTicketStore(), resolver),
        documents=DocumentService(
            store, resolver, pricing, renderer, object_store, clock=clock
        ),
        partnerships=PartnershipService(store, billing_store),
        booth=BoothService(store),
        communication=CommunicationService(store, clock=clock),
        notifications=notifications,
    )


@pytest.fixture
def register(services, event, company):
    """Register a company to the event, returning the partnership id as a string."""

    def _register(pack, selections=(), *, company_obj=None, language="en", emails=("contact@acme.test",)):
        partnership_id = services.registration.register(
            str(event.id),
            RegisterPartnership(
                company_id=str((company_obj or company).id),
                pack_id=str(pack.id),
                language=language,
                contact_name="John Smith",
                contact_role="CTO",
                emails=emails,
                option_selections=selections,
            ),
        )
        return str(partnership_id)

    return _register
