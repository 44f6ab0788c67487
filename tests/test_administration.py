"""Tests for partnership administration: listings, contacts, organisers, booths,
communication plan, bulk email and email history.

Run with: pytest tests/test_administration.py -v
"""

from dataclasses import replace
from datetime import datetime, timezone
from smtplib import SMTPRecipientsRefused
from uuid import uuid4

import pytest
from django.core.mail.backends import locmem

from partnerships import models
from partnerships.domain import (
    DeliveryStatus,
    EventId,
    InvoiceStatus,
    PackId,
    PartnershipId,
    RecipientResult,
)
from partnerships.domain.errors import (
    BoothLocationTakenError,
    EventNotFoundError,
    InvalidPageError,
    NoMatchingPartnershipsError,
    PartnershipNotFoundError,
    PartnershipNotPendingError,
    UserNotFoundError,
)
from partnerships.services.billing_service import BillingData
from partnerships.services.partnership_service import ContactUpdate
from partnerships.services.registration_service import RegisterPartnership
from partnerships.stores.interfaces import PartnershipFilters
from tests.conftest import make_company

BILLING = BillingData(contact_first_name="A", contact_last_name="B", contact_email="a@b.test")


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def organiser(django_user_model):
    return django_user_model.objects.create_user(
        username="orga", email="orga@devlille.test", password="secret"
    )


@pytest.mark.django_db
class TestDetail:
    def test_detail_lists_both_negotiation_tracks(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.suggestion.suggest(str(event.id), partnership_id, str(catalog.gold.id), [], "en")

        detail = services.partnerships.get_detail(str(event.id), partnership_id)

        assert detail.emails == ("contact@acme.test",)
        assert [row.option.id.value for row in detail.selected_options] == [catalog.logo.id]
        assert detail.suggested_options == ()
        assert detail.partnership.suggestion.pack_id == PackId(catalog.gold.id)
        assert detail.validated_pack_id is None
        assert detail.billing_status is None

    def test_detail_reports_billing_status(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.billing.upsert_billing(str(event.id), partnership_id, BILLING)
        detail = services.partnerships.get_detail(str(event.id), partnership_id)
        assert detail.billing_status is InvoiceStatus.PENDING

    def test_unknown_partnership(self, services, event):
        with pytest.raises(PartnershipNotFoundError):
            services.partnerships.get_detail(str(event.id), str(uuid4()))


@pytest.mark.django_db
class TestListing:
    """Tests for the filtered partnership listings."""

    @pytest.fixture
    def partnerships(self, services, event, register, catalog, organiser):
        acme = register(catalog.silver)
        globex = register(catalog.gold, company_obj=make_company("Globex"))
        initech = register(catalog.silver, company_obj=make_company("Initech"))
        services.decision.validate(str(event.id), acme)
        services.decision.validate(str(event.id), globex)
        services.suggestion.suggest(str(event.id), initech, str(catalog.gold.id), [], "en")
        services.partnerships.assign_organiser(str(event.id), globex, "ORGA@devlille.test")
        services.documents.generate_agreement(str(event.id), acme)
        services.billing.upsert_billing(str(event.id), acme, BILLING)
        services.billing.update_status(str(event.id), acme, "PAID")
        return {"acme": acme, "globex": globex, "initech": initech}

    @staticmethod
    def _ids(partnerships):
        return [str(partnership.id) for partnership in partnerships]

    def test_no_filter_lists_in_creation_order(self, services, event, partnerships):
        listed = services.partnerships.list_partnerships(str(event.id))
        assert self._ids(listed) == [
            partnerships["acme"],
            partnerships["globex"],
            partnerships["initech"],
        ]
        descending = services.partnerships.list_partnerships(str(event.id), direction="desc")
        assert self._ids(descending) == self._ids(reversed(listed))

    @pytest.mark.parametrize(
        ("filters", "expected"),
        [
            (PartnershipFilters(validated=True), ["acme", "globex"]),
            (PartnershipFilters(validated=False), ["initech"]),
            (PartnershipFilters(suggestion=True), ["initech"]),
            (PartnershipFilters(paid=True), ["acme"]),
            (PartnershipFilters(paid=False), ["globex", "initech"]),
            (PartnershipFilters(agreement_generated=True), ["acme"]),
            (PartnershipFilters(agreement_signed=True), []),
            (PartnershipFilters(organiser_email="orga@devlille.test"), ["globex"]),
            (PartnershipFilters(validated=True, paid=False), ["globex"]),
        ],
    )
    def test_filters(self, services, event, partnerships, filters, expected):
        listed = services.partnerships.list_partnerships(str(event.id), filters)
        assert self._ids(listed) == [partnerships[name] for name in expected]

    def test_pack_filter(self, services, event, partnerships, catalog):
        listed = services.partnerships.list_partnerships(
            str(event.id), PartnershipFilters(pack_id=PackId(catalog.gold.id))
        )
        assert self._ids(listed) == [partnerships["globex"]]

    def test_unknown_event(self, services):
        with pytest.raises(EventNotFoundError):
            services.partnerships.list_partnerships(str(uuid4()))

    def test_company_partnerships_span_events(
        self, services, event, organisation, register, catalog, company
    ):
        other = models.Event.objects.create(
            organisation=organisation,
            name="DevLille 2026",
            starts_at=utc(2026, 6, 11),
            ends_at=utc(2026, 6, 12),
        )
        other_pack = models.SponsoringPack.objects.create(event=other, name="Bronze", base_price=1)
        register(catalog.silver)
        services.registration.register(
            str(other.id),
            RegisterPartnership(
                company_id=str(company.id),
                pack_id=str(other_pack.id),
                language="en",
                contact_name="John",
                contact_role="CTO",
            ),
        )

        listed = services.partnerships.list_company_partnerships(str(company.id))

        assert {partnership.event_id.value for partnership in listed} == {event.id, other.id}


@pytest.mark.django_db
class TestDelete:
    def test_pending_partnership_is_deleted(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.partnerships.delete(str(event.id), partnership_id)
        assert not models.Partnership.objects.filter(id=partnership_id).exists()
        assert models.PartnershipOption.objects.count() == 0

    def test_decided_partnership_is_kept(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.decision.decline(str(event.id), partnership_id)
        with pytest.raises(PartnershipNotPendingError):
            services.partnerships.delete(str(event.id), partnership_id)
        assert models.Partnership.objects.filter(id=partnership_id).exists()


@pytest.mark.django_db
class TestContact:
    def test_partial_update(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        detail = services.partnerships.update_contact(
            str(event.id), partnership_id, ContactUpdate(contact_role="CEO", phone="+33 6 00")
        )
        assert detail.partnership.contact_name == "John Smith"
        assert detail.partnership.contact_role == "CEO"
        assert detail.partnership.phone == "+33 6 00"
        assert detail.emails == ("contact@acme.test",)

    def test_emails_are_replaced_and_deduplicated(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        detail = services.partnerships.update_contact(
            str(event.id),
            partnership_id,
            ContactUpdate(emails=["a@acme.test", "b@acme.test", "a@acme.test"]),
        )
        assert detail.emails == ("a@acme.test", "b@acme.test")


@pytest.mark.django_db
class TestOrganiser:
    def test_assign_and_remove(self, services, event, register, catalog, organiser):
        partnership_id = register(catalog.silver)

        partnership = services.partnerships.assign_organiser(
            str(event.id), partnership_id, "orga@devlille.test"
        )
        assert partnership.organiser.id == organiser.pk
        assert models.Partnership.objects.get(id=partnership_id).organiser_id == organiser.pk

        services.partnerships.remove_organiser(str(event.id), partnership_id)
        assert models.Partnership.objects.get(id=partnership_id).organiser_id is None

    def test_unknown_user(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        with pytest.raises(UserNotFoundError):
            services.partnerships.assign_organiser(
                str(event.id), partnership_id, "nobody@devlille.test"
            )


@pytest.mark.django_db
class TestBoothLocation:
    def test_location_is_unique_per_event(self, services, event, register, catalog):
        acme = register(catalog.gold)
        globex = register(catalog.gold, company_obj=make_company("Globex"))
        services.booth.assign_location(str(event.id), acme, "A1")

        with pytest.raises(BoothLocationTakenError) as exc:
            services.booth.assign_location(str(event.id), globex, "A1")

        assert exc.value.message == (
            "Location 'A1' is already assigned to another partnership "
            "for this event by company 'Acme'"
        )
        assert models.Partnership.objects.get(id=globex).booth_location is None

    def test_store_rejects_taken_location_on_write(self, services, event, register, catalog):
        acme = register(catalog.gold)
        globex = register(catalog.gold, company_obj=make_company("Globex"))
        services.booth.assign_location(str(event.id), acme, "A1")
        partnership = services.store.get_partnership(
            EventId(event.id), PartnershipId.from_string(globex)
        )

        with pytest.raises(BoothLocationTakenError) as exc:
            services.store.save_partnership(replace(partnership, booth_location="A1"))

        assert exc.value.meta == {"location": "A1", "company_name": "Acme"}
        assert models.Partnership.objects.get(id=globex).booth_location is None

    def test_reassigning_own_location(self, services, event, register, catalog):
        acme = register(catalog.gold)
        services.booth.assign_location(str(event.id), acme, "A1")
        partnership = services.booth.assign_location(str(event.id), acme, "A1")
        assert partnership.booth_location == "A1"

    def test_same_location_in_another_event(
        self, services, event, organisation, register, catalog, company
    ):
        other = models.Event.objects.create(
            organisation=organisation, name="Other", starts_at=utc(2026, 1, 1), ends_at=utc(2026, 1, 2)
        )
        pack = models.SponsoringPack.objects.create(event=other, name="Gold", base_price=1)
        acme = register(catalog.gold)
        services.booth.assign_location(str(event.id), acme, "A1")
        other_id = services.registration.register(
            str(other.id),
            RegisterPartnership(
                company_id=str(company.id),
                pack_id=str(pack.id),
                language="en",
                contact_name="John",
                contact_role="CTO",
            ),
        )
        partnership = services.booth.assign_location(str(other.id), str(other_id), "A1")
        assert partnership.booth_location == "A1"


@pytest.mark.django_db
class TestCommunicationPlan:
    """Tests for CommunicationService.plan; the clock starts on 2025-01-01 09:00 UTC."""

    def test_plan_splits_and_orders(self, services, event, register, catalog):
        ids = {}
        for name in ["Zeta", "alpha", "Past old", "Past new", "Soon", "Later", "Pending"]:
            ids[name] = register(catalog.silver, company_obj=make_company(name))
            if name != "Pending":
                services.decision.validate(str(event.id), ids[name])

        dates = {
            "Past old": utc(2024, 11, 1),
            "Past new": utc(2024, 12, 1),
            "Soon": utc(2025, 1, 15),
            "Later": utc(2025, 3, 1),
        }
        for name, publication_date in dates.items():
            services.communication.set_publication_date(str(event.id), ids[name], publication_date)
        services.communication.set_support_url(str(event.id), ids["Soon"], "https://cdn.test/soon.png")

        plan = services.communication.plan(str(event.id))

        assert [item.company_name for item in plan.done] == ["Past new", "Past old"]
        assert [item.company_name for item in plan.planned] == ["Soon", "Later"]
        assert [item.company_name for item in plan.unplanned] == ["alpha", "Zeta"]
        assert plan.planned[0].support_url == "https://cdn.test/soon.png"

    def test_update_writes_both_details_at_once(
        self, services, event, register, catalog, monkeypatch
    ):
        partnership_id = register(catalog.silver)
        saved = []
        save = services.store.save_partnership

        def counting_save(partnership):
            saved.append(partnership)
            save(partnership)

        monkeypatch.setattr(services.store, "save_partnership", counting_save)

        partnership = services.communication.update(
            str(event.id),
            partnership_id,
            publication_date=utc(2025, 2, 1),
            support_url="https://cdn.test/acme.png",
        )

        assert len(saved) == 1
        assert partnership.communication_publication_date == utc(2025, 2, 1)
        stored = models.Partnership.objects.get(id=partnership_id)
        assert stored.communication_publication_date == utc(2025, 2, 1)
        assert stored.communication_support_url == "https://cdn.test/acme.png"

    def test_empty_update_changes_nothing(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        partnership = services.communication.update(str(event.id), partnership_id)
        assert partnership.communication_publication_date is None
        assert partnership.communication_support_url is None


@pytest.mark.django_db
class TestBulkEmail:
    def test_send_to_matching_partnerships(self, services, event, register, catalog, organiser, mailoutbox):
        acme = register(catalog.silver)
        register(catalog.silver, company_obj=make_company("Globex"), emails=("team@globex.test",))
        services.decision.validate(str(event.id), acme)
        services.partnerships.assign_organiser(str(event.id), acme, "orga@devlille.test")

        sent = services.notifications.send_bulk(
            str(event.id), PartnershipFilters(validated=True), "Logistics", "<p>See you soon</p>"
        )

        assert sent == 1
        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.subject == "Logistics"
        assert message.to == ["contact@acme.test"]
        assert message.reply_to == ["orga@devlille.test"]
        assert message.body == "See you soon"

    def test_partnerships_without_emails_are_skipped(self, services, event, register, catalog, mailoutbox):
        register(catalog.silver, emails=())
        register(catalog.silver, company_obj=make_company("Globex"), emails=("team@globex.test",))
        assert services.notifications.send_bulk(str(event.id), PartnershipFilters(), "Hi", "Hi") == 1
        assert mailoutbox[0].to == ["team@globex.test"]

    def test_no_match(self, services, event, register, catalog, mailoutbox):
        register(catalog.silver)
        with pytest.raises(NoMatchingPartnershipsError):
            services.notifications.send_bulk(
                str(event.id), PartnershipFilters(validated=True), "Hi", "Hi"
            )
        assert mailoutbox == []


@pytest.mark.django_db
class TestEmailHistory:
    """Messages sent to partnerships are kept with their delivery status."""

    def test_bulk_email_is_recorded(self, services, event, register, catalog, mailoutbox):
        acme = register(catalog.silver, emails=("contact@acme.test", "cto@acme.test"))

        services.notifications.send_bulk(
            str(event.id), PartnershipFilters(), "Logistics", "<p>Hi</p>"
        )

        page = services.notifications.email_history(str(event.id), acme)
        assert page.total == 1
        entry = page.items[0]
        assert entry.sender_email == "partners@devlille.test"
        assert entry.subject == "Logistics"
        assert entry.body == "<p>Hi</p>"
        assert entry.overall_status is DeliveryStatus.SENT
        assert entry.recipients == (
            RecipientResult(email="contact@acme.test", status=DeliveryStatus.SENT),
            RecipientResult(email="cto@acme.test", status=DeliveryStatus.SENT),
        )

    def test_suggestion_notification_is_recorded(
        self, services, event, register, catalog, mailoutbox
    ):
        acme = register(catalog.silver)
        services.suggestion.suggest(str(event.id), acme, str(catalog.gold.id), [], "en")

        page = services.notifications.email_history(str(event.id), acme)

        assert [entry.subject for entry in page.items] == [
            "A new sponsoring pack is suggested to Acme"
        ]

    def test_refused_recipients_are_failed(
        self, services, event, register, catalog, mailoutbox, monkeypatch
    ):
        acme = register(catalog.silver, emails=("contact@acme.test", "gone@acme.test"))

        def refuse(backend, messages):
            raise SMTPRecipientsRefused({"gone@acme.test": (550, b"No such user")})

        monkeypatch.setattr(locmem.EmailBackend, "send_messages", refuse)

        services.notifications.send_bulk(str(event.id), PartnershipFilters(), "Hi", "Hi")

        entry = services.notifications.email_history(str(event.id), acme).items[0]
        assert entry.overall_status is DeliveryStatus.PARTIAL
        assert {recipient.email: recipient.status for recipient in entry.recipients} == {
            "contact@acme.test": DeliveryStatus.SENT,
            "gone@acme.test": DeliveryStatus.FAILED,
        }

    def test_pages_are_newest_first(self, services, event, register, catalog, mailoutbox):
        acme = register(catalog.silver)
        for subject in ["first", "second", "third"]:
            services.notifications.send_bulk(str(event.id), PartnershipFilters(), subject, "Hi")

        first = services.notifications.email_history(str(event.id), acme, page=1, page_size=2)
        second = services.notifications.email_history(str(event.id), acme, page=2, page_size=2)

        assert [entry.subject for entry in first.items] == ["third", "second"]
        assert [entry.subject for entry in second.items] == ["first"]
        assert first.total == second.total == 3

    @pytest.mark.parametrize("page, page_size", [(0, 20), (1, 0)])
    def test_invalid_page(self, services, event, register, catalog, page, page_size):
        acme = register(catalog.silver)
        with pytest.raises(InvalidPageError):
            services.notifications.email_history(
                str(event.id), acme, page=page, page_size=page_size
            )

    def test_unknown_partnership(self, services, event):
        with pytest.raises(PartnershipNotFoundError):
            services.notifications.email_history(str(event.id), str(uuid4()))

    def test_history_outlives_partnership(self, services, event, register, catalog, mailoutbox):
        acme = register(catalog.silver)
        services.notifications.send_bulk(str(event.id), PartnershipFilters(), "Hi", "Hi")

        services.partnerships.delete(str(event.id), acme)

        assert models.PartnershipEmailHistory.objects.filter(partnership_id=acme).count() == 1
