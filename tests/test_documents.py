"""Tests for agreement and assignment generation.

Run with: pytest tests/test_documents.py -v
"""

import pytest
from django.core.files.storage import FileSystemStorage

from partnerships import models
from partnerships.domain import OptionId
from partnerships.domain.errors import (
    InvalidContentTypeError,
    MissingLegalFieldsError,
    RepresentativeNotFoundError,
    TemplateNotFoundError,
    ValidatedPackNotFoundError,
)
from partnerships.domain.selections import TextSelection
from partnerships.gateways.django_gateways import StorageObjectStore, TemplateDocumentRenderer
from partnerships.services.document_service import DocumentService


@pytest.fixture
def validated(services, event, register, catalog):
    partnership_id = register(catalog.silver, [TextSelection(option_id=OptionId(catalog.talk.id))])
    services.decision.validate(str(event.id), partnership_id)
    return partnership_id


@pytest.mark.django_db
class TestAgreement:
    """Tests for DocumentService.generate_agreement."""

    def test_context_carries_legal_snapshot(self, services, event, validated, renderer):
        services.documents.generate_agreement(str(event.id), validated)

        template_name, context = renderer.calls[0]
        assert template_name == "partnerships/agreement/en.md"
        assert context["event"] == {
            "name": "DevLille 2025",
            "payment_deadline": "2025/05/14",
            "end_date": "2025/07/13",
        }
        assert context["location"] == "Lille, France"
        assert context["created_at"] == "2025/01/01"
        assert context["organisation"]["created_at"] == "2015/03/02"
        assert context["organisation"]["representative"] == {
            "name": "Jane Martin",
            "role": "President",
        }
        assert context["company"]["head_office"] == "10 rue Nationale, 59000 Lille, France"
        assert context["partnership"]["amount"] == 105000
        assert sorted(context["partnership"]["options"]) == ["Logo (en)", "Talk (en)"]
        assert context["partnership"]["contact"] == {"name": "John Smith", "role": "CTO"}

    def test_url_is_stored_on_partnership(self, services, event, validated, object_store):
        url = services.documents.generate_agreement(str(event.id), validated)

        name = f"events/{event.id}/partnerships/{validated}/agreement.md"
        assert url == f"https://storage.test/{name}"
        assert object_store.uploads[name] == (
            b"rendered partnerships/agreement/en.md",
            "text/markdown",
        )
        assert models.Partnership.objects.get(id=validated).agreement_url == url

    def test_partnership_language_selects_template(self, services, event, register, catalog, renderer):
        partnership_id = register(catalog.silver, language="fr")
        services.decision.validate(str(event.id), partnership_id)
        services.documents.generate_agreement(str(event.id), partnership_id)
        template_name, context = renderer.calls[0]
        assert template_name == "partnerships/agreement/fr.md"
        assert context["partnership"]["options"] == ("Logo (fr)",)

    def test_custom_location_and_date_format(
        self, services, event, validated, renderer, object_store, clock
    ):
        documents = DocumentService(
            services.store,
            services.resolver,
            services.pricing,
            renderer,
            object_store,
            location="Paris, France",
            date_format="%d/%m/%Y",
            clock=clock,
        )
        documents.generate_agreement(str(event.id), validated)
        _, context = renderer.calls[0]
        assert context["location"] == "Paris, France"
        assert context["event"]["payment_deadline"] == "14/05/2025"

    def test_missing_organisation_fields(
        self, services, event, validated, organisation, object_store
    ):
        organisation.iban = None
        organisation.published_at = None
        organisation.save()

        with pytest.raises(MissingLegalFieldsError) as exc:
            services.documents.generate_agreement(str(event.id), validated)

        assert exc.value.meta == {"fields": ["iban", "published_at"]}
        assert exc.value.message == "Fields iban, published_at are required to perform this operation."
        assert object_store.uploads == {}
        assert models.Partnership.objects.get(id=validated).agreement_url is None

    def test_missing_company_fields(self, services, event, validated, company):
        company.siret = None
        company.save()
        with pytest.raises(MissingLegalFieldsError) as exc:
            services.documents.generate_agreement(str(event.id), validated)
        assert exc.value.meta == {"fields": ["siret"]}

    def test_missing_representative(self, services, event, validated, organisation):
        organisation.representative_name = None
        organisation.save()
        with pytest.raises(RepresentativeNotFoundError):
            services.documents.generate_agreement(str(event.id), validated)

    def test_requires_validated_pack(self, services, event, register, catalog, renderer):
        partnership_id = register(catalog.silver)
        with pytest.raises(ValidatedPackNotFoundError):
            services.documents.generate_agreement(str(event.id), partnership_id)
        assert renderer.calls == []

    def test_upload_failure_keeps_previous_url(self, services, event, validated, object_store):
        object_store.fail = True
        with pytest.raises(OSError):
            services.documents.generate_agreement(str(event.id), validated)
        assert models.Partnership.objects.get(id=validated).agreement_url is None


@pytest.mark.django_db
class TestAssignment:
    def test_assignment_is_stored_separately(self, services, event, validated, renderer):
        url = services.documents.generate_assignment(str(event.id), validated)

        assert renderer.calls[0][0] == "partnerships/assignment/en.md"
        partnership = models.Partnership.objects.get(id=validated)
        assert partnership.assignment_url == url
        assert partnership.agreement_url is None


@pytest.mark.django_db
class TestSignedAgreement:
    def test_pdf_is_stored(self, services, event, validated, object_store):
        url = services.documents.upload_signed_agreement(
            str(event.id), validated, b"%PDF-1.7", "application/pdf"
        )
        name = f"events/{event.id}/partnerships/{validated}/signed-agreement.pdf"
        assert object_store.uploads[name] == (b"%PDF-1.7", "application/pdf")
        assert models.Partnership.objects.get(id=validated).agreement_signed_url == url

    def test_other_content_types_are_rejected(self, services, event, validated, object_store):
        with pytest.raises(InvalidContentTypeError):
            services.documents.upload_signed_agreement(
                str(event.id), validated, b"<html>", "text/html"
            )
        assert object_store.uploads == {}


class FailingStorage(FileSystemStorage):
    def _save(self, name, content):
        raise OSError("disk full")


@pytest.mark.django_db
class TestDjangoGateways:
    """Documents rendered with Django templates and written to a storage backend."""

    @staticmethod
    def _documents(services, clock, storage) -> DocumentService:
        return DocumentService(
            services.store,
            services.resolver,
            services.pricing,
            TemplateDocumentRenderer(),
            StorageObjectStore(storage),
            clock=clock,
        )

    def test_agreement_template_renders_snapshot(self, services, event, validated, clock, tmp_path):
        storage = FileSystemStorage(location=tmp_path, base_url="/media/")
        documents = self._documents(services, clock, storage)

        url = documents.generate_agreement(str(event.id), validated)

        assert url == f"/media/events/{event.id}/partnerships/{validated}/agreement.md"
        content = (
            tmp_path / "events" / str(event.id) / "partnerships" / validated / "agreement.md"
        ).read_text()
        assert "**Acme**" in content
        assert "105000 EUR" in content
        assert "- Talk (en)" in content
        assert "Payment is due by 2025/05/14" in content
        assert "Done in Lille, France" in content

    def test_regenerating_keeps_the_previous_document(
        self, services, event, validated, clock, tmp_path
    ):
        storage = FileSystemStorage(location=tmp_path, base_url="/media/")
        documents = self._documents(services, clock, storage)
        first = documents.generate_agreement(str(event.id), validated)
        second = documents.generate_agreement(str(event.id), validated)

        assert first != second
        folder = tmp_path / "events" / str(event.id) / "partnerships" / validated
        assert len(list(folder.glob("agreement*.md"))) == 2
        assert models.Partnership.objects.get(id=validated).agreement_url == second

    def test_failed_write_keeps_the_previous_document(
        self, services, event, validated, clock, tmp_path
    ):
        storage = FileSystemStorage(location=tmp_path, base_url="/media/")
        first = self._documents(services, clock, storage).generate_agreement(
            str(event.id), validated
        )
        document = tmp_path / "events" / str(event.id) / "partnerships" / validated / "agreement.md"
        content = document.read_bytes()

        failing_storage = FailingStorage(location=tmp_path, base_url="/media/")
        failing = self._documents(services, clock, failing_storage)
        with pytest.raises(OSError):
            failing.generate_agreement(str(event.id), validated)

        assert document.read_bytes() == content
        assert models.Partnership.objects.get(id=validated).agreement_url == first

    def test_unknown_template(self):
        with pytest.raises(TemplateNotFoundError):
            TemplateDocumentRenderer().render("partnerships/agreement/xx.md", {})
