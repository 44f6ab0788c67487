"""Tests for the organiser decision and the suggestion negotiation.

Run with: pytest tests/test_negotiation.py -v
"""

from uuid import uuid4

import pytest

from partnerships import models
from partnerships.domain import DecisionStatus, Money, OptionId, PackId
from partnerships.domain.errors import (
    DecisionAlreadyTakenError,
    MissingTranslationError,
    OptionNotInPackError,
    PartnershipNotFoundError,
    SuggestionNotFoundError,
)
from partnerships.domain.selections import QuantitativeSelection, TextSelection


def text(option) -> TextSelection:
    return TextSelection(option_id=OptionId(option.id))


@pytest.mark.django_db
class TestDecision:
    """Tests for DecisionService."""

    def test_validate_stamps_timestamp(self, services, event, register, catalog, clock):
        partnership_id = register(catalog.silver)
        partnership = services.decision.validate(str(event.id), partnership_id)
        assert partnership.decision_status is DecisionStatus.VALIDATED
        assert models.Partnership.objects.get(id=partnership_id).validated_at == clock.now

    def test_decline(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        partnership = services.decision.decline(str(event.id), partnership_id)
        assert partnership.decision_status is DecisionStatus.DECLINED
        assert partnership.validated_pack_id() is None

    def test_repeating_a_decision_restamps_it(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        first = services.decision.validate(str(event.id), partnership_id)
        second = services.decision.validate(str(event.id), partnership_id)
        assert second.validated_at > first.validated_at
        assert second.decision_status is DecisionStatus.VALIDATED

    def test_declining_a_validated_partnership_conflicts(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.decision.validate(str(event.id), partnership_id)
        with pytest.raises(DecisionAlreadyTakenError):
            services.decision.decline(str(event.id), partnership_id)
        assert models.Partnership.objects.get(id=partnership_id).declined_at is None

    def test_validating_a_declined_partnership_conflicts(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.decision.decline(str(event.id), partnership_id)
        with pytest.raises(DecisionAlreadyTakenError):
            services.decision.validate(str(event.id), partnership_id)

    def test_partnership_is_scoped_to_event(self, services, register, catalog):
        partnership_id = register(catalog.silver)
        with pytest.raises(PartnershipNotFoundError):
            services.decision.validate(str(uuid4()), partnership_id)


@pytest.mark.django_db
class TestSuggestion:
    """Tests for SuggestionService."""

    def test_suggest_stores_pack_and_options(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        partnership = services.suggestion.suggest(
            str(event.id), partnership_id, str(catalog.gold.id), [text(catalog.talk)], "en"
        )
        assert partnership.suggestion.pack_id == PackId(catalog.gold.id)
        assert partnership.suggestion.sent_at is not None
        rows = models.PartnershipOption.objects.filter(
            partnership_id=partnership_id, pack=catalog.gold
        )
        assert [row.option_id for row in rows] == [catalog.talk.id]
        # Selected pack rows are untouched.
        assert models.PartnershipOption.objects.filter(
            partnership_id=partnership_id, pack=catalog.silver
        ).exists()

    def test_suggest_notifies_partnership_contacts(
        self, services, event, register, catalog, mailoutbox
    ):
        partnership_id = register(catalog.silver)
        services.suggestion.suggest(str(event.id), partnership_id, str(catalog.gold.id), [], "fr")
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["contact@acme.test"]
        assert mailoutbox[0].subject == "Un nouveau pack de sponsoring est proposé à Acme"

    def test_new_suggestion_replaces_previous_one(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.suggestion.suggest(
            str(event.id), partnership_id, str(catalog.gold.id), [text(catalog.talk)], "en"
        )
        services.suggestion.approve(str(event.id), partnership_id)
        bronze = models.SponsoringPack.objects.create(event=event, name="Bronze", base_price=50000)
        partnership = services.suggestion.suggest(
            str(event.id), partnership_id, str(bronze.id), [], "en"
        )

        assert partnership.suggestion.pack_id == PackId(bronze.id)
        assert partnership.suggestion.approved_at is None
        assert not models.PartnershipOption.objects.filter(
            partnership_id=partnership_id, pack=catalog.gold
        ).exists()

    def test_same_pack_suggestion_keeps_registrant_selection(
        self, services, event, register, catalog
    ):
        partnership_id = register(catalog.silver, [text(catalog.talk)])
        services.decision.validate(str(event.id), partnership_id)
        goodies = QuantitativeSelection(option_id=OptionId(catalog.goodies.id), selected_quantity=3)
        services.suggestion.suggest(
            str(event.id), partnership_id, str(catalog.silver.id), [goodies], "en"
        )

        detail = services.partnerships.get_detail(str(event.id), partnership_id)
        assert {row.option.id.value for row in detail.selected_options} == {
            catalog.logo.id,
            catalog.talk.id,
        }
        assert {row.option.id.value for row in detail.suggested_options} == {
            catalog.logo.id,
            catalog.goodies.id,
        }

        services.suggestion.decline(str(event.id), partnership_id)
        assert services.pricing.get_pricing(str(event.id), partnership_id).amount == Money(105000)

        services.suggestion.approve(str(event.id), partnership_id)
        assert services.pricing.get_pricing(str(event.id), partnership_id).amount == Money(100500)

    def test_suggestion_checks_partnership_language(self, services, event, register, catalog):
        partnership_id = register(catalog.silver, language="en")
        with pytest.raises(MissingTranslationError):
            services.suggestion.suggest(
                str(event.id), partnership_id, str(catalog.gold.id), [text(catalog.video)], "fr"
            )
        partnership = models.Partnership.objects.get(id=partnership_id)
        assert partnership.suggestion_pack_id is None

    def test_invalid_suggestion_persists_nothing(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        with pytest.raises(OptionNotInPackError):
            services.suggestion.suggest(
                str(event.id), partnership_id, str(catalog.gold.id), [text(catalog.goodies)], "en"
            )
        assert not models.PartnershipOption.objects.filter(pack=catalog.gold).exists()

    def test_approve_without_suggestion(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        with pytest.raises(SuggestionNotFoundError):
            services.suggestion.approve(str(event.id), partnership_id)
        with pytest.raises(SuggestionNotFoundError):
            services.suggestion.decline(str(event.id), partnership_id)

    def test_approved_suggestion_becomes_validated_pack(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.decision.validate(str(event.id), partnership_id)
        services.suggestion.suggest(str(event.id), partnership_id, str(catalog.gold.id), [], "en")

        partnership = services.suggestion.approve(str(event.id), partnership_id)

        assert partnership.validated_pack_id() == PackId(catalog.gold.id)

    def test_declined_suggestion_leaves_selected_pack(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.decision.validate(str(event.id), partnership_id)
        services.suggestion.suggest(str(event.id), partnership_id, str(catalog.gold.id), [], "en")

        partnership = services.suggestion.decline(str(event.id), partnership_id)

        assert partnership.validated_pack_id() == PackId(catalog.silver.id)

    def test_decline_after_approve_reverts(self, services, event, register, catalog):
        partnership_id = register(catalog.silver)
        services.decision.validate(str(event.id), partnership_id)
        services.suggestion.suggest(str(event.id), partnership_id, str(catalog.gold.id), [], "en")
        services.suggestion.approve(str(event.id), partnership_id)

        partnership = services.suggestion.decline(str(event.id), partnership_id)

        assert partnership.validated_pack_id() == PackId(catalog.silver.id)
