"""Serializers for request input and for transforming domain models to API responses.

Input serializers check formats only; business rules stay in the services.
"""

from rest_framework import serializers

from partnerships.domain import PackId
from partnerships.domain.selections import parse_selection
from partnerships.services.billing_service import BillingData
from partnerships.services.partnership_service import ContactUpdate
from partnerships.services.registration_service import RegisterPartnership
from partnerships.services.ticket_service import TicketHolder, TicketOrder
from partnerships.stores.interfaces import PartnershipFilters


class OptionSelectionsField(serializers.ListField):
    """List of tagged option selections, parsed into selection variants."""

    child = serializers.DictField()

    def to_internal_value(self, data):
        return [parse_selection(item) for item in super().to_internal_value(data)]


# Input


class RegisterPartnershipSerializer(serializers.Serializer):
    company_id = serializers.CharField()
    pack_id = serializers.CharField()
    language = serializers.CharField(max_length=8)
    contact_name = serializers.CharField(max_length=255)
    contact_role = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=32, required=False, allow_null=True)
    emails = serializers.ListField(child=serializers.EmailField(), required=False, default=list)
    option_selections = OptionSelectionsField(required=False, default=list)

    def create(self, validated_data) -> RegisterPartnership:
        return RegisterPartnership(**validated_data)


class SuggestPackSerializer(serializers.Serializer):
    pack_id = serializers.CharField()
    language = serializers.CharField(max_length=8)
    option_selections = OptionSelectionsField(required=False, default=list)


class PricingUpdateSerializer(serializers.Serializer):
    pack_price_override = serializers.IntegerField(allow_null=True)
    options_price_overrides = serializers.DictField(
        child=serializers.IntegerField(allow_null=True), required=False, allow_null=True
    )


class BillingInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    contact_first_name = serializers.CharField(max_length=255)
    contact_last_name = serializers.CharField(max_length=255)
    contact_email = serializers.EmailField()
    po = serializers.CharField(max_length=255, required=False, allow_null=True)

    def create(self, validated_data) -> BillingData:
        return BillingData(**validated_data)


class InvoiceStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class TicketHolderSerializer(serializers.Serializer):
    external_id = serializers.CharField(max_length=255)
    first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)
    url = serializers.CharField(max_length=500, required=False, allow_null=True)


class TicketOrderSerializer(serializers.Serializer):
    order_id = serializers.CharField(max_length=255)
    holders = TicketHolderSerializer(many=True)

    def create(self, validated_data) -> TicketOrder:
        return TicketOrder(
            order_id=validated_data["order_id"],
            holders=tuple(TicketHolder(**holder) for holder in validated_data["holders"]),
        )


class TicketHolderUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)


class ContactUpdateSerializer(serializers.Serializer):
    contact_name = serializers.CharField(max_length=255, required=False)
    contact_role = serializers.CharField(max_length=255, required=False)
    language = serializers.CharField(max_length=8, required=False)
    phone = serializers.CharField(max_length=32, required=False)
    emails = serializers.ListField(child=serializers.EmailField(), required=False)

    def create(self, validated_data) -> ContactUpdate:
        return ContactUpdate(**validated_data)


class BoothLocationSerializer(serializers.Serializer):
    location = serializers.CharField(max_length=255)


class OrganiserSerializer(serializers.Serializer):
    email = serializers.EmailField()


class CommunicationInputSerializer(serializers.Serializer):
    publication_date = serializers.DateTimeField(required=False)
    support_url = serializers.URLField(max_length=500, required=False)


class PartnershipFiltersSerializer(serializers.Serializer):
    """Query parameters shared by listings and bulk email."""

    pack_id = serializers.UUIDField(required=False)
    validated = serializers.BooleanField(required=False, allow_null=True, default=None)
    suggestion = serializers.BooleanField(required=False, allow_null=True, default=None)
    paid = serializers.BooleanField(required=False, allow_null=True, default=None)
    agreement_generated = serializers.BooleanField(required=False, allow_null=True, default=None)
    agreement_signed = serializers.BooleanField(required=False, allow_null=True, default=None)
    organiser = serializers.EmailField(required=False)

    def create(self, validated_data) -> PartnershipFilters:
        pack_id = validated_data.get("pack_id")
        return PartnershipFilters(
            pack_id=PackId(pack_id) if pack_id is not None else None,
            validated=validated_data.get("validated"),
            suggestion=validated_data.get("suggestion"),
            paid=validated_data.get("paid"),
            agreement_generated=validated_data.get("agreement_generated"),
            agreement_signed=validated_data.get("agreement_signed"),
            organiser_email=validated_data.get("organiser"),
        )


class PartnershipListQuerySerializer(PartnershipFiltersSerializer):
    direction = serializers.ChoiceField(choices=["asc", "desc"], required=False, default="asc")


class BulkEmailSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=255)
    body = serializers.CharField()
    filters = PartnershipFiltersSerializer(required=False)


class EmailHistoryQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, default=1)
    page_size = serializers.IntegerField(required=False, default=20)


# Output


class MoneyField(serializers.Field):
    def to_representation(self, value):
        return value.amount


class SuggestionSerializer(serializers.Serializer):
    pack_id = serializers.CharField(allow_null=True)
    sent_at = serializers.DateTimeField(allow_null=True)
    approved_at = serializers.DateTimeField(allow_null=True)
    declined_at = serializers.DateTimeField(allow_null=True)


class OrganiserOutputSerializer(serializers.Serializer):
    email = serializers.EmailField()
    display_name = serializers.CharField()


class PartnershipSerializer(serializers.Serializer):
    """Serializer for Partnership domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    company_id = serializers.CharField()
    selected_pack_id = serializers.CharField(allow_null=True)
    language = serializers.CharField()
    contact_name = serializers.CharField()
    contact_role = serializers.CharField()
    phone = serializers.CharField(allow_null=True)
    decision_status = serializers.SerializerMethodField()
    validated_at = serializers.DateTimeField(allow_null=True)
    declined_at = serializers.DateTimeField(allow_null=True)
    suggestion = SuggestionSerializer()
    organiser = OrganiserOutputSerializer(allow_null=True)
    booth_location = serializers.CharField(allow_null=True)
    agreement_url = serializers.CharField(allow_null=True)
    agreement_signed_url = serializers.CharField(allow_null=True)
    assignment_url = serializers.CharField(allow_null=True)
    communication_publication_date = serializers.DateTimeField(allow_null=True)
    communication_support_url = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)

    def get_decision_status(self, obj) -> str:
        return obj.decision_status.value


class PartnershipOptionSerializer(serializers.Serializer):
    option_id = serializers.CharField(source="option.id")
    option_type = serializers.CharField(source="option.option_type.value")
    selected_quantity = serializers.IntegerField(allow_null=True)
    selected_value_id = serializers.CharField(source="selected_value.id", allow_null=True)
    price = MoneyField(source="option.price", allow_null=True)
    price_override = MoneyField(allow_null=True)


class PartnershipDetailSerializer(serializers.Serializer):
    partnership = PartnershipSerializer()
    emails = serializers.ListField(child=serializers.EmailField())
    selected_options = PartnershipOptionSerializer(many=True)
    suggested_options = PartnershipOptionSerializer(many=True)
    validated_pack_id = serializers.CharField(allow_null=True)
    billing_status = serializers.CharField(source="billing_status.value", allow_null=True)


class PackSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    base_price = MoneyField()
    max_quantity = serializers.IntegerField(source="max_quantity.value", allow_null=True)
    with_booth = serializers.BooleanField()


class OptionPriceLineSerializer(serializers.Serializer):
    option_id = serializers.CharField()
    selected_quantity = serializers.IntegerField(allow_null=True)
    catalog_price = MoneyField(allow_null=True)
    price_override = MoneyField(allow_null=True)
    effective_price = MoneyField(allow_null=True)


class PartnershipPricingSerializer(serializers.Serializer):
    partnership_id = serializers.CharField()
    pack = PackSerializer()
    pack_price = MoneyField()
    pack_price_override = MoneyField(allow_null=True)
    options = OptionPriceLineSerializer(many=True)
    amount = MoneyField()


class BillingSerializer(serializers.Serializer):
    id = serializers.CharField()
    partnership_id = serializers.CharField()
    name = serializers.CharField()
    contact_first_name = serializers.CharField()
    contact_last_name = serializers.CharField()
    contact_email = serializers.EmailField()
    po = serializers.CharField(allow_null=True)
    status = serializers.CharField(source="status.value")


class TicketSerializer(serializers.Serializer):
    id = serializers.CharField()
    order_id = serializers.CharField()
    external_id = serializers.CharField()
    url = serializers.CharField(allow_null=True)
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()


class CommunicationItemSerializer(serializers.Serializer):
    partnership_id = serializers.CharField()
    company_name = serializers.CharField()
    publication_date = serializers.DateTimeField(allow_null=True)
    support_url = serializers.CharField(allow_null=True)


class CommunicationPlanSerializer(serializers.Serializer):
    done = CommunicationItemSerializer(many=True)
    planned = CommunicationItemSerializer(many=True)
    unplanned = CommunicationItemSerializer(many=True)


class RecipientResultSerializer(serializers.Serializer):
    email = serializers.EmailField()
    status = serializers.CharField(source="status.value")


class EmailHistorySerializer(serializers.Serializer):
    id = serializers.CharField()
    partnership_id = serializers.CharField()
    sent_at = serializers.DateTimeField()
    sender_email = serializers.EmailField()
    subject = serializers.CharField()
    body = serializers.CharField()
    overall_status = serializers.CharField(source="overall_status.value")
    recipients = RecipientResultSerializer(many=True)


class EmailHistoryPageSerializer(serializers.Serializer):
    items = EmailHistorySerializer(many=True)
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total = serializers.IntegerField()
