from django.contrib import admin

from partnerships.models import (
    Billing,
    Company,
    Event,
    OptionTranslation,
    Organisation,
    PackOption,
    Partnership,
    PartnershipEmail,
    PartnershipEmailHistory,
    PartnershipEmailRecipient,
    PartnershipOption,
    PartnershipTicket,
    SelectableValue,
    SponsoringOption,
    SponsoringPack,
)


class PackOptionInline(admin.TabularInline):
    model = PackOption
    extra = 1


class OptionTranslationInline(admin.TabularInline):
    model = OptionTranslation
    extra = 1


class SelectableValueInline(admin.TabularInline):
    model = SelectableValue
    extra = 0


class PartnershipEmailInline(admin.TabularInline):
    model = PartnershipEmail
    extra = 0


class PartnershipOptionInline(admin.TabularInline):
    model = PartnershipOption
    extra = 0


@admin.register(Organisation)
class OrganisationAdmin(admin.ModelAdmin):
    list_display = ["name", "representative_name", "representative_role"]
    search_fields = ["name"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "organisation", "starts_at", "ends_at"]
    list_filter = ["organisation"]
    search_fields = ["name"]


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ["name", "siret", "city", "country"]
    search_fields = ["name", "siret"]


@admin.register(SponsoringPack)
class SponsoringPackAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "base_price", "max_quantity", "with_booth"]
    list_filter = ["event"]
    inlines = [PackOptionInline]


@admin.register(SponsoringOption)
class SponsoringOptionAdmin(admin.ModelAdmin):
    list_display = ["id", "event", "option_type", "price"]
    list_filter = ["event", "option_type"]
    inlines = [OptionTranslationInline, SelectableValueInline]


@admin.register(Partnership)
class PartnershipAdmin(admin.ModelAdmin):
    list_display = ["company", "event", "selected_pack", "validated_at", "declined_at", "created_at"]
    list_filter = ["event"]
    search_fields = ["company__name", "contact_name"]
    inlines = [PartnershipEmailInline, PartnershipOptionInline]


@admin.register(Billing)
class BillingAdmin(admin.ModelAdmin):
    list_display = ["name", "partnership", "status"]
    list_filter = ["status", "event"]


@admin.register(PartnershipTicket)
class PartnershipTicketAdmin(admin.ModelAdmin):
    list_display = ["external_id", "partnership", "order_id", "created_at"]
    list_filter = ["partnership__event"]


class PartnershipEmailRecipientInline(admin.TabularInline):
    model = PartnershipEmailRecipient
    extra = 0


@admin.register(PartnershipEmailHistory)
class PartnershipEmailHistoryAdmin(admin.ModelAdmin):
    list_display = ["subject", "partnership_id", "overall_status", "sent_at"]
    list_filter = ["overall_status"]
    inlines = [PartnershipEmailRecipientInline]
