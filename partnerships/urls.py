from django.urls import path

from partnerships.handlers import (
    BillingStatusView,
    BillingView,
    BoothLocationView,
    BulkEmailView,
    CommunicationPlanView,
    CommunicationView,
    CompanyPartnershipListView,
    DocumentView,
    EmailHistoryView,
    OrganiserView,
    PartnershipContactView,
    PartnershipDecisionView,
    PartnershipDetailView,
    PartnershipListView,
    PricingView,
    SignedAgreementView,
    SuggestionAnswerView,
    SuggestionView,
    TicketDetailView,
    TicketListView,
)

PARTNERSHIP = "events/<str:event_id>/partnerships/<str:partnership_id>"

urlpatterns = [
    path(
        "events/<str:event_id>/partnerships",
        PartnershipListView.as_view(),
        name="partnership-list",
    ),
    path(
        "events/<str:event_id>/partnerships/email",
        BulkEmailView.as_view(),
        name="partnership-bulk-email",
    ),
    path(
        "events/<str:event_id>/communication-plan",
        CommunicationPlanView.as_view(),
        name="communication-plan",
    ),
    path(
        "companies/<str:company_id>/partnerships",
        CompanyPartnershipListView.as_view(),
        name="company-partnership-list",
    ),
    path(PARTNERSHIP, PartnershipDetailView.as_view(), name="partnership-detail"),
    path(f"{PARTNERSHIP}/contact", PartnershipContactView.as_view(), name="partnership-contact"),
    path(
        f"{PARTNERSHIP}/validate",
        PartnershipDecisionView.as_view(outcome="validate"),
        name="partnership-validate",
    ),
    path(
        f"{PARTNERSHIP}/decline",
        PartnershipDecisionView.as_view(outcome="decline"),
        name="partnership-decline",
    ),
    path(f"{PARTNERSHIP}/suggestion", SuggestionView.as_view(), name="partnership-suggestion"),
    path(
        f"{PARTNERSHIP}/suggestion/approve",
        SuggestionAnswerView.as_view(approved=True),
        name="partnership-suggestion-approve",
    ),
    path(
        f"{PARTNERSHIP}/suggestion/decline",
        SuggestionAnswerView.as_view(approved=False),
        name="partnership-suggestion-decline",
    ),
    path(f"{PARTNERSHIP}/pricing", PricingView.as_view(), name="partnership-pricing"),
    path(f"{PARTNERSHIP}/billing", BillingView.as_view(), name="partnership-billing"),
    path(
        f"{PARTNERSHIP}/billing/status",
        BillingStatusView.as_view(),
        name="partnership-billing-status",
    ),
    path(f"{PARTNERSHIP}/tickets", TicketListView.as_view(), name="partnership-tickets"),
    path(
        f"{PARTNERSHIP}/tickets/<str:ticket_id>",
        TicketDetailView.as_view(),
        name="partnership-ticket-detail",
    ),
    path(
        f"{PARTNERSHIP}/agreement",
        DocumentView.as_view(kind="agreement"),
        name="partnership-agreement",
    ),
    path(
        f"{PARTNERSHIP}/agreement/signed",
        SignedAgreementView.as_view(),
        name="partnership-agreement-signed",
    ),
    path(
        f"{PARTNERSHIP}/assignment",
        DocumentView.as_view(kind="assignment"),
        name="partnership-assignment",
    ),
    path(f"{PARTNERSHIP}/booth", BoothLocationView.as_view(), name="partnership-booth"),
    path(f"{PARTNERSHIP}/organiser", OrganiserView.as_view(), name="partnership-organiser"),
    path(
        f"{PARTNERSHIP}/communication",
        CommunicationView.as_view(),
        name="partnership-communication",
    ),
    path(
        f"{PARTNERSHIP}/email-history",
        EmailHistoryView.as_view(),
        name="partnership-email-history",
    ),
]
