from partnerships.handlers.views import (
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

__all__ = [
    "BillingStatusView",
    "BillingView",
    "BoothLocationView",
    "BulkEmailView",
    "CommunicationPlanView",
    "CommunicationView",
    "CompanyPartnershipListView",
    "DocumentView",
    "EmailHistoryView",
    "OrganiserView",
    "PartnershipContactView",
    "PartnershipDecisionView",
    "PartnershipDetailView",
    "PartnershipListView",
    "PricingView",
    "SignedAgreementView",
    "SuggestionAnswerView",
    "SuggestionView",
    "TicketDetailView",
    "TicketListView",
]
