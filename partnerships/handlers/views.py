"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from partnerships.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from partnerships.handlers import dependencies
from partnerships.handlers.serializers import (
    BillingInputSerializer,
    BillingSerializer,
    BoothLocationSerializer,
    BulkEmailSerializer,
    CommunicationInputSerializer,
    CommunicationPlanSerializer,
    ContactUpdateSerializer,
    EmailHistoryPageSerializer,
    EmailHistoryQuerySerializer,
    InvoiceStatusSerializer,
    OrganiserSerializer,
    PartnershipDetailSerializer,
    PartnershipFiltersSerializer,
    PartnershipListQuerySerializer,
    PartnershipPricingSerializer,
    PartnershipSerializer,
    PricingUpdateSerializer,
    RegisterPartnershipSerializer,
    SuggestPackSerializer,
    TicketHolderUpdateSerializer,
    TicketOrderSerializer,
    TicketSerializer,
)
from partnerships.stores.interfaces import PartnershipFilters

_STATUS_BY_FAMILY = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def error_response(exc: DomainError) -> Response:
    """Map a domain error to its HTTP status with a structured body."""
    code = next(
        (code for family, code in _STATUS_BY_FAMILY if isinstance(exc, family)),
        status.HTTP_400_BAD_REQUEST,
    )
    return Response(
        {"code": exc.code.value, "message": exc.message, "meta": dict(exc.meta)},
        status=code,
    )


class PartnershipAPIView(APIView):
    """Base view turning domain errors into responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


def _validated(serializer_class, data):
    serializer = serializer_class(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer


class PartnershipListView(PartnershipAPIView):
    """Handler for GET/POST /api/events/{event_id}/partnerships"""

    def get(self, request: Request, event_id: str) -> Response:
        query = _validated(PartnershipListQuerySerializer, request.query_params.dict())
        partnerships = dependencies.partnership_service().list_partnerships(
            event_id, query.save(), direction=query.validated_data["direction"]
        )
        return Response(PartnershipSerializer(partnerships, many=True).data)

    def post(self, request: Request, event_id: str) -> Response:
        register = _validated(RegisterPartnershipSerializer, request.data).save()
        partnership_id = dependencies.registration_service().register(event_id, register)
        return Response({"id": str(partnership_id)}, status=status.HTTP_201_CREATED)


class PartnershipDetailView(PartnershipAPIView):
    """Handler for GET/DELETE /api/events/{event_id}/partnerships/{partnership_id}"""

    def get(self, request: Request, event_id: str, partnership_id: str) -> Response:
        detail = dependencies.partnership_service().get_detail(event_id, partnership_id)
        return Response(PartnershipDetailSerializer(detail).data)

    def delete(self, request: Request, event_id: str, partnership_id: str) -> Response:
        dependencies.partnership_service().delete(event_id, partnership_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PartnershipContactView(PartnershipAPIView):
    """Handler for PUT /api/events/{event_id}/partnerships/{partnership_id}/contact"""

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        update = _validated(ContactUpdateSerializer, request.data).save()
        detail = dependencies.partnership_service().update_contact(
            event_id, partnership_id, update
        )
        return Response(PartnershipDetailSerializer(detail).data)


class PartnershipDecisionView(PartnershipAPIView):
    """Handler for POST /api/events/{event_id}/partnerships/{partnership_id}/{validate,decline}"""

    outcome = "validate"

    def post(self, request: Request, event_id: str, partnership_id: str) -> Response:
        service = dependencies.decision_service()
        if self.outcome == "validate":
            partnership = service.validate(event_id, partnership_id)
        else:
            partnership = service.decline(event_id, partnership_id)
        return Response(PartnershipSerializer(partnership).data)


class SuggestionView(PartnershipAPIView):
    """Handler for POST /api/events/{event_id}/partnerships/{partnership_id}/suggestion"""

    def post(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(SuggestPackSerializer, request.data).validated_data
        partnership = dependencies.suggestion_service().suggest(
            event_id,
            partnership_id,
            data["pack_id"],
            data["option_selections"],
            data["language"],
        )
        return Response(PartnershipSerializer(partnership).data, status=status.HTTP_201_CREATED)


class SuggestionAnswerView(PartnershipAPIView):
    """Handler for POST .../suggestion/{approve,decline}"""

    approved = True

    def post(self, request: Request, event_id: str, partnership_id: str) -> Response:
        service = dependencies.suggestion_service()
        if self.approved:
            partnership = service.approve(event_id, partnership_id)
        else:
            partnership = service.decline(event_id, partnership_id)
        return Response(PartnershipSerializer(partnership).data)


class PricingView(PartnershipAPIView):
    """Handler for GET/PUT /api/events/{event_id}/partnerships/{partnership_id}/pricing"""

    def get(self, request: Request, event_id: str, partnership_id: str) -> Response:
        pricing = dependencies.pricing_service().get_pricing(event_id, partnership_id)
        return Response(PartnershipPricingSerializer(pricing).data)

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(PricingUpdateSerializer, request.data).validated_data
        pricing = dependencies.pricing_service().update_pricing(
            event_id,
            partnership_id,
            data["pack_price_override"],
            data.get("options_price_overrides"),
        )
        if pricing is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(PartnershipPricingSerializer(pricing).data)


class BillingView(PartnershipAPIView):
    """Handler for GET/PUT /api/events/{event_id}/partnerships/{partnership_id}/billing"""

    def get(self, request: Request, event_id: str, partnership_id: str) -> Response:
        billing = dependencies.billing_service().get_billing(event_id, partnership_id)
        return Response(BillingSerializer(billing).data)

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(BillingInputSerializer, request.data).save()
        billing = dependencies.billing_service().upsert_billing(event_id, partnership_id, data)
        return Response(BillingSerializer(billing).data)


class BillingStatusView(PartnershipAPIView):
    """Handler for PUT .../billing/status"""

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(InvoiceStatusSerializer, request.data).validated_data
        billing = dependencies.billing_service().update_status(
            event_id, partnership_id, data["status"]
        )
        return Response(BillingSerializer(billing).data)


class TicketListView(PartnershipAPIView):
    """Handler for GET/POST /api/events/{event_id}/partnerships/{partnership_id}/tickets"""

    def get(self, request: Request, event_id: str, partnership_id: str) -> Response:
        tickets = dependencies.ticket_service().list_tickets(event_id, partnership_id)
        return Response(TicketSerializer(tickets, many=True).data)

    def post(self, request: Request, event_id: str, partnership_id: str) -> Response:
        order = _validated(TicketOrderSerializer, request.data).save()
        tickets = dependencies.ticket_service().issue_tickets(event_id, partnership_id, order)
        return Response(TicketSerializer(tickets, many=True).data, status=status.HTTP_201_CREATED)


class TicketDetailView(PartnershipAPIView):
    """Handler for PUT .../tickets/{ticket_id}"""

    def put(self, request: Request, event_id: str, partnership_id: str, ticket_id: str) -> Response:
        data = _validated(TicketHolderUpdateSerializer, request.data).validated_data
        ticket = dependencies.ticket_service().update_ticket(
            event_id, partnership_id, ticket_id, data["first_name"], data["last_name"]
        )
        return Response(TicketSerializer(ticket).data)


class DocumentView(PartnershipAPIView):
    """Handler for POST .../{agreement,assignment}"""

    kind = "agreement"

    def post(self, request: Request, event_id: str, partnership_id: str) -> Response:
        service = dependencies.document_service()
        if self.kind == "agreement":
            url = service.generate_agreement(event_id, partnership_id)
        else:
            url = service.generate_assignment(event_id, partnership_id)
        return Response({"url": url}, status=status.HTTP_201_CREATED)


class SignedAgreementView(PartnershipAPIView):
    """Handler for POST .../agreement/signed (multipart, field ``file``)"""

    def post(self, request: Request, event_id: str, partnership_id: str) -> Response:
        upload = request.FILES.get("file")
        if upload is None:
            return Response(
                {"code": "INVALID_REQUEST", "message": "A file is required", "meta": {}},
                status=status.HTTP_400_BAD_REQUEST,
            )
        url = dependencies.document_service().upload_signed_agreement(
            event_id, partnership_id, upload.read(), upload.content_type
        )
        return Response({"url": url}, status=status.HTTP_201_CREATED)


class BoothLocationView(PartnershipAPIView):
    """Handler for PUT .../booth"""

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(BoothLocationSerializer, request.data).validated_data
        partnership = dependencies.booth_service().assign_location(
            event_id, partnership_id, data["location"]
        )
        return Response(PartnershipSerializer(partnership).data)


class OrganiserView(PartnershipAPIView):
    """Handler for PUT/DELETE .../organiser"""

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(OrganiserSerializer, request.data).validated_data
        partnership = dependencies.partnership_service().assign_organiser(
            event_id, partnership_id, data["email"]
        )
        return Response(PartnershipSerializer(partnership).data)

    def delete(self, request: Request, event_id: str, partnership_id: str) -> Response:
        partnership = dependencies.partnership_service().remove_organiser(
            event_id, partnership_id
        )
        return Response(PartnershipSerializer(partnership).data)


class CommunicationView(PartnershipAPIView):
    """Handler for PUT .../communication"""

    def put(self, request: Request, event_id: str, partnership_id: str) -> Response:
        data = _validated(CommunicationInputSerializer, request.data).validated_data
        partnership = dependencies.communication_service().update(
            event_id,
            partnership_id,
            publication_date=data.get("publication_date"),
            support_url=data.get("support_url"),
        )
        return Response(PartnershipSerializer(partnership).data)


class CommunicationPlanView(PartnershipAPIView):
    """Handler for GET /api/events/{event_id}/communication-plan"""

    def get(self, request: Request, event_id: str) -> Response:
        plan = dependencies.communication_service().plan(event_id)
        return Response(CommunicationPlanSerializer(plan).data)


class BulkEmailView(PartnershipAPIView):
    """Handler for POST /api/events/{event_id}/partnerships/email"""

    def post(self, request: Request, event_id: str) -> Response:
        data = _validated(BulkEmailSerializer, request.data).validated_data
        filters = PartnershipFilters()
        if data.get("filters"):
            filters = PartnershipFiltersSerializer().create(data["filters"])
        sent = dependencies.notification_service().send_bulk(
            event_id, filters, data["subject"], data["body"]
        )
        return Response({"sent": sent})


class EmailHistoryView(PartnershipAPIView):
    """Handler for GET .../email-history?page=&page_size="""

    def get(self, request: Request, event_id: str, partnership_id: str) -> Response:
        query = _validated(EmailHistoryQuerySerializer, request.query_params.dict()).validated_data
        history = dependencies.notification_service().email_history(
            event_id, partnership_id, page=query["page"], page_size=query["page_size"]
        )
        return Response(EmailHistoryPageSerializer(history).data)


class CompanyPartnershipListView(PartnershipAPIView):
    """Handler for GET /api/companies/{company_id}/partnerships"""

    def get(self, request: Request, company_id: str) -> Response:
        partnerships = dependencies.partnership_service().list_company_partnerships(company_id)
        return Response(PartnershipSerializer(partnerships, many=True).data)
