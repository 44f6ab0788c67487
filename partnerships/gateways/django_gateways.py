"""Django-backed implementations of the external collaborators."""

import logging
from collections.abc import Mapping
from smtplib import SMTPRecipientsRefused
from typing import Any

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage
from django.core.mail import EmailMultiAlternatives
from django.template import TemplateDoesNotExist
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from partnerships.domain import DeliveryResult, DeliveryStatus, RecipientResult
from partnerships.domain.errors import TemplateNotFoundError
from partnerships.gateways.interfaces import (
    Destination,
    DocumentRenderer,
    NotificationGateway,
    ObjectStore,
)

logger = logging.getLogger(__name__)


class TemplateDocumentRenderer(DocumentRenderer):
    """Renders markdown documents with the Django template engine."""

    def render(self, template_name: str, context: Mapping[str, Any]) -> bytes:
        try:
            rendered = render_to_string(template_name, dict(context))
        except TemplateDoesNotExist as exc:
            raise TemplateNotFoundError(template_name) from exc
        return rendered.encode("utf-8")


class StorageObjectStore(ObjectStore):
    """Stores documents through a Django storage backend.

    Existing objects are never overwritten or deleted. When ``name`` is taken
    the storage picks a free name next to it.
    """

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage or default_storage

    def upload(self, name: str, content: bytes, content_type: str) -> str:
        file = ContentFile(content, name=name)
        file.content_type = content_type
        saved_name = self._storage.save(name, file)
        logger.info("Stored %s (%s, %d bytes)", saved_name, content_type, len(content))
        return self._storage.url(saved_name)


class MailNotificationGateway(NotificationGateway):
    """Sends notifications with Django's configured email backend."""

    def __init__(self, from_email: str | None = None) -> None:
        self._from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send(self, destination: Destination, subject: str, body: str) -> DeliveryResult:
        """Send one message to every recipient of the destination.

        Recipients refused by the mail server are reported as FAILED; any other
        transport error propagates.
        """
        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(body),
            from_email=self._from_email,
            to=list(destination.to),
            cc=list(destination.cc),
            reply_to=list(destination.reply_to),
        )
        message.attach_alternative(body, "text/html")
        refused = set()
        try:
            message.send()
        except SMTPRecipientsRefused as exc:
            refused = set(exc.recipients)
            logger.warning(
                "Mail server refused %d recipients of partnership %s",
                len(refused),
                destination.partnership_id,
            )
        recipients = tuple(
            RecipientResult(
                email=email,
                status=DeliveryStatus.FAILED if email in refused else DeliveryStatus.SENT,
            )
            for email in dict.fromkeys((*destination.to, *destination.cc))
        )
        logger.info(
            "Sent email to %d recipients of partnership %s",
            len(recipients) - len(refused),
            destination.partnership_id,
        )
        return DeliveryResult(
            sender_email=self._from_email, subject=subject, body=body, recipients=recipients
        )
