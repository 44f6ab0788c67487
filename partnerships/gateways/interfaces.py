"""Interfaces of the external collaborators the engine hands work to.

Implementations are synchronous and may raise; callers run them inside the
operation's transaction so a failure leaves nothing persisted.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from partnerships.domain import DeliveryResult, PartnershipId


@dataclass(frozen=True)
class Destination:
    """Resolved recipients of a message about one partnership."""

    partnership_id: PartnershipId
    company_name: str
    to: tuple[str, ...]
    cc: tuple[str, ...] = ()
    reply_to: tuple[str, ...] = ()


class DocumentRenderer(ABC):
    @abstractmethod
    def render(self, template_name: str, context: Mapping[str, Any]) -> bytes:
        """Render a document template with a snapshot context.

        Raises:
            TemplateNotFoundError: If no template exists under that name.
        """
        ...


class ObjectStore(ABC):
    @abstractmethod
    def upload(self, name: str, content: bytes, content_type: str) -> str:
        """Store content and return a URL where it can be retrieved.

        ``name`` is the preferred location. Implementations may store under a
        different name rather than replace an existing object.
        """
        ...


class NotificationGateway(ABC):
    @abstractmethod
    def send(self, destination: Destination, subject: str, body: str) -> DeliveryResult:
        """Send a message and report the delivery status of each recipient."""
        ...
