"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models


class Organisation(models.Model):
    """Persistence model for the legal entity organising events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    head_office = models.CharField(max_length=500, blank=True, null=True)
    iban = models.CharField(max_length=64, blank=True, null=True)
    bic = models.CharField(max_length=32, blank=True, null=True)
    creation_location = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateField(blank=True, null=True)
    published_at = models.DateField(blank=True, null=True)
    representative_name = models.CharField(max_length=255, blank=True, null=True)
    representative_role = models.CharField(max_length=255, blank=True, null=True)

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organisation = models.ForeignKey(
        Organisation, on_delete=models.CASCADE, related_name="events"
    )
    name = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()

    class Meta:
        ordering = ["-starts_at"]

    def __str__(self) -> str:
        return self.name


class Company(models.Model):
    """Persistence model for sponsoring companies."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    siret = models.CharField(max_length=14, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    zip_code = models.CharField(max_length=16, blank=True, null=True)
    city = models.CharField(max_length=128, blank=True, null=True)
    country = models.CharField(max_length=128, blank=True, null=True)

    class Meta:
        verbose_name_plural = "companies"

    def __str__(self) -> str:
        return self.name


class SponsoringPack(models.Model):
    """Persistence model for sponsoring packs."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="packs")
    name = models.CharField(max_length=255)
    base_price = models.PositiveIntegerField()
    max_quantity = models.PositiveIntegerField(blank=True, null=True)
    with_booth = models.BooleanField(default=False)
    options = models.ManyToManyField(
        "SponsoringOption", through="PackOption", related_name="packs"
    )

    def __str__(self) -> str:
        return f"{self.name} - {self.base_price}"


class SponsoringOption(models.Model):
    """Persistence model for sponsoring options."""

    class OptionType(models.TextChoices):
        TEXT = "text"
        TYPED_QUANTITATIVE = "typed_quantitative"
        TYPED_NUMBER = "typed_number"
        TYPED_SELECTABLE = "typed_selectable"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="options")
    option_type = models.CharField(
        max_length=32, choices=OptionType.choices, default=OptionType.TEXT
    )
    price = models.PositiveIntegerField(blank=True, null=True)
    fixed_quantity = models.PositiveIntegerField(blank=True, null=True)

    def __str__(self) -> str:
        return f"{self.option_type} - {self.price}"


class OptionTranslation(models.Model):
    """Persistence model for per-language option labels."""

    option = models.ForeignKey(
        SponsoringOption, on_delete=models.CASCADE, related_name="translations"
    )
    language = models.CharField(max_length=8)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["option", "language"], name="unique_option_translation"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.language}: {self.name}"


class SelectableValue(models.Model):
    """Persistence model for the values offered by a selectable option."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    option = models.ForeignKey(
        SponsoringOption, on_delete=models.CASCADE, related_name="selectable_values"
    )
    value = models.CharField(max_length=255)
    price = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return self.value


class PackOption(models.Model):
    """Persistence model for the pack-option association."""

    pack = models.ForeignKey(SponsoringPack, on_delete=models.CASCADE)
    option = models.ForeignKey(SponsoringOption, on_delete=models.CASCADE)
    required = models.BooleanField(default=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["pack", "option"], name="unique_pack_option"),
        ]


class Partnership(models.Model):
    """Persistence model for partnerships."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="partnerships")
    company = models.ForeignKey(
        Company, on_delete=models.CASCADE, related_name="partnerships"
    )
    selected_pack = models.ForeignKey(
        SponsoringPack,
        on_delete=models.SET_NULL,
        related_name="+",
        blank=True,
        null=True,
    )
    contact_name = models.CharField(max_length=255)
    contact_role = models.CharField(max_length=255)
    language = models.CharField(max_length=8)
    phone = models.CharField(max_length=32, blank=True, null=True)
    validated_at = models.DateTimeField(blank=True, null=True)
    declined_at = models.DateTimeField(blank=True, null=True)
    suggestion_pack = models.ForeignKey(
        SponsoringPack,
        on_delete=models.SET_NULL,
        related_name="+",
        blank=True,
        null=True,
    )
    suggestion_sent_at = models.DateTimeField(blank=True, null=True)
    suggestion_approved_at = models.DateTimeField(blank=True, null=True)
    suggestion_declined_at = models.DateTimeField(blank=True, null=True)
    organiser = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="organised_partnerships",
        blank=True,
        null=True,
    )
    pack_price_override = models.PositiveIntegerField(blank=True, null=True)
    booth_location = models.CharField(max_length=255, blank=True, null=True)
    agreement_url = models.URLField(max_length=500, blank=True, null=True)
    agreement_signed_url = models.URLField(max_length=500, blank=True, null=True)
    assignment_url = models.URLField(max_length=500, blank=True, null=True)
    communication_publication_date = models.DateTimeField(blank=True, null=True)
    communication_support_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "company"], name="unique_partnership_per_event_company"
            ),
            models.UniqueConstraint(
                fields=["event", "booth_location"], name="unique_booth_location_per_event"
            ),
        ]
        indexes = [
            models.Index(fields=["event", "created_at"], name="partnership_event_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.company.name} - {self.event.name}"


class PartnershipEmail(models.Model):
    """Persistence model for partnership contact emails."""

    partnership = models.ForeignKey(
        Partnership, on_delete=models.CASCADE, related_name="emails"
    )
    email = models.EmailField()

    def __str__(self) -> str:
        return self.email


class PartnershipOption(models.Model):
    """Persistence model for an option stored against one pack of a partnership.

    ``suggested`` rows belong to the organiser suggestion, the others to the
    registrant selection. The two sets never share rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    partnership = models.ForeignKey(
        Partnership, on_delete=models.CASCADE, related_name="options"
    )
    pack = models.ForeignKey(SponsoringPack, on_delete=models.CASCADE, related_name="+")
    option = models.ForeignKey(SponsoringOption, on_delete=models.CASCADE, related_name="+")
    selected_quantity = models.PositiveIntegerField(blank=True, null=True)
    selected_value = models.ForeignKey(
        SelectableValue, on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    price_override = models.PositiveIntegerField(blank=True, null=True)
    suggested = models.BooleanField(default=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["partnership", "suggested", "pack", "option"],
                name="unique_partnership_option",
            ),
        ]
        indexes = [
            models.Index(
                fields=["partnership", "suggested", "pack"], name="partnership_option_pack_idx"
            ),
        ]


class Billing(models.Model):
    """Persistence model for partnership billing."""

    class Status(models.TextChoices):
        PENDING = "PENDING"
        SENT = "SENT"
        PAID = "PAID"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="billings")
    partnership = models.OneToOneField(
        Partnership, on_delete=models.CASCADE, related_name="billing"
    )
    name = models.CharField(max_length=255)
    contact_first_name = models.CharField(max_length=255)
    contact_last_name = models.CharField(max_length=255)
    contact_email = models.EmailField()
    po = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)

    def __str__(self) -> str:
        return f"{self.name} - {self.status}"


class PartnershipTicket(models.Model):
    """Persistence model for tickets issued to a partnership."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    partnership = models.ForeignKey(
        Partnership, on_delete=models.CASCADE, related_name="tickets"
    )
    order_id = models.CharField(max_length=255)
    external_id = models.CharField(max_length=255)
    url = models.URLField(max_length=500, blank=True, null=True)
    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    email = models.EmailField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["partnership"], name="partnership_ticket_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} - {self.external_id}"


class PartnershipEmailHistory(models.Model):
    """Persistence model for a message sent to a partnership.

    Rows outlive the partnership: the reference carries no database constraint.
    """

    class Status(models.TextChoices):
        SENT = "SENT"
        FAILED = "FAILED"
        PARTIAL = "PARTIAL"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    partnership = models.ForeignKey(
        Partnership,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="email_history",
    )
    sent_at = models.DateTimeField()
    sender_email = models.EmailField()
    subject = models.CharField(max_length=500)
    body = models.TextField()
    overall_status = models.CharField(max_length=16, choices=Status.choices)

    class Meta:
        ordering = ["-sent_at"]
        indexes = [
            models.Index(fields=["partnership", "sent_at"], name="partnership_email_sent_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.subject} - {self.overall_status}"


class PartnershipEmailRecipient(models.Model):
    """Delivery status of one recipient of a sent message."""

    class Status(models.TextChoices):
        SENT = "SENT"
        FAILED = "FAILED"

    history = models.ForeignKey(
        PartnershipEmailHistory, on_delete=models.CASCADE, related_name="recipients"
    )
    email = models.EmailField()
    status = models.CharField(max_length=16, choices=Status.choices)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.email} - {self.status}"
