import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Organisation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("head_office", models.CharField(blank=True, max_length=500, null=True)),
                ("iban", models.CharField(blank=True, max_length=64, null=True)),
                ("bic", models.CharField(blank=True, max_length=32, null=True)),
                ("creation_location", models.CharField(blank=True, max_length=255, null=True)),
                ("created_at", models.DateField(blank=True, null=True)),
                ("published_at", models.DateField(blank=True, null=True)),
                ("representative_name", models.CharField(blank=True, max_length=255, null=True)),
                ("representative_role", models.CharField(blank=True, max_length=255, null=True)),
            ],
        ),
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("siret", models.CharField(blank=True, max_length=14, null=True)),
                ("address", models.CharField(blank=True, max_length=255, null=True)),
                ("zip_code", models.CharField(blank=True, max_length=16, null=True)),
                ("city", models.CharField(blank=True, max_length=128, null=True)),
                ("country", models.CharField(blank=True, max_length=128, null=True)),
            ],
            options={
                "verbose_name_plural": "companies",
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                (
                    "organisation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="events",
                        to="partnerships.organisation",
                    ),
                ),
            ],
            options={
                "ordering": ["-starts_at"],
            },
        ),
        migrations.CreateModel(
            name="SponsoringOption",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "option_type",
                    models.CharField(
                        choices=[
                            ("text", "Text"),
                            ("typed_quantitative", "Typed Quantitative"),
                            ("typed_number", "Typed Number"),
                            ("typed_selectable", "Typed Selectable"),
                        ],
                        default="text",
                        max_length=32,
                    ),
                ),
                ("price", models.PositiveIntegerField(blank=True, null=True)),
                ("fixed_quantity", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="options",
                        to="partnerships.event",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="SponsoringPack",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("base_price", models.PositiveIntegerField()),
                ("max_quantity", models.PositiveIntegerField(blank=True, null=True)),
                ("with_booth", models.BooleanField(default=False)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="packs",
                        to="partnerships.event",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="OptionTranslation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("language", models.CharField(max_length=8)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "option",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="partnerships.sponsoringoption",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("option", "language"), name="unique_option_translation"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SelectableValue",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("value", models.CharField(max_length=255)),
                ("price", models.PositiveIntegerField(default=0)),
                (
                    "option",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="selectable_values",
                        to="partnerships.sponsoringoption",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="PackOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("required", models.BooleanField(default=False)),
                (
                    "option",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="partnerships.sponsoringoption",
                    ),
                ),
                (
                    "pack",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="partnerships.sponsoringpack",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("pack", "option"), name="unique_pack_option")
                ],
            },
        ),
        migrations.AddField(
            model_name="sponsoringpack",
            name="options",
            field=models.ManyToManyField(
                related_name="packs",
                through="partnerships.PackOption",
                to="partnerships.sponsoringoption",
            ),
        ),
        migrations.CreateModel(
            name="Partnership",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("contact_name", models.CharField(max_length=255)),
                ("contact_role", models.CharField(max_length=255)),
                ("language", models.CharField(max_length=8)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("validated_at", models.DateTimeField(blank=True, null=True)),
                ("declined_at", models.DateTimeField(blank=True, null=True)),
                ("suggestion_sent_at", models.DateTimeField(blank=True, null=True)),
                ("suggestion_approved_at", models.DateTimeField(blank=True, null=True)),
                ("suggestion_declined_at", models.DateTimeField(blank=True, null=True)),
                ("pack_price_override", models.PositiveIntegerField(blank=True, null=True)),
                ("booth_location", models.CharField(blank=True, max_length=255, null=True)),
                ("agreement_url", models.URLField(blank=True, max_length=500, null=True)),
                ("agreement_signed_url", models.URLField(blank=True, max_length=500, null=True)),
                ("assignment_url", models.URLField(blank=True, max_length=500, null=True)),
                ("communication_publication_date", models.DateTimeField(blank=True, null=True)),
                ("communication_support_url", models.URLField(blank=True, max_length=500, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="partnerships",
                        to="partnerships.company",
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="partnerships",
                        to="partnerships.event",
                    ),
                ),
                (
                    "organiser",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="organised_partnerships",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "selected_pack",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="partnerships.sponsoringpack",
                    ),
                ),
                (
                    "suggestion_pack",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="partnerships.sponsoringpack",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["event", "created_at"], name="partnership_event_created_idx")
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "company"), name="unique_partnership_per_event_company"
                    ),
                    models.UniqueConstraint(
                        fields=("event", "booth_location"), name="unique_booth_location_per_event"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PartnershipEmail",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=254)),
                (
                    "partnership",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="emails",
                        to="partnerships.partnership",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="PartnershipOption",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("selected_quantity", models.PositiveIntegerField(blank=True, null=True)),
                ("price_override", models.PositiveIntegerField(blank=True, null=True)),
                ("suggested", models.BooleanField(default=False)),
                (
                    "option",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="partnerships.sponsoringoption",
                    ),
                ),
                (
                    "pack",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="partnerships.sponsoringpack",
                    ),
                ),
                (
                    "partnership",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="options",
                        to="partnerships.partnership",
                    ),
                ),
                (
                    "selected_value",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="partnerships.selectablevalue",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["partnership", "suggested", "pack"],
                        name="partnership_option_pack_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("partnership", "suggested", "pack", "option"),
                        name="unique_partnership_option",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Billing",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("contact_first_name", models.CharField(max_length=255)),
                ("contact_last_name", models.CharField(max_length=255)),
                ("contact_email", models.EmailField(max_length=254)),
                ("po", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("SENT", "Sent"), ("PAID", "Paid")],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="billings",
                        to="partnerships.event",
                    ),
                ),
                (
                    "partnership",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="billing",
                        to="partnerships.partnership",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="PartnershipTicket",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_id", models.CharField(max_length=255)),
                ("external_id", models.CharField(max_length=255)),
                ("url", models.URLField(blank=True, max_length=500, null=True)),
                ("first_name", models.CharField(max_length=255)),
                ("last_name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "partnership",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tickets",
                        to="partnerships.partnership",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["partnership"], name="partnership_ticket_idx")],
            },
        ),        migrations.CreateModel(
            name="PartnershipEmailHistory",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("sent_at", models.DateTimeField()),
                ("sender_email", models.EmailField(max_length=254)),
                ("subject", models.CharField(max_length=500)),
                ("body", models.TextField()),
                (
                    "overall_status",
                    models.CharField(
                        choices=[("SENT", "Sent"), ("FAILED", "Failed"), ("PARTIAL", "Partial")],
                        max_length=16,
                    ),
                ),
                (
                    "partnership",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="email_history",
                        to="partnerships.partnership",
                    ),
                ),
            ],
            options={
                "ordering": ["-sent_at"],
                "indexes": [
                    models.Index(fields=["partnership", "sent_at"], name="partnership_email_sent_idx")
                ],
            },
        ),
        migrations.CreateModel(
            name="PartnershipEmailRecipient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=254)),
                (
                    "status",
                    models.CharField(choices=[("SENT", "Sent"), ("FAILED", "Failed")], max_length=16),
                ),
                (
                    "history",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recipients",
                        to="partnerships.partnershipemailhistory",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
