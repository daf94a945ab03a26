import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("chancellery", "0002_seed_document_statuses"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DocumentSignature",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "document_type",
                    models.CharField(
                        choices=[
                            ("decree", "Décret"),
                            ("report", "Rapport"),
                            ("letter", "Courrier"),
                            ("instruction", "Instruction"),
                        ],
                        max_length=20,
                    ),
                ),
                ("document_id", models.BigIntegerField()),
                (
                    "action",
                    models.CharField(
                        choices=[("signed", "Signé"), ("rejected", "Rejeté")],
                        max_length=20,
                    ),
                ),
                (
                    "resolution_text",
                    models.TextField(
                        blank=True, help_text="Résolution (signature)", null=True
                    ),
                ),
                (
                    "rejection_reason",
                    models.TextField(blank=True, help_text="Motif du rejet", null=True),
                ),
                ("assigned_due_date", models.DateField(blank=True, null=True)),
                (
                    "signed_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, editable=False
                    ),
                ),
                (
                    "assigned_executor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="chancellery.contact",
                    ),
                ),
                (
                    "signed_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="document_signatures",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Signature de document",
                "verbose_name_plural": "Signatures de documents",
                "db_table": "document_signatures",
                "indexes": [
                    models.Index(
                        fields=["document_type", "document_id"],
                        name="doc_signatures_document_idx",
                    )
                ],
            },
        ),
    ]
