import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def document_fields():
    """Colonnes communes aux quatre tables de documents."""
    return [
        (
            "id",
            models.BigAutoField(
                auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
            ),
        ),
        ("name", models.CharField(max_length=500)),
        ("number", models.CharField(blank=True, max_length=100, null=True)),
        ("document_date", models.DateField()),
        ("description", models.TextField(blank=True, null=True)),
        (
            "due_date",
            models.DateField(blank=True, null=True, verbose_name="Échéance"),
        ),
        ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
        ("updated_at", models.DateTimeField(blank=True, null=True)),
        (
            "created_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
        (
            "executor_contact",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="chancellery.contact",
                verbose_name="Exécutant",
            ),
        ),
        (
            "organization",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="chancellery.organization",
            ),
        ),
        (
            "responsible_contact",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="chancellery.contact",
                verbose_name="Responsable",
            ),
        ),
        (
            "status",
            models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="+",
                to="chancellery.documentstatus",
                verbose_name="Statut du document",
            ),
        ),
        (
            "updated_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]


def type_fields():
    return [
        (
            "id",
            models.BigAutoField(
                auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
            ),
        ),
        ("name", models.CharField(max_length=255)),
        ("description", models.TextField(blank=True, default="")),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DocumentStatus",
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
                ("code", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=100)),
            ],
            options={
                "verbose_name": "Statut de document",
                "verbose_name_plural": "Statuts de documents",
                "db_table": "document_status",
            },
        ),
        migrations.CreateModel(
            name="Organization",
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
                ("name", models.CharField(max_length=255)),
            ],
            options={
                "verbose_name": "Organisation",
                "db_table": "organizations",
            },
        ),
        migrations.CreateModel(
            name="Contact",
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
                    "full_name",
                    models.CharField(help_text="Nom complet affiché", max_length=255),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="contacts",
                        to="chancellery.organization",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        help_text="Compte utilisateur associé",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="contact",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Contact",
                "db_table": "contacts",
            },
        ),
        migrations.CreateModel(
            name="DecreeType",
            fields=type_fields(),
            options={"verbose_name": "Type de décret", "db_table": "decree_type"},
        ),
        migrations.CreateModel(
            name="ReportType",
            fields=type_fields(),
            options={"verbose_name": "Type de rapport", "db_table": "report_type"},
        ),
        migrations.CreateModel(
            name="LetterType",
            fields=type_fields(),
            options={"verbose_name": "Type de courrier", "db_table": "letter_type"},
        ),
        migrations.CreateModel(
            name="InstructionType",
            fields=type_fields(),
            options={
                "verbose_name": "Type d'instruction",
                "db_table": "instruction_type",
            },
        ),
        migrations.CreateModel(
            name="Decree",
            fields=document_fields()
            + [
                (
                    "type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="decrees",
                        to="chancellery.decreetype",
                    ),
                ),
            ],
            options={"verbose_name": "Décret", "db_table": "decrees"},
        ),
        migrations.CreateModel(
            name="Report",
            fields=document_fields()
            + [
                (
                    "type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reports",
                        to="chancellery.reporttype",
                    ),
                ),
            ],
            options={"verbose_name": "Rapport", "db_table": "reports"},
        ),
        migrations.CreateModel(
            name="Letter",
            fields=document_fields()
            + [
                (
                    "type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="letters",
                        to="chancellery.lettertype",
                    ),
                ),
            ],
            options={"verbose_name": "Courrier", "db_table": "letters"},
        ),
        migrations.CreateModel(
            name="Instruction",
            fields=document_fields()
            + [
                (
                    "type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="instructions",
                        to="chancellery.instructiontype",
                    ),
                ),
            ],
            options={"verbose_name": "Instruction", "db_table": "instructions"},
        ),
    ]
