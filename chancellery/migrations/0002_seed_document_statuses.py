from django.db import migrations

DOCUMENT_STATUSES = [
    ("draft", "Brouillon"),
    ("pending_signature", "En attente de signature"),
    ("signed", "Signé"),
    ("signature_rejected", "Signature rejetée"),
]


def seed_statuses(apps, schema_editor):
    DocumentStatus = apps.get_model("chancellery", "DocumentStatus")
    for code, name in DOCUMENT_STATUSES:
        DocumentStatus.objects.update_or_create(code=code, defaults={"name": name})


def unseed_statuses(apps, schema_editor):
    DocumentStatus = apps.get_model("chancellery", "DocumentStatus")
    DocumentStatus.objects.filter(
        code__in=[code for code, _ in DOCUMENT_STATUSES]
    ).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("chancellery", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_statuses, unseed_statuses),
    ]
