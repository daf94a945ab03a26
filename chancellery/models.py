"""
Modèles de la chancellerie : référentiels et documents signables.

Les quatre types de documents (décret, rapport, courrier, instruction) sont
stockés dans des tables séparées mais partagent les mêmes colonnes de statut,
d'exécutant et d'échéance, ce qui permet au workflow de signature de les
traiter de manière uniforme.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone


class DocumentStatus(models.Model):
    """
    Table de référence des statuts de documents.

    Alimentée par les migrations, jamais modifiée par le workflow de signature.
    """

    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)

    class Meta:
        db_table = "document_status"
        verbose_name = "Statut de document"
        verbose_name_plural = "Statuts de documents"

    def __str__(self):
        return f"{self.name} ({self.code})"


class Organization(models.Model):
    name = models.CharField(max_length=255)

    class Meta:
        db_table = "organizations"
        verbose_name = "Organisation"

    def __str__(self):
        return self.name


class Contact(models.Model):
    """Contact de l'annuaire (exécutant, responsable, ou personne derrière un compte)"""

    full_name = models.CharField(max_length=255, help_text="Nom complet affiché")
    organization = models.ForeignKey(
        Organization,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contacts",
    )
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contact",
        help_text="Compte utilisateur associé",
    )

    class Meta:
        db_table = "contacts"
        verbose_name = "Contact"

    def __str__(self):
        return self.full_name


class BaseDocumentType(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    class Meta:
        abstract = True

    def __str__(self):
        return self.name


class DecreeType(BaseDocumentType):
    class Meta:
        db_table = "decree_type"
        verbose_name = "Type de décret"


class ReportType(BaseDocumentType):
    class Meta:
        db_table = "report_type"
        verbose_name = "Type de rapport"


class LetterType(BaseDocumentType):
    class Meta:
        db_table = "letter_type"
        verbose_name = "Type de courrier"


class InstructionType(BaseDocumentType):
    class Meta:
        db_table = "instruction_type"
        verbose_name = "Type d'instruction"


class ChancelleryDocument(models.Model):
    """
    Colonnes communes aux documents de la chancellerie.

    Le champ status n'est écrit que par signature.workflow.ApprovalWorkflow.
    Le type (FK vers la table de types propre à chaque document) est déclaré
    sur chaque modèle concret.
    """

    name = models.CharField(max_length=500)
    number = models.CharField(max_length=100, null=True, blank=True)
    document_date = models.DateField()
    description = models.TextField(null=True, blank=True)

    status = models.ForeignKey(
        DocumentStatus,
        on_delete=models.PROTECT,
        related_name="+",
        verbose_name="Statut du document",
    )
    organization = models.ForeignKey(
        Organization,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    responsible_contact = models.ForeignKey(
        Contact,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Responsable",
    )
    executor_contact = models.ForeignKey(
        Contact,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Exécutant",
    )
    due_date = models.DateField(null=True, blank=True, verbose_name="Échéance")

    created_at = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_at = models.DateTimeField(null=True, blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        abstract = True

    def __str__(self):
        if self.number:
            return f"{self.name} n°{self.number}"
        return self.name


class Decree(ChancelleryDocument):
    type = models.ForeignKey(DecreeType, on_delete=models.PROTECT, related_name="decrees")

    class Meta:
        db_table = "decrees"
        verbose_name = "Décret"


class Report(ChancelleryDocument):
    type = models.ForeignKey(ReportType, on_delete=models.PROTECT, related_name="reports")

    class Meta:
        db_table = "reports"
        verbose_name = "Rapport"


class Letter(ChancelleryDocument):
    type = models.ForeignKey(LetterType, on_delete=models.PROTECT, related_name="letters")

    class Meta:
        db_table = "letters"
        verbose_name = "Courrier"


class Instruction(ChancelleryDocument):
    type = models.ForeignKey(
        InstructionType, on_delete=models.PROTECT, related_name="instructions"
    )

    class Meta:
        db_table = "instructions"
        verbose_name = "Instruction"
