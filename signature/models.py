"""
Journal des signatures des documents de la chancellerie.

Une DocumentSignature est écrite exactement une fois par signature ou rejet
réussi, dans la transaction du workflow, puis n'est plus jamais modifiée ni
supprimée : c'est l'historique définitif du circuit de signature.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from .document_types import DocumentKind
from .exceptions import AppendOnlyViolationError


class SignatureAction(models.TextChoices):
    SIGNED = "signed", "Signé"
    REJECTED = "rejected", "Rejeté"


class DocumentSignatureQuerySet(models.QuerySet):
    """QuerySet sans update() ni delete() : le journal est en ajout seul"""

    def update(self, **kwargs):
        raise AppendOnlyViolationError(
            "les signatures ne peuvent pas être modifiées",
            op="signature.DocumentSignature.update",
        )

    def delete(self):
        raise AppendOnlyViolationError(
            "les signatures ne peuvent pas être supprimées",
            op="signature.DocumentSignature.delete",
        )


class DocumentSignature(models.Model):
    """Entrée immuable du journal de signature (signature ou rejet)"""

    document_type = models.CharField(max_length=20, choices=DocumentKind.choices)
    document_id = models.BigIntegerField()
    action = models.CharField(max_length=20, choices=SignatureAction.choices)

    resolution_text = models.TextField(
        null=True, blank=True, help_text="Résolution (signature)"
    )
    rejection_reason = models.TextField(
        null=True, blank=True, help_text="Motif du rejet"
    )

    # Assignation capturée au moment de la signature
    assigned_executor = models.ForeignKey(
        "chancellery.Contact",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    assigned_due_date = models.DateField(null=True, blank=True)

    signed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="document_signatures",
    )
    signed_at = models.DateTimeField(default=timezone.now, editable=False)

    objects = DocumentSignatureQuerySet.as_manager()

    class Meta:
        db_table = "document_signatures"
        verbose_name = "Signature de document"
        verbose_name_plural = "Signatures de documents"
        indexes = [
            models.Index(
                fields=["document_type", "document_id"],
                name="doc_signatures_document_idx",
            ),
        ]

    def __str__(self):
        return (
            f"{self.get_action_display()} - {self.get_document_type_display()} "
            f"#{self.document_id}"
        )

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AppendOnlyViolationError(
                f"la signature {self.pk} est déjà enregistrée",
                op="signature.DocumentSignature.save",
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AppendOnlyViolationError(
            f"la signature {self.pk} ne peut pas être supprimée",
            op="signature.DocumentSignature.delete",
        )
