"""
Journal d'audit du circuit de signature.

- append_signature() : appelé uniquement depuis la transaction du workflow
- get_signatures() : historique d'un document, du plus récent au plus ancien,
  enrichi avec les noms de l'exécutant et du signataire
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.db.models import F

from .document_types import StoreDescriptor, resolve_document_kind
from .exceptions import InternalError
from .models import DocumentSignature, SignatureAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactShort:
    id: int
    name: str | None


@dataclass(frozen=True)
class UserShort:
    id: int
    name: str | None


@dataclass(frozen=True)
class SignatureEntry:
    """Signature ou rejet tel que restitué à l'appelant"""

    id: int
    document_type: str
    document_id: int
    action: str
    resolution_text: str | None
    rejection_reason: str | None
    assigned_executor: ContactShort | None
    assigned_due_date: date | None
    signed_by: UserShort | None
    signed_at: datetime


class AuditTrail:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def append_signature(
        self,
        descriptor: StoreDescriptor,
        document_id: int,
        action: SignatureAction,
        actor_id: int,
        *,
        resolution_text: str | None = None,
        rejection_reason: str | None = None,
        assigned_executor_id: int | None = None,
        assigned_due_date: date | None = None,
    ) -> DocumentSignature:
        """
        Ajoute une entrée au journal.

        Ne doit être appelé que dans la transaction du workflow : une entrée
        sans changement de statut associé ne doit jamais être visible.

        Raises:
            InternalError: si aucune transaction n'est ouverte
        """
        if not transaction.get_connection(self.using).in_atomic_block:
            raise InternalError(
                "ajout au journal hors transaction",
                op="signature.AuditTrail.append_signature",
            )

        return DocumentSignature.objects.using(self.using).create(
            document_type=descriptor.kind.value,
            document_id=document_id,
            action=action,
            resolution_text=resolution_text,
            rejection_reason=rejection_reason,
            assigned_executor_id=assigned_executor_id,
            assigned_due_date=assigned_due_date,
            signed_by_id=actor_id,
        )

    def get_signatures(self, kind: str, document_id: int) -> list[SignatureEntry]:
        """
        Historique des signatures d'un document, du plus récent au plus ancien.

        Les noms sont obtenus par jointures (LEFT JOIN) : un contact manquant
        donne un nom à None, jamais une erreur.

        Raises:
            InvalidDocumentTypeError: si le type n'est pas dans la liste autorisée
        """
        descriptor = resolve_document_kind(kind)

        rows = (
            DocumentSignature.objects.using(self.using)
            .filter(document_type=descriptor.kind.value, document_id=document_id)
            .values(
                "id",
                "document_type",
                "document_id",
                "action",
                "resolution_text",
                "rejection_reason",
                "assigned_executor_id",
                "assigned_due_date",
                "signed_by_id",
                "signed_at",
                executor_name=F("assigned_executor__full_name"),
                signed_by_name=F("signed_by__contact__full_name"),
            )
            .order_by("-signed_at", "-id")
        )

        try:
            signatures = [self._to_entry(row) for row in rows]
        except DatabaseError as e:
            logger.exception(
                f"❌ Lecture des signatures impossible pour {descriptor.kind.value} {document_id}"
            )
            raise InternalError(
                "échec de la lecture à l'étape read_signatures",
                op="signature.AuditTrail.get_signatures",
            ) from e

        logger.debug(
            f"🔍 {len(signatures)} signature(s) pour {descriptor.kind.value} {document_id}"
        )
        return signatures

    @staticmethod
    def _to_entry(row: dict) -> SignatureEntry:
        executor = None
        if row["assigned_executor_id"] is not None:
            executor = ContactShort(
                id=row["assigned_executor_id"], name=row["executor_name"]
            )

        signed_by = None
        if row["signed_by_id"] is not None:
            signed_by = UserShort(id=row["signed_by_id"], name=row["signed_by_name"])

        return SignatureEntry(
            id=row["id"],
            document_type=row["document_type"],
            document_id=row["document_id"],
            action=row["action"],
            resolution_text=row["resolution_text"],
            rejection_reason=row["rejection_reason"],
            assigned_executor=executor,
            assigned_due_date=row["assigned_due_date"],
            signed_by=signed_by,
            signed_at=row["signed_at"],
        )
