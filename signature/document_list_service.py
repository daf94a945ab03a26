"""
Service pour générer la liste des documents en attente de signature
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from django.db import DEFAULT_DB_ALIAS, DatabaseError
from django.db.models import CharField, F, Value

from .document_status import StatusCode, StatusRegistry, status_registry
from .document_types import StoreDescriptor, iter_store_descriptors
from .exceptions import InternalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingDocument:
    document_type: str
    document_id: int
    name: str
    number: str | None
    document_date: date
    type_id: int
    type_name: str
    organization: str | None
    organization_id: int | None
    responsible_name: str | None
    responsible_id: int | None
    created_at: datetime
    created_by: str | None


class PendingDocumentAggregator:
    """
    Boîte de réception unifiée : tous les documents au statut
    pending_signature, tous types confondus, du plus récent au plus ancien.
    """

    def __init__(
        self, statuses: StatusRegistry | None = None, using: str = DEFAULT_DB_ALIAS
    ):
        self.statuses = statuses or status_registry
        self.using = using

    def _pending_queryset(self, descriptor: StoreDescriptor, pending_status_id: int):
        """Requête d'un type de document, colonnes alignées pour l'UNION"""
        return (
            descriptor.objects(self.using)
            .filter(**{descriptor.status_column: pending_status_id})
            .order_by()
            .values(
                "id",
                "name",
                "number",
                "document_date",
                "type_id",
                "organization_id",
                "responsible_contact_id",
                "created_at",
                document_type=Value(descriptor.kind.value, output_field=CharField()),
                type_name=F("type__name"),
                organization_name=F("organization__name"),
                responsible_name=F("responsible_contact__full_name"),
                created_by_name=F("created_by__contact__full_name"),
            )
        )

    def get_pending_across_kinds(self) -> list[PendingDocument]:
        """
        Retourne les documents en attente de signature de tous les types.

        Une seule requête (UNION ALL) une fois le registre des statuts chargé.
        """
        pending_status_id = self.statuses.resolve_status_id(
            StatusCode.PENDING_SIGNATURE
        )

        querysets = [
            self._pending_queryset(descriptor, pending_status_id)
            for descriptor in iter_store_descriptors()
        ]
        first, *rest = querysets
        rows = first.union(*rest, all=True).order_by("-created_at")

        try:
            documents = [self._to_pending_document(row) for row in rows]
        except DatabaseError as e:
            logger.exception("❌ Lecture des documents en attente impossible")
            raise InternalError(
                "échec de la lecture à l'étape read_pending_documents",
                op="signature.PendingDocumentAggregator.get_pending_across_kinds",
            ) from e

        logger.debug(f"📋 {len(documents)} document(s) en attente de signature")
        return documents

    @staticmethod
    def _to_pending_document(row: dict) -> PendingDocument:
        return PendingDocument(
            document_type=row["document_type"],
            document_id=row["id"],
            name=row["name"],
            number=row["number"],
            document_date=row["document_date"],
            type_id=row["type_id"],
            type_name=row["type_name"],
            organization=row["organization_name"],
            organization_id=row["organization_id"],
            responsible_name=row["responsible_name"],
            responsible_id=row["responsible_contact_id"],
            created_at=row["created_at"],
            created_by=row["created_by_name"],
        )
