"""
Workflow de signature des documents de la chancellerie.

Machine à états à une seule étape :

    pending_signature ──sign()──▶ signed
                      └─reject()─▶ signature_rejected

Chaque transition s'exécute dans une transaction unique :
1. lecture du statut courant (verrou de ligne select_for_update)
2. contrôle du statut (doit être pending_signature)
3. ajout au journal de signature
4. mise à jour conditionnelle du document (WHERE status = pending_signature)

Si la mise à jour conditionnelle ne touche aucune ligne, une transition
concurrente a gagné : la transaction est annulée, journal compris. Toute
exception (y compris une interruption de l'appelant) annule la transaction.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.utils import timezone

from .audit_trail import AuditTrail
from .document_status import StatusCode, StatusInfo, StatusRegistry, status_registry
from .document_types import StoreDescriptor, resolve_document_kind
from .exceptions import (
    InternalError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    SignatureError,
)
from .models import SignatureAction

logger = logging.getLogger(__name__)

DUE_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class SignRequest:
    resolution_text: str | None = None
    assigned_executor_id: int | None = None
    assigned_due_date: str | date | None = None


def parse_due_date(value, op: str = "signature.parse_due_date") -> date | None:
    """
    Convertit la date d'échéance (YYYY-MM-DD, sans heure).

    None ou chaîne vide = pas d'échéance.

    Raises:
        InvalidInputError: pour tout autre format
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        raise InvalidInputError(
            f"date d'échéance invalide (heure non autorisée): {value}", op=op
        )
    if isinstance(value, date):
        return value
    if isinstance(value, str) and DUE_DATE_PATTERN.fullmatch(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise InvalidInputError(
        f"date d'échéance invalide, format attendu YYYY-MM-DD: {value!r}", op=op
    )


class ApprovalWorkflow:
    """
    Signature et rejet des documents en attente de signature.

    Les dépendances (registre des statuts, journal, base) sont injectées pour
    pouvoir tester le workflow avec des substituts.
    """

    def __init__(
        self,
        statuses: StatusRegistry | None = None,
        audit_trail: AuditTrail | None = None,
        using: str = DEFAULT_DB_ALIAS,
    ):
        self.statuses = statuses or status_registry
        self.audit_trail = audit_trail or AuditTrail(using=using)
        self.using = using

    def sign(
        self, kind: str, document_id: int, request: SignRequest, actor_id: int
    ) -> StatusInfo:
        """
        Signe un document en attente de signature.

        L'exécutant et l'échéance ne sont écrits sur le document que s'ils
        sont fournis : une valeur absente conserve la valeur existante.

        Returns:
            StatusInfo du statut signed

        Raises:
            InvalidDocumentTypeError, NotFoundError, InvalidStateError,
            InvalidInputError, InternalError
        """
        op = "signature.ApprovalWorkflow.sign"

        descriptor = resolve_document_kind(kind)
        pending = self.statuses.get_status_info(StatusCode.PENDING_SIGNATURE)
        signed = self.statuses.get_status_info(StatusCode.SIGNED)

        def write(step):
            step("parse_due_date")
            due_date = parse_due_date(request.assigned_due_date, op=op)

            step("append_signature")
            self.audit_trail.append_signature(
                descriptor,
                document_id,
                SignatureAction.SIGNED,
                actor_id,
                resolution_text=request.resolution_text,
                assigned_executor_id=request.assigned_executor_id,
                assigned_due_date=due_date,
            )

            changes = {}
            if request.assigned_executor_id is not None:
                changes[descriptor.executor_column] = request.assigned_executor_id
            if due_date is not None:
                changes[descriptor.due_date_column] = due_date
            return changes

        self._transition(op, descriptor, document_id, pending, signed, actor_id, write)

        logger.info(
            f"✅ Document {descriptor.kind.value} {document_id} signé "
            f"par l'utilisateur {actor_id}"
        )
        return signed

    def reject(
        self, kind: str, document_id: int, reason: str | None, actor_id: int
    ) -> StatusInfo:
        """
        Rejette la signature d'un document en attente de signature.

        Ne touche jamais à l'exécutant ni à l'échéance du document.

        Returns:
            StatusInfo du statut signature_rejected
        """
        op = "signature.ApprovalWorkflow.reject"

        descriptor = resolve_document_kind(kind)
        pending = self.statuses.get_status_info(StatusCode.PENDING_SIGNATURE)
        rejected = self.statuses.get_status_info(StatusCode.SIGNATURE_REJECTED)

        def write(step):
            step("append_signature")
            self.audit_trail.append_signature(
                descriptor,
                document_id,
                SignatureAction.REJECTED,
                actor_id,
                rejection_reason=reason,
            )
            return {}

        self._transition(op, descriptor, document_id, pending, rejected, actor_id, write)

        logger.info(
            f"❌ Signature rejetée pour {descriptor.kind.value} {document_id} "
            f"par l'utilisateur {actor_id}"
        )
        return rejected

    def _transition(
        self,
        op: str,
        descriptor: StoreDescriptor,
        document_id: int,
        pending: StatusInfo,
        target: StatusInfo,
        actor_id: int,
        write,
    ) -> None:
        """
        Exécute garde + écritures dans une seule transaction.

        write(step) effectue les écritures propres à l'action et retourne les
        colonnes supplémentaires à mettre à jour sur le document.
        """
        current_step = "begin"

        def step(name):
            nonlocal current_step
            current_step = name

        try:
            with transaction.atomic(using=self.using):
                step("read_status")
                current_status_id = (
                    descriptor.objects(self.using)
                    .select_for_update()
                    .filter(pk=document_id)
                    .values_list(descriptor.status_column, flat=True)
                    .first()
                )
                if current_status_id is None:
                    raise NotFoundError(
                        f"document introuvable: {descriptor.kind.value} {document_id}",
                        op=op,
                    )
                if current_status_id != pending.id:
                    raise InvalidStateError(
                        f"le document {descriptor.kind.value} {document_id} "
                        f"n'est pas au statut {pending.code}",
                        op=op,
                    )

                changes = write(step)

                step("update_document")
                updated = (
                    descriptor.objects(self.using)
                    .filter(pk=document_id, **{descriptor.status_column: pending.id})
                    .update(
                        **{
                            descriptor.status_column: target.id,
                            descriptor.updated_by_column: actor_id,
                            descriptor.updated_at_column: timezone.now(),
                        },
                        **changes,
                    )
                )
                if updated != 1:
                    # Une transition concurrente a modifié le statut entre la
                    # lecture et l'écriture
                    raise InvalidStateError(
                        f"le document {descriptor.kind.value} {document_id} "
                        f"a changé de statut pendant la transition",
                        op=op,
                    )

                step("commit")
        except SignatureError:
            raise
        except DatabaseError as e:
            logger.exception(
                f"❌ {op}: échec à l'étape {current_step} pour "
                f"{descriptor.kind.value} {document_id}"
            )
            raise InternalError(
                f"échec de la transaction à l'étape {current_step}", op=op
            ) from e
