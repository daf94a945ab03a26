"""
Statuts du workflow de signature et registre des identifiants.

Les statuts sont des données de référence (table document_status alimentée
par les migrations). Le registre les charge une seule fois par processus et
sert ensuite les résolutions code -> id depuis un mapping immuable.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from django.db import DEFAULT_DB_ALIAS, DatabaseError, models

from .exceptions import InternalError, NotFoundError

logger = logging.getLogger(__name__)


class StatusCode(models.TextChoices):
    """Codes de statut manipulés par le workflow de signature"""

    PENDING_SIGNATURE = "pending_signature", "En attente de signature"
    SIGNED = "signed", "Signé"
    SIGNATURE_REJECTED = "signature_rejected", "Signature rejetée"


@dataclass(frozen=True)
class StatusInfo:
    id: int
    code: str
    name: str


class StatusRegistry:
    """
    Cache immuable des statuts de documents.

    - Chargé au premier appel (une requête), puis aucune requête
    - reload() reconstruit le cache si le référentiel change
    - clear() vide le cache (rechargé au prochain appel)
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self._statuses: Mapping[str, StatusInfo] | None = None
        self._lock = threading.Lock()

    def _load(self) -> Mapping[str, StatusInfo]:
        from chancellery.models import DocumentStatus

        try:
            rows = DocumentStatus.objects.using(self.using).values_list(
                "id", "code", "name"
            )
            statuses = MappingProxyType(
                {code: StatusInfo(id=pk, code=code, name=name) for pk, code, name in rows}
            )
        except DatabaseError as e:
            logger.exception("❌ Chargement du registre des statuts impossible")
            raise InternalError(
                "échec du chargement des statuts à l'étape load_statuses",
                op="signature.StatusRegistry",
            ) from e
        logger.info(f"📚 Registre des statuts chargé ({len(statuses)} statuts)")
        return statuses

    @property
    def statuses(self) -> Mapping[str, StatusInfo]:
        statuses = self._statuses
        if statuses is None:
            with self._lock:
                if self._statuses is None:
                    self._statuses = self._load()
                statuses = self._statuses
        return statuses

    def reload(self) -> Mapping[str, StatusInfo]:
        with self._lock:
            self._statuses = self._load()
            return self._statuses

    def clear(self) -> None:
        with self._lock:
            self._statuses = None

    def get_status_info(self, code: str) -> StatusInfo:
        """
        Retourne id, code et libellé d'un statut.

        Raises:
            NotFoundError: si le code n'existe pas dans le référentiel
        """
        try:
            return self.statuses[str(code)]
        except KeyError:
            raise NotFoundError(
                f"statut introuvable: {code}", op="signature.StatusRegistry"
            ) from None

    def resolve_status_id(self, code: str) -> int:
        return self.get_status_info(code).id


status_registry = StatusRegistry()
