"""
Types de documents signables dans le workflow de signature.

La liste est fermée : chaque type est associé à un StoreDescriptor (modèle
Django + noms de colonnes) et aucune chaîne fournie par l'appelant n'entre
jamais dans la construction d'une requête.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator

from django.db import DEFAULT_DB_ALIAS, models

from .exceptions import InvalidDocumentTypeError


class DocumentKind(models.TextChoices):
    """
    Enum des types de documents qui passent par le circuit de signature.

    Utilisé pour :
    - Valider le type reçu dans l'URL de l'API
    - Choisir la table de stockage du document
    - Étiqueter les signatures et la liste des documents en attente
    """

    DECREE = "decree", "Décret"
    REPORT = "report", "Rapport"
    LETTER = "letter", "Courrier"
    INSTRUCTION = "instruction", "Instruction"


@dataclass(frozen=True)
class StoreDescriptor:
    """Table de stockage d'un type de document et colonnes touchées par le workflow"""

    kind: DocumentKind
    model: type[models.Model]
    status_column: str = "status_id"
    executor_column: str = "executor_contact_id"
    due_date_column: str = "due_date"
    updated_by_column: str = "updated_by_id"
    updated_at_column: str = "updated_at"

    @property
    def table(self) -> str:
        return self.model._meta.db_table

    def objects(self, using: str = DEFAULT_DB_ALIAS) -> models.QuerySet:
        return self.model._default_manager.using(using)


@lru_cache(maxsize=None)
def _store_descriptors() -> dict[str, StoreDescriptor]:
    from chancellery.models import Decree, Instruction, Letter, Report

    return {
        DocumentKind.DECREE.value: StoreDescriptor(DocumentKind.DECREE, Decree),
        DocumentKind.REPORT.value: StoreDescriptor(DocumentKind.REPORT, Report),
        DocumentKind.LETTER.value: StoreDescriptor(DocumentKind.LETTER, Letter),
        DocumentKind.INSTRUCTION.value: StoreDescriptor(
            DocumentKind.INSTRUCTION, Instruction
        ),
    }


def is_valid_document_kind(kind) -> bool:
    return isinstance(kind, str) and kind in DocumentKind.values


def resolve_document_kind(kind) -> StoreDescriptor:
    """
    Valide le type de document et retourne sa table de stockage.

    Raises:
        InvalidDocumentTypeError: si le type n'est pas dans la liste autorisée
    """
    if not is_valid_document_kind(kind):
        raise InvalidDocumentTypeError(
            f"type de document invalide: {kind!r}", op="signature.resolve_document_kind"
        )
    return _store_descriptors()[str(kind)]


def iter_store_descriptors() -> Iterator[StoreDescriptor]:
    for kind in DocumentKind.values:
        yield _store_descriptors()[kind]
