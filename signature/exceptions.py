"""
Erreurs du workflow de signature.

Chaque erreur porte un code stable (utilisé par l'API pour choisir le statut
HTTP) et le nom de l'opération qui a échoué.
"""


class SignatureError(Exception):
    """Erreur de base du workflow de signature."""

    code = "error"

    def __init__(self, message: str, op: str | None = None):
        super().__init__(f"{op}: {message}" if op else message)
        self.message = message
        self.op = op


class NotFoundError(SignatureError):
    """Code de statut inconnu ou document inexistant."""

    code = "not_found"


class InvalidDocumentTypeError(SignatureError):
    """Type de document hors de la liste autorisée."""

    code = "invalid_document_type"


class InvalidStateError(SignatureError):
    """Le document n'est pas en attente de signature."""

    code = "invalid_state"


class InvalidInputError(SignatureError):
    """Donnée d'entrée mal formée (ex: date d'échéance)."""

    code = "invalid_input"


class InternalError(SignatureError):
    """Échec de la base de données non imputable à l'appelant."""

    code = "internal"


class AppendOnlyViolationError(SignatureError):
    """Tentative de modification ou de suppression d'une signature enregistrée."""

    code = "append_only_violation"
