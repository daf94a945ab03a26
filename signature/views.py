"""
API du circuit de signature des documents de la chancellerie
"""

import logging

import sentry_sdk
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .audit_trail import AuditTrail
from .document_list_service import PendingDocumentAggregator
from .exceptions import (
    InternalError,
    InvalidDocumentTypeError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    SignatureError,
)
from .serializers import (
    PendingDocumentSerializer,
    RejectDocumentSerializer,
    SignatureEntrySerializer,
    SignDocumentSerializer,
    StatusInfoSerializer,
)
from .workflow import ApprovalWorkflow, SignRequest

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidDocumentTypeError: status.HTTP_400_BAD_REQUEST,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateError: status.HTTP_409_CONFLICT,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(exc: SignatureError) -> Response:
    """Convertit une erreur du workflow en réponse JSON"""
    http_status = ERROR_STATUS.get(
        type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if http_status == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"❌ Erreur interne du circuit de signature: {exc}")
        sentry_sdk.capture_exception(exc)
        message = "Erreur interne, veuillez réessayer plus tard"
    else:
        message = exc.message

    return Response(
        {"success": False, "error": exc.code, "message": message},
        status=http_status,
    )


def invalid_body_response(errors) -> Response:
    return Response(
        {
            "success": False,
            "error": InvalidInputError.code,
            "message": "Données invalides",
            "errors": errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def transition_response(new_status) -> Response:
    return Response(
        {
            "success": True,
            "status": "OK",
            "new_status": StatusInfoSerializer(new_status).data,
        }
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def list_pending_documents(request):
    """
    Liste des documents en attente de signature, tous types confondus

    GET /api/signatures/pending/
    """
    try:
        documents = PendingDocumentAggregator().get_pending_across_kinds()
    except SignatureError as e:
        return error_response(e)

    return Response(
        {
            "success": True,
            "count": len(documents),
            "data": PendingDocumentSerializer(documents, many=True).data,
        }
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def get_document_signatures(request, kind, document_id):
    """
    Historique des signatures d'un document

    GET /api/signatures/<kind>/<id>/
    """
    try:
        signatures = AuditTrail().get_signatures(kind, document_id)
    except SignatureError as e:
        return error_response(e)

    return Response(
        {
            "success": True,
            "count": len(signatures),
            "data": SignatureEntrySerializer(signatures, many=True).data,
        }
    )


@api_view(["POST"])
@permission_classes([permissions.IsAuthenticated])
def sign_document(request, kind, document_id):
    """
    Signer un document en attente de signature

    POST /api/signatures/<kind>/<id>/sign/
    {
        "resolution_text": "Approuvé",
        "assigned_executor_id": 12,
        "assigned_due_date": "2025-03-01"
    }
    """
    serializer = SignDocumentSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_body_response(serializer.errors)

    sign_request = SignRequest(**serializer.validated_data)

    try:
        new_status = ApprovalWorkflow().sign(
            kind, document_id, sign_request, request.user.id
        )
    except SignatureError as e:
        return error_response(e)

    return transition_response(new_status)


@api_view(["POST"])
@permission_classes([permissions.IsAuthenticated])
def reject_document(request, kind, document_id):
    """
    Rejeter la signature d'un document

    POST /api/signatures/<kind>/<id>/reject/
    {"reason": "Pièces manquantes"}
    """
    serializer = RejectDocumentSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_body_response(serializer.errors)

    try:
        new_status = ApprovalWorkflow().reject(
            kind, document_id, serializer.validated_data.get("reason"), request.user.id
        )
    except SignatureError as e:
        return error_response(e)

    return transition_response(new_status)
