"""
Tests pour l'API du circuit de signature.
"""

from datetime import date

import pytest
from django.db import DatabaseError, OperationalError
from django.db.models.query import QuerySet

from chancellery.factories import DecreeFactory, LetterFactory
from signature.audit_trail import AuditTrail
from signature.document_status import StatusCode, status_registry
from signature.models import DocumentSignature


@pytest.mark.django_db
class TestAuthentication:
    @pytest.mark.parametrize(
        "method, url",
        [
            ("get", "/api/signatures/pending/"),
            ("get", "/api/signatures/decree/1/"),
            ("post", "/api/signatures/decree/1/sign/"),
            ("post", "/api/signatures/decree/1/reject/"),
        ],
    )
    def test_anonymous_refused(self, api_client, method, url):
        response = getattr(api_client, method)(url)
        assert response.status_code in (401, 403)


@pytest.mark.django_db
class TestSignDocumentView:
    def test_sign(self, authenticated_client, user, executor, pending_decree):
        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/",
            {
                "resolution_text": "Approuvé",
                "assigned_executor_id": executor.pk,
                "assigned_due_date": "2025-03-01",
            },
            format="json",
        )

        assert response.status_code == 200
        signed = status_registry.get_status_info(StatusCode.SIGNED)
        assert response.json() == {
            "success": True,
            "status": "OK",
            "new_status": {"id": signed.id, "code": "signed", "name": signed.name},
        }

        pending_decree.refresh_from_db()
        assert pending_decree.status_id == signed.id
        assert pending_decree.executor_contact_id == executor.pk
        assert pending_decree.due_date == date(2025, 3, 1)
        assert DocumentSignature.objects.get().signed_by_id == user.pk

    def test_empty_body(self, authenticated_client, pending_decree):
        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/", {}, format="json"
        )
        assert response.status_code == 200

    def test_invalid_kind(self, authenticated_client):
        response = authenticated_client.post(
            "/api/signatures/invoice/1/sign/", {}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_document_type"
        assert response.json()["success"] is False

    def test_missing_document(self, authenticated_client):
        response = authenticated_client.post(
            "/api/signatures/decree/999999/sign/", {}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_already_signed(self, authenticated_client):
        decree = DecreeFactory(status_code="signed")
        response = authenticated_client.post(
            f"/api/signatures/decree/{decree.pk}/sign/", {}, format="json"
        )
        assert response.status_code == 409
        assert response.json()["error"] == "invalid_state"

    def test_invalid_due_date(self, authenticated_client, pending_decree):
        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/",
            {"assigned_due_date": "not-a-date"},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"
        assert DocumentSignature.objects.count() == 0

    def test_unknown_executor(self, authenticated_client, pending_decree):
        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/",
            {"assigned_executor_id": 999999},
            format="json",
        )
        assert response.status_code == 400
        assert "assigned_executor_id" in response.json()["errors"]

    def test_malformed_body(self, authenticated_client, pending_decree):
        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/",
            {"assigned_executor_id": "douze"},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_internal_error_reported(
        self, authenticated_client, pending_decree, monkeypatch
    ):
        captured = []

        def failing_append(self, *args, **kwargs):
            raise DatabaseError("connexion perdue")

        monkeypatch.setattr(AuditTrail, "append_signature", failing_append)
        monkeypatch.setattr(
            "signature.views.sentry_sdk.capture_exception", captured.append
        )

        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/", {}, format="json"
        )

        assert response.status_code == 500
        assert response.json()["error"] == "internal"
        # Le détail technique n'est pas exposé au client
        assert "connexion perdue" not in response.json()["message"]
        assert len(captured) == 1

    def test_status_load_failure_reported(
        self, authenticated_client, pending_decree, monkeypatch
    ):
        """Une panne de base avant la transaction donne aussi une réponse JSON 500."""
        captured = []

        def unavailable(self, *args, **kwargs):
            raise OperationalError("base indisponible")

        monkeypatch.setattr(QuerySet, "values_list", unavailable)
        monkeypatch.setattr(
            "signature.views.sentry_sdk.capture_exception", captured.append
        )

        response = authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/", {}, format="json"
        )

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "internal",
            "message": "Erreur interne, veuillez réessayer plus tard",
        }
        assert len(captured) == 1


@pytest.mark.django_db
class TestRejectDocumentView:
    def test_reject(self, authenticated_client, pending_letter):
        response = authenticated_client.post(
            f"/api/signatures/letter/{pending_letter.pk}/reject/",
            {"reason": "incomplete"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["new_status"]["code"] == "signature_rejected"
        assert DocumentSignature.objects.get().rejection_reason == "incomplete"

    def test_reject_without_reason(self, authenticated_client, pending_letter):
        response = authenticated_client.post(
            f"/api/signatures/letter/{pending_letter.pk}/reject/", {}, format="json"
        )
        assert response.status_code == 200

    def test_reject_twice(self, authenticated_client, pending_letter):
        url = f"/api/signatures/letter/{pending_letter.pk}/reject/"
        authenticated_client.post(url, {"reason": "incomplete"}, format="json")

        response = authenticated_client.post(url, {"reason": "encore"}, format="json")

        assert response.status_code == 409
        assert DocumentSignature.objects.count() == 1


@pytest.mark.django_db
class TestReadViews:
    def test_pending_documents(self, authenticated_client):
        decree = DecreeFactory()
        LetterFactory(status_code="signed")

        response = authenticated_client.get("/api/signatures/pending/")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["data"][0]["document_type"] == "decree"
        assert body["data"][0]["document_id"] == decree.pk
        assert body["data"][0]["name"] == decree.name

    def test_document_signatures(self, authenticated_client, user, pending_decree):
        authenticated_client.post(
            f"/api/signatures/decree/{pending_decree.pk}/sign/",
            {"resolution_text": "approved", "assigned_due_date": "2025-03-01"},
            format="json",
        )

        response = authenticated_client.get(
            f"/api/signatures/decree/{pending_decree.pk}/"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        entry = body["data"][0]
        assert entry["action"] == "signed"
        assert entry["resolution_text"] == "approved"
        assert entry["assigned_due_date"] == "2025-03-01"
        assert entry["assigned_executor"] is None
        assert entry["signed_by"] == {"id": user.pk, "name": "Claire Martin"}

    def test_pending_documents_database_failure(self, authenticated_client, monkeypatch):
        def unavailable(self, *args, **kwargs):
            raise OperationalError("base indisponible")

        monkeypatch.setattr(QuerySet, "values_list", unavailable)
        monkeypatch.setattr("signature.views.sentry_sdk.capture_exception", lambda e: None)

        response = authenticated_client.get("/api/signatures/pending/")

        assert response.status_code == 500
        assert response.json()["error"] == "internal"

    def test_document_signatures_invalid_kind(self, authenticated_client):
        response = authenticated_client.get("/api/signatures/invoice/1/")
        assert response.status_code == 400
