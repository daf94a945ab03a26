"""
Tests pour la boîte de réception des documents en attente de signature.
"""

from datetime import timedelta

import pytest
from django.db import OperationalError
from django.db.models.query import QuerySet, ValuesIterable
from django.utils import timezone

from chancellery.factories import (
    ContactFactory,
    DecreeFactory,
    InstructionFactory,
    LetterFactory,
    OrganizationFactory,
    ReportFactory,
    UserFactory,
    UserWithContactFactory,
)
from signature.document_list_service import PendingDocument, PendingDocumentAggregator
from signature.exceptions import InternalError
from signature.workflow import ApprovalWorkflow, SignRequest


@pytest.mark.django_db
class TestPendingDocumentAggregator:
    """Union des quatre tables, filtrée sur pending_signature."""

    def test_empty(self):
        assert PendingDocumentAggregator().get_pending_across_kinds() == []

    def test_only_pending_documents(self):
        pending = DecreeFactory()
        DecreeFactory(status_code="draft")
        DecreeFactory(status_code="signed")
        LetterFactory(status_code="signature_rejected")

        documents = PendingDocumentAggregator().get_pending_across_kinds()

        assert [(d.document_type, d.document_id) for d in documents] == [
            ("decree", pending.pk)
        ]

    def test_all_kinds_newest_first(self):
        now = timezone.now()
        decree = DecreeFactory(created_at=now - timedelta(days=3))
        report = ReportFactory(created_at=now - timedelta(days=1))
        letter = LetterFactory(created_at=now)
        instruction = InstructionFactory(created_at=now - timedelta(days=2))

        documents = PendingDocumentAggregator().get_pending_across_kinds()

        assert [(d.document_type, d.document_id) for d in documents] == [
            ("letter", letter.pk),
            ("report", report.pk),
            ("instruction", instruction.pk),
            ("decree", decree.pk),
        ]

    def test_same_id_in_two_tables(self):
        """Les documents sont identifiés par (type, id), pas par l'id seul."""
        decree = DecreeFactory()
        LetterFactory(id=decree.pk)

        documents = PendingDocumentAggregator().get_pending_across_kinds()

        assert sorted((d.document_type, d.document_id) for d in documents) == [
            ("decree", decree.pk),
            ("letter", decree.pk),
        ]

    def test_row_contents(self):
        organization = OrganizationFactory(name="Ministère de l'Intérieur")
        responsible = ContactFactory(full_name="Jeanne Petit")
        author = UserWithContactFactory(first_name="Marc", last_name="Leroy")
        report = ReportFactory(
            name="Rapport d'activité",
            number="R-12",
            organization=organization,
            responsible_contact=responsible,
            created_by=author,
        )

        [document] = PendingDocumentAggregator().get_pending_across_kinds()

        assert document == PendingDocument(
            document_type="report",
            document_id=report.pk,
            name="Rapport d'activité",
            number="R-12",
            document_date=report.document_date,
            type_id=report.type_id,
            type_name=report.type.name,
            organization="Ministère de l'Intérieur",
            organization_id=organization.pk,
            responsible_name="Jeanne Petit",
            responsible_id=responsible.pk,
            created_at=report.created_at,
            created_by="Marc Leroy",
        )

    def test_missing_relations_give_none(self):
        """Organisation, responsable ou auteur absents : None, pas d'erreur."""
        InstructionFactory(
            number=None,
            organization=None,
            responsible_contact=None,
            created_by=UserFactory(),
        )
        DecreeFactory(organization=None, responsible_contact=None, created_by=None)

        documents = PendingDocumentAggregator().get_pending_across_kinds()

        assert len(documents) == 2
        for document in documents:
            assert document.organization is None
            assert document.organization_id is None
            assert document.responsible_name is None
            assert document.responsible_id is None
            assert document.created_by is None

    def test_signed_document_leaves_inbox(self, user):
        decree = DecreeFactory()
        letter = LetterFactory()

        ApprovalWorkflow().sign("decree", decree.pk, SignRequest(), user.pk)

        documents = PendingDocumentAggregator().get_pending_across_kinds()
        assert [(d.document_type, d.document_id) for d in documents] == [
            ("letter", letter.pk)
        ]

    def test_single_query(self, django_assert_num_queries):
        """Une seule requête UNION une fois le registre chargé."""
        DecreeFactory()
        ReportFactory()
        aggregator = PendingDocumentAggregator()
        aggregator.statuses.statuses

        with django_assert_num_queries(1):
            documents = aggregator.get_pending_across_kinds()

        assert len(documents) == 2


def unavailable(self, *args, **kwargs):
    raise OperationalError("base indisponible")


@pytest.mark.django_db
class TestPendingDocumentAggregatorFailures:
    """Une panne de base remonte en InternalError, jamais en erreur brute."""

    def test_read_failure(self, monkeypatch):
        DecreeFactory()
        aggregator = PendingDocumentAggregator()
        aggregator.statuses.statuses
        monkeypatch.setattr(ValuesIterable, "__iter__", unavailable)

        with pytest.raises(InternalError) as exc_info:
            aggregator.get_pending_across_kinds()

        assert "read_pending_documents" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_status_load_failure(self, monkeypatch):
        monkeypatch.setattr(QuerySet, "values_list", unavailable)

        with pytest.raises(InternalError) as exc_info:
            PendingDocumentAggregator().get_pending_across_kinds()

        assert exc_info.value.op == "signature.StatusRegistry"
