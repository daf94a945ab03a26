"""
Factories pour les tests - Crée des documents de chancellerie complets.

Usage dans les tests:
    from chancellery.factories import DecreeFactory, LetterFactory

    # Décret en attente de signature (statut par défaut)
    decree = DecreeFactory()

    # Courrier déjà signé, avec un exécutant
    letter = LetterFactory(status_code="signed", executor_contact=ContactFactory())
"""

from datetime import date

import factory
from django.contrib.auth import get_user_model
from factory.django import DjangoModelFactory

from chancellery.models import (
    Contact,
    Decree,
    DecreeType,
    DocumentStatus,
    Instruction,
    InstructionType,
    Letter,
    LetterType,
    Organization,
    Report,
    ReportType,
)
from signature.document_status import StatusCode


# ==============================
# UTILISATEURS ET CONTACTS
# ==============================


class UserFactory(DjangoModelFactory):
    """Factory pour créer un compte utilisateur."""

    class Meta:
        model = get_user_model()

    username = factory.Sequence(lambda n: f"agent{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = factory.Faker("first_name", locale="fr_FR")
    last_name = factory.Faker("last_name", locale="fr_FR")


class OrganizationFactory(DjangoModelFactory):
    class Meta:
        model = Organization

    name = factory.Faker("company", locale="fr_FR")


class ContactFactory(DjangoModelFactory):
    """Factory pour créer un contact de l'annuaire (sans compte utilisateur)."""

    class Meta:
        model = Contact

    full_name = factory.Faker("name", locale="fr_FR")
    organization = factory.SubFactory(OrganizationFactory)


class UserWithContactFactory(UserFactory):
    """
    Utilisateur relié à une fiche contact (le nom affiché des signataires
    vient du contact).
    """

    class Meta:
        skip_postgeneration_save = True

    @factory.post_generation
    def contact(obj, create, extracted, **kwargs):
        if not create:
            return
        ContactFactory(user=obj, full_name=f"{obj.first_name} {obj.last_name}")


# ==============================
# DOCUMENTS
# ==============================


class ChancelleryDocumentFactory(DjangoModelFactory):
    """
    Colonnes communes aux quatre documents.

    Le statut est choisi par son code via le paramètre status_code
    (pending_signature par défaut).
    """

    class Meta:
        abstract = True

    class Params:
        status_code = StatusCode.PENDING_SIGNATURE

    name = factory.Faker("sentence", nb_words=4, locale="fr_FR")
    number = factory.Sequence(lambda n: f"{n:04d}")
    document_date = factory.LazyFunction(date.today)
    status = factory.LazyAttribute(
        lambda obj: DocumentStatus.objects.get(code=obj.status_code)
    )
    organization = factory.SubFactory(OrganizationFactory)
    responsible_contact = factory.SubFactory(ContactFactory)
    created_by = factory.SubFactory(UserWithContactFactory)


class DecreeTypeFactory(DjangoModelFactory):
    class Meta:
        model = DecreeType

    name = factory.Iterator(["Décret d'organisation", "Décret du personnel"])


class ReportTypeFactory(DjangoModelFactory):
    class Meta:
        model = ReportType

    name = factory.Iterator(["Rapport mensuel", "Rapport d'incident"])


class LetterTypeFactory(DjangoModelFactory):
    class Meta:
        model = LetterType

    name = factory.Iterator(["Courrier entrant", "Courrier sortant"])


class InstructionTypeFactory(DjangoModelFactory):
    class Meta:
        model = InstructionType

    name = factory.Iterator(["Instruction de service", "Consigne de sécurité"])


class DecreeFactory(ChancelleryDocumentFactory):
    class Meta:
        model = Decree

    type = factory.SubFactory(DecreeTypeFactory)


class ReportFactory(ChancelleryDocumentFactory):
    class Meta:
        model = Report

    type = factory.SubFactory(ReportTypeFactory)


class LetterFactory(ChancelleryDocumentFactory):
    class Meta:
        model = Letter

    type = factory.SubFactory(LetterTypeFactory)


class InstructionFactory(ChancelleryDocumentFactory):
    class Meta:
        model = Instruction

    type = factory.SubFactory(InstructionTypeFactory)


DOCUMENT_FACTORIES = {
    "decree": DecreeFactory,
    "report": ReportFactory,
    "letter": LetterFactory,
    "instruction": InstructionFactory,
}
