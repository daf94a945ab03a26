"""
Configuration pytest partagée.

Ce fichier définit des fixtures réutilisables pour tous les tests.
"""

import pytest
from django.conf import settings
from rest_framework.test import APIClient

from chancellery.factories import (
    ContactFactory,
    DecreeFactory,
    LetterFactory,
    UserWithContactFactory,
)
from signature.document_status import status_registry


# ==============================
# CONFIGURATION DJANGO POUR TESTS
# ==============================

@pytest.fixture(scope="session", autouse=True)
def configure_django_for_tests():
    """Configure Django settings pour les tests."""
    if "testserver" not in settings.ALLOWED_HOSTS:
        settings.ALLOWED_HOSTS.append("testserver")
    yield


@pytest.fixture(autouse=True)
def fresh_status_registry():
    """
    Vide le registre des statuts avant et après chaque test : les ids des
    statuts ne doivent pas fuiter d'une base de test à l'autre.
    """
    status_registry.clear()
    yield
    status_registry.clear()


# ==============================
# FIXTURES API CLIENT
# ==============================


@pytest.fixture
def api_client():
    """Client API REST Framework pour les tests."""
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, user):
    """Client API authentifié avec un utilisateur."""
    api_client.force_authenticate(user=user)
    return api_client


# ==============================
# FIXTURES UTILISATEURS
# ==============================


@pytest.fixture
def user(db):
    """Signataire de test, relié à une fiche contact."""
    return UserWithContactFactory(first_name="Claire", last_name="Martin")


@pytest.fixture
def executor(db):
    """Contact désigné comme exécutant lors d'une signature."""
    return ContactFactory(full_name="Paul Durand")


# ==============================
# FIXTURES DOCUMENTS
# ==============================


@pytest.fixture
def pending_decree(db):
    """Décret en attente de signature."""
    return DecreeFactory()


@pytest.fixture
def pending_letter(db):
    """Courrier en attente de signature."""
    return LetterFactory()


# ==============================
# MARKERS PYTEST
# ==============================


def pytest_configure(config):
    """Configure les markers pytest personnalisés."""
    config.addinivalue_line(
        "markers", "e2e: Tests end-to-end complets"
    )
    config.addinivalue_line(
        "markers", "unit: Tests unitaires"
    )
    config.addinivalue_line(
        "markers", "integration: Tests d'intégration"
    )
    config.addinivalue_line(
        "markers", "slow: Tests lents"
    )
