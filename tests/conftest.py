"""Global test configuration and fixtures."""

import os

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_FORMAT"] = "console"

import pytest
from fastapi.testclient import TestClient

from studycards.application.services import (
    DeckService,
    ProgressService,
    StudySessionService,
)
from studycards.data.storage import MemoryStorage
from studycards.domain.entities import CardDraft, DeckDraft
from studycards.infra.config.dependencies import (
    get_deck_service,
    get_progress_service,
    get_study_session_service,
    reset_dependencies,
)
from studycards.infra.config.settings import reset_settings
from tests._helpers.fakes import FakeClock, SequentialIds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_factory() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def deck_service(storage, clock, id_factory) -> DeckService:
    return DeckService(storage, clock=clock, id_factory=id_factory)


@pytest.fixture
def progress_service(storage, clock) -> ProgressService:
    return ProgressService(storage, clock=clock)


@pytest.fixture
def session_service(deck_service, progress_service, clock) -> StudySessionService:
    return StudySessionService(deck_service, progress_service, clock=clock)


@pytest.fixture
def spanish_draft() -> DeckDraft:
    return DeckDraft(title="Spanish Vocab", description="basics", category="other")


@pytest.fixture
def hola_card() -> CardDraft:
    return CardDraft(front="Hola", back="Hello")


# ---------- API TESTING FIXTURES ----------


@pytest.fixture
def app(deck_service, progress_service, session_service):
    """FastAPI application wired to the in-memory services of this test."""
    reset_settings()
    reset_dependencies()
    from studycards.main import create_app

    application = create_app()
    application.dependency_overrides[get_deck_service] = lambda: deck_service
    application.dependency_overrides[get_progress_service] = lambda: progress_service
    application.dependency_overrides[get_study_session_service] = (
        lambda: session_service
    )
    yield application
    application.dependency_overrides.clear()
    reset_dependencies()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
