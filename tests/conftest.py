import os

# Settings require DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from flashcards_api.core.database import build_engine, get_session
from flashcards_api.main import app
from flashcards_api.models.flashcard import Flashcard
from flashcards_api.services.flashcard_repository import FlashcardRepository


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def repository(session):
    return FlashcardRepository(session)


@pytest.fixture
def client(session):
    """Test client whose requests use the test session."""
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_flashcard(session):
    """Factory inserting a flashcard with any field overridden."""
    def _make(spanish_word="Hola", english_word="Hello", **fields):
        flashcard = Flashcard(spanish_word=spanish_word, english_word=english_word, **fields)
        session.add(flashcard)
        session.commit()
        session.refresh(flashcard)
        return flashcard

    return _make
