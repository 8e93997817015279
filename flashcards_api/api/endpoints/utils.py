"""
Shared dependencies for endpoint operations.
"""
from fastapi import Depends
from sqlmodel import Session

from flashcards_api.core.database import get_session
from flashcards_api.services.flashcard_repository import FlashcardRepository


def get_flashcard_repository(session: Session = Depends(get_session)) -> FlashcardRepository:
    """Dependency building a repository bound to the request's session."""
    return FlashcardRepository(session)
