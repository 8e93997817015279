"""
Models package - imports all models so they register with SQLModel.
"""
from flashcards_api.models.flashcard import Flashcard

__all__ = [
    'Flashcard',
]
