"""
Flashcard schemas.
"""
from pydantic import Field, StrictBool, field_validator
from typing import List, Optional
from datetime import datetime
from flashcards_api.schemas.utils import CamelModel, strip_or_none


class FlashcardResponse(CamelModel):
    """Flashcard response schema."""
    id: int
    spanish_word: str
    english_word: str
    date_last_seen: Optional[datetime] = None
    times_seen: int
    percentage_correct: float
    category: Optional[str] = None
    favorite: bool = False


class CreateFlashcardRequest(CamelModel):
    """Request schema for creating a flashcard."""
    spanish_word: str = Field(..., min_length=1, max_length=100)
    english_word: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = Field(None, validate_default=True, description="Defaults to 'General'")

    @field_validator('category')
    @classmethod
    def default_category(cls, v):
        return strip_or_none(v) or "General"


class UpdateFlashcardStatsRequest(CamelModel):
    """Request schema for recording a practice attempt."""
    is_correct: StrictBool


class ToggleFavoriteRequest(CamelModel):
    """Request schema for setting the favorite flag."""
    favorite: StrictBool


class PaginationInfo(CamelModel):
    """Pagination metadata for flashcard listings."""
    current_page: int
    total_pages: int
    total_flashcards: int


class PaginatedFlashcardsResponse(CamelModel):
    """Response schema for a page of flashcards."""
    flashcards: List[FlashcardResponse]
    pagination: PaginationInfo


class CSVUploadRequest(CamelModel):
    """Request schema for importing flashcards from a server-side CSV file."""
    csv_file_path: Optional[str] = None


class CSVUploadResponse(CamelModel):
    """Response schema for CSV import."""
    success: bool = True
    message: str = "CSV file processed successfully"
    file_path: str
    flashcards_created: int


class DeleteFlashcardResponse(CamelModel):
    """Response schema for administrative delete."""
    success: bool = True
    message: str = "Flashcard deleted successfully"
    id: int
