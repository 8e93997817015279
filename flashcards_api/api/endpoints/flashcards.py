"""
Flashcard CRUD endpoints.
"""
from fastapi import APIRouter, Depends, status
from typing import List, Optional
import logging

from flashcards_api.api.endpoints.utils import get_flashcard_repository
from flashcards_api.core.config import settings
from flashcards_api.core.exceptions import FlashcardNotFoundError
from flashcards_api.schemas.flashcard import (
    FlashcardResponse,
    CreateFlashcardRequest,
    UpdateFlashcardStatsRequest,
    ToggleFavoriteRequest,
    PaginatedFlashcardsResponse,
    CSVUploadRequest,
    CSVUploadResponse,
    DeleteFlashcardResponse,
)
from flashcards_api.services.csv_import_service import import_flashcards_from_csv
from flashcards_api.services.flashcard_repository import FlashcardRepository
from flashcards_api.services.flashcard_service import (
    get_flashcards_page,
    get_flashcards_needing_practice,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


@router.post("/add", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
async def add_flashcard(
    request: CreateFlashcardRequest,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """Create a new flashcard. Duplicate spanish words are allowed here; maintenance cleans them up."""
    flashcard = repository.create(
        spanish_word=request.spanish_word,
        english_word=request.english_word,
        category=request.category,
    )
    logger.info(f"Created flashcard {flashcard.id} for '{flashcard.spanish_word}'")
    return FlashcardResponse.model_validate(flashcard)


@router.put("/update/{flashcard_id}", response_model=FlashcardResponse)
async def update_flashcard(
    flashcard_id: int,
    request: UpdateFlashcardStatsRequest,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """Record one practice attempt for a flashcard."""
    flashcard = repository.update_stats(flashcard_id, request.is_correct)
    if not flashcard:
        raise FlashcardNotFoundError(details={"id": flashcard_id})
    return FlashcardResponse.model_validate(flashcard)


@router.get("/all", response_model=PaginatedFlashcardsResponse)
async def get_flashcards(
    page: int = 1,
    limit: int = settings.default_page_size,
    category: Optional[str] = None,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """
    Get flashcards with pagination.

    Args:
        page: 1-based page number
        limit: Page size (1 to settings.max_page_size)
        category: Optional category filter
    """
    return get_flashcards_page(repository, page, limit, category)


@router.get("/practice/{category}", response_model=List[FlashcardResponse])
async def get_flashcards_most_wrong(
    category: str,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """Get flashcards that need more practice. Use category "All" to search every category."""
    return get_flashcards_needing_practice(repository, category)


@router.put("/favorite/{flashcard_id}", response_model=FlashcardResponse)
async def toggle_favorite(
    flashcard_id: int,
    request: ToggleFavoriteRequest,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """Set or clear the favorite flag of a flashcard."""
    flashcard = repository.set_favorite(flashcard_id, request.favorite)
    if not flashcard:
        raise FlashcardNotFoundError(details={"id": flashcard_id})
    return FlashcardResponse.model_validate(flashcard)


@router.post("/upload_csv", response_model=CSVUploadResponse)
def upload_csv(
    request: CSVUploadRequest,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """Import flashcards from a CSV file on the server."""
    created = import_flashcards_from_csv(repository, request.csv_file_path)
    return CSVUploadResponse(file_path=request.csv_file_path, flashcards_created=created)


@router.delete("/{flashcard_id}", response_model=DeleteFlashcardResponse)
async def delete_flashcard(
    flashcard_id: int,
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """Administrative delete of a single flashcard."""
    if not repository.delete_by_id(flashcard_id):
        raise FlashcardNotFoundError(details={"id": flashcard_id})
    logger.info(f"Deleted flashcard {flashcard_id}")
    return DeleteFlashcardResponse(id=flashcard_id)
