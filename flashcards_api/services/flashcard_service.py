"""
Flashcard service for listing and practice-selection business rules.
"""
import logging
import math
from typing import List, Optional

from flashcards_api.core.config import settings
from flashcards_api.core.exceptions import NotFoundError, ValidationError
from flashcards_api.schemas.flashcard import (
    FlashcardResponse,
    PaginatedFlashcardsResponse,
    PaginationInfo,
)
from flashcards_api.services.flashcard_repository import FlashcardRepository

logger = logging.getLogger(__name__)


def validate_pagination(page: int, limit: int) -> None:
    """Validate page and page size query parameters."""
    if page < 1:
        raise ValidationError("Invalid page number", details={"page": page}, code="VALIDATION_002")
    if limit < 1 or limit > settings.max_page_size:
        raise ValidationError(
            f"Invalid limit (must be between 1 and {settings.max_page_size})",
            details={"limit": limit},
            code="VALIDATION_003",
        )


def get_flashcards_page(
    repository: FlashcardRepository,
    page: int,
    limit: int,
    category: Optional[str] = None
) -> PaginatedFlashcardsResponse:
    """
    Get one page of flashcards with pagination metadata.

    total_pages is ceil(total / limit), so an empty table reports 0 pages.
    Requesting a page past the end returns an empty list, not an error.
    """
    validate_pagination(page, limit)

    flashcards, total = repository.paginate(page, limit, category)
    total_pages = math.ceil(total / limit)

    return PaginatedFlashcardsResponse(
        flashcards=[FlashcardResponse.model_validate(f) for f in flashcards],
        pagination=PaginationInfo(
            current_page=page,
            total_pages=total_pages,
            total_flashcards=total,
        ),
    )


def get_flashcards_needing_practice(
    repository: FlashcardRepository,
    category: str
) -> List[FlashcardResponse]:
    """
    Get flashcards answered correctly less than settings.practice_threshold of the time.

    Raises:
        NotFoundError: If no flashcard in the category needs practice
    """
    flashcards = repository.needing_practice(category, settings.practice_threshold)

    if not flashcards:
        raise NotFoundError(
            f"No flashcards found in category '{category}' that need practice",
            details={
                "category": category,
                "criteria": f"percentageCorrect < {settings.practice_threshold:.0%}",
            },
            code="NOT_FOUND_004",
        )

    return [FlashcardResponse.model_validate(f) for f in flashcards]
