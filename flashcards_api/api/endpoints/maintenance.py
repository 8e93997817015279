"""
Maintenance endpoints.
"""
from fastapi import APIRouter, Depends
import logging

from flashcards_api.api.endpoints.utils import get_flashcard_repository
from flashcards_api.schemas.maintenance import MaintenanceTaskResponse
from flashcards_api.services.deduplication_service import DeduplicationService, TASK_NAME
from flashcards_api.services.flashcard_repository import FlashcardRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flashcards/maintenance", tags=["maintenance"])


@router.post("/deduplicate", response_model=MaintenanceTaskResponse)
def deduplicate_flashcards(
    repository: FlashcardRepository = Depends(get_flashcard_repository)
):
    """
    Remove duplicate flashcards sharing a spanish word.

    Flashcards with practice history are kept; never-practiced duplicates are
    deleted, always leaving at least one flashcard per word. This permanently
    deletes records.
    """
    result = DeduplicationService(repository).run()
    return MaintenanceTaskResponse(task=TASK_NAME, result=result)
