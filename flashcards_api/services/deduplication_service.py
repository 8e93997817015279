"""
Deduplication service - removes duplicate flashcards sharing a spanish_word.

Retention policy for every duplicate group:
1. Flashcards with practice history (times_seen > 0 or percentage_correct > 0)
   are always kept.
2. Empty flashcards (never practiced) are deleted.
3. If every member of a group is empty, the one with the lowest id is kept so
   no group disappears entirely.
"""
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from flashcards_api.core.exceptions import DatabaseError, DeduplicationError
from flashcards_api.models.flashcard import Flashcard
from flashcards_api.schemas.maintenance import DeduplicationResult
from flashcards_api.services.flashcard_repository import DuplicateGroup, FlashcardRepository

logger = logging.getLogger(__name__)

TASK_NAME = "deDuplicate"


def select_ids_to_delete(members: List[Flashcard]) -> List[int]:
    """
    Apply the retention policy to one duplicate group.

    Args:
        members: Group members ordered by ascending id

    Returns:
        Ids of the members to delete, never all of them
    """
    to_delete = [flashcard.id for flashcard in members if flashcard.is_empty()]

    # All empty: spare the lowest id
    if members and len(to_delete) == len(members):
        to_delete = to_delete[1:]

    return to_delete


class DeduplicationService:
    """Runs one deduplication pass over the whole flashcard table."""

    def __init__(self, repository: FlashcardRepository):
        self.repository = repository

    def _find_groups(self) -> List[DuplicateGroup]:
        try:
            return self.repository.group_by_natural_key()
        except SQLAlchemyError as exc:
            logger.error(f"Failed to group flashcards by spanish word: {exc}")
            raise DatabaseError("Failed to query duplicate flashcards") from exc

    def run(self) -> DeduplicationResult:
        """
        Find duplicate groups, delete the records the retention policy rejects,
        and report what happened.

        Deletes are committed one at a time. If one fails the run stops and
        raises DeduplicationError; deletes already applied are kept, and
        running again picks up whatever duplicates remain.

        Returns:
            DeduplicationResult with duplicate_groups_found, records_deleted
            and remaining_records
        """
        groups = self._find_groups()

        if not groups:
            logger.info("No duplicate flashcards found")
        else:
            logger.info(f"Found {len(groups)} duplicate groups")

        # Decide everything before the first commit expires the loaded rows
        planned = []
        for group in groups:
            ids_to_delete = select_ids_to_delete(group.members)
            kept_ids = [f.id for f in group.members if f.id not in ids_to_delete]
            logger.info(
                f"Spanish word '{group.key}': keeping {kept_ids}, "
                f"removing {len(ids_to_delete)} duplicates (IDs: {ids_to_delete})"
            )
            planned.append((group.key, ids_to_delete))

        records_deleted = 0
        for key, ids_to_delete in planned:
            for flashcard_id in ids_to_delete:
                try:
                    removed = self.repository.delete_by_id(flashcard_id)
                except SQLAlchemyError as exc:
                    logger.error(
                        f"Deduplication stopped at flashcard {flashcard_id} ('{key}') "
                        f"after deleting {records_deleted} records: {exc}"
                    )
                    raise DeduplicationError(
                        f"Failed to delete duplicate flashcard {flashcard_id}",
                        records_deleted=records_deleted,
                        details={"flashcardId": flashcard_id},
                    ) from exc

                if removed:
                    records_deleted += 1
                else:
                    logger.info(f"Flashcard {flashcard_id} was already deleted, skipping")

        remaining_records = self.repository.count_all()

        logger.info(
            f"Deduplication complete: {len(groups)} groups, "
            f"{records_deleted} deleted, {remaining_records} remaining"
        )

        return DeduplicationResult(
            duplicate_groups_found=len(groups),
            records_deleted=records_deleted,
            remaining_records=remaining_records,
        )
