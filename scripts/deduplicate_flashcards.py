"""
Script to find and remove duplicate flashcards.

Runs the same deduplication pass as POST /api/flashcards/maintenance/deduplicate
against the database configured by DATABASE_URL.
"""
import sys
import logging
from sqlmodel import Session
from flashcards_api.core.database import engine
from flashcards_api.core.exceptions import DeduplicationError
from flashcards_api.services.deduplication_service import DeduplicationService
from flashcards_api.services.flashcard_repository import FlashcardRepository

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main() -> int:
    """Main function to remove duplicate flashcards."""
    logger.info("Starting flashcard deduplication...")

    with Session(engine) as session:
        repository = FlashcardRepository(session)
        total_before = repository.count_all()

        try:
            result = DeduplicationService(repository).run()
        except DeduplicationError as e:
            logger.error(f"Deduplication stopped after deleting {e.records_deleted} records: {e}")
            logger.error("Re-run the script to finish removing the remaining duplicates.")
            return 1

        logger.info(f"Duplicate groups found: {result.duplicate_groups_found}")
        logger.info(f"Duplicate flashcards removed: {result.records_deleted}")
        logger.info(f"Flashcards remaining: {result.remaining_records} (was {total_before})")

        # Verify what is left: only groups where every copy has practice history
        remaining = repository.group_by_natural_key()
        if remaining:
            logger.warning(f"{len(remaining)} groups still have several practiced copies:")
            for group in remaining:
                logger.warning(f"  - '{group.key}': {len(group.members)} flashcards")
        else:
            logger.info("No duplicates remain - all fixed!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
