"""
CSV import service - bulk-creates flashcards from a server-side CSV file.

Expected header: spanishword, englishword (case-insensitive). Other columns are
ignored.
"""
import csv
import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from flashcards_api.core.config import settings
from flashcards_api.core.exceptions import DatabaseError, FileProcessingError
from flashcards_api.services.flashcard_repository import FlashcardRepository

logger = logging.getLogger(__name__)

SPANISH_COLUMN = "spanishword"
ENGLISH_COLUMN = "englishword"


def validate_csv_path(csv_file_path: Optional[str]) -> Path:
    """Check the path is present, names a .csv file and exists."""
    if not csv_file_path:
        raise FileProcessingError("CSV file path is required", code="FILE_002")

    if not csv_file_path.lower().endswith(".csv"):
        raise FileProcessingError(
            "File must be a CSV file",
            details={"filePath": csv_file_path},
            code="FILE_003",
        )

    path = Path(csv_file_path)
    if not path.is_file():
        raise FileProcessingError(
            f"CSV file does not exist at path: {csv_file_path}",
            details={"filePath": csv_file_path},
            code="FILE_005",
        )
    return path


def import_flashcards_from_csv(
    repository: FlashcardRepository,
    csv_file_path: Optional[str],
    category: Optional[str] = None
) -> int:
    """
    Create a flashcard for every CSV row whose spanish word is not stored yet.

    Args:
        repository: Flashcard repository to write through
        csv_file_path: Path of the CSV file on the server
        category: Category for new flashcards (defaults to settings.csv_import_category)

    Returns:
        Number of flashcards created

    Raises:
        FileProcessingError: If the path is invalid or the file cannot be parsed
        DatabaseError: If the new flashcards cannot be saved
    """
    path = validate_csv_path(csv_file_path)
    category = category or settings.csv_import_category

    seen_words = set()
    created = 0
    skipped = 0

    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            for line_number, row in enumerate(reader, start=2):
                row = {(k or "").strip().lower(): (v or "") for k, v in row.items()}
                spanish_word = row.get(SPANISH_COLUMN, "").strip()
                english_word = row.get(ENGLISH_COLUMN, "").strip()

                if not spanish_word or not english_word:
                    logger.warning(f"Skipping CSV line {line_number}: missing spanishword or englishword")
                    skipped += 1
                    continue

                if spanish_word in seen_words or repository.exists_with_spanish_word(spanish_word):
                    skipped += 1
                    continue

                repository.create(spanish_word, english_word, category, commit=False)
                seen_words.add(spanish_word)
                created += 1
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        repository.session.rollback()
        logger.error(f"Failed to read CSV file {path}: {exc}")
        raise FileProcessingError(
            f"Failed to process CSV file: {exc}",
            details={"filePath": str(path)},
            code="FILE_004",
        ) from exc

    try:
        repository.session.commit()
    except SQLAlchemyError as exc:
        repository.session.rollback()
        logger.error(f"Failed to save flashcards from {path}: {exc}")
        raise DatabaseError("CSV processing failed during DB operations.", code="FILE_007") from exc

    logger.info(f"{created} flashcards loaded from CSV {path} ({skipped} rows skipped)")
    return created
