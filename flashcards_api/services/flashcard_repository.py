"""
Flashcard repository - CRUD and query operations on the flashcard table.

One repository wraps one database session. Callers construct it per request
(or per script run) and pass it to the services that need it.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportArgumentType=false
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from sqlalchemy import delete
from sqlmodel import Session, select, func

from flashcards_api.models.flashcard import Flashcard

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


@dataclass
class DuplicateGroup:
    """Flashcards sharing one spanish_word, ordered by ascending id."""
    key: str
    members: List[Flashcard] = field(default_factory=list)


class FlashcardRepository:
    """Record store accessor for flashcards."""

    def __init__(self, session: Session):
        self.session = session

    # ========================================================================
    # Reads
    # ========================================================================

    def get(self, flashcard_id: int) -> Optional[Flashcard]:
        return self.session.get(Flashcard, flashcard_id)

    def count_all(self) -> int:
        """Total number of flashcards in the store."""
        return self.session.exec(select(func.count(Flashcard.id))).one()

    def paginate(
        self,
        page: int,
        limit: int,
        category: Optional[str] = None
    ) -> Tuple[List[Flashcard], int]:
        """
        Get one page of flashcards ordered by id.

        Args:
            page: 1-based page number
            limit: Page size
            category: Optional exact category filter

        Returns:
            Tuple of (flashcards on the page, total matching flashcards)
        """
        query = select(Flashcard)
        count_query = select(func.count(Flashcard.id))
        if category:
            query = query.where(Flashcard.category == category)
            count_query = count_query.where(Flashcard.category == category)

        total = self.session.exec(count_query).one()

        offset = (page - 1) * limit
        query = query.order_by(Flashcard.id).offset(offset).limit(limit)
        flashcards = self.session.exec(query).all()
        return list(flashcards), total

    def needing_practice(self, category: str, threshold: float = 0.5) -> List[Flashcard]:
        """Flashcards answered correctly less than ``threshold`` of the time.

        ``category == "All"`` searches every category.
        """
        query = select(Flashcard).where(Flashcard.percentage_correct < threshold)
        if category != ALL_CATEGORIES:
            query = query.where(Flashcard.category == category)
        return list(self.session.exec(query.order_by(Flashcard.id)).all())

    def exists_with_spanish_word(self, spanish_word: str) -> bool:
        query = select(Flashcard.id).where(Flashcard.spanish_word == spanish_word)
        return self.session.exec(query).first() is not None

    def group_by_natural_key(self) -> List[DuplicateGroup]:
        """
        Group flashcards by spanish_word, keeping only groups with more than one member.

        Grouping is exact and case-sensitive. Groups come back sorted by key and
        members by ascending id, so callers see a stable order across runs.
        """
        duplicate_keys = (
            select(Flashcard.spanish_word)
            .group_by(Flashcard.spanish_word)
            .having(func.count(Flashcard.id) > 1)
        )
        members = self.session.exec(
            select(Flashcard)
            .where(Flashcard.spanish_word.in_(duplicate_keys))
            .order_by(Flashcard.spanish_word, Flashcard.id)
        ).all()

        groups: List[DuplicateGroup] = []
        for flashcard in members:
            if not groups or groups[-1].key != flashcard.spanish_word:
                groups.append(DuplicateGroup(key=flashcard.spanish_word))
            groups[-1].members.append(flashcard)
        return groups

    # ========================================================================
    # Writes
    # ========================================================================

    def create(
        self,
        spanish_word: str,
        english_word: str,
        category: Optional[str] = None,
        commit: bool = True
    ) -> Flashcard:
        flashcard = Flashcard(
            spanish_word=spanish_word,
            english_word=english_word,
            category=category or "General",
        )
        self.session.add(flashcard)
        if commit:
            self.session.commit()
            self.session.refresh(flashcard)
        return flashcard

    def update_stats(self, flashcard_id: int, is_correct: bool) -> Optional[Flashcard]:
        """Record a practice attempt. Returns None if the flashcard does not exist."""
        flashcard = self.get(flashcard_id)
        if not flashcard:
            return None

        flashcard.update_stats(is_correct)
        self.session.add(flashcard)
        self.session.commit()
        self.session.refresh(flashcard)
        return flashcard

    def set_favorite(self, flashcard_id: int, favorite: bool) -> Optional[Flashcard]:
        flashcard = self.get(flashcard_id)
        if not flashcard:
            return None

        flashcard.favorite = favorite
        self.session.add(flashcard)
        self.session.commit()
        self.session.refresh(flashcard)
        return flashcard

    def delete_by_id(self, flashcard_id: int) -> bool:
        """
        Delete one flashcard and commit.

        Idempotent: deleting an id that no longer exists returns False instead
        of raising, so overlapping deduplication runs do not fail each other.
        """
        try:
            result = self.session.execute(
                delete(Flashcard)
                .where(Flashcard.id == flashcard_id)
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return result.rowcount > 0
