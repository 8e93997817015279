"""
Flashcard model.
"""
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Flashcard(SQLModel, table=True):
    """Flashcard table - a Spanish/English word pair and its practice history."""
    __tablename__ = "flashcard"

    id: Optional[int] = Field(default=None, primary_key=True)
    spanish_word: str = Field(index=True)  # Natural key for duplicate detection, case-sensitive
    english_word: str
    category: str = Field(default="General")
    times_seen: int = Field(default=0)
    percentage_correct: float = Field(default=0.0)
    date_last_seen: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    favorite: bool = Field(default=False)

    def update_stats(self, is_correct: bool) -> None:
        """Record one practice attempt and recompute the running success rate."""
        self.date_last_seen = utc_now()
        number_correct = self.percentage_correct * self.times_seen

        self.times_seen += 1

        if is_correct:
            number_correct += 1
        self.percentage_correct = round(number_correct / self.times_seen, 2)

    def is_empty(self) -> bool:
        """True when the flashcard has no recorded practice history."""
        return self.percentage_correct == 0 and self.times_seen == 0
