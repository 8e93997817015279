"""
Maintenance task schemas.
"""
from datetime import datetime, timezone
from pydantic import Field
from flashcards_api.schemas.utils import CamelModel


class DeduplicationResult(CamelModel):
    """Summary of one deduplication pass."""
    duplicate_groups_found: int = 0
    records_deleted: int = 0
    remaining_records: int = 0


class MaintenanceTaskResponse(CamelModel):
    """Response envelope for maintenance endpoints."""
    success: bool = True
    message: str = "Maintenance task completed successfully"
    task: str
    result: DeduplicationResult
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
