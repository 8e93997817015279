"""
Error envelope schemas.
"""
from typing import Any, Optional
from flashcards_api.schemas.utils import CamelModel


class ErrorDetail(CamelModel):
    code: str
    message: str
    status_code: int
    details: Optional[Any] = None


class ErrorResponse(CamelModel):
    """Body returned for every failed request."""
    success: bool = False
    error: ErrorDetail
