"""
Custom exceptions for the application.

Every exception carries the HTTP status and the error code reported in the
``{"success": false, "error": {...}}`` envelope.
"""
from typing import Any, Optional


class FlashcardsException(Exception):
    """Base exception for all Flashcards application exceptions."""
    status_code = 500
    code = "SERVER_001"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None, code: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details
        if code is not None:
            self.code = code


class ValidationError(FlashcardsException):
    """Raised when validation fails."""
    status_code = 400
    code = "VALIDATION_005"
    default_message = "Request validation failed"


class NotFoundError(FlashcardsException):
    """Raised when a requested resource is not found."""
    status_code = 404
    code = "NOT_FOUND_001"
    default_message = "Resource not found"


class FlashcardNotFoundError(NotFoundError):
    """Raised when no flashcard exists with the requested id."""
    code = "NOT_FOUND_002"
    default_message = "Flashcard not found"


class FileProcessingError(FlashcardsException):
    """Raised when a CSV file cannot be accepted or read."""
    status_code = 422
    code = "FILE_001"
    default_message = "File processing failed"


class DatabaseError(FlashcardsException):
    """Raised when a database operation fails."""
    status_code = 500
    code = "SERVER_002"
    default_message = "Database operation failed"


class DeduplicationError(DatabaseError):
    """Raised when a deduplication run stops part way through.

    Deletes applied before the failure are not rolled back; ``records_deleted``
    tells how many there were.
    """

    def __init__(self, message: Optional[str] = None, records_deleted: int = 0, details: Any = None):
        super().__init__(message, details={"recordsDeleted": records_deleted, **(details or {})})
        self.records_deleted = records_deleted
