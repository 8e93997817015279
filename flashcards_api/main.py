from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging
import traceback
from flashcards_api.core.config import settings
from flashcards_api.core.database import init_db
from flashcards_api.core.exceptions import FlashcardsException, DeduplicationError
from flashcards_api.schemas.error import ErrorDetail, ErrorResponse

# Import models to register them with SQLModel
from flashcards_api import models  # noqa: F401

# Import API router
from flashcards_api.api import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Flashcards API", version="1.0.0")


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    """Build the {"success": false, "error": {...}} envelope."""
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, status_code=status_code, details=details)
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True)),
    )


# Add exception handler for validation errors to log details
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors and report them as 400 with field details."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path")),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "VALIDATION_005", "Request validation failed", details)


# Add exception handler for custom application exceptions
@app.exception_handler(FlashcardsException)
async def flashcards_exception_handler(request: Request, exc: FlashcardsException):
    """Handle custom application exceptions."""
    if isinstance(exc, DeduplicationError):
        logger.error(
            f"Deduplication failed on {request.method} {request.url.path} "
            f"after deleting {exc.records_deleted} records",
            exc_info=exc,
        )
    else:
        logger.warning(
            f"Application exception on {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {exc.message}"
        )

    # Server-side failures keep their details out of production responses
    details = exc.details
    if exc.status_code >= 500 and not settings.is_development:
        details = None
    return error_response(exc.status_code, exc.code, exc.message, details)


# Add global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and return the generic server error envelope."""
    # Log full traceback
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    # In development, show full error details
    if settings.is_development:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "SERVER_001",
            str(exc),
            {"type": type(exc).__name__, "traceback": traceback.format_exc()},
        )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SERVER_001", "Internal server error")


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path and status of every request."""
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    init_db()


@app.get("/")
async def root():
    return {
        "message": "Flashcards API",
        "status": "running",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "message": "Service is healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


# Include API router
app.include_router(api_router, prefix=settings.api_prefix)
