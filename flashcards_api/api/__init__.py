"""
API router aggregation.
"""
from fastapi import APIRouter
from flashcards_api.api.endpoints import flashcards, maintenance

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(maintenance.router)
api_router.include_router(flashcards.router)
