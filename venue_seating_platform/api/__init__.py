"""API endpoints for the Venue Seating Platform."""

from fastapi import APIRouter
from .venues import router as venues_router
from .rooms import router as rooms_router
from .seats import router as seats_router
from .seating import router as seating_router

# Create main API router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(venues_router)
api_router.include_router(rooms_router)
api_router.include_router(seats_router)
api_router.include_router(seating_router)

__all__ = ["api_router"]
