"""
Venue management API endpoints.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_seating_platform.database import get_db
from venue_seating_platform.utils.dependencies import get_current_user
from venue_seating_platform.models import User
from venue_seating_platform.services.venue_service import VenueService
from venue_seating_platform.schemas.venue import VenueCreate, VenueUpdate, VenueResponse

router = APIRouter(prefix="/venues", tags=["venues"])


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    venue_data: VenueCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a venue owned by the current user."""
    return await VenueService(db).create_venue(current_user.id, venue_data)


@router.get("", response_model=List[VenueResponse])
async def get_my_venues(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the current user's venues."""
    return await VenueService(db).get_venues_by_owner(current_user.id)


@router.get("/public", response_model=List[VenueResponse])
async def get_public_venues(db: AsyncSession = Depends(get_db)):
    """List venues flagged public. No authentication required."""
    return await VenueService(db).get_public_venues()


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(
    venue_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await VenueService(db).get_venue(venue_id, current_user.id)


@router.patch("/{venue_id}", response_model=VenueResponse)
async def update_venue(
    venue_id: UUID,
    venue_data: VenueUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update the fields sent in the request body."""
    return await VenueService(db).update_venue(venue_id, current_user.id, venue_data)


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(
    venue_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a venue. Its rooms must be deleted first."""
    await VenueService(db).delete_venue(venue_id, current_user.id)
