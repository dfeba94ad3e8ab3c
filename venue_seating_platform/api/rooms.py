"""
Room management API endpoints, nested under their venue.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_seating_platform.database import get_db
from venue_seating_platform.utils.dependencies import get_current_user
from venue_seating_platform.models import User
from venue_seating_platform.services.room_service import RoomService
from venue_seating_platform.schemas.venue import RoomCreate, RoomUpdate, RoomResponse

router = APIRouter(prefix="/venues/{venue_id}/rooms", tags=["rooms"])


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    venue_id: UUID,
    room_data: RoomCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a room; names are unique within the venue."""
    return await RoomService(db).create_room(venue_id, current_user.id, room_data)


@router.get("", response_model=List[RoomResponse])
async def get_rooms(
    venue_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List a venue's rooms ordered by floor, then name."""
    return await RoomService(db).get_rooms(venue_id, current_user.id)


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    venue_id: UUID,
    room_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RoomService(db).get_room(venue_id, room_id, current_user.id)


@router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(
    venue_id: UUID,
    room_id: UUID,
    room_data: RoomUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RoomService(db).update_room(venue_id, room_id, current_user.id, room_data)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    venue_id: UUID,
    room_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a room. Its seats must be deleted first."""
    await RoomService(db).delete_room(venue_id, room_id, current_user.id)
