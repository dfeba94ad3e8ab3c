"""
Seat management API endpoints, nested under their room.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_seating_platform.database import get_db
from venue_seating_platform.utils.dependencies import get_current_user
from venue_seating_platform.models import User
from venue_seating_platform.services.seat_service import SeatService
from venue_seating_platform.schemas.seat import (
    SeatCreate, SeatUpdate, SeatResponse, SeatGridCreate, SeatsResponse
)

router = APIRouter(prefix="/venues/{venue_id}/rooms/{room_id}/seats", tags=["seats"])


@router.post("", response_model=SeatResponse, status_code=status.HTTP_201_CREATED)
async def create_seat(
    venue_id: UUID,
    room_id: UUID,
    seat_data: SeatCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create one seat; (row, number) must be unique within the room."""
    return await SeatService(db).create_seat(venue_id, room_id, current_user.id, seat_data)


@router.post("/grid", response_model=SeatsResponse, status_code=status.HTTP_201_CREATED)
async def create_seat_grid(
    venue_id: UUID,
    room_id: UUID,
    grid_data: SeatGridCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Generate a rectangular block of seats.

    All seats are created in one transaction; if any coordinate already
    exists in the room, nothing is created.
    """
    seats = await SeatService(db).create_seat_grid(venue_id, room_id, current_user.id, grid_data)
    return SeatsResponse(
        seats=[SeatResponse.model_validate(seat) for seat in seats],
        total=len(seats)
    )


@router.get("", response_model=List[SeatResponse])
async def get_seats(
    venue_id: UUID,
    room_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List a room's seats ordered by row, then number."""
    return await SeatService(db).get_seats(venue_id, room_id, current_user.id)


@router.get("/{seat_id}", response_model=SeatResponse)
async def get_seat(
    venue_id: UUID,
    room_id: UUID,
    seat_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await SeatService(db).get_seat(venue_id, room_id, seat_id, current_user.id)


@router.patch("/{seat_id}", response_model=SeatResponse)
async def update_seat(
    venue_id: UUID,
    room_id: UUID,
    seat_id: UUID,
    seat_data: SeatUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update layout attributes or a manual status (never ``occupied``)."""
    return await SeatService(db).update_seat(venue_id, room_id, seat_id, current_user.id, seat_data)


@router.delete("/{seat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_seat(
    venue_id: UUID,
    room_id: UUID,
    seat_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a seat. Occupied seats must be unassigned first."""
    await SeatService(db).delete_seat(venue_id, room_id, seat_id, current_user.id)
