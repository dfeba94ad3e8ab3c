"""
Seating assignment and chart API endpoints for events.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_seating_platform.database import get_db
from venue_seating_platform.utils.dependencies import get_current_user
from venue_seating_platform.models import User
from venue_seating_platform.services.seating_assignment_service import SeatingAssignmentService
from venue_seating_platform.services.seating_chart_service import SeatingChartService
from venue_seating_platform.schemas.seating import (
    SeatingAssignmentCreate, SeatingAssignmentUpdate,
    SeatingAssignmentResponse, SeatingChartResponse
)

router = APIRouter(prefix="/events/{event_id}/seating", tags=["seating"])


@router.post("/assign", response_model=SeatingAssignmentResponse, status_code=status.HTTP_201_CREATED)
async def assign_guest_to_seat(
    event_id: UUID,
    assignment_data: SeatingAssignmentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Assign a guest to a seat.

    Fails with 409 if the seat is taken or the guest already has a seat for
    this event.
    """
    return await SeatingAssignmentService(db).assign_guest_to_seat(
        event_id, current_user.id, assignment_data
    )


@router.get("", response_model=List[SeatingAssignmentResponse])
async def get_seating_assignments(
    event_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await SeatingAssignmentService(db).get_seating_assignments(event_id, current_user.id)


@router.get("/chart", response_model=SeatingChartResponse)
async def get_seating_chart(
    event_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Seat totals and assignments for the event's room."""
    return await SeatingChartService(db).get_seating_chart(event_id, current_user.id)


@router.delete("/assign/{seat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_guest_from_seat(
    event_id: UUID,
    seat_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Release a seat and remove its assignment."""
    await SeatingAssignmentService(db).unassign_guest_from_seat(event_id, seat_id, current_user.id)


@router.patch("/assignments/{assignment_id}", response_model=SeatingAssignmentResponse)
async def update_seating_assignment(
    event_id: UUID,
    assignment_id: UUID,
    update_data: SeatingAssignmentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Move an assignment to another seat and/or edit its notes."""
    return await SeatingAssignmentService(db).update_seating_assignment(
        event_id, assignment_id, current_user.id, update_data
    )
