"""
Pydantic schemas for seating assignments and charts.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, model_validator

from ..models.seat import SeatCategory, SeatStatus


class SeatingAssignmentCreate(BaseModel):
    """Schema for assigning a guest to a seat."""
    guest_id: UUID
    seat_id: UUID
    notes: Optional[str] = Field(None, max_length=500)


class SeatingAssignmentUpdate(BaseModel):
    """Schema for moving an assignment to another seat or editing its notes."""
    seat_id: Optional[UUID] = None
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def validate_not_empty(self) -> "SeatingAssignmentUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one of seat_id or notes must be provided")
        return self


class AssignedSeatSummary(BaseModel):
    """Seat details embedded in an assignment."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    room_id: UUID
    row: str
    number: str
    label: str
    category: SeatCategory
    status: SeatStatus


class SeatingAssignmentResponse(BaseModel):
    """Schema for seating assignment response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    guest_id: UUID
    seat_id: UUID
    assigned_by: UUID
    assigned_at: datetime
    notes: Optional[str] = None
    seat: AssignedSeatSummary


class SeatingChartResponse(BaseModel):
    """Derived seating overview for an event."""
    event_id: UUID
    event_name: str
    venue_id: Optional[UUID] = None
    venue_name: Optional[str] = None
    room_id: Optional[UUID] = None
    room_name: Optional[str] = None
    assignments: List[SeatingAssignmentResponse]
    total_seats: int
    assigned_seats: int
    available_seats: int
