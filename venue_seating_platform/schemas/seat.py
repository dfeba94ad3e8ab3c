"""
Pydantic schemas for seat management.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from ..models.seat import SeatCategory, SeatStatus


def _reject_occupied(value: Optional[SeatStatus]) -> Optional[SeatStatus]:
    if value == SeatStatus.OCCUPIED:
        raise ValueError("occupied status is set by seating assignments only")
    return value


class SeatBase(BaseModel):
    """Base seat schema with common fields."""
    row: str = Field(..., min_length=1, max_length=10, description="Seat row")
    number: str = Field(..., min_length=1, max_length=10, description="Seat number")
    category: SeatCategory = SeatCategory.STANDARD
    x: float = 0.0
    y: float = 0.0
    width: float = Field(1.0, gt=0)
    height: float = Field(1.0, gt=0)
    rotation: float = 0.0


class SeatCreate(SeatBase):
    """Schema for creating a new seat."""
    event_id: Optional[UUID] = Field(None, description="Scope the seat to one event")
    status: SeatStatus = SeatStatus.AVAILABLE

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: SeatStatus) -> SeatStatus:
        return _reject_occupied(v)


class SeatUpdate(BaseModel):
    """Schema for updating a seat."""
    row: Optional[str] = Field(None, min_length=1, max_length=10)
    number: Optional[str] = Field(None, min_length=1, max_length=10)
    category: Optional[SeatCategory] = None
    status: Optional[SeatStatus] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    rotation: Optional[float] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[SeatStatus]) -> Optional[SeatStatus]:
        return _reject_occupied(v)


class SeatResponse(SeatBase):
    """Schema for seat response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    room_id: UUID
    event_id: Optional[UUID] = None
    status: SeatStatus
    occupant_guest_id: Optional[UUID] = None
    is_available: bool
    label: str
    created_at: datetime
    updated_at: datetime


class SeatGridCreate(BaseModel):
    """Schema for generating a rectangular block of seats."""
    start_row: str = Field(..., min_length=1, max_length=1, description="First row label, e.g. 'A'")
    end_row: str = Field(..., min_length=1, max_length=1, description="Last row label, inclusive")
    start_number: int = Field(1, ge=0)
    end_number: int = Field(..., ge=0, description="Last seat number, inclusive")
    category: SeatCategory = SeatCategory.STANDARD
    event_id: Optional[UUID] = None
    start_x: float = 0.0
    start_y: float = 0.0
    spacing_x: float = Field(1.2, ge=0)
    spacing_y: float = Field(1.2, ge=0)

    @field_validator("start_row", "end_row")
    @classmethod
    def validate_row_label(cls, v: str) -> str:
        if not v.isprintable() or v.isspace():
            raise ValueError("row label must be a single printable character")
        return v

    @model_validator(mode="after")
    def validate_same_row_kind(self) -> "SeatGridCreate":
        if self.start_row.isalpha() != self.end_row.isalpha():
            raise ValueError("start_row and end_row must both be letters or both be non-letters")
        return self


class SeatsResponse(BaseModel):
    """Schema for a batch of seats."""
    seats: List[SeatResponse]
    total: int
