"""
Pydantic schemas for venues and rooms.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from ..models.venue import RoomType


class VenueBase(BaseModel):
    """Base venue schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Venue name")
    description: str = Field("", max_length=5000)
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    phone: Optional[str] = Field(None, max_length=20)
    website: Optional[str] = Field(None, max_length=255)
    is_public: bool = False


class VenueCreate(VenueBase):
    """Schema for creating a new venue."""
    pass


class VenueUpdate(BaseModel):
    """Schema for updating a venue; only fields sent are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, min_length=1, max_length=20)
    phone: Optional[str] = Field(None, max_length=20)
    website: Optional[str] = Field(None, max_length=255)
    is_public: Optional[bool] = None


class VenueResponse(VenueBase):
    """Schema for venue response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    created_at: datetime
    updated_at: datetime


class RoomBase(BaseModel):
    """Base room schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Room name, unique within the venue")
    description: str = Field("", max_length=5000)
    capacity: int = Field(..., gt=0, description="Seat capacity")
    floor: int = Field(1, ge=0)
    room_type: RoomType = RoomType.GENERAL


class RoomCreate(RoomBase):
    """Schema for creating a new room."""
    pass


class RoomUpdate(BaseModel):
    """Schema for updating a room."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    capacity: Optional[int] = Field(None, gt=0)
    floor: Optional[int] = Field(None, ge=0)
    room_type: Optional[RoomType] = None


class RoomResponse(RoomBase):
    """Schema for room response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    venue_id: UUID
    created_at: datetime
    updated_at: datetime
