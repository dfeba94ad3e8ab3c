"""
Pydantic schemas for request/response validation.
"""

from .common import ErrorDetail, ErrorResponse, MessageResponse
from .venue import (
    VenueCreate,
    VenueUpdate,
    VenueResponse,
    RoomCreate,
    RoomUpdate,
    RoomResponse,
)
from .seat import SeatCreate, SeatUpdate, SeatResponse, SeatGridCreate, SeatsResponse
from .seating import (
    SeatingAssignmentCreate,
    SeatingAssignmentUpdate,
    SeatingAssignmentResponse,
    SeatingChartResponse,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    "VenueCreate",
    "VenueUpdate",
    "VenueResponse",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "SeatCreate",
    "SeatUpdate",
    "SeatResponse",
    "SeatGridCreate",
    "SeatsResponse",
    "SeatingAssignmentCreate",
    "SeatingAssignmentUpdate",
    "SeatingAssignmentResponse",
    "SeatingChartResponse",
]
