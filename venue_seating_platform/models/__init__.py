"""
Database models for the Venue Seating Platform.
"""

from .base import Base
from .user import User
from .event import Event, Guest
from .venue import Venue, Room, RoomType
from .seat import Seat, SeatStatus, SeatCategory
from .seating_assignment import SeatingAssignment

__all__ = [
    "Base",
    "User",
    "Event",
    "Guest",
    "Venue",
    "Room",
    "RoomType",
    "Seat",
    "SeatStatus",
    "SeatCategory",
    "SeatingAssignment",
]
