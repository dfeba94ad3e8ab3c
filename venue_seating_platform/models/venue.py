"""
Venue and Room models: the top of the Venue -> Room -> Seat hierarchy.
"""

import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import (
    Boolean, CheckConstraint, Enum, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .user import User
    from .seat import Seat


class RoomType(str, enum.Enum):
    """Enumeration for room types."""
    GENERAL = "general"
    BALLROOM = "ballroom"
    CONFERENCE = "conference"
    THEATER = "theater"
    BANQUET = "banquet"
    OUTDOOR = "outdoor"


class Venue(Base):
    """A physical location owned by a user, containing rooms."""

    __tablename__ = "venues"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Address
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    owner: Mapped["User"] = relationship("User", back_populates="venues")
    rooms: Mapped[List["Room"]] = relationship("Room", back_populates="venue")

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_venues_owner_name"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"


class Room(Base):
    """A space inside a venue with a capacity, containing seats."""

    __tablename__ = "rooms"

    venue_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("venues.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    floor: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    room_type: Mapped[RoomType] = mapped_column(
        Enum(RoomType),
        nullable=False,
        default=RoomType.GENERAL
    )

    venue: Mapped["Venue"] = relationship("Venue", back_populates="rooms")
    seats: Mapped[List["Seat"]] = relationship("Seat", back_populates="room")

    __table_args__ = (
        UniqueConstraint("venue_id", "name", name="uq_rooms_venue_name"),
        CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
        CheckConstraint("floor >= 0", name="ck_rooms_floor_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, name='{self.name}', venue_id={self.venue_id})>"
