"""
Seat model for room layouts and guest occupancy.
"""

import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, Enum, Float, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .venue import Room
    from .event import Guest
    from .seating_assignment import SeatingAssignment


class SeatStatus(str, enum.Enum):
    """Enumeration for seat status."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    BLOCKED = "blocked"
    MAINTENANCE = "maintenance"


class SeatCategory(str, enum.Enum):
    """Enumeration for seat categories."""
    STANDARD = "standard"
    VIP = "vip"
    ACCESSIBLE = "accessible"
    PREMIUM = "premium"
    ECONOMY = "economy"
    STANDING = "standing"


class Seat(Base):
    """
    An addressable position in a room.

    ``status`` and ``occupant_guest_id`` are a projection of the seating
    assignment table: OCCUPIED exactly when an occupant is set.
    """

    __tablename__ = "seats"

    room_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    # Optional scoping of this seat inventory to a single event
    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Grid coordinate
    row: Mapped[str] = mapped_column(String(10), nullable=False)
    number: Mapped[str] = mapped_column(String(10), nullable=False)

    category: Mapped[SeatCategory] = mapped_column(
        Enum(SeatCategory),
        default=SeatCategory.STANDARD,
        nullable=False
    )
    status: Mapped[SeatStatus] = mapped_column(
        Enum(SeatStatus),
        default=SeatStatus.AVAILABLE,
        nullable=False,
        index=True
    )

    # Rendering attributes
    x: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    y: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    width: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    height: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    rotation: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # A seated guest cannot be deleted until the engine releases the seat
    occupant_guest_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("guests.id", ondelete="RESTRICT"),
        nullable=True
    )

    room: Mapped["Room"] = relationship("Room", back_populates="seats")
    occupant: Mapped[Optional["Guest"]] = relationship("Guest")
    seating_assignments: Mapped[List["SeatingAssignment"]] = relationship(
        "SeatingAssignment",
        back_populates="seat"
    )

    __table_args__ = (
        UniqueConstraint("room_id", "row", "number", name="uq_seats_room_row_number"),
        UniqueConstraint("occupant_guest_id", name="uq_seats_occupant_guest_id"),
        CheckConstraint("width > 0", name="ck_seats_width_positive"),
        CheckConstraint("height > 0", name="ck_seats_height_positive"),
    )

    @property
    def is_available(self) -> bool:
        """Check if the seat can take a new assignment."""
        return self.status == SeatStatus.AVAILABLE and self.occupant_guest_id is None

    @property
    def label(self) -> str:
        """Human-readable seat label, e.g. ``A12``."""
        return f"{self.row}{self.number}"

    def occupy(self, guest_id: uuid.UUID) -> None:
        self.status = SeatStatus.OCCUPIED
        self.occupant_guest_id = guest_id

    def release(self) -> None:
        self.status = SeatStatus.AVAILABLE
        self.occupant_guest_id = None

    def __repr__(self) -> str:
        return (
            f"<Seat(id={self.id}, room_id={self.room_id}, "
            f"label='{self.label}', status={self.status.value})>"
        )
