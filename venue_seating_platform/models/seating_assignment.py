"""
SeatingAssignment model binding one guest to one seat for one event.
"""

import uuid
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .event import Event, Guest
    from .seat import Seat
    from .user import User


class SeatingAssignment(Base):
    """Source of truth for seat occupancy within an event."""

    __tablename__ = "seating_assignments"

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    guest_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("guests.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    seat_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("seats.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    assigned_by: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    event: Mapped["Event"] = relationship("Event", back_populates="seating_assignments")
    guest: Mapped["Guest"] = relationship("Guest")
    seat: Mapped["Seat"] = relationship("Seat", back_populates="seating_assignments")
    assigned_by_user: Mapped["User"] = relationship("User")

    __table_args__ = (
        UniqueConstraint("event_id", "seat_id", name="uq_seating_assignments_event_seat"),
        UniqueConstraint("event_id", "guest_id", name="uq_seating_assignments_event_guest"),
    )

    def __repr__(self) -> str:
        return (
            f"<SeatingAssignment(id={self.id}, event_id={self.event_id}, "
            f"guest_id={self.guest_id}, seat_id={self.seat_id})>"
        )
