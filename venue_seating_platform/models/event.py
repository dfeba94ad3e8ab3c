"""
Event and Guest models.

These are owned by the event/guest management side of the platform; the
seating engine only reads them to check event ownership and guest membership.
"""

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .user import User
    from .seating_assignment import SeatingAssignment


class Event(Base):
    """An event owned by a user, under which guests are seated."""

    __tablename__ = "events"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    owner: Mapped["User"] = relationship("User", back_populates="events")
    guests: Mapped[List["Guest"]] = relationship("Guest", back_populates="event")
    seating_assignments: Mapped[List["SeatingAssignment"]] = relationship(
        "SeatingAssignment",
        back_populates="event"
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"


class Guest(Base):
    """A guest on an event's guest list."""

    __tablename__ = "guests"

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    event: Mapped["Event"] = relationship("Event", back_populates="guests")

    def __repr__(self) -> str:
        return f"<Guest(id={self.id}, name='{self.name}', event_id={self.event_id})>"
