"""
Ownership checks shared by every store and engine operation.

Services depend on the ``AccessPolicy`` protocol rather than doing the owner
chain lookups inline; ``OwnershipPolicy`` is the database-backed
implementation used by the API.
"""

import logging
from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..models import Event, Guest, Room, Seat, Venue
from ..utils.exceptions import (
    EventAccessDeniedError,
    EventNotFoundError,
    GuestNotFoundError,
    RoomAccessDeniedError,
    RoomNotFoundError,
    SeatAccessDeniedError,
    SeatNotFoundError,
    VenueAccessDeniedError,
    VenueNotFoundError,
)
from ..utils.logging_config import log_security_event

logger = logging.getLogger(__name__)


class AccessPolicy(Protocol):
    """Resolve a resource for an acting user, or raise NotFound / AccessDenied."""

    async def authorize_venue(self, actor_id: UUID, venue_id: UUID) -> Venue:
        ...

    async def authorize_room(
        self, actor_id: UUID, room_id: UUID, venue_id: Optional[UUID] = None
    ) -> Room:
        ...

    async def authorize_seat(
        self, actor_id: UUID, seat_id: UUID, room_id: Optional[UUID] = None
    ) -> Seat:
        ...

    async def authorize_event(self, actor_id: UUID, event_id: UUID) -> Event:
        ...

    async def guest_in_event(self, guest_id: UUID, event_id: UUID) -> Guest:
        ...


class OwnershipPolicy:
    """
    Owner-chain authorization against the database.

    Venues are checked against ``Venue.owner_id``; rooms and seats through the
    owning venue; events against ``Event.owner_id``. Records are re-fetched on
    every call so a stale object held by the caller can never grant access.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authorize_venue(self, actor_id: UUID, venue_id: UUID) -> Venue:
        venue = await self.db.get(Venue, venue_id, populate_existing=True)
        if venue is None:
            raise VenueNotFoundError(venue_id)
        if venue.owner_id != actor_id:
            self._denied("venue", venue_id, actor_id)
            raise VenueAccessDeniedError(venue_id)
        return venue

    async def authorize_room(
        self, actor_id: UUID, room_id: UUID, venue_id: Optional[UUID] = None
    ) -> Room:
        result = await self.db.execute(
            select(Room)
            .options(joinedload(Room.venue))
            .where(Room.id == room_id)
            .execution_options(populate_existing=True)
        )
        room = result.scalar_one_or_none()

        # A room addressed under the wrong venue does not exist there
        if room is None or (venue_id is not None and room.venue_id != venue_id):
            raise RoomNotFoundError(room_id)
        if room.venue.owner_id != actor_id:
            self._denied("room", room_id, actor_id)
            raise RoomAccessDeniedError(room_id)
        return room

    async def authorize_seat(
        self, actor_id: UUID, seat_id: UUID, room_id: Optional[UUID] = None
    ) -> Seat:
        result = await self.db.execute(
            select(Seat)
            .options(joinedload(Seat.room).joinedload(Room.venue))
            .where(Seat.id == seat_id)
            .execution_options(populate_existing=True)
        )
        seat = result.scalar_one_or_none()

        if seat is None or (room_id is not None and seat.room_id != room_id):
            raise SeatNotFoundError(seat_id)
        if seat.room.venue.owner_id != actor_id:
            self._denied("seat", seat_id, actor_id)
            raise SeatAccessDeniedError(seat_id)
        return seat

    async def authorize_event(self, actor_id: UUID, event_id: UUID) -> Event:
        event = await self.db.get(Event, event_id, populate_existing=True)
        if event is None:
            raise EventNotFoundError(event_id)
        if event.owner_id != actor_id:
            self._denied("event", event_id, actor_id)
            raise EventAccessDeniedError(event_id)
        return event

    async def guest_in_event(self, guest_id: UUID, event_id: UUID) -> Guest:
        guest = await self.db.get(Guest, guest_id)
        if guest is None or guest.event_id != event_id:
            raise GuestNotFoundError(
                guest_id,
                message=f"Guest {guest_id} not found in event {event_id}"
            )
        return guest

    @staticmethod
    def _denied(resource_type: str, resource_id: UUID, actor_id: UUID) -> None:
        log_security_event(
            "access_denied",
            {"resource_type": resource_type, "resource_id": resource_id, "user_id": actor_id},
        )
