"""
Room service for managing rooms inside venues.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from ..models import Room, Seat
from ..schemas.venue import RoomCreate, RoomUpdate
from ..utils.exceptions import HasChildrenError, NameConflictError
from ..utils.logging_config import log_business_event
from .access import AccessPolicy, OwnershipPolicy

logger = logging.getLogger(__name__)


class RoomService:
    """Service class for room management operations."""

    def __init__(self, db: AsyncSession, policy: Optional[AccessPolicy] = None):
        self.db = db
        self.policy = policy or OwnershipPolicy(db)

    async def create_room(self, venue_id: UUID, actor_id: UUID, room_data: RoomCreate) -> Room:
        """
        Create a room in a venue the acting user owns.

        Raises:
            VenueNotFoundError: If the venue does not exist
            VenueAccessDeniedError: If the venue belongs to another user
            NameConflictError: If the venue already has a room with this name
        """
        await self.policy.authorize_venue(actor_id, venue_id)
        await self._ensure_name_free(venue_id, room_data.name)

        room = Room(venue_id=venue_id, **room_data.model_dump())
        self.db.add(room)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise NameConflictError("room", room_data.name)

        log_business_event(
            "room_created",
            {"venue_id": venue_id, "room_id": room.id, "room_name": room.name},
            user_id=actor_id
        )
        return room

    async def get_rooms(self, venue_id: UUID, actor_id: UUID) -> List[Room]:
        """Get the rooms of a venue, ordered by floor then name."""
        await self.policy.authorize_venue(actor_id, venue_id)

        result = await self.db.execute(
            select(Room)
            .where(Room.venue_id == venue_id)
            .order_by(Room.floor, Room.name)
        )
        return list(result.scalars().all())

    async def get_room(self, venue_id: UUID, room_id: UUID, actor_id: UUID) -> Room:
        return await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)

    async def update_room(
        self, venue_id: UUID, room_id: UUID, actor_id: UUID, room_data: RoomUpdate
    ) -> Room:
        """
        Update the fields present in ``room_data``.

        Raises:
            RoomNotFoundError: If the room does not exist in this venue
            RoomAccessDeniedError: If the venue belongs to another user
            NameConflictError: If the new name is taken within the venue
        """
        room = await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)

        update_data = {
            field: value
            for field, value in room_data.model_dump(exclude_unset=True).items()
            if value is not None
        }

        new_name = update_data.get("name")
        if new_name is not None and new_name != room.name:
            await self._ensure_name_free(venue_id, new_name)

        name = new_name or room.name
        for field, value in update_data.items():
            setattr(room, field, value)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise NameConflictError("room", name)

        return room

    async def delete_room(self, venue_id: UUID, room_id: UUID, actor_id: UUID) -> None:
        """
        Delete a room that has no seats.

        Raises:
            RoomNotFoundError: If the room does not exist in this venue
            RoomAccessDeniedError: If the venue belongs to another user
            HasChildrenError: If the room still has seats
        """
        room = await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)

        seat_count = await self.db.scalar(
            select(func.count(Seat.id)).where(Seat.room_id == room_id)
        )
        if seat_count:
            raise HasChildrenError("room", room_id, "seats", seat_count)

        await self.db.delete(room)
        await self.db.commit()

        log_business_event("room_deleted", {"venue_id": venue_id, "room_id": room_id}, user_id=actor_id)

    async def _ensure_name_free(self, venue_id: UUID, name: str) -> None:
        existing = await self.db.scalar(
            select(Room.id).where(Room.venue_id == venue_id, Room.name == name)
        )
        if existing is not None:
            raise NameConflictError("room", name)
