"""
Seat service for managing room seat layouts.
"""

import logging
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from ..config import get_settings
from ..models import Seat, SeatStatus
from ..schemas.seat import SeatCreate, SeatUpdate, SeatGridCreate
from ..utils.exceptions import (
    InvalidSeatStateError,
    OccupiedSeatDeletionError,
    SeatConflictError,
    ValidationError,
)
from ..utils.logging_config import log_business_event
from .access import AccessPolicy, OwnershipPolicy
from .seat_grid import generate_seat_grid, grid_size

logger = logging.getLogger(__name__)


class SeatService:
    """Service class for seat management operations."""

    def __init__(self, db: AsyncSession, policy: Optional[AccessPolicy] = None):
        """Initialize the seat service with database session."""
        self.db = db
        self.policy = policy or OwnershipPolicy(db)

    async def create_seat(
        self, venue_id: UUID, room_id: UUID, actor_id: UUID, seat_data: SeatCreate
    ) -> Seat:
        """
        Create a single seat in a room.

        Args:
            venue_id: Venue the room is addressed under
            room_id: Room UUID
            actor_id: Acting user
            seat_data: Seat creation data

        Returns:
            Created seat instance

        Raises:
            RoomNotFoundError: If the room does not exist in this venue
            RoomAccessDeniedError: If the venue belongs to another user
            SeatConflictError: If the room already has a seat at (row, number)
        """
        await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)
        if seat_data.event_id is not None:
            await self.policy.authorize_event(actor_id, seat_data.event_id)

        conflicts = await self._find_conflicts(room_id, [(seat_data.row, seat_data.number)])
        if conflicts:
            raise SeatConflictError(room_id, conflicts)

        seat = Seat(room_id=room_id, **seat_data.model_dump())
        self.db.add(seat)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise SeatConflictError(room_id, [f"{seat_data.row}{seat_data.number}"])

        log_business_event(
            "seat_created",
            {"room_id": room_id, "seat_id": seat.id, "label": seat.label},
            user_id=actor_id
        )
        return seat

    async def create_seat_grid(
        self, venue_id: UUID, room_id: UUID, actor_id: UUID, grid_data: SeatGridCreate
    ) -> List[Seat]:
        """
        Generate and persist a rectangular block of seats in one transaction.

        Either every seat of the grid is created or none is.

        Returns:
            Created seats ordered by row then number; empty for an inverted range

        Raises:
            RoomNotFoundError: If the room does not exist in this venue
            RoomAccessDeniedError: If the venue belongs to another user
            ValidationError: If the grid exceeds the configured maximum size
            SeatConflictError: If any generated coordinate already exists in the room
        """
        await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)
        if grid_data.event_id is not None:
            await self.policy.authorize_event(actor_id, grid_data.event_id)

        max_seats = get_settings().max_grid_seats
        size = grid_size(
            grid_data.start_row, grid_data.end_row,
            grid_data.start_number, grid_data.end_number
        )
        if size > max_seats:
            raise ValidationError(
                f"Seat grid of {size} seats exceeds the maximum of {max_seats}",
                field_errors={"grid": [f"at most {max_seats} seats per request"]}
            )

        batch = generate_seat_grid(
            start_row=grid_data.start_row,
            end_row=grid_data.end_row,
            start_number=grid_data.start_number,
            end_number=grid_data.end_number,
            category=grid_data.category,
            start_x=grid_data.start_x,
            start_y=grid_data.start_y,
            spacing_x=grid_data.spacing_x,
            spacing_y=grid_data.spacing_y,
        )
        if not batch:
            logger.info(f"Empty seat grid requested for room {room_id}")
            return []

        coordinates = [(grid_seat.row, grid_seat.number) for grid_seat in batch]
        conflicts = await self._find_conflicts(room_id, coordinates)
        if conflicts:
            raise SeatConflictError(room_id, conflicts)

        seats = [
            Seat(
                room_id=room_id,
                event_id=grid_data.event_id,
                row=grid_seat.row,
                number=grid_seat.number,
                category=grid_seat.category,
                status=grid_seat.status,
                x=grid_seat.x,
                y=grid_seat.y,
                width=grid_seat.width,
                height=grid_seat.height,
                rotation=grid_seat.rotation,
            )
            for grid_seat in batch
        ]
        self.db.add_all(seats)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            # Lost a race with a concurrent insert; report what clashes now
            conflicts = await self._find_conflicts(room_id, coordinates)
            raise SeatConflictError(room_id, conflicts or [grid_seat.label for grid_seat in batch])

        log_business_event(
            "seat_grid_created",
            {
                "room_id": room_id,
                "rows": f"{grid_data.start_row}-{grid_data.end_row}",
                "numbers": f"{grid_data.start_number}-{grid_data.end_number}",
                "seat_count": len(seats),
            },
            user_id=actor_id
        )
        return seats

    async def get_seats(self, venue_id: UUID, room_id: UUID, actor_id: UUID) -> List[Seat]:
        """Get the seats of a room, ordered by row then seat number."""
        await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)

        result = await self.db.execute(
            select(Seat)
            .where(Seat.room_id == room_id)
            .order_by(Seat.row, func.length(Seat.number), Seat.number)
        )
        return list(result.scalars().all())

    async def get_seat(self, venue_id: UUID, room_id: UUID, seat_id: UUID, actor_id: UUID) -> Seat:
        await self.policy.authorize_room(actor_id, room_id, venue_id=venue_id)
        return await self.policy.authorize_seat(actor_id, seat_id, room_id=room_id)

    async def update_seat(
        self,
        venue_id: UUID,
        room_id: UUID,
        seat_id: UUID,
        actor_id: UUID,
        seat_data: SeatUpdate
    ) -> Seat:
        """
        Update the fields present in ``seat_data``.

        Occupancy is owned by seating assignments: a manual update can never
        set a seat occupied, nor change the status of an occupied seat.

        Raises:
            SeatNotFoundError: If the seat does not exist in this room
            SeatAccessDeniedError: If the venue belongs to another user
            SeatConflictError: If the new (row, number) is taken in the room
            InvalidSeatStateError: If the status change would break occupancy
        """
        seat = await self.get_seat(venue_id, room_id, seat_id, actor_id)

        update_data = {
            field: value
            for field, value in seat_data.model_dump(exclude_unset=True).items()
            if value is not None
        }

        new_status = update_data.get("status")
        if new_status is not None and new_status != seat.status:
            if new_status == SeatStatus.OCCUPIED:
                raise InvalidSeatStateError(
                    seat_id, "Seats become occupied only through a seating assignment"
                )
            if seat.occupant_guest_id is not None:
                raise InvalidSeatStateError(
                    seat_id, f"Seat {seat.label} is occupied; unassign the guest before changing its status"
                )

        new_row = update_data.get("row", seat.row)
        new_number = update_data.get("number", seat.number)
        if (new_row, new_number) != (seat.row, seat.number):
            conflicts = await self._find_conflicts(room_id, [(new_row, new_number)])
            if conflicts:
                raise SeatConflictError(room_id, conflicts)

        for field, value in update_data.items():
            setattr(seat, field, value)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise SeatConflictError(room_id, [f"{new_row}{new_number}"])

        return seat

    async def delete_seat(self, venue_id: UUID, room_id: UUID, seat_id: UUID, actor_id: UUID) -> None:
        """
        Delete a seat that has no occupant.

        Raises:
            SeatNotFoundError: If the seat does not exist in this room
            SeatAccessDeniedError: If the venue belongs to another user
            OccupiedSeatDeletionError: If a guest is still assigned to the seat
        """
        seat = await self.get_seat(venue_id, room_id, seat_id, actor_id)

        if seat.occupant_guest_id is not None:
            raise OccupiedSeatDeletionError(seat_id)

        await self.db.delete(seat)
        await self.db.commit()

        log_business_event(
            "seat_deleted",
            {"room_id": room_id, "seat_id": seat_id},
            user_id=actor_id
        )

    async def _find_conflicts(self, room_id: UUID, coordinates: Iterable[Tuple[str, str]]) -> List[str]:
        """Labels of the given (row, number) pairs that already exist in the room."""
        wanted = list(coordinates)
        rows = {row for row, _ in wanted}
        numbers = {number for _, number in wanted}

        result = await self.db.execute(
            select(Seat.row, Seat.number).where(
                Seat.room_id == room_id,
                Seat.row.in_(sorted(rows)),
                Seat.number.in_(sorted(numbers)),
            )
        )
        existing = {tuple(pair) for pair in result.all()}

        return [f"{row}{number}" for row, number in wanted if (row, number) in existing]
