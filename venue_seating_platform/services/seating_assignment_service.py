"""
Seating assignment engine: binds guests to seats for an event.

The assignment row is the source of truth for occupancy. ``Seat.status`` and
``Seat.occupant_guest_id`` are kept as a projection of it and are only ever
written in the same transaction as the assignment they mirror.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import UniqueConstraint, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from ..models import Seat, SeatStatus, SeatingAssignment
from ..schemas.seating import SeatingAssignmentCreate, SeatingAssignmentUpdate
from ..utils.exceptions import (
    AssignmentNotFoundError,
    ConflictError,
    GuestAlreadyAssignedError,
    SeatNotAvailableError,
    SeatNotFoundError,
    SeatOccupiedError,
)
from ..utils.logging_config import log_business_event
from .access import AccessPolicy, OwnershipPolicy

logger = logging.getLogger(__name__)

# Unique constraints whose violation means the guest already holds a seat
GUEST_CONSTRAINTS = ("uq_seating_assignments_event_guest", "uq_seats_occupant_guest_id")
SEAT_CONSTRAINTS = ("uq_seating_assignments_event_seat",)


class SeatingAssignmentService:
    """Service class for guest-to-seat assignment operations."""

    def __init__(self, db: AsyncSession, policy: Optional[AccessPolicy] = None):
        self.db = db
        self.policy = policy or OwnershipPolicy(db)

    async def assign_guest_to_seat(
        self,
        event_id: UUID,
        actor_id: UUID,
        assignment_data: SeatingAssignmentCreate
    ) -> SeatingAssignment:
        """
        Assign a guest to a seat for an event.

        Args:
            event_id: Event UUID
            actor_id: Acting user; must own the event
            assignment_data: Guest, seat and optional notes

        Returns:
            The created assignment with its seat loaded

        Raises:
            EventNotFoundError: If the event does not exist
            EventAccessDeniedError: If the event belongs to another user
            GuestNotFoundError: If the guest is not on the event's guest list
            SeatNotFoundError: If the seat does not exist or belongs to another event
            SeatOccupiedError: If the seat already has a live assignment
            GuestAlreadyAssignedError: If the guest already holds a seat for the event
            SeatNotAvailableError: If the seat is reserved, blocked or under maintenance
        """
        guest_id = assignment_data.guest_id
        seat_id = assignment_data.seat_id

        await self.policy.authorize_event(actor_id, event_id)
        await self.policy.guest_in_event(guest_id, event_id)
        seat = await self._get_seat_for_update(seat_id, event_id)

        if await self._assignment_for_seat(event_id, seat_id) is not None or seat.occupant_guest_id is not None:
            raise SeatOccupiedError(seat_id, event_id)

        if await self._assignment_for_guest(event_id, guest_id) is not None:
            raise GuestAlreadyAssignedError(guest_id, event_id)

        if seat.status != SeatStatus.AVAILABLE:
            raise SeatNotAvailableError(seat_id, seat.status.value)

        assignment = SeatingAssignment(
            event_id=event_id,
            guest_id=guest_id,
            seat_id=seat_id,
            assigned_by=actor_id,
            notes=assignment_data.notes,
        )
        self.db.add(assignment)
        seat.occupy(guest_id)

        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            conflict = self._conflict_from_integrity_error(e, event_id, guest_id, seat_id)
            if conflict is None:
                raise
            raise conflict from e

        log_business_event(
            "seat_assigned",
            {
                "event_id": event_id,
                "guest_id": guest_id,
                "seat_id": seat_id,
                "assignment_id": assignment.id,
            },
            user_id=actor_id
        )
        return await self._load_assignment(assignment.id)

    async def unassign_guest_from_seat(self, event_id: UUID, seat_id: UUID, actor_id: UUID) -> None:
        """
        Remove the live assignment of a seat and release the seat.

        Raises:
            EventNotFoundError: If the event does not exist
            EventAccessDeniedError: If the event belongs to another user
            AssignmentNotFoundError: If the seat has no assignment for the event
        """
        await self.policy.authorize_event(actor_id, event_id)

        assignment = await self._assignment_for_seat(event_id, seat_id)
        if assignment is None:
            raise AssignmentNotFoundError(
                seat_id,
                message=f"No seating assignment for seat {seat_id} in event {event_id}"
            )

        seat = await self._get_seat_for_update(seat_id)
        guest_id = assignment.guest_id

        await self.db.delete(assignment)
        seat.release()

        await self.db.flush()
        await self.db.commit()

        log_business_event(
            "seat_unassigned",
            {"event_id": event_id, "guest_id": guest_id, "seat_id": seat_id},
            user_id=actor_id
        )

    async def update_seating_assignment(
        self,
        event_id: UUID,
        assignment_id: UUID,
        actor_id: UUID,
        update_data: SeatingAssignmentUpdate
    ) -> SeatingAssignment:
        """
        Move an assignment to another seat and/or change its notes.

        A move releases the old seat and occupies the new one in the same
        transaction as the assignment update.

        Raises:
            EventNotFoundError: If the event does not exist
            EventAccessDeniedError: If the event belongs to another user
            AssignmentNotFoundError: If the assignment does not exist in the event
            SeatNotFoundError: If the new seat does not exist or belongs to another event
            SeatOccupiedError: If the new seat already has a live assignment
            SeatNotAvailableError: If the new seat is reserved, blocked or under maintenance
        """
        await self.policy.authorize_event(actor_id, event_id)

        result = await self.db.execute(
            select(SeatingAssignment).where(
                SeatingAssignment.id == assignment_id,
                SeatingAssignment.event_id == event_id,
            )
        )
        assignment = result.scalar_one_or_none()
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)

        new_seat_id = update_data.seat_id
        old_seat_id = assignment.seat_id
        moving = new_seat_id is not None and new_seat_id != old_seat_id

        if moving:
            new_seat = await self._get_seat_for_update(new_seat_id, event_id)

            if await self._assignment_for_seat(event_id, new_seat_id) is not None or new_seat.occupant_guest_id is not None:
                raise SeatOccupiedError(new_seat_id, event_id)
            if new_seat.status != SeatStatus.AVAILABLE:
                raise SeatNotAvailableError(new_seat_id, new_seat.status.value)

            old_seat = await self._get_seat_for_update(old_seat_id)
            guest_id = assignment.guest_id

            try:
                # The occupant column is unique: free the old seat before taking the new one
                old_seat.release()
                await self.db.flush()

                new_seat.occupy(guest_id)
                assignment.seat_id = new_seat_id
                if "notes" in update_data.model_fields_set:
                    assignment.notes = update_data.notes
                await self.db.flush()
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                conflict = self._conflict_from_integrity_error(e, event_id, guest_id, new_seat_id)
                if conflict is None:
                    raise
                raise conflict from e
        else:
            if "notes" in update_data.model_fields_set:
                assignment.notes = update_data.notes
            await self.db.flush()
            await self.db.commit()

        if moving:
            log_business_event(
                "seat_reassigned",
                {
                    "event_id": event_id,
                    "assignment_id": assignment_id,
                    "guest_id": assignment.guest_id,
                    "old_seat_id": old_seat_id,
                    "new_seat_id": new_seat_id,
                },
                user_id=actor_id
            )

        return await self._load_assignment(assignment_id)

    async def get_seating_assignments(self, event_id: UUID, actor_id: UUID) -> List[SeatingAssignment]:
        """Get the live assignments of an event, oldest first."""
        await self.policy.authorize_event(actor_id, event_id)

        result = await self.db.execute(
            select(SeatingAssignment)
            .options(selectinload(SeatingAssignment.seat))
            .where(SeatingAssignment.event_id == event_id)
            .order_by(SeatingAssignment.assigned_at, SeatingAssignment.id)
        )
        return list(result.scalars().all())

    async def _get_seat_for_update(self, seat_id: UUID, event_id: Optional[UUID] = None) -> Seat:
        result = await self.db.execute(
            select(Seat)
            .where(Seat.id == seat_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        seat = result.scalar_one_or_none()

        # Seats scoped to another event are invisible to this one
        if seat is None or (event_id is not None and seat.event_id not in (None, event_id)):
            raise SeatNotFoundError(seat_id)
        return seat

    async def _assignment_for_seat(self, event_id: UUID, seat_id: UUID) -> Optional[SeatingAssignment]:
        result = await self.db.execute(
            select(SeatingAssignment).where(
                SeatingAssignment.event_id == event_id,
                SeatingAssignment.seat_id == seat_id,
            )
        )
        return result.scalar_one_or_none()

    async def _assignment_for_guest(self, event_id: UUID, guest_id: UUID) -> Optional[SeatingAssignment]:
        result = await self.db.execute(
            select(SeatingAssignment).where(
                SeatingAssignment.event_id == event_id,
                SeatingAssignment.guest_id == guest_id,
            )
        )
        return result.scalar_one_or_none()

    async def _load_assignment(self, assignment_id: UUID) -> SeatingAssignment:
        result = await self.db.execute(
            select(SeatingAssignment)
            .options(selectinload(SeatingAssignment.seat))
            .where(SeatingAssignment.id == assignment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    def _conflict_from_integrity_error(
        error: IntegrityError, event_id: UUID, guest_id: UUID, seat_id: UUID
    ) -> Optional[ConflictError]:
        """Translate a unique violation lost to a concurrent request."""
        constraint = violated_unique_constraint(error)
        logger.warning(f"Assignment constraint violation for event {event_id}: {constraint or error.orig}")

        if constraint in GUEST_CONSTRAINTS:
            return GuestAlreadyAssignedError(guest_id, event_id)
        if constraint in SEAT_CONSTRAINTS:
            return SeatOccupiedError(seat_id, event_id)
        return None


def violated_unique_constraint(error: IntegrityError) -> Optional[str]:
    """
    Name the seating unique constraint behind an IntegrityError.

    PostgreSQL reports the constraint name, SQLite only the constrained
    columns (``table.column, ...``); both forms are matched.
    """
    message = str(error.orig)
    for table in (SeatingAssignment.__table__, Seat.__table__):
        for constraint in table.constraints:
            if not isinstance(constraint, UniqueConstraint) or constraint.name is None:
                continue
            columns = ", ".join(f"{table.name}.{column.name}" for column in constraint.columns)
            if constraint.name in message or columns in message:
                return constraint.name
    return None
