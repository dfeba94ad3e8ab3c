"""
Seating chart aggregation for an event.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Room, Seat, SeatingAssignment
from ..schemas.seating import SeatingAssignmentResponse, SeatingChartResponse
from .access import AccessPolicy, OwnershipPolicy

logger = logging.getLogger(__name__)


class SeatingChartService:
    """Builds the read-only seating overview of an event. Never cached."""

    def __init__(self, db: AsyncSession, policy: Optional[AccessPolicy] = None):
        self.db = db
        self.policy = policy or OwnershipPolicy(db)

    async def get_seating_chart(self, event_id: UUID, actor_id: UUID) -> SeatingChartResponse:
        """
        Compute the seating chart of an event.

        Venue and room are taken from the earliest assignment; an event is
        expected to be seated in a single room. ``total_seats`` counts that
        room while ``assigned_seats`` counts every live assignment of the
        event. With no assignments the venue and room fields are left empty
        and every counter is zero.

        Raises:
            EventNotFoundError: If the event does not exist
            EventAccessDeniedError: If the event belongs to another user
        """
        event = await self.policy.authorize_event(actor_id, event_id)

        result = await self.db.execute(
            select(SeatingAssignment)
            .options(
                selectinload(SeatingAssignment.seat)
                .selectinload(Seat.room)
                .selectinload(Room.venue)
            )
            .where(SeatingAssignment.event_id == event_id)
            .order_by(SeatingAssignment.assigned_at, SeatingAssignment.id)
        )
        assignments = list(result.scalars().all())

        chart = SeatingChartResponse(
            event_id=event.id,
            event_name=event.name,
            assignments=[SeatingAssignmentResponse.model_validate(a) for a in assignments],
            total_seats=0,
            assigned_seats=0,
            available_seats=0,
        )
        if not assignments:
            return chart

        room = assignments[0].seat.room
        room_ids = {assignment.seat.room_id for assignment in assignments}
        if len(room_ids) > 1:
            logger.warning(
                f"Event {event_id} has assignments in {len(room_ids)} rooms; "
                f"total seats cover room {room.id} only"
            )

        total = await self.db.scalar(
            select(func.count(Seat.id)).where(Seat.room_id == room.id)
        )
        assigned = len(assignments)

        chart.venue_id = room.venue.id
        chart.venue_name = room.venue.name
        chart.room_id = room.id
        chart.room_name = room.name
        chart.total_seats = total or 0
        chart.assigned_seats = assigned
        chart.available_seats = chart.total_seats - assigned
        return chart
