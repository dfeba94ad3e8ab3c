"""
Tests for seating chart aggregation.
"""

import pytest

from venue_seating_platform.schemas.seat import SeatGridCreate
from venue_seating_platform.schemas.seating import SeatingAssignmentCreate
from venue_seating_platform.schemas.venue import RoomCreate
from venue_seating_platform.services import RoomService, SeatingAssignmentService, SeatingChartService, SeatService
from venue_seating_platform.utils.exceptions import EventAccessDeniedError


async def make_seats(db_session, owner, venue, room, count=10):
    return await SeatService(db_session).create_seat_grid(
        venue.id, room.id, owner.id,
        SeatGridCreate(start_row="A", end_row="A", start_number=1, end_number=count)
    )


async def test_chart_counts_seats_in_room(db_session, owner, event, guests, venue, room):
    seats = await make_seats(db_session, owner, venue, room)
    assignments = SeatingAssignmentService(db_session)
    for guest, seat in zip(guests[:3], seats):
        await assignments.assign_guest_to_seat(
            event.id, owner.id, SeatingAssignmentCreate(guest_id=guest.id, seat_id=seat.id)
        )

    chart = await SeatingChartService(db_session).get_seating_chart(event.id, owner.id)

    assert (chart.total_seats, chart.assigned_seats, chart.available_seats) == (10, 3, 7)
    assert chart.event_name == "Annual Gala"
    assert chart.venue_id == venue.id
    assert chart.venue_name == "Grand Hotel"
    assert chart.room_id == room.id
    assert chart.room_name == "Ballroom"
    assert len(chart.assignments) == 3


async def test_available_returns_after_unassign(db_session, owner, event, guests, venue, room):
    seats = await make_seats(db_session, owner, venue, room, count=4)
    assignments = SeatingAssignmentService(db_session)
    charts = SeatingChartService(db_session)

    await assignments.assign_guest_to_seat(
        event.id, owner.id, SeatingAssignmentCreate(guest_id=guests[0].id, seat_id=seats[0].id)
    )
    await assignments.assign_guest_to_seat(
        event.id, owner.id, SeatingAssignmentCreate(guest_id=guests[1].id, seat_id=seats[1].id)
    )
    before = await charts.get_seating_chart(event.id, owner.id)

    await assignments.assign_guest_to_seat(
        event.id, owner.id, SeatingAssignmentCreate(guest_id=guests[2].id, seat_id=seats[2].id)
    )
    assert (await charts.get_seating_chart(event.id, owner.id)).available_seats == before.available_seats - 1

    await assignments.unassign_guest_from_seat(event.id, seats[2].id, owner.id)
    after = await charts.get_seating_chart(event.id, owner.id)
    assert after.available_seats == before.available_seats == 2


async def test_assigned_counts_every_room(db_session, owner, event, guests, venue, room):
    ballroom_seats = await make_seats(db_session, owner, venue, room, count=4)
    terrace = await RoomService(db_session).create_room(
        venue.id, owner.id, RoomCreate(name="Terrace", capacity=20)
    )
    terrace_seats = await make_seats(db_session, owner, venue, terrace, count=2)

    assignments = SeatingAssignmentService(db_session)
    await assignments.assign_guest_to_seat(
        event.id, owner.id, SeatingAssignmentCreate(guest_id=guests[0].id, seat_id=ballroom_seats[0].id)
    )
    await assignments.assign_guest_to_seat(
        event.id, owner.id, SeatingAssignmentCreate(guest_id=guests[1].id, seat_id=terrace_seats[0].id)
    )

    chart = await SeatingChartService(db_session).get_seating_chart(event.id, owner.id)

    assert chart.room_name == "Ballroom"
    assert (chart.total_seats, chart.assigned_seats, chart.available_seats) == (4, 2, 2)


async def test_chart_without_assignments_is_empty(db_session, owner, event, venue, room):
    await make_seats(db_session, owner, venue, room)

    chart = await SeatingChartService(db_session).get_seating_chart(event.id, owner.id)

    assert chart.venue_id is None
    assert chart.room_id is None
    assert chart.assignments == []
    assert (chart.total_seats, chart.assigned_seats, chart.available_seats) == (0, 0, 0)


async def test_chart_requires_event_owner(db_session, event, other_user):
    with pytest.raises(EventAccessDeniedError):
        await SeatingChartService(db_session).get_seating_chart(event.id, other_user.id)


async def test_injected_policy_is_used(db_session, owner, event):
    class DenyEverything:
        async def authorize_event(self, actor_id, event_id):
            raise EventAccessDeniedError(event_id)

    with pytest.raises(EventAccessDeniedError):
        await SeatingChartService(db_session, policy=DenyEverything()).get_seating_chart(event.id, owner.id)
