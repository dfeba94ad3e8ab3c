"""
Tests for the seating assignment engine.
"""

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from venue_seating_platform.models import Event, Guest, Seat, SeatingAssignment, SeatStatus
from venue_seating_platform.schemas.seat import SeatGridCreate
from venue_seating_platform.schemas.seating import SeatingAssignmentCreate, SeatingAssignmentUpdate
from venue_seating_platform.services import SeatingAssignmentService, SeatService
from venue_seating_platform.utils.exceptions import (
    AssignmentNotFoundError,
    EventAccessDeniedError,
    EventNotFoundError,
    GuestAlreadyAssignedError,
    GuestNotFoundError,
    SeatNotAvailableError,
    SeatNotFoundError,
    SeatOccupiedError,
)


@pytest_asyncio.fixture
async def seats(db_session, owner, venue, room):
    return await SeatService(db_session).create_seat_grid(
        venue.id, room.id, owner.id,
        SeatGridCreate(start_row="A", end_row="B", start_number=1, end_number=3)
    )


@pytest.fixture
def service(db_session):
    return SeatingAssignmentService(db_session)


def assign(guest, seat, notes=None):
    return SeatingAssignmentCreate(guest_id=guest.id, seat_id=seat.id, notes=notes)


async def load_seat(db_session, seat_id):
    result = await db_session.execute(
        select(Seat).where(Seat.id == seat_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def commit_competing_assignment(session_factory, event_id, actor_id, guest_id, seat_id):
    """Seat a guest from another session, as a concurrent request would."""
    async with session_factory() as other:
        await SeatingAssignmentService(other).assign_guest_to_seat(
            event_id, actor_id, SeatingAssignmentCreate(guest_id=guest_id, seat_id=seat_id)
        )


async def assert_occupancy_invariant(db_session, event_id):
    """Occupied exactly when an occupant is set, and mirrored by an assignment row."""
    all_seats = (
        await db_session.execute(select(Seat).execution_options(populate_existing=True))
    ).scalars().all()
    assignments = (
        await db_session.execute(select(SeatingAssignment).where(SeatingAssignment.event_id == event_id))
    ).scalars().all()
    by_seat = {a.seat_id: a for a in assignments}

    for seat in all_seats:
        assert (seat.status == SeatStatus.OCCUPIED) == (seat.occupant_guest_id is not None)
        if seat.id in by_seat:
            assert seat.occupant_guest_id == by_seat[seat.id].guest_id
        else:
            assert seat.occupant_guest_id is None

    assert len({a.guest_id for a in assignments}) == len(assignments)


class TestAssign:
    async def test_assign_occupies_seat(self, db_session, service, owner, event, guests, seats):
        assignment = await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0], "Near stage"))

        assert assignment.guest_id == guests[0].id
        assert assignment.assigned_by == owner.id
        assert assignment.notes == "Near stage"
        assert assignment.seat.status == SeatStatus.OCCUPIED
        assert assignment.seat.occupant_guest_id == guests[0].id
        await assert_occupancy_invariant(db_session, event.id)

    async def test_guest_cannot_hold_two_seats(self, service, owner, event, guests, seats):
        await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))

        with pytest.raises(GuestAlreadyAssignedError):
            await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[1]))

    async def test_occupied_seat_rejected_repeatedly_without_mutation(
        self, db_session, service, owner, event, guests, seats
    ):
        await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))

        for guest in (guests[1], guests[1]):
            with pytest.raises(SeatOccupiedError):
                await service.assign_guest_to_seat(event.id, owner.id, assign(guest, seats[0]))

        count = await db_session.scalar(select(func.count(SeatingAssignment.id)))
        assert count == 1
        assert seats[0].occupant_guest_id == guests[0].id
        await assert_occupancy_invariant(db_session, event.id)

    async def test_ownership_and_existence_errors_are_distinct(
        self, service, owner, other_user, event, guests, seats
    ):
        with pytest.raises(EventAccessDeniedError):
            await service.assign_guest_to_seat(event.id, other_user.id, assign(guests[0], seats[0]))

        with pytest.raises(EventNotFoundError):
            await service.assign_guest_to_seat(uuid.uuid4(), owner.id, assign(guests[0], seats[0]))

        with pytest.raises(GuestNotFoundError):
            await service.assign_guest_to_seat(
                event.id, owner.id,
                SeatingAssignmentCreate(guest_id=uuid.uuid4(), seat_id=seats[0].id)
            )

        with pytest.raises(SeatNotFoundError):
            await service.assign_guest_to_seat(
                event.id, owner.id,
                SeatingAssignmentCreate(guest_id=guests[0].id, seat_id=uuid.uuid4())
            )

    async def test_unavailable_seat_is_rejected(self, db_session, service, owner, event, guests, seats):
        seats[0].status = SeatStatus.BLOCKED
        await db_session.commit()

        with pytest.raises(SeatNotAvailableError):
            await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))

    async def test_seat_scoped_to_other_event_is_not_found(
        self, db_session, service, owner, event, guests, seats
    ):
        other_event = Event(name="Other", event_date=event.event_date, owner_id=owner.id)
        db_session.add(other_event)
        await db_session.flush()
        seats[0].event_id = other_event.id
        await db_session.commit()

        with pytest.raises(SeatNotFoundError):
            await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))


class TestUnassign:
    async def test_round_trip_restores_seat(self, db_session, service, owner, event, guests, seats):
        await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))
        await service.unassign_guest_from_seat(event.id, seats[0].id, owner.id)

        assert seats[0].status == SeatStatus.AVAILABLE
        assert seats[0].occupant_guest_id is None
        assert await db_session.scalar(select(func.count(SeatingAssignment.id))) == 0

        # The seat and the guest are both free again
        await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))
        await assert_occupancy_invariant(db_session, event.id)

    async def test_unassigning_free_seat_fails(self, service, owner, event, seats):
        with pytest.raises(AssignmentNotFoundError):
            await service.unassign_guest_from_seat(event.id, seats[0].id, owner.id)

    async def test_requires_event_owner(self, service, owner, other_user, event, guests, seats):
        await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))

        with pytest.raises(EventAccessDeniedError):
            await service.unassign_guest_from_seat(event.id, seats[0].id, other_user.id)


class TestUpdate:
    async def test_move_flips_both_seats(self, db_session, service, owner, event, guests, seats):
        assignment = await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))

        moved = await service.update_seating_assignment(
            event.id, assignment.id, owner.id,
            SeatingAssignmentUpdate(seat_id=seats[4].id, notes="Moved for accessibility")
        )

        assert moved.seat_id == seats[4].id
        assert moved.notes == "Moved for accessibility"
        assert seats[0].status == SeatStatus.AVAILABLE
        assert seats[4].status == SeatStatus.OCCUPIED
        assert seats[4].occupant_guest_id == guests[0].id
        await assert_occupancy_invariant(db_session, event.id)

    async def test_move_onto_occupied_seat_fails_without_mutation(
        self, db_session, service, owner, event, guests, seats
    ):
        first = await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0]))
        await service.assign_guest_to_seat(event.id, owner.id, assign(guests[1], seats[1]))

        with pytest.raises(SeatOccupiedError):
            await service.update_seating_assignment(
                event.id, first.id, owner.id, SeatingAssignmentUpdate(seat_id=seats[1].id)
            )

        assert seats[0].occupant_guest_id == guests[0].id
        assert seats[1].occupant_guest_id == guests[1].id
        await assert_occupancy_invariant(db_session, event.id)

    async def test_notes_only_update_keeps_seat(self, service, owner, event, guests, seats):
        assignment = await service.assign_guest_to_seat(event.id, owner.id, assign(guests[0], seats[0], "old"))

        updated = await service.update_seating_assignment(
            event.id, assignment.id, owner.id, SeatingAssignmentUpdate(notes="new")
        )
        assert updated.seat_id == seats[0].id
        assert updated.notes == "new"

    async def test_unknown_assignment(self, service, owner, event):
        with pytest.raises(AssignmentNotFoundError):
            await service.update_seating_assignment(
                event.id, uuid.uuid4(), owner.id, SeatingAssignmentUpdate(notes="x")
            )


async def test_list_returns_event_assignments(service, owner, event, guests, seats):
    for guest, seat in zip(guests[:3], seats):
        await service.assign_guest_to_seat(event.id, owner.id, assign(guest, seat))

    assignments = await service.get_seating_assignments(event.id, owner.id)
    assert {a.guest_id for a in assignments} == {g.id for g in guests[:3]}
    assert all(a.seat.status == SeatStatus.OCCUPIED for a in assignments)


async def test_storage_rejects_second_assignment_for_seat(db_session, owner, event, guests, seats):
    db_session.add_all([
        SeatingAssignment(event_id=event.id, guest_id=guests[0].id, seat_id=seats[0].id, assigned_by=owner.id),
        SeatingAssignment(event_id=event.id, guest_id=guests[1].id, seat_id=seats[0].id, assigned_by=owner.id),
    ])
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test_storage_rejects_second_seat_for_guest(db_session, owner, event, guests, seats):
    db_session.add_all([
        SeatingAssignment(event_id=event.id, guest_id=guests[0].id, seat_id=seats[0].id, assigned_by=owner.id),
        SeatingAssignment(event_id=event.id, guest_id=guests[0].id, seat_id=seats[1].id, assigned_by=owner.id),
    ])
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


class TestConcurrentConflicts:
    """A competing request commits between this request's checks and its write."""

    async def test_guest_seated_elsewhere_meanwhile(
        self, db_session, session_factory, service, owner, event, guests, seats, monkeypatch
    ):
        event_id, owner_id = event.id, owner.id
        guest_id, wanted_seat, other_seat = guests[0].id, seats[0].id, seats[1].id
        check_guest = service._assignment_for_guest

        async def check_then_lose_race(check_event_id, check_guest_id):
            found = await check_guest(check_event_id, check_guest_id)
            await commit_competing_assignment(session_factory, event_id, owner_id, guest_id, other_seat)
            return found

        monkeypatch.setattr(service, "_assignment_for_guest", check_then_lose_race)

        with pytest.raises(GuestAlreadyAssignedError):
            await service.assign_guest_to_seat(
                event_id, owner_id, SeatingAssignmentCreate(guest_id=guest_id, seat_id=wanted_seat)
            )

        assignments = (await db_session.execute(select(SeatingAssignment))).scalars().all()
        assert [(a.guest_id, a.seat_id) for a in assignments] == [(guest_id, other_seat)]
        seat = await load_seat(db_session, wanted_seat)
        assert (seat.status, seat.occupant_guest_id) == (SeatStatus.AVAILABLE, None)
        await assert_occupancy_invariant(db_session, event_id)

    async def test_seat_taken_meanwhile(
        self, db_session, session_factory, service, owner, event, guests, seats, monkeypatch
    ):
        event_id, owner_id = event.id, owner.id
        guest_id, rival_id, seat_id = guests[0].id, guests[1].id, seats[0].id
        check_guest = service._assignment_for_guest

        async def check_then_lose_race(check_event_id, check_guest_id):
            found = await check_guest(check_event_id, check_guest_id)
            await commit_competing_assignment(session_factory, event_id, owner_id, rival_id, seat_id)
            return found

        monkeypatch.setattr(service, "_assignment_for_guest", check_then_lose_race)

        with pytest.raises(SeatOccupiedError):
            await service.assign_guest_to_seat(
                event_id, owner_id, SeatingAssignmentCreate(guest_id=guest_id, seat_id=seat_id)
            )

        assignments = (await db_session.execute(select(SeatingAssignment))).scalars().all()
        assert [(a.guest_id, a.seat_id) for a in assignments] == [(rival_id, seat_id)]
        seat = await load_seat(db_session, seat_id)
        assert seat.occupant_guest_id == rival_id
        await assert_occupancy_invariant(db_session, event_id)

    async def test_move_target_taken_meanwhile(
        self, db_session, session_factory, service, owner, event, guests, seats, monkeypatch
    ):
        event_id, owner_id = event.id, owner.id
        guest_id, rival_id = guests[0].id, guests[1].id
        old_seat, new_seat = seats[0].id, seats[4].id
        assignment = await service.assign_guest_to_seat(event_id, owner_id, assign(guests[0], seats[0]))
        assignment_id = assignment.id
        check_seat = service._assignment_for_seat

        async def check_then_lose_race(check_event_id, check_seat_id):
            found = await check_seat(check_event_id, check_seat_id)
            await commit_competing_assignment(session_factory, event_id, owner_id, rival_id, new_seat)
            return found

        monkeypatch.setattr(service, "_assignment_for_seat", check_then_lose_race)

        with pytest.raises(SeatOccupiedError):
            await service.update_seating_assignment(
                event_id, assignment_id, owner_id, SeatingAssignmentUpdate(seat_id=new_seat)
            )

        kept = await db_session.get(SeatingAssignment, assignment_id, populate_existing=True)
        assert kept.seat_id == old_seat
        assert (await load_seat(db_session, old_seat)).occupant_guest_id == guest_id
        assert (await load_seat(db_session, new_seat)).occupant_guest_id == rival_id
        await assert_occupancy_invariant(db_session, event_id)


class TestGuestDeletion:
    async def test_seated_guest_and_event_cannot_be_deleted(
        self, db_session, service, owner, event, guests, seats
    ):
        event_id, guest_id, seat_id = event.id, guests[0].id, seats[0].id
        await service.assign_guest_to_seat(event_id, owner.id, assign(guests[0], seats[0]))

        with pytest.raises(IntegrityError):
            await db_session.execute(delete(Guest).where(Guest.id == guest_id))
        await db_session.rollback()

        # Deleting the event would cascade to its guests
        with pytest.raises(IntegrityError):
            await db_session.execute(delete(Event).where(Event.id == event_id))
        await db_session.rollback()

        seat = await load_seat(db_session, seat_id)
        assert (seat.status, seat.occupant_guest_id) == (SeatStatus.OCCUPIED, guest_id)
        await assert_occupancy_invariant(db_session, event_id)

    async def test_guest_can_be_deleted_once_unseated(self, db_session, service, owner, event, guests, seats):
        event_id, owner_id, guest_id, seat_id = event.id, owner.id, guests[0].id, seats[0].id
        await service.assign_guest_to_seat(event_id, owner_id, assign(guests[0], seats[0]))
        await service.unassign_guest_from_seat(event_id, seat_id, owner_id)

        await db_session.execute(delete(Guest).where(Guest.id == guest_id))
        await db_session.commit()

        seat = await load_seat(db_session, seat_id)
        assert (seat.status, seat.occupant_guest_id) == (SeatStatus.AVAILABLE, None)
        assert await db_session.get(Guest, guest_id) is None
