import asyncio

import pytest
from sqlalchemy import func, select

from core.exceptions import CapacityError, DuplicateError, NotFoundError, StateError
from models import (
    EmergencyRequest,
    Notification,
    RequestAssignment,
    Volunteer,
)
from repositories.assignment import AssignmentRepository
from services.assignment_service import AssignmentService
from services.emergency_service import EmergencyService


async def test_accept_fills_single_slot(db, make_request, make_volunteer):
    request = await make_request(people_count=4)
    volunteer = await make_volunteer()

    result = await AssignmentService(db).accept(volunteer.id, request.id)

    assert result.total_assigned == 1
    assert result.remaining_slots == 0
    stored = await db.get(EmergencyRequest, request.id)
    assert stored.status == "assigned"
    assignment = await db.get(RequestAssignment, result.assignment_id)
    assert assignment.status == "assigned"
    assert assignment.started_at is not None
    refreshed = await db.get(Volunteer, volunteer.id)
    assert refreshed.total_assignments == 1
    assert refreshed.last_active is not None


async def test_accept_writes_history_and_notifications(db, make_request, make_volunteer):
    request = await make_request(people_count=10)
    volunteer = await make_volunteer()

    result = await AssignmentService(db).accept(volunteer.id, request.id)

    history = await AssignmentRepository(db).history(result.assignment_id)
    assert [(h.assignment_id, h.status) for h in history] == [(result.assignment_id, "assigned")]

    notifications = (await db.execute(select(Notification).order_by(Notification.id))).scalars().all()
    assert [(n.user_type, n.notification_type) for n in notifications] == [
        ("guest", "assignment"),
        ("volunteer", "confirmation"),
    ]
    assert notifications[0].user_id == request.guest_id
    assert notifications[1].user_id == volunteer.id


async def test_partial_then_full(db, make_request, make_volunteer):
    request = await make_request(people_count=10)
    first = await make_volunteer()
    second = await make_volunteer()
    third = await make_volunteer()
    service = AssignmentService(db)

    result = await service.accept(first.id, request.id)
    assert (result.total_assigned, result.remaining_slots) == (1, 1)
    assert (await db.get(EmergencyRequest, request.id)).status == "partially_assigned"

    result = await service.accept(second.id, request.id)
    assert (result.total_assigned, result.remaining_slots) == (2, 0)
    assert (await db.get(EmergencyRequest, request.id)).status == "assigned"

    with pytest.raises(CapacityError):
        await service.accept(third.id, request.id)

    active = (await db.execute(select(func.count(RequestAssignment.id)))).scalar_one()
    assert active == 2


async def test_second_accept_by_same_volunteer_is_duplicate(db, make_request, make_volunteer):
    request = await make_request(people_count=10)
    volunteer = await make_volunteer()
    service = AssignmentService(db)

    await service.accept(volunteer.id, request.id)
    with pytest.raises(DuplicateError):
        await service.accept(volunteer.id, request.id)


async def test_accept_requires_available_active_volunteer(db, make_request, make_volunteer):
    request = await make_request()
    unavailable = await make_volunteer(available=False)
    suspended = await make_volunteer(account_status="suspended")
    service = AssignmentService(db)

    with pytest.raises(StateError):
        await service.accept(unavailable.id, request.id)
    with pytest.raises(StateError):
        await service.accept(suspended.id, request.id)


async def test_legacy_assign_skips_volunteer_checks(db, make_request, make_volunteer):
    request = await make_request()
    unavailable = await make_volunteer(available=False)

    result = await AssignmentService(db).accept(unavailable.id, request.id, verify_volunteer=False)
    assert result.total_assigned == 1


async def test_accept_missing_rows(db, make_request, make_volunteer):
    request = await make_request()
    volunteer = await make_volunteer()
    service = AssignmentService(db)

    with pytest.raises(NotFoundError):
        await service.accept(9999, request.id)
    with pytest.raises(NotFoundError):
        await service.accept(volunteer.id, 9999)


async def test_accept_rejects_closed_request(db, make_request, make_volunteer):
    request = await make_request(status="completed")
    volunteer = await make_volunteer()

    with pytest.raises(StateError) as exc_info:
        await AssignmentService(db).accept(volunteer.id, request.id)
    assert not isinstance(exc_info.value, CapacityError)


async def test_concurrent_accepts_respect_capacity(session_factory, make_request, make_volunteer):
    request = await make_request(people_count=4)
    first = await make_volunteer()
    second = await make_volunteer()

    async def accept(volunteer_id):
        async with session_factory() as session:
            return await AssignmentService(session).accept(volunteer_id, request.id)

    results = await asyncio.gather(accept(first.id), accept(second.id), return_exceptions=True)

    errors = [r for r in results if isinstance(r, Exception)]
    successes = [r for r in results if not isinstance(r, Exception)]
    assert len(successes) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], CapacityError)

    async with session_factory() as session:
        rows = (
            await session.execute(
                select(func.count(RequestAssignment.id)).where(RequestAssignment.request_id == request.id)
            )
        ).scalar_one()
    assert rows == 1


async def test_complete_assignment_closes_request(db, make_request, make_volunteer):
    request = await make_request(people_count=3)
    volunteer = await make_volunteer()
    service = AssignmentService(db)
    accepted = await service.accept(volunteer.id, request.id)

    completed = await service.complete(volunteer.id, accepted.assignment_id, people_served=3, notes="All safe")

    assert completed.status == "completed"
    assert completed.completed_at is not None
    assert completed.people_served == 3
    assert completed.volunteer_notes == "All safe"
    assert (await db.get(EmergencyRequest, request.id)).status == "completed"
    stats = await db.get(Volunteer, volunteer.id)
    assert stats.completed_assignments == 1
    assert stats.total_people_served == 3

    update = (
        await db.execute(select(Notification).where(Notification.notification_type == "update"))
    ).scalars().one()
    assert update.user_type == "guest"

    history = await AssignmentRepository(db).history(accepted.assignment_id)
    assert [h.status for h in history] == ["assigned", "completed"]


async def test_complete_with_other_volunteers_still_working(db, make_request, make_volunteer):
    request = await make_request(people_count=10)
    first = await make_volunteer()
    second = await make_volunteer()
    service = AssignmentService(db)
    accepted = await service.accept(first.id, request.id)
    await service.accept(second.id, request.id)

    await service.complete(first.id, accepted.assignment_id, people_served=4)

    assert (await db.get(EmergencyRequest, request.id)).status == "in_progress"
    status = await EmergencyService(db).get_status(request.id)
    assert status.volunteers_assigned == 1
    assert status.volunteers_completed == 1


async def test_complete_guards(db, make_request, make_volunteer):
    request = await make_request(people_count=10)
    owner = await make_volunteer()
    other = await make_volunteer()
    service = AssignmentService(db)
    accepted = await service.accept(owner.id, request.id)

    with pytest.raises(NotFoundError):
        await service.complete(other.id, accepted.assignment_id)

    await service.complete(owner.id, accepted.assignment_id)
    with pytest.raises(StateError):
        await service.complete(owner.id, accepted.assignment_id)


async def test_available_requests(db, make_request, make_volunteer):
    volunteer = await make_volunteer(zone="Wichita Falls")
    elsewhere = await make_request(address_zone="Dallas", severity="critical")
    local_low = await make_request(address_zone="Wichita Falls", severity="low")
    local_high = await make_request(address_zone="Wichita Falls", severity="high")
    claimed = await make_request(address_zone="Wichita Falls", severity="critical", people_count=10)
    await make_request(status="completed")

    service = AssignmentService(db)
    await service.accept(volunteer.id, claimed.id)

    rows = await service.available_requests(volunteer.id)

    assert [r.id for r in rows] == [local_high.id, local_low.id, elsewhere.id]
    assert rows[0].volunteers_needed == 1
    assert rows[0].volunteers_assigned == 0

    with pytest.raises(NotFoundError):
        await service.available_requests(9999)


async def test_assignments_for_volunteer(db, make_request, make_volunteer):
    volunteer = await make_volunteer()
    request = await make_request(emergency_type="fire", people_count=10)
    service = AssignmentService(db)
    await service.accept(volunteer.id, request.id)

    rows = await service.assignments_for(volunteer.id)

    assert len(rows) == 1
    assert rows[0].request_id == request.id
    assert rows[0].emergency_type == "fire"
    assert rows[0].request_status == "partially_assigned"
