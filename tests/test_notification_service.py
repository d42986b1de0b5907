import pytest

from core.exceptions import NotFoundError
from models import Notification
from services.notification_service import NotificationService


@pytest.fixture
def make_notification(session_factory):
    async def _make(**overrides) -> Notification:
        fields = dict(
            user_type="volunteer",
            message="🚨 NEW FLOOD EMERGENCY in Wichita Falls",
            notification_type="alert",
            status="unread",
        )
        fields.update(overrides)
        async with session_factory() as session:
            notification = Notification(**fields)
            session.add(notification)
            await session.commit()
            return notification

    return _make


async def test_inbox_joins_request_fields(db, make_request, make_volunteer, make_notification):
    volunteer = await make_volunteer()
    request = await make_request(emergency_type="flood", severity="medium")
    await make_notification(user_id=volunteer.id, request_id=request.id)
    await make_notification(user_id=volunteer.id, message="General update", notification_type="update")
    await make_notification(user_id=volunteer.id + 100)
    await make_notification(user_id=volunteer.id, user_type="guest")

    inbox = await NotificationService(db).inbox(volunteer.id)

    assert len(inbox) == 2
    joined = next(n for n in inbox if n.request_id == request.id)
    assert joined.emergency_type == "flood"
    assert joined.severity == "medium"
    assert joined.request_location == request.address
    standalone = next(n for n in inbox if n.request_id is None)
    assert standalone.emergency_type is None


async def test_inbox_is_capped_at_fifty(db, make_volunteer, make_notification):
    volunteer = await make_volunteer()
    for _ in range(55):
        await make_notification(user_id=volunteer.id)

    inbox = await NotificationService(db).inbox(volunteer.id)
    assert len(inbox) == 50


async def test_mark_read_is_idempotent(db, make_volunteer, make_notification):
    volunteer = await make_volunteer()
    notification = await make_notification(user_id=volunteer.id)
    service = NotificationService(db)

    first = await service.mark_read(notification.id, volunteer.id)
    second = await service.mark_read(notification.id, volunteer.id)

    assert first.status == "read"
    assert second.status == "read"


async def test_mark_read_checks_owner(db, make_volunteer, make_notification):
    volunteer = await make_volunteer()
    notification = await make_notification(user_id=volunteer.id)

    with pytest.raises(NotFoundError):
        await NotificationService(db).mark_read(notification.id, volunteer.id + 1)
    with pytest.raises(NotFoundError):
        await NotificationService(db).mark_read(9999, volunteer.id)


async def test_mark_all_read(db, make_volunteer, make_notification):
    volunteer = await make_volunteer()
    for _ in range(3):
        await make_notification(user_id=volunteer.id)
    await make_notification(user_id=volunteer.id, status="read")
    await make_notification(user_id=volunteer.id + 1)
    service = NotificationService(db)

    assert await service.mark_all_read(volunteer.id) == 3
    assert await service.mark_all_read(volunteer.id) == 0

    inbox = await service.inbox(volunteer.id)
    assert {n.status for n in inbox} == {"read"}
