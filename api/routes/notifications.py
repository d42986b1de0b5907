from fastapi import APIRouter, Depends

from api.deps import get_notification_service
from core.exceptions import AuthError
from core.security import get_current_volunteer_id
from schemas.notification import MarkReadRequest
from schemas.responses import StandardSuccessResponse
from services.notification_service import NotificationService

router = APIRouter()


def _require_self(volunteer_id: int, token_volunteer_id: int) -> None:
    if volunteer_id != token_volunteer_id:
        raise AuthError("Cannot access another volunteer's notifications", status_code=403)


@router.get(
    "/volunteer/{volunteer_id}",
    response_model=StandardSuccessResponse,
    summary="Volunteer notification inbox"
)
async def get_volunteer_notifications(
    volunteer_id: int,
    token_volunteer_id: int = Depends(get_current_volunteer_id),
    service: NotificationService = Depends(get_notification_service),
):
    _require_self(volunteer_id, token_volunteer_id)
    notifications = await service.inbox(volunteer_id)
    return StandardSuccessResponse(
        message=f"Found {len(notifications)} notifications",
        data=[n.model_dump(mode="json") for n in notifications],
    )


@router.put(
    "/volunteer/{volunteer_id}/read-all",
    response_model=StandardSuccessResponse,
    summary="Mark every notification read"
)
async def mark_all_notifications_read(
    volunteer_id: int,
    token_volunteer_id: int = Depends(get_current_volunteer_id),
    service: NotificationService = Depends(get_notification_service),
):
    _require_self(volunteer_id, token_volunteer_id)
    updated = await service.mark_all_read(volunteer_id)
    return StandardSuccessResponse(
        message="Notifications marked as read",
        data={"updated": updated},
    )


@router.put(
    "/{notification_id}/read",
    response_model=StandardSuccessResponse,
    summary="Mark a notification read"
)
async def mark_notification_read(
    notification_id: int,
    request: MarkReadRequest,
    service: NotificationService = Depends(get_notification_service),
):
    notification = await service.mark_read(notification_id, request.volunteer_id)
    return StandardSuccessResponse(
        message="Notification marked as read",
        data=notification.model_dump(mode="json"),
    )
