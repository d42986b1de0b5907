import logging
from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from models.emergency import EmergencyRequest
from models.notification import (
    Notification,
    NotificationStatus,
    NotificationType,
    RecipientType,
)
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class NotificationRepository(BaseRepository[Notification, None, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(Notification, db)

    async def notify(
        self,
        user_id: int,
        user_type: RecipientType,
        message: str,
        notification_type: NotificationType,
        request_id: Optional[int] = None,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            user_type=user_type.value,
            request_id=request_id,
            message=message,
            notification_type=notification_type.value,
            status=NotificationStatus.UNREAD.value,
        )
        return await self.add(notification)

    async def list_for_volunteer(self, volunteer_id: int, limit: int = 50) -> List[dict]:
        query = (
            select(
                Notification,
                EmergencyRequest.emergency_type,
                EmergencyRequest.severity,
                EmergencyRequest.address.label("request_location"),
            )
            .outerjoin(EmergencyRequest, Notification.request_id == EmergencyRequest.id)
            .where(
                Notification.user_id == volunteer_id,
                Notification.user_type == RecipientType.VOLUNTEER.value,
            )
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        try:
            result = await self.db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in list_for_volunteer: {str(e)}")
            raise

        logger.info(f"Found {len(rows)} notifications for volunteer {volunteer_id}")
        return [
            {
                "notification": row.Notification,
                "emergency_type": row.emergency_type,
                "severity": row.severity,
                "request_location": row.request_location,
            }
            for row in rows
        ]

    async def get_for_volunteer(self, notification_id: int, volunteer_id: int) -> Optional[Notification]:
        query = select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == volunteer_id,
            Notification.user_type == RecipientType.VOLUNTEER.value,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def mark_all_read(self, volunteer_id: int) -> int:
        stmt = (
            update(Notification)
            .where(
                Notification.user_id == volunteer_id,
                Notification.user_type == RecipientType.VOLUNTEER.value,
                Notification.status == NotificationStatus.UNREAD.value,
            )
            .values(status=NotificationStatus.READ.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount
