from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError, RescueLinkError, ServerError
from core.logging import get_logger
from models.notification import NotificationStatus
from repositories.notification import NotificationRepository
from schemas.notification import NotificationRead

logger = get_logger(__name__)


class NotificationService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.notifications = NotificationRepository(db)

    async def inbox(self, volunteer_id: int) -> List[NotificationRead]:
        try:
            rows = await self.notifications.list_for_volunteer(volunteer_id)
        except Exception as e:
            logger.exception(f"Failed to fetch notifications for volunteer {volunteer_id}")
            raise ServerError("Failed to fetch notifications") from e

        return [
            NotificationRead.model_validate(row["notification"]).model_copy(
                update={
                    "emergency_type": row["emergency_type"],
                    "severity": row["severity"],
                    "request_location": row["request_location"],
                }
            )
            for row in rows
        ]

    async def mark_read(self, notification_id: int, volunteer_id: int) -> NotificationRead:
        """Mark one notification read. Marking an already-read one is a no-op."""
        try:
            notification = await self.notifications.get_for_volunteer(notification_id, volunteer_id)
            if notification is None:
                raise NotFoundError("Notification not found")

            if notification.status != NotificationStatus.READ.value:
                notification.status = NotificationStatus.READ.value
                await self.db.flush()
            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Failed to mark notification {notification_id} read")
            raise ServerError("Failed to update notification") from e

        return NotificationRead.model_validate(notification)

    async def mark_all_read(self, volunteer_id: int) -> int:
        try:
            updated = await self.notifications.mark_all_read(volunteer_id)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Failed to mark notifications read for volunteer {volunteer_id}")
            raise ServerError("Failed to update notifications") from e

        logger.info(f"Marked {updated} notifications read for volunteer {volunteer_id}")
        return updated
