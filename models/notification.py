from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from core.database import Base


class RecipientType(str, PyEnum):
    GUEST = "guest"
    VOLUNTEER = "volunteer"
    ADMIN = "admin"


class NotificationType(str, PyEnum):
    ALERT = "alert"
    ASSIGNMENT = "assignment"
    CONFIRMATION = "confirmation"
    UPDATE = "update"
    REMINDER = "reminder"


class NotificationStatus(str, PyEnum):
    UNREAD = "unread"
    READ = "read"


class Notification(Base):
    __tablename__ = "notifications"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    # Points at users.id or volunteers.id depending on user_type.
    user_id = Column(Integer, nullable=False, index=True)
    user_type = Column(String(20), nullable=False, default=RecipientType.VOLUNTEER.value)
    request_id = Column(Integer, ForeignKey("emergency_requests.id", ondelete="CASCADE"), nullable=True)
    message = Column(Text, nullable=False)
    notification_type = Column(String(20), nullable=False, default=NotificationType.ALERT.value)
    status = Column(String(20), nullable=False, default=NotificationStatus.UNREAD.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Notification(id={self.id}, user_id={self.user_id}, type='{self.notification_type}')>"
