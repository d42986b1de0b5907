from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from models.notification import NotificationStatus, NotificationType, RecipientType


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    user_type: RecipientType
    request_id: Optional[int] = None
    message: str
    notification_type: NotificationType
    status: NotificationStatus
    created_at: Optional[datetime] = None
    # Joined from the originating request, when there is one.
    emergency_type: Optional[str] = None
    severity: Optional[str] = None
    request_location: Optional[str] = None


class MarkReadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    volunteer_id: int = Field(alias="volunteerId")
