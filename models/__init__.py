"""
SQLAlchemy ORM models for RescueLink Backend.

Contains all database models organized by module.
"""

from .user import User, UserRole
from .volunteer import Volunteer, AccountStatus
from .emergency import DisasterEvent, EmergencyRequest, RequestStatus, Severity
from .assignment import RequestAssignment, AssignmentStatusHistory, AssignmentStatus
from .notification import Notification, NotificationType, NotificationStatus, RecipientType
from .relief import ReliefProvider

__all__ = [
    "User",
    "UserRole",
    "Volunteer",
    "AccountStatus",
    "DisasterEvent",
    "EmergencyRequest",
    "RequestStatus",
    "Severity",
    "RequestAssignment",
    "AssignmentStatusHistory",
    "AssignmentStatus",
    "Notification",
    "NotificationType",
    "NotificationStatus",
    "RecipientType",
    "ReliefProvider",
]
