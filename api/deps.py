"""
Dependency injection utilities for API endpoints.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from services.assignment_service import AssignmentService
from services.auth_service import AuthService
from services.emergency_service import EmergencyService
from services.notification_service import NotificationService
from services.zone_resolver import ZoneResolver, get_zone_resolver


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_emergency_service(
    db: AsyncSession = Depends(get_db),
    zone_resolver: ZoneResolver = Depends(get_zone_resolver),
) -> EmergencyService:
    return EmergencyService(db, zone_resolver)


def get_assignment_service(db: AsyncSession = Depends(get_db)) -> AssignmentService:
    return AssignmentService(db)


def get_notification_service(db: AsyncSession = Depends(get_db)) -> NotificationService:
    return NotificationService(db)
