"""
Emergency intake and the read-only request projections.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError, RescueLinkError, ServerError, ValidationError
from core.logging import get_logger
from models.emergency import EmergencyRequest, RequestStatus
from models.notification import NotificationType, RecipientType
from repositories.emergency import EmergencyRequestRepository
from repositories.notification import NotificationRepository
from repositories.user import UserRepository
from repositories.volunteer import VolunteerRepository
from schemas.emergency import (
    EmergencyRequestCreate,
    EmergencyRequestDetail,
    EmergencyStatusRead,
    EmergencySubmitResult,
    RequestAssignmentSummary,
)
from services.helpers import (
    classify_severity,
    construct_alert_message,
    normalize_phone,
    volunteers_needed,
)
from services.zone_resolver import HeuristicZoneResolver, ZoneResolver, clip_zone

logger = get_logger(__name__)

CANDIDATES_PER_SLOT = 3
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 20


def _validate_submission(data: EmergencyRequestCreate) -> None:
    if not all(value and value.strip() for value in (data.emergency_type, data.description, data.contact_number)):
        raise ValidationError("Emergency type, description, and contact number are required")
    digits = len(normalize_phone(data.contact_number))
    if digits < MIN_PHONE_DIGITS:
        raise ValidationError("Please provide a valid phone number with at least 10 digits")
    if digits > MAX_PHONE_DIGITS:
        raise ValidationError("Phone number cannot be longer than 20 digits")
    if data.people_count is not None and data.people_count < 1:
        raise ValidationError("People count must be at least 1")


class EmergencyService:

    def __init__(self, db: AsyncSession, zone_resolver: Optional[ZoneResolver] = None):
        self.db = db
        self.zone_resolver = zone_resolver or HeuristicZoneResolver()
        self.users = UserRepository(db)
        self.volunteers = VolunteerRepository(db)
        self.requests = EmergencyRequestRepository(db)
        self.notifications = NotificationRepository(db)

    async def submit(self, data: EmergencyRequestCreate) -> EmergencySubmitResult:
        """Persist a request and alert the volunteers best placed to help.

        Everything happens in one transaction: if any step fails, neither the
        guest, the request nor any alert is kept.
        """
        _validate_submission(data)

        people_count = data.people_count or 1
        emergency_type = data.emergency_type.strip()
        description = data.description.strip()
        phone = normalize_phone(data.contact_number)
        address = data.address.strip() if data.address else None

        logger.info(
            "Emergency submission received",
            emergency_type=emergency_type,
            people_count=people_count,
            has_address=bool(address),
        )

        try:
            guest = await self.users.get_or_create_guest(phone)
            severity = classify_severity(emergency_type, data.severity)
            zone = clip_zone(await self.zone_resolver.resolve(address))

            request = EmergencyRequest(
                guest_id=guest.id,
                emergency_type=emergency_type,
                description=description,
                people_count=people_count,
                contact_number=phone,
                can_call=data.can_call,
                address=address,
                address_zone=zone,
                severity=severity,
                status=RequestStatus.PENDING.value,
                disaster_event_id=data.disaster_event_id,
            )
            await self.requests.add(request)

            needed = volunteers_needed(people_count)
            candidates = await self.volunteers.find_candidates(zone, needed * CANDIDATES_PER_SLOT)

            message = construct_alert_message(emergency_type, zone, description, people_count)
            for volunteer in candidates:
                await self.notifications.notify(
                    volunteer.id,
                    RecipientType.VOLUNTEER,
                    message,
                    NotificationType.ALERT,
                    request_id=request.id,
                )

            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.exception("Emergency submission failed")
            raise ServerError("Failed to submit emergency request. Please try again.") from e

        logger.info(
            "Emergency request created",
            request_id=request.id,
            severity=severity,
            zone=zone,
            volunteers_needed=needed,
            notified=len(candidates),
        )
        return EmergencySubmitResult(
            request_id=request.id,
            total_nearby_volunteers=len(candidates),
            notified_count=len(candidates),
            volunteers_needed=needed,
            zone=zone,
        )

    async def get_request(self, request_id: int) -> EmergencyRequestDetail:
        try:
            request = await self.requests.get_with_assignments(request_id)
        except Exception as e:
            logger.exception(f"Failed to fetch emergency request {request_id}")
            raise ServerError("Failed to fetch emergency request") from e

        if request is None:
            raise NotFoundError("Emergency request not found")

        detail = EmergencyRequestDetail.model_validate(request, from_attributes=True)
        detail.assignments = [
            RequestAssignmentSummary(
                id=assignment.id,
                volunteer_id=assignment.volunteer_id,
                status=assignment.status,
                assigned_at=assignment.assigned_at,
                started_at=assignment.started_at,
                completed_at=assignment.completed_at,
                people_served=assignment.people_served,
                volunteer_name=assignment.volunteer.name if assignment.volunteer else None,
                volunteer_phone=assignment.volunteer.phone if assignment.volunteer else None,
            )
            for assignment in request.assignments
        ]
        return detail

    async def get_status(self, request_id: int) -> EmergencyStatusRead:
        try:
            row = await self.requests.get_status_row(request_id)
        except Exception as e:
            logger.exception(f"Failed to fetch status for request {request_id}")
            raise ServerError("Failed to fetch status") from e

        if row is None:
            raise NotFoundError("Emergency request not found")

        return EmergencyStatusRead(
            **row,
            volunteers_needed=volunteers_needed(row["people_count"]),
        )
