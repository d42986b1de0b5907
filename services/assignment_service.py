"""
Volunteer assignment workflow: claim a request up to its capacity, complete
the work, and the volunteer-side listings.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import (
    CapacityError,
    DuplicateError,
    NotFoundError,
    RescueLinkError,
    ServerError,
    StateError,
)
from core.logging import get_logger
from models.assignment import AssignmentStatus, RequestAssignment
from models.emergency import OPEN_REQUEST_STATUSES, RequestStatus
from models.notification import NotificationType, RecipientType
from models.volunteer import AccountStatus
from repositories.assignment import AssignmentRepository
from repositories.emergency import EmergencyRequestRepository
from repositories.notification import NotificationRepository
from repositories.volunteer import VolunteerRepository
from schemas.assignment import (
    AcceptResult,
    AssignmentRead,
    AvailableRequestRead,
    VolunteerAssignmentRead,
)
from services.helpers import (
    construct_completion_message,
    construct_guest_assignment_message,
    construct_volunteer_confirmation_message,
    volunteers_needed,
)

logger = get_logger(__name__)


class AssignmentService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.volunteers = VolunteerRepository(db)
        self.requests = EmergencyRequestRepository(db)
        self.assignments = AssignmentRepository(db)
        self.notifications = NotificationRepository(db)

    async def accept(self, volunteer_id: int, request_id: int, verify_volunteer: bool = True) -> AcceptResult:
        """Claim one slot on ``request_id`` for ``volunteer_id``.

        The request row stays locked until commit, so the capacity re-count
        and the insert see every competing accept that committed first.
        """
        try:
            volunteer = await self.volunteers.get(volunteer_id)
            if volunteer is None:
                raise NotFoundError("Volunteer not found")
            if verify_volunteer and (
                not volunteer.available or volunteer.account_status != AccountStatus.ACTIVE.value
            ):
                raise StateError("Volunteer is not available to accept requests")

            request = await self.requests.get_for_update(request_id)
            if request is None:
                raise NotFoundError("Emergency request not found")
            if request.status == RequestStatus.ASSIGNED.value:
                raise CapacityError()
            if request.status not in OPEN_REQUEST_STATUSES:
                raise StateError(f"Request is {request.status} and no longer accepting volunteers")

            max_volunteers = volunteers_needed(request.people_count)
            current = await self.assignments.count_active(request_id)
            if current >= max_volunteers:
                raise CapacityError()

            if await self.assignments.get_for_pair(request_id, volunteer_id):
                raise DuplicateError("You have already accepted this request")

            now = datetime.now(timezone.utc)
            assignment = RequestAssignment(
                request_id=request_id,
                volunteer_id=volunteer_id,
                status=AssignmentStatus.ASSIGNED.value,
                assigned_at=now,
                started_at=now,
            )
            await self.assignments.add(assignment)
            await self.assignments.record_status(assignment)

            total_assigned = current + 1
            if total_assigned >= max_volunteers:
                request.status = RequestStatus.ASSIGNED.value
            else:
                request.status = RequestStatus.PARTIALLY_ASSIGNED.value

            volunteer.total_assignments = (volunteer.total_assignments or 0) + 1
            volunteer.last_active = now

            await self.notifications.notify(
                request.guest_id,
                RecipientType.GUEST,
                construct_guest_assignment_message(volunteer.name, request.emergency_type),
                NotificationType.ASSIGNMENT,
                request_id=request_id,
            )
            await self.notifications.notify(
                volunteer_id,
                RecipientType.VOLUNTEER,
                construct_volunteer_confirmation_message(request.emergency_type, request.address),
                NotificationType.CONFIRMATION,
                request_id=request_id,
            )

            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Duplicate accept for request {request_id} by volunteer {volunteer_id}: {str(e)}")
            raise DuplicateError("You have already accepted this request")
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Accept failed for request {request_id} by volunteer {volunteer_id}")
            raise ServerError("Failed to accept request. Please try again.") from e

        logger.info(
            "Request accepted",
            request_id=request_id,
            volunteer_id=volunteer_id,
            assignment_id=assignment.id,
            total_assigned=total_assigned,
            max_volunteers=max_volunteers,
        )
        return AcceptResult(
            assignment_id=assignment.id,
            remaining_slots=max_volunteers - total_assigned,
            total_assigned=total_assigned,
        )

    async def complete(
        self,
        volunteer_id: int,
        assignment_id: int,
        people_served: int = 0,
        notes: Optional[str] = None,
    ) -> AssignmentRead:
        try:
            assignment = await self.assignments.get(assignment_id)
            if assignment is None or assignment.volunteer_id != volunteer_id:
                raise NotFoundError("Assignment not found")
            if assignment.status == AssignmentStatus.COMPLETED.value:
                raise StateError("Assignment is already completed")

            now = datetime.now(timezone.utc)
            assignment.status = AssignmentStatus.COMPLETED.value
            assignment.completed_at = now
            assignment.people_served = people_served
            assignment.volunteer_notes = notes
            await self.db.flush()
            await self.assignments.record_status(assignment)

            volunteer = await self.volunteers.get(volunteer_id)
            volunteer.completed_assignments = (volunteer.completed_assignments or 0) + 1
            volunteer.total_people_served = (volunteer.total_people_served or 0) + people_served
            volunteer.last_active = now

            request = await self.requests.get_for_update(assignment.request_id)
            if request.status in (RequestStatus.ASSIGNED.value, RequestStatus.IN_PROGRESS.value):
                if await self.assignments.count_open(request.id) == 0:
                    request.status = RequestStatus.COMPLETED.value
                else:
                    request.status = RequestStatus.IN_PROGRESS.value

            await self.notifications.notify(
                request.guest_id,
                RecipientType.GUEST,
                construct_completion_message(volunteer.name, request.emergency_type, people_served),
                NotificationType.UPDATE,
                request_id=request.id,
            )

            await self.db.commit()
        except RescueLinkError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Completing assignment {assignment_id} failed")
            raise ServerError("Failed to complete assignment") from e

        logger.info(
            "Assignment completed",
            assignment_id=assignment_id,
            request_id=request.id,
            request_status=request.status,
            people_served=people_served,
        )
        return AssignmentRead.model_validate(assignment)

    async def available_requests(self, volunteer_id: int) -> List[AvailableRequestRead]:
        volunteer = await self.volunteers.get(volunteer_id)
        if volunteer is None:
            raise NotFoundError("Volunteer not found")

        try:
            rows = await self.requests.list_open_for_volunteer(volunteer_id, volunteer.zone)
        except Exception as e:
            logger.exception(f"Failed to list open requests for volunteer {volunteer_id}")
            raise ServerError("Failed to fetch available requests") from e

        return [
            AvailableRequestRead(
                id=row["request"].id,
                emergency_type=row["request"].emergency_type,
                description=row["request"].description,
                people_count=row["request"].people_count,
                contact_number=row["request"].contact_number,
                can_call=row["request"].can_call,
                address=row["request"].address,
                address_zone=row["request"].address_zone,
                severity=row["request"].severity,
                status=row["request"].status,
                created_at=row["request"].created_at,
                volunteers_needed=volunteers_needed(row["request"].people_count),
                volunteers_assigned=row["volunteers_assigned"],
            )
            for row in rows
        ]

    async def assignments_for(self, volunteer_id: int) -> List[VolunteerAssignmentRead]:
        try:
            rows = await self.assignments.list_for_volunteer(volunteer_id)
        except Exception as e:
            logger.exception(f"Failed to list assignments for volunteer {volunteer_id}")
            raise ServerError("Failed to fetch assignments") from e

        results = []
        for row in rows:
            assignment, request = row["assignment"], row["request"]
            results.append(
                VolunteerAssignmentRead(
                    **AssignmentRead.model_validate(assignment).model_dump(),
                    emergency_type=request.emergency_type,
                    description=request.description,
                    address=request.address,
                    severity=request.severity,
                    people_count=request.people_count,
                    contact_number=request.contact_number,
                    request_status=request.status,
                )
            )
        return results
