import logging
from typing import List, Optional
from sqlalchemy import select, func, case, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models.assignment import ACTIVE_ASSIGNMENT_STATUSES, RequestAssignment, AssignmentStatus
from models.emergency import EmergencyRequest, OPEN_REQUEST_STATUSES
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)

SEVERITY_RANK = case(
    (EmergencyRequest.severity == "critical", 0),
    (EmergencyRequest.severity == "high", 1),
    (EmergencyRequest.severity == "medium", 2),
    else_=3,
)


def _assignment_count(*statuses: str):
    return (
        select(func.count(RequestAssignment.id))
        .where(
            RequestAssignment.request_id == EmergencyRequest.id,
            RequestAssignment.status.in_(statuses),
        )
        .correlate(EmergencyRequest)
        .scalar_subquery()
    )


class EmergencyRequestRepository(BaseRepository[EmergencyRequest, None, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(EmergencyRequest, db)

    async def get_for_update(self, request_id: int) -> Optional[EmergencyRequest]:
        """Load a request and hold its row lock until the transaction ends."""
        try:
            query = (
                select(EmergencyRequest)
                .where(EmergencyRequest.id == request_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_for_update: {str(e)}")
            raise

    async def get_with_assignments(self, request_id: int) -> Optional[EmergencyRequest]:
        try:
            query = (
                select(EmergencyRequest)
                .where(EmergencyRequest.id == request_id)
                .options(
                    selectinload(EmergencyRequest.assignments)
                    .selectinload(RequestAssignment.volunteer)
                )
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_with_assignments: {str(e)}")
            raise

    async def get_status_row(self, request_id: int):
        """Public fields plus assigned/completed volunteer counts."""
        query = select(
            EmergencyRequest.id,
            EmergencyRequest.emergency_type,
            EmergencyRequest.description,
            EmergencyRequest.people_count,
            EmergencyRequest.contact_number,
            EmergencyRequest.address,
            EmergencyRequest.severity,
            EmergencyRequest.status,
            EmergencyRequest.created_at,
            _assignment_count(
                AssignmentStatus.ASSIGNED.value, AssignmentStatus.IN_PROGRESS.value
            ).label("volunteers_assigned"),
            _assignment_count(AssignmentStatus.COMPLETED.value).label("volunteers_completed"),
        ).where(EmergencyRequest.id == request_id)

        try:
            result = await self.db.execute(query)
            return result.mappings().one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_status_row: {str(e)}")
            raise

    async def list_open_for_volunteer(
        self,
        volunteer_id: int,
        zone: Optional[str],
        limit: int = 50,
    ) -> List[dict]:
        """Requests still taking volunteers that this volunteer has not claimed."""
        already_claimed = (
            select(RequestAssignment.id)
            .where(
                and_(
                    RequestAssignment.request_id == EmergencyRequest.id,
                    RequestAssignment.volunteer_id == volunteer_id,
                )
            )
            .exists()
        )

        query = select(
            EmergencyRequest,
            _assignment_count(*ACTIVE_ASSIGNMENT_STATUSES).label("volunteers_assigned"),
        ).where(
            EmergencyRequest.status.in_(OPEN_REQUEST_STATUSES),
            ~already_claimed,
        )

        ordering = []
        if zone:
            ordering.append(
                case((EmergencyRequest.address_zone.ilike(f"%{zone}%"), 0), else_=1)
            )
        ordering.extend([SEVERITY_RANK, EmergencyRequest.created_at.desc(), EmergencyRequest.id.desc()])

        try:
            result = await self.db.execute(query.order_by(*ordering).limit(limit))
            return [
                {"request": row.EmergencyRequest, "volunteers_assigned": row.volunteers_assigned}
                for row in result.all()
            ]
        except SQLAlchemyError as e:
            logger.exception(f"Database error in list_open_for_volunteer: {str(e)}")
            raise
