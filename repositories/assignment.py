import logging
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from models.assignment import (
    ACTIVE_ASSIGNMENT_STATUSES,
    AssignmentStatus,
    AssignmentStatusHistory,
    RequestAssignment,
)
from models.emergency import EmergencyRequest
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class AssignmentRepository(BaseRepository[RequestAssignment, None, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(RequestAssignment, db)

    async def count_active(self, request_id: int) -> int:
        """Assignments currently holding a slot on ``request_id``."""
        query = select(func.count(RequestAssignment.id)).where(
            RequestAssignment.request_id == request_id,
            RequestAssignment.status.in_(ACTIVE_ASSIGNMENT_STATUSES),
        )
        result = await self.db.execute(query)
        return result.scalar_one()

    async def count_open(self, request_id: int) -> int:
        query = select(func.count(RequestAssignment.id)).where(
            RequestAssignment.request_id == request_id,
            RequestAssignment.status != AssignmentStatus.COMPLETED.value,
        )
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_for_pair(self, request_id: int, volunteer_id: int) -> Optional[RequestAssignment]:
        query = select(RequestAssignment).where(
            RequestAssignment.request_id == request_id,
            RequestAssignment.volunteer_id == volunteer_id,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def record_status(self, assignment: RequestAssignment) -> AssignmentStatusHistory:
        entry = AssignmentStatusHistory(
            assignment_id=assignment.id,
            assignment_type="volunteer",
            status=assignment.status,
        )
        return await self.add(entry)

    async def history(self, assignment_id: int) -> List[AssignmentStatusHistory]:
        query = (
            select(AssignmentStatusHistory)
            .where(AssignmentStatusHistory.assignment_id == assignment_id)
            .order_by(AssignmentStatusHistory.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_for_volunteer(self, volunteer_id: int) -> List[dict]:
        """The volunteer's assignments joined with their requests, newest first."""
        query = (
            select(RequestAssignment, EmergencyRequest)
            .join(EmergencyRequest, RequestAssignment.request_id == EmergencyRequest.id)
            .where(RequestAssignment.volunteer_id == volunteer_id)
            .order_by(RequestAssignment.assigned_at.desc(), RequestAssignment.id.desc())
        )
        try:
            result = await self.db.execute(query)
            return [
                {"assignment": row.RequestAssignment, "request": row.EmergencyRequest}
                for row in result.all()
            ]
        except SQLAlchemyError as e:
            logger.exception(f"Database error in list_for_volunteer: {str(e)}")
            raise
