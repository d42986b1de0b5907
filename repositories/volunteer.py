import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import select, case
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from models.volunteer import AccountStatus, Volunteer
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class VolunteerRepository(BaseRepository[Volunteer, None, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(Volunteer, db)

    async def get_by_email(self, email: str) -> Optional[Volunteer]:
        try:
            result = await self.db.execute(select(Volunteer).where(Volunteer.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_by_email: {str(e)}")
            raise

    async def get_by_phone(self, phone: str) -> Optional[Volunteer]:
        try:
            query = select(Volunteer).where(Volunteer.phone == phone).limit(1)
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_by_phone: {str(e)}")
            raise

    async def find_candidates(self, zone: Optional[str], limit: int) -> List[Volunteer]:
        """Active, available volunteers best placed to answer a request.

        With a zone, volunteers whose zone contains it come first; ties (and the
        no-zone case) go to whoever was active most recently.
        """
        query = select(Volunteer).where(
            Volunteer.account_status == AccountStatus.ACTIVE.value,
            Volunteer.available.is_(True),
        )

        if zone:
            zone_rank = case(
                (Volunteer.zone.is_(None), 2),
                (Volunteer.zone.ilike(f"%{zone}%"), 1),
                else_=2,
            )
            query = query.order_by(zone_rank, Volunteer.last_active.desc().nulls_last(), Volunteer.id)
        else:
            query = query.order_by(Volunteer.last_active.desc().nulls_last(), Volunteer.id)

        try:
            result = await self.db.execute(query.limit(limit))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception(f"Database error in find_candidates: {str(e)}")
            raise

    async def mark_active(self, volunteer: Volunteer, login: bool = False) -> Volunteer:
        now = datetime.now(timezone.utc)
        volunteer.last_active = now
        if login:
            volunteer.last_login = now
        await self.db.flush()
        return volunteer
