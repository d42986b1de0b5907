import logging
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from models.relief import ReliefProvider
from repositories.base import BaseRepository
from schemas.relief import ReliefProviderCreate

logger = logging.getLogger(__name__)


class ReliefProviderRepository(BaseRepository[ReliefProvider, ReliefProviderCreate, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(ReliefProvider, db)

    async def register(self, provider_in: ReliefProviderCreate) -> ReliefProvider:
        try:
            provider = await self.create(provider_in)
            logger.info(f"Registered relief provider {provider.id} ({provider.name})")
            return provider
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database error in register: {str(e)}")
            raise

    async def list_active(self, skip: int = 0, limit: int = 100) -> List[ReliefProvider]:
        query = (
            select(ReliefProvider)
            .where(ReliefProvider.active.is_(True))
            .order_by(ReliefProvider.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
