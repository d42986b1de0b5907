import logging
import uuid
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from models.user import User, UserRole
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User, None, None]):
    """Guests and mirrored volunteer accounts."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_phone(self, phone: str) -> Optional[User]:
        try:
            query = select(User).where(User.phone == phone).order_by(User.id).limit(1)
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_by_phone: {str(e)}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self.db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Database error in get_by_email: {str(e)}")
            raise

    async def create_guest(self, phone: str) -> User:
        """Insert a guest keyed by ``phone`` with a placeholder email."""
        guest = User(
            name="Guest User",
            phone=phone,
            email=f"guest_{uuid.uuid4().hex[:16]}@example.com",
            role=UserRole.GUEST.value,
        )
        try:
            return await self.add(guest)
        except SQLAlchemyError as e:
            logger.exception(f"Database error in create_guest: {str(e)}")
            raise

    async def get_or_create_guest(self, phone: str) -> User:
        user = await self.get_by_phone(phone)
        if user:
            logger.info(f"Found existing user {user.id} for phone {phone}")
            return user
        user = await self.create_guest(phone)
        logger.info(f"Created guest user {user.id} for phone {phone}")
        return user

    async def create_volunteer_user(self, name: str, phone: str, email: str) -> User:
        user = User(name=name, phone=phone, email=email, role=UserRole.VOLUNTEER.value)
        return await self.add(user)
