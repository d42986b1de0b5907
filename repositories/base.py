"""
Base repository with common CRUD operations.

Repositories never commit on their own except in ``create``; workflows that
span several tables call ``add``/``flush`` and let the owning service commit
or roll back the whole transaction.
"""

from typing import Generic, TypeVar, Type, Optional, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from pydantic import BaseModel

from core.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Base repository with common CRUD operations."""

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[ModelType]:
        """Get a single record by ID."""
        query = select(self.model).where(self.model.id == id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add(self, db_obj: ModelType) -> ModelType:
        """Stage a record inside the current transaction and assign its ID."""
        self.db.add(db_obj)
        await self.db.flush()
        return db_obj

    async def create(self, obj_in: CreateSchemaType) -> ModelType:
        """Create a new record in its own transaction."""
        db_obj = self.model(**obj_in.model_dump())
        self.db.add(db_obj)
        await self.db.commit()
        await self.db.refresh(db_obj)
        return db_obj
