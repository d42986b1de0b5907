"""
User model for guests, volunteers and administrators.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class UserRole(str, PyEnum):
    GUEST = "guest"
    VOLUNTEER = "volunteer"
    ADMIN = "admin"


class User(Base):
    """A person known to the system. Guests are keyed by phone number."""

    __tablename__ = "users"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True, index=True)
    email = Column(String(100), nullable=True, unique=True)
    role = Column(String(20), nullable=False, default=UserRole.GUEST.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    emergency_requests = relationship("EmergencyRequest", back_populates="guest")

    def __repr__(self):
        return f"<User(id={self.id}, role='{self.role}', phone='{self.phone}')>"
