"""
Volunteer model for responder accounts.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class AccountStatus(str, PyEnum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class Volunteer(Base):
    __tablename__ = "volunteers"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Location
    zone = Column(String(100), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    # Profile
    skills = Column(JSON, nullable=False, default=list)
    experience_level = Column(String(50), nullable=True)
    availability = Column(String(50), nullable=True)
    agreed_to_terms = Column(Boolean, default=False)

    # Status
    available = Column(Boolean, nullable=False, default=True)
    account_status = Column(String(20), nullable=False, default=AccountStatus.PENDING.value)
    email_verified = Column(Boolean, default=False)

    # Stats
    total_assignments = Column(Integer, nullable=False, default=0)
    completed_assignments = Column(Integer, nullable=False, default=0)
    total_people_served = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)

    # Timestamps
    last_login = Column(DateTime(timezone=True), nullable=True)
    last_active = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assignments = relationship("RequestAssignment", back_populates="volunteer")

    def __repr__(self):
        return f"<Volunteer(id={self.id}, email='{self.email}', zone='{self.zone}')>"
