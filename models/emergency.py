"""
Emergency request and disaster event models.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Boolean, JSON, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class Severity(str, PyEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RequestStatus(str, PyEnum):
    PENDING = "pending"
    PARTIALLY_ASSIGNED = "partially_assigned"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# Statuses in which a request still accepts volunteers.
OPEN_REQUEST_STATUSES = (RequestStatus.PENDING.value, RequestStatus.PARTIALLY_ASSIGNED.value)


class DisasterEvent(Base):
    __tablename__ = "disaster_events"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(50), nullable=True)
    name = Column(String(100), nullable=True)
    severity = Column(String(20), nullable=True)  # minor, moderate, major, critical
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    affected_zones = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class EmergencyRequest(Base):
    __tablename__ = "emergency_requests"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    emergency_type = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    people_count = Column(Integer, nullable=False, default=1)
    contact_number = Column(String(20), nullable=False)
    can_call = Column(Boolean, nullable=False, default=False)
    address = Column(Text, nullable=True)
    address_zone = Column(String(100), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    severity = Column(String(20), nullable=False, default=Severity.LOW.value)
    status = Column(String(20), nullable=False, default=RequestStatus.PENDING.value, index=True)
    disaster_event_id = Column(Integer, ForeignKey("disaster_events.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    guest = relationship("User", back_populates="emergency_requests")
    assignments = relationship(
        "RequestAssignment",
        back_populates="request",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<EmergencyRequest(id={self.id}, type='{self.emergency_type}', status='{self.status}')>"
