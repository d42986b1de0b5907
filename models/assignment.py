"""
Volunteer assignment models.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class AssignmentStatus(str, PyEnum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# "accepted" only appears in rows written by older clients; it still holds a slot.
ACTIVE_ASSIGNMENT_STATUSES = ("assigned", "in_progress", "accepted")


class RequestAssignment(Base):
    __tablename__ = "request_assignments"
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        UniqueConstraint("request_id", "volunteer_id", name="uq_request_assignment_volunteer"),
    )

    id = Column(Integer, primary_key=True, index=True)
    request_id = Column(Integer, ForeignKey("emergency_requests.id", ondelete="CASCADE"), nullable=False, index=True)
    volunteer_id = Column(Integer, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=AssignmentStatus.ASSIGNED.value)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now())
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    people_served = Column(Integer, nullable=False, default=0)
    volunteer_notes = Column(Text, nullable=True)
    guest_rating = Column(Integer, nullable=True)
    guest_feedback = Column(Text, nullable=True)

    request = relationship("EmergencyRequest", back_populates="assignments")
    volunteer = relationship("Volunteer", back_populates="assignments")

    def __repr__(self):
        return f"<RequestAssignment(id={self.id}, request_id={self.request_id}, volunteer_id={self.volunteer_id})>"


class AssignmentStatusHistory(Base):
    __tablename__ = "assignment_status_history"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(Integer, nullable=False, index=True)
    assignment_type = Column(String(20), nullable=False, default="volunteer")  # volunteer / relief
    status = Column(String(20), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
