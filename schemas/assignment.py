from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from models.emergency import RequestStatus, Severity
from schemas.common import BaseSchema


class AcceptRequest(BaseModel):
    request_id: int


class LegacyAssignRequest(BaseModel):
    volunteer_id: int
    request_id: int


class AcceptResult(BaseModel):
    assignment_id: int = Field(serialization_alias="assignmentId")
    remaining_slots: int = Field(serialization_alias="remainingSlots")
    total_assigned: int = Field(serialization_alias="totalAssigned")


class CompleteAssignmentRequest(BaseModel):
    people_served: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class AssignmentRead(BaseSchema):
    id: int
    request_id: int
    volunteer_id: int
    status: str
    assigned_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    people_served: int = 0
    volunteer_notes: Optional[str] = None


class VolunteerAssignmentRead(AssignmentRead):
    """An assignment joined with the request it serves (volunteer dashboard)."""
    emergency_type: str
    description: str
    address: Optional[str] = None
    severity: Severity
    people_count: int
    contact_number: str
    request_status: RequestStatus


class AvailableRequestRead(BaseModel):
    id: int
    emergency_type: str
    description: str
    people_count: int
    contact_number: str
    can_call: bool
    address: Optional[str] = None
    address_zone: Optional[str] = None
    severity: Severity
    status: RequestStatus
    created_at: Optional[datetime] = None
    volunteers_needed: int
    volunteers_assigned: int
