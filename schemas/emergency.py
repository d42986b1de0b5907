from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from models.emergency import RequestStatus, Severity
from schemas.common import BaseSchema, blank_to_none


class EmergencyRequestCreate(BaseModel):
    """Emergency submission from the public request form.

    Required fields are checked by the intake workflow so blank strings get
    the same message as missing ones.
    """
    emergency_type: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = None
    people_count: Optional[int] = Field(default=1, ge=1)
    contact_number: Optional[str] = Field(default=None, max_length=30)
    can_call: bool = False
    address: Optional[str] = None
    severity: Optional[Severity] = None
    disaster_event_id: Optional[int] = None

    @field_validator("address", mode="before")
    @classmethod
    def empty_address_is_missing(cls, value):
        return blank_to_none(value)

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value):
        value = blank_to_none(value)
        return value.strip().lower() if isinstance(value, str) else value


class EmergencySubmitResult(BaseModel):
    request_id: int = Field(serialization_alias="requestId")
    total_nearby_volunteers: int = Field(serialization_alias="totalNearbyVolunteers")
    notified_count: int = Field(serialization_alias="notifiedCount")
    volunteers_needed: int = Field(serialization_alias="volunteersNeeded")
    zone: Optional[str] = None


class EmergencyRequestRead(BaseSchema):
    id: int
    guest_id: int
    emergency_type: str
    description: str
    people_count: int
    contact_number: str
    can_call: bool
    address: Optional[str] = None
    address_zone: Optional[str] = None
    severity: Severity
    status: RequestStatus
    disaster_event_id: Optional[int] = None
    created_at: Optional[datetime] = None


class RequestAssignmentSummary(BaseSchema):
    id: int
    volunteer_id: int
    status: str
    assigned_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    people_served: int = 0
    volunteer_name: Optional[str] = None
    volunteer_phone: Optional[str] = None


class EmergencyRequestDetail(EmergencyRequestRead):
    assignments: List[RequestAssignmentSummary] = []


class EmergencyStatusRead(BaseModel):
    """Public status projection polled by the requester's status page."""
    id: int
    emergency_type: str
    description: str
    people_count: int
    contact_number: str
    address: Optional[str] = None
    severity: Severity
    status: RequestStatus
    created_at: Optional[datetime] = None
    volunteers_assigned: int = 0
    volunteers_completed: int = 0
    volunteers_needed: int = 1
