from datetime import datetime
from typing import List, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from models.volunteer import AccountStatus
from schemas.common import BaseSchema, split_csv


class VolunteerCreate(BaseModel):
    """Volunteer registration form."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: EmailStr
    phone: str
    password: str
    confirm_password: str = Field(alias="confirmPassword")
    zone: str
    skills: List[str] = []
    experience: Optional[str] = None
    availability: Optional[str] = None
    agreed_to_terms: bool = Field(
        default=False,
        validation_alias=AliasChoices("agreed_to_terms", "agreeToTerms"),
    )

    @field_validator("skills", mode="before")
    @classmethod
    def parse_skills(cls, value: Union[List[str], str, None]) -> List[str]:
        return split_csv(value)


class VolunteerRead(BaseSchema):
    id: int
    name: str
    email: str
    phone: str
    zone: Optional[str] = None
    skills: List[str] = []
    experience_level: Optional[str] = None
    availability: Optional[str] = None
    available: bool
    account_status: AccountStatus
    email_verified: bool = False
    total_assignments: int = 0
    completed_assignments: int = 0
    total_people_served: int = 0
    rating: float = 0.0
    last_login: Optional[datetime] = None
    last_active: Optional[datetime] = None
    created_at: Optional[datetime] = None


class VolunteerRegistered(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    zone: Optional[str] = None
    status: AccountStatus
    token: str


class AvailabilityUpdate(BaseModel):
    available: bool
