"""
Authentication schemas for volunteer login.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from schemas.volunteer import VolunteerRead


class LoginRequest(BaseModel):
    """Volunteer login request schema."""

    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = Field(None, description="Volunteer email")
    password: Optional[str] = Field(None, description="Volunteer password")
    remember_me: bool = Field(default=False, alias="rememberMe")


class LoginResult(BaseModel):
    token: str
    volunteer: VolunteerRead
