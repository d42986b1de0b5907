from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field, field_validator

from schemas.common import BaseSchema, split_csv


class ReliefProviderCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    type_of_relief: List[str] = []
    capacity: Optional[int] = Field(default=None, ge=0)
    lat: Optional[float] = None
    lng: Optional[float] = None
    zone: Optional[str] = None
    address: Optional[str] = None
    contact_number: Optional[str] = None

    @field_validator("type_of_relief", mode="before")
    @classmethod
    def parse_relief_types(cls, value: Union[List[str], str, None]) -> List[str]:
        return split_csv(value)


class ReliefProviderRead(BaseSchema):
    id: int
    name: str
    type_of_relief: List[str] = []
    capacity: Optional[int] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    zone: Optional[str] = None
    address: Optional[str] = None
    contact_number: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
