"""
Common schemas used across the application.
"""

from typing import List, Optional, Union
from pydantic import BaseModel


class BaseSchema(BaseModel):
    """Base schema for ORM-backed read models."""

    model_config = {
        "from_attributes": True
    }


def split_csv(value: Union[List[str], str, None]) -> List[str]:
    """Accept either a list or a comma separated string and return a clean list."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and not value.strip():
        return None
    return value
