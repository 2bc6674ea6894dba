from typing import Optional

from pydantic import BaseModel, Field


class PartCreate(BaseModel):
    """Schema for creating parts."""
    name: str = Field(min_length=1, description="Part name")
    description: Optional[str] = Field(default=None, max_length=1000)
    ship_id: str = Field(min_length=1, description="Ship the part belongs to")


class PartUpdate(PartCreate):
    """Schema for updating parts."""
