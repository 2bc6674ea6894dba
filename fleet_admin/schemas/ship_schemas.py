from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fleet_admin.core.enums import ShipStatus


class ShipCreate(BaseModel):
    """Schema for creating ships."""
    name: str = Field(min_length=1, description="Ship name")
    type: str = Field(min_length=1, description="Ship type, e.g. Container Ship")
    length: float = Field(gt=0, description="Length in metres")
    width: float = Field(gt=0, description="Width in metres")
    height: float = Field(gt=0, description="Height in metres")
    description: Optional[str] = Field(default=None, max_length=1000)
    year_built: Optional[int] = Field(default=None, ge=1800)

    @field_validator("year_built")
    @classmethod
    def year_not_in_future(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v > date.today().year:
            raise ValueError("Year cannot be in the future")
        return v


class ShipUpdate(ShipCreate):
    """Schema for updating ships. Status is only editable, and required, here."""
    status: ShipStatus
