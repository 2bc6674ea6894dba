from datetime import datetime
from typing import Optional

from pydantic import Field

from fleet_admin.core.enums import ShipStatus

from .base import BaseRecord, utcnow


class Ship(BaseRecord):
    """A vessel in the fleet. Dimensions are in metres."""

    name: str
    type: str
    length: float
    width: float
    height: float
    description: str = ""
    status: ShipStatus = ShipStatus.ACTIVE
    created_at: datetime = Field(default_factory=utcnow)
    year_built: Optional[int] = None
