from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import BaseRecord, utcnow


class Part(BaseRecord):
    """A component installed on a ship, referenced through ``ship_id``."""

    name: str
    description: str = ""
    ship_id: str
    created_at: Optional[datetime] = Field(default_factory=utcnow)
