from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id(prefix: str) -> str:
    """Generate a unique record identifier such as ``row-3f2a9c1d0b7e``."""
    return f"{prefix}-{uuid4().hex[:12]}"


class BaseRecord(BaseModel):
    """
    Base class for every record shown in a table.

    The only structural requirement a table places on a record is a stable,
    unique string identifier.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(min_length=1)
