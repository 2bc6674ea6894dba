from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """Base response schema for all API responses."""
    success: bool = True
    message: str = "Operation completed successfully"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ImportRowErrorSchema(BaseModel):
    """A spreadsheet row that was skipped during import."""
    row_number: int = Field(description="Worksheet row number, header row is 1")
    message: str


class ImportSummaryResponse(BaseResponse):
    """Response schema for spreadsheet imports."""
    total_rows: int
    imported_count: int
    skipped_count: int
    errors: List[ImportRowErrorSchema] = Field(default_factory=list)
    imported_ids: Optional[List[str]] = None
