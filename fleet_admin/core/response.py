from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataType = TypeVar("DataType")


class APIResponse(BaseModel, Generic[DataType]):
    """Standard API response wrapper"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: str = Field(..., description="Response message")
    data: Optional[DataType] = Field(default=None, description="Response data")
    success: bool = Field(default=True, description="Success status")

    @classmethod
    def ok(cls, message: str = "Success", data: Optional[DataType] = None) -> "APIResponse[DataType]":
        """Create a success response"""
        return cls(message=message, data=data, success=True)
