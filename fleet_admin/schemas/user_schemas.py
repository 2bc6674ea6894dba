from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from fleet_admin.core.enums import Department, UserRole, UserStatus


class UserCreate(BaseModel):
    """Schema for creating users. Every field is required."""
    name: str = Field(min_length=1)
    email: EmailStr
    role: UserRole
    department: Department


class UserUpdate(BaseModel):
    """Schema for updating users."""
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    department: Optional[Department] = None
    status: Optional[UserStatus] = None
    join_date: Optional[date] = None


# Spreadsheet header aliases for user import
USER_COLUMN_MAPPING: Dict[str, List[str]] = {
    "name": ["Name", "name", "Full Name"],
    "email": ["Email", "email", "Email Address"],
    "role": ["Role", "role"],
    "department": ["Department", "department"],
    "status": ["Status", "status"],
    "join_date": ["Join Date", "joinDate", "Start Date"],
}


def _normalize_choice(value: Any, choices: type, default: Any) -> Any:
    if value is None:
        return default
    normalized = str(value).strip().lower()
    valid = {member.value for member in choices}
    return normalized if normalized in valid else default


class UserImportRow(BaseModel):
    """
    One user row read from a spreadsheet.

    Role, department and status are normalized leniently: unknown values fall
    back to employee, general and active respectively.
    """
    name: str = Field(min_length=1)
    email: EmailStr
    role: UserRole = UserRole.EMPLOYEE
    department: Department = Department.GENERAL
    status: UserStatus = UserStatus.ACTIVE
    join_date: date = Field(default_factory=date.today)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: Any) -> Any:
        return _normalize_choice(v, UserRole, UserRole.EMPLOYEE.value)

    @field_validator("department", mode="before")
    @classmethod
    def normalize_department(cls, v: Any) -> Any:
        return _normalize_choice(v, Department, Department.GENERAL.value)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        # anything other than an explicit "inactive" counts as active
        return _normalize_choice(v, UserStatus, UserStatus.ACTIVE.value)

    @field_validator("join_date", mode="before")
    @classmethod
    def parse_join_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            text = v.strip()
            if not text:
                return date.today()
            try:
                return date.fromisoformat(text[:10])
            except ValueError:
                return text
        return v
