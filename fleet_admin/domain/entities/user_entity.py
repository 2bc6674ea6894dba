from datetime import date

from pydantic import EmailStr, Field

from fleet_admin.core.enums import Department, UserRole, UserStatus

from .base import BaseRecord


class User(BaseRecord):
    """Dashboard user."""

    name: str = Field(min_length=1)
    email: EmailStr
    role: UserRole = UserRole.EMPLOYEE
    status: UserStatus = UserStatus.ACTIVE
    join_date: date = Field(default_factory=date.today)
    department: Department = Department.GENERAL
