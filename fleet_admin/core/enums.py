from enum import Enum


class SortDirection(str, Enum):
    """Active sort direction; an inactive sort has no direction at all."""
    ASC = "asc"
    DESC = "desc"


class ShipStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RETIRED = "RETIRED"
    UNDER_REPAIR = "UNDER_REPAIR"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    CONTRACTOR = "contractor"


class Department(str, Enum):
    ENGINEERING = "engineering"
    MARKETING = "marketing"
    SALES = "sales"
    HR = "hr"
    FINANCE = "finance"
    GENERAL = "general"
