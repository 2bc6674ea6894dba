"""
User service for managing user operations.
"""

from datetime import date
from typing import List, Sequence

from fleet_admin.core.enums import UserStatus
from fleet_admin.domain.entities import User, new_record_id
from fleet_admin.infrastructure.persistence import PersistGateway
from fleet_admin.infrastructure.repositories import InMemoryRepository
from fleet_admin.schemas.user_schemas import UserCreate, UserImportRow, UserUpdate

from .base import BaseService


class UserService(BaseService):
    """
    User service for managing user operations.
    """

    def __init__(self, repository: InMemoryRepository[User], gateway: PersistGateway):
        super().__init__(gateway)
        self.repository = repository

    def get_service_name(self) -> str:
        return "UserService"

    def list_users(self) -> List[User]:
        return self.repository.list()

    def get_user(self, user_id: str) -> User:
        """Get user by ID or raise NotFoundError."""
        return self.repository.get_or_404(user_id)

    async def create_user(self, user_data: UserCreate) -> User:
        """Create new user. New users start active and join today."""
        user = User(
            id=new_record_id("user"),
            status=UserStatus.ACTIVE,
            join_date=date.today(),
            **user_data.model_dump(),
        )
        await self.persist("create_user", user.model_dump(mode="json"))
        return self.repository.add(user)

    async def update_user(self, user_id: str, user_data: UserUpdate) -> User:
        """Update user."""
        user = self.get_user(user_id)
        # Only include non-None values
        data = {k: v for k, v in user_data.model_dump().items() if v is not None}
        updated = user.model_copy(update=data)
        await self.persist("update_user", updated.model_dump(mode="json"))
        return self.repository.update(updated)

    async def delete_user(self, user_id: str) -> User:
        """Delete user."""
        self.get_user(user_id)
        await self.persist("delete_user", {"id": user_id})
        return self.repository.delete(user_id)

    async def import_users(self, rows: Sequence[UserImportRow]) -> List[User]:
        """Bulk-create users from validated spreadsheet rows."""
        users = [User(id=new_record_id("imported"), **row.model_dump()) for row in rows]
        await self.persist("import_users", {"count": len(users)})
        created = self.repository.add_many(users)
        self.log_operation("import_users", {"imported": len(created)})
        return created
