"""
Ship service for managing ship operations.
"""

from typing import List, Optional

from fleet_admin.core.enums import ShipStatus
from fleet_admin.domain.entities import Ship, new_record_id, utcnow
from fleet_admin.infrastructure.persistence import PersistGateway
from fleet_admin.infrastructure.repositories import InMemoryRepository
from fleet_admin.schemas.ship_schemas import ShipCreate, ShipUpdate

from .base import BaseService
from .measurement_service import MeasurementService


class ShipService(BaseService):
    """
    Ship service for managing ship operations.
    """

    def __init__(
        self,
        repository: InMemoryRepository[Ship],
        gateway: PersistGateway,
        rows: Optional[MeasurementService] = None,
    ):
        super().__init__(gateway)
        self.repository = repository
        self.rows = rows

    def get_service_name(self) -> str:
        return "ShipService"

    def list_ships(self) -> List[Ship]:
        return self.repository.list()

    def get_ship(self, ship_id: str) -> Ship:
        """Get ship by ID or raise NotFoundError."""
        return self.repository.get_or_404(ship_id)

    def ship_exists(self, ship_id: str) -> bool:
        return self.repository.exists(ship_id)

    async def create_ship(self, data: ShipCreate) -> Ship:
        ship = Ship(
            id=new_record_id("ship"),
            name=data.name,
            type=data.type,
            length=data.length,
            width=data.width,
            height=data.height,
            description=data.description or "",
            status=ShipStatus.ACTIVE,
            created_at=utcnow(),
            year_built=data.year_built,
        )
        await self.persist("create_ship", ship.model_dump(mode="json"))
        return self.repository.add(ship)

    async def update_ship(self, ship_id: str, data: ShipUpdate) -> Ship:
        ship = self.get_ship(ship_id)
        updated = ship.model_copy(update={
            **data.model_dump(exclude={"description"}),
            "description": data.description or "",
        })
        await self.persist("update_ship", updated.model_dump(mode="json"))
        return self.repository.update(updated)

    async def delete_ship(self, ship_id: str) -> Ship:
        self.get_ship(ship_id)
        await self.persist("delete_ship", {"id": ship_id})
        ship = self.repository.delete(ship_id)
        if self.rows is not None:
            self.rows.delete_for_parent(ship_id)
        return ship
