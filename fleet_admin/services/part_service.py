"""
Part service for managing part operations.
"""

from typing import List, Optional

from fleet_admin.core.exceptions import ValidationException
from fleet_admin.domain.entities import Part, new_record_id, utcnow
from fleet_admin.infrastructure.persistence import PersistGateway
from fleet_admin.infrastructure.repositories import InMemoryRepository
from fleet_admin.schemas.part_schemas import PartCreate, PartUpdate

from .base import BaseService
from .measurement_service import MeasurementService
from .ship_service import ShipService


class PartService(BaseService):
    def __init__(
        self,
        repository: InMemoryRepository[Part],
        gateway: PersistGateway,
        ships: ShipService,
        rows: Optional[MeasurementService] = None,
    ):
        super().__init__(gateway)
        self.repository = repository
        self.ships = ships
        self.rows = rows

    def get_service_name(self) -> str:
        return "PartService"

    def _check_ship(self, ship_id: str) -> None:
        if not self.ships.ship_exists(ship_id):
            raise ValidationException(f"Ship '{ship_id}' does not exist", field="ship_id", value=ship_id)

    def list_parts(self) -> List[Part]:
        return self.repository.list()

    def get_part(self, part_id: str) -> Part:
        return self.repository.get_or_404(part_id)

    def part_exists(self, part_id: str) -> bool:
        return self.repository.exists(part_id)

    async def create_part(self, data: PartCreate) -> Part:
        self._check_ship(data.ship_id)
        part = Part(
            id=new_record_id("part"),
            name=data.name,
            description=data.description or "",
            ship_id=data.ship_id,
            created_at=utcnow(),
        )
        await self.persist("create_part", part.model_dump(mode="json"))
        return self.repository.add(part)

    async def update_part(self, part_id: str, data: PartUpdate) -> Part:
        """
        Update a part.

        The backend receives the part together with its current measurement
        rows, the way the edit form submits them.
        """
        part = self.get_part(part_id)
        self._check_ship(data.ship_id)
        updated = part.model_copy(update={
            "name": data.name,
            "description": data.description or "",
            "ship_id": data.ship_id,
        })

        payload = updated.model_dump(mode="json")
        rows = self.rows.rows_for(part_id) if self.rows is not None else []
        payload["rows"] = [row.model_dump(mode="json") for row in rows]

        await self.persist("update_part", payload)
        return self.repository.update(updated)

    async def delete_part(self, part_id: str) -> Part:
        self.get_part(part_id)
        await self.persist("delete_part", {"id": part_id})
        part = self.repository.delete(part_id)
        if self.rows is not None:
            self.rows.delete_for_parent(part_id)
        return part
