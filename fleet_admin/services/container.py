from dataclasses import dataclass
from typing import Optional

from fleet_admin.core.config import Settings, get_settings
from fleet_admin.domain.entities import Part, PartRow, Ship, ShipRow, User
from fleet_admin.infrastructure.persistence import PersistGateway, SimulatedPersistGateway
from fleet_admin.infrastructure.repositories import InMemoryRepository
from fleet_admin.processors.excel_processor import ExcelProcessor
from fleet_admin.tables.definitions import PART_ROWS, SHIP_ROWS

from .measurement_service import MeasurementService
from .part_service import PartService
from .ship_service import ShipService
from .user_service import UserService


@dataclass
class ServiceContainer:
    """Every service of one application instance, sharing one gateway."""
    users: UserService
    ships: ShipService
    parts: PartService
    ship_rows: MeasurementService
    part_rows: MeasurementService
    processor: ExcelProcessor
    gateway: PersistGateway


def build_services(
    settings: Optional[Settings] = None,
    gateway: Optional[PersistGateway] = None,
) -> ServiceContainer:
    settings = settings or get_settings()
    gateway = gateway or SimulatedPersistGateway.from_settings(settings.persistence)
    processor = ExcelProcessor(
        max_reported_errors=settings.spreadsheet.max_reported_errors,
        max_file_size=settings.spreadsheet.max_file_size,
    )

    ship_repository: InMemoryRepository[Ship] = InMemoryRepository("Ship")
    part_repository: InMemoryRepository[Part] = InMemoryRepository("Part")

    ship_rows = MeasurementService(
        SHIP_ROWS,
        InMemoryRepository[ShipRow]("Row"),
        parent_exists=ship_repository.exists,
        parent_resource="Ship",
    )
    part_rows = MeasurementService(
        PART_ROWS,
        InMemoryRepository[PartRow]("Row"),
        parent_exists=part_repository.exists,
        parent_resource="Part",
    )

    ships = ShipService(ship_repository, gateway, rows=ship_rows)
    parts = PartService(part_repository, gateway, ships=ships, rows=part_rows)
    users = UserService(InMemoryRepository[User]("User"), gateway)

    return ServiceContainer(
        users=users,
        ships=ships,
        parts=parts,
        ship_rows=ship_rows,
        part_rows=part_rows,
        processor=processor,
        gateway=gateway,
    )
