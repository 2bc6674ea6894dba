from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.response import APIResponse
from fleet_admin.domain.entities import Ship
from fleet_admin.interfaces.dependencies import get_ship_service
from fleet_admin.schemas.ship_schemas import ShipCreate, ShipUpdate
from fleet_admin.schemas.table_schemas import TableView
from fleet_admin.services import ShipService
from fleet_admin.tables.definitions import build_ship_table

router = APIRouter()


@router.get("", response_model=TableView)
async def list_ships(
    search: Optional[str] = Query(None, description="Free-text filter"),
    sort: Optional[str] = Query(None, description="Column key to sort by"),
    direction: SortDirection = Query(SortDirection.ASC, description="Sort direction"),
    service: ShipService = Depends(get_ship_service),
) -> TableView:
    """Render the ships table"""
    table = build_ship_table(service.list_ships(), on_delete=service.delete_ship)
    table.set_search(search)
    if sort:
        table.set_sort(sort, direction)
    return table.render()


@router.post("", response_model=APIResponse[Ship], status_code=status.HTTP_201_CREATED)
async def create_ship(
    ship_data: ShipCreate,
    service: ShipService = Depends(get_ship_service),
) -> APIResponse[Ship]:
    ship = await service.create_ship(ship_data)
    return APIResponse.ok("Ship created successfully", ship)


@router.get("/{ship_id}", response_model=APIResponse[Ship])
async def get_ship(
    ship_id: str,
    service: ShipService = Depends(get_ship_service),
) -> APIResponse[Ship]:
    return APIResponse.ok("Ship retrieved successfully", service.get_ship(ship_id))


@router.put("/{ship_id}", response_model=APIResponse[Ship])
async def update_ship(
    ship_id: str,
    ship_data: ShipUpdate,
    service: ShipService = Depends(get_ship_service),
) -> APIResponse[Ship]:
    ship = await service.update_ship(ship_id, ship_data)
    return APIResponse.ok("Ship updated successfully", ship)


@router.delete("/{ship_id}", response_model=APIResponse[Ship])
async def delete_ship(
    ship_id: str,
    service: ShipService = Depends(get_ship_service),
) -> APIResponse[Ship]:
    table = build_ship_table(service.list_ships(), on_delete=service.delete_ship)
    table.request_delete(ship_id)
    ship = await table.confirm_delete()
    return APIResponse.ok("Ship deleted successfully", ship)
