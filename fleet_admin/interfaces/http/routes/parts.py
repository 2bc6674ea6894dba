from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.response import APIResponse
from fleet_admin.domain.entities import Part
from fleet_admin.interfaces.dependencies import get_part_service
from fleet_admin.schemas.part_schemas import PartCreate, PartUpdate
from fleet_admin.schemas.table_schemas import TableView
from fleet_admin.services import PartService
from fleet_admin.tables.definitions import build_part_table

router = APIRouter()


def _part_table(service: PartService):
    return build_part_table(
        service.list_parts(),
        ships=service.ships.list_ships(),
        on_delete=service.delete_part,
    )


@router.get("", response_model=TableView)
async def list_parts(
    search: Optional[str] = Query(None, description="Matches name, description or ship name"),
    sort: Optional[str] = Query(None, description="Column key to sort by"),
    direction: SortDirection = Query(SortDirection.ASC, description="Sort direction"),
    service: PartService = Depends(get_part_service),
) -> TableView:
    """Render the parts table"""
    table = _part_table(service)
    table.set_search(search)
    if sort:
        table.set_sort(sort, direction)
    return table.render()


@router.post("", response_model=APIResponse[Part], status_code=status.HTTP_201_CREATED)
async def create_part(
    part_data: PartCreate,
    service: PartService = Depends(get_part_service),
) -> APIResponse[Part]:
    part = await service.create_part(part_data)
    return APIResponse.ok("Part created successfully", part)


@router.get("/{part_id}", response_model=APIResponse[Part])
async def get_part(
    part_id: str,
    service: PartService = Depends(get_part_service),
) -> APIResponse[Part]:
    return APIResponse.ok("Part retrieved successfully", service.get_part(part_id))


@router.put("/{part_id}", response_model=APIResponse[Part])
async def update_part(
    part_id: str,
    part_data: PartUpdate,
    service: PartService = Depends(get_part_service),
) -> APIResponse[Part]:
    part = await service.update_part(part_id, part_data)
    return APIResponse.ok("Part updated successfully", part)


@router.delete("/{part_id}", response_model=APIResponse[Part])
async def delete_part(
    part_id: str,
    service: PartService = Depends(get_part_service),
) -> APIResponse[Part]:
    table = _part_table(service)
    table.request_delete(part_id)
    part = await table.confirm_delete()
    return APIResponse.ok("Part deleted successfully", part)
