from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from starlette.concurrency import run_in_threadpool

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.exceptions import SpreadsheetImportError
from fleet_admin.core.response import APIResponse
from fleet_admin.domain.entities import User
from fleet_admin.interfaces.dependencies import get_excel_processor, get_user_service
from fleet_admin.processors.excel_processor import ExcelProcessor
from fleet_admin.schemas.base import ImportRowErrorSchema, ImportSummaryResponse
from fleet_admin.schemas.table_schemas import TableView
from fleet_admin.schemas.user_schemas import USER_COLUMN_MAPPING, UserCreate, UserImportRow, UserUpdate
from fleet_admin.services import UserService
from fleet_admin.tables.definitions import build_user_table

router = APIRouter()


@router.get("", response_model=TableView)
async def list_users(
    search: Optional[str] = Query(None, description="Free-text filter"),
    sort: Optional[str] = Query(None, description="Column key to sort by"),
    direction: SortDirection = Query(SortDirection.ASC, description="Sort direction"),
    service: UserService = Depends(get_user_service),
) -> TableView:
    """Render the users table"""
    table = build_user_table(service.list_users(), on_delete=service.delete_user)
    table.set_search(search)
    if sort:
        table.set_sort(sort, direction)
    return table.render()


@router.post("", response_model=APIResponse[User], status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
) -> APIResponse[User]:
    user = await service.create_user(user_data)
    return APIResponse.ok("User created successfully", user)


@router.post("/import", response_model=ImportSummaryResponse)
async def import_users(
    file: UploadFile = File(...),
    service: UserService = Depends(get_user_service),
    processor: ExcelProcessor = Depends(get_excel_processor),
) -> ImportSummaryResponse:
    """Import users from an Excel workbook"""
    content = await file.read()
    is_valid, message = processor.validate_file_format(file.filename, content)
    if not is_valid:
        raise SpreadsheetImportError(message)

    result = await run_in_threadpool(processor.parse, content, UserImportRow, USER_COLUMN_MAPPING, str)
    users = await service.import_users(result.rows)

    return ImportSummaryResponse(
        message=f"Imported {len(users)} users",
        total_rows=result.total_rows,
        imported_count=result.imported_count,
        skipped_count=result.skipped_count,
        errors=[ImportRowErrorSchema(row_number=e.row_number, message=e.message) for e in result.errors],
        imported_ids=[user.id for user in users],
    )


@router.get("/{user_id}", response_model=APIResponse[User])
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> APIResponse[User]:
    return APIResponse.ok("User retrieved successfully", service.get_user(user_id))


@router.put("/{user_id}", response_model=APIResponse[User])
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> APIResponse[User]:
    user = await service.update_user(user_id, user_data)
    return APIResponse.ok("User updated successfully", user)


@router.delete("/{user_id}", response_model=APIResponse[User])
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> APIResponse[User]:
    table = build_user_table(service.list_users(), on_delete=service.delete_user)
    table.request_delete(user_id)
    user = await table.confirm_delete()
    return APIResponse.ok("User deleted successfully", user)
