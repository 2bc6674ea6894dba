"""
Measurement row routes, mounted under ``/ships`` and ``/parts``.

Every request rebuilds a measurement table over the parent's current rows
and drives it, so the HTTP surface follows the table's add, edit, import
and export rules.
"""

from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, Query, Response, UploadFile, status
from starlette.concurrency import run_in_threadpool

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.exceptions import SpreadsheetImportError
from fleet_admin.core.response import APIResponse
from fleet_admin.interfaces.dependencies import (
    get_excel_processor,
    get_part_row_service,
    get_ship_row_service,
)
from fleet_admin.processors.excel_processor import ExcelProcessor
from fleet_admin.schemas.base import ImportRowErrorSchema, ImportSummaryResponse
from fleet_admin.schemas.table_schemas import MeasurementTableView
from fleet_admin.services import MeasurementService
from fleet_admin.tables.definitions import PART_ROWS, SHIP_ROWS, MeasurementKind, build_measurement_table
from fleet_admin.tables.measurement_table import MeasurementTable


def create_measurement_router(
    kind: MeasurementKind,
    get_service: Callable[..., MeasurementService],
) -> APIRouter:
    router = APIRouter()
    row_model = kind.row_model

    def _table(
        service: MeasurementService,
        processor: ExcelProcessor,
        parent_id: str,
        imported: Optional[List[Any]] = None,
    ) -> MeasurementTable:
        def on_import(rows):
            created = service.import_rows(parent_id, rows)
            if imported is not None:
                imported.extend(created)
            return created

        return build_measurement_table(
            kind,
            service.rows_for(parent_id),
            on_add=lambda values: service.add_row(parent_id, values),
            on_update=lambda row_id, values: service.update_row(parent_id, row_id, values),
            on_delete=lambda row_id: service.delete_row(parent_id, row_id),
            on_import=on_import,
            processor=processor,
        )

    @router.get("/{parent_id}/rows", response_model=MeasurementTableView)
    async def list_rows(
        parent_id: str,
        sort: Optional[str] = Query(None, description="id, created_at or a value column"),
        direction: SortDirection = Query(SortDirection.ASC),
        service: MeasurementService = Depends(get_service),
        processor: ExcelProcessor = Depends(get_excel_processor),
    ) -> MeasurementTableView:
        table = _table(service, processor, parent_id)
        if sort:
            table.set_sort(sort, direction)
        return table.render()

    @router.post(
        "/{parent_id}/rows",
        response_model=APIResponse[row_model],
        status_code=status.HTTP_201_CREATED,
    )
    async def add_row(
        parent_id: str,
        values: Dict[str, Any] = Body(..., description="Value fields; non-numeric input counts as 0"),
        service: MeasurementService = Depends(get_service),
        processor: ExcelProcessor = Depends(get_excel_processor),
    ):
        table = _table(service, processor, parent_id)
        row = table.add_row(values)
        return APIResponse.ok("Row added successfully", row)

    @router.post("/{parent_id}/rows/import", response_model=ImportSummaryResponse)
    async def import_rows(
        parent_id: str,
        file: UploadFile = File(...),
        service: MeasurementService = Depends(get_service),
        processor: ExcelProcessor = Depends(get_excel_processor),
    ) -> ImportSummaryResponse:
        """Append rows from an Excel workbook"""
        content = await file.read()
        imported: List[Any] = []
        table = _table(service, processor, parent_id, imported)
        table.begin_import()
        try:
            parsed = await run_in_threadpool(table.parse_file, content, file.filename)
        except SpreadsheetImportError as e:
            table.fail_import(e)
            raise
        result = table.apply_import(parsed)

        return ImportSummaryResponse(
            message=f"Imported {result.imported_count} rows",
            total_rows=result.total_rows,
            imported_count=result.imported_count,
            skipped_count=result.skipped_count,
            errors=[ImportRowErrorSchema(row_number=e.row_number, message=e.message) for e in result.errors],
            imported_ids=[row.id for row in imported],
        )

    @router.get("/{parent_id}/rows/export")
    async def export_rows(
        parent_id: str,
        sort: Optional[str] = Query(None),
        direction: SortDirection = Query(SortDirection.ASC),
        service: MeasurementService = Depends(get_service),
        processor: ExcelProcessor = Depends(get_excel_processor),
    ) -> Response:
        """Download the rows as xlsx, in the requested sort order"""
        table = _table(service, processor, parent_id)
        if sort:
            table.set_sort(sort, direction)
        exported = await run_in_threadpool(table.export)
        return Response(
            content=exported.content,
            media_type=exported.media_type,
            headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
        )

    @router.put("/{parent_id}/rows/{row_id}", response_model=APIResponse[row_model])
    async def update_row(
        parent_id: str,
        row_id: str,
        values: Dict[str, Any] = Body(..., description="Changed value fields"),
        service: MeasurementService = Depends(get_service),
        processor: ExcelProcessor = Depends(get_excel_processor),
    ):
        table = _table(service, processor, parent_id)
        table.start_edit(row_id)
        for key, raw in values.items():
            table.set_edit_value(key, raw)
        row = table.save_edit()
        return APIResponse.ok("Row updated successfully", row)

    @router.delete("/{parent_id}/rows/{row_id}", response_model=APIResponse[row_model])
    async def delete_row(
        parent_id: str,
        row_id: str,
        service: MeasurementService = Depends(get_service),
        processor: ExcelProcessor = Depends(get_excel_processor),
    ):
        table = _table(service, processor, parent_id)
        table.request_delete(row_id)
        row = table.confirm_delete()
        return APIResponse.ok("Row deleted successfully", row)

    return router


part_rows_router = create_measurement_router(PART_ROWS, get_part_row_service)
ship_rows_router = create_measurement_router(SHIP_ROWS, get_ship_row_service)
