"""
Measurement table: sortable, inline-editable rows of numeric values with an
add form and spreadsheet import/export.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.exceptions import (
    BadRequestError,
    NotFoundError,
    SpreadsheetImportError,
    ValidationException,
)
from fleet_admin.core.logging import get_logger
from fleet_admin.processors.excel_processor import (
    ColumnConfig,
    ColumnMapping,
    ExcelProcessor,
    ExportedFile,
    ImportResult,
)
from fleet_admin.schemas.table_schemas import (
    MeasurementColumnView,
    MeasurementRowView,
    MeasurementTableView,
)
from fleet_admin.utils.conversion import coerce_number

from .columns import SortState, compare_values, resolve_field, sort_records
from .confirmation import DeleteConfirmation

logger = get_logger(__name__)

TValues = TypeVar("TValues", bound=BaseModel)

FIXED_SORT_KEYS = ("id", "created_at")


@dataclass
class EditSession:
    """The ``editing`` state: a row id and the values typed so far."""
    row_id: str
    buffer: Dict[str, float] = field(default_factory=dict)


def _validation_message(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    )


class MeasurementTable(Generic[TValues]):
    def __init__(
        self,
        data: Sequence[Any],
        columns: Sequence[ColumnConfig],
        title: str,
        description: str,
        on_add: Callable[[TValues], Any],
        on_update: Callable[[str, TValues], Any],
        on_delete: Callable[[str], Any],
        on_import: Callable[[List[TValues]], Any],
        export_filename: str,
        sheet_name: str,
        schema: Type[TValues],
        column_mapping: ColumnMapping,
        processor: Optional[ExcelProcessor] = None,
    ):
        self.data = list(data)
        self.columns = list(columns)
        self.title = title
        self.description = description
        self.on_add = on_add
        self.on_update = on_update
        self.on_import = on_import
        self.export_filename = export_filename
        self.sheet_name = sheet_name
        self.schema = schema
        self.column_mapping = column_mapping
        self.processor = processor or ExcelProcessor()

        self.sort = SortState()
        self.edit: Optional[EditSession] = None
        self.add_form_open = False
        self.new_row: Dict[str, float] = self._empty_values()
        self.importing = False
        self.import_error: Optional[str] = None
        self.delete = DeleteConfirmation(on_delete, "row")

    @property
    def value_keys(self) -> List[str]:
        return [column.key for column in self.columns]

    def _empty_values(self) -> Dict[str, float]:
        return {key: 0.0 for key in self.value_keys}

    def _row(self, row_id: str) -> Any:
        for row in self.data:
            if resolve_field(row, "id") == row_id:
                return row
        raise NotFoundError("Row", row_id)

    def _values_of(self, row: Any) -> Dict[str, float]:
        return {key: coerce_number(resolve_field(row, key)) for key in self.value_keys}

    def _check_value_key(self, key: str) -> None:
        if key not in self.value_keys:
            raise ValidationException(f"Unknown column '{key}'", field=key)

    def _validated(self, values: Dict[str, float]) -> TValues:
        try:
            return self.schema.model_validate(values)
        except ValidationError as e:
            raise ValidationException(_validation_message(e), details={"values": values}) from e

    # Sort

    def _check_sort_key(self, key: str) -> None:
        if key not in FIXED_SORT_KEYS and key not in self.value_keys:
            raise ValidationException(f"Column '{key}' is not sortable", field="sort", value=key)

    def toggle_sort(self, key: str) -> SortState:
        self._check_sort_key(key)
        self.sort = self.sort.toggle(key)
        return self.sort

    def set_sort(self, key: Optional[str], direction: Optional[SortDirection] = SortDirection.ASC) -> SortState:
        if key is None or direction is None:
            self.sort = SortState()
        else:
            self._check_sort_key(key)
            self.sort = SortState(key, direction)
        return self.sort

    def visible_rows(self) -> List[Any]:
        key = self.sort.key
        return sort_records(self.data, self.sort, lambda row: resolve_field(row, key), compare_values)

    # Inline edit

    @property
    def editing_id(self) -> Optional[str]:
        return self.edit.row_id if self.edit else None

    def start_edit(self, row_id: str) -> Optional[EditSession]:
        """
        Enter the editing state for ``row_id``.

        Returns the session that was abandoned when another row was already
        being edited. Its values are dropped without saving.
        """
        row = self._row(row_id)
        abandoned = None
        if self.edit is not None and self.edit.row_id != row_id:
            abandoned = self.edit
            logger.warning(f"Discarding unsaved edit of row {abandoned.row_id} to edit row {row_id}")

        self.edit = EditSession(
            row_id=row_id,
            buffer=self._values_of(row),
        )
        return abandoned

    def set_edit_value(self, key: str, raw: Any) -> float:
        if self.edit is None:
            raise BadRequestError("No row is being edited")
        self._check_value_key(key)
        value = coerce_number(raw)
        self.edit.buffer[key] = value
        return value

    def save_edit(self) -> Any:
        if self.edit is None:
            raise BadRequestError("No row is being edited")
        values = self._validated(self.edit.buffer)
        row_id = self.edit.row_id
        result = self.on_update(row_id, values)
        self.edit = None
        return result

    def cancel_edit(self) -> None:
        self.edit = None

    # Add form

    def open_add_form(self) -> None:
        self.add_form_open = True

    def close_add_form(self) -> None:
        self.add_form_open = False

    def set_new_value(self, key: str, raw: Any) -> float:
        self._check_value_key(key)
        value = coerce_number(raw)
        self.new_row[key] = value
        return value

    def submit_add(self) -> Any:
        values = self._validated(self.new_row)
        result = self.on_add(values)
        self.new_row = self._empty_values()
        self.add_form_open = False
        return result

    def add_row(self, values: Dict[str, Any]) -> Any:
        """Open the form, fill it from ``values`` and submit it."""
        self.open_add_form()
        for key, raw in values.items():
            self.set_new_value(key, raw)
        return self.submit_add()

    # Import / export

    def parse_file(self, content: bytes, filename: Optional[str] = None) -> ImportResult[TValues]:
        """
        Validate and parse an uploaded workbook without touching any state.

        Safe to run on a worker thread; ``apply_import`` hands the result on.
        """
        if filename is not None:
            is_valid, message = self.processor.validate_file_format(filename, content)
            if not is_valid:
                raise SpreadsheetImportError(message)
        return self.processor.parse(content, self.schema, self.column_mapping)

    def begin_import(self) -> None:
        self.importing = True
        self.import_error = None

    def fail_import(self, error: SpreadsheetImportError) -> None:
        self.importing = False
        self.import_error = error.message

    def apply_import(self, result: ImportResult[TValues]) -> ImportResult[TValues]:
        try:
            self.on_import(result.rows)
        finally:
            self.importing = False
        self.import_error = None
        logger.info(
            f"Imported {result.imported_count} rows into {self.title}, skipped {result.skipped_count}"
        )
        return result

    def import_file(self, content: bytes, filename: Optional[str] = None) -> ImportResult[TValues]:
        """
        Import rows from an uploaded workbook.

        On any failure ``import_error`` holds the message, the error is
        re-raised and ``on_import`` is not called.
        """
        self.begin_import()
        try:
            result = self.parse_file(content, filename)
        except SpreadsheetImportError as e:
            self.fail_import(e)
            raise
        return self.apply_import(result)

    def export(self) -> ExportedFile:
        content = self.processor.export(self.visible_rows(), self.columns, sheet_name=self.sheet_name)
        return ExportedFile(filename=self.export_filename, content=content)

    # Delete

    def request_delete(self, row_id: str) -> None:
        self.delete.request(row_id)

    def confirm_delete(self) -> Any:
        return self.delete.confirm()

    def cancel_delete(self) -> None:
        self.delete.cancel()

    @property
    def pending_delete_id(self) -> Optional[str]:
        return self.delete.pending_id

    # Rendering

    def render(self) -> MeasurementTableView:
        rows = []
        for row in self.visible_rows():
            row_id = resolve_field(row, "id")
            values = self._values_of(row)
            rows.append(MeasurementRowView(
                id=row_id,
                created_at=resolve_field(row, "created_at"),
                values=values,
                display={key: f"{value:.2f}" for key, value in values.items()},
                editing=row_id == self.editing_id,
            ))

        return MeasurementTableView(
            title=self.title,
            description=self.description,
            row_count=len(self.data),
            columns=[
                MeasurementColumnView(
                    key=column.key,
                    label=column.label,
                    sort_direction=self.sort.direction_for(column.key),
                )
                for column in self.columns
            ],
            id_sort_direction=self.sort.direction_for("id"),
            rows=rows,
            sort=self.sort.to_view(),
            editing_id=self.editing_id,
            edit_values=dict(self.edit.buffer) if self.edit else None,
            add_form_open=self.add_form_open,
            new_row=dict(self.new_row),
            importing=self.importing,
            import_error=self.import_error,
            delete_prompt=self.delete.prompt(),
            export_filename=self.export_filename,
        )
