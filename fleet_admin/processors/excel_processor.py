# ==============================================
# fleet_admin/processors/excel_processor.py
# ==============================================
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

import openpyxl
import pandas as pd
from openpyxl.utils import get_column_letter
from pydantic import BaseModel, ValidationError

from fleet_admin.core.exceptions import SpreadsheetImportError
from fleet_admin.core.logging import get_logger
from fleet_admin.utils.conversion import cell_text, parse_float

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ColumnMapping = Mapping[str, Sequence[str]]
SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass(frozen=True)
class ColumnConfig:
    """A spreadsheet column bound to a record field."""
    key: str
    label: str
    excel_header: Optional[str] = None  # header used on export, falls back to label
    width: int = 10

    @property
    def header(self) -> str:
        return self.excel_header or self.label


@dataclass(frozen=True)
class RawRow:
    """A data row as read from the worksheet: header -> cell text."""
    row_number: int
    cells: Dict[str, str]


@dataclass(frozen=True)
class ImportRowError:
    row_number: int
    message: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.message}"


@dataclass
class ImportResult(Generic[SchemaT]):
    """Outcome of a spreadsheet import that produced at least one valid row."""
    rows: List[SchemaT]
    errors: List[ImportRowError] = field(default_factory=list)
    total_rows: int = 0

    @property
    def imported_count(self) -> int:
        return len(self.rows)

    @property
    def skipped_count(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: bytes
    media_type: str = XLSX_MEDIA_TYPE


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(item) for item in detail.get("loc", ())) or "row"
        parts.append(f"{location}: {detail.get('msg')}")
    return "; ".join(parts)


class ExcelProcessor:
    """
    Spreadsheet bridge between untyped worksheets and typed rows.

    Import reads the first worksheet, treats row 1 as headers, maps headers
    onto schema fields through alias lists and validates every candidate row.
    Export writes typed rows back out as a single-sheet workbook.
    """

    VALID_EXTENSIONS = [".xlsx", ".xlsm"]

    def __init__(self, max_reported_errors: int = 3, max_file_size: int = 10 * 1024 * 1024):
        """
        Initialize Excel processor

        Args:
            max_reported_errors: Row errors quoted in an aggregated failure message
            max_file_size: Upper bound for accepted uploads, in bytes
        """
        self.max_reported_errors = max_reported_errors
        self.max_file_size = max_file_size
        self.logger = logger

    def validate_file_format(self, filename: Optional[str], content: bytes) -> Tuple[bool, str]:
        """
        Validate an uploaded file before parsing it

        Args:
            filename: Original file name
            content: Raw file bytes

        Returns:
            Tuple of (is_valid, error_message)
        """
        suffix = Path(filename or "").suffix.lower()
        if suffix not in self.VALID_EXTENSIONS:
            return False, f"Invalid file extension: {suffix or 'none'}. Expected: {self.VALID_EXTENSIONS}"

        if not content:
            return False, "File is empty"

        if len(content) > self.max_file_size:
            return False, f"File too large (>{self.max_file_size // (1024 * 1024)}MB)"

        return True, "Valid Excel file"

    def read_rows(self, content: bytes) -> List[RawRow]:
        """
        Read the data rows of the first worksheet.

        Only populated cells under a non-empty header are kept, and rows whose
        values are all empty are skipped.

        Raises:
            SpreadsheetImportError: If the workbook cannot be read or has no worksheet
        """
        try:
            workbook = openpyxl.load_workbook(BytesIO(content), read_only=True, data_only=True)
        except Exception as e:
            self.logger.error(f"Error opening workbook: {str(e)}")
            raise SpreadsheetImportError(f"Failed to read Excel file: {str(e)}") from e

        try:
            if not workbook.worksheets:
                raise SpreadsheetImportError("No worksheet found in the Excel file")

            worksheet = workbook.worksheets[0]
            headers: List[str] = []
            rows: List[RawRow] = []

            for row_number, values in enumerate(worksheet.iter_rows(values_only=True), start=1):
                if row_number == 1:
                    headers = [cell_text(value) for value in values]
                    continue

                cells: Dict[str, str] = {}
                for position, value in enumerate(values):
                    if value is None or position >= len(headers):
                        continue
                    header = headers[position]
                    if header:
                        cells[header] = cell_text(value)

                if any(text != "" for text in cells.values()):
                    rows.append(RawRow(row_number=row_number, cells=cells))

            return rows
        except SpreadsheetImportError:
            raise
        except Exception as e:
            self.logger.error(f"Error reading worksheet: {str(e)}")
            raise SpreadsheetImportError(f"Failed to read Excel file: {str(e)}") from e
        finally:
            workbook.close()

    def map_row(
        self,
        raw: Mapping[str, str],
        column_mapping: Optional[ColumnMapping],
        value_parser: Callable[[str], Any] = parse_float,
    ) -> Dict[str, Any]:
        """Build a candidate record; the first alias present in the row wins."""
        if column_mapping is None:
            return dict(raw)

        candidate: Dict[str, Any] = {}
        for schema_key, aliases in column_mapping.items():
            for alias in aliases:
                if alias in raw:
                    candidate[schema_key] = value_parser(raw[alias])
                    break
        return candidate

    def parse(
        self,
        content: bytes,
        schema: Type[SchemaT],
        column_mapping: Optional[ColumnMapping] = None,
        value_parser: Callable[[str], Any] = parse_float,
    ) -> ImportResult[SchemaT]:
        """
        Parse a workbook and validate its rows against ``schema``

        Args:
            content: Raw xlsx bytes
            schema: Pydantic model describing one imported row
            column_mapping: Schema field -> acceptable header aliases
            value_parser: Conversion applied to mapped cell text

        Returns:
            ImportResult with the valid rows and the skipped ones

        Raises:
            SpreadsheetImportError: Empty sheet, unreadable file, or no valid row
        """
        raw_rows = self.read_rows(content)
        if not raw_rows:
            raise SpreadsheetImportError("The Excel file appears to be empty")

        valid_rows: List[SchemaT] = []
        errors: List[ImportRowError] = []

        for raw in raw_rows:
            candidate = self.map_row(raw.cells, column_mapping, value_parser)
            try:
                valid_rows.append(schema.model_validate(candidate))
            except ValidationError as e:
                errors.append(ImportRowError(raw.row_number, _format_validation_error(e)))

        if errors and not valid_rows:
            messages = [str(error) for error in errors]
            shown = "\n".join(messages[:self.max_reported_errors])
            remaining = len(messages) - self.max_reported_errors
            suffix = f"\n...and {remaining} more errors" if remaining > 0 else ""
            self.logger.warning(f"Import rejected: all {len(errors)} rows failed validation")
            raise SpreadsheetImportError(
                f"Validation failed:\n{shown}{suffix}",
                errors=messages,
                details={"total_rows": len(raw_rows)},
            )

        if errors:
            self.logger.warning(
                f"Import skipped {len(errors)} of {len(raw_rows)} rows that failed validation"
            )
        self.logger.info(f"Parsed {len(valid_rows)} rows for {schema.__name__}")

        return ImportResult(rows=valid_rows, errors=errors, total_rows=len(raw_rows))

    def export(
        self,
        rows: Sequence[Any],
        columns: Sequence[ColumnConfig],
        sheet_name: str = "Data",
        additional_columns: Optional[Sequence[ColumnConfig]] = None,
    ) -> bytes:
        """
        Serialize rows into an xlsx workbook

        Column order is the identifier, each configured column, then either
        the creation timestamp or ``additional_columns`` when given.

        Args:
            rows: Records with ``id`` and ``created_at`` attributes
            columns: Field columns in declaration order
            sheet_name: Name of the single worksheet
            additional_columns: Replacement for the trailing timestamp column

        Returns:
            Workbook bytes
        """
        id_column = ColumnConfig(key="id", label="ID", width=15)
        trailing = list(additional_columns) if additional_columns else [
            ColumnConfig(key="created_at", label="Created At", width=20)
        ]
        all_columns = [id_column, *columns, *trailing]
        headers = [column.header for column in all_columns]

        records = []
        for row in rows:
            record = {}
            for column in all_columns:
                value = getattr(row, column.key, None)
                if column.key == "created_at" and value is not None and not additional_columns:
                    value = value.isoformat()
                record[column.header] = value
            records.append(record)

        df = pd.DataFrame(records, columns=headers)

        buffer = BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            worksheet = writer.sheets[sheet_name]
            for position, column in enumerate(all_columns, start=1):
                letter = get_column_letter(position)
                worksheet.column_dimensions[letter].width = column.width

        self.logger.info(f"Exported {len(records)} rows to sheet '{sheet_name}'")
        return buffer.getvalue()
