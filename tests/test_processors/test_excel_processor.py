"""Tests for the spreadsheet bridge."""

from datetime import datetime, timezone
from io import BytesIO

import openpyxl
import pytest

from fleet_admin.core.exceptions import SpreadsheetImportError
from fleet_admin.domain.entities import PartRow, PartRowValues
from fleet_admin.processors.excel_processor import ColumnConfig, ExcelProcessor
from fleet_admin.schemas.user_schemas import USER_COLUMN_MAPPING, UserImportRow
from fleet_admin.tables.definitions import PART_ROWS

PART_HEADERS = [f"Value {n}" for n in range(1, 8)]


@pytest.fixture
def processor():
    return ExcelProcessor()


def test_validate_file_format(processor):
    assert processor.validate_file_format("rows.xlsx", b"data")[0] is True
    assert processor.validate_file_format("rows.csv", b"data")[0] is False
    assert processor.validate_file_format("rows.xlsx", b"")[0] is False

    small = ExcelProcessor(max_file_size=3)
    is_valid, message = small.validate_file_format("rows.xlsx", b"data")
    assert is_valid is False
    assert "too large" in message


def test_read_rows_skips_blank_rows_and_keeps_row_numbers(processor, make_workbook):
    content = make_workbook(["Name", None, "Email"], [
        ["Alice", "ignored", "alice@example.com"],
        [None, None, None],
        ["", "", ""],
        ["Bob", None, None],
    ])
    rows = processor.read_rows(content)

    assert [row.row_number for row in rows] == [2, 5]
    assert rows[0].cells == {"Name": "Alice", "Email": "alice@example.com"}
    assert rows[1].cells == {"Name": "Bob"}


def test_read_rows_rejects_garbage(processor):
    with pytest.raises(SpreadsheetImportError) as exc_info:
        processor.read_rows(b"definitely not a workbook")
    assert exc_info.value.message.startswith("Failed to read Excel file")


def test_parse_maps_first_matching_alias(processor, make_workbook):
    headers = ["V1", "Value 1", "value2", "V3", "Value 4", "Value 5", "Value 6", "Value 7"]
    content = make_workbook(headers, [[9, "12.5", "2", "3", "4", "5", "6", "7"]])
    result = processor.parse(content, PartRowValues, PART_ROWS.column_mapping)

    assert result.imported_count == 1
    assert result.rows[0].value1 == 12.5
    assert result.rows[0].value2 == 2.0


def test_parse_coerces_lenient_numbers(processor, make_workbook):
    content = make_workbook(PART_HEADERS, [["12.5kg", "abc", "n/a", " 3", "1e2", "-4", ".5"]])
    values = processor.parse(content, PartRowValues, PART_ROWS.column_mapping).rows[0]

    assert values.value1 == 12.5
    assert values.value2 == 0.0
    assert values.value3 == 0.0
    assert values.value4 == 3.0
    assert values.value5 == 100.0
    assert values.value6 == -4.0
    assert values.value7 == 0.5


def test_parse_empty_sheet(processor, make_workbook):
    with pytest.raises(SpreadsheetImportError) as exc_info:
        processor.parse(make_workbook(PART_HEADERS), PartRowValues, PART_ROWS.column_mapping)
    assert exc_info.value.message == "The Excel file appears to be empty"


def test_parse_all_invalid_aggregates_first_three_errors(processor, make_workbook):
    content = make_workbook(["Value 1"], [[n] for n in range(1, 6)])
    with pytest.raises(SpreadsheetImportError) as exc_info:
        processor.parse(content, PartRowValues, PART_ROWS.column_mapping)

    message = exc_info.value.message
    assert message.startswith("Validation failed:\nRow 2: ")
    assert "Row 4: " in message
    assert "Row 5: " not in message
    assert message.endswith("\n...and 2 more errors")
    assert len(exc_info.value.errors) == 5
    assert exc_info.value.details["errors"] == exc_info.value.errors


def test_parse_without_mapping_validates_raw_text(processor, make_workbook):
    content = make_workbook(["name", "email"], [["Alice", "alice@example.com"]])
    result = processor.parse(content, UserImportRow, value_parser=str)
    assert result.rows[0].name == "Alice"


def test_parse_users_with_aliases_and_normalization(processor, make_workbook):
    content = make_workbook(
        ["Full Name", "Email Address", "Role", "Department", "Status", "Start Date"],
        [
            ["Alice Johnson", "alice@example.com", "ADMIN", "Engineering", "inactive", "2023-01-15"],
            ["Bob Smith", "bob@example.com", "pirate", "", "", ""],
            ["No Email", "not-an-email", "admin", "sales", "active", "2023-01-01"],
        ],
    )
    result = processor.parse(content, UserImportRow, USER_COLUMN_MAPPING, value_parser=str)

    assert result.imported_count == 2
    assert result.skipped_count == 1
    alice, bob = result.rows
    assert alice.role.value == "admin"
    assert alice.department.value == "engineering"
    assert alice.status.value == "inactive"
    assert alice.join_date.isoformat() == "2023-01-15"
    assert bob.role.value == "employee"
    assert bob.department.value == "general"
    assert bob.status.value == "active"
    assert result.errors[0].row_number == 4


def test_export_layout(processor, workbook_reader):
    created = datetime(2024, 1, 15, tzinfo=timezone.utc)
    rows = [PartRow(id="row-1", created_at=created, value1=1.23456, value2=2, value3=3,
                    value4=4, value5=5, value6=6, value7=7)]
    content = processor.export(rows, PART_ROWS.columns, sheet_name=PART_ROWS.sheet_name)

    workbook = openpyxl.load_workbook(BytesIO(content))
    assert workbook.sheetnames == ["RowPart Data"]

    sheet = workbook_reader(content)
    assert sheet[0] == ["ID", *PART_HEADERS, "Created At"]
    assert sheet[1][0] == "row-1"
    assert sheet[1][1] == 1.23456
    assert sheet[1][-1] == created.isoformat()


def test_export_additional_columns_replace_created_at(processor, workbook_reader):
    rows = [PartRow(id="row-1", part_id="p1", value1=1, value2=2, value3=3,
                    value4=4, value5=5, value6=6, value7=7)]
    content = processor.export(
        rows,
        [ColumnConfig(key="value1", label="V1")],
        additional_columns=[ColumnConfig(key="part_id", label="Part")],
    )
    assert workbook_reader(content)[0] == ["ID", "V1", "Part"]
    assert workbook_reader(content)[1] == ["row-1", 1, "p1"]


def test_export_then_import_round_trips_values(processor):
    rows = [
        PartRow(id=f"row-{n}", value1=n * 1.1, value2=-n, value3=0.333333, value4=1e-3,
                value5=12345.678, value6=n, value7=7.25)
        for n in range(1, 4)
    ]
    content = processor.export(rows, PART_ROWS.columns, sheet_name=PART_ROWS.sheet_name)
    result = processor.parse(content, PartRowValues, PART_ROWS.column_mapping)

    assert result.imported_count == 3
    for original, imported in zip(rows, result.rows):
        expected = PartRowValues.model_validate(original.model_dump()).model_dump()
        assert imported.model_dump() == pytest.approx(expected)
