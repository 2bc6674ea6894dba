"""Tests for the measurement table state machine, import and export."""

from datetime import datetime, timezone

import pytest

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.exceptions import NotFoundError, SpreadsheetImportError, ValidationException
from fleet_admin.domain.entities import PartRow, PartRowValues
from fleet_admin.tables.definitions import PART_ROWS, build_measurement_table


def _row(row_id, first, day=1):
    return PartRow(
        id=row_id,
        created_at=datetime(2024, 1, day, tzinfo=timezone.utc),
        part_id="p1",
        value1=first, value2=2.0, value3=3.0, value4=4.0, value5=5.0, value6=6.0, value7=7.0,
    )


class Recorder:
    def __init__(self):
        self.added = []
        self.updated = []
        self.deleted = []
        self.imported = []

    def on_add(self, values):
        self.added.append(values)
        return values

    def on_update(self, row_id, values):
        self.updated.append((row_id, values))
        return values

    def on_delete(self, row_id):
        self.deleted.append(row_id)

    def on_import(self, rows):
        self.imported.append(rows)


@pytest.fixture
def rows():
    return [_row("row-b", 12.5, day=2), _row("row-a", 3.25, day=3), _row("row-c", 100.0, day=1)]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def table(rows, recorder):
    return build_measurement_table(
        PART_ROWS,
        rows,
        on_add=recorder.on_add,
        on_update=recorder.on_update,
        on_delete=recorder.on_delete,
        on_import=recorder.on_import,
    )


def test_sort_by_value_column_and_back_to_none(table, rows):
    table.toggle_sort("value1")
    assert [r.id for r in table.visible_rows()] == ["row-a", "row-b", "row-c"]
    table.toggle_sort("value1")
    assert [r.id for r in table.visible_rows()] == ["row-c", "row-b", "row-a"]
    table.toggle_sort("value1")
    assert table.visible_rows() == rows


def test_sort_by_id_and_created_at(table):
    table.toggle_sort("id")
    assert [r.id for r in table.visible_rows()] == ["row-a", "row-b", "row-c"]
    table.toggle_sort("created_at")
    assert [r.id for r in table.visible_rows()] == ["row-c", "row-b", "row-a"]


def test_sort_rejects_unknown_key(table):
    with pytest.raises(ValidationException):
        table.toggle_sort("value8")


def test_edit_then_cancel_leaves_row_unchanged(table, recorder, rows):
    table.start_edit("row-b")
    table.set_edit_value("value1", "99")
    table.cancel_edit()
    assert recorder.updated == []
    assert table.editing_id is None
    assert rows[0].value1 == 12.5


def test_edit_then_save_calls_update_once_with_buffer(table, recorder):
    table.start_edit("row-b")
    table.set_edit_value("value1", "42.5")
    table.set_edit_value("value2", "abc")
    table.save_edit()

    assert len(recorder.updated) == 1
    row_id, values = recorder.updated[0]
    assert row_id == "row-b"
    assert isinstance(values, PartRowValues)
    assert values.model_dump() == {
        "value1": 42.5, "value2": 0.0, "value3": 3.0, "value4": 4.0,
        "value5": 5.0, "value6": 6.0, "value7": 7.0,
    }
    assert table.editing_id is None


def test_starting_another_edit_abandons_previous_buffer(table, recorder):
    assert table.start_edit("row-b") is None
    table.set_edit_value("value1", "1")
    abandoned = table.start_edit("row-a")

    assert abandoned.row_id == "row-b"
    assert abandoned.buffer["value1"] == 1.0
    assert table.editing_id == "row-a"
    assert table.edit.buffer["value1"] == 3.25
    assert recorder.updated == []


def test_edit_unknown_row_raises(table):
    with pytest.raises(NotFoundError):
        table.start_edit("missing")


def test_save_rejects_infinite_values(table, recorder):
    table.start_edit("row-b")
    table.set_edit_value("value1", "Infinity")
    with pytest.raises(ValidationException):
        table.save_edit()
    assert recorder.updated == []
    assert table.editing_id == "row-b"


def test_add_form_submits_and_resets(table, recorder):
    table.open_add_form()
    table.set_new_value("value1", "7.5")
    table.set_new_value("value3", "not a number")
    table.submit_add()

    assert len(recorder.added) == 1
    assert recorder.added[0].value1 == 7.5
    assert recorder.added[0].value3 == 0.0
    assert table.add_form_open is False
    assert set(table.new_row.values()) == {0.0}


def test_add_row_convenience(table, recorder):
    table.add_row({"value2": "3.5kg"})
    assert recorder.added[0].value2 == 3.5


def test_delete_requires_confirmation(table, recorder):
    table.request_delete("row-a")
    assert recorder.deleted == []
    table.confirm_delete()
    assert recorder.deleted == ["row-a"]


def test_import_partial_success_calls_on_import_once(table, recorder, make_workbook):
    headers = ["Value 1", "Value 2", "Value 3", "Value 4", "Value 5", "Value 6", "Value 7"]
    content = make_workbook(headers, [
        ["12.5", 1, 2, 3, 4, 5, 6],
        ["Infinity", 1, 2, 3, 4, 5, 6],
    ])
    result = table.import_file(content)

    assert len(recorder.imported) == 1
    assert [r.value1 for r in recorder.imported[0]] == [12.5]
    assert result.skipped_count == 1
    assert result.errors[0].row_number == 3
    assert table.import_error is None


def test_import_all_invalid_never_calls_on_import(table, recorder, make_workbook):
    content = make_workbook(["Value 1", "Value 2"], [["1", "2"], ["3", "4"]])
    with pytest.raises(SpreadsheetImportError) as exc_info:
        table.import_file(content)

    assert recorder.imported == []
    assert table.import_error == exc_info.value.message
    assert table.import_error.startswith("Validation failed:\n")
    assert table.render().import_error == table.import_error


def test_import_rejects_wrong_extension(table, recorder):
    with pytest.raises(SpreadsheetImportError):
        table.import_file(b"a,b\n1,2", filename="rows.csv")
    assert recorder.imported == []
    assert "Invalid file extension" in table.import_error


def test_export_uses_current_sort(table, workbook_reader):
    table.set_sort("value1", SortDirection.DESC)
    exported = table.export()

    assert exported.filename == "rowpart-data.xlsx"
    sheet = workbook_reader(exported.content)
    assert sheet[0] == ["ID", "Value 1", "Value 2", "Value 3", "Value 4", "Value 5", "Value 6", "Value 7", "Created At"]
    assert [line[0] for line in sheet[1:]] == ["row-c", "row-b", "row-a"]
    assert sheet[1][1] == 100.0


def test_render_formats_values_and_flags_editing_row(table):
    table.start_edit("row-a")
    view = table.render()

    assert view.title == "Part Measurements"
    assert view.row_count == 3
    assert [c.label for c in view.columns] == ["V1", "V2", "V3", "V4", "V5", "V6", "V7"]
    row_a = next(r for r in view.rows if r.id == "row-a")
    assert row_a.display["value1"] == "3.25"
    assert row_a.display["value2"] == "2.00"
    assert row_a.editing is True
    assert view.editing_id == "row-a"
    assert view.edit_values["value1"] == 3.25
    assert view.export_filename == "rowpart-data.xlsx"


def test_parse_file_leaves_table_untouched(table, recorder, make_workbook):
    content = make_workbook(["Value 1"], [["1.5"], ["2.5"]])
    result = table.parse_file(content, filename="rows.xlsx")

    assert [r.value1 for r in result.rows] == [1.5, 2.5]
    assert recorder.imported == []
    assert table.importing is False

    table.begin_import()
    assert table.render().importing is True
    table.apply_import(result)
    assert recorder.imported == [result.rows]
    assert table.render().importing is False


def test_failed_import_clears_importing_flag(table):
    with pytest.raises(SpreadsheetImportError):
        table.import_file(b"not a workbook", filename="rows.xlsx")
    view = table.render()
    assert view.importing is False
    assert view.import_error == table.import_error


def test_mapping_rows_can_be_edited_and_rendered(recorder):
    data = [
        {"id": "row-x", "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc), "value1": 4.5, "value2": "2"},
    ]
    table = build_measurement_table(
        PART_ROWS,
        data,
        on_add=recorder.on_add,
        on_update=recorder.on_update,
        on_delete=recorder.on_delete,
        on_import=recorder.on_import,
    )
    table.start_edit("row-x")
    assert table.edit.buffer["value1"] == 4.5
    assert table.edit.buffer["value2"] == 2.0
    assert table.edit.buffer["value7"] == 0.0

    row = table.render().rows[0]
    assert row.id == "row-x"
    assert row.editing is True
    assert row.display["value1"] == "4.50"
