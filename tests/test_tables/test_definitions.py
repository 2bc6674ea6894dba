from datetime import date

from fleet_admin.core.enums import Department, ShipStatus, UserRole
from fleet_admin.domain.entities import Part, Ship, User
from fleet_admin.tables.definitions import (
    PART_ROWS,
    SHIP_ROWS,
    build_part_table,
    build_ship_table,
    build_user_table,
    us_date,
)


def _ship(ship_id, name, year_built=None):
    return Ship(id=ship_id, name=name, type="Cruise Ship", length=345.0, width=45.0, height=72.0,
                status=ShipStatus.ACTIVE, year_built=year_built)


def test_us_date_has_no_padding():
    assert us_date(date(2023, 1, 5)) == "1/5/2023"


def test_user_table_renders_join_date_and_sorts_chronologically():
    users = [
        User(id="1", name="Alice", email="alice@example.com", role=UserRole.ADMIN,
             join_date=date(2023, 10, 1), department=Department.ENGINEERING),
        User(id="2", name="Bob", email="bob@example.com", role=UserRole.MANAGER,
             join_date=date(2023, 9, 30), department=Department.MARKETING),
    ]
    table = build_user_table(users, on_delete=lambda user_id: None)
    table.toggle_sort("join_date")
    view = table.render()
    assert [row.cells["join_date"] for row in view.rows] == ["9/30/2023", "10/1/2023"]


def test_ship_table_year_built_na():
    table = build_ship_table([_ship("1", "Queen Mary 2", 2004), _ship("2", "Nameless")], on_delete=lambda i: None)
    cells = [row.cells["year_built"] for row in table.render().rows]
    assert cells == ["2004", "N/A"]


def test_ship_table_empty_message():
    view = build_ship_table([], on_delete=lambda i: None).render()
    assert view.empty_message == "No ships found. Add some ships to get started!"


def test_part_table_searches_by_ship_name_not_id():
    ships = [_ship("1", "HMS Victory"), _ship("2", "Ever Given")]
    parts = [
        Part(id="p1", name="Main Engine", ship_id="1"),
        Part(id="p2", name="Container Crane", ship_id="2"),
        Part(id="p3", name="Anchor", ship_id="99"),
    ]
    table = build_part_table(parts, ships, on_delete=lambda i: None)

    table.set_search("victory")
    assert [p.id for p in table.filtered_rows()] == ["p1"]

    table.set_search("99")
    assert table.filtered_rows() == []

    table.set_search("")
    cells = {row.id: row.cells["ship_id"] for row in table.render().rows}
    assert cells["p3"] == "Unknown Ship"
    assert table.search_placeholder == "Search parts by name, description, or ship..."


def test_measurement_kinds():
    assert len(PART_ROWS.columns) == 7
    assert len(SHIP_ROWS.columns) == 11
    assert PART_ROWS.column_mapping["value3"] == ["Value 3", "value3", "V3"]
    assert SHIP_ROWS.columns[10].header == "Value 11"
    assert SHIP_ROWS.export_filename == "rowship-data.xlsx"
    assert SHIP_ROWS.sheet_name == "RowShip Data"
