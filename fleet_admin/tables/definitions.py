"""
Concrete table configurations for users, ships, parts and measurement rows.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type

from pydantic import BaseModel

from fleet_admin.domain.entities import (
    MeasurementRow,
    Part,
    PartRow,
    PartRowValues,
    Ship,
    ShipRow,
    ShipRowValues,
    User,
    value_fields,
)
from fleet_admin.processors.excel_processor import ColumnConfig, ExcelProcessor

from .columns import ColumnDescriptor, MobileField
from .entity_table import EntityTable
from .measurement_table import MeasurementTable

UNKNOWN_SHIP = "Unknown Ship"


def us_date(value: date) -> str:
    """m/d/yyyy without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def build_user_table(
    users: Sequence[User],
    on_delete: Callable[[str], Any],
    loading: bool = False,
) -> EntityTable[User]:
    columns = [
        ColumnDescriptor("id", "ID", sortable=True),
        ColumnDescriptor("name", "Name", sortable=True),
        ColumnDescriptor("email", "Email", sortable=True),
        ColumnDescriptor("role", "Role", sortable=True),
        ColumnDescriptor("department", "Department", sortable=True),
        ColumnDescriptor("status", "Status", sortable=True),
        ColumnDescriptor(
            "join_date",
            "Join Date",
            render=lambda user: us_date(user.join_date),
            sort_value=lambda user: user.join_date.isoformat(),
            sortable=True,
        ),
    ]
    mobile_fields = [
        MobileField("Email", lambda user: user.email),
        MobileField("Role", lambda user: user.role),
        MobileField("Department", lambda user: user.department),
        MobileField("Status", lambda user: user.status),
        MobileField("Join Date", lambda user: us_date(user.join_date)),
    ]
    return EntityTable(
        data=users,
        columns=columns,
        mobile_fields=mobile_fields,
        get_entity_name=lambda user: user.name,
        on_delete=on_delete,
        empty_message="No users found. Add some users to get started!",
        entity_type_name="User",
        edit_base_path="/users",
        loading=loading,
        search_placeholder="Search users by name, email, role, or department...",
    )


def _year_built(ship: Ship) -> str:
    return str(ship.year_built) if ship.year_built is not None else "N/A"


def build_ship_table(
    ships: Sequence[Ship],
    on_delete: Callable[[str], Any],
    loading: bool = False,
) -> EntityTable[Ship]:
    columns = [
        ColumnDescriptor("id", "ID", sortable=True),
        ColumnDescriptor("name", "Name", sortable=True),
        ColumnDescriptor("type", "Type", sortable=True),
        ColumnDescriptor("length", "Length", sortable=True),
        ColumnDescriptor("width", "Width", sortable=True),
        ColumnDescriptor("height", "Height", sortable=True),
        ColumnDescriptor("status", "Status", sortable=True),
        ColumnDescriptor("year_built", "Year Built", render=_year_built, sortable=True),
    ]
    mobile_fields = [
        MobileField("Type", lambda ship: ship.type),
        MobileField("Status", lambda ship: ship.status),
        MobileField("Year Built", _year_built),
    ]
    return EntityTable(
        data=ships,
        columns=columns,
        mobile_fields=mobile_fields,
        get_entity_name=lambda ship: ship.name,
        on_delete=on_delete,
        empty_message="No ships found. Add some ships to get started!",
        entity_type_name="Ship",
        edit_base_path="/ships",
        loading=loading,
        search_placeholder="Search ships by name, type, or status...",
    )


def build_part_table(
    parts: Sequence[Part],
    ships: Iterable[Ship],
    on_delete: Callable[[str], Any],
    loading: bool = False,
) -> EntityTable[Part]:
    ship_names: Dict[str, str] = {ship.id: ship.name for ship in ships}

    def ship_name(part: Part) -> str:
        return ship_names.get(part.ship_id, UNKNOWN_SHIP)

    columns = [
        ColumnDescriptor("id", "ID", sortable=True),
        ColumnDescriptor("name", "Name", sortable=True),
        ColumnDescriptor("description", "Description", sortable=True),
        # searchable by ship name, never by the raw id
        ColumnDescriptor("ship_id", "Ship", render=ship_name, search_text=ship_name, sortable=True),
    ]
    mobile_fields = [
        MobileField("Description", lambda part: part.description),
        MobileField("Ship", ship_name),
    ]
    return EntityTable(
        data=parts,
        columns=columns,
        mobile_fields=mobile_fields,
        get_entity_name=lambda part: part.name,
        on_delete=on_delete,
        empty_message="No parts found. Add some parts to get started!",
        entity_type_name="Part",
        edit_base_path="/parts",
        loading=loading,
        search_placeholder="Search parts by name, description, or ship...",
    )


@dataclass(frozen=True)
class MeasurementKind:
    """Static description of one measurement row family."""
    name: str
    parent_field: str
    row_model: Type[MeasurementRow]
    values_model: Type[BaseModel]
    columns: List[ColumnConfig]
    column_mapping: Dict[str, List[str]]
    export_filename: str
    sheet_name: str
    title: str
    description: str

    @property
    def value_keys(self) -> List[str]:
        return value_fields(self.values_model)


def _value_columns(values_model: Type[BaseModel]) -> List[ColumnConfig]:
    columns = []
    for n, key in enumerate(value_fields(values_model), start=1):
        columns.append(ColumnConfig(key=key, label=f"V{n}", excel_header=f"Value {n}"))
    return columns


def _value_mapping(values_model: Type[BaseModel]) -> Dict[str, List[str]]:
    return {
        key: [f"Value {n}", f"value{n}", f"V{n}"]
        for n, key in enumerate(value_fields(values_model), start=1)
    }


PART_ROWS = MeasurementKind(
    name="part",
    parent_field="part_id",
    row_model=PartRow,
    values_model=PartRowValues,
    columns=_value_columns(PartRowValues),
    column_mapping=_value_mapping(PartRowValues),
    export_filename="rowpart-data.xlsx",
    sheet_name="RowPart Data",
    title="Part Measurements",
    description="Manage part measurement data",
)

SHIP_ROWS = MeasurementKind(
    name="ship",
    parent_field="ship_id",
    row_model=ShipRow,
    values_model=ShipRowValues,
    columns=_value_columns(ShipRowValues),
    column_mapping=_value_mapping(ShipRowValues),
    export_filename="rowship-data.xlsx",
    sheet_name="RowShip Data",
    title="Ship Measurements",
    description="Manage ship measurement data",
)


def build_measurement_table(
    kind: MeasurementKind,
    rows: Sequence[MeasurementRow],
    on_add: Callable[[BaseModel], Any],
    on_update: Callable[[str, BaseModel], Any],
    on_delete: Callable[[str], Any],
    on_import: Callable[[List[BaseModel]], Any],
    processor: Optional[ExcelProcessor] = None,
) -> MeasurementTable:
    return MeasurementTable(
        data=rows,
        columns=kind.columns,
        title=kind.title,
        description=kind.description,
        on_add=on_add,
        on_update=on_update,
        on_delete=on_delete,
        on_import=on_import,
        export_filename=kind.export_filename,
        sheet_name=kind.sheet_name,
        schema=kind.values_model,
        column_mapping=kind.column_mapping,
        processor=processor,
    )
