from .columns import ColumnDescriptor, MobileField, SortState
from .definitions import (
    PART_ROWS,
    SHIP_ROWS,
    MeasurementKind,
    build_measurement_table,
    build_part_table,
    build_ship_table,
    build_user_table,
)
from .entity_table import EntityTable
from .measurement_table import EditSession, MeasurementTable
