from .base import BaseRecord, new_record_id, utcnow
from .measurement_entity import (
    MeasurementRow,
    PartRow,
    PartRowValues,
    ShipRow,
    ShipRowValues,
    value_fields,
)
from .part_entity import Part
from .ship_entity import Ship
from .user_entity import User

__all__ = [
    "BaseRecord",
    "MeasurementRow",
    "Part",
    "PartRow",
    "PartRowValues",
    "Ship",
    "ShipRow",
    "ShipRowValues",
    "User",
    "new_record_id",
    "utcnow",
    "value_fields",
]
