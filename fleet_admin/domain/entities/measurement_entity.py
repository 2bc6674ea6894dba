"""
Measurement rows: fixed-shape numeric records owned by a parent entity.

A row family is described by two models. The ``*RowValues`` model holds only
the numeric fields and doubles as the validation schema for add, edit and
spreadsheet import. The ``*Row`` model adds identity, a creation timestamp and
the parent reference.
"""

from datetime import datetime
from typing import Annotated, List, Optional, Type

from pydantic import BaseModel, Field

from .base import BaseRecord, utcnow

Measurement = Annotated[float, Field(allow_inf_nan=False)]


class PartRowValues(BaseModel):
    value1: Measurement
    value2: Measurement
    value3: Measurement
    value4: Measurement
    value5: Measurement
    value6: Measurement
    value7: Measurement


class ShipRowValues(BaseModel):
    value1: Measurement
    value2: Measurement
    value3: Measurement
    value4: Measurement
    value5: Measurement
    value6: Measurement
    value7: Measurement
    value8: Measurement
    value9: Measurement
    value10: Measurement
    value11: Measurement


class MeasurementRow(BaseRecord):
    created_at: datetime = Field(default_factory=utcnow)


class PartRow(MeasurementRow, PartRowValues):
    part_id: Optional[str] = None


class ShipRow(MeasurementRow, ShipRowValues):
    ship_id: Optional[str] = None


def value_fields(values_model: Type[BaseModel]) -> List[str]:
    """Numeric field names of a values model, in declaration order."""
    return list(values_model.model_fields)
