from .base import BaseResponse, ImportRowErrorSchema, ImportSummaryResponse
from fleet_admin.domain.entities.measurement_entity import PartRowValues, ShipRowValues
from .part_schemas import PartCreate, PartUpdate
from .ship_schemas import ShipCreate, ShipUpdate
from .table_schemas import MeasurementTableView, TableView
from .user_schemas import USER_COLUMN_MAPPING, UserCreate, UserImportRow, UserUpdate
