from fastapi import Request

from fleet_admin.core.config import Settings
from fleet_admin.processors.excel_processor import ExcelProcessor
from fleet_admin.services import (
    MeasurementService,
    PartService,
    ServiceContainer,
    ShipService,
    UserService,
)


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return get_services(request).users


def get_ship_service(request: Request) -> ShipService:
    return get_services(request).ships


def get_part_service(request: Request) -> PartService:
    return get_services(request).parts


def get_part_row_service(request: Request) -> MeasurementService:
    return get_services(request).part_rows


def get_ship_row_service(request: Request) -> MeasurementService:
    return get_services(request).ship_rows


def get_excel_processor(request: Request) -> ExcelProcessor:
    return get_services(request).processor
