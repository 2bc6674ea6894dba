from .base import BaseService
from .container import ServiceContainer, build_services
from .measurement_service import MeasurementService
from .part_service import PartService
from .ship_service import ShipService
from .user_service import UserService
