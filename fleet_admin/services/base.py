"""
Base service class providing common functionality for all services.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from fleet_admin.core.exceptions import AppException, ServiceError
from fleet_admin.core.logging import get_logger
from fleet_admin.infrastructure.persistence import PersistGateway


class BaseService(ABC):
    """Base class for all services."""

    def __init__(self, gateway: Optional[PersistGateway] = None):
        self.gateway = gateway
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log service operation."""
        log_msg = f"Service operation: {operation}"
        if details:
            log_msg += f" - Details: {details}"
        self.logger.info(log_msg)

    def handle_error(self, error: Exception, operation: str) -> None:
        """Re-raise application errors as they are and wrap anything else."""
        if isinstance(error, AppException):
            raise error
        error_msg = f"Error in {operation}: {str(error)}"
        self.logger.error(error_msg)
        raise ServiceError(error_msg) from error

    async def persist(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> None:
        """
        Push a change to the backend before it is applied locally.

        A ``PersistenceError`` propagates unchanged so the caller can resubmit;
        any other gateway failure surfaces as a ``ServiceError``.
        """
        if self.gateway is None:
            return
        self.log_operation(operation)
        try:
            await self.gateway.persist(operation, payload)
        except Exception as e:
            self.handle_error(e, operation)

    @abstractmethod
    def get_service_name(self) -> str:
        """Return the service name."""
        pass
