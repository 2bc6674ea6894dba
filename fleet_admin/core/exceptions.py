from typing import Any, Dict, List, Optional, Union

from starlette.status import HTTP_400_BAD_REQUEST


class AppException(Exception):
    def __init__(self, message: str,
                 error_code: Optional[str] = None,
                 status_code: int = HTTP_400_BAD_REQUEST,
                 details: Optional[Dict[str, Any]] = None,):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', status_code={self.status_code})"


class ValidationException(AppException):
    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        self.value = value

        exception_details = details or {}
        if field:
            exception_details["field"] = field
        if value is not None:
            exception_details["value"] = value

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=exception_details,
            status_code=422,
        )


class SpreadsheetImportError(AppException):
    """Raised when a spreadsheet cannot be read or none of its rows validate."""

    def __init__(
        self,
        message: str = "Failed to import file",
        errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors or []

        exception_details = details or {}
        if self.errors:
            exception_details["errors"] = self.errors

        super().__init__(
            message=message,
            error_code="IMPORT_FAILED",
            details=exception_details,
            status_code=422,
        )


class NotFoundError(AppException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Union[str, int]] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource
        self.resource_id = resource_id

        if not message:
            if resource_id:
                message = f"{resource} with ID '{resource_id}' not found"
            else:
                message = f"{resource} not found"

        exception_details = details or {}
        exception_details.update({
            "resource": resource,
            "resource_id": resource_id,
        })

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            details=exception_details,
            status_code=404,
        )


class ConflictError(AppException):
    """Exception raised when there's a conflict with current state."""

    def __init__(
        self,
        message: str = "Conflict with current state",
        resource: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource

        exception_details = details or {}
        if resource:
            exception_details["resource"] = resource

        super().__init__(
            message=message,
            error_code="CONFLICT",
            details=exception_details,
            status_code=409,
        )


class BadRequestError(AppException):
    """Exception raised for bad requests."""

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            details=details,
            status_code=400,
        )


class PersistenceError(AppException):
    """Exception raised when the backend rejects a save."""

    def __init__(
        self,
        message: str = "Failed to save changes. Please try again.",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation = operation

        exception_details = details or {}
        if operation:
            exception_details["operation"] = operation

        super().__init__(
            message=message,
            error_code="PERSISTENCE_FAILED",
            details=exception_details,
            status_code=503,
        )


class ServiceError(AppException):
    """Exception raised for unexpected service failures."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code="INTERNAL_SERVER_ERROR",
            details=details,
            status_code=500,
        )


class ColumnResolutionError(ValueError):
    """Raised when a table column cannot be resolved on a record."""

    def __init__(self, key: str, record: Any):
        self.key = key
        super().__init__(
            f"Column '{key}' does not resolve on {type(record).__name__} "
            f"and has no renderer"
        )
