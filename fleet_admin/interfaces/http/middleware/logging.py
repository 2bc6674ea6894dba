import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from fleet_admin.core.logging import get_logger

logger = get_logger(__name__)

LOG_EXCLUDE_PATHS = ["/health", "/docs", "/redoc", "/openapi.json"]


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request/response logging with timing.

    Every response carries ``X-Request-ID`` and ``X-Process-Time`` headers,
    including requests on excluded paths, which are simply not logged.
    """

    def __init__(self, app, exclude_paths: Optional[List[str]] = None):
        super().__init__(app)
        self.exclude_paths = LOG_EXCLUDE_PATHS if exclude_paths is None else exclude_paths

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        should_log = not self._should_skip_logging(request.url.path)

        start_time = time.time()

        if should_log:
            self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            self._log_error(request, e, request_id, process_time)
            raise

        process_time = time.time() - start_time
        if should_log:
            self._log_response(request, response, request_id, process_time)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))
        return response

    def _should_skip_logging(self, path: str) -> bool:
        """Check if path should skip detailed logging"""
        return any(path == excluded or path.startswith(f"{excluded}/") for excluded in self.exclude_paths)

    def _log_request(self, request: Request, request_id: str) -> None:
        request_data = {
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "content_type": request.headers.get("Content-Type"),
            "content_length": request.headers.get("Content-Length"),
        }
        logger.info(
            f"REQUEST: {request.method} {request.url.path}",
            extra={"request_id": request_id, "extra_fields": request_data},
        )

    def _log_response(self, request: Request, response: Response, request_id: str, process_time: float) -> None:
        response_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }

        # Log level based on status code
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            f"RESPONSE: {request.method} {request.url.path} {response.status_code} in {process_time:.4f}s",
            extra={"request_id": request_id, "extra_fields": response_data},
        )

    def _log_error(self, request: Request, exception: Exception, request_id: str, process_time: float) -> None:
        error_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "error_type": type(exception).__name__,
            "error_message": str(exception),
            "process_time": round(process_time, 4),
        }
        logger.error(
            f"ERROR: {request.method} {request.url.path} {type(exception).__name__}: {exception}",
            extra={"request_id": request_id, "extra_fields": error_data},
        )

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address considering proxies"""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"
