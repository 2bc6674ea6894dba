import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleet_admin.core.config import Settings, get_settings
from fleet_admin.core.exceptions import AppException
from fleet_admin.core.logging import get_logger, setup_logging
from fleet_admin.infrastructure.persistence import PersistGateway
from fleet_admin.infrastructure.seeds import DemoSeeder
from fleet_admin.interfaces.http.middleware import LoggingMiddleware
from fleet_admin.interfaces.http.routes import parts as part_routes
from fleet_admin.interfaces.http.routes import ships as ship_routes
from fleet_admin.interfaces.http.routes import users as user_routes
from fleet_admin.interfaces.http.routes.measurements import part_rows_router, ship_rows_router
from fleet_admin.services import build_services

logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    gateway: Optional[PersistGateway] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings)
        logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION} ({settings.ENVIRONMENT})")

        if settings.SEED_DEMO_DATA:
            DemoSeeder(app.state.services).seed_all()

        yield

        logger.info("Shutting down")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Fleet administration API",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = build_services(settings, gateway)

    app.add_middleware(LoggingMiddleware)

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time", "Content-Disposition"],
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle application-specific exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": exc.error_code,
                    "message": exc.message,
                    "details": exc.details,
                }
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle general exceptions."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = {
            "type": "internal_server_error",
            "message": str(exc) if settings.DEBUG else "Internal server error occurred",
        }
        if settings.DEBUG:
            error["traceback"] = traceback.format_exc()
        return JSONResponse(status_code=500, content={"error": error})

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs_url": "/docs",
            "health_check": "/health",
        }

    prefix = settings.API_PREFIX
    app.include_router(user_routes.router, prefix=f"{prefix}/users", tags=["Users"])
    app.include_router(ship_routes.router, prefix=f"{prefix}/ships", tags=["Ships"])
    app.include_router(ship_rows_router, prefix=f"{prefix}/ships", tags=["Ship Measurements"])
    app.include_router(part_routes.router, prefix=f"{prefix}/parts", tags=["Parts"])
    app.include_router(part_rows_router, prefix=f"{prefix}/parts", tags=["Part Measurements"])

    return app


def main():
    settings = get_settings()
    uvicorn.run(
        "fleet_admin.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info" if not settings.DEBUG else "debug",
        access_log=True,
    )


if __name__ == "__main__":
    main()
