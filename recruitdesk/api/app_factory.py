# recruitdesk/api/app_factory.py
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from deskkit import AppConfig, AppError, get_app_logger, is_configured
from deskkit.logger.logger_middleware import RequestLoggingMiddleware
from recruitdesk.db import DbManager
from recruitdesk.db.schemas import OperationResult
from recruitdesk.services.v1 import build_services
from .v1 import permission_router, recycle_bin_router, user_router

logger = get_app_logger(__name__)


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Current system health status")
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    logging_configured: bool = Field(..., description="Logging configuration status")
    log_level: str = Field(..., description="Application log level")
    database: dict = Field(default_factory=dict, description="Database health")


def _attach(app: FastAPI, db_manager: DbManager) -> None:
    app.state.db_manager = db_manager
    app.state.services = build_services(db_manager)


def create_app(config: AppConfig, db_manager: Optional[DbManager] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When `db_manager` is given it is attached immediately and left open on
    shutdown (tests own it); otherwise one is created from `config` during
    lifespan startup and disposed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if getattr(app.state, "db_manager", None) is not None:
            yield
            return

        _db_config = config.database
        if not _db_config:
            raise RuntimeError("Database configuration required")

        logger.info("Starting database", **_db_config.to_dict_safe())

        manager = DbManager.from_config(_db_config)
        await manager.verify_connection()

        # Ensure migrations are applied (fail fast if not)
        try:
            await manager.verify_migrations_current()
            logger.info("Migrations applied")
        except RuntimeError as e:
            logger.error("Migration check failed", error=str(e))
            logger.error("Run 'alembic upgrade head'")
            await manager.dispose()
            raise

        _attach(app, manager)

        yield
        logger.info("shutting down")
        await manager.dispose()

    app = FastAPI(
        title=config.app_title,
        version=config.app_version,
        description=f"Running in {config.environment} environment",
        lifespan=lifespan,
    )
    if db_manager is not None:
        _attach(app, db_manager)

    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(
            f"Domain Error: {exc.code}",
            path=request.url.path,
            error_code=exc.code,
            message=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=OperationResult.fail(exc).model_dump(mode="json"),
        )

    @app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
    async def check_health(request: Request) -> HealthCheckResponse:
        manager: Optional[DbManager] = getattr(request.app.state, "db_manager", None)
        database = (
            await manager.health_check() if manager else {"healthy": False}
        )
        return HealthCheckResponse(
            status="Healthy" if database.get("healthy") else "Degraded",
            timestamp=datetime.now(),
            version=config.app_version,
            logging_configured=is_configured(),
            log_level=config.logging.level_value,
            database=database,
        )

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(permission_router)
    api_v1.include_router(recycle_bin_router)
    api_v1.include_router(user_router)
    app.include_router(api_v1)

    return app


__all__ = ["create_app", "HealthCheckResponse"]
