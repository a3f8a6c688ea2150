# recruitdesk/db/db_manager.py
"""
Database manager focused on connection management and session handling.
Schema migrations are handled separately via Alembic CLI.

Design principles:
- Single responsibility: Connection/session management only
- Fail fast: Invalid configuration crashes on startup
- Explicit over implicit: No magic auto-migrations
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Any, Optional, Union

from sqlalchemy import event, inspect, text
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
    AsyncEngine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool

from deskkit import AppError, DatabaseConfig, get_app_logger

logger = get_app_logger(__name__)


class DbManager:
    """
    Database connection and session manager.

    Responsibilities:
    - Async engine/connection pool management
    - Session lifecycle management (commit on success, rollback on error)
    - Health checks

    NOT responsible for:
    - Schema creation/migration (use Alembic CLI)

    Usage:
        # Startup
        db_manager = DbManager.from_config(config.database)
        await db_manager.verify_connection()

        # Runtime
        async with db_manager.session() as session:
            result = await session.execute(...)

        # Shutdown
        await db_manager.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        echo: bool = False,
        connect_args: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize database manager.

        Args:
            url: Database URL (sqlite+aiosqlite:///path/to/file.db)
            pool_size: Number of persistent connections
            max_overflow: Additional connections beyond pool_size
            pool_timeout: Seconds to wait for connection from pool
            pool_recycle: Recycle connections after N seconds
            pool_pre_ping: Test connections before using
            echo: Log all SQL statements (use for debugging)
            connect_args: Driver-specific connection arguments
        """
        self._validate_url(url)

        self._config: dict[str, Union[str, int]] = {
            "url": url,
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
        }

        # aiosqlite picks a non-queue pool by default; pin it so the pool
        # settings above apply to file databases
        self.engine: AsyncEngine = create_async_engine(
            url=url,
            echo=echo,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=pool_pre_ping,
            connect_args=connect_args or {},
        )
        event.listen(self.engine.sync_engine, "connect", _on_connect)

        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        self._verified = False

        logger.info(
            "DbManager initialized",
            pool_size=pool_size,
            max_overflow=max_overflow,
            pre_ping=pool_pre_ping,
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig, **kwargs: Any) -> "DbManager":
        """
        Create DbManager from DatabaseConfig.

        Example:
            db_manager = DbManager.from_config(config.database)
        """
        return cls(
            url=config.get_connection_url(),
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.pool_recycle,
            echo=config.echo,
            **kwargs,
        )

    @staticmethod
    def _validate_url(url: str) -> None:
        if not url or not url.startswith("sqlite+aiosqlite:///"):
            raise ValueError(
                f"Invalid database URL. Expected sqlite+aiosqlite:///, got: {url[:20]}..."
            )

    async def verify_connection(self) -> None:
        """
        Verify database connection on startup.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            self._verified = True
            logger.info("Database connection verified")
        except Exception as e:
            logger.error("Database connection failed", error=str(e))
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    async def verify_migrations_current(self) -> str:
        """
        Check that Alembic has been run against this database.

        Returns:
            The current migration revision

        Raises:
            RuntimeError: If alembic_version table doesn't exist or is empty
        """
        async with self.engine.connect() as conn:
            table_exists = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table("alembic_version")
            )
            if not table_exists:
                raise RuntimeError(
                    "alembic_version table not found. "
                    "Have you run 'alembic upgrade head'?"
                )

            result = await conn.execute(text("SELECT version_num FROM alembic_version"))
            current_version = result.scalar()

        if not current_version:
            raise RuntimeError("No migration revision recorded in alembic_version")

        logger.info("Current migration version", revision=current_version)
        return current_version

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional database session.

        Automatically commits on success, rolls back on exception.

        Usage:
            async with db_manager.session() as session:
                await session.execute(...)
                # Commits automatically on exit

        Raises:
            Exception: Re-raises any exception after rollback
        """
        session = self.session_maker()
        try:
            yield session
            await session.commit()
        except AppError as e:
            # Domain outcome (not found, denied), not a database fault
            await session.rollback()
            logger.debug("Session rolled back", error_code=e.code)
            raise
        except Exception as e:
            await session.rollback()
            logger.error("Session error, rolled back", error=str(e))
            raise
        finally:
            await session.close()

    async def health_check(self) -> dict[str, Any]:
        """
        Health check with basic pool metrics.

        Example:
            {"healthy": True, "response_time_ms": 1.2, "pool_status": "..."}
        """
        start = time.perf_counter()

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            response_time = (time.perf_counter() - start) * 1000

            return {
                "healthy": True,
                "pool_size": int(self._config["pool_size"]),
                "response_time_ms": round(response_time, 2),
                "pool_status": self.engine.pool.status(),
            }

        except Exception as e:
            return {
                "healthy": False,
                "error": str(e),
            }

    async def dispose(self) -> None:
        """
        Dispose of all connections. Call this on application shutdown.
        """
        await self.engine.dispose()
        logger.info("Database connections disposed")

    def get_config_snapshot(self) -> dict[str, Any]:
        return self._config.copy()


def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
    # Purges must never cascade, so SQLite FK enforcement stays off
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=OFF")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


__all__ = ["DbManager"]
