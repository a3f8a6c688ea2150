# deskkit/config/app_config.py
"""
Complete application configuration with validation.
The database is an embedded SQLite file accessed through aiosqlite.
"""

from typing import Optional, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator, model_validator
from .config_types import EnvLogLevel, DbDriver, Environment
from .env_config import require_env, get_env, get_env_bool
from .logging_config import LoggingConfig


class DatabaseConfig(BaseModel):
    """
    Database configuration for the embedded SQLite store.
    """

    path: Path = Field(..., description="SQLite database file")
    driver: DbDriver = Field(default=DbDriver.AIOSQLITE)

    # Connection pooling
    pool_size: int = Field(..., ge=1, le=100)
    max_overflow: int = Field(..., ge=0, le=100)
    pool_timeout: int = Field(..., ge=1, le=300)
    pool_recycle: int = Field(..., ge=300)  # Min 5 minutes

    echo: bool = Field(default=False, description="Log every SQL statement")

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        """The parent directory must exist; the file itself is created on demand."""
        if str(v) == ":memory:":
            raise ValueError("In-memory databases are not supported, use a file path")
        if not v.parent.exists():
            raise ValueError(f"Database directory not found: {v.parent}")
        return v

    def get_connection_url(self) -> str:
        """Build the SQLAlchemy async connection URL."""
        return f"sqlite+{self.driver.value}:///{self.path}"

    def to_dict_safe(self) -> dict[str, Any]:
        """Convert to dict (safe for logging)."""
        data = self.model_dump(mode="json")
        data["url"] = self.get_connection_url()
        return data


class AppConfig(BaseModel):
    """
    Complete application configuration.

    All configuration is loaded from environment variables and validated
    at startup. Invalid configuration fails fast with clear error messages.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")  # Semantic versioning
    environment: str = Field(..., pattern="^(development|staging|production)$")

    logging: LoggingConfig
    database: Optional[DatabaseConfig] = None

    # Username used by scripts/bootstrap_super_admin.py
    super_admin_username: Optional[str] = Field(default=None, min_length=3)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_production_settings(self) -> "AppConfig":
        if self.environment == "production":
            if self.database is None:
                raise ValueError("Database config required in production")
            if self.logging.log_level == EnvLogLevel.DEBUG:
                raise ValueError("DEBUG log level not allowed in production")
        return self


def load_database_config() -> Optional[DatabaseConfig]:
    """
    Load database configuration from environment.

    Environment variables:
    Required (when DB_PATH is set):
    - DB_PATH: SQLite database file
    - DB_POOL_SIZE: Connection pool size
    - DB_MAX_OVERFLOW: Max overflow connections
    - DB_POOL_TIMEOUT: Pool timeout in seconds
    - DB_POOL_RECYCLE: Pool recycle time in seconds

    Optional:
    - DB_ECHO: Log SQL statements (true/false)
    """
    path = get_env("DB_PATH")
    if not path:
        return None

    return DatabaseConfig(
        path=Path(path),
        pool_size=int(require_env("DB_POOL_SIZE")),
        max_overflow=int(require_env("DB_MAX_OVERFLOW")),
        pool_timeout=int(require_env("DB_POOL_TIMEOUT")),
        pool_recycle=int(require_env("DB_POOL_RECYCLE")),
        echo=get_env_bool("DB_ECHO"),
    )


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    from .logging_config import load_logging_config

    env_str = require_env("ENVIRONMENT")

    try:
        Environment(env_str)
    except ValueError:
        valid_envs = [e.value for e in Environment]
        raise ValueError(
            f"Invalid ENVIRONMENT: {env_str}. Must be one of: {valid_envs}"
        )

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=env_str,
        logging=load_logging_config(),
        database=load_database_config(),
        super_admin_username=get_env("SUPER_ADMIN_USERNAME"),
    )


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "load_app_config",
    "load_database_config",
]
