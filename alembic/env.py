"""
Alembic environment configuration.
Uses the same DatabaseConfig as the application for consistency.
"""

import os
import sys
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
from dotenv import load_dotenv

# Add project to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from recruitdesk.db.models import DbBaseModel
from deskkit import ConfigurationError, get_config, initialize_config

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    sys.exit(1)

# Alembic Config object
config = context.config

# Load app configuration (includes database config)
app_config = get_config()

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata for autogenerate
target_metadata = DbBaseModel.metadata


def get_sync_url() -> str:
    """
    Get synchronous database URL for Alembic.

    Alembic needs a sync URL even though the app uses async:
    sqlite+aiosqlite becomes plain sqlite (stdlib driver).
    """
    if not app_config.database:
        raise RuntimeError("Database configuration not found in environment")

    return f"sqlite:///{app_config.database.path}"


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    This configures the context with just a URL and not an Engine.
    Calls to context.execute() emit SQL to script output.
    """
    context.configure(
        url=get_sync_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    Creates an Engine and associates a connection with the context.
    """
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_sync_url()

    # NullPool: migrations hold a single short-lived connection
    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite cannot ALTER most constraints in place
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
