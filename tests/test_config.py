# tests/test_config.py
import pytest
from pydantic import ValidationError

from deskkit import (
    ConfigurationError,
    DatabaseConfig,
    initialize_config,
    load_app_config,
)

BASE_ENV = {
    "ENVIRONMENT": "development",
    "APP_TITLE": "RecruitDesk",
    "APP_VERSION": "0.1.0",
    "LOG_LEVEL": "DEBUG",
    "LOG_FORMAT": "console",
}
DB_VARS = (
    "DB_PATH",
    "DB_POOL_SIZE",
    "DB_MAX_OVERFLOW",
    "DB_POOL_TIMEOUT",
    "DB_POOL_RECYCLE",
    "DB_ECHO",
    "SUPER_ADMIN_USERNAME",
)


@pytest.fixture
def env(monkeypatch):
    for name, value in BASE_ENV.items():
        monkeypatch.setenv(name, value)
    for name in DB_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_loads_without_database(env):
    config = load_app_config()

    assert config.app_title == "RecruitDesk"
    assert config.database is None
    assert config.logging.level_value == "DEBUG"
    assert config.logging.json_output is False


def test_loads_database_settings(env, tmp_path):
    env.setenv("DB_PATH", str(tmp_path / "desk.db"))
    env.setenv("DB_POOL_SIZE", "5")
    env.setenv("DB_MAX_OVERFLOW", "10")
    env.setenv("DB_POOL_TIMEOUT", "30")
    env.setenv("DB_POOL_RECYCLE", "3600")
    env.setenv("DB_ECHO", "true")

    config = load_app_config()

    assert config.database.echo is True
    assert config.database.get_connection_url() == (
        f"sqlite+aiosqlite:///{tmp_path / 'desk.db'}"
    )


def test_missing_required_variable(env):
    env.delenv("APP_TITLE")

    with pytest.raises(ConfigurationError, match="APP_TITLE"):
        initialize_config()


def test_database_path_requires_pool_settings(env, tmp_path):
    env.setenv("DB_PATH", str(tmp_path / "desk.db"))

    with pytest.raises(ConfigurationError, match="DB_POOL_SIZE"):
        load_app_config()


def test_invalid_values_are_reported_per_field(env):
    env.setenv("APP_VERSION", "v1")

    with pytest.raises(ConfigurationError, match="app_version"):
        initialize_config()


def test_invalid_environment(env):
    env.setenv("ENVIRONMENT", "qa")

    with pytest.raises(ConfigurationError, match="Invalid ENVIRONMENT"):
        initialize_config()


def test_production_requires_database_and_no_debug(env):
    env.setenv("ENVIRONMENT", "production")

    with pytest.raises(ConfigurationError, match="Database config required"):
        initialize_config()


def test_database_directory_must_exist(tmp_path):
    with pytest.raises(ValidationError):
        DatabaseConfig(
            path=tmp_path / "missing" / "desk.db",
            pool_size=1,
            max_overflow=0,
            pool_timeout=5,
            pool_recycle=300,
        )


def test_initialize_config_returns_the_loaded_config(env):
    config = initialize_config()

    assert config.environment == "development"
