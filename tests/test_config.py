"""Tests for settings, logging setup and database URL handling."""

import logging

from crash_analysis.core.config import Settings
from crash_analysis.core.logging import PACKAGE_LOGGER, get_logger, setup_logging
from crash_analysis.models.base import async_database_url, engine_options


def test_database_url_from_parts():
    settings = Settings(
        database_url_override=None,
        postgres_user="analyst",
        postgres_password="secret",
        postgres_host="db",
        postgres_port=5433,
        postgres_db="crashes",
    )

    assert settings.database_url == "postgresql://analyst:secret@db:5433/crashes"
    assert not settings.is_sqlite
    assert engine_options(settings)["pool_size"] == 10


def test_database_url_override():
    settings = Settings(database_url_override="sqlite:///crashes.db", environment="production")

    assert settings.database_url == "sqlite:///crashes.db"
    assert settings.is_sqlite
    assert settings.is_production
    assert engine_options(settings) == {"echo": False}


def test_empty_log_file_path_disables_file_logging():
    assert Settings(log_file_path="").log_file_path is None


def test_async_database_url():
    assert async_database_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert async_database_url("sqlite:///x.db") == "sqlite+aiosqlite:///x.db"
    assert async_database_url("mysql://h/db") == "mysql://h/db"


def test_service_loggers_share_package_handlers():
    logger = setup_logging("crash_reporter")

    assert logger.name == f"{PACKAGE_LOGGER}.crash_reporter"
    assert logger.propagate
    assert logging.getLogger(PACKAGE_LOGGER).handlers
    assert not logger.handlers
    assert get_logger(f"{PACKAGE_LOGGER}.crash_reporter") is logger
