"""
Base model and database configuration.

Engines are built once per process from the settings URL. PostgreSQL goes
through psycopg2 (sync) and asyncpg (async); a SQLite override goes through
the stdlib driver and aiosqlite.
"""

from datetime import datetime
from functools import lru_cache
from typing import AsyncGenerator, Optional

from sqlalchemy import DateTime, create_engine, func
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from crash_analysis.core.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def engine_options(settings: Settings) -> dict:
    """Keyword arguments for create_engine / create_async_engine."""
    if settings.is_sqlite:
        # SQLite pools reject sizing arguments
        return {"echo": settings.is_development}
    return {
        "echo": settings.is_development,
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
    }


def async_database_url(url: str) -> str:
    """Swap the sync driver in a database URL for its async counterpart."""
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    if url.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + url[len("sqlite://"):]
    return url


@lru_cache
def get_engine() -> Engine:
    """Get the process-wide synchronous engine."""
    settings = get_settings()
    return create_engine(settings.database_url, **engine_options(settings))


def get_session_maker() -> sessionmaker:
    """Get synchronous session maker."""
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """Get the process-wide asynchronous engine."""
    settings = get_settings()
    return create_async_engine(
        async_database_url(settings.database_url), **engine_options(settings)
    )


def get_async_session_maker() -> async_sessionmaker:
    """Get asynchronous session maker."""
    return async_sessionmaker(
        bind=get_async_engine(), class_=AsyncSession, expire_on_commit=False
    )


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Create any missing tables.

    Args:
        engine: Engine to use; the configured one if None
    """
    # Import models so their tables are registered on Base.metadata
    from crash_analysis.models import CrashRecord, CrashSummary  # noqa: F401

    Base.metadata.create_all(engine or get_engine())


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async_session = get_async_session_maker()
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_sync_db():
    """
    Get synchronous database session for scripts and services.

    Yields:
        Session: Database session
    """
    SessionLocal = get_session_maker()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
