"""Async database engine and session factory used across the application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.brewery.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        """Initialize the shared async database engine."""
        self._config = db_config
        self._environment = environment

        logger.info("Configuring database engine for environment: {}", environment)
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(),
        }

        if db_config.is_memory:
            # every session must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        elif not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                    "pool_pre_ping": True,
                }
            )

        self._engine: AsyncEngine = create_async_engine(db_config.url, **engine_kwargs)

        if environment == "production":
            if db_config.is_sqlite:
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            logger.info(
                "Database engine initialized",
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            )

    def _get_connect_args(self) -> dict:
        """Get driver-specific connection arguments."""
        if self._config.url.startswith("postgresql+asyncpg"):
            return {
                "timeout": 30,
                "server_settings": {
                    "application_name": f"{self._environment}_brewery_api",
                    "jit": "off",
                },
            }
        if self._config.is_sqlite:
            return {"check_same_thread": False, "timeout": 20}
        return {}

    async def init_db(self) -> None:
        """Create any missing tables for the registered table models."""
        # Registers the table models with SQLModel.metadata
        from src.brewery.entities import BeerTable, CustomerTable  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables ensured")

    def get_session(self) -> AsyncSession:
        """Return a new AsyncSession bound to the shared engine."""
        return AsyncSession(self._engine, expire_on_commit=False)

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[AsyncSession]:
        """Yield a session, rolling back anything left uncommitted on error."""
        session = self.get_session()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(
                "Database session failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "class": type(pool).__name__,
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    async def dispose(self) -> None:
        await self._engine.dispose()
        logger.info("Database engine disposed")
