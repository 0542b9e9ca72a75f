"""
Database Engine, Sessions and Pool Probing

This module owns the async SQLAlchemy engine behind a bounded connection pool.
A single Database object is built at startup and shared by every request
through the application context.

Key Features:
- Database abstraction: the adapter is picked from the URL's dialect
- Bounded pool: capacity and acquire timeout come from settings
- Async session factory: one short-lived session per store operation
- Pool check: classifies the pool as available, exhausted or unreachable
- Migrations: alembic `upgrade head` on the engine's own connection
"""

import asyncio
import enum
import logging
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import QueuePool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from warplink.core.setting import BASE_DIR, Settings
from warplink.db.interface import DatabaseAdapter
from warplink.db.postgres_adapter import PostgreSQLAdapter
from warplink.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = BASE_DIR / "migrations"

ADAPTER_CLASSES: tuple[type[DatabaseAdapter], ...] = (PostgreSQLAdapter, SQLiteAdapter)


class PoolState(enum.Enum):
    AVAILABLE = "available"
    EXHAUSTED = "exhausted"
    UNREACHABLE = "unreachable"


def get_database_adapter(
    database_url: str,
    pool_size: int = 20,
    pool_timeout: float = 30.0,
) -> DatabaseAdapter:
    """
    Pick the adapter for a connection string.

    Raises:
        ValueError: If the dialect is not supported
    """
    dialect = make_url(database_url).get_backend_name()
    for adapter_class in ADAPTER_CLASSES:
        adapter = adapter_class(pool_size=pool_size, pool_timeout=pool_timeout)
        if adapter.get_dialect_name() == dialect:
            return adapter
    raise ValueError(f"Unsupported database dialect: {dialect}")


def _upgrade_to_head(connection: Connection, config: Config) -> None:
    config.attributes["connection"] = connection
    command.upgrade(config, "head")


class Database:
    """
    Async engine plus session factory for one database.

    Args:
        database_url: SQLAlchemy URL with an async driver
        pool_size: Pool capacity
        pool_timeout: Seconds to wait for a pooled connection
    """

    def __init__(self, database_url: str, pool_size: int = 20, pool_timeout: float = 30.0):
        self.adapter = get_database_adapter(database_url, pool_size, pool_timeout)
        self.engine = self.adapter.create_engine(database_url)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self.closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.DB_POOL_SIZE,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    async def ping(self) -> None:
        """Open a connection and run a trivial query."""
        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    async def run_migrations(self) -> None:
        """Bring the schema to the latest alembic revision."""
        config = Config()
        config.set_main_option("script_location", str(MIGRATIONS_DIR))
        async with self.engine.begin() as connection:
            await connection.run_sync(_upgrade_to_head, config)
        logger.info("Database migrations applied")

    async def create_all(self) -> None:
        """Create tables straight from the models, bypassing alembic."""
        async with self.engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)

    def pool_is_exhausted(self) -> bool:
        pool = self.engine.pool
        if not isinstance(pool, QueuePool):
            return False
        return pool.checkedout() >= pool.size()

    async def check_pool(self, timeout: Optional[float] = None) -> PoolState:
        """
        Classify the connection pool without blocking indefinitely.

        Args:
            timeout: Upper bound in seconds on acquiring a connection

        Returns:
            PoolState for the health report
        """
        if self.closed:
            return PoolState.UNREACHABLE

        if self.pool_is_exhausted():
            return PoolState.EXHAUSTED

        try:
            await asyncio.wait_for(self.ping(), timeout)
        except PoolTimeoutError:
            return PoolState.EXHAUSTED
        except asyncio.TimeoutError:
            # Only a full pool makes a slow acquire a capacity problem
            if self.pool_is_exhausted():
                return PoolState.EXHAUSTED
            logger.error(f"Database did not answer within {timeout}s")
            return PoolState.UNREACHABLE
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database pool check failed: {e}")
            return PoolState.UNREACHABLE

        return PoolState.AVAILABLE

    async def close(self) -> None:
        self.closed = True
        await self.engine.dispose()
