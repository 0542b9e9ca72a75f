"""
PostgreSQL Database Adapter

The deployment database. Uses asyncpg through SQLAlchemy's async engine and
a bounded queue pool: `pool_size` connections, no overflow, and a finite
acquire timeout so exhaustion surfaces as an error instead of a hang.
"""

from typing import Any

from sqlalchemy.pool import AsyncAdaptedQueuePool, Pool

from warplink.db.interface import DatabaseAdapter

APPLICATION_NAME = "warplink"


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter implementation (asyncpg driver)."""

    def get_pool_class(self, database_url: str) -> type[Pool]:
        return AsyncAdaptedQueuePool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "server_settings": {"application_name": APPLICATION_NAME},
        }

    def get_engine_kwargs(self, database_url: str) -> dict[str, Any]:
        return {
            "echo": False,
            "pool_size": self.pool_size,
            "max_overflow": 0,
            "pool_timeout": self.pool_timeout,
            "pool_pre_ping": True,
        }

    def get_dialect_name(self) -> str:
        return "postgresql"
