"""
SQLite Database Adapter

SQLite backs local runs and the test suite. File databases get a bounded
queue pool like PostgreSQL does, so pool exhaustion behaves the same way.
In-memory databases must share one connection, otherwise every checkout
would see a fresh, empty database.
"""

from typing import Any

from sqlalchemy.pool import AsyncAdaptedQueuePool, Pool, StaticPool

from warplink.db.interface import DatabaseAdapter


def is_memory_database(database_url: str) -> bool:
    return ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite+aiosqlite:")


class SQLiteAdapter(DatabaseAdapter):
    """SQLite database adapter implementation (aiosqlite driver)."""

    def get_pool_class(self, database_url: str) -> type[Pool]:
        if is_memory_database(database_url):
            return StaticPool
        return AsyncAdaptedQueuePool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False
        }

    def get_engine_kwargs(self, database_url: str) -> dict[str, Any]:
        if is_memory_database(database_url):
            return {"echo": False}
        return {
            "echo": False,
            "pool_size": self.pool_size,
            "max_overflow": 0,
            "pool_timeout": self.pool_timeout,
        }

    def get_dialect_name(self) -> str:
        return "sqlite"
