"""
Database Abstraction Interface

This module defines the adapter contract that lets WarpLink run against
PostgreSQL in deployment and SQLite locally and in tests without changing
the store or service code.

Each adapter owns its engine configuration: driver, pool class, pool
sizing and connection arguments.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import Pool


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Args:
        pool_size: Maximum number of pooled connections
        pool_timeout: Seconds to wait for a pooled connection
    """

    def __init__(self, pool_size: int = 20, pool_timeout: float = 30.0):
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create and configure the async database engine.

        Args:
            database_url: Connection string for the database
            **kwargs: Additional engine options, merged over the adapter defaults

        Returns:
            Configured AsyncEngine instance
        """
        engine_kwargs = self.get_engine_kwargs(database_url)
        engine_kwargs.update(kwargs)

        return create_async_engine(
            database_url,
            poolclass=self.get_pool_class(database_url),
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )

    @abstractmethod
    def get_pool_class(self, database_url: str) -> Optional[type[Pool]]:
        """
        Get the connection pool class for this database type.

        Returns:
            Pool class, or None to use the dialect default
        """
        pass

    @abstractmethod
    def get_connect_args(self) -> dict[str, Any]:
        """Connection arguments passed to the DBAPI driver."""
        pass

    @abstractmethod
    def get_engine_kwargs(self, database_url: str) -> dict[str, Any]:
        """Engine options specific to this database type."""
        pass

    @abstractmethod
    def get_dialect_name(self) -> str:
        """SQLAlchemy dialect name, e.g. 'sqlite' or 'postgresql'."""
        pass
