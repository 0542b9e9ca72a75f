"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface with PostgreSQL and SQLite implementations
- Database: engine, session factory, migrations and pool probing
- LinkStore: the queries behind link creation and resolution
"""

from warplink.db.interface import DatabaseAdapter
from warplink.db.link_store import LinkStore
from warplink.db.models import Link
from warplink.db.session import Database, PoolState, get_database_adapter

__all__ = [
    "DatabaseAdapter",
    "Database",
    "Link",
    "LinkStore",
    "PoolState",
    "get_database_adapter",
]
