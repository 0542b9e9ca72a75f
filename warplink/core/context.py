"""
Application Context

Everything a request handler needs, built once at startup and handed to
handlers through a FastAPI dependency. Nothing here is a module-level global.
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from warplink.core.exceptions import ServerStartupError
from warplink.core.setting import Settings
from warplink.db.link_store import LinkStore
from warplink.db.session import Database
from warplink.services.health_service import HealthService
from warplink.services.link_service import LinkService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    database: Database
    link_service: LinkService
    health_service: HealthService

    @classmethod
    def from_database(cls, settings: Settings, database: Database) -> "AppContext":
        store = LinkStore(database.session_maker)
        link_service = LinkService(
            store,
            max_attempts=settings.MAX_CODE_ATTEMPTS,
            insert_conflict_retries=settings.INSERT_CONFLICT_RETRIES,
            max_url_length=settings.MAX_URL_LENGTH,
        )
        health_service = HealthService(database, acquire_timeout=settings.HEALTH_ACQUIRE_TIMEOUT)
        return cls(
            settings=settings,
            database=database,
            link_service=link_service,
            health_service=health_service,
        )

    async def close(self) -> None:
        await self.database.close()
        logger.info("Database connection pool closed")


async def build_context(settings: Settings) -> AppContext:
    """
    Connect to the database, apply migrations and wire the services.

    Raises:
        ServerStartupError: If configuration, connection or migration fails
    """
    try:
        database = Database.from_settings(settings)
    except Exception as e:
        logger.error(f"Invalid database configuration: {e}")
        raise ServerStartupError(f"Invalid database configuration: {e}") from e

    try:
        await database.ping()
        if settings.RUN_MIGRATIONS:
            await database.run_migrations()
    except Exception as e:
        logger.error(f"Failed to prepare database: {e}")
        await database.close()
        raise ServerStartupError(f"Failed to prepare database: {e}") from e

    return AppContext.from_database(settings, database)


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context attached at startup."""
    return request.app.state.context
