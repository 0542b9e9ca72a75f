"""
Health Service

Reports readiness from the state of the database connection pool:

- pass: storage reachable with spare capacity (HTTP 200)
- warn: storage reachable but every connection is in use (HTTP 200)
- fail: storage unreachable or closed (HTTP 503)
"""

import enum
import logging

from warplink.db.session import Database, PoolState

logger = logging.getLogger(__name__)


class HealthStatus(str, enum.Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def http_status(self) -> int:
        return 503 if self is HealthStatus.FAIL else 200


_STATUS_BY_POOL_STATE = {
    PoolState.AVAILABLE: HealthStatus.PASS,
    PoolState.EXHAUSTED: HealthStatus.WARN,
    PoolState.UNREACHABLE: HealthStatus.FAIL,
}


class HealthService:
    """
    Args:
        database: The shared Database whose pool is checked
        acquire_timeout: Seconds the pool check may wait for a connection
    """

    def __init__(self, database: Database, acquire_timeout: float = 2.0):
        self.database = database
        self.acquire_timeout = acquire_timeout

    async def check(self) -> HealthStatus:
        logger.debug("Checking health.")
        state = await self.database.check_pool(timeout=self.acquire_timeout)
        status = _STATUS_BY_POOL_STATE[state]

        if status is HealthStatus.FAIL:
            logger.error("Database is unreachable or the pool is closed.")
        elif status is HealthStatus.WARN:
            logger.warning("Database connection pool is full.")
        else:
            logger.debug("Health check OK.")
        return status
