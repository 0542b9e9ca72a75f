"""
Link Store

Durable mapping from short code to long URL. The store is the only place
uniqueness is guaranteed: the unique constraint on `short_code` rejects a
duplicate even when two creators passed their existence checks concurrently.

Every storage failure leaves this module as a StoreError; a unique violation
on insert is the distinguishable DuplicateShortCodeError.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel import select

from warplink.core.exceptions import DuplicateShortCodeError, StoreError
from warplink.db.models import Link

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed"


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique-constraint violation apart from other integrity errors."""
    original = error.orig
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return SQLITE_UNIQUE_MESSAGE in str(original)


class LinkStore:
    """
    Queries against the `warp_link` table.

    Args:
        session_maker: Factory for async sessions bound to the pooled engine
    """

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker

    async def find_by_code(self, short_code: str) -> Optional[Link]:
        """
        Look up a link by its exact short code.

        Returns:
            The Link if present, None otherwise

        Raises:
            StoreError: If the lookup fails
        """
        try:
            async with self.session_maker() as session:
                statement = select(Link).where(Link.short_code == short_code)
                result = await session.exec(statement)
                return result.first()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Lookup of short code {short_code} failed: {e}")
            raise StoreError("lookup failed", original_error=e) from e

    async def insert(self, short_code: str, long_url: str) -> Link:
        """
        Persist a new link and return it with `id` and `created_at` populated.

        Raises:
            DuplicateShortCodeError: If the short code is already taken
            StoreError: If the insert fails for any other reason
        """
        link = Link(short_code=short_code, long_url=long_url)
        try:
            async with self.session_maker() as session:
                session.add(link)
                await session.commit()
                await session.refresh(link)
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning(f"Short code {short_code} already exists at insert time")
                raise DuplicateShortCodeError(short_code, original_error=e) from e
            logger.error(f"Insert of short code {short_code} failed: {e}")
            raise StoreError("insert failed", original_error=e) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Insert of short code {short_code} failed: {e}")
            raise StoreError("insert failed", original_error=e) from e

        return link
