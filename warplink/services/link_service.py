"""
Link Service

This service handles the core business logic of WarpLink:
- Validating long URLs before any storage work
- Generating random short codes and skipping ones already taken
- Inserting the new link and returning the persisted row
- Resolving a short code back to its link

Design Decisions:
- Bounded collision loop: a pathological RNG or a nearly full code space
  ends in ServiceUnavailableError instead of spinning forever
- The existence check is an optimisation; the store's unique constraint is
  what guarantees uniqueness. A creator that loses the race between check
  and insert regenerates a bounded number of times, then the
  DuplicateShortCodeError reaches the caller
- Store errors from lookups propagate immediately, never retried
"""

import logging
from typing import Callable, Optional

from warplink.core.exceptions import (
    DuplicateShortCodeError,
    InvalidURLError,
    ServiceUnavailableError,
    ShortCodeNotFoundError,
)
from warplink.core.validators import DEFAULT_MAX_URL_LENGTH, validate_long_url
from warplink.db.link_store import LinkStore
from warplink.db.models import Link
from warplink.services.short_code import DEFAULT_CODE_LENGTH, generate_short_code

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_INSERT_CONFLICT_RETRIES = 1


class LinkService:
    """
    Creates and resolves links on top of a LinkStore.

    Args:
        store: Link persistence
        max_attempts: Candidate codes tried per creation
        insert_conflict_retries: Regenerations allowed after an insert-time
            unique violation
        max_url_length: Longest accepted long URL
        code_factory: Produces candidate codes; takes the code length
    """

    def __init__(
        self,
        store: LinkStore,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        insert_conflict_retries: int = DEFAULT_INSERT_CONFLICT_RETRIES,
        max_url_length: int = DEFAULT_MAX_URL_LENGTH,
        code_factory: Optional[Callable[[int], str]] = None,
    ):
        self.store = store
        self.max_attempts = max_attempts
        self.insert_conflict_retries = insert_conflict_retries
        self.max_url_length = max_url_length
        self.code_factory = code_factory or generate_short_code

    async def create_link(self, long_url: str) -> Link:
        """
        Shorten a long URL.

        Args:
            long_url: The URL to shorten, as submitted

        Returns:
            The persisted Link, including its `id` and `created_at`

        Raises:
            InvalidURLError: If the URL is malformed or not http(s); no store
                access happens in that case
            DuplicateShortCodeError: If inserts keep losing races past the
                allowed retries
            StoreError: If storage fails
            ServiceUnavailableError: If no unused code was found in time
        """
        try:
            validate_long_url(long_url, max_length=self.max_url_length)
        except InvalidURLError as e:
            logger.error(str(e))
            raise

        conflicts = 0
        for attempt in range(1, self.max_attempts + 1):
            short_code = self.code_factory(DEFAULT_CODE_LENGTH)

            if await self.store.find_by_code(short_code) is not None:
                logger.debug(f"Short code {short_code} taken (attempt {attempt})")
                continue

            try:
                link = await self.store.insert(short_code, long_url)
            except DuplicateShortCodeError:
                if conflicts >= self.insert_conflict_retries:
                    raise
                conflicts += 1
                logger.warning(
                    f"Lost insert race for short code {short_code}, regenerating "
                    f"(conflict {conflicts}/{self.insert_conflict_retries})"
                )
                continue

            logger.info(f"Created new link with code {link.short_code}")
            return link

        logger.error(f"No unused short code after {self.max_attempts} attempts")
        raise ServiceUnavailableError(self.max_attempts)

    async def resolve_link(self, short_code: str) -> Link:
        """
        Find the link for a short code, matched exactly and case-sensitively.

        Raises:
            ShortCodeNotFoundError: If no link has this code
            StoreError: If the lookup fails
        """
        link = await self.store.find_by_code(short_code)
        if link is None:
            logger.info(f"Link with code {short_code} not found")
            raise ShortCodeNotFoundError(short_code)

        logger.debug(f"Resolved {short_code} to {link.long_url}")
        return link
