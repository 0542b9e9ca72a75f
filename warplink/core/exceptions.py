"""
Custom Exceptions

This module defines the error taxonomy of the service. Each class is one
variant; `warplink.api.errors` maps every variant to an HTTP status and body.

- InvalidURLError: malformed, disallowed-scheme or oversized input URL (400)
- ShortCodeNotFoundError: no link for the requested code (404)
- StoreError: any failure talking to storage (500)
- DuplicateShortCodeError: unique violation on insert, a StoreError (500)
- ServiceUnavailableError: no free short code within the attempt budget (503)
- ServerStartupError: configuration, connection or migration failure at boot
"""

from typing import Optional


class WarpLinkError(Exception):
    """Base exception for the link service."""
    pass


class InvalidURLError(WarpLinkError):
    """Raised when a long URL fails validation."""

    def __init__(self, url: str, reason: str = "Invalid url"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}")


class ShortCodeNotFoundError(WarpLinkError):
    """Raised when a short code is not found in the store."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Link with code '{short_code}' not found")


class StoreError(WarpLinkError):
    """Raised when storage operations fail."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        self.original_error = original_error
        detail = f"{message}: {original_error}" if original_error is not None else message
        super().__init__(f"Database error: {detail}")


class DuplicateShortCodeError(StoreError):
    """Raised when an insert hits the unique constraint on short_code."""

    def __init__(self, short_code: str, original_error: Optional[BaseException] = None):
        self.short_code = short_code
        super().__init__(f"short code '{short_code}' already exists", original_error)


class ServiceUnavailableError(WarpLinkError):
    """Raised when no unused short code could be found."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"No unused short code found after {attempts} attempts")


class ServerStartupError(WarpLinkError):
    """Raised when the application cannot start."""
    pass
