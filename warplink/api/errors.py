"""
Error Translation

One table maps every WarpLinkError variant to an HTTP status and message,
and `error_response_for` is the only place that table is read. Framework
errors (bad request bodies, unknown routes, unexpected exceptions) are
rendered with the same body shape.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from warplink.api.schemas import ErrorResponse
from warplink.core.exceptions import (
    DuplicateShortCodeError,
    InvalidURLError,
    ServerStartupError,
    ServiceUnavailableError,
    ShortCodeNotFoundError,
    StoreError,
    WarpLinkError,
)

logger = logging.getLogger(__name__)

BAD_REQUEST = "Bad request."
NOT_FOUND = "Not found."
INTERNAL_ERROR = "Internal server error."
SERVICE_UNAVAILABLE = "Service unavailable."

ERROR_STATUS = {
    InvalidURLError: (status.HTTP_400_BAD_REQUEST, BAD_REQUEST),
    ShortCodeNotFoundError: (status.HTTP_404_NOT_FOUND, NOT_FOUND),
    DuplicateShortCodeError: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
    StoreError: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
    ServiceUnavailableError: (status.HTTP_503_SERVICE_UNAVAILABLE, SERVICE_UNAVAILABLE),
    ServerStartupError: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
    WarpLinkError: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
}

_MESSAGES_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: BAD_REQUEST,
    status.HTTP_404_NOT_FOUND: NOT_FOUND,
    status.HTTP_500_INTERNAL_SERVER_ERROR: INTERNAL_ERROR,
    status.HTTP_503_SERVICE_UNAVAILABLE: SERVICE_UNAVAILABLE,
}


def error_response_for(exc: WarpLinkError) -> ErrorResponse:
    """Translate a service error into the client-facing error body."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            status_code, message = ERROR_STATUS[cls]
            return ErrorResponse(message=message, status=status_code, details=str(exc))
    raise TypeError(f"{type(exc).__name__} is not a WarpLinkError")


def _render(error: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=error.status, content=error.model_dump())


async def warplink_error_handler(request: Request, exc: WarpLinkError) -> JSONResponse:
    error = error_response_for(exc)
    if error.status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return _render(error)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _render(ErrorResponse(
        message=BAD_REQUEST,
        status=status.HTTP_400_BAD_REQUEST,
        details=f"Invalid request: {problems}",
    ))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _MESSAGES_BY_STATUS.get(exc.status_code, "Request failed.")
    error = ErrorResponse(message=message, status=exc.status_code, details=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=error.model_dump(), headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _render(ErrorResponse(
        message=INTERNAL_ERROR,
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details="Unexpected server error.",
    ))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WarpLinkError, warplink_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
