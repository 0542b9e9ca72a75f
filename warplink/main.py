"""
FastAPI Application Entry Point

This module builds the WarpLink application:
- Lifespan: builds the application context (database, services) at startup
  and closes the connection pool at shutdown
- Middleware: access logging and CORS
- Error handlers: one translation from service errors to HTTP responses
- Routes: health, JSON API, form variant

Run with `warplink` (console script) or `uvicorn warplink.main:app`.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from warplink import __version__
from warplink.api import endpoints, pages
from warplink.api.errors import register_exception_handlers
from warplink.api.schemas import HealthResponse
from warplink.core.context import AppContext, build_context, get_context
from warplink.core.logging import setup_logging
from warplink.core.setting import Settings, get_settings
from warplink.middleware.logging import add_logging_middleware


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a WarpLink application.

    Args:
        settings: Configuration; read from the environment when omitted

    Returns:
        FastAPI app whose lifespan owns the database connection pool
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context = await build_context(settings)
        app.state.context = context
        try:
            yield
        finally:
            await context.close()

    app = FastAPI(
        title="WarpLink",
        description="URL shortening service",
        version=__version__,
        lifespan=lifespan,
    )

    add_logging_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Health is registered before the routers so /{short_code} cannot shadow it
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(context: AppContext = Depends(get_context)) -> JSONResponse:
        """Readiness derived from the database pool: pass, warn or fail."""
        health = await context.health_service.check()
        return JSONResponse(status_code=health.http_status, content={"status": health.value})

    app.include_router(pages.router, tags=["Pages"])
    app.include_router(endpoints.router, tags=["Links"])
    return app


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


app = create_app()
